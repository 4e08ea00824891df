"""Exceptions raised by the OmiseGO SDK.

API-reported failures are *not* exceptions: they come back as
:class:`omisego.models.Error` values. Only failures where the call may not
have reached the server, or where the reply could not be understood, raise.
"""

from __future__ import annotations

from typing import Any


class OmiseGOError(Exception):
    """Base class for everything the SDK raises."""

    def __init__(
        self,
        message: str,
        *,
        status: int = 0,
        code: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.details = details

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, code={self.code!r}, message={str(self)!r})"


class TransportError(OmiseGOError):
    """Raised on connection failures, timeouts and malformed responses."""
