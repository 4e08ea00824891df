"""Immutable connection settings for the eWallet API."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

DEFAULT_TIMEOUT = 30.0
DEFAULT_API_VERSION = "1"
DEFAULT_AUTH_SCHEME = "OMGServer"


@dataclass(frozen=True)
class Configuration:
    """Credentials and endpoint for an eWallet server.

    ``logger`` is optional; when set, every call writes one request line and
    one response line to it at ``INFO`` level.
    """

    access_key: str
    secret_key: str
    base_url: str
    logger: logging.Logger | None = None
    timeout: float = DEFAULT_TIMEOUT
    api_version: str = DEFAULT_API_VERSION
    auth_scheme: str = DEFAULT_AUTH_SCHEME

    def __post_init__(self) -> None:
        self._require("access_key")
        self._require("secret_key")
        self._require("base_url")
        self._require("api_version")
        self._require("auth_scheme")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def _require(self, name: str) -> None:
        value = getattr(self, name)
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{name} cannot be blank")

    @property
    def accept_header(self) -> str:
        return f"application/vnd.omisego.v{self.api_version}+json"

    @classmethod
    def from_env(cls, prefix: str = "", **overrides: Any) -> "Configuration":
        """Build a configuration from ``ACCESS_KEY``, ``SECRET_KEY`` and ``EWALLET_URL``.

        *prefix* is prepended to each variable name. Keyword *overrides* win
        over the environment.
        """
        values: dict[str, Any] = {
            "access_key": os.environ.get(f"{prefix}ACCESS_KEY", ""),
            "secret_key": os.environ.get(f"{prefix}SECRET_KEY", ""),
            "base_url": os.environ.get(f"{prefix}EWALLET_URL", ""),
        }
        values.update(overrides)
        return cls(**values)
