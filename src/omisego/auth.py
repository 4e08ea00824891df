"""Request authentication for the eWallet server API."""

from __future__ import annotations

import base64
from typing import Generator

import httpx

from omisego.configuration import DEFAULT_AUTH_SCHEME, Configuration


def encode_credentials(access_key: str, secret_key: str) -> str:
    """Return ``base64("<access_key>:<secret_key>")``."""
    raw = f"{access_key}:{secret_key}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


class ServerKeyAuth(httpx.Auth):
    """Sends the key pair as ``Authorization: <scheme> <base64 credentials>``.

    Any other ``httpx.Auth`` (for instance ``httpx.BasicAuth``) can be passed
    to the clients instead if the server expects a different scheme.
    """

    def __init__(self, access_key: str, secret_key: str, *, scheme: str = DEFAULT_AUTH_SCHEME) -> None:
        self.scheme = scheme
        self._credentials = encode_credentials(access_key, secret_key)

    @classmethod
    def from_config(cls, config: Configuration) -> "ServerKeyAuth":
        return cls(config.access_key, config.secret_key, scheme=config.auth_scheme)

    @property
    def header(self) -> str:
        return f"{self.scheme} {self._credentials}"

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = self.header
        yield request
