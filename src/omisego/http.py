"""Low-level HTTP client for the eWallet server API (sync + async)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import httpx

from omisego.auth import ServerKeyAuth
from omisego.configuration import Configuration
from omisego.exceptions import TransportError

LOG_TAG = "[OmiseGO]"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Envelope:
    """Decoded ``{"success": ..., "data": ...}`` response body."""

    success: bool
    data: Any
    version: str | None = None
    status: int = 200

    @property
    def error_code(self) -> str | None:
        if self.success or not isinstance(self.data, dict):
            return None
        return self.data.get("code")

    @property
    def description(self) -> str | None:
        if self.success or not isinstance(self.data, dict):
            return None
        return self.data.get("description")


def _build_url(base: str, path: str, params: dict[str, Any] | None = None) -> str:
    url = base.rstrip("/") + "/" + path.lstrip("/")
    if params:
        filtered = {k: v for k, v in params.items() if v is not None}
        if filtered:
            url += "?" + urlencode(filtered, doseq=True)
    return url


def _default_headers(config: Configuration, headers: dict[str, str] | None) -> dict[str, str]:
    _headers: dict[str, str] = {
        "Content-Type": "application/json",
        "Accept": config.accept_header,
    }
    if headers:
        _headers.update(headers)
    return _headers


def _log_request(config: Configuration, method: str, path: str) -> None:
    if config.logger is not None:
        config.logger.info(f"{LOG_TAG} Request: {method} {path}\n")


def _log_response(config: Configuration, resp: httpx.Response) -> None:
    if config.logger is not None:
        config.logger.info(f"{LOG_TAG} Response: HTTP/{resp.status_code}\n")


def _transport_error(exc: httpx.TransportError) -> TransportError:
    return TransportError(
        str(exc) or type(exc).__name__,
        code=type(exc).__name__,
        details=exc,
    )


def _parse_envelope(resp: httpx.Response) -> Envelope:
    try:
        body = resp.json()
    except ValueError as exc:
        raise TransportError(
            f"Unparseable response body (HTTP {resp.status_code})",
            status=resp.status_code,
            details=resp.text,
        ) from exc
    if not isinstance(body, dict) or not isinstance(body.get("success"), bool):
        raise TransportError(
            f"Response is not an API envelope (HTTP {resp.status_code})",
            status=resp.status_code,
            details=body,
        )
    error = body.get("data")
    if not body["success"] and not (isinstance(error, dict) and error.get("code")):
        raise TransportError(
            f"Failure response carried no error object (HTTP {resp.status_code})",
            status=resp.status_code,
            details=body,
        )
    envelope = Envelope(
        success=body["success"],
        data=body.get("data"),
        version=body.get("version"),
        status=resp.status_code,
    )
    logger.debug("HTTP %s success=%s", resp.status_code, envelope.success)
    return envelope


def _prepare(method: str, base_url: str, path: str, params: dict[str, Any] | None) -> tuple[str, str, Any]:
    method = method.upper()
    if method == "GET":
        return method, _build_url(base_url, path, params), None
    return method, _build_url(base_url, path), params or {}


# ---------------------------------------------------------------------------
# Synchronous client
# ---------------------------------------------------------------------------

class HttpClient:
    """Synchronous HTTP client wrapping ``httpx.Client``.

    Holds no per-call state, so one instance can be shared across threads.
    """

    def __init__(
        self,
        config: Configuration,
        *,
        transport: httpx.BaseTransport | None = None,
        auth: httpx.Auth | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.config = config
        self.base_url = config.base_url
        self._client = httpx.Client(
            timeout=config.timeout,
            headers=_default_headers(config, headers),
            auth=auth or ServerKeyAuth.from_config(config),
            transport=transport,
        )

    def call(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        headers: dict[str, str] | None = None,
    ) -> Envelope:
        """Send one request and return the decoded envelope.

        Raises :class:`TransportError` if the server could not be reached or
        did not answer with an envelope.
        """
        method, url, body = _prepare(method, self.base_url, path, params)
        _log_request(self.config, method, path)
        try:
            resp = self._client.request(method, url, json=body, headers=headers)
        except httpx.TransportError as exc:
            raise _transport_error(exc) from exc
        _log_response(self.config, resp)
        return _parse_envelope(resp)

    # -- HTTP verbs ----------------------------------------------------------

    def get(self, path: str, params: dict[str, Any] | None = None) -> Envelope:
        return self.call("GET", path, params)

    def post(
        self,
        path: str,
        body: dict[str, Any] | None = None,
        *,
        headers: dict[str, str] | None = None,
    ) -> Envelope:
        return self.call("POST", path, body, headers=headers)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Asynchronous client
# ---------------------------------------------------------------------------

class AsyncHttpClient:
    """Asynchronous HTTP client wrapping ``httpx.AsyncClient``."""

    def __init__(
        self,
        config: Configuration,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        auth: httpx.Auth | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.config = config
        self.base_url = config.base_url
        self._client = httpx.AsyncClient(
            timeout=config.timeout,
            headers=_default_headers(config, headers),
            auth=auth or ServerKeyAuth.from_config(config),
            transport=transport,
        )

    async def call(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        headers: dict[str, str] | None = None,
    ) -> Envelope:
        method, url, body = _prepare(method, self.base_url, path, params)
        _log_request(self.config, method, path)
        try:
            resp = await self._client.request(method, url, json=body, headers=headers)
        except httpx.TransportError as exc:
            raise _transport_error(exc) from exc
        _log_response(self.config, resp)
        return _parse_envelope(resp)

    # -- HTTP verbs ----------------------------------------------------------

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Envelope:
        return await self.call("GET", path, params)

    async def post(
        self,
        path: str,
        body: dict[str, Any] | None = None,
        *,
        headers: dict[str, str] | None = None,
    ) -> Envelope:
        return await self.call("POST", path, body, headers=headers)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
