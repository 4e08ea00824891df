"""Top-level OmiseGO client (sync + async)."""

from __future__ import annotations

from typing import Any

import httpx

from omisego.configuration import Configuration
from omisego.http import AsyncHttpClient, Envelope, HttpClient
from omisego.users import AsyncUsersApi, UsersApi


class Client:
    """Synchronous client for the eWallet server API.

    Usage::

        config = Configuration(access_key="...", secret_key="...", base_url="https://ewallet.example.com/api")
        client = Client(config)
        user = client.users.find("provider-user-1")
        if isinstance(user, Error):
            ...
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
        self.http = HttpClient(config, transport=transport, auth=auth, headers=headers)
        self.users = UsersApi(self.http)

    def call(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        headers: dict[str, str] | None = None,
    ) -> Envelope:
        """Send a raw request; see :meth:`HttpClient.call`."""
        return self.http.call(method, path, params, headers=headers)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class AsyncClient:
    """Asynchronous client for the eWallet server API.

    Usage::

        async with AsyncClient(config) as client:
            token = await client.users.login("provider-user-1")
    """

    def __init__(
        self,
        config: Configuration,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        auth: httpx.Auth | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.config = config
        self.http = AsyncHttpClient(config, transport=transport, auth=auth, headers=headers)
        self.users = AsyncUsersApi(self.http)

    async def call(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        headers: dict[str, str] | None = None,
    ) -> Envelope:
        return await self.http.call(method, path, params, headers=headers)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
