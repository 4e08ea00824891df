"""Users API — login, lookup, create/update, wallets, credit/debit.

Every operation returns the expected entity or an :class:`~omisego.models.Error`.
Nothing here raises for API-reported failures; only
:class:`~omisego.exceptions.TransportError` propagates.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, TypeVar

from omisego.exceptions import TransportError
from omisego.http import AsyncHttpClient, Envelope, HttpClient
from omisego.models import AuthenticationToken, Error, List, User, Wallet

logger = logging.getLogger(__name__)

T = TypeVar("T")

LOGIN_PATH = "login"
FIND_PATH = "user.get"
CREATE_PATH = "user.create"
UPDATE_PATH = "user.update"
LIST_WALLETS_PATH = "user.list_wallets"
CREDIT_PATH = "user.credit_wallet"
DEBIT_PATH = "user.debit_wallet"

IDEMPOTENCY_HEADER = "Idempotency-Token"

AUTH_TOKEN_OBJECTS = ("authentication_token",)
USER_OBJECTS = ("user",)
LIST_OBJECTS = ("list",)


def _wallet_list(data: Mapping[str, Any]) -> List[Wallet]:
    return List.from_dict(data, Wallet.from_dict)


def _render(envelope: Envelope, builder: Callable[[Mapping[str, Any]], T], objects: tuple[str, ...]) -> T | Error:
    if not envelope.success:
        error = Error.from_dict(envelope.data)
        logger.debug("API error %s: %s", error.code, error.description)
        return error
    if not isinstance(envelope.data, Mapping):
        raise TransportError(
            "Success response carried no object payload",
            status=envelope.status,
            details=envelope.data,
        )
    kind = envelope.data.get("object")
    if kind not in objects:
        raise TransportError(
            f"Expected {' or '.join(objects)} object in response, got {kind!r}",
            status=envelope.status,
            details=envelope.data,
        )
    return builder(envelope.data)


def _compact(params: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None}


def _user_params(
    provider_user_id: str | None,
    username: str | None,
    metadata: Mapping[str, Any] | None,
) -> dict[str, Any]:
    return _compact({
        "provider_user_id": provider_user_id,
        "username": username,
        "metadata": dict(metadata) if metadata is not None else None,
    })


def _transaction_request(
    provider_user_id: str | None,
    token_id: str,
    amount: int,
    idempotency_token: str,
    account_id: str | None,
    account_address: str | None,
    metadata: Mapping[str, Any] | None,
) -> tuple[dict[str, Any], dict[str, str]] | Error:
    """Validate a credit/debit locally and build its body and headers."""
    if provider_user_id is None:
        return Error.nil_id()
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        return Error.invalid_parameter("`amount` must be a positive integer.")
    if not isinstance(idempotency_token, str) or not idempotency_token.strip():
        return Error.invalid_parameter("`idempotency_token` can't be blank.")
    body = _compact({
        "provider_user_id": provider_user_id,
        "token_id": token_id,
        "amount": amount,
        "account_id": account_id,
        "account_address": account_address,
        "metadata": dict(metadata) if metadata is not None else None,
    })
    return body, {IDEMPOTENCY_HEADER: idempotency_token}


def _short_circuit(operation: str, error: Error) -> Error:
    logger.debug("%s not sent: %s", operation, error.code)
    return error


class UsersApi:
    """Synchronous Users API."""

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def login(self, provider_user_id: str | None) -> AuthenticationToken | Error:
        """Log a user in and return their authentication token."""
        if provider_user_id is None:
            return _short_circuit("login", Error.nil_id())
        envelope = self._http.post(LOGIN_PATH, {"provider_user_id": provider_user_id})
        return _render(envelope, AuthenticationToken.from_dict, AUTH_TOKEN_OBJECTS)

    def find(self, provider_user_id: str | None) -> User | Error:
        """Find a user by provider user ID. ``None`` fails without a request."""
        if provider_user_id is None:
            return _short_circuit("find", Error.nil_id())
        envelope = self._http.post(FIND_PATH, {"provider_user_id": provider_user_id})
        return _render(envelope, User.from_dict, USER_OBJECTS)

    def create(
        self,
        provider_user_id: str | None,
        username: str | None,
        metadata: Mapping[str, Any] | None = None,
    ) -> User | Error:
        envelope = self._http.post(CREATE_PATH, _user_params(provider_user_id, username, metadata))
        return _render(envelope, User.from_dict, USER_OBJECTS)

    def update(
        self,
        provider_user_id: str | None,
        username: str | None,
        metadata: Mapping[str, Any] | None = None,
    ) -> User | Error:
        if provider_user_id is None:
            return _short_circuit("update", Error.nil_id())
        envelope = self._http.post(UPDATE_PATH, _user_params(provider_user_id, username, metadata))
        return _render(envelope, User.from_dict, USER_OBJECTS)

    def list_wallets(self, provider_user_id: str | None) -> List[Wallet] | Error:
        """List the user's wallets with their balances."""
        if provider_user_id is None:
            return _short_circuit("list_wallets", Error.nil_id())
        envelope = self._http.get(LIST_WALLETS_PATH, {"provider_user_id": provider_user_id})
        return _render(envelope, _wallet_list, LIST_OBJECTS)

    def credit(
        self,
        provider_user_id: str | None,
        *,
        token_id: str,
        amount: int,
        idempotency_token: str,
        account_id: str | None = None,
        account_address: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> List[Wallet] | Error:
        """Credit *amount* (in the token's subunit) to the user's wallet.

        *idempotency_token* is forwarded to the server, which applies a
        retried request with the same token at most once.
        """
        return self._transaction(
            CREDIT_PATH, provider_user_id, token_id, amount, idempotency_token,
            account_id, account_address, metadata,
        )

    def debit(
        self,
        provider_user_id: str | None,
        *,
        token_id: str,
        amount: int,
        idempotency_token: str,
        account_id: str | None = None,
        account_address: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> List[Wallet] | Error:
        """Debit *amount* from the user's wallet. Same parameters as :meth:`credit`."""
        return self._transaction(
            DEBIT_PATH, provider_user_id, token_id, amount, idempotency_token,
            account_id, account_address, metadata,
        )

    def _transaction(self, path: str, *args: Any) -> List[Wallet] | Error:
        request = _transaction_request(*args)
        if isinstance(request, Error):
            return _short_circuit(path, request)
        body, headers = request
        envelope = self._http.post(path, body, headers=headers)
        return _render(envelope, _wallet_list, LIST_OBJECTS)


class AsyncUsersApi:
    """Asynchronous Users API."""

    def __init__(self, http: AsyncHttpClient) -> None:
        self._http = http

    async def login(self, provider_user_id: str | None) -> AuthenticationToken | Error:
        if provider_user_id is None:
            return _short_circuit("login", Error.nil_id())
        envelope = await self._http.post(LOGIN_PATH, {"provider_user_id": provider_user_id})
        return _render(envelope, AuthenticationToken.from_dict, AUTH_TOKEN_OBJECTS)

    async def find(self, provider_user_id: str | None) -> User | Error:
        if provider_user_id is None:
            return _short_circuit("find", Error.nil_id())
        envelope = await self._http.post(FIND_PATH, {"provider_user_id": provider_user_id})
        return _render(envelope, User.from_dict, USER_OBJECTS)

    async def create(
        self,
        provider_user_id: str | None,
        username: str | None,
        metadata: Mapping[str, Any] | None = None,
    ) -> User | Error:
        envelope = await self._http.post(CREATE_PATH, _user_params(provider_user_id, username, metadata))
        return _render(envelope, User.from_dict, USER_OBJECTS)

    async def update(
        self,
        provider_user_id: str | None,
        username: str | None,
        metadata: Mapping[str, Any] | None = None,
    ) -> User | Error:
        if provider_user_id is None:
            return _short_circuit("update", Error.nil_id())
        envelope = await self._http.post(UPDATE_PATH, _user_params(provider_user_id, username, metadata))
        return _render(envelope, User.from_dict, USER_OBJECTS)

    async def list_wallets(self, provider_user_id: str | None) -> List[Wallet] | Error:
        if provider_user_id is None:
            return _short_circuit("list_wallets", Error.nil_id())
        envelope = await self._http.get(LIST_WALLETS_PATH, {"provider_user_id": provider_user_id})
        return _render(envelope, _wallet_list, LIST_OBJECTS)

    async def credit(
        self,
        provider_user_id: str | None,
        *,
        token_id: str,
        amount: int,
        idempotency_token: str,
        account_id: str | None = None,
        account_address: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> List[Wallet] | Error:
        return await self._transaction(
            CREDIT_PATH, provider_user_id, token_id, amount, idempotency_token,
            account_id, account_address, metadata,
        )

    async def debit(
        self,
        provider_user_id: str | None,
        *,
        token_id: str,
        amount: int,
        idempotency_token: str,
        account_id: str | None = None,
        account_address: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> List[Wallet] | Error:
        return await self._transaction(
            DEBIT_PATH, provider_user_id, token_id, amount, idempotency_token,
            account_id, account_address, metadata,
        )

    async def _transaction(self, path: str, *args: Any) -> List[Wallet] | Error:
        request = _transaction_request(*args)
        if isinstance(request, Error):
            return _short_circuit(path, request)
        body, headers = request
        envelope = await self._http.post(path, body, headers=headers)
        return _render(envelope, _wallet_list, LIST_OBJECTS)
