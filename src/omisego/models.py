"""Domain objects built from eWallet API payloads.

Every object is a read-only projection of one JSON mapping, rebuilt from
scratch for each response. Payloads carry an ``object`` discriminator which
:func:`build` uses to pick the class.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterator, Mapping, TypeVar

if TYPE_CHECKING:
    from omisego.client import AsyncClient, Client

T = TypeVar("T")

NIL_ID = "user:nil_id"
INVALID_PARAMETER = "client:invalid_parameter"
USER_NOT_FOUND = "user:provider_user_id_not_found"


def _int(value: Any, default: int = 0) -> int:
    return int(value) if value is not None else default


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Error:
    """An API-reported (or locally detected) failure.

    Returned to the caller, never raised. Check with
    ``isinstance(result, Error)``.
    """

    code: str
    description: str
    messages: Any = None

    def __hash__(self) -> int:
        # messages may hold unhashable JSON
        return hash((self.code, self.description))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Error":
        return cls(
            code=data.get("code") or "",
            description=data.get("description") or "",
            messages=data.get("messages"),
        )

    @classmethod
    def nil_id(cls) -> "Error":
        return cls(code=NIL_ID, description="The given ID was nil.")

    @classmethod
    def invalid_parameter(cls, description: str) -> "Error":
        return cls(code=INVALID_PARAMETER, description=f"Invalid parameter provided {description}")


# ---------------------------------------------------------------------------
# List
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Pagination:
    per_page: int | None = None
    current_page: int | None = None
    is_first_page: bool | None = None
    is_last_page: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Pagination":
        return cls(
            per_page=data.get("per_page"),
            current_page=data.get("current_page"),
            is_first_page=data.get("is_first_page"),
            is_last_page=data.get("is_last_page"),
        )


@dataclass(frozen=True)
class List(Generic[T]):
    """Ordered, read-only sequence of entities plus pagination metadata."""

    data: list[T] = field(default_factory=list)
    pagination: Pagination | None = None

    def __hash__(self) -> int:
        return hash((tuple(self.data), self.pagination))

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        item: Callable[[Any], Any] | None = None,
    ) -> "List[Any]":
        item = item or build
        pagination = data.get("pagination")
        return cls(
            data=[item(element) for element in data.get("data") or []],
            pagination=Pagination.from_dict(pagination) if pagination else None,
        )

    @classmethod
    def of(cls, items: list[Any] | None, item: Callable[[Any], Any]) -> "List[Any]":
        """Wrap a bare JSON array (no pagination block)."""
        return cls(data=[item(element) for element in items or []])

    @property
    def first(self) -> T | None:
        return self.data[0] if self.data else None

    @property
    def last(self) -> T | None:
        return self.data[-1] if self.data else None

    def __iter__(self) -> Iterator[T]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index: int) -> T:
        return self.data[index]


# ---------------------------------------------------------------------------
# Tokens & balances
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Token:
    id: str | None
    symbol: str | None
    name: str | None
    subunit_to_unit: int = 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Token":
        return cls(
            id=data.get("id"),
            symbol=data.get("symbol"),
            name=data.get("name"),
            subunit_to_unit=_int(data.get("subunit_to_unit"), default=1),
        )


@dataclass(frozen=True)
class Balance:
    """Amount held of one token, in the token's subunit."""

    amount: int
    token: Token

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Balance":
        # older servers nest the token under "minted_token"
        token = data.get("token") or data.get("minted_token") or {}
        return cls(amount=_int(data.get("amount")), token=Token.from_dict(token))


@dataclass(frozen=True)
class Wallet:
    address: str | None
    balances: List[Balance] = field(default_factory=List)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Wallet":
        return cls(
            address=data.get("address"),
            balances=List.of(data.get("balances"), Balance.from_dict),
        )


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class User:
    """An end user of the wallet provider, keyed by ``provider_user_id``.

    The class methods and instance methods below are shortcuts for the
    matching ``client.users`` operations. Passed an ``AsyncClient`` they
    return awaitables.
    """

    id: str | None
    provider_user_id: str | None
    username: str | None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: str | None = None
    updated_at: str | None = None

    def __hash__(self) -> int:
        # metadata is a dict; equal users still hash equal
        return hash((self.id, self.provider_user_id, self.username, self.created_at, self.updated_at))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        return cls(
            id=data.get("id"),
            provider_user_id=data.get("provider_user_id"),
            username=data.get("username"),
            metadata=dict(data.get("metadata") or {}),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    # -- Resource operations -------------------------------------------------

    @classmethod
    def login(cls, provider_user_id: str | None, *, client: Client | AsyncClient) -> Any:
        return client.users.login(provider_user_id)

    @classmethod
    def find(cls, provider_user_id: str | None, *, client: Client | AsyncClient) -> Any:
        return client.users.find(provider_user_id)

    @classmethod
    def create(
        cls,
        provider_user_id: str | None,
        username: str | None,
        metadata: Mapping[str, Any] | None = None,
        *,
        client: Client | AsyncClient,
    ) -> Any:
        return client.users.create(provider_user_id, username, metadata)

    @classmethod
    def update(
        cls,
        provider_user_id: str | None,
        username: str | None,
        metadata: Mapping[str, Any] | None = None,
        *,
        client: Client | AsyncClient,
    ) -> Any:
        return client.users.update(provider_user_id, username, metadata)

    def wallets(self, *, client: Client | AsyncClient) -> Any:
        return client.users.list_wallets(self.provider_user_id)

    def credit(
        self,
        *,
        token_id: str,
        amount: int,
        idempotency_token: str,
        account_id: str | None = None,
        account_address: str | None = None,
        metadata: Mapping[str, Any] | None = None,
        client: Client | AsyncClient,
    ) -> Any:
        """Credit one of this user's wallets. See ``UsersApi.credit``."""
        return client.users.credit(
            self.provider_user_id,
            token_id=token_id,
            amount=amount,
            idempotency_token=idempotency_token,
            account_id=account_id,
            account_address=account_address,
            metadata=metadata,
        )

    def debit(
        self,
        *,
        token_id: str,
        amount: int,
        idempotency_token: str,
        account_id: str | None = None,
        account_address: str | None = None,
        metadata: Mapping[str, Any] | None = None,
        client: Client | AsyncClient,
    ) -> Any:
        """Debit one of this user's wallets. See ``UsersApi.debit``."""
        return client.users.debit(
            self.provider_user_id,
            token_id=token_id,
            amount=amount,
            idempotency_token=idempotency_token,
            account_id=account_id,
            account_address=account_address,
            metadata=metadata,
        )


@dataclass(frozen=True)
class AuthenticationToken:
    authentication_token: str
    user: User | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuthenticationToken":
        user = data.get("user")
        return cls(
            authentication_token=data.get("authentication_token") or "",
            user=User.from_dict(user) if user else None,
        )


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

_BUILDERS: dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "error": Error.from_dict,
    "list": List.from_dict,
    "user": User.from_dict,
    "wallet": Wallet.from_dict,
    "address": Wallet.from_dict,
    "balance": Balance.from_dict,
    "token": Token.from_dict,
    "minted_token": Token.from_dict,
    "authentication_token": AuthenticationToken.from_dict,
}


def build(payload: Any) -> Any:
    """Turn a raw payload into the entity named by its ``object`` field.

    Payloads without a known ``object`` are returned unchanged.
    """
    if not isinstance(payload, Mapping):
        return payload
    builder = _BUILDERS.get(payload.get("object", ""))
    if builder is None:
        return payload
    return builder(payload)
