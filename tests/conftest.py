"""Shared test fixtures — mock HTTP server, recorded responses, clients."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Callable, Iterator

import httpx
import pytest
from pytest_httpserver import HTTPServer
from werkzeug import Response

from omisego import Client, Configuration

FIXTURES = Path(__file__).parent / "fixtures"

ACCESS_KEY = "ak_test_01cbfg"
SECRET_KEY = "sk_test_9hqTZ2"
PROVIDER_USER_ID = "provider_user_id01"
TOKEN_ID = "tok_OMG_01cbffybmtbbb449r05zgfca2y"


def load_fixture(name: str) -> dict[str, Any]:
    """Load a recorded response body, e.g. ``load_fixture("user/login/existing")``."""
    with (FIXTURES / f"{name}.json").open(encoding="utf-8") as fh:
        return json.load(fh)


def wallets_with_amount(amount: int) -> dict[str, Any]:
    """The recorded wallet list with the first balance set to *amount*."""
    body = copy.deepcopy(load_fixture("user/wallets"))
    body["data"]["data"][0]["balances"][0]["amount"] = amount
    return body


def json_response(data: Any, status: int = 200) -> Response:
    """Build a Werkzeug JSON response."""
    return Response(
        json.dumps(data),
        status=status,
        content_type="application/json",
    )


def mock_transport(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.MockTransport:
    """Wrap *handler* and record every request it sees on ``transport.requests``."""
    requests: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    transport = httpx.MockTransport(_record)
    transport.requests = requests  # type: ignore[attr-defined]
    return transport


@pytest.fixture()
def config(httpserver: HTTPServer) -> Configuration:
    return Configuration(
        access_key=ACCESS_KEY,
        secret_key=SECRET_KEY,
        base_url=httpserver.url_for(""),
    )


@pytest.fixture()
def client(config: Configuration) -> Iterator[Client]:
    with Client(config) as c:
        yield c


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"
