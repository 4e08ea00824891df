"""OmiseGO Python SDK — eWallet server API bindings."""

import logging

from omisego.auth import ServerKeyAuth
from omisego.client import AsyncClient, Client
from omisego.configuration import Configuration
from omisego.exceptions import OmiseGOError, TransportError
from omisego.http import AsyncHttpClient, Envelope, HttpClient
from omisego.models import (
    AuthenticationToken,
    Balance,
    Error,
    List,
    Pagination,
    Token,
    User,
    Wallet,
    build,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Client",
    "AsyncClient",
    "Configuration",
    "HttpClient",
    "AsyncHttpClient",
    "Envelope",
    "ServerKeyAuth",
    "OmiseGOError",
    "TransportError",
    "AuthenticationToken",
    "Balance",
    "Error",
    "List",
    "Pagination",
    "Token",
    "User",
    "Wallet",
    "build",
]

__version__ = "0.1.0"
