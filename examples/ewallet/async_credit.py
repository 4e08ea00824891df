#!/usr/bin/env python3
"""
Async example using AsyncClient.

Logs a user in, credits their wallet, then retries the same credit with the
same idempotency token to show the server applying it only once.

Prerequisites:
  - A running eWallet server
  - ACCESS_KEY, SECRET_KEY, EWALLET_URL, PROVIDER_USER_ID and TOKEN_ID set

Usage:
  python async_credit.py
"""

from __future__ import annotations

import asyncio
import os
import sys
import uuid

from omisego import AsyncClient, Configuration, Error, List, TransportError, User

PROVIDER_USER_ID = os.environ.get("PROVIDER_USER_ID", "provider_user_id01")
TOKEN_ID = os.environ.get("TOKEN_ID", "")
AMOUNT = 10_000


def log(section: str, msg: str) -> None:
    print(f"[{section}] {msg}")


def fail(result: Error) -> None:
    print(f"Error ({result.code}): {result.description}", file=sys.stderr)
    sys.exit(1)


def first_balance(wallets: List) -> int:
    return wallets.first.balances.first.amount if wallets.first and wallets.first.balances else 0


async def main() -> None:
    config = Configuration.from_env()
    async with AsyncClient(config) as client:
        try:
            # ── Login and wallet lookup in parallel ──────────────────────
            auth_token, wallets = await asyncio.gather(
                User.login(PROVIDER_USER_ID, client=client),
                client.users.list_wallets(PROVIDER_USER_ID),
            )
            for result in (auth_token, wallets):
                if isinstance(result, Error):
                    fail(result)
            log("user", f"Logged in, token={auth_token.authentication_token[:8]}…")
            log("wallet", f"Balance before: {first_balance(wallets)}")

            # ── Credit, then replay with the same token ──────────────────
            idempotency_token = str(uuid.uuid4())
            for attempt in ("credit", "retry"):
                wallets = await client.users.credit(
                    PROVIDER_USER_ID,
                    token_id=TOKEN_ID,
                    amount=AMOUNT,
                    idempotency_token=idempotency_token,
                )
                if isinstance(wallets, Error):
                    fail(wallets)
                log("wallet", f"Balance after {attempt}: {first_balance(wallets)}")
        except TransportError as exc:
            print(f"Cannot reach eWallet ({exc.code}): {exc}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
