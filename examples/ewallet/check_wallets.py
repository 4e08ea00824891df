#!/usr/bin/env python3
"""Quick helper: print a user's wallet balances from the command line.

Usage:
  ACCESS_KEY=... SECRET_KEY=... EWALLET_URL=... python check_wallets.py <provider_user_id>
"""

from __future__ import annotations

import logging
import sys

from omisego import Client, Configuration, Error, TransportError, User


def main() -> None:
    if len(sys.argv) < 2:
        print(__doc__, file=sys.stderr)
        sys.exit(2)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    config = Configuration.from_env(logger=logging.getLogger("ewallet"))

    with Client(config) as client:
        try:
            user = User.find(sys.argv[1], client=client)
            if isinstance(user, Error):
                print(f"Error ({user.code}): {user.description}", file=sys.stderr)
                sys.exit(1)

            wallets = user.wallets(client=client)
        except TransportError as exc:
            print(f"Cannot reach eWallet ({exc.code}): {exc}", file=sys.stderr)
            sys.exit(1)

    if isinstance(wallets, Error):
        print(f"Error ({wallets.code}): {wallets.description}", file=sys.stderr)
        sys.exit(1)

    print(f"User      : {user.username} ({user.provider_user_id})")
    for wallet in wallets:
        print(f"Wallet    : {wallet.address}")
        for balance in wallet.balances:
            units = balance.amount / balance.token.subunit_to_unit
            print(f"  {balance.token.symbol:<8}{units:>14,.2f}")


if __name__ == "__main__":
    main()
