# src/confighub/scripts/tokens.py
"""Mint a bearer token for an existing user.

Sessions normally come from the external authentication service; this script
issues an equivalent token for local development and API exploration.

Usage:
    python -m confighub.scripts.tokens <username> [--minutes N]
"""

from __future__ import annotations

import argparse
import sys
from datetime import timedelta

from confighub.core.security import create_access_token
from confighub.core.settings import settings
from confighub.db.session import SessionLocal
from confighub.services import user_service


def mint_token(username: str) -> str:
    """Return a bearer token for ``username``.

    Raises:
        LookupError: If no such user exists.
    """
    db = SessionLocal()
    try:
        user = user_service.get_user_by_username(db, username)
        if user is None:
            raise LookupError(f"No user named {username!r}")
        return create_access_token(user.id)
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Mint a bearer token for a ConfigHub user")
    parser.add_argument("username", help="Username of an existing account")
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    args = parser.parse_args()

    if args.minutes is not None:
        settings.access_token_expire_minutes = args.minutes
    try:
        token = mint_token(args.username)
    except LookupError as exc:
        print(f"[tokens] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    lifetime = timedelta(minutes=settings.access_token_expire_minutes)
    print(f"[tokens] valid for {lifetime}", file=sys.stderr)
    print(token)


if __name__ == "__main__":
    main()
