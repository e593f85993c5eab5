#!/usr/bin/env python3
"""
Create a user directly in the configured database.

Usage:
  python scripts/add_user.py --email someone@example.com --name "Some One"
"""
from __future__ import annotations

import argparse
import sys

from loguru import logger

from users_api.core.errors import UserError
from users_api.core.logging import configure_logging
from users_api.db.create_tables import create_all
from users_api.services.user_service import DefaultUserService


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Create a user in the database")
    ap.add_argument("--email", required=True, help="Unique email address")
    ap.add_argument("--name", required=True, help="Display name")
    ap.add_argument("--create-tables", action="store_true", help="Create the schema first")
    args = ap.parse_args(argv)

    configure_logging()
    if args.create_tables:
        create_all()

    svc = DefaultUserService()
    try:
        user = svc.create_user(email=args.email, name=args.name)
    except UserError as exc:
        logger.error("Could not create user: {}", exc.message)
        return 1
    print("OK: user created")
    print(f"  ID: {user.id}")
    print(f"  Email: {user.email}")
    print(f"  Name: {user.name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
