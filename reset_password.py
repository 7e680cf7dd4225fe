#!/usr/bin/env python3
"""
Reset a user's password directly in the chat accounts database.

This script DOES NOT read or reveal any existing password.  It stores a
new PBKDF2 hash for the given username through the same service the
``PUT /user/resetPassword`` endpoint uses, so it works while the API is
down.

Usage:
    python reset_password.py --username user1 --password "NewStrongPass!234"
    python reset_password.py --mongo-uri mongodb://db:27017 --db chat_accounts --username user1

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import asyncio
import dataclasses
import getpass
import sys
from typing import List, Optional

from chat_accounts_api.app.core.config import settings
from chat_accounts_api.app.core.db import create_client, get_database
from chat_accounts_api.app.core.result import Err
from chat_accounts_api.app.services.user_service import UserService


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Reset a chat accounts user password (MongoDB).")
    ap.add_argument("--mongo-uri", default=settings.mongo_uri, help="MongoDB connection string")
    ap.add_argument("--db", default=settings.mongo_db_name, help="Database name")
    ap.add_argument("--username", required=True, help="Username to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args(argv)

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        return 1

    script_settings = dataclasses.replace(settings, mongo_uri=args.mongo_uri, mongo_db_name=args.db)
    client = create_client(script_settings)
    try:
        users = UserService(get_database(client, script_settings)[script_settings.user_collection])
        result = asyncio.run(users.update_user(args.username, {"password": new_password}))
    finally:
        client.close()

    if isinstance(result, Err):
        print(f"[!] {result.error}", file=sys.stderr)
        return 2
    print(f"[+] Password updated for user: {args.username}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
