#!/usr/bin/env python3
"""
Issue a bearer token for local development and store it where the client looks for it.
Production tokens come from the auth service; this signs with JWT_SECRET from .env.

Run:
  poetry run python scripts/issue_token.py reader-1
  poetry run python scripts/issue_token.py editor --role admin --hours 8
"""
import argparse
import sys
from pathlib import Path

root_dir = Path(__file__).resolve().parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from ishaazi.client.config import ClientConfig
from ishaazi.client.token_store import TokenStore
from ishaazi.security.jwt_utils import create_token


def main():
    parser = argparse.ArgumentParser(description="Issue a dev bearer token")
    parser.add_argument("subject", help="Token subject (reader id)")
    parser.add_argument("--role", default=None, help="Role claim, e.g. admin")
    parser.add_argument("--hours", type=int, default=0, help="Expiry in hours (0 = no expiry)")
    parser.add_argument("--no-store", action="store_true", help="Print only; do not write client storage")
    args = parser.parse_args()

    token = create_token(args.subject, role=args.role, expires_in_seconds=args.hours * 3600 or None)
    print(token)
    if not args.no_store:
        config = ClientConfig()
        TokenStore(config.storage_path).token = token
        print(f"Stored under 'token' in {config.storage_path}", file=sys.stderr)


if __name__ == "__main__":
    main()
