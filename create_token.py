"""Print a bearer token for a user id.

Usage:
    python create_token.py <user_id> [lifetime_days]
"""
import sys

from formula_finder_api.app.core.security import create_access_token


def main(argv: list[str]) -> None:
    if not argv:
        sys.exit("usage: create_token.py <user_id> [lifetime_days]")
    days = int(argv[1]) if len(argv) > 1 else 365
    print(create_access_token({"sub": argv[0]}, expires_delta=days * 24 * 60 * 60))


if __name__ == "__main__":
    main(sys.argv[1:])
