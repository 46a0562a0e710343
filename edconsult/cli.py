"""Create a staff account from the command line.

Usage:
    edconsult-create-user "Ayesha Khan" ayesha@example.com 'MySecurePassword' --role admin
"""
import argparse
import sys

from edconsult.core.constants import STAFF_ROLES
from edconsult.core.exceptions import AppError
from edconsult.core.sanitization import normalize_email
from edconsult.db import get_db_context
from edconsult.services.auth import register_user


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an admin or consultant account.")
    parser.add_argument("name")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--role", choices=STAFF_ROLES, default="admin")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if len(args.password) < 6:
        print("Error: Password must be at least 6 characters long", file=sys.stderr)
        return 1

    try:
        email = normalize_email(args.email)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with get_db_context() as db:
        try:
            user = register_user(db, args.name.strip(), email, args.password, args.role)
        except AppError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1
        print(f"Created {user.role} account {user.email} (id {user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
