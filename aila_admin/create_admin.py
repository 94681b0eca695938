"""
Create or promote an administrator account from the command line.

    aila-admin-create-admin --email admin@example.com --username admin --full-name "Site Admin"

The password is read from `--password` or prompted for. When an account with
the email already exists it is promoted and its password is left unchanged.
"""

import argparse
import getpass
import sys

from aila_admin.database.config.config import settings
from aila_admin.database.config.connection_engine import connection_engine, metadata
from aila_admin.database.core.accounts import TAKEN, grant_admin, register_account
import aila_admin.database.entities  # noqa: F401  registers the tables on `metadata`
from aila_admin.errors import NotFound, ServiceError, ValidationFailed


def create_admin(full_name: str, username: str, email: str, password: str) -> dict:
    """
    Register the account and grant it admin rights. An existing account with
    `email` is promoted as is.

    Raises
    ------
    ValidationFailed
        Invalid input, or `username` belongs to an account with another email.
    """
    try:
        register_account(full_name=full_name, username=username, email=email, password=password)
    except ValidationFailed as e:
        if e.detail != TAKEN:
            raise
        try:
            return grant_admin(email=email)
        except NotFound:
            raise ValidationFailed(f"Username '{username}' is taken by another account") from e
    return grant_admin(email=email)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create or promote an AILA admin account.")
    parser.add_argument("--email", required=True)
    parser.add_argument("--username", required=True)
    parser.add_argument("--full-name", default="Administrator")
    parser.add_argument("--password", help="prompted for when omitted")
    args = parser.parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    if settings.CREATE_TABLES:
        metadata.create_all(connection_engine)
    try:
        admin = create_admin(args.full_name, args.username, args.email, password)
    except ServiceError as e:
        print(f"Error: {e.detail}", file=sys.stderr)
        return 1
    print(f"Admin ready: {admin['username']} <{admin['email']}> (id {admin['id']})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
