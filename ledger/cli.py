"""CLI tool for admin operations.

Usage:
    python -m ledger.cli create-admin
    python -m ledger.cli names <accountable_type>
"""

import sys
import getpass
import logging

from sqlmodel import Session, select

from ledger.database import engine, create_db_and_tables
from ledger.models.user import User
from ledger.models.valuation import Valuation
from ledger.services.auth import hash_password, generate_totp_secret, get_totp_uri
from ledger.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_admin():
    """Create an admin user with TOTP setup."""
    create_db_and_tables()

    username = input("Username: ").strip()
    if not username:
        print("Username cannot be empty.")
        sys.exit(1)

    with Session(engine) as session:
        existing = session.exec(select(User).where(User.username == username)).first()
        if existing:
            print(f"User '{username}' already exists.")
            sys.exit(1)

    password = getpass.getpass("Password: ")
    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        print("Passwords do not match.")
        sys.exit(1)

    totp_secret = generate_totp_secret()
    user = User(
        username=username,
        hashed_password=hash_password(password),
        totp_secret=totp_secret,
    )
    with Session(engine) as session:
        session.add(user)
        session.commit()
    logger.info(f"Created admin user '{username}'")

    print(f"\nAdmin user '{username}' created successfully.")
    print(f"\nTOTP Secret: {totp_secret}")
    print(f"TOTP URI: {get_totp_uri(totp_secret, username)}")
    print("Add the URI or secret to your authenticator app.")


def print_names(accountable_type: str):
    """Print the names given to special valuations for an account type."""
    print(f"reconciliation: {Valuation.build_reconciliation_name(accountable_type)}")
    print(f"opening_anchor: {Valuation.build_opening_anchor_name(accountable_type)}")
    print(f"current_anchor: {Valuation.build_current_anchor_name(accountable_type)}")


def main(argv: list[str] | None = None):
    argv = sys.argv[1:] if argv is None else argv
    setup_logging()

    if not argv:
        print("Usage: python -m ledger.cli <command>")
        print("Commands: create-admin, names <accountable_type>")
        sys.exit(1)

    command = argv[0]
    if command == "create-admin":
        create_admin()
    elif command == "names":
        if len(argv) < 2:
            print("Usage: python -m ledger.cli names <accountable_type>")
            sys.exit(1)
        print_names(argv[1])
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
