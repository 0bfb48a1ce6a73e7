"""CLI tool for admin operations.

Usage:
    python -m gold_portfolio.cli create-admin [--super]
"""

import sys
import getpass

from sqlmodel import Session, select

from gold_portfolio.database import engine, create_db_and_tables
from gold_portfolio.models.admin import Admin, AdminRole
from gold_portfolio.schemas.common import PASSWORD_RULES, normalize_email, validate_password_strength
from gold_portfolio.services.auth import hash_password
from gold_portfolio.utils.logging import setup_logging


def create_admin(super_admin: bool = False):
    """Create a portal administrator."""
    setup_logging()
    create_db_and_tables()

    name = input("Name: ").strip()
    if len(name) < 2:
        print("Name must be at least 2 characters.")
        sys.exit(1)

    try:
        email = normalize_email(input("Email: "))
    except ValueError:
        print("Email must be a valid email address.")
        sys.exit(1)

    with Session(engine) as session:
        existing = session.exec(select(Admin).where(Admin.email == email)).first()
        if existing:
            print(f"Admin '{email}' already exists.")
            sys.exit(1)

    password = getpass.getpass("Password: ")
    try:
        validate_password_strength(password)
    except ValueError:
        print(f"Password {PASSWORD_RULES}.")
        sys.exit(1)
    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        print("Passwords do not match.")
        sys.exit(1)

    role = AdminRole.SUPER_ADMIN if super_admin else AdminRole.ADMIN
    admin = Admin(name=name, email=email, hashed_password=hash_password(password), role=role)

    with Session(engine) as session:
        session.add(admin)
        session.commit()

    print(f"\nAdmin '{email}' created successfully ({role.value}).")


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m gold_portfolio.cli <command>")
        print("Commands: create-admin [--super]")
        sys.exit(1)

    command = sys.argv[1]
    if command == "create-admin":
        create_admin(super_admin="--super" in sys.argv[2:])
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
