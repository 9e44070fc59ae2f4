"""Burgerhub management CLI.

Usage:
    python -m storefront.manage setup-db   # Create all tables
    python -m storefront.manage drop-db    # Drop all tables
    python -m storefront.manage seed       # Load the demo menu
    python -m storefront.manage create-admin --name NAME --email EMAIL --phone PHONE
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def seed():
    from storefront.seed import seed_menu

    domain = _domain()
    with domain.domain_context():
        added = seed_menu()
    print(f"Seeded {added['ingredients']} ingredients and {added['burgers']} burgers.")


def create_admin(name, email, phone):
    from storefront.seed import seed_admin

    domain = _domain()
    with domain.domain_context():
        user_id, created = seed_admin(name, email, phone)
    verb = "Created" if created else "Found existing"
    print(f"{verb} admin {email}: {user_id}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Burgerhub management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load the demo menu")
    admin = subparsers.add_parser("create-admin", help="Create a back-office account")
    admin.add_argument("--name", required=True)
    admin.add_argument("--email", required=True)
    admin.add_argument("--phone", required=True)

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed()
    elif args.command == "create-admin":
        create_admin(args.name, args.email, args.phone)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
