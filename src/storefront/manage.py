"""Storefront database management CLI.

Creates and drops the relational schema behind the storefront domain. With
the default memory provider both commands are no-ops.

Usage:
    storefront-manage setup-db   # Create all tables
    storefront-manage drop-db    # Drop all tables
"""

import argparse
import sys

from storefront.utils.db import drop_db, setup_db


def setup_databases(domain):
    print(f"Creating {domain.name} database schema...")
    setup_db(domain)
    print(f"  {domain.name} schema ready.")


def drop_databases(domain):
    print(f"Dropping {domain.name} database schema...")
    drop_db(domain)
    print(f"  {domain.name} schema dropped.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("setup-db", help="Create database tables")
    subparsers.add_parser("drop-db", help="Drop database tables")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    from storefront.domain import storefront

    print(f"Initializing {storefront.name} domain...")
    storefront.init()

    if args.command == "setup-db":
        setup_databases(storefront)
    else:
        drop_databases(storefront)

    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
