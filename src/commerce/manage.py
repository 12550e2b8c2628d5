"""Commerce database management CLI.

Creates or drops the schema of the configured SQL database. Select the
production overlay (PostgreSQL) with ``PROTEAN_ENV=production``.

Usage:
    python -m commerce.manage setup-db   # Create all tables
    python -m commerce.manage drop-db    # Drop all tables
"""

import argparse
import sys

from commerce.domain import commerce
from commerce.utils.db import drop_db, setup_db


def setup_database():
    print("Initializing commerce domain...")
    commerce.init()
    print("Creating database schema...")
    setup_db(commerce)
    print("Done.")


def drop_database():
    print("Initializing commerce domain...")
    commerce.init()
    print("Dropping database schema...")
    drop_db(commerce)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Commerce database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
