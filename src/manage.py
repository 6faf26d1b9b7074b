"""Recipes database management CLI.

Usage:
    python src/manage.py setup-db   # Create recipe and review tables
    python src/manage.py drop-db    # Drop them
"""

import argparse
import sys


def setup_database():
    from recipes.domain import recipes
    from recipes.utils.db import setup_db

    print("Initializing recipes domain...")
    recipes.init()
    print("Creating recipes database schema...")
    setup_db(recipes)
    print("Done.")


def drop_database():
    from recipes.domain import recipes
    from recipes.utils.db import drop_db

    print("Initializing recipes domain...")
    recipes.init()
    print("Dropping recipes database schema...")
    drop_db(recipes)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Recipes database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
