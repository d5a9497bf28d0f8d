"""PayPlex database management CLI.

Creates and drops the tables behind the relational stock store and order
counter (``STOCK_STORE_ADAPTER=sqlalchemy`` / ``ORDER_COUNTER_ADAPTER=sqlalchemy``).

Usage:
    python src/manage.py setup-db                 # Create stock and counter tables
    python src/manage.py drop-db                  # Drop them
    python src/manage.py setup-db --url sqlite:///payplex.db
"""

import argparse
import sys


def setup_database(url=None):
    from ordering.utils.db import get_engine, setup_db

    engine = get_engine(url)
    print(f"Creating schema on {engine.url.render_as_string(hide_password=True)}...")
    setup_db(engine)
    print("Done.")


def drop_database(url=None):
    from ordering.utils.db import drop_db, get_engine

    engine = get_engine(url)
    print(f"Dropping schema on {engine.url.render_as_string(hide_password=True)}...")
    drop_db(engine)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="PayPlex database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("setup-db", "Create stock and counter tables"), ("drop-db", "Drop stock and counter tables")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--url", help="SQLAlchemy database URL (default: DATABASE_URL)")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database(args.url)
    elif args.command == "drop-db":
        drop_database(args.url)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
