"""Storefront management CLI.

Usage:
    python src/manage.py setup-db                    # Create all tables
    python src/manage.py drop-db                     # Drop all tables
    python src/manage.py set-exchange-rate BDT 117.5 # One USD equals 117.5 BDT
"""

import argparse
import sys


def _storefront():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _storefront()
    print("Creating storefront database schema...")
    touched = setup_db(domain)
    if touched:
        print(f"  Schema ready on: {', '.join(touched)}")
    else:
        print("  No relational provider configured; nothing to create.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _storefront()
    print("Dropping storefront database schema...")
    touched = drop_db(domain)
    if touched:
        print(f"  Schema dropped on: {', '.join(touched)}")
    else:
        print("  No relational provider configured; nothing to drop.")


def set_exchange_rate(currency: str, one_usd_equals: float):
    from storefront.exchange.exchange_rate import ExchangeRate

    domain = _storefront()
    with domain.domain_context():
        rate = domain.repository_for(ExchangeRate).set_rate(currency.upper(), one_usd_equals)
    print(f"1 USD = {rate.one_usd_equals} {rate.currency}")
    return rate


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    rate_parser = subparsers.add_parser("set-exchange-rate", help="Store how much one USD is worth in a currency")
    rate_parser.add_argument("currency", help="ISO 4217 code, e.g. BDT")
    rate_parser.add_argument("one_usd_equals", type=float, help="Units of CURRENCY per US dollar")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "set-exchange-rate":
        set_exchange_rate(args.currency, args.one_usd_equals)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
