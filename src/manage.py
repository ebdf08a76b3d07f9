"""B3 Store management CLI.

Provides commands to create and drop the database schema and to audit the
cached bcoin balances against the loyalty ledger.

Usage:
    python src/manage.py setup-db           # Create all tables
    python src/manage.py drop-db            # Drop all tables
    python src/manage.py reconcile-bcoins   # Report customers whose balance drifted
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront

    print("Initializing storefront domain...")
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


def reconcile_bcoins(customer_id=None):
    """Compare cached balances with ledger sums. Returns the number of drifted customers."""
    from storefront.loyalty.ledger import reconcile, reconcile_all

    domain = _domain()
    with domain.domain_context():
        if customer_id:
            drift = reconcile(customer_id)
            drifts = [drift] if drift else []
        else:
            drifts = reconcile_all()

    for drift in drifts:
        print(
            f"  {drift.customer_id}: cached={drift.cached_balance} "
            f"ledger={drift.ledger_balance} difference={drift.difference}"
        )
    print(f"{len(drifts)} customer(s) with drifted balances.")
    return len(drifts)


def main():
    parser = argparse.ArgumentParser(description="B3 Store management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    reconcile_parser = subparsers.add_parser("reconcile-bcoins", help="Check cached bcoin balances against the ledger")
    reconcile_parser.add_argument("--customer", help="Check a single customer id (default: all)")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "reconcile-bcoins":
        sys.exit(1 if reconcile_bcoins(args.customer) else 0)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
