# scripts/migrate_rows.py
# Copia fila a fila desde otra base (URL SQLAlchemy) o un export JSON de Firestore/PocketBase
#
#   python -m scripts.migrate_rows --source sqlite:///old.db
#   python -m scripts.migrate_rows --source export.json --tables projects blog_posts --strict
from __future__ import annotations

import argparse
import logging
import sys

from portfolio.core.logging import configure_logging
from portfolio.services.migration_service import MIGRATION_ORDER, migrate, open_source
from portfolio.storage.factory import open_storage

logger = logging.getLogger("migrate_rows")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Copy rows from a legacy backend into the portfolio database.")
    p.add_argument("--source", required=True, help="SQLAlchemy URL or path to a JSON export")
    p.add_argument("--dest", default=None, help="Destination URL (default: DATABASE_URL)")
    p.add_argument("--tables", nargs="*", choices=MIGRATION_ORDER, help="Subset of tables to copy")
    p.add_argument("--strict", action="store_true", help="Exit 1 when any row failed")
    p.add_argument("--create-tables", action="store_true", help="Create missing tables in the destination first")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    source = open_source(args.source)
    try:
        with open_storage(args.dest, create_tables=args.create_tables) as dest:
            reports = migrate(source, dest, args.tables or None)
    finally:
        source.close()

    copied = sum(r.copied for r in reports)
    failed = sum(r.failed for r in reports)
    for r in reports:
        logger.info("%-20s copied=%-5d failed=%d", r.table, r.copied, r.failed)
    logger.info("TOTAL copied=%d failed=%d", copied, failed)

    if args.strict and failed:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
