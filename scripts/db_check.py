# scripts/db_check.py
# Verifica conexión y cuenta filas por tabla
from __future__ import annotations

import sys

from portfolio.storage.errors import StorageError
from portfolio.storage.factory import open_storage
from portfolio.storage.tables import TABLES


def main() -> int:
    try:
        with open_storage() as storage:
            storage.ping()
            print("OK DB:", type(storage).__name__)
            for table in TABLES:
                print(f"  {table:<22} {len(storage.find_all(table))}")
    except StorageError as e:
        print("DB check failed:", e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
