# portfolio/storage/memory.py
from __future__ import annotations

import copy
import threading
from datetime import datetime, timezone
from typing import Any, Dict

from .base import Payload, Storage
from .errors import ConflictError
from .tables import TABLES, TableName, table_spec

# mismas restricciones únicas que el esquema SQL
UNIQUE_COLUMNS = {
    "users": ("username",),
    "blog_categories": ("slug",),
    "blog_posts": ("slug",),
    "blog_subscriptions": ("email",),
}


class MemoryStorage(Storage):
    """
    Rows kept in per-table dicts, in row shape, behind the same mappers as the
    SQL backend. Used when no DATABASE_URL is configured.
    """

    def __init__(self):
        self._rows: Dict[str, Dict[int, Dict[str, Any]]] = {t: {} for t in TABLES}
        self._next_id: Dict[str, int] = {t: 1 for t in TABLES}
        self._lock = threading.Lock()

    def _check_unique(self, table: str, row: Dict[str, Any], own_id: int | None = None) -> None:
        for column in UNIQUE_COLUMNS.get(table, ()):
            if column not in row:
                continue
            for rid, existing in self._rows[table].items():
                if rid != own_id and existing.get(column) == row[column]:
                    raise ConflictError(f"{table}.{column} already exists: {row[column]!r}")

    def _read(self, table: str, row: Dict[str, Any]):
        return table_spec(table).mapper.to_domain(copy.deepcopy(row))

    # ---------- reads ----------
    def find_by_id(self, table: TableName, id: int):
        table_spec(table)
        row = self._rows[table].get(id)
        return self._read(table, row) if row is not None else None

    def find_all(self, table: TableName):
        table_spec(table)
        return [self._read(table, r) for _, r in sorted(self._rows[table].items())]

    def find_all_by_field(self, table: TableName, field: str, value: Any):
        col = table_spec(table).mapper.column_for(field)
        return [
            self._read(table, r)
            for _, r in sorted(self._rows[table].items())
            if r.get(col.column) == value
        ]

    # ---------- writes ----------
    def create(self, table: TableName, data: Payload):
        spec = table_spec(table)
        row = spec.mapper.to_row(data)
        now = datetime.now(timezone.utc)
        with self._lock:
            self._check_unique(table, row)
            rid = self._next_id[table]
            self._next_id[table] = rid + 1
            row["id"] = rid
            row["created_at"] = now
            if "updated_at" in spec.mapper.column_names:
                row["updated_at"] = now
            self._rows[table][rid] = copy.deepcopy(row)
        return self._read(table, row)

    def update(self, table: TableName, id: int, data: Payload):
        spec = table_spec(table)
        changes = spec.mapper.to_row(data, partial=True)
        with self._lock:
            row = self._rows[table].get(id)
            if row is None:
                return None
            self._check_unique(table, changes, own_id=id)
            row.update(copy.deepcopy(changes))
            if "updated_at" in spec.mapper.column_names:
                row["updated_at"] = datetime.now(timezone.utc)
            return self._read(table, row)

    def delete(self, table: TableName, id: int) -> bool:
        table_spec(table)
        with self._lock:
            return self._rows[table].pop(id, None) is not None
