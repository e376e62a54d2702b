# portfolio/storage/sql.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict

from sqlalchemy import inspect as sa_inspect, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .base import Payload, Storage
from .errors import ConflictError, StorageError
from .tables import TableName, table_spec

logger = logging.getLogger(__name__)


def _as_row(obj) -> Dict[str, Any]:
    return {attr.key: getattr(obj, attr.key) for attr in sa_inspect(obj).mapper.column_attrs}


class SqlStorage(Storage):
    """
    SQLAlchemy backend. One commit per write, last write wins.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, op: str, table: str):
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Conflict on %s %s: %s", op, table, e.orig)
            raise ConflictError(f"{op} {table}: duplicate value") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Storage %s failed on %s", op, table)
            raise StorageError(f"{op} {table} failed") from e

    def ping(self) -> bool:
        with self._guard("ping", "-"):
            self.db.execute(text("SELECT 1"))
        return True

    def close(self) -> None:
        self.db.close()

    # ---------- reads ----------
    def find_by_id(self, table: TableName, id: int):
        spec = table_spec(table)
        with self._guard("find_by_id", table):
            obj = self.db.get(spec.model, id)
        return spec.mapper.to_domain(_as_row(obj)) if obj is not None else None

    def find_all(self, table: TableName):
        spec = table_spec(table)
        with self._guard("find_all", table):
            objs = self.db.scalars(select(spec.model).order_by(spec.model.id)).all()
        return [spec.mapper.to_domain(_as_row(o)) for o in objs]

    def find_all_by_field(self, table: TableName, field: str, value: Any):
        spec = table_spec(table)
        col = spec.mapper.column_for(field)
        attr = getattr(spec.model, col.column)
        stmt = select(spec.model).where(attr.is_(None) if value is None else attr == value)
        with self._guard("find_all_by_field", table):
            objs = self.db.scalars(stmt.order_by(spec.model.id)).all()
        return [spec.mapper.to_domain(_as_row(o)) for o in objs]

    # ---------- writes ----------
    def create(self, table: TableName, data: Payload):
        spec = table_spec(table)
        row = spec.mapper.to_row(data)
        with self._guard("create", table):
            obj = spec.model(**row)
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
        return spec.mapper.to_domain(_as_row(obj))

    def update(self, table: TableName, id: int, data: Payload):
        spec = table_spec(table)
        changes = spec.mapper.to_row(data, partial=True)
        with self._guard("update", table):
            obj = self.db.get(spec.model, id)
            if obj is None:
                return None
            for key, value in changes.items():
                setattr(obj, key, value)
            self.db.commit()
            self.db.refresh(obj)
        return spec.mapper.to_domain(_as_row(obj))

    def delete(self, table: TableName, id: int) -> bool:
        spec = table_spec(table)
        with self._guard("delete", table):
            obj = self.db.get(spec.model, id)
            if obj is None:
                return False
            self.db.delete(obj)
            self.db.commit()
        return True
