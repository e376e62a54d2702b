# portfolio/services/migration_service.py
"""
Row-by-row copy between backends.

A source is another SQL database (any SQLAlchemy URL) or a JSON export of the
legacy Firestore / PocketBase collections. Every row goes through the entity
mapper, so legacy column names are resolved by the deprecated aliases, and is
inserted into the destination ``Storage`` with a fresh id. Failures are logged
and counted, never fatal.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from sqlalchemy import MetaData, Table, create_engine, inspect as sa_inspect, select
from sqlalchemy.exc import SQLAlchemyError

from portfolio.core.settings import normalize_database_url
from portfolio.storage.base import Storage
from portfolio.storage.errors import StorageError
from portfolio.storage.tables import table_spec

logger = logging.getLogger(__name__)

# orden de copia: padres antes que hijos
MIGRATION_ORDER = [
    "users",
    "sections",
    "projects",
    "experiences",
    "certifications",
    "blog_categories",
    "blog_posts",
    "case_study_details",
    "blog_subscriptions",
    "testimonials",
    "contact_submissions",
]

# nombres de colección en los exports antiguos
SOURCE_ALIASES: Dict[str, tuple] = {
    "blog_categories": ("blogCategories",),
    "blog_posts": ("blogPosts", "posts"),
    "blog_subscriptions": ("blogSubscriptions", "subscribers"),
    "case_study_details": ("caseStudyDetails", "caseStudies", "case_studies"),
    "certifications": ("credentials", "educationAndCerts"),
    "contact_submissions": ("contactSubmissions", "messages"),
}

# columnas que apuntan a otra tabla: se remapean a los ids nuevos
LINKS: Dict[str, Dict[str, str]] = {
    "projects": {"user_id": "users"},
    "experiences": {"user_id": "users"},
    "certifications": {"user_id": "users"},
    "blog_posts": {"category_id": "blog_categories", "author_id": "users"},
    "case_study_details": {"blog_post_id": "blog_posts"},
}


@dataclass
class TableReport:
    table: str
    copied: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.copied + self.failed


# -----------------------------
# Sources
# -----------------------------
class RowSource:
    def rows(self, table: str) -> Iterator[Mapping[str, Any]]:
        raise NotImplementedError

    def close(self) -> None:
        pass


class SqlRowSource(RowSource):
    def __init__(self, url: str):
        self.engine = create_engine(normalize_database_url(url))
        self._inspector = sa_inspect(self.engine)

    def _resolve(self, table: str) -> Optional[str]:
        for name in (table, *SOURCE_ALIASES.get(table, ())):
            if self._inspector.has_table(name):
                return name
        return None

    def rows(self, table: str):
        name = self._resolve(table)
        if name is None:
            logger.warning("Source has no table for %s; skipping", table)
            return
        src = Table(name, MetaData(), autoload_with=self.engine)
        with self.engine.connect() as conn:
            for row in conn.execute(select(src)):
                yield dict(row._mapping)

    def close(self) -> None:
        self.engine.dispose()


class JsonRowSource(RowSource):
    """
    ``{"collection": [row, ...]}`` or ``{"collection": {"docId": row, ...}}``
    (the Firestore export shape; the document id becomes ``id``).
    """

    def __init__(self, path: str | Path):
        with open(path, "r", encoding="utf-8") as fh:
            self.data = json.load(fh)
        if not isinstance(self.data, dict):
            raise ValueError("JSON export must be an object keyed by collection name")

    def rows(self, table: str):
        for name in (table, *SOURCE_ALIASES.get(table, ())):
            if name in self.data:
                break
        else:
            logger.warning("Export has no collection for %s; skipping", table)
            return
        payload = self.data[name]
        if isinstance(payload, dict):
            for doc_id, row in payload.items():
                if isinstance(row, dict):
                    yield {"id": doc_id, **row}
        elif isinstance(payload, list):
            for row in payload:
                if isinstance(row, dict):
                    yield row


def open_source(source: str) -> RowSource:
    if source.endswith(".json"):
        return JsonRowSource(source)
    return SqlRowSource(source)


# -----------------------------
# Copy
# -----------------------------
def _raw_value(row: Mapping[str, Any], table: str, attr: str) -> Any:
    col = table_spec(table).mapper.column_for(attr)
    for key in col.read_keys():
        if row.get(key) not in (None, ""):
            return row[key]
    return None


def copy_table(
    rows: Iterable[Mapping[str, Any]],
    table: str,
    dest: Storage,
    id_map: Optional[Dict[str, Dict[str, int]]] = None,
) -> TableReport:
    spec = table_spec(table)
    report = TableReport(table)
    id_map = id_map if id_map is not None else {}
    seen = id_map.setdefault(table, {})

    it = iter(rows)
    n = 0
    while True:
        try:
            row = next(it)
        except StopIteration:
            break
        except SQLAlchemyError as e:
            # fallo leyendo la fuente: se conserva lo copiado hasta aquí
            report.failed += 1
            report.errors.append(f"source read failed after {n} rows: {e}")
            logger.error("[%s] could not read source after %d rows: %s", table, n, e)
            break
        n += 1
        ref = row.get("id") or f"#{n}"
        try:
            obj = spec.mapper.to_domain(row)
            if obj is None:
                raise ValueError("empty row")
            values = dict(obj)
            for attr, parent in LINKS.get(table, {}).items():
                old = _raw_value(row, table, attr)
                if old is None or parent not in id_map:
                    continue
                # padre copiado en esta corrida: id nuevo, o se suelta el enlace
                values[attr] = id_map[parent].get(str(old))
            created = dest.create(table, values)
        except (StorageError, ValueError) as e:
            report.failed += 1
            report.errors.append(f"{ref}: {e}")
            logger.error("[%s] row %s failed: %s", table, ref, e)
            continue
        seen[str(ref)] = created.id
        report.copied += 1
        logger.info("[%s] row %s -> id %s", table, ref, created.id)

    logger.info("[%s] copied=%d failed=%d", table, report.copied, report.failed)
    return report


def migrate(source: RowSource, dest: Storage, tables: Optional[List[str]] = None) -> List[TableReport]:
    wanted = tables or MIGRATION_ORDER
    for t in wanted:
        table_spec(t)
    ordered = [t for t in MIGRATION_ORDER if t in wanted] + [t for t in wanted if t not in MIGRATION_ORDER]

    id_map: Dict[str, Dict[str, int]] = {}
    reports = []
    for table in ordered:
        reports.append(copy_table(source.rows(table), table, dest, id_map))
    return reports
