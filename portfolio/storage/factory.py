# portfolio/storage/factory.py
# Storage para scripts / CLI (fuera del ciclo request-response de FastAPI)
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

import portfolio.models  # noqa: F401  (metadata completa para create_all)
from portfolio.core.settings import normalize_database_url, settings
from portfolio.db.base import Base
from portfolio.db.session import _engine_kwargs
from .base import Storage
from .memory import MemoryStorage
from .sql import SqlStorage

logger = logging.getLogger(__name__)


@contextmanager
def open_storage(url: Optional[str] = None, *, create_tables: bool = False) -> Iterator[Storage]:
    """
    SqlStorage over ``url`` (default: DATABASE_URL). Without any URL a fresh
    MemoryStorage is returned, which only makes sense for dry runs.
    """
    url = normalize_database_url(url) if url else settings.SQLALCHEMY_DATABASE_URL
    if not url:
        logger.warning("No database URL: using in-memory storage (nothing will be persisted)")
        yield MemoryStorage()
        return

    engine = create_engine(url, **_engine_kwargs(url))
    if create_tables:
        Base.metadata.create_all(engine)
    storage = SqlStorage(Session(engine, autoflush=False))
    try:
        yield storage
    finally:
        storage.close()
        engine.dispose()
