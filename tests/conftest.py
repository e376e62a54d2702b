# tests/conftest.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import portfolio.models  # noqa: F401  (registra todas las tablas en Base.metadata)
from portfolio.api.deps import get_storage
from portfolio.db.base import Base
from portfolio.main import app
from portfolio.security.jwt import create_access_token
from portfolio.services.auth_service import upsert_admin
from portfolio.storage.memory import MemoryStorage
from portfolio.storage.sql import SqlStorage

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "s3cret-pass"


@pytest.fixture
def db_session() -> Session:
    """
    SQLite en memoria, UNA conexión compartida (StaticPool) por prueba.
    Las tablas salen de la metadata, no de Alembic.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def storage(db_session: Session) -> SqlStorage:
    return SqlStorage(db_session)


@pytest.fixture(params=["sql", "memory"])
def any_storage(request, db_session: Session):
    """Mismo test contra ambos backends."""
    if request.param == "sql":
        return SqlStorage(db_session)
    return MemoryStorage()


@pytest.fixture
def client(storage: SqlStorage):
    # Todos los endpoints comparten el storage de la prueba
    def _get_storage_override():
        yield storage

    app.dependency_overrides[get_storage] = _get_storage_override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_storage, None)


@pytest.fixture
def admin_user(storage: SqlStorage):
    return upsert_admin(storage, ADMIN_USERNAME, ADMIN_PASSWORD, "admin@example.com")


@pytest.fixture
def admin_headers(admin_user) -> dict:
    token = create_access_token(admin_user.id, {"role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_credentials(admin_user) -> dict:
    return {"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
