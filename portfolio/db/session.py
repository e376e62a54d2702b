# portfolio/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from portfolio.core.settings import settings


def _engine_kwargs(url: str) -> dict:
    """
    Pool settings per backend. SQLite (local dev) must be shared across the
    FastAPI threadpool; Postgres connections are recycled to survive
    Supabase/Heroku idle disconnects.
    """
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_recycle": 1800}


ENGINE_URL = settings.SQLALCHEMY_DATABASE_URL

# Without DATABASE_URL there is no engine; callers fall back to in-memory storage
engine = create_engine(ENGINE_URL, **_engine_kwargs(ENGINE_URL)) if ENGINE_URL else None

SessionLocal = sessionmaker(bind=engine, autoflush=False)


def get_db():
    if engine is None:
        raise RuntimeError("DATABASE_URL is not configured")
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
