"""
Database connection and session.

Schema source of truth: innkeep.models. On startup, Base.metadata.create_all(bind=engine)
creates all tables from the current models. SQLite URLs (local runs, tests) share a
single connection so an in-memory database survives across sessions.
"""
from sqlalchemy import JSON, create_engine
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from innkeep.config import get_settings

settings = get_settings()

# JSONB on PostgreSQL, plain JSON everywhere else
JSONType = JSON().with_variant(JSONB(), "postgresql")


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_pre_ping": True}


engine = create_engine(settings.database_url, **_engine_kwargs(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
