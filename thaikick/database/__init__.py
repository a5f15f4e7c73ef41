"""
Database engine, session factory and declarative base.

Production runs on hosted Postgres behind a transaction pooler; local
development and tests use SQLite.
"""

from __future__ import annotations

import logging
from typing import Any, Generator
from urllib.parse import urlparse

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker

from thaikick.core.config import settings

logger = logging.getLogger(__name__)

# Postgres connection options. The pooler drops idle connections after
# about a minute, hence the short recycle and aggressive keepalives.
_POSTGRES_CONNECT_ARGS: dict[str, Any] = {
    "keepalives": 1,
    "keepalives_idle": 15,
    "keepalives_interval": 5,
    "keepalives_count": 3,
    "options": "-c statement_timeout=15000",
    "connect_timeout": 5,
    "application_name": "thaikick_api",
}


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _needs_ssl(url: str) -> bool:
    return "supabase" in (urlparse(url).hostname or "").lower()


def _engine_options(db_url: str) -> dict[str, Any]:
    if _is_sqlite(db_url):
        return {"connect_args": {"check_same_thread": False}, "echo": settings.database_echo}

    connect_args = dict(_POSTGRES_CONNECT_ARGS)
    if _needs_ssl(db_url):
        connect_args["sslmode"] = "require"

    return {
        "connect_args": connect_args,
        "echo": settings.database_echo,
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_timeout": 2,
        "pool_recycle": 30,
        "pool_pre_ping": True,
        "pool_use_lifo": True,
    }


engine: Engine = create_engine(settings.database_url, **_engine_options(settings.database_url))


@event.listens_for(engine, "connect")
def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite ignores foreign keys (and ON DELETE CASCADE) unless asked
    if _is_sqlite(settings.database_url):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
    logger.debug("Database connection established")


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session: committed on success, rolled back on error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create all tables. Hosted databases are migrated separately."""
    from thaikick import models  # noqa: F401  (registers every table)

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
