"""Engine, session factory and declarative base for the discussion store.

SQLite is the default backend. It enforces foreign keys only when asked to on
each connection, and the ``ON DELETE`` rules on reaction and survey tables
depend on that, so every SQLite engine built here switches the pragma on.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from charcha_manch.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import charcha_manch.models  # noqa: E402,F401


def is_sqlite_url(url: str) -> bool:
    return url.startswith("sqlite")


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """Run ``PRAGMA foreign_keys=ON`` on every new connection of ``target``."""

    @event.listens_for(target, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()


def build_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine for ``url`` with the SQLite connection setup applied."""
    connect_args: dict[str, Any] = dict(kwargs.pop("connect_args", {}))
    sqlite = is_sqlite_url(url)
    if sqlite:
        # Sync endpoints run in FastAPI's threadpool.
        connect_args.setdefault("check_same_thread", False)
    new_engine = create_engine(
        url,
        pool_pre_ping=True,
        echo=settings.sql_debug,
        connect_args=connect_args,
        **kwargs,
    )
    if sqlite:
        enable_sqlite_foreign_keys(new_engine)
    return new_engine


engine = build_engine(settings.effective_database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session; services commit their own work."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=engine)
