# src/confighub/db/session.py
"""Engine and session factory.

Services receive a ``Session`` from :func:`get_db` and commit once per call.
"""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from confighub.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base for configs, versions, votes, comments, games and users."""


# Model modules register their tables on Base.metadata at import time.
import confighub.models  # noqa: E402,F401


def build_engine(url: str) -> Engine:
    """Create an engine; SQLite connections get foreign keys enforced."""
    is_sqlite = url.startswith("sqlite")
    new_engine = create_engine(
        url,
        pool_pre_ping=not is_sqlite,
        echo=settings.sql_debug,
        connect_args={"check_same_thread": False} if is_sqlite else {},
    )
    if is_sqlite:

        @event.listens_for(new_engine, "connect")
        def _sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
            # ON DELETE CASCADE is a no-op in SQLite until this pragma is set.
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


engine = build_engine(settings.effective_database_url)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
