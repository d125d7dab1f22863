"""Database connection and session management.

This module provides engine creation, session factories, and schema
bootstrap helpers for the NetWatch persistence layer.
"""

from typing import Any

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from netwatch.config import get_settings
from netwatch.models import Base


def _configure_sqlite(
    dbapi_connection: Any, connection_record: Any  # noqa: ARG001
) -> None:
    """Enable foreign keys and WAL journaling on every SQLite connection.

    Args:
        dbapi_connection: The DBAPI connection
        connection_record: Connection record (required by SQLAlchemy event API)
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str | None = None, *, echo: bool | None = None) -> Engine:
    """Create and configure a database engine.

    Args:
        url: SQLAlchemy URL; defaults to ``Settings.database_url``
        echo: Log SQL; defaults to ``Settings.database_echo``

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    settings = get_settings()
    url = url or settings.database_url
    echo = settings.database_echo if echo is None else echo

    engine = create_engine(url, echo=echo, pool_pre_ping=True)
    if url.startswith("sqlite"):
        event.listen(engine, "connect", _configure_sqlite)
    return engine


_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """Get or create the global database engine."""
    global _engine  # noqa: PLW0603
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """Get or create the global session factory."""
    global _SessionLocal  # noqa: PLW0603
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def init_db(engine: Engine | None = None) -> None:
    """Create every table that does not exist yet."""
    Base.metadata.create_all(bind=engine or get_engine())


def get_table_names(engine: Engine | None = None) -> list[str]:
    """Return the names of the tables present in the database."""
    return inspect(engine or get_engine()).get_table_names()
