"""
SQLAlchemy engine and session setup for the content store.

The engine is built once per process from application settings.
Sessions are created per request and handed to the repository
adapters explicitly; nothing here holds a global connection.
"""

import logging
from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from conduit.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all content tables."""


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    """Build a SQLAlchemy engine for the given URL.

    SQLite engines get foreign keys switched on and, for in-memory
    databases, a single shared connection so every session sees the
    same data.

    Args:
        url: SQLAlchemy database URL.
        echo: Log every SQL statement.

    Returns:
        A configured engine.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(url, echo=echo, pool_pre_ping=True)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Return the process-wide engine built from application settings."""
    # SQL echo goes through the sqlalchemy.engine logger, see configure_logging.
    return build_engine(settings.database_url)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Return a session factory bound to the engine."""
    return sessionmaker(bind=engine, autoflush=False)


def init_db(engine: Engine) -> None:
    """Create all content tables that do not exist yet."""
    # Register the mapped classes on Base.metadata before creating tables.
    from conduit.infrastructure.content import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Content tables ready on %s", engine.url.render_as_string(hide_password=True))
