"""Database infrastructure for the local progress store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Tuple

from sqlalchemy import event
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig


def create_db_engine(config: BaseConfig):
    """Create SQLModel engine from configuration, applying SQLite pragmas on connect."""

    engine = create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())
    pragmas = dict(config.SQLITE_PRAGMAS) if engine.dialect.name == "sqlite" else {}

    if pragmas:

        @event.listens_for(engine, "connect")
        def _apply_pragmas(dbapi_connection, _record):
            cursor = dbapi_connection.cursor()
            for name, value in pragmas.items():
                cursor.execute(f"PRAGMA {name}={value}")
            cursor.close()

    return engine


def init_database(engine) -> None:
    """Create the slot table if it does not exist yet."""
    # Import all models to ensure they're registered
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def create_session_factory(engine):
    """Create a session factory; each session commits on clean exit and rolls back on error."""

    @contextmanager
    def factory() -> Iterator[Session]:
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


def bootstrap_database(config: BaseConfig | None = None) -> Tuple:
    """Build engine + session_factory with the schema in place.

    Returns (engine, session_factory).
    """

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    return engine, create_session_factory(engine)
