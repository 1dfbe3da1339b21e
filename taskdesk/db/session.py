"""
TaskDesk Database Session Management.

Provides the single entry point for DB initialisation plus a context
manager for transactional access.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskdesk.db.base import Base

logger = logging.getLogger("taskdesk.db.session")


def build_engine(db_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for ``db_url``.

    SQLite connections are shared across the server's worker threads, so
    ``check_same_thread`` is disabled; an in-memory database additionally
    needs a single static connection or every session would see an empty
    database.
    """
    kwargs: Dict[str, Any] = {"echo": echo}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in db_url or db_url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(db_url, **kwargs)


def init_db(db_url: str, create_tables: bool = True, echo: bool = False) -> sessionmaker:
    """
    Initialise the task database.

    Args:
        db_url:        SQLAlchemy URL (sqlite:///taskdesk.db, postgresql://…).
        create_tables: Run ``Base.metadata.create_all()`` (idempotent).
        echo:          Log emitted SQL.

    Returns:
        A ``sessionmaker`` bound to the new engine. ``expire_on_commit`` is
        off so rows stay readable after their session commits.
    """
    # Register the tasks table on Base.metadata
    from taskdesk.db import models  # noqa: F401

    engine = build_engine(db_url, echo=echo)
    if create_tables:
        Base.metadata.create_all(engine)
        logger.info("Task tables ensured on %s", engine.url.render_as_string(hide_password=True))
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Context manager for DB sessions with auto-commit/rollback.

    Usage:
        with session_scope(factory) as session:
            row = session.get(TaskRow, 1)
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def dispose(factory: sessionmaker) -> None:
    """Close the connection pool behind ``factory``."""
    engine = factory.kw.get("bind")
    if engine is not None:
        engine.dispose()
