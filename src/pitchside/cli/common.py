from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from pitchside.core.config import settings
from pitchside.db import DatabaseConfig, create_db_engine, create_session_factory


def make_engine() -> Engine:
    return create_db_engine(
        DatabaseConfig(database_url=settings.database_url, echo=settings.db_echo)
    )


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    Context-managed DB session for CLI commands.
    Ensures proper close and rolls back on exception.
    """
    SessionLocal = create_session_factory(make_engine())
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
