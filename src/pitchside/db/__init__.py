from pitchside.db.base import Base
from pitchside.db.engine import DatabaseConfig, create_db_engine, create_session_factory

__all__ = [
    "Base",
    "DatabaseConfig",
    "create_db_engine",
    "create_session_factory",
]
