"""
Database infrastructure for the task board.
"""

from .database import (
    engine,
    SessionLocal,
    get_db,
    Base,
    build_engine,
    create_all_tables,
    drop_all_tables,
    SQLAlchemyTransactionManager,
)
from .models import *  # noqa: F401,F403

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "Base",
    "build_engine",
    "create_all_tables",
    "drop_all_tables",
    "SQLAlchemyTransactionManager",
]
