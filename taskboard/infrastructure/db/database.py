"""
Database configuration and session management.
"""

import logging
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool

from taskboard.config import settings
from taskboard.domain.models.base import OrderConflictError, PersistenceError
from taskboard.domain.repositories.transaction_manager import TransactionManager


logger = logging.getLogger(__name__)

# Unique (parent, position) constraints, mapped to the parent they order.
ORDER_CONSTRAINTS = {
    "uq_columns_board_position": ("Board", "board_id"),
    "uq_tasks_column_position": ("Column", "column_id"),
}


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.
    SQLite connections get foreign keys switched on; in-memory databases share
    one connection so every session sees the same data.
    """
    kwargs = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool

    new_engine = create_engine(database_url, **kwargs)

    if database_url.startswith("sqlite"):
        @event.listens_for(new_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


# Create SQLAlchemy engine
engine = build_engine(settings.database_url, echo=settings.database_echo)

# Create SessionLocal class
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Create declarative base
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_all_tables(bind: Optional[Engine] = None) -> None:
    """Create all tables in the database."""
    # Register the table models on Base.metadata
    from taskboard.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def drop_all_tables(bind: Optional[Engine] = None) -> None:
    """Drop all tables from the database."""
    from taskboard.infrastructure.db import models  # noqa: F401

    Base.metadata.drop_all(bind=bind or engine)


def translate_integrity_error(exc: IntegrityError, order: Optional[int] = None):
    """
    Turn a driver integrity error into a domain exception.

    Violations of a unique (parent, position) constraint become
    OrderConflictError; anything else becomes PersistenceError.
    """
    message = str(getattr(exc, "orig", exc))
    params = exc.params if isinstance(exc.params, dict) else {}

    for constraint, (parent_type, parent_column) in ORDER_CONSTRAINTS.items():
        table = "columns" if parent_type == "Board" else "tasks"
        by_name = constraint in message
        by_columns = (
            f"{table}.{parent_column}" in message and f"{table}.position" in message
        )
        if by_name or by_columns:
            return OrderConflictError(
                parent_type,
                params.get(parent_column, "unknown"),
                order if order is not None else params.get("position")
            )

    return PersistenceError(f"Database integrity error: {message}")


class SQLAlchemyTransactionManager(TransactionManager):
    """Commits or rolls back a SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session

    async def commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            error = translate_integrity_error(exc)
            logger.warning("Commit rejected: %s", error.message)
            raise error from exc

    async def rollback(self) -> None:
        self.session.rollback()
