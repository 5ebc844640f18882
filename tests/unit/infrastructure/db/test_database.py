"""
Tests for translating store integrity errors into domain exceptions.
"""

import sqlite3
import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from taskboard.domain.models.base import OrderConflictError, PersistenceError
from taskboard.infrastructure.db.database import translate_integrity_error
from taskboard.infrastructure.db.models import ColumnModel, UserModel


def integrity_error(message, params=None):
    return IntegrityError("INSERT ...", params or {}, sqlite3.IntegrityError(message))


class TestTranslateIntegrityError:
    """Test cases for translate_integrity_error."""

    def test_task_position_clash_is_order_conflict(self):
        error = translate_integrity_error(integrity_error(
            "UNIQUE constraint failed: tasks.column_id, tasks.position",
            {"column_id": "c1", "position": 2}
        ))

        assert isinstance(error, OrderConflictError)
        assert error.code == "ORDER_CONFLICT"
        assert error.parent_type == "Column"
        assert error.parent_id == "c1"
        assert error.order == 2

    def test_column_position_clash_is_order_conflict(self):
        error = translate_integrity_error(
            integrity_error("UNIQUE constraint failed: columns.board_id, columns.position", {"board_id": "b1"}),
            order=0
        )

        assert isinstance(error, OrderConflictError)
        assert error.parent_type == "Board"
        assert error.parent_id == "b1"
        assert error.order == 0

    def test_constraint_name_is_order_conflict(self):
        """Test that backends reporting the constraint name are recognised."""
        error = translate_integrity_error(integrity_error(
            'duplicate key value violates unique constraint "uq_tasks_column_position"'
        ))

        assert isinstance(error, OrderConflictError)
        assert error.parent_type == "Column"

    @pytest.mark.parametrize("message", [
        "NOT NULL constraint failed: users.email",
        "FOREIGN KEY constraint failed",
        "UNIQUE constraint failed: labels.board_id, labels.name",
    ])
    def test_other_failures_are_persistence_errors(self, message):
        error = translate_integrity_error(integrity_error(message))

        assert isinstance(error, PersistenceError)
        assert not isinstance(error, OrderConflictError)
        assert error.code == "PERSISTENCE_ERROR"
        assert message in error.message


class TestCommitTranslation:
    """Test cases for integrity errors raised when the transaction commits."""

    @pytest.mark.asyncio
    async def test_order_clash_at_commit(self, repos, session, board, columns):
        session.add(ColumnModel(id=str(uuid.uuid4()), board_id=board.id, title="Clash", position=1))

        with pytest.raises(OrderConflictError):
            await repos.transaction_manager.commit()

        assert [c.title for c in await repos.columns.find_by_board(board.id)] == [
            "To Do", "In Progress", "Done"
        ]

    @pytest.mark.asyncio
    async def test_other_failure_at_commit(self, repos, session):
        session.add(UserModel(id=str(uuid.uuid4()), email=None, user_name="nobody"))

        with pytest.raises(PersistenceError) as exc_info:
            await repos.transaction_manager.commit()

        assert exc_info.value.code == "PERSISTENCE_ERROR"
        assert await repos.users.find_by_user_name("nobody") is None
