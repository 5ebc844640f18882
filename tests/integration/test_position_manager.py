"""
Integration tests for ordering columns and tasks against a real database.
"""

import pytest

from taskboard.application.dto.column_dto import UpdateColumnRequestDTO
from taskboard.application.dto.task_dto import MoveTaskRequestDTO, TaskIdRequestDTO
from taskboard.application.use_cases.column_use_cases import UpdateColumnUseCase
from taskboard.application.use_cases.task_use_cases import MoveTaskUseCase, DeleteTaskUseCase
from taskboard.domain.models.base import (
    ValidationError,
    InvalidReorderError,
    EntityNotFoundError,
    OrderConflictError
)


def orders(children):
    return [child.order for child in children]


def titles(children):
    return [child.title for child in children]


class TestNextOrder:
    """Test cases for choosing the order of an appended child."""

    @pytest.mark.asyncio
    async def test_empty_board_starts_at_zero(self, repos, owner, make_board):
        board = await make_board(owner.id, "Empty", column_titles=())

        assert await repos.columns.get_next_order(board.id) == 0

    @pytest.mark.asyncio
    async def test_empty_column_starts_at_zero(self, repos, columns):
        assert await repos.tasks.get_next_order_in_column(columns[0].id) == 0

    @pytest.mark.asyncio
    async def test_default_columns_are_dense(self, repos, board, columns):
        assert titles(columns) == ["To Do", "In Progress", "Done"]
        assert orders(columns) == [0, 1, 2]
        assert await repos.columns.get_next_order(board.id) == 3

    @pytest.mark.asyncio
    async def test_next_order_is_above_gaps(self, repos, owner, columns, make_task):
        """Test that with orders {0, 2, 5} in use the next order is 6."""
        column_id = columns[0].id
        for title, order in (("a", 0), ("b", 1), ("c", 2), ("d", 5)):
            result = await make_task(owner.id, column_id, title, order=order)
            assert result.success, result.error

        task_b = (await repos.tasks.find_by_column(column_id))[1]
        result = await DeleteTaskUseCase(
            repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id).execute(TaskIdRequestDTO(id=task_b.id))
        assert result.success, result.error

        assert orders(await repos.tasks.find_by_column(column_id)) == [0, 2, 5]
        assert await repos.tasks.get_next_order_in_column(column_id) == 6

        appended = await make_task(owner.id, column_id, "e")

        assert appended.data.order == 6

    @pytest.mark.asyncio
    async def test_unknown_parent(self, repos, owner):
        with pytest.raises(EntityNotFoundError):
            await repos.columns.get_next_order("missing-board")

        with pytest.raises(EntityNotFoundError):
            await repos.tasks.get_next_order_in_column("missing-column")

    @pytest.mark.asyncio
    async def test_blank_parent_id(self, repos):
        with pytest.raises(ValidationError):
            await repos.columns.get_next_order("  ")


class TestFullReorder:
    """Test cases for renumbering every child of a parent."""

    @pytest.mark.asyncio
    async def test_reorder_columns(self, repos, board, columns):
        """Test that [Done, To Do, In Progress] is stored as orders 0, 1 and 2."""
        todo, doing, done = columns

        result = await repos.columns.reorder_columns(board.id, [done.id, todo.id, doing.id])
        await repos.transaction_manager.commit()

        assert titles(result) == ["Done", "To Do", "In Progress"]
        assert orders(result) == [0, 1, 2]

        stored = await repos.columns.find_by_board(board.id)
        assert [column.id for column in stored] == [done.id, todo.id, doing.id]
        assert orders(stored) == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_reorder_is_idempotent(self, repos, board, columns):
        ids = [columns[2].id, columns[0].id, columns[1].id]

        first = await repos.columns.reorder_columns(board.id, ids)
        second = await repos.columns.reorder_columns(board.id, ids)

        assert [(c.id, c.order) for c in first] == [(c.id, c.order) for c in second]

    @pytest.mark.asyncio
    async def test_reorder_closes_gaps(self, repos, owner, columns, make_task):
        column_id = columns[1].id
        for title, order in (("a", 0), ("b", 2), ("c", 5)):
            assert (await make_task(owner.id, column_id, title, order=order)).success

        tasks = await repos.tasks.find_by_column(column_id)
        reordered = await repos.tasks.reorder_tasks_in_column(
            column_id, [task.id for task in reversed(tasks)]
        )

        assert titles(reordered) == ["c", "b", "a"]
        assert orders(reordered) == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_missing_child_rejected(self, repos, board, columns):
        """Test that a partial list is rejected and nothing changes."""
        with pytest.raises(InvalidReorderError):
            await repos.columns.reorder_columns(board.id, [columns[2].id, columns[0].id])

        stored = await repos.columns.find_by_board(board.id)
        assert [c.id for c in stored] == [c.id for c in columns]
        assert orders(stored) == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_foreign_child_rejected(self, repos, owner, board, columns, make_board):
        other = await make_board(owner.id, "Other")
        foreign = (await repos.columns.find_by_board(other.id))[0]

        with pytest.raises(InvalidReorderError):
            await repos.columns.reorder_columns(
                board.id, [c.id for c in columns] + [foreign.id]
            )

    @pytest.mark.asyncio
    async def test_duplicate_rejected(self, repos, board, columns):
        ids = [c.id for c in columns]

        with pytest.raises(InvalidReorderError, match="Duplicate"):
            await repos.columns.reorder_columns(board.id, ids + [ids[0]])

    @pytest.mark.asyncio
    async def test_unknown_board(self, repos):
        with pytest.raises(EntityNotFoundError):
            await repos.columns.reorder_columns("missing-board", [])

    @pytest.mark.asyncio
    async def test_empty_column_accepts_empty_list(self, repos, columns):
        assert await repos.tasks.reorder_tasks_in_column(columns[2].id, []) == []


class TestMoveAcrossParents:
    """Test cases for moving a task to a column at an order."""

    async def _three_tasks(self, owner, column_id, make_task):
        ids = []
        for title in ("a", "b", "c"):
            result = await make_task(owner.id, column_id, title)
            assert result.success, result.error
            ids.append(result.data.id)
        return ids

    @pytest.mark.asyncio
    async def test_move_keeps_identity(self, repos, owner, columns, make_task):
        todo, doing, _ = columns
        a, b, c = await self._three_tasks(owner, todo.id, make_task)

        moved = await repos.tasks.update_task_order(b, doing.id, 0)
        await repos.transaction_manager.commit()

        assert moved.id == b
        assert moved.column_id == doing.id
        assert moved.order == 0
        assert moved.title == "b"
        assert [t.id for t in await repos.tasks.find_by_column(todo.id)] == [a, c]
        assert [t.id for t in await repos.tasks.find_by_column(doing.id)] == [b]

    @pytest.mark.asyncio
    async def test_move_does_not_renumber(self, repos, owner, columns, make_task):
        """Test that only the moved task is written and the gap stays."""
        todo, _, done = columns
        a, b, c = await self._three_tasks(owner, todo.id, make_task)

        await repos.tasks.update_task_order(b, done.id, 4)
        await repos.transaction_manager.commit()

        assert orders(await repos.tasks.find_by_column(todo.id)) == [0, 2]
        assert orders(await repos.tasks.find_by_column(done.id)) == [4]

    @pytest.mark.asyncio
    async def test_move_onto_taken_order(self, repos, owner, columns, make_task):
        """Test that a taken destination order is a conflict and nothing moves."""
        todo, doing, _ = columns
        a, b, _ = await self._three_tasks(owner, todo.id, make_task)
        await repos.tasks.update_task_order(a, doing.id, 0)
        await repos.transaction_manager.commit()

        with pytest.raises(OrderConflictError) as exc_info:
            await repos.tasks.update_task_order(b, doing.id, 0)

        assert exc_info.value.code == "ORDER_CONFLICT"
        assert exc_info.value.parent_id == doing.id
        assert exc_info.value.order == 0

        task = await repos.tasks.find_by_id(b)
        assert task.column_id == todo.id
        assert task.order == 1

    @pytest.mark.asyncio
    async def test_move_to_same_place_is_noop(self, repos, owner, columns, make_task):
        todo = columns[0]
        a, _, _ = await self._three_tasks(owner, todo.id, make_task)

        moved = await repos.tasks.update_task_order(a, todo.id, 0)

        assert moved.order == 0
        assert orders(await repos.tasks.find_by_column(todo.id)) == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_move_within_column(self, repos, owner, columns, make_task):
        todo = columns[0]
        a, _, _ = await self._three_tasks(owner, todo.id, make_task)

        moved = await repos.tasks.update_task_order(a, todo.id, 7)

        assert moved.order == 7
        assert titles(await repos.tasks.find_by_column(todo.id)) == ["b", "c", "a"]

    @pytest.mark.asyncio
    async def test_move_unknown_task_or_column(self, repos, owner, columns, make_task):
        a, _, _ = await self._three_tasks(owner, columns[0].id, make_task)

        with pytest.raises(EntityNotFoundError):
            await repos.tasks.update_task_order("missing-task", columns[1].id, 0)

        with pytest.raises(EntityNotFoundError):
            await repos.tasks.update_task_order(a, "missing-column", 0)

    @pytest.mark.asyncio
    async def test_move_negative_order(self, repos, owner, columns, make_task):
        a, _, _ = await self._three_tasks(owner, columns[0].id, make_task)

        with pytest.raises(ValidationError):
            await repos.tasks.update_task_order(a, columns[1].id, -1)

    @pytest.mark.asyncio
    async def test_close_gap_compacts_source(self, repos, owner, columns, make_task):
        todo, doing, _ = columns
        a, b, c = await self._three_tasks(owner, todo.id, make_task)

        use_case = MoveTaskUseCase(
            repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id)
        result = await use_case.execute(
            MoveTaskRequestDTO(task_id=b, column_id=doing.id, order=0, close_gap=True)
        )

        assert result.success, result.error
        remaining = await repos.tasks.find_by_column(todo.id)
        assert [t.id for t in remaining] == [a, c]
        assert orders(remaining) == [0, 1]

    @pytest.mark.asyncio
    async def test_move_conflict_through_use_case(self, repos, owner, columns, make_task):
        todo, doing, _ = columns
        a, b, _ = await self._three_tasks(owner, todo.id, make_task)
        use_case = MoveTaskUseCase(
            repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id)

        first = await use_case.execute(MoveTaskRequestDTO(task_id=a, column_id=doing.id, order=3))
        second = await use_case.execute(MoveTaskRequestDTO(task_id=b, column_id=doing.id, order=3))

        assert first.success, first.error
        assert second.success is False
        assert second.error_code == "ORDER_CONFLICT"
        assert [t.id for t in await repos.tasks.find_by_column(doing.id)] == [a]

    @pytest.mark.asyncio
    async def test_move_into_full_column_rejected(self, repos, owner, columns, make_task):
        """Test that a destination at its WIP limit refuses the task and nothing moves."""
        todo, doing, _ = columns
        a, b, _ = await self._three_tasks(owner, todo.id, make_task)
        limited = await UpdateColumnUseCase(
            repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id).execute(UpdateColumnRequestDTO(id=doing.id, wip_limit=1))
        assert limited.success, limited.error
        use_case = MoveTaskUseCase(
            repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id)

        first = await use_case.execute(MoveTaskRequestDTO(task_id=a, column_id=doing.id, order=0))
        second = await use_case.execute(MoveTaskRequestDTO(task_id=b, column_id=doing.id, order=1))

        assert first.success, first.error
        assert second.success is False
        assert second.error_code == "BUSINESS_RULE_VIOLATION"
        assert "WIP limit" in second.error
        task = await repos.tasks.find_by_id(b)
        assert task.column_id == todo.id
        assert task.order == 1

    @pytest.mark.asyncio
    async def test_move_within_full_column_allowed(self, repos, owner, columns, make_task):
        todo = columns[0]
        a, _, _ = await self._three_tasks(owner, todo.id, make_task)
        await UpdateColumnUseCase(
            repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id).execute(UpdateColumnRequestDTO(id=todo.id, wip_limit=3))

        result = await MoveTaskUseCase(
            repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id).execute(MoveTaskRequestDTO(task_id=a, column_id=todo.id, order=5))

        assert result.success, result.error
        assert result.data.order == 5

    @pytest.mark.asyncio
    async def test_move_to_another_board_rejected(self, repos, owner, columns, make_task, make_board):
        todo = columns[0]
        a, _, _ = await self._three_tasks(owner, todo.id, make_task)
        other = await make_board(owner.id, "Other")
        foreign_column = (await repos.columns.find_by_board(other.id))[0]

        result = await MoveTaskUseCase(
            repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id).execute(
            MoveTaskRequestDTO(task_id=a, column_id=foreign_column.id, order=0)
        )

        assert result.success is False
        assert result.error_code == "BUSINESS_RULE_VIOLATION"
        assert result.error == "Tasks cannot be moved to another board"
        task = await repos.tasks.find_by_id(a)
        assert task.column_id == todo.id
        assert task.order == 0
        assert await repos.tasks.find_by_column(foreign_column.id) == []


class TestExplicitOrders:
    """Test cases for creating children at a caller-chosen order."""

    @pytest.mark.asyncio
    async def test_duplicate_explicit_order(self, owner, columns, make_task):
        first = await make_task(owner.id, columns[0].id, "a", order=3)
        second = await make_task(owner.id, columns[0].id, "b", order=3)

        assert first.success, first.error
        assert second.success is False
        assert second.error_code == "ORDER_CONFLICT"

    @pytest.mark.asyncio
    async def test_same_order_in_different_columns(self, owner, columns, make_task):
        first = await make_task(owner.id, columns[0].id, "a", order=0)
        second = await make_task(owner.id, columns[1].id, "b", order=0)

        assert first.success and second.success


class TestCompact:
    """Test cases for closing gaps without changing the sequence."""

    @pytest.mark.asyncio
    async def test_compact_columns(self, repos, board, columns):
        await repos.columns.delete(columns[1].id)
        await repos.transaction_manager.commit()

        compacted = await repos.columns.compact_columns(board.id)

        assert titles(compacted) == ["To Do", "Done"]
        assert orders(compacted) == [0, 1]

    @pytest.mark.asyncio
    async def test_compact_dense_is_noop(self, repos, board, columns):
        compacted = await repos.columns.compact_columns(board.id)

        assert [(c.id, c.order) for c in compacted] == [(c.id, c.order) for c in columns]

    @pytest.mark.asyncio
    async def test_compact_tasks(self, repos, owner, columns, make_task):
        column_id = columns[0].id
        for title, order in (("a", 4), ("b", 9), ("c", 1)):
            assert (await make_task(owner.id, column_id, title, order=order)).success

        compacted = await repos.tasks.compact_column(column_id)

        assert titles(compacted) == ["c", "a", "b"]
        assert orders(compacted) == [0, 1, 2]
