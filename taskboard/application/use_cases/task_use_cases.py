"""
Task use cases.
Creating, editing, moving and ordering the tasks of a column.
"""

import logging
from typing import List, Optional, Tuple

from taskboard.domain.models.board import Board
from taskboard.domain.models.column import Column
from taskboard.domain.models.task import Task, TaskPriority
from taskboard.domain.models.activity_log import ActivityLog, ActivityType
from taskboard.domain.models.base import (
    EntityNotFoundError,
    BusinessRuleViolation
)
from taskboard.domain.repositories.board_repository import BoardRepository
from taskboard.domain.repositories.column_repository import ColumnRepository
from taskboard.domain.repositories.task_repository import TaskRepository
from taskboard.domain.repositories.label_repository import LabelRepository
from taskboard.domain.repositories.user_repository import UserRepository
from taskboard.domain.repositories.activity_log_repository import ActivityLogRepository
from taskboard.domain.repositories.transaction_manager import TransactionManager
from taskboard.application.dto.task_dto import (
    CreateTaskRequestDTO,
    UpdateTaskRequestDTO,
    TaskIdRequestDTO,
    ListTasksRequestDTO,
    AssignTaskRequestDTO,
    CompleteTaskRequestDTO,
    MoveTaskRequestDTO,
    ReorderTasksRequestDTO,
    TaskResponseDTO,
    TaskDetailsResponseDTO
)
from .base_use_case import (
    AuthorizedUseCase,
    AppendUseCase,
    UpdateUseCase,
    DeleteUseCase,
    QueryUseCase
)
from .column_use_cases import get_board_or_raise, get_column_or_raise
from .label_use_cases import label_to_response_dto
from .comment_use_cases import comment_to_response_dto, attachment_to_response_dto


logger = logging.getLogger(__name__)


def task_to_response_dto(task: Task) -> TaskResponseDTO:
    """Convert Task domain model to response DTO."""
    return TaskResponseDTO(
        id=task.id,
        column_id=task.column_id,
        title=task.title,
        description=task.description,
        order=task.order,
        priority=task.priority,
        priority_color=task.priority.color,
        due_date=task.due_date,
        completed_at=task.completed_at,
        is_completed=task.is_completed,
        is_overdue=task.is_overdue,
        assigned_user_id=task.assigned_user_id,
        created_by_id=task.created_by_id,
        label_ids=list(task.label_ids),
        created_at=task.created_at,
        updated_at=task.updated_at
    )


async def get_task_or_raise(task_repository: TaskRepository, task_id: str) -> Task:
    task = await task_repository.find_by_id(task_id)
    if not task:
        raise EntityNotFoundError("Task", task_id)
    return task


class TaskUseCaseMixin:
    """Lookups shared by the task commands."""

    column_repository: ColumnRepository
    board_repository: BoardRepository

    async def _load_column_and_board(self, column_id: str) -> Tuple[Column, Board]:
        column = await get_column_or_raise(self.column_repository, column_id)
        board = await get_board_or_raise(self.board_repository, column.board_id)
        return column, board


class CreateTaskUseCase(TaskUseCaseMixin, AuthorizedUseCase, AppendUseCase[CreateTaskRequestDTO, TaskResponseDTO]):
    """
    Use case for creating a task in a column.
    Without an explicit order the task goes after the column's last task.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        column_repository: ColumnRepository,
        board_repository: BoardRepository,
        user_repository: UserRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None,
        append_retries: int = 0
    ):
        super().__init__(transaction_manager, append_retries)
        self.task_repository = task_repository
        self.column_repository = column_repository
        self.board_repository = board_repository
        self.user_repository = user_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: CreateTaskRequestDTO) -> TaskResponseDTO:
        column, board = await self._load_column_and_board(request.column_id)
        self._require_board_member(board)

        if not column.can_add_task():
            raise BusinessRuleViolation(f"Column '{column.title}' has reached its WIP limit")

        if request.assigned_user_id:
            if not await self.user_repository.find_by_id(request.assigned_user_id):
                raise EntityNotFoundError("User", request.assigned_user_id)
            if not board.is_member(request.assigned_user_id):
                raise BusinessRuleViolation("Tasks can only be assigned to board members")

        if request.order is None:
            order = await self.task_repository.get_next_order_in_column(column.id)
        else:
            order = request.order

        task = Task.create(
            title=request.title,
            column_id=column.id,
            created_by_id=self.current_user_id,
            order=order,
            description=request.description,
            priority=TaskPriority(request.priority),
            due_date=request.due_date,
            assigned_user_id=request.assigned_user_id
        )
        await self.task_repository.save(task)

        await self.activity_log_repository.add(ActivityLog.for_task(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.TASK_CREATED,
            description=f"Created task '{task.title}' in '{column.title}'",
            task_id=task.id,
            column_id=column.id
        ))
        logger.info("Created task %s in column %s at order %d", task.id, column.id, order)

        return task_to_response_dto(task)


class GetTaskUseCase(QueryUseCase[TaskIdRequestDTO, TaskDetailsResponseDTO]):
    """Use case for reading a task with its labels, comments and attachments."""

    def __init__(self, task_repository: TaskRepository, label_repository: LabelRepository):
        super().__init__()
        self.task_repository = task_repository
        self.label_repository = label_repository

    async def _execute_business_logic(self, request: TaskIdRequestDTO) -> TaskDetailsResponseDTO:
        task = await self.task_repository.find_with_details(request.id)
        if not task:
            raise EntityNotFoundError("Task", request.id)

        labels = await self.label_repository.find_by_task(task.id)

        return TaskDetailsResponseDTO(
            **task_to_response_dto(task).model_dump(),
            labels=[label_to_response_dto(label) for label in labels],
            comments=[comment_to_response_dto(comment) for comment in task.active_comments],
            attachments=[attachment_to_response_dto(item) for item in task.attachments]
        )


class ListTasksUseCase(QueryUseCase[ListTasksRequestDTO, List[TaskResponseDTO]]):
    """Use case for listing a column's tasks in order."""

    def __init__(self, task_repository: TaskRepository, column_repository: ColumnRepository):
        super().__init__()
        self.task_repository = task_repository
        self.column_repository = column_repository

    async def _execute_business_logic(self, request: ListTasksRequestDTO) -> List[TaskResponseDTO]:
        await get_column_or_raise(self.column_repository, request.column_id)
        tasks = await self.task_repository.find_by_column(request.column_id)
        return [task_to_response_dto(task) for task in tasks]


class UpdateTaskUseCase(TaskUseCaseMixin, AuthorizedUseCase, UpdateUseCase[UpdateTaskRequestDTO, TaskResponseDTO]):
    """Use case for editing a task's fields. Position is left alone."""

    def __init__(
        self,
        task_repository: TaskRepository,
        column_repository: ColumnRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.task_repository = task_repository
        self.column_repository = column_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: UpdateTaskRequestDTO) -> TaskResponseDTO:
        task = await get_task_or_raise(self.task_repository, request.id)
        _, board = await self._load_column_and_board(task.column_id)
        self._require_board_member(board)

        old_priority = task.priority
        if request.title is not None:
            task.update_title(request.title)
        if request.description is not None:
            task.update_description(request.description)
        if request.priority is not None:
            task.update_priority(TaskPriority(request.priority))
        if request.clear_due_date:
            task.update_due_date(None)
        elif request.due_date is not None:
            task.update_due_date(request.due_date)

        await self.task_repository.save(task)

        await self.activity_log_repository.add(ActivityLog.for_value_change(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.TASK_UPDATED,
            description=f"Updated task '{task.title}'",
            old_value=old_priority.value,
            new_value=task.priority.value,
            task_id=task.id,
            column_id=task.column_id
        ))

        return task_to_response_dto(task)


class CompleteTaskUseCase(TaskUseCaseMixin, AuthorizedUseCase, UpdateUseCase[CompleteTaskRequestDTO, TaskResponseDTO]):
    """Use case for completing or reopening a task."""

    def __init__(
        self,
        task_repository: TaskRepository,
        column_repository: ColumnRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.task_repository = task_repository
        self.column_repository = column_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: CompleteTaskRequestDTO) -> TaskResponseDTO:
        task = await get_task_or_raise(self.task_repository, request.task_id)
        _, board = await self._load_column_and_board(task.column_id)
        self._require_board_member(board)

        was_completed = task.is_completed
        if request.completed:
            task.complete()
        else:
            task.uncomplete()

        if task.is_completed != was_completed:
            await self.task_repository.save(task)
            activity_type = ActivityType.TASK_COMPLETED if task.is_completed else ActivityType.TASK_UPDATED
            verb = "Completed" if task.is_completed else "Reopened"
            await self.activity_log_repository.add(ActivityLog.for_task(
                board_id=board.id,
                user_id=self.current_user_id,
                activity_type=activity_type,
                description=f"{verb} task '{task.title}'",
                task_id=task.id,
                column_id=task.column_id
            ))

        return task_to_response_dto(task)


class AssignTaskUseCase(TaskUseCaseMixin, AuthorizedUseCase, UpdateUseCase[AssignTaskRequestDTO, TaskResponseDTO]):
    """Use case for assigning a task to a board member, or unassigning it."""

    def __init__(
        self,
        task_repository: TaskRepository,
        column_repository: ColumnRepository,
        board_repository: BoardRepository,
        user_repository: UserRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.task_repository = task_repository
        self.column_repository = column_repository
        self.board_repository = board_repository
        self.user_repository = user_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: AssignTaskRequestDTO) -> TaskResponseDTO:
        task = await get_task_or_raise(self.task_repository, request.task_id)
        _, board = await self._load_column_and_board(task.column_id)
        self._require_board_member(board)

        old_assignee = task.assigned_user_id
        if request.user_id is None:
            task.unassign_user()
            description = f"Unassigned task '{task.title}'"
        else:
            user = await self.user_repository.find_by_id(request.user_id)
            if not user:
                raise EntityNotFoundError("User", request.user_id)
            if not board.is_member(user.id):
                raise BusinessRuleViolation("Tasks can only be assigned to board members")
            task.assign_to_user(user.id)
            description = f"Assigned task '{task.title}' to {user.display_name}"

        await self.task_repository.save(task)

        await self.activity_log_repository.add(ActivityLog.for_value_change(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.TASK_UPDATED,
            description=description,
            old_value=old_assignee,
            new_value=task.assigned_user_id,
            task_id=task.id,
            column_id=task.column_id
        ))

        return task_to_response_dto(task)


class MoveTaskUseCase(TaskUseCaseMixin, AuthorizedUseCase, UpdateUseCase[MoveTaskRequestDTO, TaskResponseDTO]):
    """
    Use case for moving a task to a column at a given order.

    Only the moved task is written: other tasks keep their orders, and a
    destination order that is already taken fails with ORDER_CONFLICT. With
    ``close_gap`` the source column is compacted after a cross-column move.
    Tasks cannot leave their board.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        column_repository: ColumnRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.task_repository = task_repository
        self.column_repository = column_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: MoveTaskRequestDTO) -> TaskResponseDTO:
        task = await get_task_or_raise(self.task_repository, request.task_id)
        source, board = await self._load_column_and_board(task.column_id)
        target = await get_column_or_raise(self.column_repository, request.column_id)

        if target.board_id != source.board_id:
            raise BusinessRuleViolation("Tasks cannot be moved to another board")
        self._require_board_member(board)

        if target.id != source.id and not target.can_add_task():
            raise BusinessRuleViolation(f"Column '{target.title}' has reached its WIP limit")

        old_order = task.order
        moved = await self.task_repository.update_task_order(task.id, target.id, request.order)

        if request.close_gap and target.id != source.id:
            await self.task_repository.compact_column(source.id)

        await self.activity_log_repository.add(ActivityLog.for_value_change(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.TASK_MOVED,
            description=f"Moved task '{task.title}' from '{source.title}' to '{target.title}'",
            old_value=f"{source.id}:{old_order}",
            new_value=f"{target.id}:{moved.order}",
            task_id=task.id,
            column_id=target.id
        ))

        return task_to_response_dto(moved)


class ReorderTasksUseCase(TaskUseCaseMixin, AuthorizedUseCase, UpdateUseCase[ReorderTasksRequestDTO, List[TaskResponseDTO]]):
    """
    Use case for a full reorder of a column's tasks.
    The request lists every task of the column once; they are renumbered 0..N-1.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        column_repository: ColumnRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.task_repository = task_repository
        self.column_repository = column_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: ReorderTasksRequestDTO) -> List[TaskResponseDTO]:
        column, board = await self._load_column_and_board(request.column_id)
        self._require_board_member(board)

        tasks = await self.task_repository.reorder_tasks_in_column(column.id, request.task_ids)

        await self.activity_log_repository.add(ActivityLog.for_column(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.TASKS_REORDERED,
            description=f"Reordered {len(tasks)} tasks in '{column.title}'",
            column_id=column.id
        ))

        return [task_to_response_dto(task) for task in tasks]


class DeleteTaskUseCase(TaskUseCaseMixin, AuthorizedUseCase, DeleteUseCase[TaskIdRequestDTO, bool]):
    """
    Use case for deleting a task.
    The remaining tasks keep their orders; the gap stays until a reorder.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        column_repository: ColumnRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.task_repository = task_repository
        self.column_repository = column_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: TaskIdRequestDTO) -> bool:
        task = await get_task_or_raise(self.task_repository, request.id)
        column, board = await self._load_column_and_board(task.column_id)
        self._require_board_member(board)

        await self.task_repository.delete(task.id)

        await self.activity_log_repository.add(ActivityLog.for_column(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.TASK_DELETED,
            description=f"Deleted task '{task.title}' from '{column.title}'",
            column_id=column.id
        ))
        logger.info("Deleted task %s from column %s", task.id, column.id)

        return True
