"""
Label use cases.
"""

from typing import List, Optional

from taskboard.domain.models.label import Label
from taskboard.domain.models.activity_log import ActivityLog, ActivityType
from taskboard.domain.models.base import (
    EntityNotFoundError,
    DuplicateEntityError,
    BusinessRuleViolation
)
from taskboard.domain.repositories.board_repository import BoardRepository
from taskboard.domain.repositories.label_repository import LabelRepository
from taskboard.domain.repositories.task_repository import TaskRepository
from taskboard.domain.repositories.activity_log_repository import ActivityLogRepository
from taskboard.domain.repositories.transaction_manager import TransactionManager
from taskboard.application.dto.label_dto import (
    CreateLabelRequestDTO,
    UpdateLabelRequestDTO,
    LabelIdRequestDTO,
    ListLabelsRequestDTO,
    TaskLabelRequestDTO,
    LabelResponseDTO
)
from .base_use_case import (
    AuthorizedUseCase,
    CreateUseCase,
    UpdateUseCase,
    DeleteUseCase,
    QueryUseCase
)
from .column_use_cases import get_board_or_raise


def label_to_response_dto(label: Label) -> LabelResponseDTO:
    """Convert Label domain model to response DTO."""
    return LabelResponseDTO(
        id=label.id,
        board_id=label.board_id,
        name=label.name,
        color=label.color,
        text_color=label.contrast_text_color,
        task_count=label.task_count,
        created_at=label.created_at,
        updated_at=label.updated_at
    )


async def get_label_or_raise(label_repository: LabelRepository, label_id: str) -> Label:
    label = await label_repository.find_by_id(label_id)
    if not label:
        raise EntityNotFoundError("Label", label_id)
    return label


class CreateLabelUseCase(AuthorizedUseCase, CreateUseCase[CreateLabelRequestDTO, LabelResponseDTO]):
    """Use case for adding a label to a board. Names are unique per board."""

    def __init__(
        self,
        label_repository: LabelRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None,
        default_color: Optional[str] = None
    ):
        super().__init__(transaction_manager)
        self.label_repository = label_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository
        self.default_color = default_color

    async def _execute_command_logic(self, request: CreateLabelRequestDTO) -> LabelResponseDTO:
        board = await get_board_or_raise(self.board_repository, request.board_id)
        self._require_board_member(board)

        if await self.label_repository.find_by_name(board.id, request.name):
            raise DuplicateEntityError("Label", "name", request.name)

        label = Label.create(request.name, board.id, request.color or self.default_color)
        await self.label_repository.save(label)

        await self.activity_log_repository.add(ActivityLog.create(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.LABEL_ADDED,
            description=f"Created label '{label.name}'"
        ))

        return label_to_response_dto(label)


class ListLabelsUseCase(QueryUseCase[ListLabelsRequestDTO, List[LabelResponseDTO]]):
    """Use case for listing a board's labels."""

    def __init__(self, label_repository: LabelRepository, board_repository: BoardRepository):
        super().__init__()
        self.label_repository = label_repository
        self.board_repository = board_repository

    async def _execute_business_logic(self, request: ListLabelsRequestDTO) -> List[LabelResponseDTO]:
        await get_board_or_raise(self.board_repository, request.board_id)
        labels = await self.label_repository.find_by_board(request.board_id)
        return [label_to_response_dto(label) for label in labels]


class UpdateLabelUseCase(AuthorizedUseCase, UpdateUseCase[UpdateLabelRequestDTO, LabelResponseDTO]):
    """Use case for renaming or recoloring a label."""

    def __init__(
        self,
        label_repository: LabelRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.label_repository = label_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: UpdateLabelRequestDTO) -> LabelResponseDTO:
        label = await get_label_or_raise(self.label_repository, request.id)
        board = await get_board_or_raise(self.board_repository, label.board_id)
        self._require_board_member(board)

        old_name = label.name
        if request.name is not None and request.name != label.name:
            existing = await self.label_repository.find_by_name(board.id, request.name)
            if existing and existing.id != label.id:
                raise DuplicateEntityError("Label", "name", request.name)
            label.update_name(request.name)
        if request.color is not None:
            label.update_color(request.color)

        await self.label_repository.save(label)

        await self.activity_log_repository.add(ActivityLog.for_value_change(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.LABEL_UPDATED,
            description=f"Updated label '{label.name}'",
            old_value=old_name,
            new_value=label.name
        ))

        return label_to_response_dto(label)


class DeleteLabelUseCase(AuthorizedUseCase, DeleteUseCase[LabelIdRequestDTO, bool]):
    """Use case for deleting a label; it is detached from every task."""

    def __init__(
        self,
        label_repository: LabelRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.label_repository = label_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: LabelIdRequestDTO) -> bool:
        label = await get_label_or_raise(self.label_repository, request.id)
        board = await get_board_or_raise(self.board_repository, label.board_id)
        self._require_board_member(board)

        await self.label_repository.delete(label.id)

        await self.activity_log_repository.add(ActivityLog.create(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.LABEL_REMOVED,
            description=f"Deleted label '{label.name}'"
        ))

        return True


class AttachLabelUseCase(AuthorizedUseCase, UpdateUseCase[TaskLabelRequestDTO, List[LabelResponseDTO]]):
    """
    Use case for attaching a label to a task.
    The label must belong to the board the task is on.
    """

    def __init__(
        self,
        label_repository: LabelRepository,
        task_repository: TaskRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.label_repository = label_repository
        self.task_repository = task_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: TaskLabelRequestDTO) -> List[LabelResponseDTO]:
        task = await self.task_repository.find_by_id(request.task_id)
        if not task:
            raise EntityNotFoundError("Task", request.task_id)
        label = await get_label_or_raise(self.label_repository, request.label_id)

        board_id = await self.task_repository.get_board_id(task.id)
        if label.board_id != board_id:
            raise BusinessRuleViolation("Label belongs to a different board than the task")

        board = await get_board_or_raise(self.board_repository, board_id)
        self._require_board_member(board)

        task.add_label(label.id)
        await self.label_repository.attach_to_task(task.id, label.id)

        await self.activity_log_repository.add(ActivityLog.for_task(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.LABEL_ADDED,
            description=f"Added label '{label.name}' to '{task.title}'",
            task_id=task.id,
            column_id=task.column_id
        ))

        labels = await self.label_repository.find_by_task(task.id)
        return [label_to_response_dto(item) for item in labels]


class DetachLabelUseCase(AuthorizedUseCase, UpdateUseCase[TaskLabelRequestDTO, List[LabelResponseDTO]]):
    """Use case for removing a label from a task."""

    def __init__(
        self,
        label_repository: LabelRepository,
        task_repository: TaskRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.label_repository = label_repository
        self.task_repository = task_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: TaskLabelRequestDTO) -> List[LabelResponseDTO]:
        task = await self.task_repository.find_by_id(request.task_id)
        if not task:
            raise EntityNotFoundError("Task", request.task_id)
        label = await get_label_or_raise(self.label_repository, request.label_id)

        board = await get_board_or_raise(
            self.board_repository, await self.task_repository.get_board_id(task.id)
        )
        self._require_board_member(board)

        task.remove_label(label.id)
        await self.label_repository.detach_from_task(task.id, label.id)

        await self.activity_log_repository.add(ActivityLog.for_task(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.LABEL_REMOVED,
            description=f"Removed label '{label.name}' from '{task.title}'",
            task_id=task.id,
            column_id=task.column_id
        ))

        labels = await self.label_repository.find_by_task(task.id)
        return [label_to_response_dto(item) for item in labels]
