"""
Column use cases.
Creating, editing, deleting and ordering the columns of a board.
"""

import logging
from typing import List, Optional

from taskboard.domain.models.board import Board
from taskboard.domain.models.column import Column
from taskboard.domain.models.activity_log import ActivityLog, ActivityType
from taskboard.domain.models.base import EntityNotFoundError
from taskboard.domain.repositories.board_repository import BoardRepository
from taskboard.domain.repositories.column_repository import ColumnRepository
from taskboard.domain.repositories.activity_log_repository import ActivityLogRepository
from taskboard.domain.repositories.transaction_manager import TransactionManager
from taskboard.application.dto.column_dto import (
    CreateColumnRequestDTO,
    UpdateColumnRequestDTO,
    ColumnIdRequestDTO,
    ListColumnsRequestDTO,
    ReorderColumnsRequestDTO,
    ColumnResponseDTO
)
from .base_use_case import (
    AuthorizedUseCase,
    AppendUseCase,
    UpdateUseCase,
    DeleteUseCase,
    QueryUseCase
)


logger = logging.getLogger(__name__)


def column_to_response_dto(column: Column) -> ColumnResponseDTO:
    """Convert Column domain model to response DTO."""
    return ColumnResponseDTO(
        id=column.id,
        board_id=column.board_id,
        title=column.title,
        order=column.order,
        wip_limit=column.wip_limit,
        task_count=column.task_count,
        has_reached_wip_limit=column.has_reached_wip_limit(),
        created_at=column.created_at,
        updated_at=column.updated_at
    )


async def get_board_or_raise(board_repository: BoardRepository, board_id: str) -> Board:
    board = await board_repository.find_by_id(board_id)
    if not board:
        raise EntityNotFoundError("Board", board_id)
    return board


async def get_column_or_raise(column_repository: ColumnRepository, column_id: str) -> Column:
    column = await column_repository.find_by_id(column_id)
    if not column:
        raise EntityNotFoundError("Column", column_id)
    return column


class CreateColumnUseCase(AuthorizedUseCase, AppendUseCase[CreateColumnRequestDTO, ColumnResponseDTO]):
    """
    Use case for adding a column to a board.
    Without an explicit order the column goes after the last one.
    """

    def __init__(
        self,
        column_repository: ColumnRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None,
        append_retries: int = 0
    ):
        super().__init__(transaction_manager, append_retries)
        self.column_repository = column_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: CreateColumnRequestDTO) -> ColumnResponseDTO:
        board = await get_board_or_raise(self.board_repository, request.board_id)
        self._require_board_member(board)

        if request.order is None:
            order = await self.column_repository.get_next_order(board.id)
        else:
            order = request.order

        column = Column.create(
            title=request.title,
            board_id=board.id,
            order=order,
            wip_limit=request.wip_limit
        )
        await self.column_repository.save(column)

        await self.activity_log_repository.add(ActivityLog.for_column(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.COLUMN_CREATED,
            description=f"Created column '{column.title}'",
            column_id=column.id
        ))
        logger.info("Created column %s on board %s at order %d", column.id, board.id, order)

        return column_to_response_dto(column)


class ListColumnsUseCase(QueryUseCase[ListColumnsRequestDTO, List[ColumnResponseDTO]]):
    """Use case for listing a board's columns in order."""

    def __init__(self, column_repository: ColumnRepository, board_repository: BoardRepository):
        super().__init__()
        self.column_repository = column_repository
        self.board_repository = board_repository

    async def _execute_business_logic(self, request: ListColumnsRequestDTO) -> List[ColumnResponseDTO]:
        await get_board_or_raise(self.board_repository, request.board_id)
        columns = await self.column_repository.find_by_board(request.board_id)
        return [column_to_response_dto(column) for column in columns]


class GetColumnUseCase(QueryUseCase[ColumnIdRequestDTO, ColumnResponseDTO]):
    """Use case for reading a column."""

    def __init__(self, column_repository: ColumnRepository):
        super().__init__()
        self.column_repository = column_repository

    async def _execute_business_logic(self, request: ColumnIdRequestDTO) -> ColumnResponseDTO:
        column = await get_column_or_raise(self.column_repository, request.id)
        return column_to_response_dto(column)


class UpdateColumnUseCase(AuthorizedUseCase, UpdateUseCase[UpdateColumnRequestDTO, ColumnResponseDTO]):
    """Use case for renaming a column or changing its WIP limit."""

    def __init__(
        self,
        column_repository: ColumnRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.column_repository = column_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: UpdateColumnRequestDTO) -> ColumnResponseDTO:
        column = await get_column_or_raise(self.column_repository, request.id)
        board = await get_board_or_raise(self.board_repository, column.board_id)
        self._require_board_member(board)

        old_title = column.title
        if request.title is not None:
            column.update_title(request.title)
        if request.clear_wip_limit:
            column.update_wip_limit(None)
        elif request.wip_limit is not None:
            column.update_wip_limit(request.wip_limit)

        await self.column_repository.save(column)

        await self.activity_log_repository.add(ActivityLog.for_value_change(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.COLUMN_UPDATED,
            description=f"Updated column '{column.title}'",
            old_value=old_title,
            new_value=column.title,
            column_id=column.id
        ))

        return column_to_response_dto(column)


class DeleteColumnUseCase(AuthorizedUseCase, DeleteUseCase[ColumnIdRequestDTO, bool]):
    """
    Use case for deleting a column together with its tasks.
    The remaining columns keep their orders; the gap stays until a reorder.
    """

    def __init__(
        self,
        column_repository: ColumnRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.column_repository = column_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: ColumnIdRequestDTO) -> bool:
        column = await get_column_or_raise(self.column_repository, request.id)
        board = await get_board_or_raise(self.board_repository, column.board_id)
        self._require_board_member(board)

        await self.column_repository.delete(column.id)

        await self.activity_log_repository.add(ActivityLog.for_column(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.COLUMN_DELETED,
            description=f"Deleted column '{column.title}'",
            column_id=column.id
        ))
        logger.info("Deleted column %s from board %s", column.id, board.id)

        return True


class ReorderColumnsUseCase(AuthorizedUseCase, UpdateUseCase[ReorderColumnsRequestDTO, List[ColumnResponseDTO]]):
    """
    Use case for a full reorder of a board's columns.
    The request lists every column once; they are renumbered 0..N-1.
    """

    def __init__(
        self,
        column_repository: ColumnRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.column_repository = column_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: ReorderColumnsRequestDTO) -> List[ColumnResponseDTO]:
        board = await get_board_or_raise(self.board_repository, request.board_id)
        self._require_board_member(board)

        columns = await self.column_repository.reorder_columns(board.id, request.column_ids)

        await self.activity_log_repository.add(ActivityLog.for_value_change(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.COLUMNS_REORDERED,
            description=f"Reordered {len(columns)} columns",
            old_value=None,
            new_value=", ".join(column.title for column in columns)
        ))

        return [column_to_response_dto(column) for column in columns]


class CompactColumnsUseCase(AuthorizedUseCase, UpdateUseCase[ListColumnsRequestDTO, List[ColumnResponseDTO]]):
    """Use case for closing gaps left by deleted columns."""

    def __init__(
        self,
        column_repository: ColumnRepository,
        board_repository: BoardRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.column_repository = column_repository
        self.board_repository = board_repository

    async def _execute_command_logic(self, request: ListColumnsRequestDTO) -> List[ColumnResponseDTO]:
        board = await get_board_or_raise(self.board_repository, request.board_id)
        self._require_board_member(board)

        columns = await self.column_repository.compact_columns(board.id)
        return [column_to_response_dto(column) for column in columns]
