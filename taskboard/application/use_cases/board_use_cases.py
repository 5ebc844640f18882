"""
Board use cases.
Creating and managing boards, their membership and their activity feed.
"""

import logging
from typing import List, Optional

from taskboard.domain.models.board import Board, BoardMember, BoardRole
from taskboard.domain.models.column import Column
from taskboard.domain.models.label import Label
from taskboard.domain.models.activity_log import ActivityLog, ActivityType
from taskboard.domain.models.base import (
    EntityNotFoundError,
    BusinessRuleViolation
)
from taskboard.domain.repositories.board_repository import BoardRepository
from taskboard.domain.repositories.column_repository import ColumnRepository
from taskboard.domain.repositories.label_repository import LabelRepository
from taskboard.domain.repositories.user_repository import UserRepository
from taskboard.domain.repositories.activity_log_repository import ActivityLogRepository
from taskboard.domain.repositories.transaction_manager import TransactionManager
from taskboard.application.dto.board_dto import (
    CreateBoardRequestDTO,
    UpdateBoardRequestDTO,
    BoardIdRequestDTO,
    AddMemberRequestDTO,
    ChangeMemberRoleRequestDTO,
    RemoveMemberRequestDTO,
    BoardActivityRequestDTO,
    BoardResponseDTO,
    BoardDetailsResponseDTO,
    BoardMemberResponseDTO,
    ActivityLogResponseDTO
)
from .base_use_case import (
    AuthorizedUseCase,
    CreateUseCase,
    UpdateUseCase,
    DeleteUseCase,
    QueryUseCase
)
from .column_use_cases import column_to_response_dto, get_board_or_raise
from .label_use_cases import label_to_response_dto


logger = logging.getLogger(__name__)


def board_to_response_dto(board: Board) -> BoardResponseDTO:
    """Convert Board domain model to response DTO."""
    return BoardResponseDTO(
        id=board.id,
        title=board.title,
        description=board.description,
        color=board.color,
        is_favorite=board.is_favorite,
        owner_id=board.owner_id,
        column_count=len(board.column_ids),
        member_count=len(board.member_ids),
        created_at=board.created_at,
        updated_at=board.updated_at
    )


def member_to_response_dto(member: BoardMember, user=None) -> BoardMemberResponseDTO:
    return BoardMemberResponseDTO(
        board_id=member.board_id,
        user_id=member.user_id,
        role=member.role,
        joined_at=member.joined_at,
        user_name=user.user_name if user else None,
        full_name=user.full_name if user else None
    )


def activity_to_response_dto(entry: ActivityLog) -> ActivityLogResponseDTO:
    return ActivityLogResponseDTO(
        id=entry.id,
        board_id=entry.board_id,
        user_id=entry.user_id,
        activity_type=entry.activity_type.value,
        description=entry.description,
        related_task_id=entry.related_task_id,
        related_column_id=entry.related_column_id,
        related_user_id=entry.related_user_id,
        old_value=entry.old_value,
        new_value=entry.new_value,
        created_at=entry.created_at
    )


class CreateBoardUseCase(AuthorizedUseCase, CreateUseCase[CreateBoardRequestDTO, BoardResponseDTO]):
    """
    Use case for creating a board owned by the acting user.

    The new board can be seeded with default columns (ordered 0..N-1) and
    the default label set.
    """

    def __init__(
        self,
        board_repository: BoardRepository,
        column_repository: ColumnRepository,
        label_repository: LabelRepository,
        user_repository: UserRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None,
        default_color: Optional[str] = None,
        default_column_titles: Optional[List[str]] = None,
        create_default_labels: bool = False
    ):
        super().__init__(transaction_manager)
        self.board_repository = board_repository
        self.column_repository = column_repository
        self.label_repository = label_repository
        self.user_repository = user_repository
        self.activity_log_repository = activity_log_repository
        self.default_color = default_color
        self.default_column_titles = default_column_titles or []
        self.create_default_labels = create_default_labels

    async def _execute_command_logic(self, request: CreateBoardRequestDTO) -> BoardResponseDTO:
        owner = await self.user_repository.find_by_id(self.current_user_id)
        if not owner:
            raise EntityNotFoundError("User", self.current_user_id)

        board = Board.create(
            title=request.title,
            owner_id=owner.id,
            description=request.description,
            color=request.color or self.default_color
        )
        await self.board_repository.save(board)
        await self.board_repository.add_member(board.id, owner.id, BoardRole.OWNER)

        for order, title in enumerate(self.default_column_titles):
            column = Column.create(title=title, board_id=board.id, order=order)
            await self.column_repository.save(column)
            board.add_column(column.id)

        if self.create_default_labels:
            for label in Label.create_default_labels(board.id):
                await self.label_repository.save(label)
                board.add_label(label.id)

        await self.activity_log_repository.add(ActivityLog.create(
            board_id=board.id,
            user_id=owner.id,
            activity_type=ActivityType.BOARD_CREATED,
            description=f"Created board '{board.title}'"
        ))
        logger.info("Created board %s for user %s", board.id, owner.id)

        return board_to_response_dto(board)


class GetBoardDetailsUseCase(QueryUseCase[BoardIdRequestDTO, BoardDetailsResponseDTO]):
    """Use case for reading a board with its ordered columns, labels and members."""

    def __init__(
        self,
        board_repository: BoardRepository,
        column_repository: ColumnRepository,
        label_repository: LabelRepository,
        user_repository: UserRepository
    ):
        super().__init__()
        self.board_repository = board_repository
        self.column_repository = column_repository
        self.label_repository = label_repository
        self.user_repository = user_repository

    async def _execute_business_logic(self, request: BoardIdRequestDTO) -> BoardDetailsResponseDTO:
        board = await get_board_or_raise(self.board_repository, request.id)

        columns = await self.column_repository.find_by_board(board.id)
        labels = await self.label_repository.find_by_board(board.id)
        members = await self.board_repository.get_members(board.id)
        users = {
            user.id: user
            for user in await self.user_repository.find_by_ids([m.user_id for m in members])
        }

        summary = board_to_response_dto(board)
        return BoardDetailsResponseDTO(
            **summary.model_dump(),
            columns=[column_to_response_dto(column) for column in columns],
            labels=[label_to_response_dto(label) for label in labels],
            members=[member_to_response_dto(m, users.get(m.user_id)) for m in members]
        )


class ListUserBoardsUseCase(AuthorizedUseCase, QueryUseCase[None, List[BoardResponseDTO]]):
    """Use case for listing the boards the acting user owns or belongs to."""

    def __init__(self, board_repository: BoardRepository, favorites_only: bool = False):
        super().__init__()
        self.board_repository = board_repository
        self.favorites_only = favorites_only

    async def _execute_business_logic(self, request: None) -> List[BoardResponseDTO]:
        if self.favorites_only:
            boards = await self.board_repository.find_favorite_boards(self.current_user_id)
        else:
            boards = await self.board_repository.find_user_boards(self.current_user_id)
        return [board_to_response_dto(board) for board in boards]


class UpdateBoardUseCase(AuthorizedUseCase, UpdateUseCase[UpdateBoardRequestDTO, BoardResponseDTO]):
    """Use case for editing a board's title, description or color."""

    def __init__(
        self,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: UpdateBoardRequestDTO) -> BoardResponseDTO:
        board = await get_board_or_raise(self.board_repository, request.id)
        self._require_board_member(board)

        old_title = board.title
        if request.title is not None:
            board.update_title(request.title)
        if request.description is not None:
            board.update_description(request.description)
        if request.color is not None:
            board.update_color(request.color)

        await self.board_repository.save(board)

        await self.activity_log_repository.add(ActivityLog.for_value_change(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.BOARD_UPDATED,
            description=f"Updated board '{board.title}'",
            old_value=old_title,
            new_value=board.title
        ))

        return board_to_response_dto(board)


class ToggleFavoriteUseCase(AuthorizedUseCase, UpdateUseCase[BoardIdRequestDTO, BoardResponseDTO]):
    """Use case for flipping a board's favorite flag."""

    def __init__(
        self,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: BoardIdRequestDTO) -> BoardResponseDTO:
        board = await get_board_or_raise(self.board_repository, request.id)
        self._require_board_member(board)

        board.toggle_favorite()
        await self.board_repository.save(board)

        await self.activity_log_repository.add(ActivityLog.for_value_change(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.BOARD_UPDATED,
            description=f"Marked board '{board.title}' as " + ("favorite" if board.is_favorite else "not favorite"),
            old_value=not board.is_favorite,
            new_value=board.is_favorite
        ))

        return board_to_response_dto(board)


class DeleteBoardUseCase(AuthorizedUseCase, DeleteUseCase[BoardIdRequestDTO, bool]):
    """Use case for deleting a board and everything on it. Owner only."""

    def __init__(
        self,
        board_repository: BoardRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.board_repository = board_repository

    async def _execute_command_logic(self, request: BoardIdRequestDTO) -> bool:
        board = await get_board_or_raise(self.board_repository, request.id)
        self._require_board_owner(board)

        await self.board_repository.delete(board.id)
        # The activity feed goes with the board, so only the log records it.
        logger.info("Board %s deleted by %s", board.id, self.current_user_id)
        return True


class MemberManagerMixin:
    """Membership changes are reserved for the owner and admins."""

    board_repository: BoardRepository
    current_user_id: Optional[str]

    async def _require_member_manager(self, board: Board) -> None:
        if board.owner_id == self.current_user_id:
            return
        acting = await self.board_repository.get_member(board.id, self.current_user_id)
        if not acting or not acting.can_manage_members:
            raise BusinessRuleViolation("Insufficient permissions: cannot manage board members")


class AddMemberUseCase(MemberManagerMixin, AuthorizedUseCase, UpdateUseCase[AddMemberRequestDTO, BoardMemberResponseDTO]):
    """Use case for adding a user to a board. Owners and admins may do this."""

    def __init__(
        self,
        board_repository: BoardRepository,
        user_repository: UserRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.board_repository = board_repository
        self.user_repository = user_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: AddMemberRequestDTO) -> BoardMemberResponseDTO:
        board = await get_board_or_raise(self.board_repository, request.board_id)
        await self._require_member_manager(board)

        user = await self.user_repository.find_by_id(request.user_id)
        if not user:
            raise EntityNotFoundError("User", request.user_id)

        board.add_member(user.id)
        member = await self.board_repository.add_member(board.id, user.id, BoardRole(request.role))

        await self.activity_log_repository.add(ActivityLog.create(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.MEMBER_ADDED,
            description=f"Added {user.display_name} to the board",
            related_user_id=user.id
        ))

        return member_to_response_dto(member, user)


class ChangeMemberRoleUseCase(MemberManagerMixin, AuthorizedUseCase, UpdateUseCase[ChangeMemberRoleRequestDTO, BoardMemberResponseDTO]):
    """Use case for promoting a member to admin or back. The owner's role is fixed."""

    def __init__(
        self,
        board_repository: BoardRepository,
        user_repository: UserRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.board_repository = board_repository
        self.user_repository = user_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: ChangeMemberRoleRequestDTO) -> BoardMemberResponseDTO:
        board = await get_board_or_raise(self.board_repository, request.board_id)
        await self._require_member_manager(board)

        member = await self.board_repository.get_member(board.id, request.user_id)
        if not member:
            raise EntityNotFoundError("BoardMember", request.user_id)

        old_role = member.role
        member.change_role(BoardRole(request.role))
        await self.board_repository.update_member(member)

        await self.activity_log_repository.add(ActivityLog(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.MEMBER_ROLE_CHANGED,
            description="Changed a member's role",
            related_user_id=member.user_id,
            old_value=BoardRole(old_role).value,
            new_value=member.role.value
        ))

        user = await self.user_repository.find_by_id(member.user_id)
        return member_to_response_dto(member, user)


class RemoveMemberUseCase(AuthorizedUseCase, DeleteUseCase[RemoveMemberRequestDTO, bool]):
    """
    Use case for removing a member. Owners and admins may remove anyone but
    the owner; any member may remove themselves.
    """

    def __init__(
        self,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: RemoveMemberRequestDTO) -> bool:
        board = await get_board_or_raise(self.board_repository, request.board_id)

        if request.user_id != self.current_user_id and board.owner_id != self.current_user_id:
            acting = await self.board_repository.get_member(board.id, self.current_user_id)
            if not acting or not acting.can_manage_members:
                raise BusinessRuleViolation("Insufficient permissions: cannot manage board members")

        board.remove_member(request.user_id)
        await self.board_repository.remove_member(board.id, request.user_id)

        await self.activity_log_repository.add(ActivityLog.create(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.MEMBER_REMOVED,
            description="Removed a member from the board",
            related_user_id=request.user_id
        ))

        return True


class GetBoardActivityUseCase(QueryUseCase[BoardActivityRequestDTO, List[ActivityLogResponseDTO]]):
    """Use case for reading a board's activity feed, newest first."""

    def __init__(
        self,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        default_limit: int = 50
    ):
        super().__init__()
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository
        self.default_limit = default_limit

    async def _execute_business_logic(self, request: BoardActivityRequestDTO) -> List[ActivityLogResponseDTO]:
        board = await get_board_or_raise(self.board_repository, request.board_id)
        entries = await self.activity_log_repository.find_by_board(
            board.id, limit=request.limit or self.default_limit
        )
        return [activity_to_response_dto(entry) for entry in entries]
