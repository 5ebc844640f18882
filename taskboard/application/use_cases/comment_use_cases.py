"""
Comment and attachment use cases.
"""

from typing import List, Optional

from taskboard.domain.models.comment import Comment
from taskboard.domain.models.attachment import Attachment
from taskboard.domain.models.activity_log import ActivityLog, ActivityType
from taskboard.domain.models.base import (
    EntityNotFoundError,
    BusinessRuleViolation
)
from taskboard.domain.repositories.board_repository import BoardRepository
from taskboard.domain.repositories.task_repository import TaskRepository
from taskboard.domain.repositories.comment_repository import CommentRepository, AttachmentRepository
from taskboard.domain.repositories.activity_log_repository import ActivityLogRepository
from taskboard.domain.repositories.transaction_manager import TransactionManager
from taskboard.application.dto.comment_dto import (
    AddCommentRequestDTO,
    UpdateCommentRequestDTO,
    CommentIdRequestDTO,
    TaskCommentsRequestDTO,
    AddAttachmentRequestDTO,
    AttachmentIdRequestDTO,
    CommentResponseDTO,
    AttachmentResponseDTO
)
from .base_use_case import (
    AuthorizedUseCase,
    CreateUseCase,
    UpdateUseCase,
    DeleteUseCase,
    QueryUseCase
)
from .column_use_cases import get_board_or_raise


def comment_to_response_dto(comment: Comment) -> CommentResponseDTO:
    """Convert Comment domain model to response DTO."""
    return CommentResponseDTO(
        id=comment.id,
        task_id=comment.task_id,
        user_id=comment.user_id,
        content=comment.content,
        is_edited=comment.is_edited,
        created_at=comment.created_at,
        updated_at=comment.updated_at
    )


def attachment_to_response_dto(attachment: Attachment) -> AttachmentResponseDTO:
    """Convert Attachment domain model to response DTO."""
    return AttachmentResponseDTO(
        id=attachment.id,
        task_id=attachment.task_id,
        file_name=attachment.file_name,
        file_url=attachment.file_url,
        file_size=attachment.file_size,
        formatted_file_size=attachment.formatted_file_size,
        mime_type=attachment.mime_type,
        icon_name=attachment.icon_name,
        uploaded_by=attachment.uploaded_by,
        created_at=attachment.created_at,
        updated_at=attachment.updated_at
    )


class TaskBoardAccessMixin:
    """Resolves the board a task lives on so membership can be checked."""

    task_repository: TaskRepository
    board_repository: BoardRepository

    async def _board_of_task(self, task_id: str):
        task = await self.task_repository.find_by_id(task_id)
        if not task:
            raise EntityNotFoundError("Task", task_id)
        board = await get_board_or_raise(
            self.board_repository, await self.task_repository.get_board_id(task.id)
        )
        return task, board


class AddCommentUseCase(TaskBoardAccessMixin, AuthorizedUseCase, CreateUseCase[AddCommentRequestDTO, CommentResponseDTO]):
    """Use case for commenting on a task. Board members only."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        task_repository: TaskRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.comment_repository = comment_repository
        self.task_repository = task_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: AddCommentRequestDTO) -> CommentResponseDTO:
        task, board = await self._board_of_task(request.task_id)
        self._require_board_member(board)

        comment = Comment.create(request.content, task.id, self.current_user_id)
        await self.comment_repository.save(comment)

        await self.activity_log_repository.add(ActivityLog.for_task(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.COMMENT_ADDED,
            description=f"Commented on '{task.title}'",
            task_id=task.id,
            column_id=task.column_id
        ))

        return comment_to_response_dto(comment)


class ListCommentsUseCase(QueryUseCase[TaskCommentsRequestDTO, List[CommentResponseDTO]]):
    """Use case for listing a task's comments, oldest first. Deleted ones are hidden."""

    def __init__(self, comment_repository: CommentRepository, task_repository: TaskRepository):
        super().__init__()
        self.comment_repository = comment_repository
        self.task_repository = task_repository

    async def _execute_business_logic(self, request: TaskCommentsRequestDTO) -> List[CommentResponseDTO]:
        if not await self.task_repository.exists(request.task_id):
            raise EntityNotFoundError("Task", request.task_id)
        comments = await self.comment_repository.find_by_task(request.task_id)
        return [comment_to_response_dto(comment) for comment in comments]


class UpdateCommentUseCase(TaskBoardAccessMixin, AuthorizedUseCase, UpdateUseCase[UpdateCommentRequestDTO, CommentResponseDTO]):
    """Use case for editing a comment. Only its author, within the edit window."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        task_repository: TaskRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.comment_repository = comment_repository
        self.task_repository = task_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: UpdateCommentRequestDTO) -> CommentResponseDTO:
        comment = await self.comment_repository.find_by_id(request.id)
        if not comment or comment.is_deleted:
            raise EntityNotFoundError("Comment", request.id)

        if not comment.can_be_edited_by(self.current_user_id):
            raise BusinessRuleViolation("Insufficient permissions: comment can no longer be edited by this user")

        task, board = await self._board_of_task(comment.task_id)

        comment.update_content(request.content)
        await self.comment_repository.save(comment)

        await self.activity_log_repository.add(ActivityLog.for_task(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.COMMENT_UPDATED,
            description=f"Edited a comment on '{task.title}'",
            task_id=task.id,
            column_id=task.column_id
        ))

        return comment_to_response_dto(comment)


class DeleteCommentUseCase(TaskBoardAccessMixin, AuthorizedUseCase, DeleteUseCase[CommentIdRequestDTO, bool]):
    """Use case for soft-deleting a comment. Only its author may do this."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        task_repository: TaskRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.comment_repository = comment_repository
        self.task_repository = task_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: CommentIdRequestDTO) -> bool:
        comment = await self.comment_repository.find_by_id(request.id)
        if not comment or comment.is_deleted:
            raise EntityNotFoundError("Comment", request.id)

        if not comment.can_be_deleted_by(self.current_user_id):
            raise BusinessRuleViolation("Insufficient permissions: only the author can delete a comment")

        task, board = await self._board_of_task(comment.task_id)

        comment.delete()
        await self.comment_repository.save(comment)

        await self.activity_log_repository.add(ActivityLog.for_task(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.COMMENT_DELETED,
            description=f"Deleted a comment on '{task.title}'",
            task_id=task.id,
            column_id=task.column_id
        ))

        return True


class AddAttachmentUseCase(TaskBoardAccessMixin, AuthorizedUseCase, CreateUseCase[AddAttachmentRequestDTO, AttachmentResponseDTO]):
    """Use case for registering an uploaded file on a task."""

    def __init__(
        self,
        attachment_repository: AttachmentRepository,
        task_repository: TaskRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.attachment_repository = attachment_repository
        self.task_repository = task_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: AddAttachmentRequestDTO) -> AttachmentResponseDTO:
        task, board = await self._board_of_task(request.task_id)
        self._require_board_member(board)

        attachment = Attachment(
            file_name=request.file_name,
            file_url=request.file_url,
            file_size=request.file_size,
            task_id=task.id,
            uploaded_by=self.current_user_id,
            mime_type=request.mime_type
        )
        await self.attachment_repository.save(attachment)

        await self.activity_log_repository.add(ActivityLog.for_task(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.ATTACHMENT_ADDED,
            description=f"Attached '{attachment.file_name}' to '{task.title}'",
            task_id=task.id,
            column_id=task.column_id
        ))

        return attachment_to_response_dto(attachment)


class ListAttachmentsUseCase(QueryUseCase[TaskCommentsRequestDTO, List[AttachmentResponseDTO]]):
    """Use case for listing a task's attachments."""

    def __init__(self, attachment_repository: AttachmentRepository, task_repository: TaskRepository):
        super().__init__()
        self.attachment_repository = attachment_repository
        self.task_repository = task_repository

    async def _execute_business_logic(self, request: TaskCommentsRequestDTO) -> List[AttachmentResponseDTO]:
        if not await self.task_repository.exists(request.task_id):
            raise EntityNotFoundError("Task", request.task_id)
        attachments = await self.attachment_repository.find_by_task(request.task_id)
        return [attachment_to_response_dto(item) for item in attachments]


class DeleteAttachmentUseCase(TaskBoardAccessMixin, AuthorizedUseCase, DeleteUseCase[AttachmentIdRequestDTO, bool]):
    """Use case for removing an attachment. Only the uploader may do this."""

    def __init__(
        self,
        attachment_repository: AttachmentRepository,
        task_repository: TaskRepository,
        board_repository: BoardRepository,
        activity_log_repository: ActivityLogRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.attachment_repository = attachment_repository
        self.task_repository = task_repository
        self.board_repository = board_repository
        self.activity_log_repository = activity_log_repository

    async def _execute_command_logic(self, request: AttachmentIdRequestDTO) -> bool:
        attachment = await self.attachment_repository.find_by_id(request.id)
        if not attachment:
            raise EntityNotFoundError("Attachment", request.id)

        if not attachment.can_be_deleted_by(self.current_user_id):
            raise BusinessRuleViolation("Insufficient permissions: only the uploader can remove an attachment")

        task, board = await self._board_of_task(attachment.task_id)

        await self.attachment_repository.delete(attachment.id)

        await self.activity_log_repository.add(ActivityLog.for_task(
            board_id=board.id,
            user_id=self.current_user_id,
            activity_type=ActivityType.ATTACHMENT_DELETED,
            description=f"Removed '{attachment.file_name}' from '{task.title}'",
            task_id=task.id,
            column_id=task.column_id
        ))

        return True
