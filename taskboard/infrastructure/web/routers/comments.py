"""
Comment and attachment router.
Comments and attachments are created under their task; these routes address them by ID.
"""

from fastapi import APIRouter, status

from taskboard.application.use_cases.comment_use_cases import (
    UpdateCommentUseCase,
    DeleteCommentUseCase,
    DeleteAttachmentUseCase
)
from taskboard.application.dto.comment_dto import (
    CommentPayloadDTO,
    UpdateCommentRequestDTO,
    CommentIdRequestDTO,
    AttachmentIdRequestDTO,
    CommentResponseDTO
)
from taskboard.infrastructure.web.dependencies import RepositoriesDep, CurrentUserDep
from taskboard.infrastructure.web.middleware.error_handler import unwrap_result, build_request_dto


router = APIRouter()


@router.patch("/comments/{comment_id}", response_model=CommentResponseDTO)
async def update_comment(
    comment_id: str,
    payload: CommentPayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """Edit a comment. Only its author may edit it."""
    request = build_request_dto(UpdateCommentRequestDTO, id=comment_id, content=payload.content)
    use_case = UpdateCommentUseCase(
        repos.comments, repos.tasks, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(comment_id: str, user_id: CurrentUserDep, repos: RepositoriesDep):
    """Delete a comment. It stays stored but is hidden from listings."""
    use_case = DeleteCommentUseCase(
        repos.comments, repos.tasks, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    unwrap_result(await use_case.execute(build_request_dto(CommentIdRequestDTO, id=comment_id)))


@router.delete("/attachments/{attachment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_attachment(attachment_id: str, user_id: CurrentUserDep, repos: RepositoriesDep):
    """Remove an attachment. Only its uploader may remove it."""
    use_case = DeleteAttachmentUseCase(
        repos.attachments, repos.tasks, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    unwrap_result(await use_case.execute(build_request_dto(AttachmentIdRequestDTO, id=attachment_id)))
