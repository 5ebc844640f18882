"""
Comment and attachment mappers.
"""

from taskboard.domain.models.comment import Comment
from taskboard.domain.models.attachment import Attachment
from taskboard.infrastructure.db.models import CommentModel, AttachmentModel


class CommentMapper:
    """Maps between Comment domain entity and CommentModel database model."""

    def domain_to_model(self, comment: Comment) -> CommentModel:
        return CommentModel(
            id=comment.id,
            task_id=comment.task_id,
            user_id=comment.user_id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            deleted_at=comment.deleted_at
        )

    def model_to_domain(self, model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            content=model.content,
            task_id=model.task_id,
            user_id=model.user_id,
            deleted_at=model.deleted_at,
            created_at=model.created_at,
            updated_at=model.updated_at
        )

    def update_model(self, model: CommentModel, comment: Comment) -> None:
        model.content = comment.content
        model.updated_at = comment.updated_at
        model.deleted_at = comment.deleted_at


class AttachmentMapper:
    """Maps between Attachment domain entity and AttachmentModel database model."""

    def domain_to_model(self, attachment: Attachment) -> AttachmentModel:
        return AttachmentModel(
            id=attachment.id,
            task_id=attachment.task_id,
            uploaded_by=attachment.uploaded_by,
            file_name=attachment.file_name,
            file_url=attachment.file_url,
            file_size=attachment.file_size,
            mime_type=attachment.mime_type,
            created_at=attachment.created_at,
            updated_at=attachment.updated_at
        )

    def model_to_domain(self, model: AttachmentModel) -> Attachment:
        return Attachment(
            id=model.id,
            file_name=model.file_name,
            file_url=model.file_url,
            file_size=model.file_size,
            task_id=model.task_id,
            uploaded_by=model.uploaded_by,
            mime_type=model.mime_type,
            created_at=model.created_at,
            updated_at=model.updated_at
        )

    def update_model(self, model: AttachmentModel, attachment: Attachment) -> None:
        model.file_name = attachment.file_name
        model.file_url = attachment.file_url
        model.updated_at = attachment.updated_at
