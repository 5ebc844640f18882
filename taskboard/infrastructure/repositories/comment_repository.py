"""
Comment and attachment repository implementations using SQLAlchemy.
"""

from typing import List

from sqlalchemy.orm import Session

from taskboard.domain.models.comment import Comment
from taskboard.domain.models.attachment import Attachment
from taskboard.domain.repositories.comment_repository import CommentRepository, AttachmentRepository
from taskboard.infrastructure.db.models import CommentModel, AttachmentModel
from taskboard.infrastructure.mappers.comment_mapper import CommentMapper, AttachmentMapper
from taskboard.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyCommentRepository(SQLAlchemyRepository[Comment], CommentRepository):
    """SQLAlchemy implementation of comment repository."""

    model_class = CommentModel
    entity_name = "Comment"

    def __init__(self, session: Session):
        super().__init__(session, CommentMapper())

    async def find_by_task(self, task_id: str, include_deleted: bool = False) -> List[Comment]:
        query = self.session.query(CommentModel).filter_by(task_id=task_id)
        if not include_deleted:
            query = query.filter(CommentModel.deleted_at.is_(None))
        models = query.order_by(CommentModel.created_at).all()
        return [self.mapper.model_to_domain(model) for model in models]


class SQLAlchemyAttachmentRepository(SQLAlchemyRepository[Attachment], AttachmentRepository):
    """SQLAlchemy implementation of attachment repository."""

    model_class = AttachmentModel
    entity_name = "Attachment"

    def __init__(self, session: Session):
        super().__init__(session, AttachmentMapper())

    async def find_by_task(self, task_id: str) -> List[Attachment]:
        models = self.session.query(AttachmentModel).filter_by(
            task_id=task_id
        ).order_by(AttachmentModel.created_at.desc()).all()
        return [self.mapper.model_to_domain(model) for model in models]
