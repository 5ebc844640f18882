"""
Comment and attachment repository interfaces.
"""

from abc import abstractmethod
from typing import List

from taskboard.domain.models.comment import Comment
from taskboard.domain.models.attachment import Attachment
from taskboard.domain.repositories.base_repository import Repository


class CommentRepository(Repository[Comment]):
    """Repository interface for Comment entity."""

    @abstractmethod
    async def find_by_task(self, task_id: str, include_deleted: bool = False) -> List[Comment]:
        """Comments of a task, oldest first."""
        pass


class AttachmentRepository(Repository[Attachment]):
    """Repository interface for Attachment entity."""

    @abstractmethod
    async def find_by_task(self, task_id: str) -> List[Attachment]:
        """Attachments of a task, newest first."""
        pass
