"""
Comment domain model.
Comments are soft deleted so that the discussion history of a task survives.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from taskboard.domain.models.base import (
    BaseEntity,
    ValidationError,
    BusinessRuleViolation,
    utc_now
)


EDIT_WINDOW = timedelta(minutes=15)
MAX_CONTENT_LENGTH = 2000


@dataclass(kw_only=True)
class Comment(BaseEntity):
    """Comment entity."""

    content: str
    task_id: str
    user_id: str
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        super().__post_init__()
        self.validate()

    def validate(self) -> None:
        if not self.content or not self.content.strip():
            raise ValidationError("Comment content is required", "content")
        if len(self.content) > MAX_CONTENT_LENGTH:
            raise ValidationError(
                f"Comment too long (max {MAX_CONTENT_LENGTH} characters)", "content"
            )
        if not self.task_id:
            raise ValidationError("Task ID is required", "task_id")
        if not self.user_id:
            raise ValidationError("User ID is required", "user_id")

    @classmethod
    def create(cls, content: str, task_id: str, user_id: str) -> "Comment":
        return cls(content=content.strip() if content else content, task_id=task_id, user_id=user_id)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_edited(self) -> bool:
        return self.updated_at is not None and self.updated_at > self.created_at

    def update_content(self, content: str) -> None:
        if self.is_deleted:
            raise BusinessRuleViolation("Cannot edit a deleted comment")
        old = self.content
        self.content = content.strip() if content else content
        try:
            self.validate()
        except ValidationError:
            self.content = old
            raise
        self.mark_as_updated()

    def delete(self) -> None:
        """Soft delete. Deleting twice is a no-op."""
        if self.deleted_at is None:
            self.deleted_at = utc_now()

    def restore(self) -> None:
        if self.deleted_at is not None:
            self.deleted_at = None
            self.mark_as_updated()

    def can_be_edited_by(self, user_id: str, now: Optional[datetime] = None) -> bool:
        """Only the author may edit, and only for a short while after posting."""
        if self.is_deleted or user_id != self.user_id:
            return False
        now = now or utc_now()
        return now - self.created_at <= EDIT_WINDOW

    def can_be_deleted_by(self, user_id: str) -> bool:
        return not self.is_deleted and user_id == self.user_id
