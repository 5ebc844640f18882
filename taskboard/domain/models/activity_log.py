"""
Activity log domain model.
An append-only record of what happened on a board and who did it.
"""

from dataclasses import dataclass
from typing import Optional, Any
from enum import Enum

from taskboard.domain.models.base import BaseEntity, ValidationError


class ActivityType(str, Enum):
    """Kinds of board activity."""
    TASK_CREATED = "task_created"
    TASK_UPDATED = "task_updated"
    TASK_DELETED = "task_deleted"
    TASK_MOVED = "task_moved"
    TASK_COMPLETED = "task_completed"
    TASKS_REORDERED = "tasks_reordered"

    COLUMN_CREATED = "column_created"
    COLUMN_UPDATED = "column_updated"
    COLUMN_DELETED = "column_deleted"
    COLUMNS_REORDERED = "columns_reordered"

    COMMENT_ADDED = "comment_added"
    COMMENT_UPDATED = "comment_updated"
    COMMENT_DELETED = "comment_deleted"

    MEMBER_ADDED = "member_added"
    MEMBER_REMOVED = "member_removed"
    MEMBER_ROLE_CHANGED = "member_role_changed"

    BOARD_CREATED = "board_created"
    BOARD_UPDATED = "board_updated"
    BOARD_DELETED = "board_deleted"

    ATTACHMENT_ADDED = "attachment_added"
    ATTACHMENT_DELETED = "attachment_deleted"

    LABEL_ADDED = "label_added"
    LABEL_REMOVED = "label_removed"
    LABEL_UPDATED = "label_updated"

    SYSTEM_NOTIFICATION = "system_notification"


@dataclass(kw_only=True)
class ActivityLog(BaseEntity):
    """ActivityLog entity."""

    board_id: str
    user_id: str
    activity_type: ActivityType
    description: str
    related_task_id: Optional[str] = None
    related_column_id: Optional[str] = None
    related_user_id: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        if not isinstance(self.activity_type, ActivityType):
            self.activity_type = ActivityType(self.activity_type)
        self.validate()

    def validate(self) -> None:
        if not self.board_id:
            raise ValidationError("Board ID is required", "board_id")
        if not self.user_id:
            raise ValidationError("User ID is required", "user_id")
        if not self.description:
            raise ValidationError("Activity description is required", "description")
        if len(self.description) > 1000:
            raise ValidationError("Activity description too long (max 1000 characters)", "description")

    @classmethod
    def create(
        cls,
        board_id: str,
        user_id: str,
        activity_type: ActivityType,
        description: str,
        related_user_id: Optional[str] = None
    ) -> "ActivityLog":
        return cls(
            board_id=board_id,
            user_id=user_id,
            activity_type=activity_type,
            description=description,
            related_user_id=related_user_id
        )

    @classmethod
    def for_task(
        cls,
        board_id: str,
        user_id: str,
        activity_type: ActivityType,
        description: str,
        task_id: str,
        column_id: Optional[str] = None
    ) -> "ActivityLog":
        return cls(
            board_id=board_id,
            user_id=user_id,
            activity_type=activity_type,
            description=description,
            related_task_id=task_id,
            related_column_id=column_id
        )

    @classmethod
    def for_column(
        cls,
        board_id: str,
        user_id: str,
        activity_type: ActivityType,
        description: str,
        column_id: str
    ) -> "ActivityLog":
        return cls(
            board_id=board_id,
            user_id=user_id,
            activity_type=activity_type,
            description=description,
            related_column_id=column_id
        )

    @classmethod
    def for_value_change(
        cls,
        board_id: str,
        user_id: str,
        activity_type: ActivityType,
        description: str,
        old_value: Any,
        new_value: Any,
        task_id: Optional[str] = None,
        column_id: Optional[str] = None
    ) -> "ActivityLog":
        """Record a change from one value to another."""
        return cls(
            board_id=board_id,
            user_id=user_id,
            activity_type=activity_type,
            description=description,
            related_task_id=task_id,
            related_column_id=column_id,
            old_value=None if old_value is None else str(old_value),
            new_value=None if new_value is None else str(new_value)
        )

    @property
    def has_value_change(self) -> bool:
        return self.old_value is not None or self.new_value is not None
