"""
Task domain model.
Represents a card inside a column, with priority, assignment and completion.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, List
from enum import Enum

from taskboard.domain.models.base import (
    BaseEntity,
    ValidationError,
    BusinessRuleViolation,
    utc_now
)
from taskboard.domain.models.comment import Comment
from taskboard.domain.models.attachment import Attachment


class TaskPriority(str, Enum):
    """Task priority levels, lowest first."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def level(self) -> int:
        return _PRIORITY_LEVELS.index(self)

    @property
    def color(self) -> str:
        return _PRIORITY_COLORS[self]

    def escalated(self) -> "TaskPriority":
        """Next priority up; CRITICAL stays CRITICAL."""
        return _PRIORITY_LEVELS[min(self.level + 1, len(_PRIORITY_LEVELS) - 1)]

    def deescalated(self) -> "TaskPriority":
        """Next priority down; LOW stays LOW."""
        return _PRIORITY_LEVELS[max(self.level - 1, 0)]


_PRIORITY_LEVELS = [TaskPriority.LOW, TaskPriority.MEDIUM, TaskPriority.HIGH, TaskPriority.CRITICAL]

_PRIORITY_COLORS = {
    TaskPriority.LOW: "#10b981",
    TaskPriority.MEDIUM: "#3b82f6",
    TaskPriority.HIGH: "#f59e0b",
    TaskPriority.CRITICAL: "#ef4444",
}


@dataclass(kw_only=True)
class Task(BaseEntity):
    """
    Task entity.

    ``order`` is the task's position within its column and is unique per
    column. A task is open until ``completed_at`` is set.
    """

    # Required fields
    title: str
    column_id: str
    created_by_id: str

    # Task details
    description: Optional[str] = None
    order: int = 0
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    # Assignment
    assigned_user_id: Optional[str] = None

    # Relationships, filled in when loaded with details
    label_ids: List[str] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)
    attachments: List[Attachment] = field(default_factory=list)

    def __post_init__(self):
        """Initialize task after creation."""
        super().__post_init__()
        if isinstance(self.priority, str) and not isinstance(self.priority, TaskPriority):
            self.priority = TaskPriority(self.priority)
        self.validate()

    def validate(self) -> None:
        """Validate task state."""
        if not self.title or not self.title.strip():
            raise ValidationError("Task title is required", "title")

        if len(self.title) > 200:
            raise ValidationError("Task title too long (max 200 characters)", "title")

        if self.description and len(self.description) > 5000:
            raise ValidationError("Description too long (max 5000 characters)", "description")

        if not self.column_id:
            raise ValidationError("Column ID is required", "column_id")

        if not self.created_by_id:
            raise ValidationError("Created by is required", "created_by_id")

        if self.order < 0:
            raise ValidationError("Task order cannot be negative", "order")

    @classmethod
    def create(
        cls,
        title: str,
        column_id: str,
        created_by_id: str,
        order: int,
        description: Optional[str] = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: Optional[datetime] = None,
        assigned_user_id: Optional[str] = None
    ) -> "Task":
        return cls(
            title=title.strip() if title else title,
            column_id=column_id,
            created_by_id=created_by_id,
            order=order,
            description=description.strip() if description else None,
            priority=priority,
            due_date=due_date,
            assigned_user_id=assigned_user_id
        )

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    @property
    def is_overdue(self) -> bool:
        """Open tasks whose due date has passed."""
        if not self.due_date or self.is_completed:
            return False
        return utc_now() > self.due_date

    @property
    def has_assignee(self) -> bool:
        return self.assigned_user_id is not None

    @property
    def time_spent(self) -> Optional[timedelta]:
        """Time from creation to completion, None while open."""
        if not self.completed_at:
            return None
        return self.completed_at - self.created_at

    @property
    def active_comments(self) -> List[Comment]:
        return [comment for comment in self.comments if not comment.is_deleted]

    def update_title(self, title: str) -> None:
        if not title or not title.strip():
            raise ValidationError("Task title is required", "title")
        if len(title.strip()) > 200:
            raise ValidationError("Task title too long (max 200 characters)", "title")
        self.title = title.strip()
        self.mark_as_updated()

    def update_description(self, description: Optional[str]) -> None:
        if description and len(description) > 5000:
            raise ValidationError("Description too long (max 5000 characters)", "description")
        self.description = description.strip() if description else None
        self.mark_as_updated()

    def update_priority(self, priority: TaskPriority) -> None:
        self.priority = TaskPriority(priority)
        self.mark_as_updated()

    def update_due_date(self, due_date: Optional[datetime]) -> None:
        self.due_date = due_date
        self.mark_as_updated()

    def escalate_priority(self) -> None:
        self.priority = self.priority.escalated()
        self.mark_as_updated()

    def deescalate_priority(self) -> None:
        self.priority = self.priority.deescalated()
        self.mark_as_updated()

    def complete(self) -> None:
        """Mark the task as done. Completing a completed task changes nothing."""
        if self.is_completed:
            return
        self.completed_at = utc_now()
        self.mark_as_updated()

    def uncomplete(self) -> None:
        """Reopen a completed task."""
        if not self.is_completed:
            return
        self.completed_at = None
        self.mark_as_updated()

    def assign_to_user(self, user_id: str) -> None:
        if not user_id:
            raise ValidationError("User ID is required", "assigned_user_id")
        self.assigned_user_id = user_id
        self.mark_as_updated()

    def unassign_user(self) -> None:
        if not self.assigned_user_id:
            raise BusinessRuleViolation("Task is not assigned to anyone")
        self.assigned_user_id = None
        self.mark_as_updated()

    def move_to_column(self, column_id: str, order: int) -> None:
        """Place the task in another (or the same) column at the given order."""
        if not column_id:
            raise ValidationError("Column ID is required", "column_id")
        if order < 0:
            raise ValidationError("Task order cannot be negative", "order")
        self.column_id = column_id
        self.order = order
        self.mark_as_updated()

    def update_order(self, order: int) -> None:
        if order < 0:
            raise ValidationError("Task order cannot be negative", "order")
        self.order = order
        self.mark_as_updated()

    def add_label(self, label_id: str) -> None:
        if label_id in self.label_ids:
            raise BusinessRuleViolation("Label is already attached to this task")
        self.label_ids.append(label_id)
        self.mark_as_updated()

    def remove_label(self, label_id: str) -> None:
        if label_id not in self.label_ids:
            raise BusinessRuleViolation("Label is not attached to this task")
        self.label_ids.remove(label_id)
        self.mark_as_updated()

    def has_label(self, label_id: str) -> bool:
        return label_id in self.label_ids

    def add_comment(self, comment: Comment) -> None:
        if comment.task_id != self.id:
            raise BusinessRuleViolation("Comment belongs to another task")
        self.comments.append(comment)

    def can_be_edited_by(self, user_id: str) -> bool:
        return user_id in (self.created_by_id, self.assigned_user_id)

    def can_be_deleted_by(self, user_id: str) -> bool:
        return self.can_be_edited_by(user_id)
