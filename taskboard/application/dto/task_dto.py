"""
Task DTOs for the application layer.
Data Transfer Objects for task-related operations.
"""

from typing import Optional, List
from datetime import datetime
from pydantic import Field, field_validator

from taskboard.domain.models.task import TaskPriority
from taskboard.infrastructure.validation.validators import BoardValidator
from .base_dto import RequestDTO, ResponseDTO, CreateRequestDTO, UpdateRequestDTO
from .comment_dto import CommentResponseDTO, AttachmentResponseDTO
from .label_dto import LabelResponseDTO


class TaskPayloadDTO(CreateRequestDTO):
    """Body of a task creation request."""

    title: str = Field(description="Task title (max 200 characters)")
    description: Optional[str] = Field(default=None, max_length=5000, description="Task description")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    due_date: Optional[datetime] = Field(default=None, description="Due date")
    assigned_user_id: Optional[str] = Field(default=None, description="Assignee user ID")
    order: Optional[int] = Field(default=None, ge=0, description="Explicit position")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return BoardValidator.validate_title(v, 200)


class CreateTaskRequestDTO(TaskPayloadDTO):
    """
    DTO for creating a task.
    Without ``order`` the task is appended after the column's last task.
    """

    column_id: str = Field(min_length=1, description="Column ID")


class TaskUpdatePayloadDTO(UpdateRequestDTO):
    """Body of a task update. Omitted fields are left unchanged."""

    title: Optional[str] = Field(default=None, description="Task title")
    description: Optional[str] = Field(default=None, max_length=5000, description="Task description")
    priority: Optional[TaskPriority] = Field(default=None, description="Task priority")
    due_date: Optional[datetime] = Field(default=None, description="Due date")
    clear_due_date: bool = Field(default=False, description="Remove the due date")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return BoardValidator.validate_title(v, 200) if v is not None else v


class UpdateTaskRequestDTO(TaskUpdatePayloadDTO):
    """DTO for updating task fields."""

    id: str = Field(min_length=1, description="Task ID")


class TaskIdRequestDTO(RequestDTO):
    """DTO addressing a single task."""

    id: str = Field(min_length=1, description="Task ID")


class ListTasksRequestDTO(RequestDTO):
    """DTO for listing a column's tasks."""

    column_id: str = Field(min_length=1, description="Column ID")


class AssignmentPayloadDTO(RequestDTO):
    """Body of an assignment. A null ``user_id`` unassigns the task."""

    user_id: Optional[str] = Field(default=None, description="User to assign")


class AssignTaskRequestDTO(AssignmentPayloadDTO):
    """DTO for assigning or unassigning a task."""

    task_id: str = Field(min_length=1, description="Task ID")


class CompletionPayloadDTO(RequestDTO):
    """Body of a completion change."""

    completed: bool = Field(default=True, description="True to complete, False to reopen")


class CompleteTaskRequestDTO(CompletionPayloadDTO):
    """DTO for completing or reopening a task."""

    task_id: str = Field(min_length=1, description="Task ID")


class MovePayloadDTO(RequestDTO):
    """
    Body of a move to a column (possibly the same one) at an order.
    ``close_gap`` compacts the source column after the move.
    """

    column_id: str = Field(min_length=1, description="Destination column ID")
    order: int = Field(ge=0, description="Destination position")
    close_gap: bool = Field(default=False, description="Compact the source column afterwards")


class MoveTaskRequestDTO(MovePayloadDTO):
    """DTO for moving a task."""

    task_id: str = Field(min_length=1, description="Task ID")


class TaskOrderPayloadDTO(RequestDTO):
    """Body of a full task reorder."""

    task_ids: List[str] = Field(description="Every task ID of the column in the new sequence")

    @field_validator("task_ids")
    @classmethod
    def validate_task_ids(cls, v):
        return BoardValidator.validate_ordered_ids(v)


class ReorderTasksRequestDTO(TaskOrderPayloadDTO):
    """DTO for a full reorder of a column's tasks."""

    column_id: str = Field(min_length=1, description="Column ID")


class TaskResponseDTO(ResponseDTO):
    """DTO for task responses."""

    column_id: str = Field(description="Column ID")
    title: str = Field(description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    order: int = Field(description="Position within the column")
    priority: TaskPriority = Field(description="Task priority")
    priority_color: str = Field(description="Display color of the priority")
    due_date: Optional[datetime] = Field(default=None, description="Due date")
    completed_at: Optional[datetime] = Field(default=None, description="Completion time")
    is_completed: bool = Field(description="Whether the task is done")
    is_overdue: bool = Field(description="Whether the open task is past due")
    assigned_user_id: Optional[str] = Field(default=None, description="Assignee user ID")
    created_by_id: str = Field(description="Creator user ID")
    label_ids: List[str] = Field(default_factory=list, description="Attached label IDs")


class TaskDetailsResponseDTO(TaskResponseDTO):
    """Task with its labels, comments and attachments."""

    labels: List[LabelResponseDTO] = Field(default_factory=list)
    comments: List[CommentResponseDTO] = Field(default_factory=list)
    attachments: List[AttachmentResponseDTO] = Field(default_factory=list)
