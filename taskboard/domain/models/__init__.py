"""
Domain models for the task board.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    DomainException,
    ValidationError,
    InvalidReorderError,
    BusinessRuleViolation,
    EntityNotFoundError,
    DuplicateEntityError,
    OrderConflictError,
    PersistenceError,
    ValueObject,
    utc_now,
    new_id
)

# Value Objects
from .value_objects import (
    HexColor,
    Email,
    FileSize
)

# Domain entities
from .user import User
from .board import Board, BoardMember, BoardRole
from .column import Column
from .task import Task, TaskPriority
from .label import Label, TaskLabel
from .comment import Comment
from .attachment import Attachment
from .activity_log import ActivityLog, ActivityType

__all__ = [
    # Base
    "BaseEntity",
    "DomainException",
    "ValidationError",
    "InvalidReorderError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "OrderConflictError",
    "PersistenceError",
    "ValueObject",
    "utc_now",
    "new_id",

    # Value Objects
    "HexColor",
    "Email",
    "FileSize",

    # Entities
    "User",
    "Board",
    "BoardMember",
    "BoardRole",
    "Column",
    "Task",
    "TaskPriority",
    "Label",
    "TaskLabel",
    "Comment",
    "Attachment",
    "ActivityLog",
    "ActivityType",
]
