"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .base_repository import Repository
from .transaction_manager import TransactionManager
from .user_repository import UserRepository
from .board_repository import BoardRepository
from .column_repository import ColumnRepository
from .task_repository import TaskRepository
from .label_repository import LabelRepository
from .comment_repository import CommentRepository, AttachmentRepository
from .activity_log_repository import ActivityLogRepository

__all__ = [
    "Repository",
    "TransactionManager",
    "UserRepository",
    "BoardRepository",
    "ColumnRepository",
    "TaskRepository",
    "LabelRepository",
    "CommentRepository",
    "AttachmentRepository",
    "ActivityLogRepository",
]
