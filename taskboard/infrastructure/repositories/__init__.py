"""
SQLAlchemy repository implementations.
"""

from .user_repository import SQLAlchemyUserRepository
from .board_repository import SQLAlchemyBoardRepository
from .column_repository import SQLAlchemyColumnRepository
from .task_repository import SQLAlchemyTaskRepository
from .label_repository import SQLAlchemyLabelRepository
from .comment_repository import SQLAlchemyCommentRepository, SQLAlchemyAttachmentRepository
from .activity_log_repository import SQLAlchemyActivityLogRepository

__all__ = [
    "SQLAlchemyUserRepository",
    "SQLAlchemyBoardRepository",
    "SQLAlchemyColumnRepository",
    "SQLAlchemyTaskRepository",
    "SQLAlchemyLabelRepository",
    "SQLAlchemyCommentRepository",
    "SQLAlchemyAttachmentRepository",
    "SQLAlchemyActivityLogRepository",
]
