"""
Mappers between domain entities and SQLAlchemy models.
"""

from .user_mapper import UserMapper
from .board_mapper import BoardMapper
from .column_mapper import ColumnMapper
from .task_mapper import TaskMapper
from .label_mapper import LabelMapper
from .comment_mapper import CommentMapper, AttachmentMapper
from .activity_log_mapper import ActivityLogMapper

__all__ = [
    "UserMapper",
    "BoardMapper",
    "ColumnMapper",
    "TaskMapper",
    "LabelMapper",
    "CommentMapper",
    "AttachmentMapper",
    "ActivityLogMapper",
]
