"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean,
    ForeignKey, Enum as SQLEnum,
    Index, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship

from taskboard.domain.models.base import utc_now
from taskboard.domain.models.board import BoardRole
from taskboard.domain.models.task import TaskPriority
from taskboard.domain.models.activity_log import ActivityType
from .database import Base


def _enum(enum_class):
    """Store enums by value so the column holds 'high' rather than 'HIGH'."""
    return SQLEnum(
        enum_class,
        values_callable=lambda members: [member.value for member in members],
        native_enum=False,
        length=32,
    )


class UserModel(Base):
    """Users table"""
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=False)
    user_name = Column(String(50), nullable=False)
    full_name = Column(String(255))
    avatar_url = Column(String(500))

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime)

    owned_boards = relationship("BoardModel", back_populates="owner")
    memberships = relationship("BoardMemberModel", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint('email', name='uq_users_email'),
        UniqueConstraint('user_name', name='uq_users_user_name'),
    )


class BoardModel(Base):
    """Boards table"""
    __tablename__ = 'boards'

    id = Column(String(36), primary_key=True)
    owner_id = Column(String(36), ForeignKey('users.id'), nullable=False)

    title = Column(String(100), nullable=False)
    description = Column(String(500))
    color = Column(String(7), nullable=False, default="#4f46e5")
    is_favorite = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime)

    owner = relationship("UserModel", back_populates="owned_boards")
    columns = relationship(
        "ColumnModel",
        back_populates="board",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ColumnModel.position",
    )
    members = relationship("BoardMemberModel", back_populates="board", cascade="all, delete-orphan", passive_deletes=True)
    labels = relationship("LabelModel", back_populates="board", cascade="all, delete-orphan", passive_deletes=True)
    activities = relationship("ActivityLogModel", back_populates="board", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        Index('idx_boards_owner', 'owner_id'),
    )


class BoardMemberModel(Base):
    """Board membership table"""
    __tablename__ = 'board_members'

    board_id = Column(String(36), ForeignKey('boards.id', ondelete='CASCADE'), primary_key=True)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    role = Column(_enum(BoardRole), nullable=False, default=BoardRole.MEMBER)
    joined_at = Column(DateTime, nullable=False, default=utc_now)

    board = relationship("BoardModel", back_populates="members")
    user = relationship("UserModel", back_populates="memberships")

    __table_args__ = (
        Index('idx_board_members_user', 'user_id'),
    )


class ColumnModel(Base):
    """Board columns table"""
    __tablename__ = 'columns'

    id = Column(String(36), primary_key=True)
    board_id = Column(String(36), ForeignKey('boards.id', ondelete='CASCADE'), nullable=False)

    title = Column(String(100), nullable=False)
    position = Column(Integer, nullable=False)
    wip_limit = Column(Integer)

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime)

    board = relationship("BoardModel", back_populates="columns")
    tasks = relationship(
        "TaskModel",
        back_populates="column",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TaskModel.position",
    )

    __table_args__ = (
        UniqueConstraint('board_id', 'position', name='uq_columns_board_position'),
        CheckConstraint('position >= 0', name='ck_columns_position_non_negative'),
        CheckConstraint('wip_limit IS NULL OR wip_limit > 0', name='ck_columns_wip_limit_positive'),
    )


class TaskModel(Base):
    """Tasks table"""
    __tablename__ = 'tasks'

    id = Column(String(36), primary_key=True)
    column_id = Column(String(36), ForeignKey('columns.id', ondelete='CASCADE'), nullable=False)
    created_by_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    assigned_user_id = Column(String(36), ForeignKey('users.id', ondelete='SET NULL'))

    title = Column(String(200), nullable=False)
    description = Column(Text)
    position = Column(Integer, nullable=False)
    priority = Column(_enum(TaskPriority), nullable=False, default=TaskPriority.MEDIUM)

    due_date = Column(DateTime)
    completed_at = Column(DateTime)

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime)

    column = relationship("ColumnModel", back_populates="tasks")
    creator = relationship("UserModel", foreign_keys=[created_by_id])
    assignee = relationship("UserModel", foreign_keys=[assigned_user_id])
    task_labels = relationship("TaskLabelModel", back_populates="task", cascade="all, delete-orphan", passive_deletes=True)
    comments = relationship(
        "CommentModel",
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CommentModel.created_at",
    )
    attachments = relationship("AttachmentModel", back_populates="task", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        UniqueConstraint('column_id', 'position', name='uq_tasks_column_position'),
        CheckConstraint('position >= 0', name='ck_tasks_position_non_negative'),
        Index('idx_tasks_assignee', 'assigned_user_id'),
        Index('idx_tasks_due_date', 'due_date'),
    )


class LabelModel(Base):
    """Labels table"""
    __tablename__ = 'labels'

    id = Column(String(36), primary_key=True)
    board_id = Column(String(36), ForeignKey('boards.id', ondelete='CASCADE'), nullable=False)
    name = Column(String(50), nullable=False)
    color = Column(String(7), nullable=False, default="#6b7280")

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime)

    board = relationship("BoardModel", back_populates="labels")
    task_labels = relationship("TaskLabelModel", back_populates="label", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        UniqueConstraint('board_id', 'name', name='uq_labels_board_name'),
    )


class TaskLabelModel(Base):
    """Task to label link table"""
    __tablename__ = 'task_labels'

    task_id = Column(String(36), ForeignKey('tasks.id', ondelete='CASCADE'), primary_key=True)
    label_id = Column(String(36), ForeignKey('labels.id', ondelete='CASCADE'), primary_key=True)

    task = relationship("TaskModel", back_populates="task_labels")
    label = relationship("LabelModel", back_populates="task_labels")

    __table_args__ = (
        Index('idx_task_labels_label', 'label_id'),
    )


class CommentModel(Base):
    """Task comments table"""
    __tablename__ = 'comments'

    id = Column(String(36), primary_key=True)
    task_id = Column(String(36), ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    content = Column(Text, nullable=False)

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime)
    deleted_at = Column(DateTime)

    task = relationship("TaskModel", back_populates="comments")

    __table_args__ = (
        Index('idx_comments_task', 'task_id', 'created_at'),
    )


class AttachmentModel(Base):
    """Task attachments table"""
    __tablename__ = 'attachments'

    id = Column(String(36), primary_key=True)
    task_id = Column(String(36), ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False)
    uploaded_by = Column(String(36), ForeignKey('users.id'), nullable=False)

    file_name = Column(String(255), nullable=False)
    file_url = Column(String(1000), nullable=False)
    file_size = Column(Integer, nullable=False)
    mime_type = Column(String(100))

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime)

    task = relationship("TaskModel", back_populates="attachments")

    __table_args__ = (
        CheckConstraint('file_size > 0', name='ck_attachments_file_size_positive'),
        Index('idx_attachments_task', 'task_id'),
    )


class ActivityLogModel(Base):
    """Board activity log table"""
    __tablename__ = 'activity_logs'

    id = Column(String(36), primary_key=True)
    board_id = Column(String(36), ForeignKey('boards.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    activity_type = Column(_enum(ActivityType), nullable=False)
    description = Column(String(1000), nullable=False)

    related_task_id = Column(String(36))
    related_column_id = Column(String(36))
    related_user_id = Column(String(36))
    old_value = Column(Text)
    new_value = Column(Text)

    created_at = Column(DateTime, nullable=False, default=utc_now)

    board = relationship("BoardModel", back_populates="activities")

    __table_args__ = (
        Index('idx_activity_logs_board_date', 'board_id', 'created_at'),
        Index('idx_activity_logs_task', 'related_task_id'),
    )
