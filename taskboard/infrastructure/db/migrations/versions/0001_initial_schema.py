"""Initial task board schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('user_name', sa.String(50), nullable=False),
        sa.Column('full_name', sa.String(255)),
        sa.Column('avatar_url', sa.String(500)),
        *_timestamps(),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('user_name', name='uq_users_user_name'),
    )

    op.create_table(
        'boards',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('owner_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('description', sa.String(500)),
        sa.Column('color', sa.String(7), nullable=False),
        sa.Column('is_favorite', sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_boards_owner', 'boards', ['owner_id'])

    op.create_table(
        'board_members',
        sa.Column('board_id', sa.String(36), sa.ForeignKey('boards.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('role', sa.String(32), nullable=False),
        sa.Column('joined_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_board_members_user', 'board_members', ['user_id'])

    # Positions are unique per parent; reorders go through a staging range.
    op.create_table(
        'columns',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('board_id', sa.String(36), sa.ForeignKey('boards.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('wip_limit', sa.Integer()),
        *_timestamps(),
        sa.UniqueConstraint('board_id', 'position', name='uq_columns_board_position'),
        sa.CheckConstraint('position >= 0', name='ck_columns_position_non_negative'),
        sa.CheckConstraint('wip_limit IS NULL OR wip_limit > 0', name='ck_columns_wip_limit_positive'),
    )

    op.create_table(
        'tasks',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('column_id', sa.String(36), sa.ForeignKey('columns.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_by_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('assigned_user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='SET NULL')),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('priority', sa.String(32), nullable=False),
        sa.Column('due_date', sa.DateTime()),
        sa.Column('completed_at', sa.DateTime()),
        *_timestamps(),
        sa.UniqueConstraint('column_id', 'position', name='uq_tasks_column_position'),
        sa.CheckConstraint('position >= 0', name='ck_tasks_position_non_negative'),
    )
    op.create_index('idx_tasks_assignee', 'tasks', ['assigned_user_id'])
    op.create_index('idx_tasks_due_date', 'tasks', ['due_date'])

    op.create_table(
        'labels',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('board_id', sa.String(36), sa.ForeignKey('boards.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('color', sa.String(7), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('board_id', 'name', name='uq_labels_board_name'),
    )

    op.create_table(
        'task_labels',
        sa.Column('task_id', sa.String(36), sa.ForeignKey('tasks.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('label_id', sa.String(36), sa.ForeignKey('labels.id', ondelete='CASCADE'), primary_key=True),
    )
    op.create_index('idx_task_labels_label', 'task_labels', ['label_id'])

    op.create_table(
        'comments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('task_id', sa.String(36), sa.ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
        sa.Column('deleted_at', sa.DateTime()),
    )
    op.create_index('idx_comments_task', 'comments', ['task_id', 'created_at'])

    op.create_table(
        'attachments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('task_id', sa.String(36), sa.ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False),
        sa.Column('uploaded_by', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('file_url', sa.String(1000), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('mime_type', sa.String(100)),
        *_timestamps(),
        sa.CheckConstraint('file_size > 0', name='ck_attachments_file_size_positive'),
    )
    op.create_index('idx_attachments_task', 'attachments', ['task_id'])

    op.create_table(
        'activity_logs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('board_id', sa.String(36), sa.ForeignKey('boards.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('activity_type', sa.String(32), nullable=False),
        sa.Column('description', sa.String(1000), nullable=False),
        sa.Column('related_task_id', sa.String(36)),
        sa.Column('related_column_id', sa.String(36)),
        sa.Column('related_user_id', sa.String(36)),
        sa.Column('old_value', sa.Text()),
        sa.Column('new_value', sa.Text()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_activity_logs_board_date', 'activity_logs', ['board_id', 'created_at'])
    op.create_index('idx_activity_logs_task', 'activity_logs', ['related_task_id'])


def downgrade():
    op.drop_table('activity_logs')
    op.drop_table('attachments')
    op.drop_table('comments')
    op.drop_table('task_labels')
    op.drop_table('labels')
    op.drop_table('tasks')
    op.drop_table('columns')
    op.drop_table('board_members')
    op.drop_table('boards')
    op.drop_table('users')
