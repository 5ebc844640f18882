"""
Activity log mapper.
"""

from taskboard.domain.models.activity_log import ActivityLog, ActivityType
from taskboard.infrastructure.db.models import ActivityLogModel


class ActivityLogMapper:
    """Maps between ActivityLog domain entity and ActivityLogModel."""

    def domain_to_model(self, entry: ActivityLog) -> ActivityLogModel:
        return ActivityLogModel(
            id=entry.id,
            board_id=entry.board_id,
            user_id=entry.user_id,
            activity_type=entry.activity_type,
            description=entry.description,
            related_task_id=entry.related_task_id,
            related_column_id=entry.related_column_id,
            related_user_id=entry.related_user_id,
            old_value=entry.old_value,
            new_value=entry.new_value,
            created_at=entry.created_at
        )

    def model_to_domain(self, model: ActivityLogModel) -> ActivityLog:
        return ActivityLog(
            id=model.id,
            board_id=model.board_id,
            user_id=model.user_id,
            activity_type=ActivityType(model.activity_type),
            description=model.description,
            related_task_id=model.related_task_id,
            related_column_id=model.related_column_id,
            related_user_id=model.related_user_id,
            old_value=model.old_value,
            new_value=model.new_value,
            created_at=model.created_at
        )
