"""
Activity log repository implementation using SQLAlchemy.
"""

from typing import List

from sqlalchemy.orm import Session

from taskboard.domain.models.activity_log import ActivityLog
from taskboard.domain.repositories.activity_log_repository import ActivityLogRepository
from taskboard.infrastructure.db.models import ActivityLogModel
from taskboard.infrastructure.mappers.activity_log_mapper import ActivityLogMapper


class SQLAlchemyActivityLogRepository(ActivityLogRepository):
    """SQLAlchemy implementation of activity log repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ActivityLogMapper()

    async def add(self, entry: ActivityLog) -> ActivityLog:
        self.session.add(self.mapper.domain_to_model(entry))
        self.session.flush()
        return entry

    async def find_by_board(self, board_id: str, limit: int = 50) -> List[ActivityLog]:
        models = self.session.query(ActivityLogModel).filter_by(
            board_id=board_id
        ).order_by(ActivityLogModel.created_at.desc()).limit(limit).all()
        return [self.mapper.model_to_domain(model) for model in models]

    async def find_by_task(self, task_id: str) -> List[ActivityLog]:
        models = self.session.query(ActivityLogModel).filter_by(
            related_task_id=task_id
        ).order_by(ActivityLogModel.created_at.desc()).all()
        return [self.mapper.model_to_domain(model) for model in models]
