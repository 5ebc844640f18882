"""
Label repository implementation using SQLAlchemy.
"""

from typing import Optional, List

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from taskboard.domain.models.label import Label
from taskboard.domain.models.base import DuplicateEntityError, EntityNotFoundError
from taskboard.domain.repositories.label_repository import LabelRepository
from taskboard.infrastructure.db.models import LabelModel, TaskLabelModel, TaskModel
from taskboard.infrastructure.mappers.label_mapper import LabelMapper
from taskboard.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyLabelRepository(SQLAlchemyRepository[Label], LabelRepository):
    """SQLAlchemy implementation of label repository."""

    model_class = LabelModel
    entity_name = "Label"

    def __init__(self, session: Session):
        super().__init__(session, LabelMapper())

    async def find_by_board(self, board_id: str) -> List[Label]:
        models = self.session.query(LabelModel).options(
            selectinload(LabelModel.task_labels)
        ).filter_by(board_id=board_id).order_by(LabelModel.name).all()
        return [self.mapper.model_to_domain(model) for model in models]

    async def find_by_name(self, board_id: str, name: str) -> Optional[Label]:
        model = self.session.query(LabelModel).filter(
            LabelModel.board_id == board_id,
            func.lower(LabelModel.name) == (name or "").strip().lower()
        ).first()
        return self.mapper.model_to_domain(model) if model else None

    async def find_by_task(self, task_id: str) -> List[Label]:
        models = self.session.query(LabelModel).join(
            TaskLabelModel, TaskLabelModel.label_id == LabelModel.id
        ).filter(TaskLabelModel.task_id == task_id).order_by(LabelModel.name).all()
        return [self.mapper.model_to_domain(model) for model in models]

    async def attach_to_task(self, task_id: str, label_id: str) -> None:
        self._get_model_or_raise(TaskModel, "Task", task_id)
        self._get_model_or_raise(LabelModel, "Label", label_id)
        if self.session.get(TaskLabelModel, (task_id, label_id)) is not None:
            raise DuplicateEntityError("TaskLabel", "label_id", label_id)
        self.session.add(TaskLabelModel(task_id=task_id, label_id=label_id))
        self._flush()

    async def detach_from_task(self, task_id: str, label_id: str) -> bool:
        model = self.session.get(TaskLabelModel, (task_id, label_id))
        if model is None:
            return False
        self.session.delete(model)
        self._flush()
        return True
