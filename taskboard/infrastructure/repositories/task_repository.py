"""
Task repository implementation using SQLAlchemy.
"""

import logging
from typing import Optional, List

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from taskboard.domain.models.task import Task
from taskboard.domain.repositories.task_repository import TaskRepository
from taskboard.domain.services.position_service import PositionService
from taskboard.infrastructure.db.models import ColumnModel, TaskModel
from taskboard.infrastructure.mappers.task_mapper import TaskMapper
from taskboard.infrastructure.repositories.base_repository import SQLAlchemyRepository


logger = logging.getLogger(__name__)


class SQLAlchemyTaskRepository(SQLAlchemyRepository[Task], TaskRepository):
    """SQLAlchemy implementation of task repository."""

    model_class = TaskModel
    entity_name = "Task"

    def __init__(self, session: Session):
        super().__init__(session, TaskMapper())
        self.positions = PositionService()

    async def save(self, task: Task) -> Task:
        """Save a task; a taken (column, order) pair raises OrderConflictError."""
        self.positions.validate_order(task.order)
        model = self.session.get(TaskModel, task.id)
        if model is None:
            self.session.add(self.mapper.domain_to_model(task))
        else:
            self.mapper.update_model(model, task)

        self._flush("Column", task.column_id, task.order)
        return task

    async def find_by_column(self, column_id: str) -> List[Task]:
        models = self.session.query(TaskModel).options(
            selectinload(TaskModel.task_labels)
        ).filter_by(column_id=column_id).order_by(TaskModel.position).all()
        return [self.mapper.model_to_domain(model) for model in models]

    async def find_by_board(self, board_id: str) -> List[Task]:
        models = self.session.query(TaskModel).join(
            ColumnModel, TaskModel.column_id == ColumnModel.id
        ).options(
            selectinload(TaskModel.task_labels)
        ).filter(
            ColumnModel.board_id == board_id
        ).order_by(ColumnModel.position, TaskModel.position).all()
        return [self.mapper.model_to_domain(model) for model in models]

    async def find_with_details(self, task_id: str) -> Optional[Task]:
        model = self.session.query(TaskModel).options(
            selectinload(TaskModel.task_labels),
            selectinload(TaskModel.comments),
            selectinload(TaskModel.attachments)
        ).filter_by(id=task_id).first()

        if not model:
            return None

        return self.mapper.model_to_domain(model, with_details=True)

    async def get_board_id(self, task_id: str) -> Optional[str]:
        return self.session.query(ColumnModel.board_id).join(
            TaskModel, TaskModel.column_id == ColumnModel.id
        ).filter(TaskModel.id == task_id).scalar()

    async def get_next_order_in_column(self, column_id: str) -> int:
        """Get next order for a task appended to the column."""
        self.positions.validate_id(column_id, "column_id")
        self._get_model_or_raise(ColumnModel, "Column", column_id)

        max_position = self.session.query(func.max(TaskModel.position)).filter_by(
            column_id=column_id
        ).scalar()

        return self.positions.next_order([max_position])

    async def reorder_tasks_in_column(self, column_id: str, ordered_task_ids: List[str]) -> List[Task]:
        """Renumber the column's tasks to follow ``ordered_task_ids``."""
        self.positions.validate_id(column_id, "column_id")
        self._get_model_or_raise(ColumnModel, "Column", column_id)

        current = self.session.query(TaskModel.id, TaskModel.position).filter_by(
            column_id=column_id
        ).all()
        self.positions.validate_full_reorder(
            [task_id for task_id, _ in current],
            ordered_task_ids,
            "Column",
            column_id
        )

        plan = self.positions.renumber_plan(
            ordered_task_ids, [position for _, position in current]
        )
        self._write_positions(TaskModel, "column_id", "Column", column_id, plan)
        logger.debug("Reordered %d tasks of column %s", len(ordered_task_ids), column_id)

        return await self.find_by_column(column_id)

    async def update_task_order(self, task_id: str, new_column_id: str, new_order: int) -> Task:
        """
        Move a task to ``new_column_id`` at ``new_order``.
        Only the moved row is written; gaps and collisions are not repaired.
        """
        self.positions.validate_id(task_id, "task_id")
        self.positions.validate_id(new_column_id, "new_column_id")
        self.positions.validate_order(new_order)

        model = self._get_model_or_raise(TaskModel, "Task", task_id)
        self._get_model_or_raise(ColumnModel, "Column", new_column_id)

        if model.column_id != new_column_id or model.position != new_order:
            old_column_id, old_position = model.column_id, model.position
            try:
                self.session.query(TaskModel).filter_by(id=task_id).update(
                    {"column_id": new_column_id, "position": new_order},
                    synchronize_session=False
                )
                self.session.flush()
            except IntegrityError as exc:
                logger.warning(
                    "Move of task %s to column %s at %d rejected",
                    task_id, new_column_id, new_order
                )
                self._raise_translated(exc, "Column", new_column_id, new_order)

            self.session.expire_all()
            logger.debug(
                "Moved task %s from %s/%d to %s/%d",
                task_id, old_column_id, old_position, new_column_id, new_order
            )

        return self.mapper.model_to_domain(self.session.get(TaskModel, task_id))

    async def compact_column(self, column_id: str) -> List[Task]:
        """Renumber the column's tasks to 0..N-1 in their current sequence."""
        self.positions.validate_id(column_id, "column_id")
        self._get_model_or_raise(ColumnModel, "Column", column_id)

        current = self.session.query(TaskModel.id, TaskModel.position).filter_by(
            column_id=column_id
        ).all()
        compacted = self.positions.compacted(current)
        if all(compacted[task_id] == position for task_id, position in current):
            return await self.find_by_column(column_id)

        ordered_ids = sorted(compacted, key=compacted.get)
        plan = self.positions.renumber_plan(ordered_ids, [position for _, position in current])
        self._write_positions(TaskModel, "column_id", "Column", column_id, plan)
        logger.debug("Compacted tasks of column %s", column_id)

        return await self.find_by_column(column_id)
