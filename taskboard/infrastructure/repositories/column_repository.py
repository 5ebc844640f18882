"""
Column repository implementation using SQLAlchemy.
"""

import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from taskboard.domain.models.column import Column
from taskboard.domain.repositories.column_repository import ColumnRepository
from taskboard.domain.services.position_service import PositionService
from taskboard.infrastructure.db.models import BoardModel, ColumnModel
from taskboard.infrastructure.mappers.column_mapper import ColumnMapper
from taskboard.infrastructure.repositories.base_repository import SQLAlchemyRepository


logger = logging.getLogger(__name__)


class SQLAlchemyColumnRepository(SQLAlchemyRepository[Column], ColumnRepository):
    """SQLAlchemy implementation of column repository."""

    model_class = ColumnModel
    entity_name = "Column"

    def __init__(self, session: Session):
        super().__init__(session, ColumnMapper())
        self.positions = PositionService()

    async def save(self, column: Column) -> Column:
        """Save a column; a taken (board, order) pair raises OrderConflictError."""
        self.positions.validate_order(column.order)
        model = self.session.get(ColumnModel, column.id)
        if model is None:
            self.session.add(self.mapper.domain_to_model(column))
        else:
            self.mapper.update_model(model, column)

        self._flush("Board", column.board_id, column.order)
        return column

    async def find_by_board(self, board_id: str) -> List[Column]:
        models = self.session.query(ColumnModel).filter_by(
            board_id=board_id
        ).order_by(ColumnModel.position).all()
        return [self.mapper.model_to_domain(model) for model in models]

    async def get_next_order(self, board_id: str) -> int:
        """Get next order for a column appended to the board."""
        self.positions.validate_id(board_id, "board_id")
        self._get_model_or_raise(BoardModel, "Board", board_id)

        max_position = self.session.query(func.max(ColumnModel.position)).filter_by(
            board_id=board_id
        ).scalar()

        return self.positions.next_order([max_position])

    async def reorder_columns(self, board_id: str, ordered_column_ids: List[str]) -> List[Column]:
        """Renumber the board's columns to follow ``ordered_column_ids``."""
        self.positions.validate_id(board_id, "board_id")
        self._get_model_or_raise(BoardModel, "Board", board_id)

        current = self.session.query(ColumnModel.id, ColumnModel.position).filter_by(
            board_id=board_id
        ).all()
        self.positions.validate_full_reorder(
            [column_id for column_id, _ in current],
            ordered_column_ids,
            "Board",
            board_id
        )

        plan = self.positions.renumber_plan(
            ordered_column_ids, [position for _, position in current]
        )
        self._write_positions(ColumnModel, "board_id", "Board", board_id, plan)
        logger.debug("Reordered %d columns of board %s", len(ordered_column_ids), board_id)

        return await self.find_by_board(board_id)

    async def compact_columns(self, board_id: str) -> List[Column]:
        """Renumber the board's columns to 0..N-1 in their current sequence."""
        self.positions.validate_id(board_id, "board_id")
        self._get_model_or_raise(BoardModel, "Board", board_id)

        current = self.session.query(ColumnModel.id, ColumnModel.position).filter_by(
            board_id=board_id
        ).all()
        compacted = self.positions.compacted(current)
        if all(compacted[column_id] == position for column_id, position in current):
            return await self.find_by_board(board_id)

        ordered_ids = sorted(compacted, key=compacted.get)
        plan = self.positions.renumber_plan(ordered_ids, [position for _, position in current])
        self._write_positions(ColumnModel, "board_id", "Board", board_id, plan)
        logger.debug("Compacted columns of board %s", board_id)

        return await self.find_by_board(board_id)
