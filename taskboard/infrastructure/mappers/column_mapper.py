"""
Column mapper for converting between domain entities and database models.
"""

from taskboard.domain.models.column import Column
from taskboard.infrastructure.db.models import ColumnModel


class ColumnMapper:
    """Maps between Column domain entity and ColumnModel database model."""

    def domain_to_model(self, column: Column) -> ColumnModel:
        """Convert Column domain entity to ColumnModel."""
        return ColumnModel(
            id=column.id,
            board_id=column.board_id,
            title=column.title,
            position=column.order,
            wip_limit=column.wip_limit,
            created_at=column.created_at,
            updated_at=column.updated_at
        )

    def model_to_domain(self, model: ColumnModel) -> Column:
        """Convert ColumnModel to Column domain entity."""
        return Column(
            id=model.id,
            title=model.title,
            board_id=model.board_id,
            order=model.position,
            wip_limit=model.wip_limit,
            task_ids=[task.id for task in model.tasks],
            created_at=model.created_at,
            updated_at=model.updated_at
        )

    def update_model(self, model: ColumnModel, column: Column) -> None:
        model.title = column.title
        model.board_id = column.board_id
        model.position = column.order
        model.wip_limit = column.wip_limit
        model.updated_at = column.updated_at
