"""
Label mapper for converting between domain entities and database models.
"""

from taskboard.domain.models.label import Label
from taskboard.infrastructure.db.models import LabelModel


class LabelMapper:
    """Maps between Label domain entity and LabelModel database model."""

    def domain_to_model(self, label: Label) -> LabelModel:
        return LabelModel(
            id=label.id,
            board_id=label.board_id,
            name=label.name,
            color=label.color,
            created_at=label.created_at,
            updated_at=label.updated_at
        )

    def model_to_domain(self, model: LabelModel) -> Label:
        return Label(
            id=model.id,
            name=model.name,
            board_id=model.board_id,
            color=model.color,
            task_ids=[link.task_id for link in model.task_labels],
            created_at=model.created_at,
            updated_at=model.updated_at
        )

    def update_model(self, model: LabelModel, label: Label) -> None:
        model.name = label.name
        model.color = label.color
        model.updated_at = label.updated_at
