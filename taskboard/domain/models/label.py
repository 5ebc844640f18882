"""
Label domain model.
Labels are defined per board and attached to any number of that board's tasks.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from taskboard.domain.models.base import BaseEntity, ValidationError
from taskboard.domain.models.value_objects import HexColor


DEFAULT_LABEL_COLOR = "#6b7280"

DEFAULT_LABELS = (
    ("Bug", "#ef4444"),
    ("Feature", "#10b981"),
    ("Improvement", "#3b82f6"),
    ("Documentation", "#8b5cf6"),
    ("Urgent", "#f59e0b"),
)


@dataclass(kw_only=True)
class Label(BaseEntity):
    """Label entity. Names are unique within a board."""

    name: str
    board_id: str
    color: str = DEFAULT_LABEL_COLOR
    task_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        self.validate()

    def validate(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Label name is required", "name")
        if len(self.name) > 50:
            raise ValidationError("Label name too long (max 50 characters)", "name")
        if not self.board_id:
            raise ValidationError("Board ID is required", "board_id")
        HexColor(self.color)

    @classmethod
    def create(cls, name: str, board_id: str, color: Optional[str] = None) -> "Label":
        return cls(
            name=name.strip() if name else name,
            board_id=board_id,
            color=color or DEFAULT_LABEL_COLOR
        )

    @classmethod
    def create_default_labels(cls, board_id: str) -> List["Label"]:
        """The starter set of labels for a new board."""
        return [cls.create(name, board_id, color) for name, color in DEFAULT_LABELS]

    @property
    def task_count(self) -> int:
        return len(self.task_ids)

    @property
    def contrast_text_color(self) -> str:
        return HexColor(self.color).contrast_text_color()

    def update_name(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Label name is required", "name")
        if len(name.strip()) > 50:
            raise ValidationError("Label name too long (max 50 characters)", "name")
        self.name = name.strip()
        self.mark_as_updated()

    def update_color(self, color: str) -> None:
        HexColor(color)
        self.color = color
        self.mark_as_updated()


@dataclass(frozen=True)
class TaskLabel:
    """Link between a task and a label."""

    task_id: str
    label_id: str
