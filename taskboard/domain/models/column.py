"""
Column domain model.
An ordered lane of a board; tasks live inside columns.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict

from taskboard.domain.models.base import (
    BaseEntity,
    ValidationError,
    BusinessRuleViolation
)


@dataclass(kw_only=True)
class Column(BaseEntity):
    """
    Column entity.

    ``order`` is the column's position among its board's columns. It is unique
    within the board; assigning it is the job of the position service and the
    column repository, not of this entity.
    """

    title: str
    board_id: str
    order: int = 0
    wip_limit: Optional[int] = None
    task_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        self.validate()

    def validate(self) -> None:
        """Validate column state."""
        if not self.title or not self.title.strip():
            raise ValidationError("Column title is required", "title")

        if len(self.title) > 100:
            raise ValidationError("Column title too long (max 100 characters)", "title")

        if not self.board_id:
            raise ValidationError("Board ID is required", "board_id")

        if self.order < 0:
            raise ValidationError("Column order cannot be negative", "order")

        if self.wip_limit is not None and self.wip_limit <= 0:
            raise ValidationError("WIP limit must be greater than 0", "wip_limit")

    @classmethod
    def create(
        cls,
        title: str,
        board_id: str,
        order: int,
        wip_limit: Optional[int] = None
    ) -> "Column":
        return cls(
            title=title.strip() if title else title,
            board_id=board_id,
            order=order,
            wip_limit=wip_limit
        )

    @property
    def task_count(self) -> int:
        return len(self.task_ids)

    def update_title(self, title: str) -> None:
        if not title or not title.strip():
            raise ValidationError("Column title is required", "title")
        if len(title.strip()) > 100:
            raise ValidationError("Column title too long (max 100 characters)", "title")
        self.title = title.strip()
        self.mark_as_updated()

    def update_order(self, order: int) -> None:
        if order < 0:
            raise ValidationError("Column order cannot be negative", "order")
        self.order = order
        self.mark_as_updated()

    def update_wip_limit(self, wip_limit: Optional[int]) -> None:
        """Set or clear (None) the work-in-progress limit."""
        if wip_limit is not None and wip_limit <= 0:
            raise ValidationError("WIP limit must be greater than 0", "wip_limit")
        self.wip_limit = wip_limit
        self.mark_as_updated()

    def add_task(self, task_id: str) -> None:
        if not self.can_add_task():
            raise BusinessRuleViolation(
                f"Column '{self.title}' has reached its WIP limit of {self.wip_limit}"
            )
        if task_id not in self.task_ids:
            self.task_ids.append(task_id)
            self.mark_as_updated()

    def reorder_tasks(self, ordered_task_ids: List[str]) -> None:
        """Replace the task id list with a permutation of itself."""
        if sorted(ordered_task_ids) != sorted(self.task_ids):
            raise ValidationError("Task ids must match the column's tasks", "task_ids")
        self.task_ids = list(ordered_task_ids)
        self.mark_as_updated()

    def has_reached_wip_limit(self) -> bool:
        return self.wip_limit is not None and self.task_count >= self.wip_limit

    def can_add_task(self) -> bool:
        return not self.has_reached_wip_limit()

    def calculate_new_task_order(self, ordered_task_ids: List[str]) -> Dict[str, int]:
        """Map each task id to its index in the given list."""
        return {task_id: index for index, task_id in enumerate(ordered_task_ids)}
