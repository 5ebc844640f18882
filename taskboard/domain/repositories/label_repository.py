"""
Label repository interface.
Defines the contract for labels and their task links.
"""

from abc import abstractmethod
from typing import List, Optional

from taskboard.domain.models.label import Label
from taskboard.domain.repositories.base_repository import Repository


class LabelRepository(Repository[Label]):
    """Repository interface for Label entity."""

    @abstractmethod
    async def find_by_board(self, board_id: str) -> List[Label]:
        """Labels of a board by name."""
        pass

    @abstractmethod
    async def find_by_name(self, board_id: str, name: str) -> Optional[Label]:
        """Find a board's label by name (case-insensitive)."""
        pass

    @abstractmethod
    async def find_by_task(self, task_id: str) -> List[Label]:
        """Labels attached to a task."""
        pass

    @abstractmethod
    async def attach_to_task(self, task_id: str, label_id: str) -> None:
        """Attach a label to a task."""
        pass

    @abstractmethod
    async def detach_from_task(self, task_id: str, label_id: str) -> bool:
        """Detach a label from a task. Returns True if a link was removed."""
        pass
