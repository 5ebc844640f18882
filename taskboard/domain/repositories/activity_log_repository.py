"""
Activity log repository interface.
"""

from abc import ABC, abstractmethod
from typing import List

from taskboard.domain.models.activity_log import ActivityLog


class ActivityLogRepository(ABC):
    """Append-only store of board activity."""

    @abstractmethod
    async def add(self, entry: ActivityLog) -> ActivityLog:
        """Record an activity entry."""
        pass

    @abstractmethod
    async def find_by_board(self, board_id: str, limit: int = 50) -> List[ActivityLog]:
        """Most recent activity of a board, newest first."""
        pass

    @abstractmethod
    async def find_by_task(self, task_id: str) -> List[ActivityLog]:
        """Activity related to a task, newest first."""
        pass
