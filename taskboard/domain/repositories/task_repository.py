"""
Task repository interface.
Defines the contract for task persistence, including ordering within columns.
"""

from abc import abstractmethod
from typing import List, Optional

from taskboard.domain.models.task import Task
from taskboard.domain.repositories.base_repository import Repository


class TaskRepository(Repository[Task]):
    """
    Repository interface for Task entity.
    Orders are unique per column; writes that would break that raise
    OrderConflictError.
    """

    @abstractmethod
    async def find_by_column(self, column_id: str) -> List[Task]:
        """Tasks of a column in ascending order."""
        pass

    @abstractmethod
    async def find_by_board(self, board_id: str) -> List[Task]:
        """Tasks of every column of a board, by column order then task order."""
        pass

    @abstractmethod
    async def find_with_details(self, task_id: str) -> Optional[Task]:
        """
        Find a task with its labels, active comments and attachments loaded.
        """
        pass

    @abstractmethod
    async def get_board_id(self, task_id: str) -> Optional[str]:
        """Board of the column the task currently sits in."""
        pass

    @abstractmethod
    async def get_next_order_in_column(self, column_id: str) -> int:
        """
        Order for a task appended to the column: max + 1, or 0 when empty.
        Raises EntityNotFoundError if the column does not exist.
        """
        pass

    @abstractmethod
    async def reorder_tasks_in_column(self, column_id: str, ordered_task_ids: List[str]) -> List[Task]:
        """
        Renumber the column's tasks to 0..N-1 following the given sequence.
        The list must contain every task of the column exactly once.
        """
        pass

    @abstractmethod
    async def update_task_order(self, task_id: str, new_column_id: str, new_order: int) -> Task:
        """
        Move a task: set its column and order directly.
        Neither the source nor the destination column is renumbered.
        Raises EntityNotFoundError, ValidationError for a negative order, and
        OrderConflictError when the destination order is taken.
        """
        pass

    @abstractmethod
    async def compact_column(self, column_id: str) -> List[Task]:
        """Close gaps in the column's task orders, keeping their sequence."""
        pass
