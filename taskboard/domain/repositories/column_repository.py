"""
Column repository interface.
Defines the contract for column persistence, including column ordering.
"""

from abc import abstractmethod
from typing import List

from taskboard.domain.models.column import Column
from taskboard.domain.repositories.base_repository import Repository


class ColumnRepository(Repository[Column]):
    """
    Repository interface for Column entity.
    Orders are unique per board; writes that would break that raise
    OrderConflictError.
    """

    @abstractmethod
    async def find_by_board(self, board_id: str) -> List[Column]:
        """Columns of a board in ascending order."""
        pass

    @abstractmethod
    async def get_next_order(self, board_id: str) -> int:
        """
        Order for a column appended to the board: max + 1, or 0 when the board
        has no columns.
        Raises EntityNotFoundError if the board does not exist.
        """
        pass

    @abstractmethod
    async def reorder_columns(self, board_id: str, ordered_column_ids: List[str]) -> List[Column]:
        """
        Renumber the board's columns to 0..N-1 following the given sequence.
        The list must contain every column of the board exactly once.
        Raises EntityNotFoundError or InvalidReorderError; nothing is written on
        failure.
        """
        pass

    @abstractmethod
    async def compact_columns(self, board_id: str) -> List[Column]:
        """Close gaps in the board's column orders, keeping their sequence."""
        pass

