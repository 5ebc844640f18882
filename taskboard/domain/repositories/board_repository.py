"""
Board repository interface.
Defines the contract for board and board membership persistence.
"""

from abc import abstractmethod
from typing import List, Optional

from taskboard.domain.models.board import Board, BoardMember, BoardRole
from taskboard.domain.repositories.base_repository import Repository


class BoardRepository(Repository[Board]):
    """
    Repository interface for Board entity.
    Membership rows are managed here as well since they have no life of their own.
    """

    @abstractmethod
    async def find_user_boards(self, user_id: str) -> List[Board]:
        """
        Boards the user owns or is a member of.
        Favorites come first, then the newest boards.
        """
        pass

    @abstractmethod
    async def find_favorite_boards(self, user_id: str) -> List[Board]:
        """Favorite boards the user has access to."""
        pass

    @abstractmethod
    async def is_member(self, board_id: str, user_id: str) -> bool:
        """Check whether the user is the owner or a member of the board."""
        pass

    @abstractmethod
    async def is_owner(self, board_id: str, user_id: str) -> bool:
        """Check whether the user owns the board."""
        pass

    @abstractmethod
    async def get_members(self, board_id: str) -> List[BoardMember]:
        """All memberships of a board, owner included."""
        pass

    @abstractmethod
    async def get_member(self, board_id: str, user_id: str) -> Optional[BoardMember]:
        """A single membership, or None."""
        pass

    @abstractmethod
    async def add_member(self, board_id: str, user_id: str, role: BoardRole = BoardRole.MEMBER) -> BoardMember:
        """
        Add a user to a board.
        Raises EntityNotFoundError if the board does not exist.
        """
        pass

    @abstractmethod
    async def update_member(self, member: BoardMember) -> BoardMember:
        """Persist a changed membership (role)."""
        pass

    @abstractmethod
    async def remove_member(self, board_id: str, user_id: str) -> bool:
        """Remove a membership. Returns True if one was removed."""
        pass
