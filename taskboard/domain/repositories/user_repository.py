"""
User repository interface.
Defines the contract for user data persistence operations.
"""

from abc import abstractmethod
from typing import List, Optional

from taskboard.domain.models.user import User
from taskboard.domain.repositories.base_repository import Repository


class UserRepository(Repository[User]):
    """Repository interface for User entity."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email address (case-insensitive)."""
        pass

    @abstractmethod
    async def find_by_user_name(self, user_name: str) -> Optional[User]:
        """Find a user by user name."""
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: List[str]) -> List[User]:
        """Find all users with the given IDs."""
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        """Return all users ordered by user name."""
        pass
