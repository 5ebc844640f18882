"""
Generic repository interface.
Defines the persistence operations shared by every entity repository.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar


T = TypeVar('T')


class Repository(ABC, Generic[T]):
    """
    Base repository interface.
    Implementations work inside the caller's transaction and never commit.
    """

    @abstractmethod
    async def save(self, entity: T) -> T:
        """
        Insert or update an entity.
        Returns the saved entity.
        """
        pass

    @abstractmethod
    async def find_by_id(self, entity_id: str) -> Optional[T]:
        """
        Find an entity by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def delete(self, entity_id: str) -> bool:
        """
        Delete an entity by ID.
        Returns True if something was deleted.
        """
        pass

    async def exists(self, entity_id: str) -> bool:
        """Check if an entity exists."""
        return await self.find_by_id(entity_id) is not None
