"""
Transaction manager interface.
Use cases commit or roll back the unit of work through this port.
"""

from abc import ABC, abstractmethod


class TransactionManager(ABC):
    """Commits or rolls back the pending changes of one unit of work."""

    @abstractmethod
    async def commit(self) -> None:
        """
        Make pending changes durable.
        Raises OrderConflictError when a (parent, order) pair would be duplicated.
        """
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Discard pending changes."""
        pass
