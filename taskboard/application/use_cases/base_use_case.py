"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TypeVar, Generic
from dataclasses import dataclass
from datetime import datetime

from pydantic import ValidationError as PydanticValidationError

from taskboard.domain.models.base import (
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    OrderConflictError,
    utc_now
)
from taskboard.domain.repositories.transaction_manager import TransactionManager


T = TypeVar('T')
R = TypeVar('R')

logger = logging.getLogger(__name__)


@dataclass
class UseCaseResult(Generic[T]):
    """Result wrapper for use case operations."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success_result(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "UseCaseResult[T]":
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def error_result(
        cls,
        error: str,
        error_code: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "UseCaseResult[T]":
        """Create an error result."""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            metadata=metadata
        )

    @classmethod
    def from_exception(cls, exc: Exception) -> "UseCaseResult[T]":
        """Create error result from exception."""
        if isinstance(exc, ValidationError):
            return cls.error_result(exc.message, "VALIDATION_ERROR")
        elif isinstance(exc, PydanticValidationError):
            return cls.error_result(str(exc), "VALIDATION_ERROR")
        elif isinstance(exc, BusinessRuleViolation):
            return cls.error_result(exc.message, "BUSINESS_RULE_VIOLATION")
        elif isinstance(exc, DomainException):
            return cls.error_result(exc.message, exc.code)
        else:
            return cls.error_result(str(exc), "UNKNOWN_ERROR")


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.
    Provides common structure and error handling.
    """

    def __init__(self):
        self.execution_start: Optional[datetime] = None
        self.execution_end: Optional[datetime] = None

    async def execute(self, request: T) -> UseCaseResult[R]:
        """
        Execute the use case with proper error handling and logging.
        """
        self.execution_start = utc_now()

        try:
            await self._validate_request(request)

            result = await self._execute_business_logic(request)

            self.execution_end = utc_now()
            execution_time = (self.execution_end - self.execution_start).total_seconds()

            return UseCaseResult.success_result(
                result,
                metadata={
                    "execution_time_seconds": execution_time,
                    "executed_at": self.execution_end.isoformat()
                }
            )

        except Exception as exc:
            self.execution_end = utc_now()
            execution_time = (self.execution_end - self.execution_start).total_seconds()

            if isinstance(exc, (DomainException, PydanticValidationError)):
                logger.info("%s failed: %s", type(self).__name__, exc)
            else:
                logger.exception("%s failed unexpectedly", type(self).__name__)

            error_result = UseCaseResult.from_exception(exc)
            error_result.metadata = {
                "execution_time_seconds": execution_time,
                "failed_at": self.execution_end.isoformat(),
                "exception_type": type(exc).__name__
            }

            return error_result

    async def _validate_request(self, request: T) -> None:
        """
        Validate the request. Override in subclasses if needed.
        """
        if hasattr(request, 'model_validate'):
            # Pydantic models
            request.model_validate(request.model_dump())

    @abstractmethod
    async def _execute_business_logic(self, request: T) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass


class QueryUseCase(BaseUseCase[T, R]):
    """
    Base class for query use cases (read operations).
    """
    pass


class CommandUseCase(BaseUseCase[T, R]):
    """
    Base class for command use cases (write operations).
    The unit of work is committed when the command succeeds and rolled back
    when it raises.
    """

    def __init__(self, transaction_manager: Optional[TransactionManager] = None):
        super().__init__()
        self.transaction_manager = transaction_manager

    async def _execute_business_logic(self, request: T) -> R:
        """
        Execute command with transaction handling.
        """
        try:
            result = await self._execute_command_logic(request)

            if self.transaction_manager:
                await self.transaction_manager.commit()

            return result

        except Exception:
            if self.transaction_manager:
                await self.transaction_manager.rollback()
            raise

    @abstractmethod
    async def _execute_command_logic(self, request: T) -> R:
        """Execute the command logic. Must be implemented by subclasses."""
        pass


# Specific use case patterns
class CreateUseCase(CommandUseCase[T, R]):
    """Base class for entity creation use cases."""
    pass


class AppendUseCase(CreateUseCase[T, R]):
    """
    Base class for creating an ordered child (a column or a task).

    When the request carries no explicit ``order`` the child is appended; an
    append that loses the race for its order to a concurrent writer is run
    again up to ``append_retries`` times. Explicit orders are never retried.
    """

    def __init__(
        self,
        transaction_manager: Optional[TransactionManager] = None,
        append_retries: int = 0
    ):
        super().__init__(transaction_manager)
        self.append_retries = append_retries

    async def _execute_business_logic(self, request: T) -> R:
        attempt = 0
        while True:
            try:
                return await super()._execute_business_logic(request)
            except OrderConflictError as exc:
                if getattr(request, "order", None) is not None or attempt >= self.append_retries:
                    raise
                attempt += 1
                logger.warning(
                    "%s lost an order race (%s), retry %d of %d",
                    type(self).__name__, exc.message, attempt, self.append_retries
                )


class UpdateUseCase(CommandUseCase[T, R]):
    """Base class for entity update use cases."""
    pass


class DeleteUseCase(CommandUseCase[T, R]):
    """Base class for entity deletion use cases."""
    pass


# Authorization mixin
class AuthorizedUseCase(BaseUseCase[T, R]):
    """
    Mixin for use cases that act on behalf of a user.
    The acting user is identified by the caller; no credentials are checked here.
    """

    current_user_id: Optional[str] = None

    def set_current_user(self, user_id: Optional[str]) -> "AuthorizedUseCase":
        """Set the acting user."""
        self.current_user_id = user_id
        return self

    async def _validate_request(self, request: T) -> None:
        """Validate request with authorization check."""
        await super()._validate_request(request)

        if not self.current_user_id:
            raise ValidationError("Acting user is required", "user_id")

        await self._check_authorization(request)

    async def _check_authorization(self, request: T) -> None:
        """Check if the current user is authorized. Override in subclasses."""
        pass

    def _require_board_member(self, board) -> None:
        """Only the owner and members may change a board."""
        if not board.can_edit(self.current_user_id):
            raise BusinessRuleViolation("Insufficient permissions: not a member of this board")

    def _require_board_owner(self, board) -> None:
        if not board.can_delete(self.current_user_id):
            raise BusinessRuleViolation("Insufficient permissions: only the board owner can do this")
