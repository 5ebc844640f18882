"""
Base entity, value object and exception types for the domain layer.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime, timezone
from typing import Optional, Any, Dict
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
import uuid


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    """Generate a new entity identifier."""
    return str(uuid.uuid4())


@dataclass(kw_only=True)
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Provides common attributes and behavior for all entities.
    """

    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Initialize entity after creation."""
        if self.created_at is None:
            self.created_at = utc_now()

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        return hash((self.__class__.__name__, self.id))

    def mark_as_updated(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = utc_now()

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary representation."""
        data = {}
        for key, value in self.__dict__.items():
            if key.startswith('_'):
                continue
            if isinstance(value, datetime):
                data[key] = value.isoformat()
            elif isinstance(value, Enum):
                data[key] = value.value
            elif isinstance(value, BaseEntity):
                data[key] = value.to_dict()
            elif isinstance(value, list):
                data[key] = [
                    item.to_dict() if isinstance(item, BaseEntity) else item
                    for item in value
                ]
            else:
                data[key] = value
        return data


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when entity validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class InvalidReorderError(ValidationError):
    """Raised when a reorder list does not match the parent's current children."""

    def __init__(self, message: str, parent_type: str, parent_id: str):
        super().__init__(message, "ordered_ids")
        self.parent_type = parent_type
        self.parent_id = parent_id


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateEntityError(DomainException):
    """Exception raised when trying to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: Any):
        message = f"{entity_type} with {field}='{value}' already exists"
        super().__init__(message, "DUPLICATE_ENTITY")
        self.entity_type = entity_type
        self.field = field
        self.value = value


class OrderConflictError(DomainException):
    """
    Raised when a write would give two children of the same parent the same order.

    The storage layer enforces uniqueness of (parent, order); this is how that
    violation surfaces to callers.
    """

    def __init__(self, parent_type: str, parent_id: Any, order: Optional[int] = None):
        if order is None:
            message = f"Order conflict among children of {parent_type} {parent_id}"
        else:
            message = f"Order {order} is already taken in {parent_type} {parent_id}"
        super().__init__(message, "ORDER_CONFLICT")
        self.parent_type = parent_type
        self.parent_id = parent_id
        self.order = order


class PersistenceError(DomainException):
    """Raised when the store rejects a write for a reason other than ordering."""

    def __init__(self, message: str):
        super().__init__(message, "PERSISTENCE_ERROR")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.
    Value objects are immutable and are compared by their values.
    """

    def __post_init__(self):
        """Validate value object after creation."""
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        """Validate the value object's state."""
        pass
