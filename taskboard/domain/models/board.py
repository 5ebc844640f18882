"""
Board domain model.
A board owns an ordered set of columns, a set of labels and its members.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List
from enum import Enum

from taskboard.domain.models.base import (
    BaseEntity,
    ValidationError,
    BusinessRuleViolation,
    utc_now
)
from taskboard.domain.models.value_objects import HexColor


DEFAULT_BOARD_COLOR = "#4f46e5"


class BoardRole(str, Enum):
    """Role of a member within a board."""
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"


@dataclass(kw_only=True)
class BoardMember:
    """Membership of a user in a board."""

    board_id: str
    user_id: str
    role: BoardRole = BoardRole.MEMBER
    joined_at: datetime = field(default_factory=utc_now)

    def change_role(self, role: BoardRole) -> None:
        """Change the member's role. The owner role cannot be granted this way."""
        if role == BoardRole.OWNER:
            raise BusinessRuleViolation("Board ownership cannot be granted to a member")
        if self.role == BoardRole.OWNER:
            raise BusinessRuleViolation("The board owner's role cannot be changed")
        self.role = role

    @property
    def can_manage_members(self) -> bool:
        return self.role in (BoardRole.OWNER, BoardRole.ADMIN)


@dataclass(kw_only=True)
class Board(BaseEntity):
    """
    Board entity.
    Holds references (ids) to its columns, members and labels; the children
    themselves are separate entities with their own repositories.
    """

    title: str
    owner_id: str
    description: Optional[str] = None
    color: str = DEFAULT_BOARD_COLOR
    is_favorite: bool = False

    column_ids: List[str] = field(default_factory=list)
    member_ids: List[str] = field(default_factory=list)
    label_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        self.validate()

    def validate(self) -> None:
        """Validate board state."""
        if not self.title or not self.title.strip():
            raise ValidationError("Board title is required", "title")

        if len(self.title) > 100:
            raise ValidationError("Board title too long (max 100 characters)", "title")

        if self.description and len(self.description) > 500:
            raise ValidationError("Board description too long (max 500 characters)", "description")

        if not self.owner_id:
            raise ValidationError("Board owner is required", "owner_id")

        HexColor(self.color)

    @classmethod
    def create(
        cls,
        title: str,
        owner_id: str,
        description: Optional[str] = None,
        color: Optional[str] = None
    ) -> "Board":
        return cls(
            title=title.strip() if title else title,
            owner_id=owner_id,
            description=description.strip() if description else None,
            color=color or DEFAULT_BOARD_COLOR
        )

    def update_title(self, title: str) -> None:
        if not title or not title.strip():
            raise ValidationError("Board title is required", "title")
        if len(title.strip()) > 100:
            raise ValidationError("Board title too long (max 100 characters)", "title")
        self.title = title.strip()
        self.mark_as_updated()

    def update_description(self, description: Optional[str]) -> None:
        if description and len(description.strip()) > 500:
            raise ValidationError("Board description too long (max 500 characters)", "description")
        self.description = description.strip() if description else None
        self.mark_as_updated()

    def update_color(self, color: str) -> None:
        HexColor(color)
        self.color = color
        self.mark_as_updated()

    def toggle_favorite(self) -> bool:
        """Flip the favorite flag and return the new value."""
        self.is_favorite = not self.is_favorite
        self.mark_as_updated()
        return self.is_favorite

    def add_column(self, column_id: str) -> None:
        if column_id in self.column_ids:
            raise BusinessRuleViolation("Column already belongs to this board")
        self.column_ids.append(column_id)
        self.mark_as_updated()

    def add_member(self, user_id: str) -> None:
        if user_id == self.owner_id:
            raise BusinessRuleViolation("Board owner is already a member")
        if user_id in self.member_ids:
            raise BusinessRuleViolation("User is already a member of this board")
        self.member_ids.append(user_id)
        self.mark_as_updated()

    def remove_member(self, user_id: str) -> None:
        if user_id == self.owner_id:
            raise BusinessRuleViolation("Board owner cannot be removed from the board")
        if user_id not in self.member_ids:
            raise BusinessRuleViolation("User is not a member of this board")
        self.member_ids.remove(user_id)
        self.mark_as_updated()

    def add_label(self, label_id: str) -> None:
        if label_id not in self.label_ids:
            self.label_ids.append(label_id)
            self.mark_as_updated()

    def remove_label(self, label_id: str) -> None:
        if label_id in self.label_ids:
            self.label_ids.remove(label_id)
            self.mark_as_updated()

    def is_member(self, user_id: str) -> bool:
        """Owner counts as a member."""
        return user_id == self.owner_id or user_id in self.member_ids

    def can_edit(self, user_id: str) -> bool:
        return self.is_member(user_id)

    def can_delete(self, user_id: str) -> bool:
        return user_id == self.owner_id
