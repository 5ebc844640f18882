"""
Board DTOs for the application layer.
Data Transfer Objects for boards, membership and activity.
"""

from typing import Optional, List
from datetime import datetime
from pydantic import Field, field_validator

from taskboard.domain.models.board import BoardRole
from taskboard.infrastructure.validation.validators import DataValidator, BoardValidator
from .base_dto import RequestDTO, ResponseDTO, CreateRequestDTO, UpdateRequestDTO
from .column_dto import ColumnResponseDTO
from .label_dto import LabelResponseDTO


class CreateBoardRequestDTO(CreateRequestDTO):
    """DTO for creating a board."""

    title: str = Field(description="Board title (max 100 characters)")
    description: Optional[str] = Field(default=None, max_length=500, description="Board description")
    color: Optional[str] = Field(default=None, description="Board color (#RRGGBB)")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return BoardValidator.validate_title(v, 100)

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return DataValidator.validate_hex_color(v) if v is not None else v


class BoardUpdatePayloadDTO(UpdateRequestDTO):
    """Body of a board update. Omitted fields are left unchanged."""

    title: Optional[str] = Field(default=None, description="Board title")
    description: Optional[str] = Field(default=None, max_length=500, description="Board description")
    color: Optional[str] = Field(default=None, description="Board color (#RRGGBB)")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return BoardValidator.validate_title(v, 100) if v is not None else v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return DataValidator.validate_hex_color(v) if v is not None else v


class UpdateBoardRequestDTO(BoardUpdatePayloadDTO):
    """DTO for updating a board."""

    id: str = Field(description="Board ID")


class BoardIdRequestDTO(RequestDTO):
    """DTO addressing a single board."""

    id: str = Field(min_length=1, description="Board ID")


class MemberPayloadDTO(RequestDTO):
    """Body of a membership request."""

    user_id: str = Field(min_length=1, description="User to add")
    role: BoardRole = Field(default=BoardRole.MEMBER, description="Role of the new member")

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        if v in (BoardRole.OWNER, BoardRole.OWNER.value):
            raise ValueError("Owner role cannot be granted")
        return v


class AddMemberRequestDTO(MemberPayloadDTO):
    """DTO for adding a member to a board."""

    board_id: str = Field(min_length=1, description="Board ID")


class MemberRolePayloadDTO(RequestDTO):
    """Body of a role change."""

    role: BoardRole = Field(description="New role: member or admin")

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        if v in (BoardRole.OWNER, BoardRole.OWNER.value):
            raise ValueError("Owner role cannot be granted")
        return v


class ChangeMemberRoleRequestDTO(MemberRolePayloadDTO):
    """DTO for changing a member's role."""

    board_id: str = Field(min_length=1, description="Board ID")
    user_id: str = Field(min_length=1, description="Member whose role changes")


class RemoveMemberRequestDTO(RequestDTO):
    """DTO for removing a member from a board."""

    board_id: str = Field(min_length=1, description="Board ID")
    user_id: str = Field(min_length=1, description="User to remove")


class BoardMemberResponseDTO(ResponseDTO):
    """DTO for board membership responses."""

    board_id: str
    user_id: str
    role: BoardRole
    joined_at: datetime
    user_name: Optional[str] = None
    full_name: Optional[str] = None


class BoardResponseDTO(ResponseDTO):
    """DTO for board responses."""

    title: str = Field(description="Board title")
    description: Optional[str] = Field(default=None, description="Board description")
    color: str = Field(description="Board color")
    is_favorite: bool = Field(description="Favorite flag")
    owner_id: str = Field(description="Owner user ID")
    column_count: int = Field(default=0, description="Number of columns")
    member_count: int = Field(default=0, description="Number of members, owner excluded")


class BoardDetailsResponseDTO(BoardResponseDTO):
    """Board with its ordered columns, labels and members."""

    columns: List[ColumnResponseDTO] = Field(default_factory=list)
    labels: List[LabelResponseDTO] = Field(default_factory=list)
    members: List[BoardMemberResponseDTO] = Field(default_factory=list)


class ActivityLogResponseDTO(ResponseDTO):
    """DTO for activity feed entries."""

    board_id: str
    user_id: str
    activity_type: str
    description: str
    related_task_id: Optional[str] = None
    related_column_id: Optional[str] = None
    related_user_id: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None


class BoardActivityRequestDTO(RequestDTO):
    """DTO for reading a board's activity feed."""

    board_id: str = Field(min_length=1, description="Board ID")
    limit: Optional[int] = Field(default=None, ge=1, le=500, description="Maximum entries")
