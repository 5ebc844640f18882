"""
Column DTOs for the application layer.

Payload DTOs carry what a client sends in a request body; the request DTOs
extend them with the ids taken from the URL.
"""

from typing import Optional, List
from pydantic import Field, field_validator

from taskboard.infrastructure.validation.validators import BoardValidator
from .base_dto import RequestDTO, ResponseDTO, CreateRequestDTO, UpdateRequestDTO


class ColumnPayloadDTO(CreateRequestDTO):
    """Body of a column creation request."""

    title: str = Field(description="Column title (max 100 characters)")
    order: Optional[int] = Field(default=None, ge=0, description="Explicit position")
    wip_limit: Optional[int] = Field(default=None, gt=0, description="Work in progress limit")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return BoardValidator.validate_title(v, 100)


class CreateColumnRequestDTO(ColumnPayloadDTO):
    """
    DTO for creating a column.
    Without ``order`` the column is appended after the board's last column.
    """

    board_id: str = Field(min_length=1, description="Board ID")


class ColumnUpdatePayloadDTO(UpdateRequestDTO):
    """
    Body of a column update.
    ``clear_wip_limit`` removes the limit; a given ``wip_limit`` replaces it.
    """

    title: Optional[str] = Field(default=None, description="Column title")
    wip_limit: Optional[int] = Field(default=None, gt=0, description="Work in progress limit")
    clear_wip_limit: bool = Field(default=False, description="Remove the WIP limit")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return BoardValidator.validate_title(v, 100) if v is not None else v


class UpdateColumnRequestDTO(ColumnUpdatePayloadDTO):
    """DTO for updating a column."""

    id: str = Field(min_length=1, description="Column ID")


class ColumnIdRequestDTO(RequestDTO):
    """DTO addressing a single column."""

    id: str = Field(min_length=1, description="Column ID")


class ListColumnsRequestDTO(RequestDTO):
    """DTO for listing a board's columns."""

    board_id: str = Field(min_length=1, description="Board ID")


class ColumnOrderPayloadDTO(RequestDTO):
    """Body of a full column reorder."""

    column_ids: List[str] = Field(description="Every column ID of the board in the new sequence")

    @field_validator("column_ids")
    @classmethod
    def validate_column_ids(cls, v):
        return BoardValidator.validate_ordered_ids(v)


class ReorderColumnsRequestDTO(ColumnOrderPayloadDTO):
    """DTO for a full reorder of a board's columns."""

    board_id: str = Field(min_length=1, description="Board ID")


class ColumnResponseDTO(ResponseDTO):
    """DTO for column responses."""

    board_id: str = Field(description="Board ID")
    title: str = Field(description="Column title")
    order: int = Field(description="Position among the board's columns")
    wip_limit: Optional[int] = Field(default=None, description="Work in progress limit")
    task_count: int = Field(default=0, description="Number of tasks")
    has_reached_wip_limit: bool = Field(default=False, description="Whether the column is full")
