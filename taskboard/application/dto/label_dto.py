"""
Label DTOs for the application layer.
"""

from typing import Optional
from pydantic import Field, field_validator

from taskboard.infrastructure.validation.validators import DataValidator, BoardValidator
from .base_dto import RequestDTO, ResponseDTO, CreateRequestDTO, UpdateRequestDTO


class LabelPayloadDTO(CreateRequestDTO):
    """Body of a label creation request."""

    name: str = Field(description="Label name (max 50 characters, unique per board)")
    color: Optional[str] = Field(default=None, description="Label color (#RRGGBB)")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return BoardValidator.validate_title(v, 50)

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return DataValidator.validate_hex_color(v) if v is not None else v


class CreateLabelRequestDTO(LabelPayloadDTO):
    """DTO for creating a label on a board."""

    board_id: str = Field(min_length=1, description="Board ID")


class LabelUpdatePayloadDTO(UpdateRequestDTO):
    """Body of a label update."""

    name: Optional[str] = Field(default=None, description="Label name")
    color: Optional[str] = Field(default=None, description="Label color (#RRGGBB)")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return BoardValidator.validate_title(v, 50) if v is not None else v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return DataValidator.validate_hex_color(v) if v is not None else v


class UpdateLabelRequestDTO(LabelUpdatePayloadDTO):
    """DTO for updating a label."""

    id: str = Field(min_length=1, description="Label ID")


class LabelIdRequestDTO(RequestDTO):
    """DTO addressing a single label."""

    id: str = Field(min_length=1, description="Label ID")


class ListLabelsRequestDTO(RequestDTO):
    """DTO for listing a board's labels."""

    board_id: str = Field(min_length=1, description="Board ID")


class TaskLabelRequestDTO(RequestDTO):
    """DTO for attaching a label to, or detaching it from, a task."""

    task_id: str = Field(min_length=1, description="Task ID")
    label_id: str = Field(min_length=1, description="Label ID")


class LabelResponseDTO(ResponseDTO):
    """DTO for label responses."""

    board_id: str = Field(description="Board ID")
    name: str = Field(description="Label name")
    color: str = Field(description="Label color")
    text_color: str = Field(description="Readable text color on the label")
    task_count: int = Field(default=0, description="Tasks carrying this label")
