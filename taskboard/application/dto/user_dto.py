"""
User DTOs for the application layer.
"""

from typing import Optional
from pydantic import Field, field_validator

from taskboard.infrastructure.validation.validators import DataValidator, BoardValidator
from .base_dto import RequestDTO, ResponseDTO, CreateRequestDTO, UpdateRequestDTO


class CreateUserRequestDTO(CreateRequestDTO):
    """DTO for creating a user."""

    email: str = Field(max_length=255, description="Email address")
    user_name: str = Field(description="Unique user name (letters, digits, underscore)")
    full_name: Optional[str] = Field(default=None, max_length=255, description="Full name")
    avatar_url: Optional[str] = Field(default=None, max_length=500, description="Avatar URL")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return DataValidator.validate_email(v)

    @field_validator("user_name")
    @classmethod
    def validate_user_name(cls, v):
        return BoardValidator.validate_user_name(v)

    @field_validator("avatar_url")
    @classmethod
    def validate_avatar_url(cls, v):
        if v is None or not v.strip():
            return None
        return DataValidator.validate_url(v)


class UserProfilePayloadDTO(UpdateRequestDTO):
    """Body of a profile update."""

    full_name: Optional[str] = Field(default=None, max_length=255, description="Full name")
    avatar_url: Optional[str] = Field(default=None, max_length=500, description="Avatar URL")

    @field_validator("avatar_url")
    @classmethod
    def validate_avatar_url(cls, v):
        if v is None or not v.strip():
            return v
        return DataValidator.validate_url(v)


class UpdateUserProfileRequestDTO(UserProfilePayloadDTO):
    """DTO for updating profile fields."""

    id: str = Field(description="User ID")


class UserNamePayloadDTO(UpdateRequestDTO):
    """Body of a user name change."""

    user_name: str = Field(description="New user name")

    @field_validator("user_name")
    @classmethod
    def validate_user_name(cls, v):
        return BoardValidator.validate_user_name(v)


class UpdateUserNameRequestDTO(UserNamePayloadDTO):
    """DTO for changing the user name."""

    id: str = Field(description="User ID")


class UserIdRequestDTO(RequestDTO):
    """DTO addressing a single user."""

    id: str = Field(min_length=1, description="User ID")


class UserResponseDTO(ResponseDTO):
    """DTO for user responses."""

    email: str = Field(description="Email address")
    user_name: str = Field(description="User name")
    full_name: Optional[str] = Field(default=None, description="Full name")
    avatar_url: Optional[str] = Field(default=None, description="Avatar URL")
    display_name: str = Field(description="Name to show in the UI")
