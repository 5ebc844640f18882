"""
Comment and attachment DTOs for the application layer.
"""

from typing import Optional
from pydantic import Field, field_validator

from taskboard.infrastructure.validation.validators import SecurityValidator, DataValidator
from .base_dto import RequestDTO, ResponseDTO, CreateRequestDTO


class CommentPayloadDTO(CreateRequestDTO):
    """Body of a new or edited comment. HTML is sanitized."""

    content: str = Field(min_length=1, max_length=2000, description="Comment content")

    @field_validator("content")
    @classmethod
    def sanitize_content(cls, v):
        v = SecurityValidator.sanitize_html(v).strip()
        if not v:
            raise ValueError("Comment content is required")
        return v


class AddCommentRequestDTO(CommentPayloadDTO):
    """DTO for adding a comment to a task."""

    task_id: str = Field(min_length=1, description="Task ID")


class UpdateCommentRequestDTO(CommentPayloadDTO):
    """DTO for editing a comment."""

    id: str = Field(min_length=1, description="Comment ID")


class CommentIdRequestDTO(RequestDTO):
    """DTO addressing a single comment."""

    id: str = Field(min_length=1, description="Comment ID")


class TaskCommentsRequestDTO(RequestDTO):
    """DTO for listing a task's comments or attachments."""

    task_id: str = Field(min_length=1, description="Task ID")


class CommentResponseDTO(ResponseDTO):
    """DTO for comment responses."""

    task_id: str = Field(description="Task ID")
    user_id: str = Field(description="Author user ID")
    content: str = Field(description="Comment content")
    is_edited: bool = Field(default=False, description="Whether the comment was edited")


class AttachmentPayloadDTO(CreateRequestDTO):
    """Body registering an uploaded file."""

    file_name: str = Field(min_length=1, max_length=255, description="File name")
    file_url: str = Field(max_length=1000, description="Where the file is stored")
    file_size: int = Field(gt=0, description="File size in bytes")
    mime_type: Optional[str] = Field(default=None, max_length=100, description="MIME type")

    @field_validator("file_name")
    @classmethod
    def validate_file_name(cls, v):
        return SecurityValidator.sanitize_filename(v)

    @field_validator("file_url")
    @classmethod
    def validate_file_url(cls, v):
        return DataValidator.validate_url(v)


class AddAttachmentRequestDTO(AttachmentPayloadDTO):
    """DTO for registering an uploaded file on a task."""

    task_id: str = Field(min_length=1, description="Task ID")


class AttachmentIdRequestDTO(RequestDTO):
    """DTO addressing a single attachment."""

    id: str = Field(min_length=1, description="Attachment ID")


class AttachmentResponseDTO(ResponseDTO):
    """DTO for attachment responses."""

    task_id: str = Field(description="Task ID")
    file_name: str = Field(description="File name")
    file_url: str = Field(description="File URL")
    file_size: int = Field(description="File size in bytes")
    formatted_file_size: str = Field(description="Human readable size")
    mime_type: Optional[str] = Field(default=None, description="MIME type")
    icon_name: str = Field(description="Icon hint for the UI")
    uploaded_by: str = Field(description="Uploader user ID")
