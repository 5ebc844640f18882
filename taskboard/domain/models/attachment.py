"""
Attachment domain model.
Metadata about a file stored elsewhere; the file itself is not handled here.
"""

from dataclasses import dataclass
from typing import Optional
import os

from taskboard.domain.models.base import BaseEntity, ValidationError
from taskboard.domain.models.value_objects import FileSize


DOCUMENT_MIME_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "text/plain",
})

EXTENSION_ICONS = {
    ".pdf": "file-pdf",
    ".doc": "file-word",
    ".docx": "file-word",
    ".xls": "file-excel",
    ".xlsx": "file-excel",
    ".zip": "archive",
    ".rar": "archive",
    ".7z": "archive",
    ".mp4": "video",
    ".avi": "video",
    ".mov": "video",
    ".mp3": "music",
    ".wav": "music",
}


@dataclass(kw_only=True)
class Attachment(BaseEntity):
    """Attachment entity."""

    file_name: str
    file_url: str
    file_size: int
    task_id: str
    uploaded_by: str
    mime_type: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        self.validate()

    def validate(self) -> None:
        if not self.file_name or not self.file_name.strip():
            raise ValidationError("File name is required", "file_name")
        if len(self.file_name) > 255:
            raise ValidationError("File name too long (max 255 characters)", "file_name")
        if not self.file_url:
            raise ValidationError("File URL is required", "file_url")
        FileSize(self.file_size)
        if not self.task_id:
            raise ValidationError("Task ID is required", "task_id")
        if not self.uploaded_by:
            raise ValidationError("Uploader is required", "uploaded_by")

    @property
    def file_extension(self) -> str:
        return os.path.splitext(self.file_name)[1].lower()

    @property
    def formatted_file_size(self) -> str:
        return FileSize(self.file_size).format()

    @property
    def is_image(self) -> bool:
        return bool(self.mime_type) and self.mime_type.lower().startswith("image/")

    @property
    def is_document(self) -> bool:
        return bool(self.mime_type) and self.mime_type.lower() in DOCUMENT_MIME_TYPES

    @property
    def icon_name(self) -> str:
        if self.is_image:
            return "image"
        if self.is_document:
            return "file-text"
        return EXTENSION_ICONS.get(self.file_extension, "file")

    def can_be_deleted_by(self, user_id: str) -> bool:
        return user_id == self.uploaded_by
