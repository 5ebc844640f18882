"""
Value Objects for the domain layer.
Immutable objects that represent values and encapsulate small rules.
"""

from dataclasses import dataclass
import re

from taskboard.domain.models.base import ValueObject, ValidationError


HEX_COLOR_PATTERN = re.compile(r'^#[0-9A-Fa-f]{6}$')
EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


@dataclass(frozen=True)
class HexColor(ValueObject):
    """A #RRGGBB color."""

    value: str

    def validate(self) -> None:
        if not self.value or not HEX_COLOR_PATTERN.match(self.value):
            raise ValidationError(
                f"Color must be a valid hex color (e.g. #4f46e5): {self.value}", "color"
            )

    @property
    def rgb(self) -> tuple:
        """Red, green and blue components as integers."""
        return tuple(int(self.value[i:i + 2], 16) for i in (1, 3, 5))

    def luminance(self) -> float:
        """Perceived luminance between 0 and 1."""
        r, g, b = self.rgb
        return (0.299 * r + 0.587 * g + 0.114 * b) / 255

    def contrast_text_color(self) -> str:
        """Black or white, whichever reads better on this color."""
        return "#000000" if self.luminance() > 0.5 else "#ffffff"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Email(ValueObject):
    """Value object representing a validated email address."""

    address: str

    def validate(self) -> None:
        """Validate the email address using basic regex."""
        if not self.address:
            raise ValidationError("Email cannot be empty", "email")
        if len(self.address) > 255:
            raise ValidationError("Email too long (max 255 characters)", "email")
        if not EMAIL_PATTERN.match(self.address):
            raise ValidationError(f"Invalid email address: {self.address}", "email")

    @classmethod
    def from_string(cls, email_str: str) -> "Email":
        """Create Email from string."""
        return cls(email_str.strip().lower())

    def __str__(self) -> str:
        return self.address


@dataclass(frozen=True)
class FileSize(ValueObject):
    """Size of an uploaded file in bytes."""

    bytes: int

    def validate(self) -> None:
        if self.bytes <= 0:
            raise ValidationError("File size must be greater than 0", "file_size")

    def format(self) -> str:
        """Human readable size, e.g. '1.5 MB'."""
        units = ["B", "KB", "MB", "GB"]
        size = float(self.bytes)
        unit = 0
        while size >= 1024 and unit < len(units) - 1:
            size /= 1024
            unit += 1
        if unit == 0:
            return f"{int(size)} {units[unit]}"
        return f"{size:.1f} {units[unit]}"

    def __str__(self) -> str:
        return self.format()
