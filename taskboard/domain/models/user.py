"""
User domain model.
A person who owns boards, joins boards as a member and works on tasks.
"""

from dataclasses import dataclass
from typing import Optional
import re

from taskboard.domain.models.base import BaseEntity, ValidationError
from taskboard.domain.models.value_objects import Email


USER_NAME_PATTERN = re.compile(r'^[a-zA-Z0-9_]+$')


@dataclass(kw_only=True)
class User(BaseEntity):
    """User entity."""

    email: str
    user_name: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        self.validate()

    def validate(self) -> None:
        """Validate user state."""
        Email(self.email)

        if not self.user_name:
            raise ValidationError("User name is required", "user_name")

        if len(self.user_name) < 3 or len(self.user_name) > 50:
            raise ValidationError("User name must be between 3 and 50 characters", "user_name")

        if not USER_NAME_PATTERN.match(self.user_name):
            raise ValidationError(
                "User name can only contain letters, numbers and underscores", "user_name"
            )

        if self.full_name and len(self.full_name) > 255:
            raise ValidationError("Full name too long (max 255 characters)", "full_name")

        if self.avatar_url and len(self.avatar_url) > 500:
            raise ValidationError("Avatar URL too long (max 500 characters)", "avatar_url")

    @classmethod
    def create(
        cls,
        email: str,
        user_name: str,
        full_name: Optional[str] = None,
        avatar_url: Optional[str] = None
    ) -> "User":
        """Create a new user with a normalized email."""
        return cls(
            email=Email.from_string(email).address,
            user_name=user_name.strip(),
            full_name=full_name.strip() if full_name else None,
            avatar_url=avatar_url
        )

    @property
    def display_name(self) -> str:
        """Full name when known, otherwise the user name."""
        return self.full_name or self.user_name

    def update_profile(
        self,
        full_name: Optional[str] = None,
        avatar_url: Optional[str] = None
    ) -> None:
        """Update profile information."""
        if full_name is not None:
            self.full_name = full_name.strip() or None
        if avatar_url is not None:
            self.avatar_url = avatar_url or None

        self.validate()
        self.mark_as_updated()

    def update_user_name(self, user_name: str) -> None:
        """Change the user name. Uniqueness is checked by the caller."""
        old = self.user_name
        self.user_name = (user_name or "").strip()
        try:
            self.validate()
        except ValidationError:
            self.user_name = old
            raise
        self.mark_as_updated()
