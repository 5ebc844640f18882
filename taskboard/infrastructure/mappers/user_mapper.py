"""
User mapper for converting between domain entities and database models.
"""

from taskboard.domain.models.user import User
from taskboard.infrastructure.db.models import UserModel


class UserMapper:
    """Maps between User domain entity and UserModel database model."""

    def domain_to_model(self, user: User) -> UserModel:
        """Convert User domain entity to UserModel."""
        return UserModel(
            id=user.id,
            email=user.email,
            user_name=user.user_name,
            full_name=user.full_name,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
            updated_at=user.updated_at
        )

    def model_to_domain(self, model: UserModel) -> User:
        """Convert UserModel to User domain entity."""
        return User(
            id=model.id,
            email=model.email,
            user_name=model.user_name,
            full_name=model.full_name,
            avatar_url=model.avatar_url,
            created_at=model.created_at,
            updated_at=model.updated_at
        )

    def update_model(self, model: UserModel, user: User) -> None:
        """Copy mutable fields from the entity onto an existing row."""
        model.email = user.email
        model.user_name = user.user_name
        model.full_name = user.full_name
        model.avatar_url = user.avatar_url
        model.updated_at = user.updated_at
