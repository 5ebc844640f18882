"""
User repository implementation using SQLAlchemy.
"""

from typing import Optional, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from taskboard.domain.models.user import User
from taskboard.domain.repositories.user_repository import UserRepository
from taskboard.infrastructure.db.models import UserModel
from taskboard.infrastructure.mappers.user_mapper import UserMapper
from taskboard.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """SQLAlchemy implementation of user repository."""

    model_class = UserModel
    entity_name = "User"

    def __init__(self, session: Session):
        super().__init__(session, UserMapper())

    async def find_by_email(self, email: str) -> Optional[User]:
        model = self.session.query(UserModel).filter(
            func.lower(UserModel.email) == (email or "").strip().lower()
        ).first()
        return self.mapper.model_to_domain(model) if model else None

    async def find_by_user_name(self, user_name: str) -> Optional[User]:
        model = self.session.query(UserModel).filter_by(
            user_name=(user_name or "").strip()
        ).first()
        return self.mapper.model_to_domain(model) if model else None

    async def find_by_ids(self, user_ids: List[str]) -> List[User]:
        if not user_ids:
            return []
        models = self.session.query(UserModel).filter(UserModel.id.in_(user_ids)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    async def list_all(self) -> List[User]:
        models = self.session.query(UserModel).order_by(UserModel.user_name).all()
        return [self.mapper.model_to_domain(model) for model in models]
