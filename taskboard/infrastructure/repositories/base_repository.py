"""
Shared SQLAlchemy repository behaviour.
"""

import logging
from typing import Any, Dict, Generic, List, Optional, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.domain.models.base import EntityNotFoundError, OrderConflictError
from taskboard.infrastructure.db.database import translate_integrity_error


T = TypeVar('T')

logger = logging.getLogger(__name__)


class SQLAlchemyRepository(Generic[T]):
    """
    Base class for SQLAlchemy repositories.

    Subclasses set ``model_class``, ``entity_name`` and a mapper exposing
    ``domain_to_model``, ``model_to_domain`` and ``update_model``. Repositories
    flush but never commit; the transaction belongs to the caller.
    """

    model_class: Any = None
    entity_name: str = "Entity"

    def __init__(self, session: Session, mapper):
        self.session = session
        self.mapper = mapper

    async def save(self, entity: T) -> T:
        """Insert the entity, or update the row that has its ID."""
        model = self.session.get(self.model_class, entity.id)
        if model is None:
            model = self.mapper.domain_to_model(entity)
            self.session.add(model)
        else:
            self.mapper.update_model(model, entity)

        self._flush()
        return entity

    async def find_by_id(self, entity_id: str) -> Optional[T]:
        model = self.session.get(self.model_class, entity_id)
        if model is None:
            return None
        return self.mapper.model_to_domain(model)

    async def delete(self, entity_id: str) -> bool:
        model = self.session.get(self.model_class, entity_id)
        if model is None:
            return False
        self.session.delete(model)
        self._flush()
        return True

    async def exists(self, entity_id: str) -> bool:
        return self.session.query(self.model_class.id).filter_by(id=entity_id).first() is not None

    def _get_model_or_raise(self, model_class, entity_type: str, entity_id: str):
        model = self.session.get(model_class, entity_id)
        if model is None:
            raise EntityNotFoundError(entity_type, entity_id)
        return model

    def _flush(self, parent_type: Optional[str] = None, parent_id: Optional[str] = None,
               order: Optional[int] = None) -> None:
        """
        Flush pending changes, translating integrity errors.
        The session is rolled back when the store rejects the changes.
        """
        try:
            self.session.flush()
        except IntegrityError as exc:
            self._raise_translated(exc, parent_type, parent_id, order)

    def _raise_translated(self, exc: IntegrityError, parent_type: Optional[str],
                          parent_id: Optional[str], order: Optional[int]) -> None:
        self.session.rollback()
        error = translate_integrity_error(exc, order)
        if isinstance(error, OrderConflictError) and parent_type:
            error = OrderConflictError(parent_type, parent_id, order)
        logger.warning("%s write rejected: %s", self.entity_name, error.message)
        raise error from exc

    def _write_positions(self, model_class, parent_field: str, parent_type: str,
                         parent_id: str, plan: List[Dict[str, int]]) -> None:
        """
        Apply a renumbering plan step by step.

        Each step is a mapping of child id to position and is written row by
        row before the next step starts. Any failure rolls back the whole
        transaction.
        """
        try:
            for step in plan:
                for child_id, position in step.items():
                    self.session.query(model_class).filter(
                        model_class.id == child_id,
                        getattr(model_class, parent_field) == parent_id
                    ).update({"position": position}, synchronize_session=False)
                self.session.flush()
        except IntegrityError as exc:
            self._raise_translated(exc, parent_type, parent_id, None)

        self.session.expire_all()
