"""
Board repository implementation using SQLAlchemy.
"""

from typing import Optional, List

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from taskboard.domain.models.board import Board, BoardMember, BoardRole
from taskboard.domain.models.base import utc_now
from taskboard.domain.repositories.board_repository import BoardRepository
from taskboard.infrastructure.db.models import BoardModel, BoardMemberModel
from taskboard.infrastructure.mappers.board_mapper import BoardMapper
from taskboard.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyBoardRepository(SQLAlchemyRepository[Board], BoardRepository):
    """SQLAlchemy implementation of board repository."""

    model_class = BoardModel
    entity_name = "Board"

    def __init__(self, session: Session):
        super().__init__(session, BoardMapper())

    def _query(self):
        return self.session.query(BoardModel).options(
            selectinload(BoardModel.columns),
            selectinload(BoardModel.members),
            selectinload(BoardModel.labels)
        )

    def _user_boards_query(self, user_id: str):
        member_board_ids = self.session.query(BoardMemberModel.board_id).filter(
            BoardMemberModel.user_id == user_id
        )
        return self._query().filter(
            or_(BoardModel.owner_id == user_id, BoardModel.id.in_(member_board_ids))
        )

    async def find_user_boards(self, user_id: str) -> List[Board]:
        models = self._user_boards_query(user_id).order_by(
            BoardModel.is_favorite.desc(),
            BoardModel.created_at.desc()
        ).all()
        return [self.mapper.model_to_domain(model) for model in models]

    async def find_favorite_boards(self, user_id: str) -> List[Board]:
        models = self._user_boards_query(user_id).filter(
            BoardModel.is_favorite.is_(True)
        ).order_by(BoardModel.created_at.desc()).all()
        return [self.mapper.model_to_domain(model) for model in models]

    async def is_member(self, board_id: str, user_id: str) -> bool:
        if await self.is_owner(board_id, user_id):
            return True
        return self.session.get(BoardMemberModel, (board_id, user_id)) is not None

    async def is_owner(self, board_id: str, user_id: str) -> bool:
        return self.session.query(BoardModel.id).filter_by(
            id=board_id, owner_id=user_id
        ).first() is not None

    async def get_members(self, board_id: str) -> List[BoardMember]:
        models = self.session.query(BoardMemberModel).filter_by(
            board_id=board_id
        ).order_by(BoardMemberModel.joined_at).all()
        return [self.mapper.member_to_domain(model) for model in models]

    async def get_member(self, board_id: str, user_id: str) -> Optional[BoardMember]:
        model = self.session.get(BoardMemberModel, (board_id, user_id))
        return self.mapper.member_to_domain(model) if model else None

    async def add_member(self, board_id: str, user_id: str, role: BoardRole = BoardRole.MEMBER) -> BoardMember:
        self._get_model_or_raise(BoardModel, "Board", board_id)
        model = BoardMemberModel(
            board_id=board_id,
            user_id=user_id,
            role=role,
            joined_at=utc_now()
        )
        self.session.add(model)
        self._flush()
        return self.mapper.member_to_domain(model)

    async def update_member(self, member: BoardMember) -> BoardMember:
        model = self._get_model_or_raise(
            BoardMemberModel, "BoardMember", (member.board_id, member.user_id)
        )
        model.role = member.role
        self._flush()
        return member

    async def remove_member(self, board_id: str, user_id: str) -> bool:
        model = self.session.get(BoardMemberModel, (board_id, user_id))
        if model is None:
            return False
        self.session.delete(model)
        self._flush()
        return True

    async def find_by_id(self, board_id: str) -> Optional[Board]:
        model = self._query().filter_by(id=board_id).first()
        return self.mapper.model_to_domain(model) if model else None
