"""
Board mapper for converting between domain entities and database models.
"""

from taskboard.domain.models.board import Board, BoardMember, BoardRole
from taskboard.infrastructure.db.models import BoardModel, BoardMemberModel


class BoardMapper:
    """Maps between Board domain entity and BoardModel database model."""

    def domain_to_model(self, board: Board) -> BoardModel:
        """Convert Board domain entity to BoardModel. Child ids are not stored here."""
        return BoardModel(
            id=board.id,
            owner_id=board.owner_id,
            title=board.title,
            description=board.description,
            color=board.color,
            is_favorite=board.is_favorite,
            created_at=board.created_at,
            updated_at=board.updated_at
        )

    def model_to_domain(self, model: BoardModel) -> Board:
        """
        Convert BoardModel to Board domain entity.
        Column, member and label ids are read from the loaded relationships.
        """
        return Board(
            id=model.id,
            title=model.title,
            owner_id=model.owner_id,
            description=model.description,
            color=model.color,
            is_favorite=bool(model.is_favorite),
            column_ids=[column.id for column in model.columns],
            member_ids=[
                member.user_id for member in model.members
                if member.user_id != model.owner_id
            ],
            label_ids=[label.id for label in model.labels],
            created_at=model.created_at,
            updated_at=model.updated_at
        )

    def update_model(self, model: BoardModel, board: Board) -> None:
        model.title = board.title
        model.description = board.description
        model.color = board.color
        model.is_favorite = board.is_favorite
        model.updated_at = board.updated_at

    def member_to_domain(self, model: BoardMemberModel) -> BoardMember:
        return BoardMember(
            board_id=model.board_id,
            user_id=model.user_id,
            role=BoardRole(model.role),
            joined_at=model.joined_at
        )
