"""
FastAPI dependencies.
Provides the request-scoped session, repositories and acting user.
"""

from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from taskboard.config import Settings, get_settings
from taskboard.infrastructure.db.database import get_db, SQLAlchemyTransactionManager
from taskboard.infrastructure.repositories import (
    SQLAlchemyUserRepository,
    SQLAlchemyBoardRepository,
    SQLAlchemyColumnRepository,
    SQLAlchemyTaskRepository,
    SQLAlchemyLabelRepository,
    SQLAlchemyCommentRepository,
    SQLAlchemyAttachmentRepository,
    SQLAlchemyActivityLogRepository
)


@dataclass
class Repositories:
    """Every repository of one request, sharing a session and its transaction."""

    users: SQLAlchemyUserRepository
    boards: SQLAlchemyBoardRepository
    columns: SQLAlchemyColumnRepository
    tasks: SQLAlchemyTaskRepository
    labels: SQLAlchemyLabelRepository
    comments: SQLAlchemyCommentRepository
    attachments: SQLAlchemyAttachmentRepository
    activity: SQLAlchemyActivityLogRepository
    transaction_manager: SQLAlchemyTransactionManager


def get_repositories(session: Session = Depends(get_db)) -> Repositories:
    """Dependency to get the repositories bound to the request session."""
    return Repositories(
        users=SQLAlchemyUserRepository(session),
        boards=SQLAlchemyBoardRepository(session),
        columns=SQLAlchemyColumnRepository(session),
        tasks=SQLAlchemyTaskRepository(session),
        labels=SQLAlchemyLabelRepository(session),
        comments=SQLAlchemyCommentRepository(session),
        attachments=SQLAlchemyAttachmentRepository(session),
        activity=SQLAlchemyActivityLogRepository(session),
        transaction_manager=SQLAlchemyTransactionManager(session)
    )


def get_app_settings() -> Settings:
    """Dependency to get the application settings."""
    return get_settings()


async def get_current_user_id(
    x_user_id: Annotated[Optional[str], Header(alias="X-User-Id")] = None
) -> str:
    """
    FastAPI dependency to get the acting user's ID.

    The ID is taken from the ``X-User-Id`` header as-is; it identifies the
    caller but is not a credential.

    Raises:
        HTTPException: If the header is missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error_code": "MISSING_USER", "message": "X-User-Id header is required"}
        )
    return x_user_id.strip()


RepositoriesDep = Annotated[Repositories, Depends(get_repositories)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
CurrentUserDep = Annotated[str, Depends(get_current_user_id)]
