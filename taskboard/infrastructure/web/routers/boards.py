"""
Board management router.
Handles boards, their membership and their activity feed.
"""

from typing import List, Optional
from fastapi import APIRouter, Query, status

from taskboard.application.use_cases.board_use_cases import (
    CreateBoardUseCase,
    GetBoardDetailsUseCase,
    ListUserBoardsUseCase,
    UpdateBoardUseCase,
    ToggleFavoriteUseCase,
    DeleteBoardUseCase,
    AddMemberUseCase,
    ChangeMemberRoleUseCase,
    RemoveMemberUseCase,
    GetBoardActivityUseCase
)
from taskboard.application.dto.board_dto import (
    CreateBoardRequestDTO,
    BoardUpdatePayloadDTO,
    UpdateBoardRequestDTO,
    BoardIdRequestDTO,
    MemberPayloadDTO,
    AddMemberRequestDTO,
    MemberRolePayloadDTO,
    ChangeMemberRoleRequestDTO,
    RemoveMemberRequestDTO,
    BoardActivityRequestDTO,
    BoardResponseDTO,
    BoardDetailsResponseDTO,
    BoardMemberResponseDTO,
    ActivityLogResponseDTO
)
from taskboard.infrastructure.web.dependencies import RepositoriesDep, SettingsDep, CurrentUserDep
from taskboard.infrastructure.web.middleware.error_handler import unwrap_result, build_request_dto


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=BoardResponseDTO)
async def create_board(
    request: CreateBoardRequestDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep,
    settings: SettingsDep
):
    """
    Create a board owned by the acting user.

    - **title**: Board title (required)
    - **description**: Optional description
    - **color**: Board color (#RRGGBB)

    The board starts with the configured default columns and labels.
    """
    use_case = CreateBoardUseCase(
        repos.boards,
        repos.columns,
        repos.labels,
        repos.users,
        repos.activity,
        repos.transaction_manager,
        default_color=settings.default_board_color,
        default_column_titles=settings.default_column_titles if settings.create_default_columns else [],
        create_default_labels=settings.create_default_labels
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.get("", response_model=List[BoardResponseDTO])
async def list_boards(
    user_id: CurrentUserDep,
    repos: RepositoriesDep,
    favorites: bool = Query(False, description="Only favorite boards")
):
    """List the boards the acting user owns or belongs to, favorites first."""
    use_case = ListUserBoardsUseCase(repos.boards, favorites_only=favorites).set_current_user(user_id)
    return unwrap_result(await use_case.execute(None))


@router.get("/{board_id}", response_model=BoardDetailsResponseDTO)
async def get_board(board_id: str, repos: RepositoriesDep):
    """Get a board with its ordered columns, labels and members."""
    use_case = GetBoardDetailsUseCase(repos.boards, repos.columns, repos.labels, repos.users)
    return unwrap_result(await use_case.execute(build_request_dto(BoardIdRequestDTO, id=board_id)))


@router.patch("/{board_id}", response_model=BoardResponseDTO)
async def update_board(
    board_id: str,
    payload: BoardUpdatePayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """Update a board's title, description or color."""
    request = build_request_dto(
        UpdateBoardRequestDTO, id=board_id, **payload.model_dump(exclude_unset=True)
    )
    use_case = UpdateBoardUseCase(
        repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.post("/{board_id}/favorite", response_model=BoardResponseDTO)
async def toggle_favorite(board_id: str, user_id: CurrentUserDep, repos: RepositoriesDep):
    """Flip the board's favorite flag."""
    use_case = ToggleFavoriteUseCase(
        repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(build_request_dto(BoardIdRequestDTO, id=board_id)))


@router.delete("/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_board(board_id: str, user_id: CurrentUserDep, repos: RepositoriesDep):
    """Delete a board with everything on it. Owner only."""
    use_case = DeleteBoardUseCase(repos.boards, repos.transaction_manager).set_current_user(user_id)
    unwrap_result(await use_case.execute(build_request_dto(BoardIdRequestDTO, id=board_id)))


@router.post(
    "/{board_id}/members",
    status_code=status.HTTP_201_CREATED,
    response_model=BoardMemberResponseDTO
)
async def add_member(
    board_id: str,
    payload: MemberPayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """
    Add a user to the board.

    - **user_id**: User to add
    - **role**: `member` (default) or `admin`
    """
    request = build_request_dto(
        AddMemberRequestDTO, board_id=board_id, **payload.model_dump(exclude_unset=True)
    )
    use_case = AddMemberUseCase(
        repos.boards, repos.users, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.patch("/{board_id}/members/{member_id}", response_model=BoardMemberResponseDTO)
async def change_member_role(
    board_id: str,
    member_id: str,
    payload: MemberRolePayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """Change a member's role to `member` or `admin`."""
    request = build_request_dto(
        ChangeMemberRoleRequestDTO, board_id=board_id, user_id=member_id, role=payload.role
    )
    use_case = ChangeMemberRoleUseCase(
        repos.boards, repos.users, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.delete("/{board_id}/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    board_id: str,
    member_id: str,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """Remove a member from the board. The owner cannot be removed."""
    request = build_request_dto(RemoveMemberRequestDTO, board_id=board_id, user_id=member_id)
    use_case = RemoveMemberUseCase(
        repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    unwrap_result(await use_case.execute(request))


@router.get("/{board_id}/activity", response_model=List[ActivityLogResponseDTO])
async def get_board_activity(
    board_id: str,
    repos: RepositoriesDep,
    settings: SettingsDep,
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum entries")
):
    """Get the board's activity feed, newest first."""
    request = build_request_dto(BoardActivityRequestDTO, board_id=board_id, limit=limit)
    use_case = GetBoardActivityUseCase(
        repos.boards, repos.activity, default_limit=settings.activity_feed_limit
    )
    return unwrap_result(await use_case.execute(request))
