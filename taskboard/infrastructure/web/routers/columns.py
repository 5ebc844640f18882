"""
Column router.
Columns are created and ordered within a board and addressed by ID afterwards.
"""

from typing import List
from fastapi import APIRouter, status

from taskboard.application.use_cases.column_use_cases import (
    CreateColumnUseCase,
    ListColumnsUseCase,
    GetColumnUseCase,
    UpdateColumnUseCase,
    DeleteColumnUseCase,
    ReorderColumnsUseCase,
    CompactColumnsUseCase
)
from taskboard.application.dto.column_dto import (
    ColumnPayloadDTO,
    CreateColumnRequestDTO,
    ColumnUpdatePayloadDTO,
    UpdateColumnRequestDTO,
    ColumnIdRequestDTO,
    ListColumnsRequestDTO,
    ColumnOrderPayloadDTO,
    ReorderColumnsRequestDTO,
    ColumnResponseDTO
)
from taskboard.infrastructure.web.dependencies import RepositoriesDep, SettingsDep, CurrentUserDep
from taskboard.infrastructure.web.middleware.error_handler import unwrap_result, build_request_dto


router = APIRouter()


@router.get("/boards/{board_id}/columns", response_model=List[ColumnResponseDTO])
async def list_columns(board_id: str, repos: RepositoriesDep):
    """List a board's columns in ascending order."""
    use_case = ListColumnsUseCase(repos.columns, repos.boards)
    return unwrap_result(await use_case.execute(
        build_request_dto(ListColumnsRequestDTO, board_id=board_id)
    ))


@router.post(
    "/boards/{board_id}/columns",
    status_code=status.HTTP_201_CREATED,
    response_model=ColumnResponseDTO
)
async def create_column(
    board_id: str,
    payload: ColumnPayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep,
    settings: SettingsDep
):
    """
    Add a column to a board.

    - **title**: Column title (required)
    - **order**: Explicit position; omitted means after the last column
    - **wip_limit**: Optional work in progress limit
    """
    request = build_request_dto(
        CreateColumnRequestDTO, board_id=board_id, **payload.model_dump(exclude_unset=True)
    )
    use_case = CreateColumnUseCase(
        repos.columns,
        repos.boards,
        repos.activity,
        repos.transaction_manager,
        append_retries=settings.append_conflict_retries
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.put("/boards/{board_id}/columns/order", response_model=List[ColumnResponseDTO])
async def reorder_columns(
    board_id: str,
    payload: ColumnOrderPayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """
    Reorder every column of a board.

    - **column_ids**: Each column ID exactly once, in the new sequence
    """
    request = build_request_dto(ReorderColumnsRequestDTO, board_id=board_id, column_ids=payload.column_ids)
    use_case = ReorderColumnsUseCase(
        repos.columns, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.post("/boards/{board_id}/columns/compact", response_model=List[ColumnResponseDTO])
async def compact_columns(board_id: str, user_id: CurrentUserDep, repos: RepositoriesDep):
    """Close the gaps left by deleted columns."""
    use_case = CompactColumnsUseCase(
        repos.columns, repos.boards, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(
        build_request_dto(ListColumnsRequestDTO, board_id=board_id)
    ))


@router.get("/columns/{column_id}", response_model=ColumnResponseDTO)
async def get_column(column_id: str, repos: RepositoriesDep):
    """Get a column by ID."""
    use_case = GetColumnUseCase(repos.columns)
    return unwrap_result(await use_case.execute(build_request_dto(ColumnIdRequestDTO, id=column_id)))


@router.patch("/columns/{column_id}", response_model=ColumnResponseDTO)
async def update_column(
    column_id: str,
    payload: ColumnUpdatePayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """Rename a column or change its WIP limit."""
    request = build_request_dto(
        UpdateColumnRequestDTO, id=column_id, **payload.model_dump(exclude_unset=True)
    )
    use_case = UpdateColumnUseCase(
        repos.columns, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.delete("/columns/{column_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_column(column_id: str, user_id: CurrentUserDep, repos: RepositoriesDep):
    """Delete a column and its tasks. The other columns keep their orders."""
    use_case = DeleteColumnUseCase(
        repos.columns, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    unwrap_result(await use_case.execute(build_request_dto(ColumnIdRequestDTO, id=column_id)))
