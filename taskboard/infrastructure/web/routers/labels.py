"""
Label router.
"""

from typing import List
from fastapi import APIRouter, status

from taskboard.application.use_cases.label_use_cases import (
    CreateLabelUseCase,
    ListLabelsUseCase,
    UpdateLabelUseCase,
    DeleteLabelUseCase
)
from taskboard.application.dto.label_dto import (
    LabelPayloadDTO,
    CreateLabelRequestDTO,
    LabelUpdatePayloadDTO,
    UpdateLabelRequestDTO,
    LabelIdRequestDTO,
    ListLabelsRequestDTO,
    LabelResponseDTO
)
from taskboard.infrastructure.web.dependencies import RepositoriesDep, SettingsDep, CurrentUserDep
from taskboard.infrastructure.web.middleware.error_handler import unwrap_result, build_request_dto


router = APIRouter()


@router.get("/boards/{board_id}/labels", response_model=List[LabelResponseDTO])
async def list_labels(board_id: str, repos: RepositoriesDep):
    """List a board's labels by name."""
    use_case = ListLabelsUseCase(repos.labels, repos.boards)
    return unwrap_result(await use_case.execute(
        build_request_dto(ListLabelsRequestDTO, board_id=board_id)
    ))


@router.post(
    "/boards/{board_id}/labels",
    status_code=status.HTTP_201_CREATED,
    response_model=LabelResponseDTO
)
async def create_label(
    board_id: str,
    payload: LabelPayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep,
    settings: SettingsDep
):
    """
    Create a label on a board.

    - **name**: Label name, unique within the board
    - **color**: Label color (#RRGGBB); defaults to the configured color
    """
    request = build_request_dto(
        CreateLabelRequestDTO, board_id=board_id, **payload.model_dump(exclude_unset=True)
    )
    use_case = CreateLabelUseCase(
        repos.labels,
        repos.boards,
        repos.activity,
        repos.transaction_manager,
        default_color=settings.default_label_color
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.patch("/labels/{label_id}", response_model=LabelResponseDTO)
async def update_label(
    label_id: str,
    payload: LabelUpdatePayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """Rename or recolor a label."""
    request = build_request_dto(
        UpdateLabelRequestDTO, id=label_id, **payload.model_dump(exclude_unset=True)
    )
    use_case = UpdateLabelUseCase(
        repos.labels, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.delete("/labels/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_label(label_id: str, user_id: CurrentUserDep, repos: RepositoriesDep):
    """Delete a label and detach it from every task."""
    use_case = DeleteLabelUseCase(
        repos.labels, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    unwrap_result(await use_case.execute(build_request_dto(LabelIdRequestDTO, id=label_id)))
