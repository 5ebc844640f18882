"""
User management router.
"""

from typing import List
from fastapi import APIRouter, status

from taskboard.application.use_cases.user_use_cases import (
    CreateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserProfileUseCase,
    UpdateUserNameUseCase,
    DeleteUserUseCase
)
from taskboard.application.dto.user_dto import (
    CreateUserRequestDTO,
    UserProfilePayloadDTO,
    UpdateUserProfileRequestDTO,
    UserNamePayloadDTO,
    UpdateUserNameRequestDTO,
    UserIdRequestDTO,
    UserResponseDTO
)
from taskboard.infrastructure.web.dependencies import RepositoriesDep
from taskboard.infrastructure.web.middleware.error_handler import unwrap_result, build_request_dto


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponseDTO)
async def create_user(request: CreateUserRequestDTO, repos: RepositoriesDep):
    """
    Register a user.

    - **email**: Email address (unique)
    - **user_name**: User name (unique, letters, digits and underscores)
    - **full_name**: Optional full name
    - **avatar_url**: Optional avatar URL
    """
    use_case = CreateUserUseCase(repos.users, repos.transaction_manager)
    return unwrap_result(await use_case.execute(request))


@router.get("", response_model=List[UserResponseDTO])
async def list_users(repos: RepositoriesDep):
    """List every user, ordered by user name."""
    use_case = ListUsersUseCase(repos.users)
    return unwrap_result(await use_case.execute(None))


@router.get("/{user_id}", response_model=UserResponseDTO)
async def get_user(user_id: str, repos: RepositoriesDep):
    """Get a user by ID."""
    use_case = GetUserUseCase(repos.users)
    return unwrap_result(await use_case.execute(build_request_dto(UserIdRequestDTO, id=user_id)))


@router.patch("/{user_id}", response_model=UserResponseDTO)
async def update_user_profile(user_id: str, payload: UserProfilePayloadDTO, repos: RepositoriesDep):
    """Update the full name or avatar of a user."""
    request = build_request_dto(
        UpdateUserProfileRequestDTO, id=user_id, **payload.model_dump(exclude_unset=True)
    )
    use_case = UpdateUserProfileUseCase(repos.users, repos.transaction_manager)
    return unwrap_result(await use_case.execute(request))


@router.put("/{user_id}/user-name", response_model=UserResponseDTO)
async def update_user_name(user_id: str, payload: UserNamePayloadDTO, repos: RepositoriesDep):
    """Change a user's user name. The new name must be unused."""
    request = build_request_dto(UpdateUserNameRequestDTO, id=user_id, user_name=payload.user_name)
    use_case = UpdateUserNameUseCase(repos.users, repos.transaction_manager)
    return unwrap_result(await use_case.execute(request))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, repos: RepositoriesDep):
    """Delete a user who owns no boards."""
    use_case = DeleteUserUseCase(repos.users, repos.boards, repos.transaction_manager)
    unwrap_result(await use_case.execute(build_request_dto(UserIdRequestDTO, id=user_id)))
