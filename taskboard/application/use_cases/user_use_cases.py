"""
User use cases.
"""

import logging
from typing import List, Optional

from taskboard.domain.models.user import User
from taskboard.domain.models.base import (
    EntityNotFoundError,
    DuplicateEntityError,
    BusinessRuleViolation
)
from taskboard.domain.repositories.user_repository import UserRepository
from taskboard.domain.repositories.board_repository import BoardRepository
from taskboard.domain.repositories.transaction_manager import TransactionManager
from taskboard.application.dto.user_dto import (
    CreateUserRequestDTO,
    UpdateUserProfileRequestDTO,
    UpdateUserNameRequestDTO,
    UserIdRequestDTO,
    UserResponseDTO
)
from .base_use_case import (
    CreateUseCase,
    UpdateUseCase,
    DeleteUseCase,
    QueryUseCase
)


logger = logging.getLogger(__name__)


def user_to_response_dto(user: User) -> UserResponseDTO:
    """Convert User domain model to response DTO."""
    return UserResponseDTO(
        id=user.id,
        email=user.email,
        user_name=user.user_name,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
        display_name=user.display_name,
        created_at=user.created_at,
        updated_at=user.updated_at
    )


class CreateUserUseCase(CreateUseCase[CreateUserRequestDTO, UserResponseDTO]):
    """Use case for registering a user. Email and user name must be unused."""

    def __init__(
        self,
        user_repository: UserRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.user_repository = user_repository

    async def _execute_command_logic(self, request: CreateUserRequestDTO) -> UserResponseDTO:
        if await self.user_repository.find_by_email(request.email):
            raise DuplicateEntityError("User", "email", request.email)

        if await self.user_repository.find_by_user_name(request.user_name):
            raise DuplicateEntityError("User", "user_name", request.user_name)

        user = User.create(
            email=request.email,
            user_name=request.user_name,
            full_name=request.full_name,
            avatar_url=request.avatar_url
        )
        await self.user_repository.save(user)
        logger.info("Created user %s (%s)", user.id, user.user_name)

        return user_to_response_dto(user)


class GetUserUseCase(QueryUseCase[UserIdRequestDTO, UserResponseDTO]):
    """Use case for reading a user."""

    def __init__(self, user_repository: UserRepository):
        super().__init__()
        self.user_repository = user_repository

    async def _execute_business_logic(self, request: UserIdRequestDTO) -> UserResponseDTO:
        user = await self.user_repository.find_by_id(request.id)
        if not user:
            raise EntityNotFoundError("User", request.id)
        return user_to_response_dto(user)


class ListUsersUseCase(QueryUseCase[None, List[UserResponseDTO]]):
    """Use case for listing every user."""

    def __init__(self, user_repository: UserRepository):
        super().__init__()
        self.user_repository = user_repository

    async def _execute_business_logic(self, request: None) -> List[UserResponseDTO]:
        users = await self.user_repository.list_all()
        return [user_to_response_dto(user) for user in users]


class UpdateUserProfileUseCase(UpdateUseCase[UpdateUserProfileRequestDTO, UserResponseDTO]):
    """Use case for updating profile fields."""

    def __init__(
        self,
        user_repository: UserRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.user_repository = user_repository

    async def _execute_command_logic(self, request: UpdateUserProfileRequestDTO) -> UserResponseDTO:
        user = await self.user_repository.find_by_id(request.id)
        if not user:
            raise EntityNotFoundError("User", request.id)

        user.update_profile(full_name=request.full_name, avatar_url=request.avatar_url)
        await self.user_repository.save(user)

        return user_to_response_dto(user)


class UpdateUserNameUseCase(UpdateUseCase[UpdateUserNameRequestDTO, UserResponseDTO]):
    """Use case for changing a user name. The new name must be unused."""

    def __init__(
        self,
        user_repository: UserRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.user_repository = user_repository

    async def _execute_command_logic(self, request: UpdateUserNameRequestDTO) -> UserResponseDTO:
        user = await self.user_repository.find_by_id(request.id)
        if not user:
            raise EntityNotFoundError("User", request.id)

        existing = await self.user_repository.find_by_user_name(request.user_name)
        if existing and existing.id != user.id:
            raise DuplicateEntityError("User", "user_name", request.user_name)

        user.update_user_name(request.user_name)
        await self.user_repository.save(user)

        return user_to_response_dto(user)


class DeleteUserUseCase(DeleteUseCase[UserIdRequestDTO, bool]):
    """Use case for deleting a user who owns no boards."""

    def __init__(
        self,
        user_repository: UserRepository,
        board_repository: BoardRepository,
        transaction_manager: Optional[TransactionManager] = None
    ):
        super().__init__(transaction_manager)
        self.user_repository = user_repository
        self.board_repository = board_repository

    async def _execute_command_logic(self, request: UserIdRequestDTO) -> bool:
        user = await self.user_repository.find_by_id(request.id)
        if not user:
            raise EntityNotFoundError("User", request.id)

        boards = await self.board_repository.find_user_boards(user.id)
        if any(board.owner_id == user.id for board in boards):
            raise BusinessRuleViolation("Cannot delete a user who still owns boards")

        await self.user_repository.delete(user.id)
        logger.info("Deleted user %s", user.id)
        return True
