"""
Application layer use cases.
Business logic for boards, columns, tasks and their collaborators.
"""

from .base_use_case import *
from .user_use_cases import *
from .board_use_cases import *
from .column_use_cases import *
from .task_use_cases import *
from .label_use_cases import *
from .comment_use_cases import *

__all__ = [
    # Base Use Cases
    "UseCaseResult",
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",
    "CreateUseCase",
    "AppendUseCase",
    "UpdateUseCase",
    "DeleteUseCase",
    "AuthorizedUseCase",

    # User Use Cases
    "CreateUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "UpdateUserProfileUseCase",
    "UpdateUserNameUseCase",
    "DeleteUserUseCase",

    # Board Use Cases
    "CreateBoardUseCase",
    "GetBoardDetailsUseCase",
    "ListUserBoardsUseCase",
    "UpdateBoardUseCase",
    "ToggleFavoriteUseCase",
    "DeleteBoardUseCase",
    "AddMemberUseCase",
    "ChangeMemberRoleUseCase",
    "RemoveMemberUseCase",
    "GetBoardActivityUseCase",

    # Column Use Cases
    "CreateColumnUseCase",
    "ListColumnsUseCase",
    "GetColumnUseCase",
    "UpdateColumnUseCase",
    "DeleteColumnUseCase",
    "ReorderColumnsUseCase",
    "CompactColumnsUseCase",

    # Task Use Cases
    "CreateTaskUseCase",
    "GetTaskUseCase",
    "ListTasksUseCase",
    "UpdateTaskUseCase",
    "CompleteTaskUseCase",
    "AssignTaskUseCase",
    "MoveTaskUseCase",
    "ReorderTasksUseCase",
    "DeleteTaskUseCase",

    # Label Use Cases
    "CreateLabelUseCase",
    "ListLabelsUseCase",
    "UpdateLabelUseCase",
    "DeleteLabelUseCase",
    "AttachLabelUseCase",
    "DetachLabelUseCase",

    # Comment Use Cases
    "AddCommentUseCase",
    "ListCommentsUseCase",
    "UpdateCommentUseCase",
    "DeleteCommentUseCase",
    "AddAttachmentUseCase",
    "ListAttachmentsUseCase",
    "DeleteAttachmentUseCase",
]
