"""
Data Transfer Objects for the application layer.
"""

from .base_dto import BaseDTO, RequestDTO, ResponseDTO, CreateRequestDTO, UpdateRequestDTO
from .user_dto import (
    CreateUserRequestDTO, UserProfilePayloadDTO, UpdateUserProfileRequestDTO,
    UserNamePayloadDTO, UpdateUserNameRequestDTO, UserIdRequestDTO, UserResponseDTO
)
from .column_dto import (
    ColumnPayloadDTO, CreateColumnRequestDTO, ColumnUpdatePayloadDTO,
    UpdateColumnRequestDTO, ColumnIdRequestDTO, ListColumnsRequestDTO,
    ColumnOrderPayloadDTO, ReorderColumnsRequestDTO, ColumnResponseDTO
)
from .label_dto import (
    LabelPayloadDTO, CreateLabelRequestDTO, LabelUpdatePayloadDTO,
    UpdateLabelRequestDTO, LabelIdRequestDTO, ListLabelsRequestDTO,
    TaskLabelRequestDTO, LabelResponseDTO
)
from .comment_dto import (
    CommentPayloadDTO, AddCommentRequestDTO, UpdateCommentRequestDTO,
    CommentIdRequestDTO, TaskCommentsRequestDTO, CommentResponseDTO,
    AttachmentPayloadDTO, AddAttachmentRequestDTO, AttachmentIdRequestDTO,
    AttachmentResponseDTO
)
from .board_dto import (
    CreateBoardRequestDTO, BoardUpdatePayloadDTO, UpdateBoardRequestDTO,
    BoardIdRequestDTO, MemberPayloadDTO, AddMemberRequestDTO,
    MemberRolePayloadDTO, ChangeMemberRoleRequestDTO, RemoveMemberRequestDTO,
    BoardMemberResponseDTO, BoardResponseDTO,
    BoardDetailsResponseDTO, ActivityLogResponseDTO, BoardActivityRequestDTO
)
from .task_dto import (
    TaskPayloadDTO, CreateTaskRequestDTO, TaskUpdatePayloadDTO,
    UpdateTaskRequestDTO, TaskIdRequestDTO, ListTasksRequestDTO,
    AssignmentPayloadDTO, AssignTaskRequestDTO, CompletionPayloadDTO,
    CompleteTaskRequestDTO, MovePayloadDTO, MoveTaskRequestDTO,
    TaskOrderPayloadDTO, ReorderTasksRequestDTO, TaskResponseDTO,
    TaskDetailsResponseDTO
)
