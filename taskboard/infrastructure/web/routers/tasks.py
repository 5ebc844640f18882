"""
Task router.
Handles task creation, editing, moves between columns and ordering,
as well as the labels, comments and attachments of a task.
"""

from typing import List
from fastapi import APIRouter, status

from taskboard.application.use_cases.task_use_cases import (
    CreateTaskUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    UpdateTaskUseCase,
    CompleteTaskUseCase,
    AssignTaskUseCase,
    MoveTaskUseCase,
    ReorderTasksUseCase,
    DeleteTaskUseCase
)
from taskboard.application.use_cases.label_use_cases import AttachLabelUseCase, DetachLabelUseCase
from taskboard.application.use_cases.comment_use_cases import (
    AddCommentUseCase,
    ListCommentsUseCase,
    AddAttachmentUseCase,
    ListAttachmentsUseCase
)
from taskboard.application.dto.task_dto import (
    TaskPayloadDTO,
    CreateTaskRequestDTO,
    TaskUpdatePayloadDTO,
    UpdateTaskRequestDTO,
    TaskIdRequestDTO,
    ListTasksRequestDTO,
    AssignmentPayloadDTO,
    AssignTaskRequestDTO,
    CompletionPayloadDTO,
    CompleteTaskRequestDTO,
    MovePayloadDTO,
    MoveTaskRequestDTO,
    TaskOrderPayloadDTO,
    ReorderTasksRequestDTO,
    TaskResponseDTO,
    TaskDetailsResponseDTO
)
from taskboard.application.dto.label_dto import TaskLabelRequestDTO, LabelResponseDTO
from taskboard.application.dto.comment_dto import (
    CommentPayloadDTO,
    AddCommentRequestDTO,
    TaskCommentsRequestDTO,
    CommentResponseDTO,
    AttachmentPayloadDTO,
    AddAttachmentRequestDTO,
    AttachmentResponseDTO
)
from taskboard.infrastructure.web.dependencies import RepositoriesDep, SettingsDep, CurrentUserDep
from taskboard.infrastructure.web.middleware.error_handler import unwrap_result, build_request_dto


router = APIRouter()


@router.get("/columns/{column_id}/tasks", response_model=List[TaskResponseDTO])
async def list_tasks(column_id: str, repos: RepositoriesDep):
    """List a column's tasks in ascending order."""
    use_case = ListTasksUseCase(repos.tasks, repos.columns)
    return unwrap_result(await use_case.execute(
        build_request_dto(ListTasksRequestDTO, column_id=column_id)
    ))


@router.post(
    "/columns/{column_id}/tasks",
    status_code=status.HTTP_201_CREATED,
    response_model=TaskResponseDTO
)
async def create_task(
    column_id: str,
    payload: TaskPayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep,
    settings: SettingsDep
):
    """
    Create a task in a column.

    - **title**: Task title (required)
    - **description**: Optional description
    - **priority**: low, medium, high or critical
    - **due_date**: Optional due date
    - **assigned_user_id**: Optional assignee, must be a board member
    - **order**: Explicit position; omitted means after the last task
    """
    request = build_request_dto(
        CreateTaskRequestDTO, column_id=column_id, **payload.model_dump(exclude_unset=True)
    )
    use_case = CreateTaskUseCase(
        repos.tasks,
        repos.columns,
        repos.boards,
        repos.users,
        repos.activity,
        repos.transaction_manager,
        append_retries=settings.append_conflict_retries
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.put("/columns/{column_id}/tasks/order", response_model=List[TaskResponseDTO])
async def reorder_tasks(
    column_id: str,
    payload: TaskOrderPayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """
    Reorder every task of a column.

    - **task_ids**: Each task ID of the column exactly once, in the new sequence
    """
    request = build_request_dto(ReorderTasksRequestDTO, column_id=column_id, task_ids=payload.task_ids)
    use_case = ReorderTasksUseCase(
        repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.get("/tasks/{task_id}", response_model=TaskDetailsResponseDTO)
async def get_task(task_id: str, repos: RepositoriesDep):
    """Get a task with its labels, comments and attachments."""
    use_case = GetTaskUseCase(repos.tasks, repos.labels)
    return unwrap_result(await use_case.execute(build_request_dto(TaskIdRequestDTO, id=task_id)))


@router.patch("/tasks/{task_id}", response_model=TaskResponseDTO)
async def update_task(
    task_id: str,
    payload: TaskUpdatePayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """Update a task's title, description, priority or due date."""
    request = build_request_dto(
        UpdateTaskRequestDTO, id=task_id, **payload.model_dump(exclude_unset=True)
    )
    use_case = UpdateTaskUseCase(
        repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, user_id: CurrentUserDep, repos: RepositoriesDep):
    """Delete a task. The other tasks of the column keep their orders."""
    use_case = DeleteTaskUseCase(
        repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    unwrap_result(await use_case.execute(build_request_dto(TaskIdRequestDTO, id=task_id)))


@router.post("/tasks/{task_id}/move", response_model=TaskResponseDTO)
async def move_task(
    task_id: str,
    payload: MovePayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """
    Move a task to a column of the same board at a given order.

    - **column_id**: Destination column (may be the current one)
    - **order**: Destination position; must be free in the destination column
    - **close_gap**: Compact the source column after the move
    """
    request = build_request_dto(
        MoveTaskRequestDTO, task_id=task_id, **payload.model_dump(exclude_unset=True)
    )
    use_case = MoveTaskUseCase(
        repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.put("/tasks/{task_id}/completion", response_model=TaskResponseDTO)
async def set_task_completion(
    task_id: str,
    payload: CompletionPayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """Complete or reopen a task."""
    request = build_request_dto(CompleteTaskRequestDTO, task_id=task_id, completed=payload.completed)
    use_case = CompleteTaskUseCase(
        repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.put("/tasks/{task_id}/assignee", response_model=TaskResponseDTO)
async def assign_task(
    task_id: str,
    payload: AssignmentPayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """Assign a task to a board member, or unassign it with a null user."""
    request = build_request_dto(AssignTaskRequestDTO, task_id=task_id, user_id=payload.user_id)
    use_case = AssignTaskUseCase(
        repos.tasks,
        repos.columns,
        repos.boards,
        repos.users,
        repos.activity,
        repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.put("/tasks/{task_id}/labels/{label_id}", response_model=List[LabelResponseDTO])
async def attach_label(task_id: str, label_id: str, user_id: CurrentUserDep, repos: RepositoriesDep):
    """Attach a board label to a task."""
    request = build_request_dto(TaskLabelRequestDTO, task_id=task_id, label_id=label_id)
    use_case = AttachLabelUseCase(
        repos.labels, repos.tasks, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.delete("/tasks/{task_id}/labels/{label_id}", response_model=List[LabelResponseDTO])
async def detach_label(task_id: str, label_id: str, user_id: CurrentUserDep, repos: RepositoriesDep):
    """Detach a label from a task."""
    request = build_request_dto(TaskLabelRequestDTO, task_id=task_id, label_id=label_id)
    use_case = DetachLabelUseCase(
        repos.labels, repos.tasks, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.get("/tasks/{task_id}/comments", response_model=List[CommentResponseDTO])
async def list_comments(task_id: str, repos: RepositoriesDep):
    """List a task's comments, oldest first."""
    use_case = ListCommentsUseCase(repos.comments, repos.tasks)
    return unwrap_result(await use_case.execute(
        build_request_dto(TaskCommentsRequestDTO, task_id=task_id)
    ))


@router.post(
    "/tasks/{task_id}/comments",
    status_code=status.HTTP_201_CREATED,
    response_model=CommentResponseDTO
)
async def add_comment(
    task_id: str,
    payload: CommentPayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """
    Comment on a task.

    - **content**: Comment text; HTML is stripped
    """
    request = build_request_dto(AddCommentRequestDTO, task_id=task_id, content=payload.content)
    use_case = AddCommentUseCase(
        repos.comments, repos.tasks, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))


@router.get("/tasks/{task_id}/attachments", response_model=List[AttachmentResponseDTO])
async def list_attachments(task_id: str, repos: RepositoriesDep):
    """List a task's attachments."""
    use_case = ListAttachmentsUseCase(repos.attachments, repos.tasks)
    return unwrap_result(await use_case.execute(
        build_request_dto(TaskCommentsRequestDTO, task_id=task_id)
    ))


@router.post(
    "/tasks/{task_id}/attachments",
    status_code=status.HTTP_201_CREATED,
    response_model=AttachmentResponseDTO
)
async def add_attachment(
    task_id: str,
    payload: AttachmentPayloadDTO,
    user_id: CurrentUserDep,
    repos: RepositoriesDep
):
    """
    Register an uploaded file on a task.

    - **file_name**: File name
    - **file_url**: Where the file is stored
    - **file_size**: Size in bytes
    - **mime_type**: Optional MIME type
    """
    request = build_request_dto(
        AddAttachmentRequestDTO, task_id=task_id, **payload.model_dump(exclude_unset=True)
    )
    use_case = AddAttachmentUseCase(
        repos.attachments, repos.tasks, repos.boards, repos.activity, repos.transaction_manager
    ).set_current_user(user_id)
    return unwrap_result(await use_case.execute(request))
