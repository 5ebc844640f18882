"""
Integration tests for the board, column, label, comment and user use cases.
"""

import pytest

from taskboard.application.dto.board_dto import (
    BoardIdRequestDTO,
    UpdateBoardRequestDTO,
    AddMemberRequestDTO,
    ChangeMemberRoleRequestDTO,
    RemoveMemberRequestDTO,
    BoardActivityRequestDTO
)
from taskboard.application.dto.column_dto import (
    CreateColumnRequestDTO,
    UpdateColumnRequestDTO,
    ColumnIdRequestDTO,
    ReorderColumnsRequestDTO
)
from taskboard.application.dto.comment_dto import (
    AddCommentRequestDTO,
    UpdateCommentRequestDTO,
    CommentIdRequestDTO,
    AddAttachmentRequestDTO,
    AttachmentIdRequestDTO
)
from taskboard.application.dto.label_dto import CreateLabelRequestDTO, TaskLabelRequestDTO
from taskboard.application.dto.task_dto import AssignTaskRequestDTO, CompleteTaskRequestDTO, MoveTaskRequestDTO
from taskboard.application.dto.user_dto import CreateUserRequestDTO, UserIdRequestDTO
from taskboard.application.use_cases.board_use_cases import (
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
from taskboard.application.use_cases.column_use_cases import (
    CreateColumnUseCase,
    UpdateColumnUseCase,
    DeleteColumnUseCase,
    ReorderColumnsUseCase
)
from taskboard.application.use_cases.comment_use_cases import (
    AddCommentUseCase,
    UpdateCommentUseCase,
    DeleteCommentUseCase,
    ListCommentsUseCase,
    AddAttachmentUseCase,
    ListAttachmentsUseCase,
    DeleteAttachmentUseCase
)
from taskboard.application.use_cases.label_use_cases import CreateLabelUseCase, AttachLabelUseCase
from taskboard.application.use_cases.task_use_cases import (
    AssignTaskUseCase,
    CompleteTaskUseCase,
    MoveTaskUseCase
)
from taskboard.application.use_cases.user_use_cases import CreateUserUseCase, DeleteUserUseCase
from taskboard.application.dto.comment_dto import TaskCommentsRequestDTO


def add_member(repos, acting_user_id):
    return AddMemberUseCase(
        repos.boards, repos.users, repos.activity, repos.transaction_manager
    ).set_current_user(acting_user_id)


def create_column(repos, acting_user_id):
    return CreateColumnUseCase(
        repos.columns, repos.boards, repos.activity, repos.transaction_manager, append_retries=2
    ).set_current_user(acting_user_id)


class TestUsers:
    """Test cases for user registration and removal."""

    @pytest.mark.asyncio
    async def test_duplicate_user_name(self, repos, owner):
        result = await CreateUserUseCase(repos.users, repos.transaction_manager).execute(
            CreateUserRequestDTO(email="other@example.com", user_name="alice")
        )

        assert result.success is False
        assert result.error_code == "DUPLICATE_ENTITY"

    @pytest.mark.asyncio
    async def test_owner_cannot_be_deleted(self, repos, owner, board):
        result = await DeleteUserUseCase(repos.users, repos.boards, repos.transaction_manager).execute(
            UserIdRequestDTO(id=owner.id)
        )

        assert result.success is False
        assert result.error_code == "BUSINESS_RULE_VIOLATION"


class TestBoards:
    """Test cases for board management and membership."""

    @pytest.mark.asyncio
    async def test_board_details(self, repos, board):
        result = await GetBoardDetailsUseCase(
            repos.boards, repos.columns, repos.labels, repos.users
        ).execute(BoardIdRequestDTO(id=board.id))

        assert result.success, result.error
        assert [c.title for c in result.data.columns] == ["To Do", "In Progress", "Done"]
        assert [c.order for c in result.data.columns] == [0, 1, 2]
        assert [m.role for m in result.data.members] == ["owner"]

    @pytest.mark.asyncio
    async def test_unknown_board(self, repos):
        result = await GetBoardDetailsUseCase(
            repos.boards, repos.columns, repos.labels, repos.users
        ).execute(BoardIdRequestDTO(id="missing"))

        assert result.error_code == "ENTITY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_and_favorite(self, repos, owner, board):
        updated = await UpdateBoardUseCase(
            repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id).execute(UpdateBoardRequestDTO(id=board.id, title="Launch"))

        assert updated.data.title == "Launch"

        favorite = await ToggleFavoriteUseCase(
            repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id).execute(BoardIdRequestDTO(id=board.id))

        assert favorite.data.is_favorite is True

        favorites = await ListUserBoardsUseCase(repos.boards, favorites_only=True).set_current_user(
            owner.id
        ).execute(None)
        assert [b.id for b in favorites.data] == [board.id]

    @pytest.mark.asyncio
    async def test_members(self, repos, owner, board, make_user):
        """Test that added members can edit and see the board in their list."""
        bob = await make_user("bob")

        added = await add_member(repos, owner.id).execute(
            AddMemberRequestDTO(board_id=board.id, user_id=bob.id)
        )
        assert added.success, added.error

        boards = await ListUserBoardsUseCase(repos.boards).set_current_user(bob.id).execute(None)
        assert [b.id for b in boards.data] == [board.id]

        again = await add_member(repos, owner.id).execute(
            AddMemberRequestDTO(board_id=board.id, user_id=bob.id)
        )
        assert again.error_code == "BUSINESS_RULE_VIOLATION"

        removed = await RemoveMemberUseCase(
            repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(bob.id).execute(RemoveMemberRequestDTO(board_id=board.id, user_id=bob.id))
        assert removed.success, removed.error

    @pytest.mark.asyncio
    async def test_plain_member_cannot_add_members(self, repos, owner, board, make_user):
        bob = await make_user("bob")
        carol = await make_user("carol")
        await add_member(repos, owner.id).execute(AddMemberRequestDTO(board_id=board.id, user_id=bob.id))

        result = await add_member(repos, bob.id).execute(
            AddMemberRequestDTO(board_id=board.id, user_id=carol.id)
        )

        assert result.success is False
        assert "Insufficient permissions" in result.error

    @pytest.mark.asyncio
    async def test_promoted_admin_can_add_members(self, repos, owner, board, make_user):
        """Test that an admin promoted by the owner may manage membership."""
        bob = await make_user("bob")
        carol = await make_user("carol")
        await add_member(repos, owner.id).execute(AddMemberRequestDTO(board_id=board.id, user_id=bob.id))

        promoted = await ChangeMemberRoleUseCase(
            repos.boards, repos.users, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id).execute(
            ChangeMemberRoleRequestDTO(board_id=board.id, user_id=bob.id, role="admin")
        )
        assert promoted.success, promoted.error
        assert promoted.data.role == "admin"

        added = await add_member(repos, bob.id).execute(
            AddMemberRequestDTO(board_id=board.id, user_id=carol.id)
        )
        assert added.success, added.error

    @pytest.mark.asyncio
    async def test_role_change_rules(self, repos, owner, board, make_user):
        bob = await make_user("bob")
        carol = await make_user("carol")
        for user in (bob, carol):
            await add_member(repos, owner.id).execute(AddMemberRequestDTO(board_id=board.id, user_id=user.id))
        change_role = ChangeMemberRoleUseCase(
            repos.boards, repos.users, repos.activity, repos.transaction_manager
        )

        denied = await change_role.set_current_user(bob.id).execute(
            ChangeMemberRoleRequestDTO(board_id=board.id, user_id=carol.id, role="admin")
        )
        assert denied.error_code == "BUSINESS_RULE_VIOLATION"

        owner_fixed = await change_role.set_current_user(owner.id).execute(
            ChangeMemberRoleRequestDTO(board_id=board.id, user_id=owner.id, role="member")
        )
        assert owner_fixed.error_code == "BUSINESS_RULE_VIOLATION"

        stranger = await make_user("dave")
        missing = await change_role.set_current_user(owner.id).execute(
            ChangeMemberRoleRequestDTO(board_id=board.id, user_id=stranger.id, role="admin")
        )
        assert missing.error_code == "ENTITY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_only_owner_deletes_board(self, repos, owner, board, make_user):
        bob = await make_user("bob")
        await add_member(repos, owner.id).execute(AddMemberRequestDTO(board_id=board.id, user_id=bob.id))
        delete = DeleteBoardUseCase(repos.boards, repos.transaction_manager)

        denied = await delete.set_current_user(bob.id).execute(BoardIdRequestDTO(id=board.id))
        assert denied.error_code == "BUSINESS_RULE_VIOLATION"

        deleted = await delete.set_current_user(owner.id).execute(BoardIdRequestDTO(id=board.id))
        assert deleted.success, deleted.error
        assert await repos.columns.find_by_board(board.id) == []


class TestColumns:
    """Test cases for column commands."""

    @pytest.mark.asyncio
    async def test_create_appends(self, repos, owner, board, columns):
        result = await create_column(repos, owner.id).execute(
            CreateColumnRequestDTO(board_id=board.id, title="Review")
        )

        assert result.success, result.error
        assert result.data.order == 3

    @pytest.mark.asyncio
    async def test_create_at_taken_order(self, repos, owner, board, columns):
        result = await create_column(repos, owner.id).execute(
            CreateColumnRequestDTO(board_id=board.id, title="Review", order=1)
        )

        assert result.error_code == "ORDER_CONFLICT"
        assert len(await repos.columns.find_by_board(board.id)) == 3

    @pytest.mark.asyncio
    async def test_non_member_is_rejected(self, repos, board, columns, make_user):
        mallory = await make_user("mallory")

        result = await create_column(repos, mallory.id).execute(
            CreateColumnRequestDTO(board_id=board.id, title="Review")
        )

        assert result.error_code == "BUSINESS_RULE_VIOLATION"

    @pytest.mark.asyncio
    async def test_reorder_and_delete(self, repos, owner, board, columns):
        todo, doing, done = columns
        reorder = ReorderColumnsUseCase(
            repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id)

        result = await reorder.execute(
            ReorderColumnsRequestDTO(board_id=board.id, column_ids=[done.id, todo.id, doing.id])
        )
        assert [c.title for c in result.data] == ["Done", "To Do", "In Progress"]

        invalid = await reorder.execute(
            ReorderColumnsRequestDTO(board_id=board.id, column_ids=[done.id])
        )
        assert invalid.error_code == "VALIDATION_ERROR"

        deleted = await DeleteColumnUseCase(
            repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id).execute(ColumnIdRequestDTO(id=todo.id))
        assert deleted.success, deleted.error

        remaining = await repos.columns.find_by_board(board.id)
        assert [(c.title, c.order) for c in remaining] == [("Done", 0), ("In Progress", 2)]

    @pytest.mark.asyncio
    async def test_update_wip_limit(self, repos, owner, columns, make_task):
        doing = columns[1]
        update = UpdateColumnUseCase(
            repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id)

        result = await update.execute(UpdateColumnRequestDTO(id=doing.id, wip_limit=1))
        assert result.data.wip_limit == 1

        assert (await make_task(owner.id, doing.id, "first")).success
        full = await make_task(owner.id, doing.id, "second")
        assert full.error_code == "BUSINESS_RULE_VIOLATION"

        cleared = await update.execute(UpdateColumnRequestDTO(id=doing.id, clear_wip_limit=True))
        assert cleared.data.wip_limit is None


class TestTasks:
    """Test cases for task commands other than ordering."""

    @pytest.mark.asyncio
    async def test_complete_and_assign(self, repos, owner, columns, make_task, make_user):
        task = (await make_task(owner.id, columns[0].id, "Ship it")).data
        bob = await make_user("bob")

        completed = await CompleteTaskUseCase(
            repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id).execute(CompleteTaskRequestDTO(task_id=task.id))
        assert completed.data.is_completed is True

        assign = AssignTaskUseCase(
            repos.tasks, repos.columns, repos.boards, repos.users, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id)

        outsider = await assign.execute(AssignTaskRequestDTO(task_id=task.id, user_id=bob.id))
        assert outsider.error_code == "BUSINESS_RULE_VIOLATION"

        assigned = await assign.execute(AssignTaskRequestDTO(task_id=task.id, user_id=owner.id))
        assert assigned.data.assigned_user_id == owner.id

    @pytest.mark.asyncio
    async def test_cannot_move_to_other_board(self, repos, owner, columns, make_task, make_board):
        task = (await make_task(owner.id, columns[0].id, "Ship it")).data
        other = await make_board(owner.id, "Other")
        foreign = (await repos.columns.find_by_board(other.id))[0]

        result = await MoveTaskUseCase(
            repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id).execute(
            MoveTaskRequestDTO(task_id=task.id, column_id=foreign.id, order=0)
        )

        assert result.error_code == "BUSINESS_RULE_VIOLATION"
        assert (await repos.tasks.find_by_id(task.id)).column_id == columns[0].id


class TestLabelsAndComments:
    """Test cases for labels and comments on tasks."""

    @pytest.mark.asyncio
    async def test_labels(self, repos, owner, board, columns, make_task):
        task = (await make_task(owner.id, columns[0].id, "Fix login")).data
        create = CreateLabelUseCase(
            repos.labels, repos.boards, repos.activity, repos.transaction_manager, default_color="#6b7280"
        ).set_current_user(owner.id)

        label = await create.execute(CreateLabelRequestDTO(board_id=board.id, name="Bug", color="#ef4444"))
        assert label.success, label.error

        duplicate = await create.execute(CreateLabelRequestDTO(board_id=board.id, name="Bug"))
        assert duplicate.error_code == "DUPLICATE_ENTITY"

        attach = AttachLabelUseCase(
            repos.labels, repos.tasks, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id)
        attached = await attach.execute(TaskLabelRequestDTO(task_id=task.id, label_id=label.data.id))
        assert [item.name for item in attached.data] == ["Bug"]

        again = await attach.execute(TaskLabelRequestDTO(task_id=task.id, label_id=label.data.id))
        assert again.error_code == "BUSINESS_RULE_VIOLATION"

    @pytest.mark.asyncio
    async def test_comments(self, repos, owner, board, columns, make_task, make_user):
        """Test that only the author edits or deletes, and deleted comments disappear."""
        task = (await make_task(owner.id, columns[0].id, "Fix login")).data
        bob = await make_user("bob")
        await add_member(repos, owner.id).execute(AddMemberRequestDTO(board_id=board.id, user_id=bob.id))
        comment_args = (repos.comments, repos.tasks, repos.boards, repos.activity, repos.transaction_manager)

        added = await AddCommentUseCase(*comment_args).set_current_user(owner.id).execute(
            AddCommentRequestDTO(task_id=task.id, content="<b>Repro</b> steps attached")
        )
        assert added.success, added.error

        edited = await UpdateCommentUseCase(*comment_args).set_current_user(bob.id).execute(
            UpdateCommentRequestDTO(id=added.data.id, content="Mine now")
        )
        assert edited.error_code == "BUSINESS_RULE_VIOLATION"

        deleted = await DeleteCommentUseCase(*comment_args).set_current_user(owner.id).execute(
            CommentIdRequestDTO(id=added.data.id)
        )
        assert deleted.success, deleted.error

        listed = await ListCommentsUseCase(repos.comments, repos.tasks).execute(
            TaskCommentsRequestDTO(task_id=task.id)
        )
        assert listed.data == []


class TestAttachments:
    """Test cases for files attached to tasks."""

    def attachment_args(self, repos):
        return (repos.attachments, repos.tasks, repos.boards, repos.activity, repos.transaction_manager)

    async def add_attachment(self, repos, user_id, task_id):
        return await AddAttachmentUseCase(*self.attachment_args(repos)).set_current_user(user_id).execute(
            AddAttachmentRequestDTO(
                task_id=task_id,
                file_name="design.pdf",
                file_url="https://files.example.com/design.pdf",
                file_size=2048,
                mime_type="application/pdf"
            )
        )

    @pytest.mark.asyncio
    async def test_add_list_and_remove(self, repos, owner, board, columns, make_task):
        task = (await make_task(owner.id, columns[0].id, "Fix login")).data

        added = await self.add_attachment(repos, owner.id, task.id)
        assert added.success, added.error
        assert added.data.uploaded_by == owner.id
        assert added.data.formatted_file_size == "2.0 KB"
        assert added.data.icon_name == "file-text"

        listed = await ListAttachmentsUseCase(repos.attachments, repos.tasks).execute(
            TaskCommentsRequestDTO(task_id=task.id)
        )
        assert [item.id for item in listed.data] == [added.data.id]

        removed = await DeleteAttachmentUseCase(*self.attachment_args(repos)).set_current_user(owner.id).execute(
            AttachmentIdRequestDTO(id=added.data.id)
        )
        assert removed.success, removed.error

        listed = await ListAttachmentsUseCase(repos.attachments, repos.tasks).execute(
            TaskCommentsRequestDTO(task_id=task.id)
        )
        assert listed.data == []

        feed = await GetBoardActivityUseCase(repos.boards, repos.activity).execute(
            BoardActivityRequestDTO(board_id=board.id)
        )
        kinds = [entry.activity_type for entry in feed.data]
        assert "attachment_added" in kinds
        assert "attachment_deleted" in kinds

    @pytest.mark.asyncio
    async def test_only_uploader_removes(self, repos, owner, board, columns, make_task, make_user):
        task = (await make_task(owner.id, columns[0].id, "Fix login")).data
        bob = await make_user("bob")
        await add_member(repos, owner.id).execute(AddMemberRequestDTO(board_id=board.id, user_id=bob.id))
        added = await self.add_attachment(repos, owner.id, task.id)

        denied = await DeleteAttachmentUseCase(*self.attachment_args(repos)).set_current_user(bob.id).execute(
            AttachmentIdRequestDTO(id=added.data.id)
        )

        assert denied.success is False
        assert denied.error_code == "BUSINESS_RULE_VIOLATION"
        assert [item.id for item in await repos.attachments.find_by_task(task.id)] == [added.data.id]

    @pytest.mark.asyncio
    async def test_non_member_cannot_attach(self, repos, owner, columns, make_task, make_user):
        task = (await make_task(owner.id, columns[0].id, "Fix login")).data
        stranger = await make_user("carol")

        result = await self.add_attachment(repos, stranger.id, task.id)

        assert result.error_code == "BUSINESS_RULE_VIOLATION"


class TestActivity:
    """Test cases for the board activity feed."""

    @pytest.mark.asyncio
    async def test_commands_are_logged(self, repos, owner, board, columns, make_task):
        task = (await make_task(owner.id, columns[0].id, "Ship it")).data
        await MoveTaskUseCase(
            repos.tasks, repos.columns, repos.boards, repos.activity, repos.transaction_manager
        ).set_current_user(owner.id).execute(
            MoveTaskRequestDTO(task_id=task.id, column_id=columns[2].id, order=0)
        )

        result = await GetBoardActivityUseCase(repos.boards, repos.activity).execute(
            BoardActivityRequestDTO(board_id=board.id)
        )

        kinds = {entry.activity_type for entry in result.data}
        assert {"board_created", "task_created", "task_moved"} <= kinds
        moved = next(entry for entry in result.data if entry.activity_type == "task_moved")
        assert moved.related_task_id == task.id
        assert moved.new_value == f"{columns[2].id}:0"

    @pytest.mark.asyncio
    async def test_limit(self, repos, owner, board, columns, make_task):
        for title in ("a", "b", "c"):
            await make_task(owner.id, columns[0].id, title)

        result = await GetBoardActivityUseCase(repos.boards, repos.activity).execute(
            BoardActivityRequestDTO(board_id=board.id, limit=2)
        )

        assert len(result.data) == 2

    @pytest.mark.asyncio
    async def test_failed_command_is_not_logged(self, repos, owner, board, columns, make_task):
        await make_task(owner.id, columns[0].id, "a", order=0)
        await make_task(owner.id, columns[0].id, "b", order=0)

        result = await GetBoardActivityUseCase(repos.boards, repos.activity).execute(
            BoardActivityRequestDTO(board_id=board.id)
        )

        assert [entry.activity_type for entry in result.data].count("task_created") == 1
