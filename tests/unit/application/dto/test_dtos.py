"""
Unit tests for request DTOs and the validators behind them.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from taskboard.application.dto.board_dto import CreateBoardRequestDTO, MemberPayloadDTO
from taskboard.application.dto.column_dto import (
    ColumnPayloadDTO,
    CreateColumnRequestDTO,
    ReorderColumnsRequestDTO
)
from taskboard.application.dto.comment_dto import CommentPayloadDTO, AttachmentPayloadDTO
from taskboard.application.dto.label_dto import LabelPayloadDTO
from taskboard.application.dto.task_dto import CreateTaskRequestDTO, MovePayloadDTO
from taskboard.application.dto.user_dto import CreateUserRequestDTO
from taskboard.infrastructure.validation.validators import (
    SecurityValidator,
    DataValidator,
    BoardValidator
)


class TestValidators:
    """Test cases for the shared validators."""

    def test_check_xss(self):
        with pytest.raises(ValueError, match="unsafe script"):
            SecurityValidator.check_xss("<script>alert(1)</script>")

        assert SecurityValidator.check_xss("Plain title") == "Plain title"

    def test_sanitize_html_strips_disallowed_tags(self):
        result = SecurityValidator.sanitize_html("<strong>ok</strong><img src=x onerror=y>")

        assert result == "<strong>ok</strong>"

    def test_sanitize_filename(self):
        assert SecurityValidator.sanitize_filename("../notes?.txt") == "notes.txt"

        with pytest.raises(ValueError):
            SecurityValidator.sanitize_filename("<>")

    def test_validate_email(self):
        assert DataValidator.validate_email(" Bob@Example.com ") == "bob@example.com"

        with pytest.raises(ValueError, match="Invalid email"):
            DataValidator.validate_email("not-an-email")

    def test_validate_url(self):
        assert DataValidator.validate_url("https://files.example.com/a.pdf") == "https://files.example.com/a.pdf"

        with pytest.raises(ValueError):
            DataValidator.validate_url("ftp://files.example.com/a.pdf")

    def test_validate_hex_color(self):
        assert DataValidator.validate_hex_color("#ABCDEF") == "#abcdef"

        with pytest.raises(ValueError):
            DataValidator.validate_hex_color("#abc")

    def test_validate_ordered_ids(self):
        assert BoardValidator.validate_ordered_ids([" a ", "b"]) == ["a", "b"]

        with pytest.raises(ValueError, match="blank"):
            BoardValidator.validate_ordered_ids(["a", "  "])

    def test_duplicates_pass_through(self):
        """Test that duplicates are left for the position service to report."""
        assert BoardValidator.validate_ordered_ids(["a", "a"]) == ["a", "a"]


class TestBoardDTOs:
    """Test cases for board and member DTOs."""

    def test_title_is_trimmed(self):
        dto = CreateBoardRequestDTO(title="  Roadmap ", color="#4F46E5")

        assert dto.title == "Roadmap"
        assert dto.color == "#4f46e5"

    def test_blank_title_rejected(self):
        with pytest.raises(PydanticValidationError):
            CreateBoardRequestDTO(title="   ")

    def test_unknown_fields_rejected(self):
        with pytest.raises(PydanticValidationError):
            CreateBoardRequestDTO(title="Roadmap", owner="someone")

    def test_member_cannot_be_added_as_owner(self):
        with pytest.raises(PydanticValidationError):
            MemberPayloadDTO(user_id="u2", role="owner")

        assert MemberPayloadDTO(user_id="u2", role="admin").role == "admin"


class TestColumnAndTaskDTOs:
    """Test cases for ordered child DTOs."""

    def test_order_is_optional(self):
        assert ColumnPayloadDTO(title="Review").order is None

    def test_negative_order_rejected(self):
        with pytest.raises(PydanticValidationError):
            CreateColumnRequestDTO(board_id="b1", title="Review", order=-1)

        with pytest.raises(PydanticValidationError):
            CreateTaskRequestDTO(column_id="c1", title="Write docs", order=-1)

        with pytest.raises(PydanticValidationError):
            MovePayloadDTO(column_id="c2", order=-5)

    def test_wip_limit_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            ColumnPayloadDTO(title="Review", wip_limit=0)

    def test_reorder_blank_ids_rejected(self):
        with pytest.raises(PydanticValidationError):
            ReorderColumnsRequestDTO(board_id="b1", column_ids=["c1", ""])

    def test_move_defaults(self):
        dto = MovePayloadDTO(column_id="c2", order=0)

        assert dto.close_gap is False

    def test_task_priority_uses_value(self):
        dto = CreateTaskRequestDTO(column_id="c1", title="Fix bug", priority="high")

        assert dto.priority == "high"

    def test_task_title_length(self):
        with pytest.raises(PydanticValidationError):
            CreateTaskRequestDTO(column_id="c1", title="x" * 201)


class TestUserLabelCommentDTOs:
    """Test cases for user, label, comment and attachment DTOs."""

    def test_user_normalization(self):
        dto = CreateUserRequestDTO(email="Bob@Example.com", user_name=" bob_1 ", avatar_url="  ")

        assert dto.email == "bob@example.com"
        assert dto.user_name == "bob_1"
        assert dto.avatar_url is None

    def test_invalid_user_name(self):
        with pytest.raises(PydanticValidationError):
            CreateUserRequestDTO(email="bob@example.com", user_name="bob smith")

    def test_label_color(self):
        with pytest.raises(PydanticValidationError):
            LabelPayloadDTO(name="Bug", color="red")

    def test_comment_html_is_sanitized(self):
        dto = CommentPayloadDTO(content="<p>Looks <em>good</em></p><script>x()</script>")

        assert "<script>" not in dto.content
        assert "<em>good</em>" in dto.content

    def test_comment_empty_after_sanitizing(self):
        with pytest.raises(PydanticValidationError):
            CommentPayloadDTO(content="<script></script>")

    def test_attachment(self):
        dto = AttachmentPayloadDTO(
            file_name="report.pdf",
            file_url="https://files.example.com/report.pdf",
            file_size=2048
        )

        assert dto.file_name == "report.pdf"

        with pytest.raises(PydanticValidationError):
            AttachmentPayloadDTO(file_name="a.pdf", file_url="https://x.example.com/a", file_size=0)
