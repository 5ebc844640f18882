"""
Unit tests for PositionService domain service.
"""

import pytest

from taskboard.domain.services.position_service import PositionService
from taskboard.domain.models.base import ValidationError, InvalidReorderError


class TestNextOrder:
    """Test cases for appending after the existing children."""

    def setup_method(self):
        self.positions = PositionService()

    def test_empty_parent_starts_at_zero(self):
        """Test that a parent without children gets order 0."""
        assert self.positions.next_order([]) == 0

    def test_max_plus_one(self):
        """Test appending after dense orders."""
        assert self.positions.next_order([0, 1, 2]) == 3

    def test_gaps_are_not_reused(self):
        """Test that the next order is above every order in use, even with gaps."""
        result = self.positions.next_order([0, 2, 5])

        assert result == 6
        assert result not in {0, 2, 5}

    def test_unordered_input(self):
        """Test that the input sequence does not matter."""
        assert self.positions.next_order([5, 0, 2]) == 6

    def test_none_values_are_ignored(self):
        """Test that an aggregate MAX over no rows (None) means an empty parent."""
        assert self.positions.next_order([None]) == 0


class TestValidation:
    """Test cases for order and id validation."""

    def setup_method(self):
        self.positions = PositionService()

    def test_negative_order_rejected(self):
        with pytest.raises(ValidationError, match="Order cannot be negative"):
            self.positions.validate_order(-1)

    def test_non_integer_order_rejected(self):
        with pytest.raises(ValidationError, match="Order must be an integer"):
            self.positions.validate_order("3")

        with pytest.raises(ValidationError, match="Order must be an integer"):
            self.positions.validate_order(True)

    def test_zero_order_accepted(self):
        self.positions.validate_order(0)

    def test_blank_id_rejected(self):
        """Test that empty identifiers are invalid arguments."""
        with pytest.raises(ValidationError) as exc_info:
            self.positions.validate_id("   ", "board_id")

        assert exc_info.value.field == "board_id"
        assert exc_info.value.code == "VALIDATION_ERROR"

        with pytest.raises(ValidationError):
            self.positions.validate_id(None, "column_id")


class TestFullReorderValidation:
    """Test cases for checking a reorder list against the current children."""

    def setup_method(self):
        self.positions = PositionService()
        self.current = ["a", "b", "c"]

    def test_permutation_accepted(self):
        self.positions.validate_full_reorder(self.current, ["c", "a", "b"], "Board", "board-1")

    def test_missing_child_rejected(self):
        """Test that leaving a child out of the list is rejected."""
        with pytest.raises(InvalidReorderError, match="missing children.*c"):
            self.positions.validate_full_reorder(self.current, ["a", "b"], "Board", "board-1")

    def test_foreign_child_rejected(self):
        """Test that ids of another parent are rejected."""
        with pytest.raises(InvalidReorderError, match="do not belong"):
            self.positions.validate_full_reorder(self.current, ["a", "b", "c", "x"], "Board", "board-1")

    def test_duplicate_rejected(self):
        with pytest.raises(InvalidReorderError, match="Duplicate ids.*a"):
            self.positions.validate_full_reorder(self.current, ["a", "a", "b", "c"], "Board", "board-1")

    def test_blank_id_rejected(self):
        with pytest.raises(InvalidReorderError, match="blank"):
            self.positions.validate_full_reorder(self.current, ["a", "", "c"], "Board", "board-1")

    def test_error_carries_parent(self):
        """Test that the error is a ValidationError naming the parent."""
        with pytest.raises(ValidationError) as exc_info:
            self.positions.validate_full_reorder(self.current, ["a"], "Column", "col-9")

        assert exc_info.value.parent_type == "Column"
        assert exc_info.value.parent_id == "col-9"

    def test_empty_parent_with_empty_list(self):
        self.positions.validate_full_reorder([], [], "Column", "col-1")


class TestRenumbering:
    """Test cases for dense renumbering plans."""

    def setup_method(self):
        self.positions = PositionService()

    def test_dense_order_follows_list(self):
        assert self.positions.dense_order(["done", "todo", "doing"]) == {
            "done": 0,
            "todo": 1,
            "doing": 2,
        }

    def test_compacted_keeps_relative_order(self):
        """Test closing gaps without changing the sequence."""
        result = self.positions.compacted([("x", 7), ("y", 0), ("z", 3)])

        assert result == {"y": 0, "z": 1, "x": 2}

    def test_plan_ends_with_dense_orders(self):
        plan = self.positions.renumber_plan(["c", "a", "b"], [0, 1, 2])

        assert len(plan) == 2
        assert plan[-1] == {"c": 0, "a": 1, "b": 2}

    def test_staging_step_never_collides(self):
        """Test that the staging step only uses orders above every current and final order."""
        current_orders = [0, 1, 4]
        staging, final = self.positions.renumber_plan(["b", "c", "a"], current_orders)

        assert set(staging.values()).isdisjoint(current_orders)
        assert set(staging.values()).isdisjoint(final.values())
        assert len(set(staging.values())) == len(staging)

    def test_plan_for_empty_list(self):
        assert self.positions.renumber_plan([], []) == [{}, {}]
