"""Position service for ordering children under a parent.
Columns are ordered within a board and tasks within a column. This service
holds the ordering rules; repositories apply them to stored rows.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from taskboard.domain.models.base import ValidationError, InvalidReorderError


class PositionService:
    """
    Domain service for dense, per-parent ordering.

    Orders are non-negative integers, unique within one parent. Appending uses
    ``max + 1`` (``0`` for an empty parent); a full reorder renumbers the
    children to ``0..N-1`` following the requested sequence. Deleting a child
    leaves a gap until the parent is reordered or compacted.
    """

    def next_order(self, existing_orders: Iterable[Optional[int]]) -> int:
        """
        Order to give a child appended after the current children.
        """
        orders = [order for order in existing_orders if order is not None]
        if not orders:
            return 0
        return max(orders) + 1

    def validate_order(self, order: int) -> None:
        """Reject negative or non-integer orders."""
        if isinstance(order, bool) or not isinstance(order, int):
            raise ValidationError("Order must be an integer", "order")
        if order < 0:
            raise ValidationError("Order cannot be negative", "order")

    def validate_id(self, value: Optional[str], field: str) -> None:
        """Reject empty identifiers."""
        if value is None or not str(value).strip():
            raise ValidationError(f"{field} is required", field)

    def validate_full_reorder(
        self,
        current_ids: Iterable[str],
        ordered_ids: Sequence[str],
        parent_type: str,
        parent_id: str
    ) -> None:
        """
        Check that ``ordered_ids`` is a permutation of the parent's children.

        Raises InvalidReorderError on blank or duplicate ids, on ids that are
        not children of the parent and on children missing from the list.
        """
        if ordered_ids is None:
            raise InvalidReorderError("Ordered ids are required", parent_type, parent_id)

        for child_id in ordered_ids:
            if child_id is None or not str(child_id).strip():
                raise InvalidReorderError("Ordered ids cannot contain blank ids", parent_type, parent_id)

        seen = set()
        duplicates = []
        for child_id in ordered_ids:
            if child_id in seen and child_id not in duplicates:
                duplicates.append(child_id)
            seen.add(child_id)
        if duplicates:
            raise InvalidReorderError(
                f"Duplicate ids in reorder request: {', '.join(duplicates)}",
                parent_type,
                parent_id
            )

        current = set(current_ids)
        unknown = [child_id for child_id in ordered_ids if child_id not in current]
        if unknown:
            raise InvalidReorderError(
                f"Ids do not belong to {parent_type} {parent_id}: {', '.join(unknown)}",
                parent_type,
                parent_id
            )

        missing = sorted(current - seen)
        if missing:
            raise InvalidReorderError(
                f"Reorder request is missing children of {parent_type} {parent_id}: {', '.join(missing)}",
                parent_type,
                parent_id
            )

    def dense_order(self, ordered_ids: Sequence[str]) -> Dict[str, int]:
        """Map each id to its index: the first id gets 0, the last N-1."""
        return {child_id: index for index, child_id in enumerate(ordered_ids)}

    def compacted(self, children: Iterable[Tuple[str, int]]) -> Dict[str, int]:
        """
        Close gaps while keeping the relative order.

        ``children`` are ``(id, order)`` pairs in any sequence.
        """
        ordered = sorted(children, key=lambda child: (child[1], child[0]))
        return self.dense_order([child_id for child_id, _ in ordered])

    def renumber_plan(
        self,
        ordered_ids: Sequence[str],
        current_orders: Iterable[int]
    ) -> List[Dict[str, int]]:
        """
        Two-step assignment that never produces a duplicate order mid-way.

        The first step lifts every child above the current maximum, the
        second writes the dense orders. Applying the steps one after the other
        inside a single transaction keeps a unique (parent, order) index
        satisfied after each step.
        """
        final = self.dense_order(ordered_ids)
        base = self.next_order(current_orders)
        base = max(base, len(final))
        staging = {child_id: base + index for child_id, index in final.items()}
        return [staging, final]
