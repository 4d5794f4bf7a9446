"""Content-model handling for members present on only one side.

A property (or tuple item) that exists in one schema but not the other is
judged by the *content model* of the schema that lacks it:

- open:            anything is accepted in its place (no ``additionalProperties``
                   / ``additionalItems`` restriction at all);
- partially open:  a pattern property or additional-properties/items subschema
                   covers it; the member schema is probed against that
                   subschema and the probe's differences are adopted, followed
                   by an "is covered" or "not covered" marker;
- closed:          nothing covers it.

Objects and arrays share the procedure and differ only in the kinds they
report, captured by a ``MemberKinds`` table.
"""

from __future__ import annotations

from dataclasses import dataclass

from json_schema_diff.diff.context import Comparison, DiffContext, Steps
from json_schema_diff.result import DifferenceType
from json_schema_diff.schema.nodes import EmptySchema, FalseSchema, Schema

__all__ = ["ITEM_KINDS", "PROPERTY_KINDS", "MemberKinds", "member_added", "member_removed"]

_T = DifferenceType


@dataclass(frozen=True, slots=True)
class MemberKinds:
    """Difference kinds reported for one member family (properties or items).

    ``added_to_closed`` is None for properties: objects report the
    required/optional marker instead.
    """

    removed_from_open: DifferenceType
    removed_is_covered: DifferenceType
    removed_not_covered: DifferenceType
    false_removed_from_closed: DifferenceType
    removed_from_closed: DifferenceType
    added_to_open: DifferenceType
    empty_added_to_open: DifferenceType
    added_is_covered: DifferenceType
    added_not_covered: DifferenceType
    added_to_closed: DifferenceType | None


PROPERTY_KINDS = MemberKinds(
    removed_from_open=_T.PROPERTY_REMOVED_FROM_OPEN_CONTENT_MODEL,
    removed_is_covered=_T.PROPERTY_REMOVED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    removed_not_covered=_T.PROPERTY_REMOVED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    false_removed_from_closed=_T.PROPERTY_WITH_FALSE_REMOVED_FROM_CLOSED_CONTENT_MODEL,
    removed_from_closed=_T.PROPERTY_REMOVED_FROM_CLOSED_CONTENT_MODEL,
    added_to_open=_T.PROPERTY_ADDED_TO_OPEN_CONTENT_MODEL,
    empty_added_to_open=_T.PROPERTY_WITH_EMPTY_SCHEMA_ADDED_TO_OPEN_CONTENT_MODEL,
    added_is_covered=_T.PROPERTY_ADDED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    added_not_covered=_T.PROPERTY_ADDED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    added_to_closed=None,
)

ITEM_KINDS = MemberKinds(
    removed_from_open=_T.ITEM_REMOVED_FROM_OPEN_CONTENT_MODEL,
    removed_is_covered=_T.ITEM_REMOVED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    removed_not_covered=_T.ITEM_REMOVED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    false_removed_from_closed=_T.ITEM_WITH_FALSE_REMOVED_FROM_CLOSED_CONTENT_MODEL,
    removed_from_closed=_T.ITEM_REMOVED_FROM_CLOSED_CONTENT_MODEL,
    added_to_open=_T.ITEM_ADDED_TO_OPEN_CONTENT_MODEL,
    empty_added_to_open=_T.ITEM_WITH_EMPTY_SCHEMA_ADDED_TO_OPEN_CONTENT_MODEL,
    added_is_covered=_T.ITEM_ADDED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    added_not_covered=_T.ITEM_ADDED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    added_to_closed=_T.ITEM_ADDED_TO_CLOSED_CONTENT_MODEL,
)


def member_removed(
    ctx: DiffContext,
    original_member: Schema,
    update_is_open: bool,
    update_partial: Schema | None,
    kinds: MemberKinds,
) -> Steps:
    """Report a member present in the original but missing from the update.

    Args:
        ctx:             Context positioned at the member's path.
        original_member: The member's schema in the original.
        update_is_open:  Whether the update has an open content model.
        update_partial:  Subschema of the update that covers the member, if any.
        kinds:           Kinds for this member family.
    """
    if update_is_open:
        ctx.add_difference(kinds.removed_from_open)
    elif update_partial is not None:
        probe = ctx.get_subcontext()
        yield probe, original_member, update_partial
        ctx.add_differences(probe.differences)
        if probe.is_compatible():
            ctx.add_difference(kinds.removed_is_covered)
        else:
            ctx.add_difference(kinds.removed_not_covered)
    elif isinstance(original_member, FalseSchema):
        ctx.add_difference(kinds.false_removed_from_closed)
    else:
        ctx.add_difference(kinds.removed_from_closed)


def member_added(
    ctx: DiffContext,
    update_member: Schema,
    original_is_open: bool,
    original_partial: Schema | None,
    kinds: MemberKinds,
) -> Comparison[bool]:
    """Report a member missing from the original but present in the update.

    Returns:
        True when the original's content model is not open, i.e. the caller
        may have further markers to report for the addition.
    """
    if original_is_open:
        if isinstance(update_member, EmptySchema):
            ctx.add_difference(kinds.empty_added_to_open)
        else:
            ctx.add_difference(kinds.added_to_open)
        return False

    if original_partial is not None:
        probe = ctx.get_subcontext()
        yield probe, original_partial, update_member
        ctx.add_differences(probe.differences)
        if probe.is_compatible():
            ctx.add_difference(kinds.added_is_covered)
        else:
            ctx.add_difference(kinds.added_not_covered)
    elif kinds.added_to_closed is not None:
        ctx.add_difference(kinds.added_to_closed)
    return True
