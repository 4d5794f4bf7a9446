"""Array comparator.

Passes: the single-schema ``items`` form, positional (tuple) items at
``items/<i>``, ``additionalItems``, then ``maxItems`` / ``minItems`` and
``uniqueItems``.
"""

from __future__ import annotations

from json_schema_diff.diff.content_model import ITEM_KINDS, member_added, member_removed
from json_schema_diff.diff.context import DiffContext, Steps
from json_schema_diff.diff.primitives import compare_limit
from json_schema_diff.result import DifferenceType
from json_schema_diff.schema.nodes import ArraySchema

__all__ = ["compare_arrays"]

_T = DifferenceType

_MAX_ITEMS = (_T.MAX_ITEMS_ADDED, _T.MAX_ITEMS_REMOVED, _T.MAX_ITEMS_INCREASED,
              _T.MAX_ITEMS_DECREASED)
_MIN_ITEMS = (_T.MIN_ITEMS_ADDED, _T.MIN_ITEMS_REMOVED, _T.MIN_ITEMS_INCREASED,
              _T.MIN_ITEMS_DECREASED)


def compare_arrays(ctx: DiffContext, original: ArraySchema, update: ArraySchema) -> Steps:
    with ctx.enter_path("items"):
        yield ctx, original.all_items, update.all_items
    yield from _compare_item_schemas(ctx, original, update)
    yield from _compare_additional_items(ctx, original, update)
    compare_limit(ctx, "maxItems", original.max_items, update.max_items, _MAX_ITEMS)
    compare_limit(ctx, "minItems", original.min_items, update.min_items, _MIN_ITEMS)

    if original.unique_items != update.unique_items:
        if original.unique_items:
            ctx.add_difference(_T.UNIQUE_ITEMS_REMOVED, "uniqueItems")
        else:
            ctx.add_difference(_T.UNIQUE_ITEMS_ADDED, "uniqueItems")


def _compare_item_schemas(ctx: DiffContext, original: ArraySchema, update: ArraySchema) -> Steps:
    """Compare tuple items position by position.

    Positions beyond the shorter list are judged against the other side's
    additional-items content model.
    """
    original_items = original.item_schemas or []
    update_items = update.item_schemas or []
    common = min(len(original_items), len(update_items))

    for index in range(max(len(original_items), len(update_items))):
        with ctx.enter_path("items"), ctx.enter_path(index):
            if index < common:
                yield ctx, original_items[index], update_items[index]
            elif index < len(original_items):
                yield from member_removed(
                    ctx,
                    original_items[index],
                    update.is_open_content_model(),
                    update.additional_items,
                    ITEM_KINDS,
                )
            else:
                yield from member_added(
                    ctx,
                    update_items[index],
                    original.is_open_content_model(),
                    original.additional_items,
                    ITEM_KINDS,
                )


def _compare_additional_items(
    ctx: DiffContext, original: ArraySchema, update: ArraySchema
) -> Steps:
    with ctx.enter_path("additionalItems"):
        if original.permits_additional_items != update.permits_additional_items:
            if original.permits_additional_items:
                ctx.add_difference(_T.ADDITIONAL_ITEMS_REMOVED)
            else:
                ctx.add_difference(_T.ADDITIONAL_ITEMS_ADDED)
            return

        before = original.additional_items
        after = update.additional_items
        if before is None and after is not None:
            ctx.add_difference(_T.ADDITIONAL_ITEMS_NARROWED)
        elif after is None and before is not None:
            ctx.add_difference(_T.ADDITIONAL_ITEMS_EXTENDED)
        else:
            yield ctx, before, after
