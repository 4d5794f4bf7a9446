"""compare_schemas: the orchestrator of a schema comparison.

For one (original, update) pair:

1. Absent sides -> SCHEMA_ADDED / SCHEMA_REMOVED.
2. Cycle guard: a pair already being compared further up is skipped.
3. Exactly one side combined -> try to line the plain side up with a
   subschema of the combined side (first compatible subschema wins).
4. Different node kinds -> TYPE_CHANGED, except for a False original, an
   Empty update, or ``connect.type: bytes`` on both sides.
5. Same kind -> common attributes, then the per-kind comparator.

Comparators never call back into this module.  They are generators that
yield the nested pairs they need compared (see ``context.Comparison``), and
``compare_schemas`` runs them on an explicit stack, so schema depth is not
bounded by Python's recursion limit.
"""

from __future__ import annotations

from json_schema_diff.diff import arrays, combined, objects, primitives
from json_schema_diff.diff.context import Comparison, DiffContext, Steps
from json_schema_diff.result import DifferenceType
from json_schema_diff.schema.nodes import (
    ArraySchema,
    CombinedSchema,
    ConstSchema,
    EmptySchema,
    EnumSchema,
    FalseSchema,
    NotSchema,
    NumberSchema,
    ObjectSchema,
    Schema,
    StringSchema,
    ValidationCriterion,
    canonical_value,
)

__all__ = ["compare_schemas"]

_T = DifferenceType

_CONNECT_TYPE = "connect.type"
_BYTES = "bytes"


def compare_schemas(ctx: DiffContext, original: Schema | None, update: Schema | None) -> None:
    """Record every difference between ``original`` and ``update`` in ``ctx``.

    Args:
        ctx:      Context positioned at the pair's path.
        original: Original schema, or None when absent.
        update:   Updated schema, or None when absent.
    """
    stack: list[Steps] = [_compare_pair(ctx, original, update)]
    while stack:
        try:
            pending = next(stack[-1])
        except StopIteration:
            stack.pop()
        else:
            stack.append(_compare_pair(*pending))


def _compare_pair(ctx: DiffContext, original: Schema | None, update: Schema | None) -> Steps:
    if original is None and update is None:
        return
    if original is None:
        ctx.add_difference(_T.SCHEMA_ADDED)
        return
    if update is None:
        ctx.add_difference(_T.SCHEMA_REMOVED)
        return

    with ctx.enter_schema(original, update) as entered:
        if not entered:
            return

        if (yield from _resolve_combined_asymmetry(ctx, original, update)):
            return

        if not _types_equal(original, update):
            if isinstance(original, FalseSchema) or isinstance(update, EmptySchema):
                return
            if _is_bytes(original) and _is_bytes(update):
                return
            ctx.add_difference(_T.TYPE_CHANGED)
            return

        _compare_common(ctx, original, update)
        yield from _dispatch(ctx, original, update)


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def _resolve_combined_asymmetry(
    ctx: DiffContext, original: Schema, update: Schema
) -> Comparison[bool]:
    """Try to pair a plain schema with one subschema of a combined schema.

    Returns:
        True when a compatible pairing was found and its differences adopted.
    """
    if not isinstance(original, CombinedSchema) and isinstance(update, CombinedSchema):
        if len(update.subschemas) == 1:
            return (yield from _adopt_if_compatible(ctx, original, update.subschemas[0]))
        if update.criterion.is_disjunctive:
            for subschema in update.subschemas:
                if (yield from _adopt_if_compatible(ctx, original, subschema)):
                    ctx.add_difference(_T.SUM_TYPE_EXTENDED)
                    return True
        return False

    if isinstance(original, CombinedSchema) and not isinstance(update, CombinedSchema):
        if len(original.subschemas) == 1 and (
            yield from _adopt_if_compatible(ctx, original.subschemas[0], update)
        ):
            return True
        if original.criterion is ValidationCriterion.ALL:
            for subschema in original.subschemas:
                if (yield from _adopt_if_compatible(ctx, subschema, update)):
                    ctx.add_difference(_T.PRODUCT_TYPE_NARROWED)
                    return True
    return False


def _adopt_if_compatible(ctx: DiffContext, original: Schema, update: Schema) -> Comparison[bool]:
    probe = ctx.get_subcontext()
    yield probe, original, update
    if not probe.is_compatible():
        return False
    ctx.add_differences(probe.differences)
    return True


def _types_equal(original: Schema, update: Schema) -> bool:
    return type(original) is type(update)


def _is_bytes(schema: Schema) -> bool:
    return schema.unprocessed.get(_CONNECT_TYPE) == _BYTES


def _compare_common(ctx: DiffContext, original: Schema, update: Schema) -> None:
    if original.id != update.id:
        ctx.add_difference(_T.ID_CHANGED)
    if original.title != update.title:
        ctx.add_difference(_T.TITLE_CHANGED)
    if original.description != update.description:
        ctx.add_difference(_T.DESCRIPTION_CHANGED)
    if canonical_value(original.default) != canonical_value(update.default):
        ctx.add_difference(_T.DEFAULT_CHANGED)


def _dispatch(ctx: DiffContext, original: Schema, update: Schema) -> Steps:
    match (original, update):
        case (StringSchema(), StringSchema()):
            primitives.compare_string(ctx, original, update)
        case (NumberSchema(), NumberSchema()):
            primitives.compare_number(ctx, original, update)
        case (ConstSchema(), ConstSchema()):
            primitives.compare_const(ctx, original, update)
        case (EnumSchema(), EnumSchema()):
            primitives.compare_enum(ctx, original, update)
        case (CombinedSchema(), CombinedSchema()):
            yield from combined.compare_combined(ctx, original, update)
        case (NotSchema(), NotSchema()):
            yield from primitives.compare_not(ctx, original, update)
        case (ObjectSchema(), ObjectSchema()):
            yield from objects.compare_objects(ctx, original, update)
        case (ArraySchema(), ArraySchema()):
            yield from arrays.compare_arrays(ctx, original, update)
        case _:
            # Empty and False schemas carry no keywords of their own
            pass
