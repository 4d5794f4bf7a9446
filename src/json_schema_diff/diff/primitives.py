"""Comparators for the leaf keyword families: string, number, const, enum, not.

Also provides ``compare_limit``, the added/removed/increased/decreased
pattern shared by every optional numeric keyword (``maxLength``,
``maximum``, ``maxProperties``, ``minItems`` ...).
"""

from __future__ import annotations

from decimal import Decimal

from json_schema_diff.diff.context import DiffContext, Steps
from json_schema_diff.result import DifferenceType
from json_schema_diff.schema.nodes import (
    ConstSchema,
    EnumSchema,
    NotSchema,
    NumberSchema,
    StringSchema,
    canonical_value,
)

__all__ = [
    "compare_const",
    "compare_enum",
    "compare_limit",
    "compare_not",
    "compare_number",
    "compare_string",
]

_T = DifferenceType


def compare_limit(
    ctx: DiffContext,
    segment: str,
    original: int | Decimal | None,
    update: int | Decimal | None,
    kinds: tuple[DifferenceType, DifferenceType, DifferenceType, DifferenceType],
) -> None:
    """Compare one optional numeric keyword.

    Args:
        ctx:      Comparison context.
        segment:  Keyword name, appended to the current path.
        original: Value in the original schema, or None when absent.
        update:   Value in the update schema, or None when absent.
        kinds:    ``(added, removed, increased, decreased)`` difference kinds.
    """
    added, removed, increased, decreased = kinds
    if original is None and update is None:
        return
    if original is None:
        ctx.add_difference(added, segment)
    elif update is None:
        ctx.add_difference(removed, segment)
    elif Decimal(original) < Decimal(update):
        ctx.add_difference(increased, segment)
    elif Decimal(original) > Decimal(update):
        ctx.add_difference(decreased, segment)


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------

_MAX_LENGTH = (_T.MAX_LENGTH_ADDED, _T.MAX_LENGTH_REMOVED, _T.MAX_LENGTH_INCREASED,
               _T.MAX_LENGTH_DECREASED)
_MIN_LENGTH = (_T.MIN_LENGTH_ADDED, _T.MIN_LENGTH_REMOVED, _T.MIN_LENGTH_INCREASED,
               _T.MIN_LENGTH_DECREASED)


def compare_string(ctx: DiffContext, original: StringSchema, update: StringSchema) -> None:
    compare_limit(ctx, "maxLength", original.max_length, update.max_length, _MAX_LENGTH)
    compare_limit(ctx, "minLength", original.min_length, update.min_length, _MIN_LENGTH)

    original_pattern = original.pattern.pattern if original.pattern is not None else None
    update_pattern = update.pattern.pattern if update.pattern is not None else None
    if original_pattern == update_pattern:
        return
    if original_pattern is None:
        ctx.add_difference(_T.PATTERN_ADDED, "pattern")
    elif update_pattern is None:
        ctx.add_difference(_T.PATTERN_REMOVED, "pattern")
    else:
        ctx.add_difference(_T.PATTERN_CHANGED, "pattern")


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

_MAXIMUM = (_T.MAXIMUM_ADDED, _T.MAXIMUM_REMOVED, _T.MAXIMUM_INCREASED,
            _T.MAXIMUM_DECREASED)
_MINIMUM = (_T.MINIMUM_ADDED, _T.MINIMUM_REMOVED, _T.MINIMUM_INCREASED,
            _T.MINIMUM_DECREASED)
_EXCLUSIVE_MAXIMUM = (_T.EXCLUSIVE_MAXIMUM_ADDED, _T.EXCLUSIVE_MAXIMUM_REMOVED,
                      _T.EXCLUSIVE_MAXIMUM_INCREASED, _T.EXCLUSIVE_MAXIMUM_DECREASED)
_EXCLUSIVE_MINIMUM = (_T.EXCLUSIVE_MINIMUM_ADDED, _T.EXCLUSIVE_MINIMUM_REMOVED,
                      _T.EXCLUSIVE_MINIMUM_INCREASED, _T.EXCLUSIVE_MINIMUM_DECREASED)


def compare_number(ctx: DiffContext, original: NumberSchema, update: NumberSchema) -> None:
    """Compare numeric bounds, ``multipleOf`` and the integer flag.

    Bounds are compared as ``Decimal``, so ``10`` and ``10.0`` are equal and
    no precision is lost on large or fractional limits.
    """
    compare_limit(ctx, "maximum", original.maximum, update.maximum, _MAXIMUM)
    compare_limit(ctx, "minimum", original.minimum, update.minimum, _MINIMUM)
    compare_limit(
        ctx, "exclusiveMaximum",
        original.exclusive_maximum, update.exclusive_maximum, _EXCLUSIVE_MAXIMUM,
    )
    compare_limit(
        ctx, "exclusiveMinimum",
        original.exclusive_minimum, update.exclusive_minimum, _EXCLUSIVE_MINIMUM,
    )
    _compare_multiple_of(ctx, original.multiple_of, update.multiple_of)

    if original.requires_integer != update.requires_integer:
        if original.requires_integer:
            ctx.add_difference(_T.TYPE_EXTENDED)
        else:
            ctx.add_difference(_T.TYPE_NARROWED)


def _compare_multiple_of(
    ctx: DiffContext,
    original: int | Decimal | None,
    update: int | Decimal | None,
) -> None:
    if original is None and update is None:
        return
    if original is None:
        ctx.add_difference(_T.MULTIPLE_OF_ADDED, "multipleOf")
        return
    if update is None:
        ctx.add_difference(_T.MULTIPLE_OF_REMOVED, "multipleOf")
        return
    if Decimal(original) == Decimal(update):
        return

    # Divisibility is decided on the integer parts; fractional divisors that
    # truncate to zero always report a plain change.
    orig_int, upd_int = int(original), int(update)
    if orig_int != 0 and upd_int != 0 and upd_int % orig_int == 0:
        ctx.add_difference(_T.MULTIPLE_OF_EXPANDED, "multipleOf")
    elif orig_int != 0 and upd_int != 0 and orig_int % upd_int == 0:
        ctx.add_difference(_T.MULTIPLE_OF_REDUCED, "multipleOf")
    else:
        ctx.add_difference(_T.MULTIPLE_OF_CHANGED, "multipleOf")


# ---------------------------------------------------------------------------
# Enum / const / not
# ---------------------------------------------------------------------------


def compare_const(ctx: DiffContext, original: ConstSchema, update: ConstSchema) -> None:
    if canonical_value(original.value) != canonical_value(update.value):
        ctx.add_difference(_T.ENUM_ARRAY_CHANGED, "const")


def compare_enum(ctx: DiffContext, original: EnumSchema, update: EnumSchema) -> None:
    """Classify an enum change by set inclusion (order is irrelevant)."""
    original_values = original.canonical_values()
    update_values = update.canonical_values()
    if original_values == update_values:
        return
    if update_values >= original_values:
        ctx.add_difference(_T.ENUM_ARRAY_EXTENDED, "enum")
    elif update_values <= original_values:
        ctx.add_difference(_T.ENUM_ARRAY_NARROWED, "enum")
    else:
        ctx.add_difference(_T.ENUM_ARRAY_CHANGED, "enum")


def compare_not(ctx: DiffContext, original: NotSchema, update: NotSchema) -> Steps:
    """Compare negated schemas with the sides swapped.

    ``not A`` -> ``not B`` accepts more instances exactly when ``B`` accepts
    fewer than ``A``, i.e. when ``B -> A`` is a compatible change.  The probe's
    differences are never adopted; only the verdict is reported.  Structurally
    equal negations report nothing.
    """
    if original.must_not_match == update.must_not_match:
        return
    with ctx.enter_path("not"):
        probe = ctx.get_subcontext()
        yield probe, update.must_not_match, original.must_not_match
        if probe.is_compatible():
            ctx.add_difference(_T.NOT_TYPE_NARROWED)
        else:
            ctx.add_difference(_T.NOT_TYPE_EXTENDED)
