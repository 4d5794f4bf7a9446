"""Public API functions for json-schema-diff.

``compare`` works on loaded schema nodes, ``compare_documents`` on JSON text
or parsed documents, and ``incompatible_differences`` / ``is_compatible`` on
either.  Each call creates a
fresh ``DiffContext`` so no state survives between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from json_schema_diff.config import CompatibilityLevel, resolve_compatible_changes
from json_schema_diff.diff import DiffContext, compare_schemas
from json_schema_diff.result import Difference, DifferenceType
from json_schema_diff.schema.loader import load_schema
from json_schema_diff.schema.nodes import Schema
from json_schema_diff.schema.version import JsonSchemaVersion

__all__ = ["compare", "compare_documents", "incompatible_differences", "is_compatible"]

logger = logging.getLogger(__name__)

CompatibleChanges = CompatibilityLevel | str | Iterable[DifferenceType | str] | None


def compare(
    original: Schema | None,
    update: Schema | None,
    compatible_changes: CompatibleChanges = None,
) -> list[Difference]:
    """Compare two loaded schemas and return their differences.

    Args:
        original:           Schema before the change (None when absent).
        update:             Schema after the change (None when absent).
        compatible_changes: Kinds that count as compatible; see
                            ``resolve_compatible_changes``.  Defaults to the
                            strict set.  Probes of combined and partially open
                            schemas succeed or fail against this set.

    Returns:
        Differences in the order they were produced.  Empty iff the schemas
        are equivalent for the purposes of the comparison.
    """
    ctx = DiffContext(resolve_compatible_changes(compatible_changes))
    compare_schemas(ctx, original, update)
    logger.debug(
        "Compared schemas: %d difference(s), compatible=%s",
        len(ctx.differences), ctx.is_compatible(),
    )
    return ctx.differences


def compare_documents(
    original: Any,
    update: Any,
    compatible_changes: CompatibleChanges = None,
    version: JsonSchemaVersion | None = None,
    original_version: JsonSchemaVersion | None = None,
    update_version: JsonSchemaVersion | None = None,
) -> list[Difference]:
    """Load and compare two JSON Schema documents.

    Args:
        original:           JSON text or parsed document before the change.
        update:             JSON text or parsed document after the change.
        compatible_changes: See ``compare``.
        version:            Draft used for both documents.  Auto-detected
                            from ``$schema`` when None.
        original_version:   Draft of the original only; overrides ``version``.
        update_version:     Draft of the update only; overrides ``version``.

    Returns:
        Differences in the order they were produced.

    Raises:
        InvalidSchemaError: If either document cannot be loaded.
    """
    original_schema = load_schema(original, original_version or version)
    update_schema = load_schema(update, update_version or version)
    return compare(original_schema, update_schema, compatible_changes)


def incompatible_differences(
    original: Any,
    update: Any,
    compatible_changes: CompatibleChanges = None,
) -> list[Difference]:
    """Return the differences whose kind is not in the compatible set.

    The same resolved set drives the comparison's probes and the final
    filter, so the result agrees with ``is_compatible``.

    Args:
        original:           Loaded ``Schema`` or JSON document/text.
        update:             Loaded ``Schema`` or JSON document/text.
        compatible_changes: See ``compare``.

    Returns:
        The incompatible differences, in production order.

    Raises:
        InvalidSchemaError: If a document cannot be loaded.
    """
    changes = resolve_compatible_changes(compatible_changes)
    if not isinstance(original, Schema):
        original = load_schema(original)
    if not isinstance(update, Schema):
        update = load_schema(update)
    differences = compare(original, update, changes)
    return [difference for difference in differences if difference.type not in changes]


def is_compatible(
    original: Any,
    update: Any,
    compatible_changes: CompatibleChanges = None,
) -> bool:
    """Return True if every difference between the schemas is compatible.

    Args:
        original:           Loaded ``Schema`` or JSON document/text.
        update:             Loaded ``Schema`` or JSON document/text.
        compatible_changes: See ``compare``.

    Returns:
        True when all reported difference kinds are in the compatible set.
    """
    return not incompatible_differences(original, update, compatible_changes)
