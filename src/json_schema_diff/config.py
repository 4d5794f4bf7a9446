"""Compatible-change sets and their resolution.

A comparison is compatible when every difference it reports belongs to the
*compatible set* it was run with.  Two sets ship with the package:

- ``COMPATIBLE_CHANGES_STRICT``:  changes after which every instance valid
  under the original schema is still valid under the update.
- ``COMPATIBLE_CHANGES_LENIENT``: STRICT plus the open-content-model changes
  that are usually safe in practice (adding/removing properties of an open
  object, narrowing or removing ``additionalProperties``, and properties not
  covered by a partially open content model).
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum, auto

from json_schema_diff.result import DifferenceType

__all__ = [
    "COMPATIBLE_CHANGES_LENIENT",
    "COMPATIBLE_CHANGES_STRICT",
    "CompatibilityLevel",
    "resolve_compatible_changes",
]

_T = DifferenceType

COMPATIBLE_CHANGES_STRICT: frozenset[DifferenceType] = frozenset({
    _T.ID_CHANGED,
    _T.DESCRIPTION_CHANGED,
    _T.TITLE_CHANGED,
    _T.DEFAULT_CHANGED,
    _T.SCHEMA_REMOVED,
    _T.TYPE_EXTENDED,
    # strings
    _T.MAX_LENGTH_INCREASED,
    _T.MAX_LENGTH_REMOVED,
    _T.MIN_LENGTH_DECREASED,
    _T.MIN_LENGTH_REMOVED,
    _T.PATTERN_REMOVED,
    # numbers
    _T.MAXIMUM_INCREASED,
    _T.MAXIMUM_REMOVED,
    _T.MINIMUM_DECREASED,
    _T.MINIMUM_REMOVED,
    _T.EXCLUSIVE_MAXIMUM_INCREASED,
    _T.EXCLUSIVE_MAXIMUM_REMOVED,
    _T.EXCLUSIVE_MINIMUM_DECREASED,
    _T.EXCLUSIVE_MINIMUM_REMOVED,
    _T.MULTIPLE_OF_REDUCED,
    _T.MULTIPLE_OF_REMOVED,
    # objects
    _T.REQUIRED_ATTRIBUTE_WITH_DEFAULT_ADDED,
    _T.REQUIRED_ATTRIBUTE_REMOVED,
    _T.DEPENDENCY_ARRAY_NARROWED,
    _T.DEPENDENCY_ARRAY_REMOVED,
    _T.DEPENDENCY_SCHEMA_REMOVED,
    _T.MAX_PROPERTIES_INCREASED,
    _T.MAX_PROPERTIES_REMOVED,
    _T.MIN_PROPERTIES_DECREASED,
    _T.MIN_PROPERTIES_REMOVED,
    _T.ADDITIONAL_PROPERTIES_ADDED,
    _T.ADDITIONAL_PROPERTIES_EXTENDED,
    _T.PROPERTY_WITH_EMPTY_SCHEMA_ADDED_TO_OPEN_CONTENT_MODEL,
    _T.REQUIRED_PROPERTY_WITH_DEFAULT_ADDED_TO_UNOPEN_CONTENT_MODEL,
    _T.OPTIONAL_PROPERTY_ADDED_TO_UNOPEN_CONTENT_MODEL,
    _T.PROPERTY_WITH_FALSE_REMOVED_FROM_CLOSED_CONTENT_MODEL,
    _T.PROPERTY_REMOVED_FROM_OPEN_CONTENT_MODEL,
    _T.PROPERTY_ADDED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    _T.PROPERTY_REMOVED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    # arrays
    _T.MAX_ITEMS_INCREASED,
    _T.MAX_ITEMS_REMOVED,
    _T.MIN_ITEMS_DECREASED,
    _T.MIN_ITEMS_REMOVED,
    _T.UNIQUE_ITEMS_REMOVED,
    _T.ADDITIONAL_ITEMS_ADDED,
    _T.ADDITIONAL_ITEMS_EXTENDED,
    _T.ITEM_WITH_EMPTY_SCHEMA_ADDED_TO_OPEN_CONTENT_MODEL,
    _T.ITEM_ADDED_TO_CLOSED_CONTENT_MODEL,
    _T.ITEM_WITH_FALSE_REMOVED_FROM_CLOSED_CONTENT_MODEL,
    _T.ITEM_REMOVED_FROM_OPEN_CONTENT_MODEL,
    _T.ITEM_ADDED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    _T.ITEM_REMOVED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    # enum
    _T.ENUM_ARRAY_EXTENDED,
    # combined / not
    _T.COMBINED_TYPE_EXTENDED,
    _T.PRODUCT_TYPE_NARROWED,
    _T.SUM_TYPE_EXTENDED,
    _T.NOT_TYPE_NARROWED,
})

COMPATIBLE_CHANGES_LENIENT: frozenset[DifferenceType] = COMPATIBLE_CHANGES_STRICT | {
    _T.ADDITIONAL_PROPERTIES_NARROWED,
    _T.ADDITIONAL_PROPERTIES_REMOVED,
    _T.PROPERTY_ADDED_TO_OPEN_CONTENT_MODEL,
    _T.PROPERTY_REMOVED_FROM_OPEN_CONTENT_MODEL,
    _T.PROPERTY_ADDED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
    _T.PROPERTY_REMOVED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL,
}


class CompatibilityLevel(StrEnum):
    """Named compatible-change sets.

    - STRICT:  every original instance stays valid.
    - LENIENT: STRICT plus the usually-safe open-content-model changes.
    """

    STRICT = auto()
    LENIENT = auto()

    @property
    def changes(self) -> frozenset[DifferenceType]:
        if self is CompatibilityLevel.LENIENT:
            return COMPATIBLE_CHANGES_LENIENT
        return COMPATIBLE_CHANGES_STRICT


def _difference_type(value: DifferenceType | str) -> DifferenceType:
    if isinstance(value, DifferenceType):
        return value
    if isinstance(value, str):
        try:
            return DifferenceType(value.lower())
        except ValueError:
            pass
    msg = f"Unknown difference type: {value!r}"
    raise ValueError(msg)


def resolve_compatible_changes(
    value: CompatibilityLevel | str | Iterable[DifferenceType | str] | None,
) -> frozenset[DifferenceType]:
    """Turn a user-facing compatible-changes argument into a set of kinds.

    Args:
        value: None (strict), a ``CompatibilityLevel`` or its name
            (``"strict"``/``"lenient"``), or an iterable of ``DifferenceType``
            members or their names (``"MAX_LENGTH_INCREASED"`` or
            ``"max_length_increased"``).

    Returns:
        The compatible set as a frozenset.

    Raises:
        ValueError: If a level or difference-type name is unknown.
    """
    if value is None:
        return COMPATIBLE_CHANGES_STRICT
    if isinstance(value, CompatibilityLevel):
        return value.changes
    if isinstance(value, str):
        try:
            return CompatibilityLevel(value.lower()).changes
        except ValueError:
            msg = (
                f"Unknown compatibility level {value!r}; expected one of "
                f"{[level.value for level in CompatibilityLevel]}"
            )
            raise ValueError(msg) from None
    return frozenset(_difference_type(item) for item in value)
