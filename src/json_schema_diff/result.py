"""Difference and DifferenceType: the output of a schema comparison.

A comparison returns a list of ``Difference`` records in the order they were
produced.  Each one names the JSON path (``#/properties/a/maxLength``) and the
kind of change; ``description`` renders the fixed human-readable message for
that kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["Difference", "DifferenceType"]


class DifferenceType(StrEnum):
    """Closed catalogue of the changes the comparators can report.

    Values are the lower-cased member names (``"max_length_added"``).
    """

    # Common attributes and top-level shape
    ID_CHANGED = auto()
    DESCRIPTION_CHANGED = auto()
    TITLE_CHANGED = auto()
    DEFAULT_CHANGED = auto()
    SCHEMA_ADDED = auto()
    SCHEMA_REMOVED = auto()
    TYPE_EXTENDED = auto()
    TYPE_NARROWED = auto()
    TYPE_CHANGED = auto()

    # Strings
    MAX_LENGTH_ADDED = auto()
    MAX_LENGTH_REMOVED = auto()
    MAX_LENGTH_INCREASED = auto()
    MAX_LENGTH_DECREASED = auto()
    MIN_LENGTH_ADDED = auto()
    MIN_LENGTH_REMOVED = auto()
    MIN_LENGTH_INCREASED = auto()
    MIN_LENGTH_DECREASED = auto()
    PATTERN_ADDED = auto()
    PATTERN_REMOVED = auto()
    PATTERN_CHANGED = auto()

    # Numbers
    MAXIMUM_ADDED = auto()
    MAXIMUM_REMOVED = auto()
    MAXIMUM_INCREASED = auto()
    MAXIMUM_DECREASED = auto()
    MINIMUM_ADDED = auto()
    MINIMUM_REMOVED = auto()
    MINIMUM_INCREASED = auto()
    MINIMUM_DECREASED = auto()
    EXCLUSIVE_MAXIMUM_ADDED = auto()
    EXCLUSIVE_MAXIMUM_REMOVED = auto()
    EXCLUSIVE_MAXIMUM_INCREASED = auto()
    EXCLUSIVE_MAXIMUM_DECREASED = auto()
    EXCLUSIVE_MINIMUM_ADDED = auto()
    EXCLUSIVE_MINIMUM_REMOVED = auto()
    EXCLUSIVE_MINIMUM_INCREASED = auto()
    EXCLUSIVE_MINIMUM_DECREASED = auto()
    MULTIPLE_OF_ADDED = auto()
    MULTIPLE_OF_REMOVED = auto()
    MULTIPLE_OF_EXPANDED = auto()
    MULTIPLE_OF_REDUCED = auto()
    MULTIPLE_OF_CHANGED = auto()

    # Objects
    REQUIRED_ATTRIBUTE_ADDED = auto()
    REQUIRED_ATTRIBUTE_WITH_DEFAULT_ADDED = auto()
    REQUIRED_ATTRIBUTE_REMOVED = auto()
    MAX_PROPERTIES_ADDED = auto()
    MAX_PROPERTIES_REMOVED = auto()
    MAX_PROPERTIES_INCREASED = auto()
    MAX_PROPERTIES_DECREASED = auto()
    MIN_PROPERTIES_ADDED = auto()
    MIN_PROPERTIES_REMOVED = auto()
    MIN_PROPERTIES_INCREASED = auto()
    MIN_PROPERTIES_DECREASED = auto()
    ADDITIONAL_PROPERTIES_ADDED = auto()
    ADDITIONAL_PROPERTIES_REMOVED = auto()
    ADDITIONAL_PROPERTIES_EXTENDED = auto()
    ADDITIONAL_PROPERTIES_NARROWED = auto()
    DEPENDENCY_ARRAY_ADDED = auto()
    DEPENDENCY_ARRAY_REMOVED = auto()
    DEPENDENCY_ARRAY_EXTENDED = auto()
    DEPENDENCY_ARRAY_NARROWED = auto()
    DEPENDENCY_ARRAY_CHANGED = auto()
    DEPENDENCY_SCHEMA_ADDED = auto()
    DEPENDENCY_SCHEMA_REMOVED = auto()
    PROPERTY_ADDED_TO_OPEN_CONTENT_MODEL = auto()
    PROPERTY_WITH_EMPTY_SCHEMA_ADDED_TO_OPEN_CONTENT_MODEL = auto()
    REQUIRED_PROPERTY_ADDED_TO_UNOPEN_CONTENT_MODEL = auto()
    REQUIRED_PROPERTY_WITH_DEFAULT_ADDED_TO_UNOPEN_CONTENT_MODEL = auto()
    OPTIONAL_PROPERTY_ADDED_TO_UNOPEN_CONTENT_MODEL = auto()
    PROPERTY_REMOVED_FROM_OPEN_CONTENT_MODEL = auto()
    PROPERTY_WITH_FALSE_REMOVED_FROM_CLOSED_CONTENT_MODEL = auto()
    PROPERTY_REMOVED_FROM_CLOSED_CONTENT_MODEL = auto()
    PROPERTY_REMOVED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL = auto()
    PROPERTY_REMOVED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL = auto()
    PROPERTY_ADDED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL = auto()
    PROPERTY_ADDED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL = auto()
    RESERVED_PROPERTY_REMOVED = auto()
    RESERVED_PROPERTY_CONFLICTS_WITH_PROPERTY = auto()

    # Arrays
    MAX_ITEMS_ADDED = auto()
    MAX_ITEMS_REMOVED = auto()
    MAX_ITEMS_INCREASED = auto()
    MAX_ITEMS_DECREASED = auto()
    MIN_ITEMS_ADDED = auto()
    MIN_ITEMS_REMOVED = auto()
    MIN_ITEMS_INCREASED = auto()
    MIN_ITEMS_DECREASED = auto()
    UNIQUE_ITEMS_ADDED = auto()
    UNIQUE_ITEMS_REMOVED = auto()
    ADDITIONAL_ITEMS_ADDED = auto()
    ADDITIONAL_ITEMS_REMOVED = auto()
    ADDITIONAL_ITEMS_EXTENDED = auto()
    ADDITIONAL_ITEMS_NARROWED = auto()
    ITEM_ADDED_TO_OPEN_CONTENT_MODEL = auto()
    ITEM_WITH_EMPTY_SCHEMA_ADDED_TO_OPEN_CONTENT_MODEL = auto()
    ITEM_ADDED_TO_CLOSED_CONTENT_MODEL = auto()
    ITEM_REMOVED_FROM_OPEN_CONTENT_MODEL = auto()
    ITEM_WITH_FALSE_REMOVED_FROM_CLOSED_CONTENT_MODEL = auto()
    ITEM_REMOVED_FROM_CLOSED_CONTENT_MODEL = auto()
    ITEM_REMOVED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL = auto()
    ITEM_REMOVED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL = auto()
    ITEM_ADDED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL = auto()
    ITEM_ADDED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL = auto()

    # Enum / const
    ENUM_ARRAY_EXTENDED = auto()
    ENUM_ARRAY_NARROWED = auto()
    ENUM_ARRAY_CHANGED = auto()

    # Combined / not
    COMBINED_TYPE_EXTENDED = auto()
    COMBINED_TYPE_CHANGED = auto()
    PRODUCT_TYPE_EXTENDED = auto()
    PRODUCT_TYPE_NARROWED = auto()
    SUM_TYPE_EXTENDED = auto()
    SUM_TYPE_NARROWED = auto()
    COMBINED_TYPE_SUBSCHEMAS_CHANGED = auto()
    NOT_TYPE_EXTENDED = auto()
    NOT_TYPE_NARROWED = auto()


_T = DifferenceType

# ---------------------------------------------------------------------------
# Message templates; "{path}" is the JSON path, the two "%s" placeholders are
# left for the caller ("original"/"update" wording).
# ---------------------------------------------------------------------------

_KEYWORD_ADDED_OR_REMOVED = frozenset({
    _T.MAXIMUM_ADDED, _T.MINIMUM_ADDED, _T.EXCLUSIVE_MAXIMUM_ADDED,
    _T.EXCLUSIVE_MINIMUM_ADDED, _T.MULTIPLE_OF_ADDED, _T.MAX_LENGTH_ADDED,
    _T.MIN_LENGTH_ADDED, _T.PATTERN_ADDED, _T.REQUIRED_ATTRIBUTE_ADDED,
    _T.MAX_PROPERTIES_ADDED, _T.MIN_PROPERTIES_ADDED, _T.DEPENDENCY_ARRAY_ADDED,
    _T.DEPENDENCY_SCHEMA_ADDED, _T.MAX_ITEMS_ADDED, _T.MIN_ITEMS_ADDED,
    _T.UNIQUE_ITEMS_ADDED, _T.ADDITIONAL_ITEMS_REMOVED, _T.ADDITIONAL_PROPERTIES_REMOVED,
})
_VALUE_INCREASED = frozenset({
    _T.MIN_LENGTH_INCREASED, _T.MINIMUM_INCREASED, _T.EXCLUSIVE_MINIMUM_INCREASED,
    _T.MIN_PROPERTIES_INCREASED, _T.MULTIPLE_OF_EXPANDED, _T.MIN_ITEMS_INCREASED,
})
_VALUE_DECREASED = frozenset({
    _T.MAX_LENGTH_DECREASED, _T.MAXIMUM_DECREASED, _T.MAX_ITEMS_DECREASED,
    _T.EXCLUSIVE_MAXIMUM_DECREASED, _T.MAX_PROPERTIES_DECREASED,
})
_VALUE_CHANGED = frozenset({
    _T.PATTERN_CHANGED, _T.MULTIPLE_OF_CHANGED, _T.DEPENDENCY_ARRAY_CHANGED,
})
_TYPE_NARROWED = frozenset({
    _T.ADDITIONAL_ITEMS_NARROWED, _T.ENUM_ARRAY_NARROWED, _T.SUM_TYPE_NARROWED,
    _T.ADDITIONAL_PROPERTIES_NARROWED,
})
_TYPE_EXTENDED = frozenset({
    _T.DEPENDENCY_ARRAY_EXTENDED, _T.PRODUCT_TYPE_EXTENDED, _T.SUM_TYPE_EXTENDED,
    _T.NOT_TYPE_EXTENDED,
})
_TYPE_CHANGED = frozenset({
    _T.TYPE_CHANGED, _T.TYPE_NARROWED, _T.COMBINED_TYPE_CHANGED,
    _T.COMBINED_TYPE_SUBSCHEMAS_CHANGED, _T.ENUM_ARRAY_CHANGED,
})

_GROUP_TEMPLATES: tuple[tuple[frozenset[DifferenceType], str], ...] = (
    (
        _KEYWORD_ADDED_OR_REMOVED,
        "The keyword at path '{path}' in the %s schema is not present in the %s schema",
    ),
    (
        _VALUE_INCREASED,
        "The value at path '{path}' in the %s schema is more than its value in the %s schema",
    ),
    (
        _VALUE_DECREASED,
        "The value at path '{path}' in the %s schema is less than its value in the %s schema",
    ),
    (
        _VALUE_CHANGED,
        "The value at path '{path}' is different between the %s and %s schema",
    ),
    (
        _TYPE_NARROWED,
        "An array or combined type at path '{path}' has fewer elements in the %s schema "
        "than the %s schema",
    ),
    (
        _TYPE_EXTENDED,
        "An array or combined type at path '{path}' has more elements in the %s schema "
        "than the %s schema",
    ),
    (
        _TYPE_CHANGED,
        "A type at path '{path}' is different between the %s schema and the %s schema",
    ),
)

_MEMBER_TEMPLATES: dict[DifferenceType, str] = {
    _T.PROPERTY_ADDED_TO_OPEN_CONTENT_MODEL: (
        "The %s schema has an open content model and has a property or item at path "
        "'{path}' which is missing in the %s schema"
    ),
    _T.REQUIRED_PROPERTY_ADDED_TO_UNOPEN_CONTENT_MODEL: (
        "The %s schema has an unopen content model and has a required property at path "
        "'{path}' which is missing in the %s schema"
    ),
    _T.PROPERTY_REMOVED_FROM_CLOSED_CONTENT_MODEL: (
        "The %s has a closed content model and is missing a property or item present at "
        "path '{path}' in the %s schema"
    ),
    _T.PROPERTY_REMOVED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL: (
        "A property or item is missing in the %s schema but present at path '{path}' in "
        "the %s schema and is not covered by its partially open content model"
    ),
    _T.PROPERTY_ADDED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL: (
        "The %s schema has a property or item at path '{path}' which is missing in the %s "
        "schema and is not covered by its partially open content model"
    ),
    _T.RESERVED_PROPERTY_REMOVED: (
        "The %s schema has reserved property '{path}' removed from its metadata which is "
        "present in the %s schema."
    ),
    _T.RESERVED_PROPERTY_CONFLICTS_WITH_PROPERTY: (
        "The %s schema has property at path '{path}' that conflicts with the reserved "
        "properties which is missing in the %s schema."
    ),
}
# Item variants share the property wording
_MEMBER_TEMPLATES[_T.ITEM_ADDED_TO_OPEN_CONTENT_MODEL] = _MEMBER_TEMPLATES[
    _T.PROPERTY_ADDED_TO_OPEN_CONTENT_MODEL
]
_MEMBER_TEMPLATES[_T.ITEM_REMOVED_FROM_CLOSED_CONTENT_MODEL] = _MEMBER_TEMPLATES[
    _T.PROPERTY_REMOVED_FROM_CLOSED_CONTENT_MODEL
]
_MEMBER_TEMPLATES[_T.ITEM_REMOVED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL] = (
    _MEMBER_TEMPLATES[_T.PROPERTY_REMOVED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL]
)
_MEMBER_TEMPLATES[_T.ITEM_ADDED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL] = (
    _MEMBER_TEMPLATES[_T.PROPERTY_ADDED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL]
)


@dataclass(frozen=True, slots=True)
class Difference:
    """One detected change.

    Attributes:
        json_path: ``#/``-prefixed path of the changed location, e.g.
            ``#/properties/a/maxLength``.  The root is ``#/``.
        type: Kind of change.
    """

    json_path: str
    type: DifferenceType

    @property
    def description(self) -> str:
        """Human-readable message for this kind of change.

        Contains two ``%s`` placeholders for the "original"/"update" wording,
        which a caller may fill with ``%`` formatting.  Kinds without a fixed
        message render as an empty string.
        """
        for group, template in _GROUP_TEMPLATES:
            if self.type in group:
                return template.format(path=self.json_path)
        template = _MEMBER_TEMPLATES.get(self.type)
        return template.format(path=self.json_path) if template is not None else ""

    def __str__(self) -> str:
        return f'{{errorType:"{self.type.name}", description:"{self.description}"}}'
