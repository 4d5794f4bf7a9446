"""Schema node dataclasses: the typed tree a JSON Schema document loads into.

Every keyword family has its own node class.  All classes share the common
attributes of ``Schema`` (id, title, description, default and the mapping of
unprocessed keywords) and are otherwise independent, so the diff engine can
dispatch with a single ``match`` over the closed set of classes:

- EmptySchema    -> accepts any instance (``true`` / ``{}``)
- FalseSchema    -> accepts nothing (``false``)
- StringSchema   -> ``maxLength`` / ``minLength`` / ``pattern``
- NumberSchema   -> numeric bounds, ``multipleOf`` and the integer flag
- ObjectSchema   -> properties, required, additional/pattern properties, ...
- ArraySchema    -> all-items / tuple items, additional items, ...
- EnumSchema     -> ``enum``
- ConstSchema    -> ``const``
- CombinedSchema -> ``allOf`` / ``anyOf`` / ``oneOf``
- NotSchema      -> ``not``

Nodes are built once by ``SchemaLoader`` and treated as read-only afterwards.
They are not frozen because a self-referential ``$ref`` must be able to point
at a node whose children are still being loaded.  Nodes are unhashable; code
that needs to track a node uses its identity (``id(node)``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import StrEnum
from typing import Any

__all__ = [
    "ArraySchema",
    "CombinedSchema",
    "ConstSchema",
    "EmptySchema",
    "EnumSchema",
    "FalseSchema",
    "NotSchema",
    "NumberSchema",
    "ObjectSchema",
    "Schema",
    "StringSchema",
    "ValidationCriterion",
    "canonical_value",
]

# Field metadata marker: the field holds raw JSON literals (compared with JSON
# semantics via canonical_value rather than Python equality).
_LITERAL = {"literal": True}


def canonical_value(value: Any) -> Any:
    """Return a hashable canonical form of a JSON literal.

    Python treats ``True == 1`` and ``{"a": 1}`` as unhashable; JSON does not
    consider a boolean equal to a number.  The canonical form tags every value
    with its JSON kind so that equality and hashing follow JSON semantics:
    booleans are distinct from numbers, numbers compare numerically
    (``1 == 1.0``), arrays are ordered and objects are unordered.

    Args:
        value: A parsed JSON value (dict, list, str, int, float, Decimal,
            bool or None).

    Returns:
        A hashable tuple that is equal for, and only for, equal JSON values.
    """
    # bool MUST be checked before int: bool subclasses int in Python
    if isinstance(value, bool):
        return ("boolean", value)
    if isinstance(value, (int, Decimal)):
        return ("number", Decimal(value))
    if isinstance(value, float):
        return ("number", Decimal(repr(value)))
    if isinstance(value, str):
        return ("string", value)
    if value is None:
        return ("null",)
    if isinstance(value, (list, tuple)):
        return ("array", tuple(canonical_value(item) for item in value))
    if isinstance(value, dict):
        return (
            "object",
            frozenset((key, canonical_value(item)) for key, item in value.items()),
        )
    return ("other", repr(value))


def _schemas_equal(left: Schema, right: Schema) -> bool:
    """Compare two nodes field by field.

    Pairs of values still to be compared are kept on a worklist instead of
    the call stack, so arbitrarily deep trees compare without recursion.  A
    pair of nodes already visited is assumed equal, so self-referential trees
    terminate.
    """
    assumed: set[tuple[int, int]] = set()
    pending: list[tuple[Any, Any]] = [(left, right)]
    while pending:
        mine, theirs = pending.pop()
        if mine is theirs:
            continue
        if isinstance(mine, Schema) and isinstance(theirs, Schema):
            if type(mine) is not type(theirs):
                return False
            key = (id(mine), id(theirs))
            if key in assumed:
                continue
            assumed.add(key)
            if not _queue_fields(mine, theirs, pending):
                return False
        elif isinstance(mine, re.Pattern) and isinstance(theirs, re.Pattern):
            if mine.pattern != theirs.pattern or mine.flags != theirs.flags:
                return False
        elif isinstance(mine, dict) and isinstance(theirs, dict):
            if mine.keys() != theirs.keys():
                return False
            pending.extend((item, theirs[key]) for key, item in mine.items())
        elif isinstance(mine, (list, tuple)) and isinstance(theirs, (list, tuple)):
            if len(mine) != len(theirs):
                return False
            pending.extend(zip(mine, theirs, strict=True))
        elif not bool(mine == theirs):
            return False
    return True


def _queue_fields(left: Schema, right: Schema, pending: list[tuple[Any, Any]]) -> bool:
    """Check the literal fields of two nodes and queue the others.

    Returns:
        False as soon as a literal field differs.
    """
    for f in fields(left):
        mine = getattr(left, f.name)
        theirs = getattr(right, f.name)
        if f.metadata.get("literal"):
            if canonical_value(mine) != canonical_value(theirs):
                return False
        elif f.metadata.get("literal_set"):
            if {canonical_value(v) for v in mine} != {canonical_value(v) for v in theirs}:
                return False
        else:
            pending.append((mine, theirs))
    return True


class ValidationCriterion(StrEnum):
    """How a CombinedSchema combines its subschemas.

    The values are the JSON Schema keywords, also used as path segments.
    """

    ALL = "allOf"
    ANY = "anyOf"
    ONE = "oneOf"

    @property
    def keyword(self) -> str:
        return self.value

    @property
    def is_disjunctive(self) -> bool:
        """True for ``anyOf`` / ``oneOf`` (union semantics)."""
        return self is not ValidationCriterion.ALL


@dataclass(slots=True, kw_only=True, eq=False)
class Schema:
    """Common attributes shared by every schema node.

    Attributes:
        id:          ``$id`` (or draft-4 ``id``) of the schema, if any.
        title:       ``title`` annotation.
        description: ``description`` annotation.
        default:     ``default`` value; JSON ``null`` is indistinguishable
                     from an absent default.
        unprocessed: Keywords outside the known vocabulary, mapped to their
                     raw JSON values (e.g. ``connect.type``).
    """

    id: str | None = None
    title: str | None = None
    description: str | None = None
    default: Any = field(default=None, metadata=_LITERAL)
    unprocessed: dict[str, Any] = field(default_factory=dict, metadata=_LITERAL)

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return _schemas_equal(self, other)

    __hash__ = None  # type: ignore[assignment]


@dataclass(slots=True, kw_only=True, eq=False)
class EmptySchema(Schema):
    """Schema that accepts every instance."""


@dataclass(slots=True, kw_only=True, eq=False)
class FalseSchema(Schema):
    """Schema that rejects every instance."""


@dataclass(slots=True, kw_only=True, eq=False)
class StringSchema(Schema):
    max_length: int | None = None
    min_length: int | None = None
    pattern: re.Pattern[str] | None = None


@dataclass(slots=True, kw_only=True, eq=False)
class NumberSchema(Schema):
    """Numeric constraints.

    ``exclusive_maximum`` / ``exclusive_minimum`` always hold numeric limits;
    draft-4 boolean flags are converted by the loader.
    """

    maximum: int | Decimal | None = None
    minimum: int | Decimal | None = None
    exclusive_maximum: int | Decimal | None = None
    exclusive_minimum: int | Decimal | None = None
    multiple_of: int | Decimal | None = None
    requires_integer: bool = False


@dataclass(slots=True, kw_only=True, eq=False)
class ObjectSchema(Schema):
    """Object constraints.

    Attributes:
        properties:     Property name -> subschema.
        required:       Names listed in ``required``.
        permits_additional_properties: False only for
                        ``additionalProperties: false``.
        additional_properties: Subschema for ``additionalProperties`` when it
                        is an object.
        pattern_properties: Ordered ``(regex, subschema)`` pairs; the first
                        pattern that matches a name wins.
        property_dependencies: Name -> names it requires.
        schema_dependencies:   Name -> subschema applied when it is present.
    """

    properties: dict[str, Schema] = field(default_factory=dict)
    required: frozenset[str] = frozenset()
    permits_additional_properties: bool = True
    additional_properties: Schema | None = None
    pattern_properties: list[tuple[re.Pattern[str], Schema]] = field(
        default_factory=list
    )
    property_dependencies: dict[str, frozenset[str]] = field(default_factory=dict)
    schema_dependencies: dict[str, Schema] = field(default_factory=dict)
    max_properties: int | None = None
    min_properties: int | None = None

    def is_open_content_model(self) -> bool:
        """True when any undeclared property is accepted unconstrained."""
        return (
            not self.pattern_properties
            and self.additional_properties is None
            and self.permits_additional_properties
        )

    def schema_for_undeclared(self, name: str) -> Schema | None:
        """Return the subschema an undeclared property ``name`` would get.

        The first pattern property whose regex matches (anywhere in the name)
        wins; otherwise the ``additionalProperties`` subschema, if any.
        """
        for pattern, schema in self.pattern_properties:
            if pattern.search(name):
                return schema
        return self.additional_properties


@dataclass(slots=True, kw_only=True, eq=False)
class ArraySchema(Schema):
    """Array constraints.

    ``all_items`` is the single-schema ``items`` form and ``item_schemas`` the
    positional (tuple) form; both may be present at the same time.
    ``item_schemas`` is None when no tuple form was given.
    """

    all_items: Schema | None = None
    item_schemas: list[Schema] | None = None
    permits_additional_items: bool = True
    additional_items: Schema | None = None
    max_items: int | None = None
    min_items: int | None = None
    unique_items: bool = False

    def is_open_content_model(self) -> bool:
        return self.additional_items is None and self.permits_additional_items


@dataclass(slots=True, kw_only=True, eq=False)
class EnumSchema(Schema):
    values: list[Any] = field(default_factory=list, metadata={"literal_set": True})

    def canonical_values(self) -> frozenset[Any]:
        return frozenset(canonical_value(v) for v in self.values)


@dataclass(slots=True, kw_only=True, eq=False)
class ConstSchema(Schema):
    value: Any = field(default=None, metadata=_LITERAL)


@dataclass(slots=True, kw_only=True, eq=False)
class CombinedSchema(Schema):
    """``allOf`` / ``anyOf`` / ``oneOf`` over a duplicate-free subschema list."""

    criterion: ValidationCriterion = ValidationCriterion.ALL
    subschemas: list[Schema] = field(default_factory=list)

    def __post_init__(self) -> None:
        unique: list[Schema] = []
        for schema in self.subschemas:
            if not any(schema == seen for seen in unique):
                unique.append(schema)
        self.subschemas = unique

    def add_subschema(self, schema: Schema) -> None:
        """Append ``schema`` unless a structurally equal one is present."""
        if not any(schema == seen for seen in self.subschemas):
            self.subschemas.append(schema)


@dataclass(slots=True, kw_only=True, eq=False)
class NotSchema(Schema):
    must_not_match: Schema = field(default_factory=EmptySchema)
