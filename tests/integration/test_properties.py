"""Algebraic properties of the comparison, checked over a small corpus.

Covers:
- Reflexivity: every schema compared with itself yields no differences
- Compatible-set monotonicity: compatible under K1 implies compatible under K2 >= K1
- Enum subset laws
- Numeric bound monotonicity
- Matching completeness for intersections
- Reference scenarios
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import pytest

from json_schema_diff import (
    COMPATIBLE_CHANGES_LENIENT,
    COMPATIBLE_CHANGES_STRICT,
    DifferenceType,
    compare_documents,
    is_compatible,
)

# ---------------------------------------------------------------------------
# Corpus
# ---------------------------------------------------------------------------

_CORPUS: list[Any] = [
    True,
    False,
    {},
    {"type": "string", "maxLength": 10, "minLength": 1, "pattern": "^[a-z]+$"},
    {"type": "integer", "minimum": 0, "exclusiveMaximum": 100, "multipleOf": 5},
    {"type": "number", "maximum": 1.5},
    {"enum": ["red", "green", 1, None, True]},
    {"const": {"nested": [1, 2]}},
    {"type": "string", "enum": ["a", "b"]},
    {"type": ["string", "null"]},
    {"not": {"type": "string"}},
    {"anyOf": [{"type": "string"}, {"type": "number", "minimum": 1}]},
    {"allOf": [{"type": "object"}, {"required": ["id"]}], "title": "mixed"},
    {
        "type": "object",
        "properties": {
            "id": {"type": "integer"},
            "tags": {"type": "array", "items": {"type": "string"}, "uniqueItems": True},
            "meta": {"type": "object", "additionalProperties": {"type": "string"}},
        },
        "required": ["id"],
        "patternProperties": {"^x-": {"type": "string"}},
        "additionalProperties": False,
        "dependencies": {"id": ["tags"]},
    },
    {
        "type": "array",
        "items": [{"type": "string"}, {"type": "number"}],
        "additionalItems": {"type": "boolean"},
        "maxItems": 4,
    },
    {
        "definitions": {
            "node": {
                "type": "object",
                "properties": {
                    "value": {"type": "number"},
                    "next": {"anyOf": [{"$ref": "#/definitions/node"}, {"type": "null"}]},
                },
            }
        },
        "$ref": "#/definitions/node",
    },
    {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "array",
        "prefixItems": [{"type": "string"}],
        "items": False,
    },
    {
        "$schema": "http://json-schema.org/draft-04/schema#",
        "id": "urn:example",
        "type": "number",
        "maximum": 10,
        "exclusiveMaximum": True,
    },
]


@pytest.mark.parametrize("schema", _CORPUS)
def test_reflexivity(schema: Any) -> None:
    assert compare_documents(schema, schema) == []


@pytest.mark.parametrize("schema", _CORPUS)
def test_reflexivity_from_text(schema: Any) -> None:
    import json

    text = json.dumps(schema)
    assert compare_documents(text, text) == []


# ---------------------------------------------------------------------------
# Monotonicity
# ---------------------------------------------------------------------------

_PAIRS: list[tuple[Any, Any]] = [
    (a, b) for i, a in enumerate(_CORPUS) for b in _CORPUS[i + 1 : i + 4]
] + [
    ({"type": "object"}, {"type": "object", "properties": {"a": {"type": "string"}}}),
    (
        {"type": "object", "additionalProperties": {"type": "string"}},
        {"type": "object", "properties": {"a": {"type": "number"}},
         "additionalProperties": {"type": "string"}},
    ),
    ({"anyOf": [{"type": "object"}]}, {"anyOf": [{"type": "object", "maxProperties": 1}]}),
]

_SMALLER = COMPATIBLE_CHANGES_STRICT - {
    DifferenceType.MAX_LENGTH_INCREASED,
    DifferenceType.PROPERTY_REMOVED_FROM_OPEN_CONTENT_MODEL,
    DifferenceType.SUM_TYPE_EXTENDED,
}


@pytest.mark.parametrize(("original", "update"), _PAIRS)
def test_compatible_set_monotonicity(original: Any, update: Any) -> None:
    chain = [frozenset(), _SMALLER, COMPATIBLE_CHANGES_STRICT, COMPATIBLE_CHANGES_LENIENT]
    verdicts = [is_compatible(original, update, changes) for changes in chain]
    # once compatible, every larger set stays compatible
    assert verdicts == sorted(verdicts)


# ---------------------------------------------------------------------------
# Enum laws
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("before", "after", "expected"),
    [
        (["a"], ["a", "b"], DifferenceType.ENUM_ARRAY_EXTENDED),
        ([1, 2], [1, 2, 3, 4], DifferenceType.ENUM_ARRAY_EXTENDED),
        (["a", "b"], ["a"], DifferenceType.ENUM_ARRAY_NARROWED),
        ([None, 0, False], [None], DifferenceType.ENUM_ARRAY_NARROWED),
        (["a", "b"], ["b", "c"], DifferenceType.ENUM_ARRAY_CHANGED),
        ([1], [True], DifferenceType.ENUM_ARRAY_CHANGED),
    ],
)
def test_enum_subset_laws(before: list[Any], after: list[Any], expected: DifferenceType) -> None:
    result = compare_documents({"enum": before}, {"enum": after})
    assert [d.type for d in result] == [expected]


# ---------------------------------------------------------------------------
# Numeric bounds
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("lower", "higher"),
    [(0, 1), (-5, 5), (Decimal("0.1"), Decimal("0.2")), (10**20, 10**20 + 1)],
)
def test_maximum_monotonicity(lower: Any, higher: Any) -> None:
    low = {"type": "number", "maximum": lower}
    high = {"type": "number", "maximum": higher}

    increased = compare_documents(low, high)
    assert [d.type for d in increased] == [DifferenceType.MAXIMUM_INCREASED]
    assert is_compatible(low, high)

    decreased = compare_documents(high, low)
    assert [d.type for d in decreased] == [DifferenceType.MAXIMUM_DECREASED]
    assert not is_compatible(high, low)


# ---------------------------------------------------------------------------
# Matching completeness
# ---------------------------------------------------------------------------


def test_intersection_member_added_is_compatible() -> None:
    a = {"type": "object", "properties": {"a": {"type": "string"}}}
    b = {"type": "object", "properties": {"b": {"type": "string"}}}
    c = {"type": "object", "properties": {"c": {"type": "string"}}}
    original = {"allOf": [a, b]}
    update = {"allOf": [a, b, c]}

    result = compare_documents(original, update)
    assert [d.type for d in result] == [DifferenceType.PRODUCT_TYPE_EXTENDED]


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_max_length_increased(self) -> None:
        original = '{"type":"string","maxLength":10}'
        update = '{"type":"string","maxLength":20}'
        result = compare_documents(original, update)
        assert [d.type for d in result] == [DifferenceType.MAX_LENGTH_INCREASED]
        assert is_compatible(original, update)

    def test_number_to_string(self) -> None:
        original = {"type": "number", "maximum": 3}
        update = {"type": "string", "maxLength": 3}
        result = compare_documents(original, update)
        assert [d.type for d in result] == [DifferenceType.TYPE_CHANGED]
        assert not is_compatible(original, update)

    def test_property_added_to_open_object(self) -> None:
        original = {"type": "object"}
        update = {"type": "object", "properties": {"a": {"type": "string"}}}
        result = compare_documents(original, update)
        assert [d.type for d in result] == [
            DifferenceType.PROPERTY_ADDED_TO_OPEN_CONTENT_MODEL
        ]
        assert is_compatible(original, update, COMPATIBLE_CHANGES_LENIENT)

    def test_empty_schema_to_object_is_a_type_change(self) -> None:
        # {} accepts anything, not just objects
        result = compare_documents({}, {"properties": {}})
        assert [d.type for d in result] == [DifferenceType.TYPE_CHANGED]

    def test_identical_nested_object(self) -> None:
        schema = {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "address": {
                    "type": "object",
                    "properties": {"street": {"type": "string"}, "zip": {"type": "integer"}},
                    "required": ["street"],
                },
            },
        }
        assert compare_documents(schema, schema) == []

    def test_connect_bytes_representations(self) -> None:
        common = {
            "title": "org.apache.kafka.connect.data.Decimal",
            "connect.version": 1,
            "connect.type": "bytes",
            "connect.parameters": {"scale": "2"},
        }
        assert compare_documents({"type": "string", **common}, {"type": "number", **common}) == []
