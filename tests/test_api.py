"""Unit tests for the public API functions.

Covers compare, compare_documents, incompatible_differences and is_compatible.
"""

from __future__ import annotations

import logging
from typing import Any

import pytest

from json_schema_diff import (
    CompatibilityLevel,
    Difference,
    DifferenceType,
    InvalidSchemaError,
    JsonSchemaVersion,
    compare,
    compare_documents,
    incompatible_differences,
    is_compatible,
    load_schema,
)

_OPEN = {"type": "object"}
_OPEN_WITH_A = {"type": "object", "properties": {"a": {"type": "string"}}}


class TestCompare:
    """Tests for compare() on loaded schemas."""

    def test_returns_differences(self) -> None:
        result = compare(
            load_schema({"type": "string"}), load_schema({"type": "string", "maxLength": 3})
        )
        assert result == [Difference("#/maxLength", DifferenceType.MAX_LENGTH_ADDED)]

    def test_identical_returns_empty(self) -> None:
        schema = load_schema({"type": "string", "maxLength": 3})
        assert compare(schema, schema) == []

    def test_absent_original(self) -> None:
        assert compare(None, load_schema({"type": "string"})) == [
            Difference("#/", DifferenceType.SCHEMA_ADDED)
        ]

    def test_no_state_between_calls(self) -> None:
        original = load_schema({"type": "string"})
        update = load_schema({"type": "number"})
        assert compare(original, update) == compare(original, update)

    def test_compatible_set_steers_probes(self) -> None:
        # The added property is only covered by the partial model when
        # TYPE_CHANGED counts as compatible
        original = load_schema({"type": "object", "additionalProperties": {"type": "string"}})
        update = load_schema({
            "type": "object",
            "properties": {"a": {"type": "number"}},
            "additionalProperties": {"type": "string"},
        })
        strict = [d.type for d in compare(original, update)]
        custom = [d.type for d in compare(original, update, [DifferenceType.TYPE_CHANGED])]
        assert DifferenceType.PROPERTY_ADDED_NOT_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL in strict
        assert DifferenceType.PROPERTY_ADDED_IS_COVERED_BY_PARTIALLY_OPEN_CONTENT_MODEL in custom

    def test_logs_summary(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="json_schema_diff.api"):
            compare(load_schema({"type": "string"}), load_schema({"type": "number"}))
        assert "1 difference(s), compatible=False" in caplog.text


class TestCompareDocuments:
    """Tests for compare_documents() on JSON text and parsed documents."""

    def test_text_input(self) -> None:
        result = compare_documents('{"type": "string"}', '{"type": "integer"}')
        assert [d.type for d in result] == [DifferenceType.TYPE_CHANGED]

    def test_bytes_input(self) -> None:
        assert compare_documents(b'{"type": "string"}', b'{"type": "string"}') == []

    def test_invalid_json(self) -> None:
        with pytest.raises(InvalidSchemaError):
            compare_documents("{not json", "{}")

    def test_invalid_root(self) -> None:
        with pytest.raises(InvalidSchemaError):
            compare_documents([1, 2], {})

    def test_explicit_version(self) -> None:
        original = {"type": "number", "maximum": 5, "exclusiveMaximum": True}
        update = {"type": "number", "maximum": 5}
        result = compare_documents(original, update, version=JsonSchemaVersion.DRAFT_4)
        assert [(d.json_path, d.type) for d in result] == [
            ("#/exclusiveMaximum", DifferenceType.EXCLUSIVE_MAXIMUM_REMOVED)
        ]

    def test_per_side_versions(self) -> None:
        # The same bound spelled in draft-4 and draft-6 form is equivalent
        result = compare_documents(
            {"type": "number", "maximum": 5, "exclusiveMaximum": True},
            {"type": "number", "maximum": 5, "exclusiveMaximum": 5},
            original_version=JsonSchemaVersion.DRAFT_4,
            update_version=JsonSchemaVersion.DRAFT_6,
        )
        assert result == []


class TestIsCompatible:
    """Tests for is_compatible()."""

    def test_compatible_change(self) -> None:
        assert is_compatible({"type": "string", "maxLength": 3}, {"type": "string"}) is True

    def test_incompatible_change(self) -> None:
        assert is_compatible({"type": "string"}, {"type": "string", "maxLength": 3}) is False

    def test_identical(self) -> None:
        assert is_compatible(_OPEN_WITH_A, _OPEN_WITH_A) is True

    def test_lenient_level(self) -> None:
        assert is_compatible(_OPEN, _OPEN_WITH_A) is False
        assert is_compatible(_OPEN, _OPEN_WITH_A, CompatibilityLevel.LENIENT) is True
        assert is_compatible(_OPEN, _OPEN_WITH_A, "lenient") is True

    def test_accepts_loaded_schemas(self) -> None:
        assert is_compatible(load_schema(_OPEN_WITH_A), load_schema(_OPEN)) is True

    def test_mixed_inputs(self) -> None:
        assert is_compatible('{"type": "integer"}', {"type": "number"}) is True

    def test_custom_set(self) -> None:
        assert is_compatible({"type": "string"}, {"type": "number"}, ["TYPE_CHANGED"]) is True


class TestIncompatibleDifferences:
    """Tests for incompatible_differences()."""

    def test_filters_compatible_kinds(self) -> None:
        original = {"type": "object", "properties": {"a": {"type": "string"}}}
        update = {
            "type": "object",
            "properties": {"a": {"type": "string", "maxLength": 3}},
            "title": "changed",
        }
        result = incompatible_differences(original, update)
        assert result == [
            Difference(json_path="#/properties/a/maxLength", type=DifferenceType.MAX_LENGTH_ADDED)
        ]

    def test_empty_for_compatible_change(self) -> None:
        assert incompatible_differences({"type": "integer"}, '{"type": "number"}') == []

    @pytest.mark.parametrize(
        ("original", "update", "changes"),
        [
            (_OPEN, _OPEN_WITH_A, None),
            (_OPEN, _OPEN_WITH_A, CompatibilityLevel.LENIENT),
            ({"type": "string"}, {"anyOf": [{"type": "string"}, {"type": "null"}]}, None),
            ({"type": "string"}, {"type": "number"}, ["TYPE_CHANGED"]),
        ],
    )
    def test_agrees_with_is_compatible(self, original: Any, update: Any, changes: Any) -> None:
        verdict = is_compatible(original, update, changes)
        assert verdict is (not incompatible_differences(original, update, changes))


def _nested(depth: int, leaf: dict[str, Any]) -> dict[str, Any]:
    document = leaf
    for _ in range(depth):
        document = {"type": "object", "properties": {"a": document}}
    return document


class TestDeepSchemas:
    """Nesting depth is limited by loading, never by the comparison."""

    def test_deep_documents_compare(self) -> None:
        original = _nested(300, {"type": "string"})
        update = _nested(300, {"type": "string", "maxLength": 3})
        assert compare_documents(original, original) == []
        result = compare_documents(original, update)
        assert [d.type for d in result] == [DifferenceType.MAX_LENGTH_ADDED]
        assert result[0].json_path == "#/" + "properties/a/" * 300 + "maxLength"

    def test_too_deep_to_load(self) -> None:
        with pytest.raises(InvalidSchemaError, match="too deep"):
            compare_documents(_nested(5000, {"type": "string"}), {"type": "string"})
