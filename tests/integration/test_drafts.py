"""End-to-end comparisons of schemas written against different drafts.

Each draft spells some keywords differently; after loading, the comparison
must not care which spelling was used.
"""

from __future__ import annotations

from json_schema_diff import (
    DifferenceType,
    JsonSchemaVersion,
    SchemaLoader,
    compare,
    compare_documents,
    load_schema,
)

_T = DifferenceType


def _kinds_and_paths(result: list) -> list[tuple[DifferenceType, str]]:
    return [(d.type, d.json_path) for d in result]


class TestDraft4:
    def test_boolean_exclusive_maximum_moves_with_maximum(self) -> None:
        original = '{"type":"number","maximum":100,"exclusiveMaximum":true}'
        update = '{"type":"number","maximum":200,"exclusiveMaximum":true}'
        result = compare_documents(original, update, version=JsonSchemaVersion.DRAFT_4)
        assert _kinds_and_paths(result) == [
            (_T.MAXIMUM_INCREASED, "#/maximum"),
            (_T.EXCLUSIVE_MAXIMUM_INCREASED, "#/exclusiveMaximum"),
        ]

    def test_boolean_exclusive_minimum_moves_with_minimum(self) -> None:
        original = '{"type":"number","minimum":10,"exclusiveMinimum":true}'
        update = '{"type":"number","minimum":5,"exclusiveMinimum":true}'
        result = compare_documents(original, update, version=JsonSchemaVersion.DRAFT_4)
        assert [d.type for d in result] == [
            _T.MINIMUM_DECREASED,
            _T.EXCLUSIVE_MINIMUM_DECREASED,
        ]

    def test_exclusive_flag_added(self) -> None:
        original = '{"type":"number","maximum":100}'
        update = '{"type":"number","maximum":100,"exclusiveMaximum":true}'
        result = compare_documents(original, update, version=JsonSchemaVersion.DRAFT_4)
        assert _kinds_and_paths(result) == [(_T.EXCLUSIVE_MAXIMUM_ADDED, "#/exclusiveMaximum")]

    def test_id_keyword(self) -> None:
        original = '{"id":"urn:example:orig","type":"string"}'
        update = '{"id":"urn:example:updated","type":"string"}'
        result = compare_documents(original, update, version=JsonSchemaVersion.DRAFT_4)
        assert _kinds_and_paths(result) == [(_T.ID_CHANGED, "#/")]

    def test_dollar_id_is_ignored(self) -> None:
        original = '{"$id":"urn:example:orig","type":"string"}'
        update = '{"$id":"urn:example:updated","type":"string"}'
        assert compare_documents(original, update, version=JsonSchemaVersion.DRAFT_4) == []

    def test_auto_detected(self) -> None:
        header = '"$schema":"http://json-schema.org/draft-04/schema#"'
        original = load_schema(
            f'{{{header},"type":"number","maximum":100,"exclusiveMaximum":true}}'
        )
        update = load_schema(
            f'{{{header},"type":"number","maximum":200,"exclusiveMaximum":true}}'
        )
        kinds = [d.type for d in compare(original, update)]
        assert _T.EXCLUSIVE_MAXIMUM_INCREASED in kinds


class TestDraft7:
    def test_dollar_id(self) -> None:
        original = '{"$id":"urn:example:orig","type":"string"}'
        update = '{"$id":"urn:example:updated","type":"string"}'
        result = compare_documents(original, update, version=JsonSchemaVersion.DRAFT_7)
        assert [d.type for d in result] == [_T.ID_CHANGED]

    def test_is_the_fallback(self) -> None:
        assert SchemaLoader({"type": "string"}).version is JsonSchemaVersion.DRAFT_7

    def test_unknown_schema_url_falls_back(self) -> None:
        loader = SchemaLoader({"$schema": "http://example.com/custom-schema"})
        assert loader.version is JsonSchemaVersion.DRAFT_7


class TestDraft2019:
    _BASE = '"type":"object","properties":{"a":{"type":"string"}}'

    def test_dependent_required_added(self) -> None:
        update = f'{{{self._BASE},"dependentRequired":{{"a":["b"]}}}}'
        result = compare_documents(
            f"{{{self._BASE}}}", update, version=JsonSchemaVersion.DRAFT_2019_09
        )
        assert _kinds_and_paths(result) == [(_T.DEPENDENCY_ARRAY_ADDED, "#/dependencies/a")]

    def test_dependent_schemas_added(self) -> None:
        update = (
            f'{{{self._BASE},'
            '"dependentSchemas":{"a":{"properties":{"b":{"type":"integer"}}}}}'
        )
        result = compare_documents(
            f"{{{self._BASE}}}", update, version=JsonSchemaVersion.DRAFT_2019_09
        )
        assert _kinds_and_paths(result) == [(_T.DEPENDENCY_SCHEMA_ADDED, "#/dependencies/a")]

    def test_dependent_required_narrowed(self) -> None:
        original = f'{{{self._BASE},"dependentRequired":{{"a":["b","c"]}}}}'
        update = f'{{{self._BASE},"dependentRequired":{{"a":["b"]}}}}'
        result = compare_documents(original, update, version=JsonSchemaVersion.DRAFT_2019_09)
        assert [d.type for d in result] == [_T.DEPENDENCY_ARRAY_NARROWED]


class TestDraft2020:
    def test_identical_prefix_items(self) -> None:
        schema = '{"type":"array","prefixItems":[{"type":"string"},{"type":"integer"}]}'
        assert compare_documents(schema, schema, version=JsonSchemaVersion.DRAFT_2020_12) == []

    def test_prefix_item_type_changed(self) -> None:
        original = '{"type":"array","prefixItems":[{"type":"string"},{"type":"integer"}]}'
        update = '{"type":"array","prefixItems":[{"type":"string"},{"type":"string"}]}'
        result = compare_documents(original, update, version=JsonSchemaVersion.DRAFT_2020_12)
        assert _kinds_and_paths(result) == [(_T.TYPE_CHANGED, "#/items/1")]

    def test_prefix_item_added(self) -> None:
        original = '{"type":"array","prefixItems":[{"type":"string"}]}'
        update = '{"type":"array","prefixItems":[{"type":"string"},{"type":"integer"}]}'
        result = compare_documents(original, update, version=JsonSchemaVersion.DRAFT_2020_12)
        assert _kinds_and_paths(result) == [
            (_T.ITEM_ADDED_TO_OPEN_CONTENT_MODEL, "#/items/1")
        ]

    def test_items_false_closes_the_tuple(self) -> None:
        original = '{"type":"array","prefixItems":[{"type":"string"}]}'
        update = '{"type":"array","prefixItems":[{"type":"string"}],"items":false}'
        result = compare_documents(original, update, version=JsonSchemaVersion.DRAFT_2020_12)
        assert _kinds_and_paths(result) == [(_T.ADDITIONAL_ITEMS_REMOVED, "#/additionalItems")]

    def test_auto_detected(self) -> None:
        loaded = load_schema(
            '{"$schema":"https://json-schema.org/draft/2020-12/schema",'
            '"type":"array","prefixItems":[{"type":"string"}]}'
        )
        assert compare(loaded, loaded) == []


class TestCrossDraft:
    def test_dependencies_and_dependent_required_are_equivalent(self) -> None:
        original = load_schema(
            {
                "type": "object",
                "properties": {"a": {"type": "string"}},
                "dependencies": {"a": ["b"]},
            },
            JsonSchemaVersion.DRAFT_7,
        )
        update = load_schema(
            {
                "type": "object",
                "properties": {"a": {"type": "string"}},
                "dependentRequired": {"a": ["b"]},
            },
            JsonSchemaVersion.DRAFT_2019_09,
        )
        assert compare(original, update) == []

    def test_tuple_items_and_prefix_items_are_equivalent(self) -> None:
        original = load_schema(
            {"type": "array", "items": [{"type": "string"}], "additionalItems": False},
            JsonSchemaVersion.DRAFT_7,
        )
        update = load_schema(
            {"type": "array", "prefixItems": [{"type": "string"}], "items": False},
            JsonSchemaVersion.DRAFT_2020_12,
        )
        assert compare(original, update) == []
