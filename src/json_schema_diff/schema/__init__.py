"""schema subpackage: typed schema nodes, draft versions and the loader.

Example::

    from json_schema_diff.schema import StringSchema, load_schema

    schema = load_schema('{"type": "string", "maxLength": 10}')
    assert isinstance(schema, StringSchema)
    assert schema.max_length == 10
"""

from __future__ import annotations

from json_schema_diff.schema.loader import SchemaLoader, load_schema
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
)
from json_schema_diff.schema.version import JsonSchemaVersion

__all__ = [
    "ArraySchema",
    "CombinedSchema",
    "ConstSchema",
    "EmptySchema",
    "EnumSchema",
    "FalseSchema",
    "JsonSchemaVersion",
    "NotSchema",
    "NumberSchema",
    "ObjectSchema",
    "Schema",
    "SchemaLoader",
    "StringSchema",
    "ValidationCriterion",
    "load_schema",
]
