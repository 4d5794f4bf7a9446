"""json-schema-diff - compatibility checking for JSON Schema evolution."""

from __future__ import annotations

import logging

from json_schema_diff.api import (
    compare,
    compare_documents,
    incompatible_differences,
    is_compatible,
)
from json_schema_diff.config import (
    COMPATIBLE_CHANGES_LENIENT,
    COMPATIBLE_CHANGES_STRICT,
    CompatibilityLevel,
    resolve_compatible_changes,
)
from json_schema_diff.exceptions import InvalidSchemaError
from json_schema_diff.result import Difference, DifferenceType
from json_schema_diff.schema import (
    ArraySchema,
    CombinedSchema,
    ConstSchema,
    EmptySchema,
    EnumSchema,
    FalseSchema,
    JsonSchemaVersion,
    NotSchema,
    NumberSchema,
    ObjectSchema,
    Schema,
    SchemaLoader,
    StringSchema,
    ValidationCriterion,
    load_schema,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "COMPATIBLE_CHANGES_LENIENT",
    "COMPATIBLE_CHANGES_STRICT",
    "ArraySchema",
    "CombinedSchema",
    "CompatibilityLevel",
    "ConstSchema",
    "Difference",
    "DifferenceType",
    "EmptySchema",
    "EnumSchema",
    "FalseSchema",
    "InvalidSchemaError",
    "JsonSchemaVersion",
    "NotSchema",
    "NumberSchema",
    "ObjectSchema",
    "Schema",
    "SchemaLoader",
    "StringSchema",
    "ValidationCriterion",
    "compare",
    "compare_documents",
    "incompatible_differences",
    "is_compatible",
    "load_schema",
    "resolve_compatible_changes",
]
