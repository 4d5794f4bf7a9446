"""SchemaLoader: converts a JSON Schema document into a typed Schema tree.

Uses recursive dispatch on the keywords present in each (sub)schema object.
Local ``$ref`` pointers are resolved before a node is built, implicit keyword
combinations are made explicit, and draft-specific spellings are normalised
so that the diff engine only ever sees the node shapes of ``nodes``:

- ``type`` + ``enum``/``const``    -> allOf[type part, enum/const part]
- ``type: [a, b]``                 -> anyOf[one branch per listed type]
- combinator + sibling assertions  -> allOf[sibling part, combinator(s)]
- draft-4 ``exclusiveMaximum: true`` -> numeric exclusive limit
- ``dependentRequired``/``dependentSchemas`` and ``dependencies`` -> the same maps
- ``prefixItems`` and array-valued ``items``  -> positional item schemas

Every node loaded through a ``$ref`` is registered under its JSON Pointer
*before* its children are loaded, so recursive references produce a cyclic
node graph instead of unbounded recursion.

Loading recurses once per nesting level of the document.  A document nested
beyond Python's recursion limit, or containing a NaN or infinite number, is
rejected with ``InvalidSchemaError``; nothing past this boundary can fail on
the shape of the input.
"""

from __future__ import annotations

import json
import logging
import math
import re
from decimal import Decimal
from typing import Any
from urllib.parse import unquote

from json_schema_diff.exceptions import InvalidSchemaError
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
    canonical_value,
)
from json_schema_diff.schema.version import DEFAULT_VERSION, JsonSchemaVersion

__all__ = ["SchemaLoader", "detect_version", "load_schema", "parse_document"]

logger = logging.getLogger(__name__)

_COMBINATORS: tuple[tuple[str, ValidationCriterion], ...] = (
    ("allOf", ValidationCriterion.ALL),
    ("anyOf", ValidationCriterion.ANY),
    ("oneOf", ValidationCriterion.ONE),
)

_OBJECT_KEYWORDS = frozenset({
    "properties", "additionalProperties", "patternProperties", "required",
    "minProperties", "maxProperties", "dependencies", "dependentRequired",
    "dependentSchemas",
})
_ARRAY_KEYWORDS = frozenset({
    "items", "additionalItems", "minItems", "maxItems", "uniqueItems", "prefixItems",
})
_STRING_KEYWORDS = frozenset({"minLength", "maxLength", "pattern"})
_NUMBER_KEYWORDS = frozenset({
    "minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum", "multipleOf",
})

# Keywords that constrain instances (as opposed to annotations)
_ASSERTION_KEYWORDS = (
    _OBJECT_KEYWORDS
    | _ARRAY_KEYWORDS
    | _STRING_KEYWORDS
    | _NUMBER_KEYWORDS
    | {"type", "not", "enum", "const"}
)

_STANDARD_KEYWORDS = _ASSERTION_KEYWORDS | {
    "$id", "id", "$schema", "$ref", "$comment", "title", "description", "default",
    "allOf", "anyOf", "oneOf", "definitions", "$defs", "format", "examples",
    "if", "then", "else", "readOnly", "writeOnly", "contentMediaType",
    "contentEncoding",
}

_MISSING = object()


def _reject_constant(name: str) -> Any:
    msg = f"non-finite number {name} is not valid JSON"
    raise ValueError(msg)


def parse_document(text: str | bytes | bytearray) -> Any:
    """Parse JSON text, keeping non-integral numbers as ``Decimal``.

    ``NaN``, ``Infinity`` and ``-Infinity`` are rejected: they are not JSON.

    Raises:
        InvalidSchemaError: If ``text`` is not valid JSON or nests too deeply
            to parse.
    """
    try:
        return json.loads(text, parse_float=Decimal, parse_constant=_reject_constant)
    except (ValueError, TypeError) as exc:
        msg = f"Invalid JSON schema: {exc}"
        raise InvalidSchemaError(msg) from exc
    except RecursionError as exc:
        msg = "Invalid JSON schema: nesting is too deep to parse"
        raise InvalidSchemaError(msg) from exc


def detect_version(document: Any) -> JsonSchemaVersion:
    """Return the draft named by the document's ``$schema``, else DRAFT_7."""
    if isinstance(document, dict):
        url = document.get("$schema")
        if isinstance(url, str):
            detected = JsonSchemaVersion.from_schema_url(url)
            if detected is not None:
                logger.debug("Detected JSON Schema %s from $schema %r", detected, url)
                return detected
            logger.debug("Unrecognised $schema %r, assuming %s", url, DEFAULT_VERSION)
    return DEFAULT_VERSION


def load_schema(
    source: Any,
    version: JsonSchemaVersion | None = None,
) -> Schema:
    """Load JSON text or an already parsed JSON document into a Schema tree.

    Args:
        source:  JSON text (``str``/``bytes``) or a parsed document (``dict``
                 or ``bool``).
        version: Draft to interpret the document with.  Auto-detected from
                 ``$schema`` when None.

    Returns:
        The root Schema node.

    Raises:
        InvalidSchemaError: If the text is not JSON, the root is neither an
            object nor a boolean, a regular expression does not compile, a number is
            not finite, or the document nests too deeply to load.
    """
    if isinstance(source, (str, bytes, bytearray)):
        source = parse_document(source)
    return SchemaLoader(source, version).load()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_finite(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    return True


def _finite_literal(value: Any, keyword: str) -> Any:
    """Return ``value`` after checking that no number inside it is NaN or infinite.

    Parsed documents handed in directly may carry such floats; they have no
    JSON spelling and never compare equal to themselves.
    """
    pending = [value]
    while pending:
        item = pending.pop()
        if isinstance(item, dict):
            pending.extend(item.values())
        elif isinstance(item, (list, tuple)):
            pending.extend(item)
        elif not _is_finite(item):
            msg = f"Invalid JSON schema: {keyword} contains the non-finite number {item}"
            raise InvalidSchemaError(msg)
    return value


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        msg = f"Invalid regular expression {pattern!r}: {exc}"
        raise InvalidSchemaError(msg) from exc


def _is_index(token: str) -> bool:
    return token.isascii() and token.isdigit()


def _unescape_token(token: str) -> str:
    return unquote(token).replace("~1", "/").replace("~0", "~")


class SchemaLoader:
    """Loads one JSON Schema document into a typed Schema tree.

    A loader instance holds the per-document ``$ref`` registry, so it must not
    be shared between documents.  ``load()`` may be called repeatedly and
    returns the same root node.

    Example::

        loader = SchemaLoader({"type": "string", "maxLength": 10})
        schema = loader.load()
        # StringSchema(max_length=10, ...)
    """

    def __init__(self, document: Any, version: JsonSchemaVersion | None = None) -> None:
        if not isinstance(document, (dict, bool)):
            msg = f"A JSON schema must be an object or a boolean, got {type(document).__name__}"
            raise InvalidSchemaError(msg)
        self._root = document
        self.version: JsonSchemaVersion = (
            version if version is not None else detect_version(document)
        )
        self._by_pointer: dict[str, Schema] = {}
        self._resolving: set[str] = set()

    def load(self) -> Schema:
        """Build (or return the already built) root Schema node.

        Raises:
            InvalidSchemaError: If the document nests too deeply to load.
        """
        if "" in self._by_pointer:
            return self._by_pointer[""]
        try:
            root = self._load(self._root, pointer="")
        except RecursionError as exc:
            msg = "Invalid JSON schema: nesting is too deep to load"
            raise InvalidSchemaError(msg) from exc
        return self._by_pointer.setdefault("", root)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _load(self, node: Any, pointer: str | None = None) -> Schema:
        # CRITICAL: bool is handled before the dict check; boolean schemas
        # are full schemas, not annotations
        if isinstance(node, bool):
            schema: Schema = EmptySchema() if node else FalseSchema()
            self._register(pointer, schema)
            return schema
        if not isinstance(node, dict) or not node:
            schema = EmptySchema()
            self._register(pointer, schema)
            return schema

        ref = node.get("$ref")
        if isinstance(ref, str):
            resolved = self._load_ref(ref)
            if resolved is not None:
                return resolved

        if self._is_implicit_combined(node):
            return self._load_implicit_combined(node, pointer)
        if any(keyword in node for keyword, _ in _COMBINATORS):
            return self._load_combined(node, pointer)

        type_ = node.get("type")
        if isinstance(type_, list):
            return self._load_type_array(node, pointer)
        if "not" in node:
            return self._load_not(node, pointer)
        if "const" in node:
            value = _finite_literal(node["const"], "const")
            return self._register(pointer, ConstSchema(value=value, **self._common(node)))
        if "enum" in node:
            return self._load_enum(node, pointer)

        if type_ == "string":
            return self._load_string(node, pointer)
        if type_ in ("number", "integer"):
            return self._load_number(node, pointer)
        if type_ == "object" or (type_ is None and _OBJECT_KEYWORDS & node.keys()):
            return self._load_object(node, pointer)
        if type_ == "array" or (type_ is None and _ARRAY_KEYWORDS & node.keys()):
            return self._load_array(node, pointer)

        # boolean, null, unknown types and pure annotations accept any shape
        return self._register(pointer, EmptySchema(**self._common(node)))

    def _register(self, pointer: str | None, schema: Schema) -> Any:
        if pointer is not None:
            self._by_pointer[pointer] = schema
        return schema

    # ------------------------------------------------------------------
    # $ref resolution
    # ------------------------------------------------------------------

    def _load_ref(self, ref: str) -> Schema | None:
        """Load the target of a local ``$ref``.

        Returns None for references that cannot be resolved locally; the
        caller then loads the referring object itself, ignoring ``$ref``.
        """
        if not ref.startswith("#"):
            logger.warning("Remote $ref %r is not resolved; ignoring it", ref)
            return None
        pointer = ref[1:]
        if pointer in self._by_pointer:
            return self._by_pointer[pointer]
        if pointer in self._resolving:
            logger.debug("$ref %r only refers to itself; treating it as {}", ref)
            return EmptySchema()

        target = self._resolve_pointer(pointer)
        if target is _MISSING:
            logger.warning("Unresolvable $ref %r; ignoring it", ref)
            return None

        logger.debug("Resolving $ref %r", ref)
        self._resolving.add(pointer)
        try:
            return self._load(target, pointer=pointer)
        finally:
            self._resolving.discard(pointer)

    def _resolve_pointer(self, pointer: str) -> Any:
        if pointer == "":
            return self._root
        if not pointer.startswith("/"):
            return _MISSING
        current: Any = self._root
        for raw_token in pointer[1:].split("/"):
            token = _unescape_token(raw_token)
            if isinstance(current, dict) and token in current:
                current = current[token]
            elif isinstance(current, list) and _is_index(token) and int(token) < len(current):
                current = current[int(token)]
            else:
                return _MISSING
        return current

    # ------------------------------------------------------------------
    # Combined schemas
    # ------------------------------------------------------------------

    def _is_implicit_combined(self, node: dict[str, Any]) -> bool:
        if "enum" not in node and "const" not in node:
            return False
        return isinstance(node.get("type"), str) or bool(
            ({"properties", "items"} | _STRING_KEYWORDS | _NUMBER_KEYWORDS) & node.keys()
        )

    def _load_implicit_combined(
        self, node: dict[str, Any], pointer: str | None
    ) -> Schema:
        base = {k: v for k, v in node.items() if k not in ("enum", "const")}
        values_part = {k: node[k] for k in ("enum", "const") if k in node}

        combined = self._register(pointer, CombinedSchema(criterion=ValidationCriterion.ALL))
        combined.add_subschema(self._load(base))
        combined.add_subschema(self._load(values_part))
        return combined

    def _load_combined(self, node: dict[str, Any], pointer: str | None) -> Schema:
        present = [(kw, criterion) for kw, criterion in _COMBINATORS if kw in node]
        siblings = {k: v for k, v in node.items() if k not in dict(_COMBINATORS)}
        has_assertions = bool(_ASSERTION_KEYWORDS & siblings.keys())

        if len(present) == 1 and not has_assertions:
            keyword, criterion = present[0]
            combined = self._register(
                pointer, CombinedSchema(criterion=criterion, **self._common(node))
            )
            self._fill_combined(combined, node[keyword])
            return combined

        # Sibling assertions and every combinator must all hold
        outer = self._register(
            pointer, CombinedSchema(criterion=ValidationCriterion.ALL, **self._common(node))
        )
        if has_assertions:
            outer.add_subschema(self._load(siblings))
        for keyword, criterion in present:
            inner = CombinedSchema(criterion=criterion)
            self._fill_combined(inner, node[keyword])
            outer.add_subschema(inner)
        return outer

    def _fill_combined(self, combined: CombinedSchema, subschemas: Any) -> None:
        if isinstance(subschemas, list):
            for sub in subschemas:
                combined.add_subschema(self._load(sub))

    def _load_type_array(self, node: dict[str, Any], pointer: str | None) -> Schema:
        combined = self._register(
            pointer, CombinedSchema(criterion=ValidationCriterion.ANY, **self._common(node))
        )
        for type_ in node["type"]:
            combined.add_subschema(self._load({**node, "type": type_}))
        return combined

    # ------------------------------------------------------------------
    # Leaf keyword families
    # ------------------------------------------------------------------

    def _load_not(self, node: dict[str, Any], pointer: str | None) -> Schema:
        schema = self._register(pointer, NotSchema(**self._common(node)))
        schema.must_not_match = self._load(node["not"])
        return schema

    def _load_enum(self, node: dict[str, Any], pointer: str | None) -> Schema:
        schema = EnumSchema(**self._common(node))
        raw = _finite_literal(node["enum"], "enum")
        if isinstance(raw, list):
            seen: set[Any] = set()
            for value in raw:
                key = canonical_value(value)
                if key not in seen:
                    seen.add(key)
                    schema.values.append(value)
        return self._register(pointer, schema)

    def _load_string(self, node: dict[str, Any], pointer: str | None) -> Schema:
        pattern = node.get("pattern")
        return self._register(
            pointer,
            StringSchema(
                max_length=self._integer(node, "maxLength"),
                min_length=self._integer(node, "minLength"),
                pattern=_compile(pattern) if isinstance(pattern, str) else None,
                **self._common(node),
            ),
        )

    def _load_number(self, node: dict[str, Any], pointer: str | None) -> Schema:
        maximum = self._number(node, "maximum")
        minimum = self._number(node, "minimum")

        if self.version.uses_numeric_exclusive_bounds:
            exclusive_maximum = self._number(node, "exclusiveMaximum")
            exclusive_minimum = self._number(node, "exclusiveMinimum")
        else:
            # Draft-4: boolean flags turning maximum/minimum exclusive
            exclusive_maximum = maximum if node.get("exclusiveMaximum") is True else None
            exclusive_minimum = minimum if node.get("exclusiveMinimum") is True else None

        return self._register(
            pointer,
            NumberSchema(
                maximum=maximum,
                minimum=minimum,
                exclusive_maximum=exclusive_maximum,
                exclusive_minimum=exclusive_minimum,
                multiple_of=self._number(node, "multipleOf"),
                requires_integer=node.get("type") == "integer",
                **self._common(node),
            ),
        )

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def _load_object(self, node: dict[str, Any], pointer: str | None) -> Schema:
        required = node.get("required")
        additional = node.get("additionalProperties")
        schema = self._register(
            pointer,
            ObjectSchema(
                required=frozenset(
                    name for name in required if isinstance(name, str)
                ) if isinstance(required, list) else frozenset(),
                permits_additional_properties=additional is not False,
                max_properties=self._integer(node, "maxProperties"),
                min_properties=self._integer(node, "minProperties"),
                **self._common(node),
            ),
        )

        properties = node.get("properties")
        if isinstance(properties, dict):
            for name, sub in properties.items():
                schema.properties[name] = self._load(sub)

        if isinstance(additional, dict):
            schema.additional_properties = self._load(additional)

        pattern_properties = node.get("patternProperties")
        if isinstance(pattern_properties, dict):
            for pattern, sub in pattern_properties.items():
                schema.pattern_properties.append((_compile(pattern), self._load(sub)))

        if self.version.uses_dependent_keywords:
            self._load_dependent_required(node, schema)
            self._load_dependent_schemas(node, schema)
            # Legacy spelling still honoured when the new keywords are absent
            if "dependentRequired" not in node and "dependentSchemas" not in node:
                self._load_dependencies(node, schema)
        else:
            self._load_dependencies(node, schema)
        return schema

    def _load_dependencies(self, node: dict[str, Any], schema: ObjectSchema) -> None:
        dependencies = node.get("dependencies")
        if not isinstance(dependencies, dict):
            return
        for name, value in dependencies.items():
            if isinstance(value, list):
                schema.property_dependencies[name] = frozenset(
                    v for v in value if isinstance(v, str)
                )
            elif isinstance(value, dict):
                schema.schema_dependencies[name] = self._load(value)

    def _load_dependent_required(self, node: dict[str, Any], schema: ObjectSchema) -> None:
        dependencies = node.get("dependentRequired")
        if not isinstance(dependencies, dict):
            return
        for name, value in dependencies.items():
            if isinstance(value, list):
                schema.property_dependencies[name] = frozenset(
                    v for v in value if isinstance(v, str)
                )

    def _load_dependent_schemas(self, node: dict[str, Any], schema: ObjectSchema) -> None:
        dependencies = node.get("dependentSchemas")
        if not isinstance(dependencies, dict):
            return
        for name, value in dependencies.items():
            if isinstance(value, dict):
                schema.schema_dependencies[name] = self._load(value)

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def _load_array(self, node: dict[str, Any], pointer: str | None) -> Schema:
        unique_items = node.get("uniqueItems")
        schema = self._register(
            pointer,
            ArraySchema(
                max_items=self._integer(node, "maxItems"),
                min_items=self._integer(node, "minItems"),
                unique_items=unique_items if isinstance(unique_items, bool) else False,
                **self._common(node),
            ),
        )

        items = node.get("items")
        if self.version.uses_prefix_items:
            prefix_items = node.get("prefixItems")
            if isinstance(prefix_items, list):
                schema.item_schemas = [self._load(item) for item in prefix_items]
            if isinstance(items, dict):
                schema.all_items = self._load(items)
            elif isinstance(items, bool):
                schema.permits_additional_items = items
        elif isinstance(items, dict):
            schema.all_items = self._load(items)
        elif isinstance(items, list):
            schema.item_schemas = [self._load(item) for item in items]

        additional = node.get("additionalItems")
        if isinstance(additional, bool):
            schema.permits_additional_items = additional
        elif isinstance(additional, dict):
            schema.permits_additional_items = True
            schema.additional_items = self._load(additional)
        return schema

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _common(self, node: dict[str, Any]) -> dict[str, Any]:
        """Common attributes: id, title, description, default, unprocessed."""
        common: dict[str, Any] = {}
        id_ = node.get(self.version.id_keyword)
        if isinstance(id_, str):
            common["id"] = id_
        for keyword in ("title", "description"):
            if isinstance(node.get(keyword), str):
                common[keyword] = node[keyword]
        if "default" in node:
            common["default"] = _finite_literal(node["default"], "default")
        unprocessed = {k: v for k, v in node.items() if k not in _STANDARD_KEYWORDS}
        if unprocessed:
            common["unprocessed"] = unprocessed
        return common

    @staticmethod
    def _integer(node: dict[str, Any], keyword: str) -> int | None:
        value = node.get(keyword)
        return value if _is_integer(value) else None

    @staticmethod
    def _number(node: dict[str, Any], keyword: str) -> int | Decimal | None:
        value = node.get(keyword)
        if not _is_number(value):
            return None
        if not _is_finite(value):
            msg = f"Invalid JSON schema: {keyword} must be a finite number, got {value}"
            raise InvalidSchemaError(msg)
        if isinstance(value, float):
            return Decimal(repr(value))
        return value
