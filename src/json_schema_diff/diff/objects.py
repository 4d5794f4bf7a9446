"""Object comparator.

Passes run in a fixed order so the difference list is reproducible:
required, properties, dependencies, additionalProperties, then the
``maxProperties`` / ``minProperties`` limits.  Property names are visited in
original order followed by names that only the update declares.
"""

from __future__ import annotations

from collections.abc import Collection

from json_schema_diff.diff.content_model import PROPERTY_KINDS, member_added, member_removed
from json_schema_diff.diff.context import DiffContext, Steps
from json_schema_diff.diff.primitives import compare_limit
from json_schema_diff.result import DifferenceType
from json_schema_diff.schema.nodes import ObjectSchema

__all__ = ["compare_objects"]

_T = DifferenceType

_MAX_PROPERTIES = (_T.MAX_PROPERTIES_ADDED, _T.MAX_PROPERTIES_REMOVED,
                   _T.MAX_PROPERTIES_INCREASED, _T.MAX_PROPERTIES_DECREASED)
_MIN_PROPERTIES = (_T.MIN_PROPERTIES_ADDED, _T.MIN_PROPERTIES_REMOVED,
                   _T.MIN_PROPERTIES_INCREASED, _T.MIN_PROPERTIES_DECREASED)


def _union(first: Collection[str], second: Collection[str]) -> list[str]:
    return [*first, *(name for name in second if name not in first)]


def compare_objects(ctx: DiffContext, original: ObjectSchema, update: ObjectSchema) -> Steps:
    _compare_required(ctx, original, update)
    yield from _compare_properties(ctx, original, update)
    yield from _compare_dependencies(ctx, original, update)
    yield from _compare_additional_properties(ctx, original, update)
    compare_limit(
        ctx, "maxProperties", original.max_properties, update.max_properties, _MAX_PROPERTIES
    )
    compare_limit(
        ctx, "minProperties", original.min_properties, update.min_properties, _MIN_PROPERTIES
    )


def _compare_required(ctx: DiffContext, original: ObjectSchema, update: ObjectSchema) -> None:
    """Required-ness changes of properties declared on both sides."""
    with ctx.enter_path("required"):
        for name in original.properties:
            if name not in update.properties:
                continue
            was_required = name in original.required
            is_required = name in update.required
            if was_required and not is_required:
                ctx.add_difference(_T.REQUIRED_ATTRIBUTE_REMOVED, name)
            elif is_required and not was_required:
                if update.properties[name].has_default:
                    ctx.add_difference(_T.REQUIRED_ATTRIBUTE_WITH_DEFAULT_ADDED, name)
                else:
                    ctx.add_difference(_T.REQUIRED_ATTRIBUTE_ADDED, name)


def _compare_properties(ctx: DiffContext, original: ObjectSchema, update: ObjectSchema) -> Steps:
    with ctx.enter_path("properties"):
        for name in _union(original.properties, update.properties):
            original_property = original.properties.get(name)
            update_property = update.properties.get(name)
            with ctx.enter_path(name):
                if update_property is None and original_property is not None:
                    yield from member_removed(
                        ctx,
                        original_property,
                        update.is_open_content_model(),
                        update.schema_for_undeclared(name),
                        PROPERTY_KINDS,
                    )
                elif original_property is None and update_property is not None:
                    not_open = yield from member_added(
                        ctx,
                        update_property,
                        original.is_open_content_model(),
                        original.schema_for_undeclared(name),
                        PROPERTY_KINDS,
                    )
                    if not_open:
                        _report_unopen_addition(ctx, update, name)
                else:
                    yield ctx, original_property, update_property


def _report_unopen_addition(ctx: DiffContext, update: ObjectSchema, name: str) -> None:
    if name not in update.required:
        ctx.add_difference(_T.OPTIONAL_PROPERTY_ADDED_TO_UNOPEN_CONTENT_MODEL)
    elif update.properties[name].has_default:
        ctx.add_difference(_T.REQUIRED_PROPERTY_WITH_DEFAULT_ADDED_TO_UNOPEN_CONTENT_MODEL)
    else:
        ctx.add_difference(_T.REQUIRED_PROPERTY_ADDED_TO_UNOPEN_CONTENT_MODEL)


def _compare_dependencies(
    ctx: DiffContext, original: ObjectSchema, update: ObjectSchema
) -> Steps:
    with ctx.enter_path("dependencies"):
        original_deps = original.property_dependencies
        update_deps = update.property_dependencies
        for name in _union(original_deps, update_deps):
            before = original_deps.get(name)
            after = update_deps.get(name)
            if after is None:
                ctx.add_difference(_T.DEPENDENCY_ARRAY_REMOVED, name)
            elif before is None:
                ctx.add_difference(_T.DEPENDENCY_ARRAY_ADDED, name)
            elif before != after:
                if after >= before:
                    ctx.add_difference(_T.DEPENDENCY_ARRAY_EXTENDED, name)
                elif after <= before:
                    ctx.add_difference(_T.DEPENDENCY_ARRAY_NARROWED, name)
                else:
                    ctx.add_difference(_T.DEPENDENCY_ARRAY_CHANGED, name)

        original_schemas = original.schema_dependencies
        update_schemas = update.schema_dependencies
        for name in _union(original_schemas, update_schemas):
            if name not in update_schemas:
                ctx.add_difference(_T.DEPENDENCY_SCHEMA_REMOVED, name)
            elif name not in original_schemas:
                ctx.add_difference(_T.DEPENDENCY_SCHEMA_ADDED, name)
            else:
                with ctx.enter_path(name):
                    yield ctx, original_schemas[name], update_schemas[name]


def _compare_additional_properties(
    ctx: DiffContext, original: ObjectSchema, update: ObjectSchema
) -> Steps:
    with ctx.enter_path("additionalProperties"):
        if original.permits_additional_properties != update.permits_additional_properties:
            if update.permits_additional_properties:
                ctx.add_difference(_T.ADDITIONAL_PROPERTIES_ADDED)
            else:
                ctx.add_difference(_T.ADDITIONAL_PROPERTIES_REMOVED)
            return

        before = original.additional_properties
        after = update.additional_properties
        if before is None and after is not None:
            ctx.add_difference(_T.ADDITIONAL_PROPERTIES_NARROWED)
        elif after is None and before is not None:
            ctx.add_difference(_T.ADDITIONAL_PROPERTIES_EXTENDED)
        else:
            yield ctx, before, after
