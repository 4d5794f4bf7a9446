"""Combined-schema comparator (``allOf`` / ``anyOf`` / ``oneOf``).

Criterion change:
- same criterion                                   -> nothing
- update is ``anyOf``, or both sides singletons,
  or singleton -> ``oneOf``, or ``allOf`` -> singleton -> COMBINED_TYPE_EXTENDED
- anything else                                    -> COMBINED_TYPE_CHANGED
                                                      (comparison stops)

Subschemas are then paired: every original subschema is probed against
every update subschema in a subcontext, compatible probes become edges of a
bipartite graph, and a maximum matching decides which probes' differences
are adopted.  Fewer matches than the smaller side has subschemas means some
subschema changed incompatibly.
"""

from __future__ import annotations

import logging

from json_schema_diff.diff.context import DiffContext, Steps
from json_schema_diff.diff.matcher import Edge, maximum_matching
from json_schema_diff.result import Difference, DifferenceType
from json_schema_diff.schema.nodes import CombinedSchema, Schema, ValidationCriterion

__all__ = ["compare_combined"]

logger = logging.getLogger(__name__)

_T = DifferenceType


def _criterion_change(original: CombinedSchema, update: CombinedSchema) -> DifferenceType | None:
    if original.criterion is update.criterion:
        return None
    original_single = len(original.subschemas) == 1
    update_single = len(update.subschemas) == 1
    if (
        update.criterion is ValidationCriterion.ANY
        or (original_single and update_single)
        or (original_single and update.criterion is ValidationCriterion.ONE)
        or (update_single and original.criterion is ValidationCriterion.ALL)
    ):
        return _T.COMBINED_TYPE_EXTENDED
    return _T.COMBINED_TYPE_CHANGED


def _distinct(subschemas: list[Schema]) -> list[Schema]:
    unique: list[Schema] = []
    for schema in subschemas:
        if not any(schema == seen for seen in unique):
            unique.append(schema)
    return unique


def compare_combined(
    ctx: DiffContext, original: CombinedSchema, update: CombinedSchema
) -> Steps:
    change = _criterion_change(original, update)
    if change is not None:
        ctx.add_difference(change)
        if change is _T.COMBINED_TYPE_CHANGED:
            return

    original_subs = _distinct(original.subschemas)
    update_subs = _distinct(update.subschemas)

    if len(original_subs) < len(update_subs):
        if update.criterion is ValidationCriterion.ALL:
            ctx.add_difference(_T.PRODUCT_TYPE_EXTENDED)
        else:
            ctx.add_difference(_T.SUM_TYPE_EXTENDED)
    elif len(original_subs) > len(update_subs):
        if original.criterion.is_disjunctive:
            ctx.add_difference(_T.SUM_TYPE_NARROWED)
        else:
            ctx.add_difference(_T.PRODUCT_TYPE_NARROWED)

    edges: list[Edge[int, int]] = []
    for i, original_sub in enumerate(original_subs):
        with ctx.enter_path(original.criterion.keyword), ctx.enter_path(i):
            for j, update_sub in enumerate(update_subs):
                probe = ctx.get_subcontext()
                yield probe, original_sub, update_sub
                if probe.is_compatible():
                    edges.append(Edge(i, j, probe.differences))

    matching = maximum_matching(
        edges,
        range(len(original_subs)),
        range(len(update_subs)),
        weight=_difference_count,
    )
    logger.debug(
        "Matched %d of %d/%d subschemas at %s",
        len(matching), len(original_subs), len(update_subs), ctx.json_path,
    )
    for edge in matching:
        ctx.add_differences(edge.value)
    if len(matching) < min(len(original_subs), len(update_subs)):
        ctx.add_difference(_T.COMBINED_TYPE_SUBSCHEMAS_CHANGED)


def _difference_count(edge: Edge[int, int]) -> float:
    differences: list[Difference] = edge.value
    return float(len(differences))
