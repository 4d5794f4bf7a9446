"""diff subpackage: the comparison engine.

Import from this module (not from sub-modules directly) to stay on the
stable interface.

Example::

    from json_schema_diff.config import COMPATIBLE_CHANGES_STRICT
    from json_schema_diff.diff import DiffContext, compare_schemas
    from json_schema_diff.schema import load_schema

    ctx = DiffContext(COMPATIBLE_CHANGES_STRICT)
    compare_schemas(ctx, load_schema('{"type": "string"}'), load_schema('{"type": "integer"}'))
    # ctx.differences == [Difference(json_path="#/", type=DifferenceType.TYPE_CHANGED)]
"""

from __future__ import annotations

from json_schema_diff.diff.context import DiffContext
from json_schema_diff.diff.engine import compare_schemas
from json_schema_diff.diff.matcher import Edge, maximum_matching

__all__ = ["DiffContext", "Edge", "compare_schemas", "maximum_matching"]
