"""Maximum bipartite matching via scipy's assignment solver.

Used by the combined-schema comparator to pair original subschemas with
update subschemas.  Only pairs connected by an ``Edge`` may be matched.

The problem is solved as a rectangular assignment over a cost matrix whose
forbidden cells carry a guard cost larger than the sum of all finite costs.
Every assignment that uses one forbidden cell fewer is therefore cheaper, so
the solver returns a matching of maximum cardinality, and among those the
one with the smallest total edge weight.  Remaining ties are broken by the
solver deterministically over insertion order.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

__all__ = ["Edge", "maximum_matching"]

S = TypeVar("S", bound=Hashable)
T = TypeVar("T", bound=Hashable)


@dataclass(frozen=True, slots=True)
class Edge(Generic[S, T]):
    """A permitted pairing of ``source`` with ``target``.

    Attributes:
        source: Left-hand vertex.
        target: Right-hand vertex.
        value:  Payload carried by the edge (e.g. the differences adopted
            when this pairing is chosen).
    """

    source: S
    target: T
    value: Any = None


def maximum_matching(
    edges: Sequence[Edge[S, T]],
    sources: Sequence[S],
    targets: Sequence[T],
    weight: Callable[[Edge[S, T]], float] | None = None,
) -> list[Edge[S, T]]:
    """Return a maximum-cardinality set of vertex-disjoint edges.

    Args:
        edges:   Candidate edges.  When several edges join the same pair, the
                 first one wins.
        sources: Left-hand vertices; determines row order.
        targets: Right-hand vertices; determines column order.
        weight:  Non-negative cost of choosing an edge.  Among maximum
                 matchings the one with the smallest total weight is returned.
                 Defaults to a uniform weight of zero.

    Returns:
        The chosen edges ordered by source position.
    """
    if not edges or not sources or not targets:
        return []

    row_of = {source: i for i, source in enumerate(sources)}
    col_of = {target: j for j, target in enumerate(targets)}

    cost = np.full((len(sources), len(targets)), np.inf)
    chosen: dict[tuple[int, int], Edge[S, T]] = {}
    for edge in edges:
        cell = (row_of[edge.source], col_of[edge.target])
        if cell in chosen:
            continue
        chosen[cell] = edge
        cost[cell] = float(weight(edge)) if weight is not None else 0.0

    inf_mask = np.isinf(cost)
    guard_value = float(cost[~inf_mask].sum()) + 1.0
    row_ind, col_ind = linear_sum_assignment(np.where(inf_mask, guard_value, cost))

    # Filter out pairs that landed on forbidden cells
    return [
        chosen[(int(row), int(col))]
        for row, col in zip(row_ind, col_ind, strict=True)
        if not inf_mask[row, col]
    ]
