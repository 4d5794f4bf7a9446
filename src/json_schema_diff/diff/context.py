"""DiffContext: path tracking, difference accumulation and cycle suppression.

One context is created per comparison.  Comparators descend with
``enter_path`` / ``enter_schema`` and record changes with
``add_difference``.  A *subcontext* is used to probe an alternative pairing
(does the original match this particular subschema?) without touching the
caller's differences; the caller adopts the probe's differences only when
it decides to.
"""

from __future__ import annotations

from collections.abc import Generator, Iterable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from json_schema_diff.result import Difference, DifferenceType
from json_schema_diff.schema.nodes import Schema

__all__ = ["Comparison", "DiffContext", "PendingPair", "Steps"]

_R = TypeVar("_R")

# A schema pair a comparator needs compared before it can continue: the
# context to record into, then the original and updated schema.
PendingPair = tuple["DiffContext", Schema | None, Schema | None]

# Comparators are generators that yield pending pairs and are resumed once
# the pair has been fully compared.  The return value is the comparator's own.
Comparison = Generator[PendingPair, None, _R]
Steps = Comparison[None]


class DiffContext:
    """Mutable state of one comparison.

    Attributes:
        compatible_changes: Kinds that do not break compatibility.
        differences: Differences recorded so far, in production order.
    """

    def __init__(
        self,
        compatible_changes: frozenset[DifferenceType],
        _path: list[str] | None = None,
        _active: set[tuple[int, int]] | None = None,
    ) -> None:
        self.compatible_changes = compatible_changes
        self.differences: list[Difference] = []
        self._path: list[str] = list(_path) if _path is not None else []
        # (id(original), id(update)) of the schema pairs being compared
        self._active: set[tuple[int, int]] = set(_active) if _active is not None else set()

    @property
    def json_path(self) -> str:
        """Current location, ``#/`` followed by the ``/``-joined segments."""
        return "#/" + "/".join(self._path)

    @contextmanager
    def enter_path(self, segment: str | int) -> Iterator[None]:
        """Append ``segment`` to the path for the duration of the block."""
        self._path.append(str(segment))
        try:
            yield
        finally:
            self._path.pop()

    @contextmanager
    def enter_schema(self, original: Schema, update: Schema) -> Iterator[bool]:
        """Mark the pair as being compared for the duration of the block.

        Yields:
            True when the pair was entered; False when it is already being
            compared further up the stack, in which case the caller must skip
            its field comparison.
        """
        key = (id(original), id(update))
        if key in self._active:
            yield False
            return
        self._active.add(key)
        try:
            yield True
        finally:
            self._active.discard(key)

    def add_difference(self, type_: DifferenceType, segment: str | None = None) -> None:
        """Record a difference at the current path, optionally one segment deeper."""
        path = self.json_path if segment is None else _join(self.json_path, segment)
        self.differences.append(Difference(json_path=path, type=type_))

    def add_differences(self, differences: Iterable[Difference]) -> None:
        self.differences.extend(differences)

    def get_subcontext(self) -> DiffContext:
        """Return a probe context with no differences and the same compatible set.

        The subcontext starts at the current path and shares knowledge of the
        pairs being compared, so adopted differences carry absolute paths and
        a probe cannot recurse into a pair its caller is already comparing.
        """
        return DiffContext(self.compatible_changes, _path=self._path, _active=self._active)

    def is_compatible(self) -> bool:
        """True iff every recorded difference kind is in the compatible set."""
        return all(d.type in self.compatible_changes for d in self.differences)


def _join(path: str, segment: str) -> str:
    return path + segment if path.endswith("/") else f"{path}/{segment}"
