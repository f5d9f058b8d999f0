"""
Domain types for overlay_core.

Selections, ranges and clusterings are supplied by the host and only read
by the visualizations, so the containers here are immutable.
"""

import math
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, NamedTuple, NewType, Optional, Sequence, Tuple

# ---------------------------------------------------------------------------
# Scalar type aliases
# ---------------------------------------------------------------------------

RecordID = NewType("RecordID", int)
"""Primary key of a record in the record store."""

StyleID = NewType("StyleID", str)
"""Name of a registered style class (e.g. ``"bubble3"``)."""

Point2D = Tuple[float, float]
"""Screen-space (x, y) coordinate."""


# ---------------------------------------------------------------------------
# Ranges and selections
# ---------------------------------------------------------------------------

class Range(NamedTuple):
    """Closed value range ``[min, max]`` on one dimension."""
    min: float
    max: float

    @classmethod
    def of(cls, low: float, high: float) -> "Range":
        """Validated constructor; ``low == high`` is a legal degenerate range."""
        low, high = float(low), float(high)
        if math.isnan(low) or math.isnan(high):
            raise ValueError(f"Range bounds must not be NaN, got ({low}, {high})")
        if low > high:
            raise ValueError(f"Range min {low} exceeds max {high}")
        return cls(low, high)

    @property
    def width(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class DBIDSelection:
    """A set of selected record ids."""
    ids: FrozenSet[RecordID] = frozenset()

    def __contains__(self, record_id: object) -> bool:
        return record_id in self.ids


@dataclass(frozen=True)
class RangeSelection(DBIDSelection):
    """
    Selection constrained by a value range per dimension.

    ``ranges`` has one slot per data dimension; ``None`` means the
    dimension is unconstrained and falls back to the full axis extent.
    The tuple length is fixed at construction.
    """
    ranges: Tuple[Optional[Range], ...] = ()

    @classmethod
    def from_pairs(
        cls,
        pairs: Sequence[Optional[Sequence[float]]],
        ids: Iterable[RecordID] = (),
    ) -> "RangeSelection":
        ranges = tuple(None if p is None else Range.of(p[0], p[1]) for p in pairs)
        return cls(ids=frozenset(ids), ranges=ranges)

    @property
    def dimensionality(self) -> int:
        return len(self.ranges)


# ---------------------------------------------------------------------------
# Clustering
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Cluster:
    """Named group of record ids."""
    name: str
    ids: Tuple[RecordID, ...] = ()
    noise: bool = False

    def __len__(self) -> int:
        return len(self.ids)


@dataclass(frozen=True)
class Clustering:
    """Read-only partition of record ids into clusters, in stable order."""
    clusters: Tuple[Cluster, ...] = field(default_factory=tuple)
    name: str = "clustering"

    def __iter__(self) -> Iterator[Cluster]:
        return iter(self.clusters)

    def __len__(self) -> int:
        return len(self.clusters)

    def numbered(self) -> Iterator[Tuple[int, Cluster]]:
        """Yield ``(index, cluster)`` with 1-based indices in iteration order."""
        return enumerate(self.clusters, start=1)
