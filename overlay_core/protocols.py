"""
Protocol definitions for overlay_core.

Visualizations program against these protocols. The host (drawing
surface, record store, projection, selection state) is swappable: any
object satisfying the structural contract is accepted.

Uses typing.Protocol (PEP 544) for structural subtyping: classes do NOT
need to inherit from these protocols, they just need matching signatures.
"""

from typing import Callable, List, Optional, Protocol, Sequence, runtime_checkable

import numpy as np

from overlay_core.types import Clustering, DBIDSelection, Point2D, RecordID


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@runtime_checkable
class RecordStore(Protocol):
    """Resident collection of n-dimensional records."""

    def dimensionality(self) -> int:
        """Number of dimensions of every record."""
        ...

    def ids(self) -> List[RecordID]:
        """All record ids in storage order."""
        ...

    def get(self, record_id: RecordID) -> np.ndarray:
        """
        Args:
            record_id: Id of a stored record.

        Returns:
            Float vector of shape (dimensionality,).
        """
        ...

    def label(self, record_id: RecordID) -> Optional[str]:
        """Class label of the record, or None when unlabeled."""
        ...


@runtime_checkable
class Annotation(Protocol):
    """Per-record scalar, e.g. an outlier score."""

    def value_for(self, record_id: RecordID) -> Optional[float]:
        ...

    def values(self) -> np.ndarray:
        """All known values, used to derive normalization bounds."""
        ...


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

@runtime_checkable
class AxisExtent(Protocol):
    """Data-unit extent of one axis."""

    @property
    def min(self) -> float:
        ...

    @property
    def max(self) -> float:
        ...


@runtime_checkable
class Projection(Protocol):
    """Maps data space onto the 2-D render area for a pair of dimensions."""

    @property
    def dimensionality(self) -> int:
        ...

    @property
    def width(self) -> float:
        ...

    @property
    def height(self) -> float:
        ...

    def scale_of(self, dim: int) -> AxisExtent:
        """Axis scale of 0-based dimension *dim*."""
        ...

    def project_2d(self, point: Sequence[float], dimx: int, dimy: int) -> Point2D:
        """
        Args:
            point: Full n-dimensional data point.
            dimx: Dimension drawn on the horizontal axis.
            dimy: Dimension drawn on the vertical axis.

        Returns:
            Screen-space ``(x, y)`` with y growing downwards.
        """
        ...


# ---------------------------------------------------------------------------
# Host context
# ---------------------------------------------------------------------------

@runtime_checkable
class HostContext(Protocol):
    """State the host exposes to visualizations."""

    def get_selection(self) -> Optional[DBIDSelection]:
        ...

    def get_database(self) -> RecordStore:
        ...

    def get_clustering_result(self) -> Optional[Clustering]:
        ...

    def get_annotation(self) -> Optional[Annotation]:
        ...

    def add_change_listener(self, listener: Callable) -> "object":
        """Subscribe *listener*; returns a subscription token with ``release()``."""
        ...
