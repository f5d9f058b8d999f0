"""Reference projection: independent linear scales per axis."""

from typing import List, Sequence

import numpy as np

from overlay_core.types import Point2D
from projection.scales import AxisScale


class LinearProjection:
    """
    Axis-parallel 2-D projection over a set of per-dimension scales.

    Data x grows to the right and data y grows upwards; screen y grows
    downwards, so the vertical axis is flipped. *margin* is kept free on
    every side of the ``width x height`` render area.
    """

    def __init__(
        self,
        scales: Sequence[AxisScale],
        width: float,
        height: float,
        margin: float = 0.0,
    ):
        if not scales:
            raise ValueError("Projection needs at least one axis scale")
        if width <= 0 or height <= 0:
            raise ValueError(f"Render area must be positive, got {width}x{height}")
        if margin < 0 or 2 * margin >= min(width, height):
            raise ValueError(f"Margin {margin} does not fit a {width}x{height} area")
        self._scales: List[AxisScale] = list(scales)
        self._width = float(width)
        self._height = float(height)
        self._margin = float(margin)

    @classmethod
    def from_data(
        cls,
        matrix: np.ndarray,
        width: float,
        height: float,
        margin: float = 0.0,
        nice: bool = True,
    ) -> "LinearProjection":
        """Build one scale per column of an (N, D) matrix."""
        matrix = np.asarray(matrix, dtype=np.float64)
        if matrix.ndim != 2:
            raise ValueError(f"Expected an (N, D) matrix, got shape {matrix.shape}")
        scales = [AxisScale.from_values(matrix[:, d], nice=nice) for d in range(matrix.shape[1])]
        return cls(scales, width, height, margin)

    @property
    def dimensionality(self) -> int:
        return len(self._scales)

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def margin(self) -> float:
        return self._margin

    def scale_of(self, dim: int) -> AxisScale:
        self._check_dim(dim)
        return self._scales[dim]

    def project_2d(self, point: Sequence[float], dimx: int, dimy: int) -> Point2D:
        self._check_dim(dimx)
        self._check_dim(dimy)
        sx = self._scales[dimx].scaled(float(point[dimx]))
        sy = self._scales[dimy].scaled(float(point[dimy]))
        return self._to_screen(sx, sy)

    def project_points(self, matrix: np.ndarray, dimx: int, dimy: int) -> np.ndarray:
        """Vectorized :meth:`project_2d` over an (N, D) matrix; returns (N, 2)."""
        self._check_dim(dimx)
        self._check_dim(dimy)
        matrix = np.asarray(matrix, dtype=np.float64)
        sx = self._scales[dimx].scaled_array(matrix[:, dimx])
        sy = self._scales[dimy].scaled_array(matrix[:, dimy])
        inner_w = self._width - 2 * self._margin
        inner_h = self._height - 2 * self._margin
        xs = self._margin + sx * inner_w
        ys = self._margin + (1.0 - sy) * inner_h
        return np.column_stack([xs, ys])

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _to_screen(self, sx: float, sy: float) -> Point2D:
        inner_w = self._width - 2 * self._margin
        inner_h = self._height - 2 * self._margin
        return (self._margin + sx * inner_w, self._margin + (1.0 - sy) * inner_h)

    def _check_dim(self, dim: int) -> None:
        if not 0 <= dim < len(self._scales):
            raise ValueError(
                f"Dimension {dim} out of range for {len(self._scales)}-dimensional projection"
            )

    def __repr__(self) -> str:
        return f"<LinearProjection dims={self.dimensionality} {self._width}x{self._height}>"
