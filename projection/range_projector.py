"""
Range projection: n-dimensional axis-aligned ranges -> 2-D polygons.

The overlay is a 2-D slice, not an n-D hull: every dimension is resolved
(selected range, or the full axis extent when unconstrained), but only the
two displayed dimensions shape the polygon.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from overlay_core.logging import get_logger
from overlay_core.protocols import Projection
from overlay_core.types import Point2D, Range

logger = get_logger("projection")


@dataclass(frozen=True)
class Polygon:
    """Ordered screen-space vertices of a closed polygon."""
    points: Tuple[Point2D, ...]
    filled: bool = True

    def svg_points(self, precision: int = 4) -> str:
        """Vertices formatted for an SVG ``points`` attribute."""
        return " ".join(f"{round(x, precision):g},{round(y, precision):g}" for x, y in self.points)

    @property
    def x_extent(self) -> Tuple[float, float]:
        xs = [p[0] for p in self.points]
        return min(xs), max(xs)

    @property
    def y_extent(self) -> Tuple[float, float]:
        ys = [p[1] for p in self.points]
        return min(ys), max(ys)


@dataclass(frozen=True)
class HyperCube:
    """
    A resolved selection range drawn on one pair of dimensions.

    ``filled`` and ``frame`` share the same vertices; the frame is the
    stroke-only outline.
    """
    mins: Tuple[float, ...]
    maxs: Tuple[float, ...]
    dimx: int
    dimy: int
    filled: Polygon
    frame: Polygon

    @property
    def x_range(self) -> Range:
        """Data-unit extent on the horizontal axis."""
        return Range(self.mins[self.dimx], self.maxs[self.dimx])

    @property
    def y_range(self) -> Range:
        """Data-unit extent on the vertical axis."""
        return Range(self.mins[self.dimy], self.maxs[self.dimy])


class RangeProjector:
    """Resolves per-dimension ranges and projects them onto a 2-D polygon."""

    def resolve(
        self,
        ranges: Sequence[Optional[Range]],
        projection: Projection,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Effective ``(mins, maxs)`` per dimension.

        A present range is used as-is; a missing one falls back to the
        projection's axis scale.

        Raises:
            ValueError: If the number of ranges differs from the projection
                dimensionality.
        """
        dim = projection.dimensionality
        if len(ranges) != dim:
            raise ValueError(f"Got {len(ranges)} ranges for {dim} dimensions")

        mins = np.empty(dim, dtype=np.float64)
        maxs = np.empty(dim, dtype=np.float64)
        for d in range(dim):
            rng = ranges[d]
            if rng is not None:
                mins[d], maxs[d] = rng[0], rng[1]
            else:
                scale = projection.scale_of(d)
                mins[d], maxs[d] = scale.min, scale.max
        return mins, maxs

    def project(
        self,
        ranges: Sequence[Optional[Range]],
        projection: Projection,
        dimx: int,
        dimy: int,
    ) -> HyperCube:
        """
        Project *ranges* onto the (dimx, dimy) plane.

        A degenerate range (min == max) yields a zero-width polygon. The
        caller must not pass an absent selection.
        """
        mins, maxs = self.resolve(ranges, projection)
        corners = [
            (mins[dimx], mins[dimy]),
            (maxs[dimx], mins[dimy]),
            (maxs[dimx], maxs[dimy]),
            (mins[dimx], maxs[dimy]),
        ]
        points = []
        for cx, cy in corners:
            point = mins.copy()
            point[dimx] = cx
            point[dimy] = cy
            points.append(tuple(float(v) for v in projection.project_2d(point, dimx, dimy)))

        vertices = tuple(points)
        logger.debug(
            f"Projected range on dims ({dimx}, {dimy}): "
            f"x=[{mins[dimx]:g}, {maxs[dimx]:g}] y=[{mins[dimy]:g}, {maxs[dimy]:g}]"
        )
        return HyperCube(
            mins=tuple(float(v) for v in mins),
            maxs=tuple(float(v) for v in maxs),
            dimx=dimx,
            dimy=dimy,
            filled=Polygon(vertices, filled=True),
            frame=Polygon(vertices, filled=False),
        )
