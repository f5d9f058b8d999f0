"""
Thumbnails: a wrapped visualization rendered at low resolution.

The wrapped instance draws into a private off-screen plot through a
detached context, so it never hears the host's notifications itself. On
every relevant change the thumbnail redraws it and copies its layer back,
snapped to the thumbnail pixel grid and scaled up to the full area.
"""

import copy
import itertools
import re
from enum import IntFlag
from typing import Callable, Optional

from lxml import etree

from overlay_core.config import config
from overlay_core.errors import OverlayConfigError
from overlay_core.logging import get_logger
from overlay_core.protocols import AxisExtent, HostContext, Projection
from overlay_core.types import Point2D
from visualization.base import LEVEL_DATA, IncrementalVisualization
from visualization.context import DetachedContext
from visualization.events import ChangeKind
from visualization.plot import SVGPlot, fmt_number, svg_element

logger = get_logger("visualization.thumbnail")

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?")
# Coordinate attributes and the axis of each successive number in them.
_SNAPPED_ATTRS = {"points": "xy", "d": "xy", "cx": "x", "cy": "y"}

VisualizationFactory = Callable[..., IncrementalVisualization]


class ThumbnailMask(IntFlag):
    """Which notifications, besides generic ones, refresh a thumbnail."""
    ON_DATA = 1
    ON_SELECTION = 2


class _ScaledProjection:
    """Wraps a projection and shrinks its screen output by a fixed factor."""

    def __init__(self, inner: Projection, width: float, height: float):
        self._inner = inner
        self._sx = width / inner.width
        self._sy = height / inner.height
        self._width = width
        self._height = height

    @property
    def dimensionality(self) -> int:
        return self._inner.dimensionality

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def scale_of(self, dim: int) -> AxisExtent:
        return self._inner.scale_of(dim)

    def project_2d(self, point, dimx: int, dimy: int) -> Point2D:
        x, y = self._inner.project_2d(point, dimx, dimy)
        return x * self._sx, y * self._sy


def _snap(element: etree._Element, sx: float, sy: float) -> etree._Element:
    """
    Round the thumbnail-space coordinates of *element* and its children to
    whole pixels, then scale them back up to the full area. Radii and
    stroke widths are left alone.
    """
    for el in element.iter():
        for attr, axes in _SNAPPED_ATTRS.items():
            value = el.get(attr)
            if value is None:
                continue
            factors = itertools.cycle([sx if axis == "x" else sy for axis in axes])
            el.set(attr, _NUMBER_RE.sub(
                lambda m: fmt_number(float(round(float(m.group()))) * next(factors)), value
            ))
    return element


class ThumbnailVisualization(IncrementalVisualization):
    """
    Low-resolution rendering of another visualization.

    Args:
        factory: Builds the wrapped visualization; called as
            ``factory(context, plot, projection, dimx, dimy)``.
        resolution: Thumbnail edge length in pixels (default:
            ``thumbnail.resolution``).
        mask: Extra notification kinds that refresh the thumbnail.
    """

    MARKER = "thumbnail"
    LEVEL = LEVEL_DATA

    def __init__(
        self,
        factory: VisualizationFactory,
        context: HostContext,
        plot: SVGPlot,
        projection: Projection,
        dimx: int = 0,
        dimy: int = 1,
        resolution: Optional[int] = None,
        mask: ThumbnailMask = ThumbnailMask.ON_DATA | ThumbnailMask.ON_SELECTION,
    ):
        if resolution is None:
            resolution = config.get("thumbnail.resolution")
        if isinstance(resolution, bool) or not isinstance(resolution, int) or resolution < 1:
            raise OverlayConfigError(
                "thumbnail.resolution", reason=f"must be a positive int, got {resolution!r}"
            )

        kinds = {ChangeKind.GENERIC}
        if mask & ThumbnailMask.ON_DATA:
            kinds.add(ChangeKind.DATA)
        if mask & ThumbnailMask.ON_SELECTION:
            kinds.add(ChangeKind.SELECTION)
        self.REDRAW_KINDS = frozenset(kinds)

        self.factory = factory
        self.mask = mask
        self.resolution = resolution
        self._inner_context = DetachedContext(context)
        self._offscreen = SVGPlot(resolution, resolution, styles=plot.styles)
        self._inner_projection = _ScaledProjection(projection, resolution, resolution)
        self._sx = projection.width / resolution
        self._sy = projection.height / resolution
        self.inner: Optional[IncrementalVisualization] = None
        super().__init__(context, plot, projection, dimx, dimy)

    def setup_styles(self) -> None:
        # The wrapped visualization registers its styles in the shared registry.
        self.inner = self.factory(
            self._inner_context, self._offscreen, self._inner_projection, self.dimx, self.dimy
        )

    def redraw(self) -> None:
        # The initial redraw reuses what the wrapped instance drew when it was built.
        if self.redraw_count > 0:
            self.inner.incremental_redraw()
        group = svg_element("g", css_class=self.inner.MARKER)
        group.set("data-resolution", str(self.resolution))
        for child in self.inner.layer:
            group.append(_snap(copy.deepcopy(child), self._sx, self._sy))
        self.layer.append(group)
        logger.debug(
            f"Thumbnail of {self.inner.MARKER}: {len(group)} elements at {self.resolution}px",
            extra={"marker": self.MARKER, "layer_size": len(group)},
        )

    def dispose(self) -> None:
        super().dispose()
        if self.inner is not None and not self.inner.disposed:
            self.inner.dispose()
