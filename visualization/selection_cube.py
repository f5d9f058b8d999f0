"""
Selection cube: the selected value range per dimension, drawn as a
translucent filled rectangle with a thin frame on the displayed axes.
"""

from typing import Optional

from overlay_core.config import config
from overlay_core.errors import OverlayConfigError
from overlay_core.logging import get_logger
from overlay_core.protocols import HostContext, Projection
from overlay_core.types import RangeSelection
from projection.range_projector import HyperCube, RangeProjector
from visualization.base import LEVEL_DATA, IncrementalVisualization
from visualization.plot import SVGPlot
from visualization.shapes import filled_polygon, frame_path

logger = get_logger("visualization.selection_cube")


def _opacity(key: str) -> float:
    value = config.get_float(key)
    if not 0.0 <= value <= 1.0:
        raise OverlayConfigError(key, reason=f"opacity must be in [0, 1], got {value}")
    return value


class SelectionCubeVisualization(IncrementalVisualization):
    """
    Draws the current :class:`RangeSelection` below the data layer.

    Any other selection kind, or none at all, draws nothing. Unconstrained
    dimensions span the full axis.
    """

    MARKER = "selectionCubeMarker"
    LEVEL = LEVEL_DATA - 1

    CSS_CUBE = "selectionCube"
    CSS_CUBEFRAME = "selectionCubeFrame"

    def __init__(
        self,
        context: HostContext,
        plot: SVGPlot,
        projection: Projection,
        dimx: int = 0,
        dimy: int = 1,
        projector: Optional[RangeProjector] = None,
    ):
        self.color = config.get("selection_cube.color")
        self.opacity = _opacity("selection_cube.opacity")
        self.frame_opacity = _opacity("selection_cube.frame_opacity")
        self.frame_width = config.get_float("selection_cube.frame_width")
        if self.frame_width < 0:
            raise OverlayConfigError(
                "selection_cube.frame_width", reason=f"must be >= 0, got {self.frame_width}"
            )
        self.projector = projector or RangeProjector()
        self.cube: Optional[HyperCube] = None
        super().__init__(context, plot, projection, dimx, dimy)

    def setup_styles(self) -> None:
        self.styles.ensure_named(self.CSS_CUBE, {
            "fill": self.color,
            "opacity": self.opacity,
        })
        self.styles.ensure_named(self.CSS_CUBEFRAME, {
            "fill": "none",
            "stroke": self.color,
            "stroke-opacity": self.frame_opacity,
            "stroke-width": self.frame_width,
        })

    def redraw(self) -> None:
        self.cube = None
        selection = self.context.get_selection()
        if not isinstance(selection, RangeSelection):
            return

        dims = self.context.get_database().dimensionality()
        if selection.dimensionality != dims or dims != self.projection.dimensionality:
            logger.debug(
                f"Ignoring range selection with {selection.dimensionality} ranges "
                f"for {dims}-dimensional data"
            )
            return

        self.cube = self.projector.project(selection.ranges, self.projection, self.dimx, self.dimy)
        self.layer.append(filled_polygon(self.cube.filled, self.CSS_CUBE))
        self.layer.append(frame_path(self.cube.frame, self.CSS_CUBEFRAME))
