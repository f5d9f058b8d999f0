"""
Incremental redraw controller shared by all visualizations.

Each visualization owns one layer of the plot. A relevant change
notification clears that layer and rebuilds it completely; irrelevant
notifications cost nothing. Redraws run on the notifier's thread and must
not nest.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import FrozenSet, Optional

from overlay_core.errors import RedrawReentrancyError, VisualizationDisposedError
from overlay_core.logging import get_logger
from overlay_core.protocols import HostContext, Projection
from styling.assigner import StyleAssigner
from visualization.events import ChangeEvent, ChangeKind, Subscription
from visualization.plot import Layer, SVGPlot

logger = get_logger("visualization")

# Layer levels: higher levels are drawn on top.
LEVEL_BACKGROUND = 0
LEVEL_DATA = 100
LEVEL_INTERACTIVE = 200


class RedrawState(str, Enum):
    IDLE = "idle"
    REDRAWING = "redrawing"
    DISPOSED = "disposed"


class IncrementalVisualization(ABC):
    """
    Base class for one visualization instance on one pair of dimensions.

    Construction binds parameters (subclasses validate them before calling
    ``super().__init__``), creates the layer, registers styles, subscribes
    to the context and performs the initial redraw. :meth:`dispose`
    releases the subscription and the layer.

    Args:
        context: Host context providing selection, records and notifications.
        plot: Drawing surface; its style registry is shared with other
            visualizations on the same plot.
        projection: Data -> screen projection.
        dimx: Dimension drawn horizontally.
        dimy: Dimension drawn vertically.
        level: Layer level (defaults to the class ``LEVEL``).
    """

    MARKER: str = "visualization"
    LEVEL: int = LEVEL_DATA
    REDRAW_KINDS: FrozenSet[ChangeKind] = frozenset({ChangeKind.GENERIC, ChangeKind.SELECTION})

    def __init__(
        self,
        context: HostContext,
        plot: SVGPlot,
        projection: Projection,
        dimx: int = 0,
        dimy: int = 1,
        level: Optional[int] = None,
    ):
        for dim in (dimx, dimy):
            if not 0 <= dim < projection.dimensionality:
                raise ValueError(
                    f"Dimension {dim} out of range for {projection.dimensionality} dimensions"
                )
        self.context = context
        self.plot = plot
        self.projection = projection
        self.dimx = dimx
        self.dimy = dimy
        self.styles = StyleAssigner(plot.styles, owner=self.MARKER)
        self.redraw_count = 0
        self._state = RedrawState.IDLE
        self._subscription: Optional[Subscription] = None

        self.layer: Layer = plot.add_layer(self.MARKER, self.LEVEL if level is None else level)
        try:
            self.setup_styles()
            self._subscription = context.add_change_listener(self.on_context_change)
            self.incremental_redraw()
        except Exception:
            self.dispose()
            raise

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def setup_styles(self) -> None:
        """Register the style classes this visualization draws with."""
        ...

    @abstractmethod
    def redraw(self) -> None:
        """Append the current shapes to the (already cleared) layer."""
        ...

    # ------------------------------------------------------------------
    # Redraw protocol
    # ------------------------------------------------------------------

    @property
    def state(self) -> RedrawState:
        return self._state

    @property
    def disposed(self) -> bool:
        return self._state is RedrawState.DISPOSED

    def is_relevant(self, event: ChangeEvent) -> bool:
        """True if *event* requires rebuilding this visualization's layer."""
        if not isinstance(event.kind, ChangeKind):
            raise TypeError(f"Unknown change kind: {event.kind!r}")
        return event.kind in self.REDRAW_KINDS

    def on_context_change(self, event: ChangeEvent) -> None:
        if self.disposed:
            raise VisualizationDisposedError(self.MARKER, "on_context_change")
        if self.is_relevant(event):
            self.incremental_redraw()

    def incremental_redraw(self) -> None:
        """Clear the layer and rebuild it from the current context state."""
        if self._state is RedrawState.DISPOSED:
            raise VisualizationDisposedError(self.MARKER, "incremental_redraw")
        if self._state is RedrawState.REDRAWING:
            raise RedrawReentrancyError(self.MARKER)

        self._state = RedrawState.REDRAWING
        try:
            self.layer.clear()
            self.redraw()
            self.redraw_count += 1
        finally:
            self._state = RedrawState.IDLE
        logger.debug(
            f"Redraw {self.MARKER} #{self.redraw_count} on dims ({self.dimx}, {self.dimy})",
            extra={
                "marker": self.MARKER,
                "dims": [self.dimx, self.dimy],
                "redraw": self.redraw_count,
                "layer_size": len(self.layer),
            },
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def dispose(self) -> None:
        """Unsubscribe and remove the layer. Calling it again is a no-op."""
        if self._state is RedrawState.DISPOSED:
            return
        if self._state is RedrawState.REDRAWING:
            raise RedrawReentrancyError(self.MARKER)

        if self._subscription is not None:
            self._subscription.release()
            self._subscription = None
        self.plot.remove_layer(self.layer)
        self._state = RedrawState.DISPOSED
        logger.debug(f"Disposed {self.MARKER} after {self.redraw_count} redraws", extra={"marker": self.MARKER})

    def __enter__(self) -> "IncrementalVisualization":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} dims=({self.dimx}, {self.dimy}) state={self._state.value}>"
