"""
Visualization module.

Event-driven overlays on a 2-D projection:
- Selection cube (selected value ranges)
- Bubble plot (cluster-colored, score-sized markers)
- Thumbnails of either
"""

from visualization.events import ChangeEvent, ChangeKind, ChangeNotifier, Subscription
from visualization.context import DetachedContext, VisualizerContext
from visualization.plot import Layer, SVGPlot
from visualization.base import (
    LEVEL_BACKGROUND,
    LEVEL_DATA,
    LEVEL_INTERACTIVE,
    IncrementalVisualization,
    RedrawState,
)
from visualization.selection_cube import SelectionCubeVisualization
from visualization.bubble import BubbleVisualization
from visualization.thumbnail import ThumbnailMask, ThumbnailVisualization

__all__ = [
    # Events
    'ChangeEvent',
    'ChangeKind',
    'ChangeNotifier',
    'Subscription',
    # Host
    'VisualizerContext',
    'DetachedContext',
    'SVGPlot',
    'Layer',
    # Redraw controller
    'IncrementalVisualization',
    'RedrawState',
    'LEVEL_BACKGROUND',
    'LEVEL_DATA',
    'LEVEL_INTERACTIVE',
    # Visualizations
    'SelectionCubeVisualization',
    'BubbleVisualization',
    'ThumbnailVisualization',
    'ThumbnailMask',
]
