"""
overlay_core — minimal core library for the selection overlays.

Every visualization module imports from this package. It provides:
- Domain types (Range, RangeSelection, Cluster, Clustering, ...)
- Protocol definitions (RecordStore, Annotation, Projection, HostContext)
- Singleton configuration loader
- Custom exception hierarchy
- Structured JSON logger

This package contains **zero** drawing logic — only primitives and
contracts.
"""

# Errors first, no internal deps
from overlay_core.errors import (
    OverlayConfigError,
    OverlayError,
    RedrawReentrancyError,
    StyleNamingConflict,
    SubscriptionError,
    VisualizationDisposedError,
)

# Logging
from overlay_core.logging import get_logger

# Configuration
from overlay_core.config import Config, config

# Domain types
from overlay_core.types import (
    Cluster,
    Clustering,
    DBIDSelection,
    Point2D,
    Range,
    RangeSelection,
    RecordID,
    StyleID,
)

# Protocols
from overlay_core.protocols import (
    Annotation,
    AxisExtent,
    HostContext,
    Projection,
    RecordStore,
)

__all__ = [
    # Errors
    "OverlayError",
    "OverlayConfigError",
    "StyleNamingConflict",
    "RedrawReentrancyError",
    "VisualizationDisposedError",
    "SubscriptionError",
    # Logging
    "get_logger",
    # Config
    "Config",
    "config",
    # Types
    "RecordID",
    "StyleID",
    "Point2D",
    "Range",
    "DBIDSelection",
    "RangeSelection",
    "Cluster",
    "Clustering",
    # Protocols
    "RecordStore",
    "Annotation",
    "AxisExtent",
    "Projection",
    "HostContext",
]
