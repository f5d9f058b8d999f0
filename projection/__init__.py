"""
Projection module.

Maps data space onto the 2-D render area:
- Per-dimension linear axis scales
- Reference linear projection
- Range projection of selections onto polygons
"""

from projection.scales import AxisScale
from projection.linear import LinearProjection
from projection.range_projector import HyperCube, Polygon, RangeProjector

__all__ = [
    'AxisScale',
    'LinearProjection',
    'HyperCube',
    'Polygon',
    'RangeProjector',
]
