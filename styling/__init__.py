"""
Styling package — style identifiers and the per-plot style registry.
"""

from styling.definitions import StyleDefinition
from styling.registry import StyleConflict, StyleRegistry
from styling.assigner import StyleAssigner, style_id_for
from styling.palette import DEFAULT_PALETTE, color_for

__all__ = [
    "StyleDefinition",
    "StyleConflict",
    "StyleRegistry",
    "StyleAssigner",
    "style_id_for",
    "DEFAULT_PALETTE",
    "color_for",
]
