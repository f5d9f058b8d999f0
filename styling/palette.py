"""Cluster color palette."""

from typing import Tuple

# Colors for cluster indices 1..n, cycling after the last entry.
DEFAULT_PALETTE: Tuple[str, ...] = (
    "#e41a1c",
    "#377eb8",
    "#4daf4a",
    "#984ea3",
    "#ff7f00",
    "#a65628",
    "#f781bf",
    "#999999",
    "#66c2a5",
    "#e6ab02",
)


def color_for(index: int, palette: Tuple[str, ...] = DEFAULT_PALETTE) -> str:
    """Color for a 1-based cluster index."""
    if index < 1:
        raise ValueError(f"Cluster index must be >= 1, got {index}")
    if not palette:
        raise ValueError("Palette is empty")
    return palette[(index - 1) % len(palette)]
