#!/usr/bin/env python3
"""
Render Overlay Script

Draws the bubble plot of a record table (cluster-colored, score-sized
markers) with an optional selection cube, and writes an SVG.

Plot size, gamma and marker radius default to config.json values.

Input:
    - Parquet record table (numeric columns, optional id/label/score), or
    - CSV / whitespace text matrix; with --score-last the last column is
      the score

Output:
    - SVG document (--output)

Usage:
    python scripts/render_overlay.py data/points.parquet
    python scripts/render_overlay.py data/points.csv --score-last --dims 0 2
    python scripts/render_overlay.py data/points.parquet --select 0:1:2 --select 2:0:5
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from overlay_core.config import config
from overlay_core.errors import OverlayError
from overlay_core.logging import get_logger, set_console_level
from overlay_core.types import Range, RangeSelection
from projection import LinearProjection
from storage.parquet_records import load_records
from storage.record_store import InMemoryRecordStore, ScoreAnnotation
from visualization import (
    BubbleVisualization,
    SelectionCubeVisualization,
    SVGPlot,
    ThumbnailVisualization,
    VisualizerContext,
)

logger = get_logger("render_overlay")


def load_text_records(path: str, score_last: bool) -> Tuple[InMemoryRecordStore, Optional[ScoreAnnotation]]:
    """Load a numeric text matrix (comma or whitespace separated)."""
    delimiter = "," if path.endswith(".csv") else None
    matrix = np.loadtxt(path, delimiter=delimiter, ndmin=2)
    if score_last:
        if matrix.shape[1] < 2:
            raise OverlayError(f"{path}: need at least one feature column besides the score")
        store = InMemoryRecordStore(matrix[:, :-1])
        return store, ScoreAnnotation.from_arrays(store.ids(), matrix[:, -1].tolist())
    return InMemoryRecordStore(matrix), None


def parse_selection(args: List[str], dims: int) -> Optional[RangeSelection]:
    """Turn ``dim:min:max`` arguments into a range selection."""
    if not args:
        return None
    ranges: List[Optional[Range]] = [None] * dims
    for arg in args:
        try:
            dim, low, high = arg.split(":")
            if not 0 <= int(dim) < dims:
                raise IndexError(f"dimension out of range 0..{dims - 1}")
            ranges[int(dim)] = Range.of(float(low), float(high))
        except (ValueError, IndexError) as e:
            raise OverlayError(f"Invalid --select '{arg}': {e}")
    return RangeSelection(ranges=tuple(ranges))


def main():
    parser = argparse.ArgumentParser(
        description="Render a bubble plot with selection cube overlay to SVG"
    )
    parser.add_argument("input", help="Parquet, CSV or text record file")
    parser.add_argument(
        "--output",
        default="overlay.svg",
        help="Output SVG path"
    )
    parser.add_argument(
        "--dims",
        nargs=2,
        type=int,
        default=[0, 1],
        metavar=("DIMX", "DIMY"),
        help="Dimensions to display (0-based)"
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=config.get("bubble.gamma"),
        help="Gamma correction of marker sizes (> 0)"
    )
    parser.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="DIM:MIN:MAX",
        help="Selected range on one dimension (repeatable)"
    )
    parser.add_argument(
        "--score-last",
        action="store_true",
        help="Text input only: last column holds the score"
    )
    parser.add_argument(
        "--thumbnail",
        type=int,
        default=None,
        metavar="PIXELS",
        help="Render the bubbles as a thumbnail of this resolution"
    )
    parser.add_argument("--width", type=float, default=config.get("plot.width"))
    parser.add_argument("--height", type=float, default=config.get("plot.height"))
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Also print debug messages (redraws, style registrations)"
    )

    args = parser.parse_args()
    if args.verbose:
        set_console_level("DEBUG")

    try:
        if args.input.endswith(".parquet"):
            store, annotation = load_records(args.input)
        else:
            store, annotation = load_text_records(args.input, args.score_last)

        if annotation is None:
            logger.info("No score column, sizing all markers equally")
            annotation = ScoreAnnotation.from_arrays(store.ids(), [1.0] * len(store))

        dimx, dimy = args.dims
        selection = parse_selection(args.select, store.dimensionality())
        context = VisualizerContext(store, selection=selection, annotation=annotation)
        projection = LinearProjection.from_data(
            store.matrix, args.width, args.height, margin=config.get("plot.margin")
        )
        plot = SVGPlot(args.width, args.height)

        SelectionCubeVisualization(context, plot, projection, dimx, dimy)
        if args.thumbnail is not None:
            ThumbnailVisualization(
                lambda ctx, p, proj, dx, dy: BubbleVisualization(ctx, p, proj, dx, dy, gamma=args.gamma),
                context, plot, projection, dimx, dimy,
                resolution=args.thumbnail,
            )
        else:
            BubbleVisualization(context, plot, projection, dimx, dimy, gamma=args.gamma)

        plot.save(args.output)
    except (OverlayError, OSError, ValueError) as e:
        logger.error(f"Rendering failed: {e}")
        sys.exit(1)

    logger.info(f"Wrote {args.output}")


if __name__ == "__main__":
    main()
