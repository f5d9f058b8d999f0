"""
Bubble plot: one circle per record, colored by cluster and sized by a
per-record score (e.g. an outlier score) through a gamma-corrected
scale chain.
"""

from typing import List, Optional, Tuple

import numpy as np

from clustering.by_label import ByLabelClusterer
from overlay_core.config import config
from overlay_core.errors import OverlayConfigError
from overlay_core.logging import get_logger
from overlay_core.protocols import Annotation, HostContext, Projection
from overlay_core.types import Cluster, Clustering, StyleID
from scaling.chain import ScaleChain, bubble_chain
from scaling.links import NormalizationScale
from styling.palette import color_for
from visualization.base import LEVEL_DATA, IncrementalVisualization
from visualization.events import ChangeKind
from visualization.plot import SVGPlot
from visualization.shapes import bubble

logger = get_logger("visualization.bubble")


class BubbleVisualization(IncrementalVisualization):
    """
    Cluster-colored, score-sized markers.

    The clustering is resolved once at construction (the context result,
    or a by-label partition of the records when there is none) and its
    1-based cluster indices stay fixed for the lifetime of the instance.
    Records without a score are skipped.

    Args:
        gamma: Perceptual-correction exponent, > 0 (default: ``bubble.gamma``).
        bounds: Score normalization bounds (default: min/max of the scores,
            re-derived on every redraw).
        radius: Marker radius bounds (default: ``bubble.min_radius`` /
            ``bubble.max_radius``).
        annotation: Scores to draw (default: the context annotation).

    Raises:
        OverlayConfigError: On an invalid gamma, bounds or radius, or when
            no scores are available. Raised before anything is drawn.
    """

    MARKER = "bubbleMarker"
    LEVEL = LEVEL_DATA
    REDRAW_KINDS = IncrementalVisualization.REDRAW_KINDS | {ChangeKind.DATA}

    CSS_BUBBLE_PREFIX = "bubble"

    def __init__(
        self,
        context: HostContext,
        plot: SVGPlot,
        projection: Projection,
        dimx: int = 0,
        dimy: int = 1,
        gamma: Optional[float] = None,
        bounds: Optional[Tuple[float, float]] = None,
        radius: Optional[Tuple[float, float]] = None,
        annotation: Optional[Annotation] = None,
    ):
        self._annotation = annotation
        annotation = annotation if annotation is not None else context.get_annotation()
        if annotation is None:
            raise OverlayConfigError("bubble.annotation", reason="no per-record scores available")
        if gamma is None:
            gamma = config.get_float("bubble.gamma")
        if radius is None:
            radius = (config.get_float("bubble.min_radius"), config.get_float("bubble.max_radius"))
        self.derived_bounds = bounds is None
        if bounds is None:
            norm = NormalizationScale.from_values(annotation.values())
            bounds = (norm.low, norm.high)

        self.chain: ScaleChain = bubble_chain(bounds, radius, gamma)
        self.fill_opacity = config.get_float("bubble.fill_opacity")
        self.stroke_width = config.get_float("bubble.stroke_width")
        self.clustering = self._resolve_clustering(context)
        self._cluster_styles: List[Tuple[Cluster, StyleID]] = []
        self.skipped = 0
        super().__init__(context, plot, projection, dimx, dimy)

    @staticmethod
    def _resolve_clustering(context: HostContext) -> Clustering:
        clustering = context.get_clustering_result()
        if clustering is not None:
            return clustering
        logger.info("No clustering result, falling back to clusters by label")
        return ByLabelClusterer().run(context.get_database())

    @property
    def annotation(self) -> Optional[Annotation]:
        """Scores being drawn: the explicit annotation, else the context's current one."""
        if self._annotation is not None:
            return self._annotation
        return self.context.get_annotation()

    def setup_styles(self) -> None:
        self._cluster_styles = []
        for index, cluster in self.clustering.numbered():
            css = self.styles.ensure(self.CSS_BUBBLE_PREFIX, index, {
                "stroke-width": self.stroke_width,
                "fill": color_for(index),
                "fill-opacity": self.fill_opacity,
            })
            self._cluster_styles.append((cluster, css))

    def radius_for(self, value: float) -> float:
        """Marker radius of a raw score."""
        return self.chain(value)

    def redraw(self) -> None:
        annotation = self.annotation
        if annotation is None:
            logger.warning("Scores were removed from the context, nothing to draw")
            self.skipped = 0
            return
        if self.derived_bounds:
            # Derived bounds track the current scores.
            self.chain = self.chain.replace("normalize", NormalizationScale.from_values(annotation.values()))
        database = self.context.get_database()
        skipped = 0
        for cluster, css in self._cluster_styles:
            ids = []
            values = []
            for rid in cluster.ids:
                value = annotation.value_for(rid)
                if value is None:
                    skipped += 1
                    continue
                ids.append(rid)
                values.append(value)
            if not ids:
                continue

            radii = np.atleast_1d(self.chain(np.asarray(values, dtype=np.float64)))
            for rid, r in zip(ids, radii):
                x, y = self.projection.project_2d(database.get(rid), self.dimx, self.dimy)
                self.layer.append(bubble(x, y, r, css, rid))

        if skipped:
            logger.debug(f"Skipped {skipped} records without a score")
        self.skipped = skipped
