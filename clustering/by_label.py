"""Clustering by class label, used when no clustering result exists."""

from typing import Dict, List

from clustering.protocols import Clusterer
from overlay_core.logging import get_logger
from overlay_core.protocols import RecordStore
from overlay_core.types import Cluster, Clustering, RecordID

logger = get_logger("clustering")

UNLABELED = "unlabeled"


class ByLabelClusterer(Clusterer):
    """One cluster per distinct label, in first-seen order; unlabeled records go last."""

    @property
    def name(self) -> str:
        return "by_label"

    def run(self, database: RecordStore) -> Clustering:
        groups: Dict[str, List[RecordID]] = {}
        unlabeled: List[RecordID] = []
        for rid in database.ids():
            label = database.label(rid)
            if label is None:
                unlabeled.append(rid)
            else:
                groups.setdefault(label, []).append(rid)

        clusters = [Cluster(name=label, ids=tuple(ids)) for label, ids in groups.items()]
        if unlabeled:
            clusters.append(Cluster(name=UNLABELED, ids=tuple(unlabeled), noise=True))

        logger.info(
            f"Derived {len(clusters)} clusters by label, {len(unlabeled)} unlabeled records"
        )
        return Clustering(clusters=tuple(clusters), name=self.name)
