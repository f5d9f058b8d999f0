"""
In-memory record store and per-record score annotation.

Records are resident numpy rows; the visualizations only read them.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np

from overlay_core.logging import get_logger
from overlay_core.types import RecordID

logger = get_logger("storage")


class InMemoryRecordStore:
    """
    Numpy-backed record store.

    Args:
        vectors: (N, D) matrix, one row per record.
        labels: Optional class label per row (None for unlabeled rows).
        ids: Optional record ids per row (default 0..N-1).
    """

    def __init__(
        self,
        vectors: np.ndarray,
        labels: Optional[Sequence[Optional[str]]] = None,
        ids: Optional[Sequence[int]] = None,
    ):
        matrix = np.array(vectors, dtype=np.float64)
        if matrix.ndim != 2:
            raise ValueError(f"Expected an (N, D) matrix, got shape {matrix.shape}")
        n = matrix.shape[0]

        if ids is None:
            ids = range(n)
        id_list = [RecordID(int(i)) for i in ids]
        if len(id_list) != n:
            raise ValueError(f"Got {len(id_list)} ids for {n} records")
        if len(set(id_list)) != n:
            raise ValueError("Record ids must be unique")

        if labels is not None and len(labels) != n:
            raise ValueError(f"Got {len(labels)} labels for {n} records")

        self._matrix = matrix
        self._matrix.setflags(write=False)
        self._ids: List[RecordID] = id_list
        self._row: Dict[RecordID, int] = {rid: row for row, rid in enumerate(id_list)}
        self._labels: List[Optional[str]] = list(labels) if labels is not None else [None] * n

        logger.debug(f"Record store with {n} records x {matrix.shape[1]} dims")

    @property
    def matrix(self) -> np.ndarray:
        """Read-only (N, D) view of all records."""
        return self._matrix

    def dimensionality(self) -> int:
        return self._matrix.shape[1]

    def ids(self) -> List[RecordID]:
        return list(self._ids)

    def row_of(self, record_id: RecordID) -> int:
        try:
            return self._row[record_id]
        except KeyError:
            raise KeyError(f"Unknown record id: {record_id}")

    def get(self, record_id: RecordID) -> np.ndarray:
        return self._matrix[self.row_of(record_id)]

    def rows(self, record_ids: Iterable[RecordID]) -> np.ndarray:
        """(k, D) matrix of the given records, in the given order."""
        idx = [self.row_of(rid) for rid in record_ids]
        return self._matrix[idx]

    def label(self, record_id: RecordID) -> Optional[str]:
        return self._labels[self.row_of(record_id)]

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"<InMemoryRecordStore n={len(self)} dims={self.dimensionality()}>"


class ScoreAnnotation:
    """Per-record scalar (e.g. an outlier score) keyed by record id."""

    def __init__(self, values: Mapping[int, float]):
        self._values: Dict[RecordID, float] = {
            RecordID(int(k)): float(v) for k, v in values.items() if v is not None
        }

    @classmethod
    def from_arrays(cls, ids: Sequence[int], scores: Sequence[float]) -> "ScoreAnnotation":
        if len(ids) != len(scores):
            raise ValueError(f"Got {len(scores)} scores for {len(ids)} ids")
        return cls(dict(zip(ids, scores)))

    def value_for(self, record_id: RecordID) -> Optional[float]:
        value = self._values.get(record_id)
        if value is None or np.isnan(value):
            return None
        return value

    def values(self) -> np.ndarray:
        return np.fromiter(self._values.values(), dtype=np.float64, count=len(self._values))

    def __len__(self) -> int:
        return len(self._values)
