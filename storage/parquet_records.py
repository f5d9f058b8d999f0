"""
Parquet import/export of record tables.

A record table has one row per record: numeric feature columns, plus
optional ``id``, ``label`` and ``score`` columns.

Usage:
    store, annotation = load_records("data/points.parquet")
    save_records("data/points.parquet", store, annotation)
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np

from overlay_core.errors import OverlayError
from overlay_core.logging import get_logger
from storage.record_store import InMemoryRecordStore, ScoreAnnotation

logger = get_logger("storage")

ID_COLUMN = "id"
LABEL_COLUMN = "label"
SCORE_COLUMN = "score"
_RESERVED = (ID_COLUMN, LABEL_COLUMN, SCORE_COLUMN)


def load_records(
    path: str,
    feature_columns: Optional[Sequence[str]] = None,
) -> Tuple[InMemoryRecordStore, Optional[ScoreAnnotation]]:
    """
    Load a record table.

    Args:
        path: Parquet file path.
        feature_columns: Columns to use as dimensions (default: every
            column except id/label/score, in file order).

    Returns:
        Tuple of (record store, score annotation or None when the file has
        no score column).
    """
    try:
        import pyarrow.parquet as pq
    except ImportError:
        raise ImportError("pyarrow not installed. Run: pip install pyarrow")

    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"Record file not found: {filepath}")

    table = pq.read_table(filepath)
    names: List[str] = list(table.column_names)
    if feature_columns is None:
        feature_columns = [n for n in names if n not in _RESERVED]
    missing = [c for c in feature_columns if c not in names]
    if missing:
        raise OverlayError(f"Record file {filepath} lacks columns: {missing}")
    if not feature_columns:
        raise OverlayError(f"Record file {filepath} has no feature columns")

    matrix = np.column_stack(
        [table.column(c).to_numpy(zero_copy_only=False).astype(np.float64) for c in feature_columns]
    )
    ids = table.column(ID_COLUMN).to_pylist() if ID_COLUMN in names else None
    labels = table.column(LABEL_COLUMN).to_pylist() if LABEL_COLUMN in names else None
    if labels is not None:
        labels = [None if lbl is None else str(lbl) for lbl in labels]

    store = InMemoryRecordStore(matrix, labels=labels, ids=ids)

    annotation = None
    if SCORE_COLUMN in names:
        scores = table.column(SCORE_COLUMN).to_pylist()
        annotation = ScoreAnnotation.from_arrays(store.ids(), scores)

    logger.info(f"Loaded {len(store)} records x {store.dimensionality()} dims from {filepath}")
    return store, annotation


def save_records(
    path: str,
    store: InMemoryRecordStore,
    annotation: Optional[ScoreAnnotation] = None,
    feature_names: Optional[Sequence[str]] = None,
) -> str:
    """Write *store* (and optional scores) as a record table; returns the path."""
    try:
        import pyarrow as pa
        import pyarrow.parquet as pq
    except ImportError:
        raise ImportError("pyarrow not installed. Run: pip install pyarrow")

    dims = store.dimensionality()
    if feature_names is None:
        feature_names = [f"d{i}" for i in range(dims)]
    if len(feature_names) != dims:
        raise ValueError(f"Got {len(feature_names)} feature names for {dims} dimensions")

    ids = store.ids()
    columns = {ID_COLUMN: ids}
    for i, name in enumerate(feature_names):
        columns[name] = store.matrix[:, i].tolist()
    columns[LABEL_COLUMN] = [store.label(rid) for rid in ids]
    if annotation is not None:
        columns[SCORE_COLUMN] = [annotation.value_for(rid) for rid in ids]

    filepath = Path(path)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(pa.table(columns), filepath)

    logger.info(f"Saved {len(ids)} records to {filepath}")
    return str(filepath)
