"""
Shared pytest fixtures for the overlay tests.

Every test runs against an empty configuration (schema defaults only) so
a developer's config.json never leaks into assertions. Fixtures build a
small labelled 3-D data set with scores, its projection, a context and a
fresh plot.
"""

import sys
from pathlib import Path

# Ensure project root is on sys.path so imports work from tests/
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pytest

from overlay_core.config import config
from projection import AxisScale, LinearProjection
from storage.record_store import InMemoryRecordStore, ScoreAnnotation
from visualization import SVGPlot, VisualizerContext

VECTORS = np.array([
    [0.0, -1.0, 0.0],
    [1.0, 0.0, 1.0],
    [2.0, 2.0, 2.0],
    [3.0, 10.0, 6.0],
    [0.5, 3.0, 4.0],
    [1.5, 5.0, 3.0],
    [2.5, 7.0, 5.0],
    [1.0, 1.0, 1.0],
])
LABELS = ["a", "a", "a", "b", "b", "b", "b", "b"]
SCORES = [25.0, 50.0, 75.0, 100.0, 0.0, 10.0, 90.0, 40.0]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Schema defaults only."""
    monkeypatch.setattr(config, "_data", {})
    return config


@pytest.fixture
def store():
    return InMemoryRecordStore(VECTORS, labels=LABELS)


@pytest.fixture
def scores(store):
    return ScoreAnnotation.from_arrays(store.ids(), SCORES)


@pytest.fixture
def projection():
    """Dim 1 spans (-1, 10); 100 x 100 area without margin."""
    scales = [AxisScale(0.0, 3.0), AxisScale(-1.0, 10.0), AxisScale(0.0, 6.0)]
    return LinearProjection(scales, 100.0, 100.0)


@pytest.fixture
def context(store, scores):
    return VisualizerContext(store, annotation=scores)


@pytest.fixture
def plot():
    return SVGPlot(100.0, 100.0)
