"""
Clustering module.

Fallback partitions used when the host has no clustering result.
"""

from clustering.protocols import Clusterer
from clustering.by_label import ByLabelClusterer, UNLABELED

__all__ = [
    'Clusterer',
    'ByLabelClusterer',
    'UNLABELED',
]
