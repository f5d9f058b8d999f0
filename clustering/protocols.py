"""Abstract base class for fallback clusterers."""

from abc import ABC, abstractmethod

from overlay_core.protocols import RecordStore
from overlay_core.types import Clustering


class Clusterer(ABC):
    """Protocol for deriving a clustering from a record store."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def run(self, database: RecordStore) -> Clustering:
        """Partition every record of *database* into clusters."""
        ...
