"""
In-memory host context: selection, records, clustering and scores.

Visualizations only read this state; every setter fires the matching
change notification synchronously.
"""

from typing import Optional

from overlay_core.logging import get_logger
from overlay_core.protocols import Annotation, RecordStore
from overlay_core.types import Clustering, DBIDSelection
from visualization.events import ChangeEvent, ChangeKind, ChangeNotifier, Listener, Subscription

logger = get_logger("visualization.context")


class VisualizerContext:
    """
    Shared state of one plot window.

    Args:
        database: Resident record store.
        selection: Current selection (None when nothing is selected).
        clustering: Clustering result, if one was computed.
        annotation: Per-record scores drawn by the bubble plot.
    """

    def __init__(
        self,
        database: RecordStore,
        selection: Optional[DBIDSelection] = None,
        clustering: Optional[Clustering] = None,
        annotation: Optional[Annotation] = None,
    ):
        self._database = database
        self._selection = selection
        self._clustering = clustering
        self._annotation = annotation
        self._notifier = ChangeNotifier()

    # -- state ---------------------------------------------------------------

    def get_database(self) -> RecordStore:
        return self._database

    def get_selection(self) -> Optional[DBIDSelection]:
        return self._selection

    def set_selection(self, selection: Optional[DBIDSelection]) -> None:
        self._selection = selection
        self.fire_context_change(ChangeEvent(ChangeKind.SELECTION, self))

    def get_clustering_result(self) -> Optional[Clustering]:
        return self._clustering

    def set_clustering_result(self, clustering: Optional[Clustering]) -> None:
        self._clustering = clustering
        self.fire_context_change(ChangeEvent(ChangeKind.DATA, self))

    def get_annotation(self) -> Optional[Annotation]:
        return self._annotation

    def set_annotation(self, annotation: Optional[Annotation]) -> None:
        self._annotation = annotation
        self.fire_context_change(ChangeEvent(ChangeKind.DATA, self))

    # -- notifications -------------------------------------------------------

    def add_change_listener(self, listener: Listener) -> Subscription:
        return self._notifier.subscribe(listener)

    def fire_context_change(self, event: ChangeEvent) -> None:
        self._notifier.fire(event)

    @property
    def listener_count(self) -> int:
        return self._notifier.listener_count


class DetachedContext:
    """
    Read-through view of another context with its own, silent notifier.

    Visualizations built on it see the parent's state but never receive
    the parent's notifications; the owner drives their redraws.
    """

    def __init__(self, parent):
        self._parent = parent
        self._notifier = ChangeNotifier()

    def get_database(self) -> RecordStore:
        return self._parent.get_database()

    def get_selection(self) -> Optional[DBIDSelection]:
        return self._parent.get_selection()

    def get_clustering_result(self) -> Optional[Clustering]:
        return self._parent.get_clustering_result()

    def get_annotation(self) -> Optional[Annotation]:
        return self._parent.get_annotation()

    def add_change_listener(self, listener: Listener) -> Subscription:
        return self._notifier.subscribe(listener)

    def fire_context_change(self, event: ChangeEvent) -> None:
        self._notifier.fire(event)

    @property
    def listener_count(self) -> int:
        return self._notifier.listener_count
