"""
Change notifications between the host context and visualizations.

Delivery is synchronous: :meth:`ChangeNotifier.fire` calls every listener
on the calling thread before returning.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

from overlay_core.errors import SubscriptionError
from overlay_core.logging import get_logger

logger = get_logger("visualization.events")


class ChangeKind(str, Enum):
    """Closed set of notification kinds."""
    GENERIC = "generic"        # viewport / projection change, redraw everything
    SELECTION = "selection"    # the selection was replaced
    DATA = "data"              # records, scores or clustering changed
    VISIBILITY = "visibility"  # a visualization was shown or hidden


@dataclass(frozen=True)
class ChangeEvent:
    kind: ChangeKind
    source: Any = None


Listener = Callable[[ChangeEvent], Any]


class Subscription:
    """Token for one registered listener; released exactly once."""

    def __init__(self, notifier: "ChangeNotifier", listener: Listener):
        self._notifier: Optional["ChangeNotifier"] = notifier
        self.listener = listener

    @property
    def active(self) -> bool:
        return self._notifier is not None

    def release(self) -> None:
        if self._notifier is None:
            raise SubscriptionError("subscription already released")
        notifier, self._notifier = self._notifier, None
        notifier._remove(self)


class ChangeNotifier:
    """Synchronous listener list."""

    def __init__(self):
        self._subscriptions: List[Subscription] = []

    def subscribe(self, listener: Listener) -> Subscription:
        if not callable(listener):
            raise TypeError(f"Listener is not callable: {listener!r}")
        subscription = Subscription(self, listener)
        self._subscriptions.append(subscription)
        return subscription

    def fire(self, event: ChangeEvent) -> None:
        """Deliver *event* to every listener subscribed at call time, in order."""
        if not isinstance(event.kind, ChangeKind):
            raise TypeError(f"Unknown change kind: {event.kind!r}")
        logger.debug(f"Dispatching {event.kind.value} to {len(self._subscriptions)} listeners")
        for subscription in list(self._subscriptions):
            if subscription.active:
                subscription.listener(event)

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    def _remove(self, subscription: Subscription) -> None:
        self._subscriptions.remove(subscription)
