# in-process pub/sub for monitoring events
"""
Event bus for navigation monitoring.

Minimal, thread-safe, in-process pub/sub:

- Subscribers receive MonitoringEvent objects.
- Publishers (PathFinder, MinecraftBot) never know who is listening.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List

from .events import MonitoringEvent


log = logging.getLogger(__name__)

SubscriberFn = Callable[[MonitoringEvent], None]


class EventBus:
    """
    In-process event bus for MonitoringEvents.

    The subscriber list is guarded by a lock; publish iterates over a
    snapshot so subscribers may (un)subscribe from inside a callback.
    """

    def __init__(self) -> None:
        self._subscribers: List[SubscriberFn] = []
        self._lock = Lock()

    def subscribe(self, fn: SubscriberFn) -> None:
        with self._lock:
            self._subscribers.append(fn)

    def unsubscribe(self, fn: SubscriberFn) -> None:
        """Remove a subscriber. Safe to call if `fn` is not registered."""
        with self._lock:
            if fn in self._subscribers:
                self._subscribers.remove(fn)

    def publish(self, event: MonitoringEvent) -> None:
        """
        Deliver `event` to every subscriber, in subscription order.

        A failing subscriber is logged and skipped; it does not stop the
        others from receiving the event.
        """
        with self._lock:
            subscribers = list(self._subscribers)

        for fn in subscribers:
            try:
                fn(event)
            except Exception:
                log.exception("Monitoring subscriber %r failed on %s", fn, event.event_type.name)

    def clear(self) -> None:
        """Drop all subscribers. Mostly for tests."""
        with self._lock:
            self._subscribers.clear()
