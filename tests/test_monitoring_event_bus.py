#tests/test_monitoring_event_bus.py
"""
Tests for monitoring.bus.EventBus

Covers:
- Publish/subscribe and unsubscribe
- Delivery order
- Failing subscribers do not starve the rest
- Basic thread-safety smoke check
"""

from __future__ import annotations

import threading
from typing import List

from monitoring.bus import EventBus
from monitoring.events import EventType, MonitoringEvent


def make_event(ts: float, event_type: EventType = EventType.LOG, msg: str = "msg") -> MonitoringEvent:
    return MonitoringEvent(
        ts=ts,
        module="bot_core.nav.pathfinder",
        event_type=event_type,
        message=msg,
        payload={},
    )


def test_subscribers_receive_events_in_publish_order():
    bus = EventBus()
    seen: List[MonitoringEvent] = []
    bus.subscribe(seen.append)

    bus.publish(make_event(1.0, EventType.ROUTE_FOUND, "found"))
    bus.publish(make_event(2.0, EventType.ROUTE_NOT_FOUND, "missing"))

    assert [e.message for e in seen] == ["found", "missing"]
    assert [e.event_type for e in seen] == [EventType.ROUTE_FOUND, EventType.ROUTE_NOT_FOUND]


def test_unsubscribe_stops_delivery_and_is_idempotent():
    bus = EventBus()
    received: List[MonitoringEvent] = []

    bus.subscribe(received.append)
    bus.unsubscribe(received.append)
    bus.unsubscribe(received.append)

    bus.publish(make_event(1.0))

    assert received == []


def test_failing_subscriber_is_isolated(caplog):
    bus = EventBus()
    received: List[MonitoringEvent] = []

    def broken(evt: MonitoringEvent) -> None:
        raise RuntimeError("boom")

    bus.subscribe(broken)
    bus.subscribe(received.append)

    with caplog.at_level("ERROR", logger="monitoring.bus"):
        bus.publish(make_event(1.0, EventType.BLOCK_MINED))

    assert len(received) == 1
    assert "failed on BLOCK_MINED" in caplog.text


def test_clear_drops_everyone():
    bus = EventBus()
    received: List[MonitoringEvent] = []
    bus.subscribe(received.append)

    bus.clear()
    bus.publish(make_event(1.0))

    assert received == []


def test_event_bus_thread_safety_smoke():
    """
    Two threads publishing at once: no crash and nothing lost.
    """
    bus = EventBus()
    count = 100

    received: List[MonitoringEvent] = []
    lock = threading.Lock()

    def subscriber(evt: MonitoringEvent) -> None:
        with lock:
            received.append(evt)

    bus.subscribe(subscriber)

    def publisher_thread(start: int) -> None:
        for i in range(start, start + count):
            bus.publish(make_event(float(i)))

    threads = [
        threading.Thread(target=publisher_thread, args=(0,)),
        threading.Thread(target=publisher_thread, args=(1000,)),
    ]

    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(received) == 2 * count
