# JSONL sink for monitoring events
"""
Structured logging for navigation monitoring.

Provides:
- JsonFileLogger: subscribes to an EventBus and writes events as JSONL.
- log_event: build and publish a MonitoringEvent in one call.

Usage:

    bus = EventBus()
    sink = JsonFileLogger(Path("logs/nav/events.log"), bus)

    log_event(
        bus=bus,
        module="agent.bot",
        event_type=EventType.COMMAND_EXECUTED,
        message="goto finished",
        payload={"command": "#goto 1 64 2"},
    )
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from .bus import EventBus
from .events import EventType, MonitoringEvent


log = logging.getLogger(__name__)


class JsonFileLogger:
    """
    JSON-lines writer for MonitoringEvents.

    - One JSON object per line, UTF-8.
    - Parent directory is created on construction.
    - Write failures are reported through stdlib logging and do not
      propagate into the publisher.
    """

    def __init__(self, path: Path, bus: EventBus) -> None:
        self._path = path
        path.parent.mkdir(parents=True, exist_ok=True)
        self._file = path.open("a", encoding="utf-8")
        self._bus = bus
        bus.subscribe(self._on_event)

    @property
    def path(self) -> Path:
        return self._path

    def _on_event(self, event: MonitoringEvent) -> None:
        line = json.dumps(event.to_dict(), ensure_ascii=False)
        try:
            self._file.write(line + "\n")
            self._file.flush()
        except (OSError, ValueError):
            log.warning("Dropping monitoring event %s: cannot write %s", event.event_type.name, self._path)

    def close(self) -> None:
        """Unsubscribe and close the file handle."""
        self._bus.unsubscribe(self._on_event)
        self._file.close()


def log_event(
    bus: Optional[EventBus],
    module: str,
    event_type: EventType,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """
    Create and publish a MonitoringEvent.

    `bus=None` is accepted and ignored, so callers with an optional bus do
    not need to branch.
    """
    if bus is None:
        return
    event = MonitoringEvent(
        ts=time.time(),
        module=module,
        event_type=event_type,
        message=message,
        payload=payload or {},
        correlation_id=correlation_id,
    )
    bus.publish(event)
