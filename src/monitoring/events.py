# path: src/monitoring/events.py
"""
Event schema for navigation monitoring.

Defines:
- EventType: what kind of thing happened (route found, block mined, ...)
- MonitoringEvent: one structured, JSON-safe event

Events are published on monitoring.bus.EventBus and typically persisted by
monitoring.logger.JsonFileLogger.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum, auto
from typing import Any, Dict, Optional


class EventType(Enum):
    """Typed events emitted by the pathfinder and the command interpreter."""

    # Pathfinder outcomes
    ROUTE_FOUND = auto()
    ROUTE_NOT_FOUND = auto()

    # Command interpreter
    COMMAND_EXECUTED = auto()
    BLOCK_MINED = auto()

    # Generic log messages
    LOG = auto()


@dataclass
class MonitoringEvent:
    """
    Runtime event emitted by navigation or the bot front end.

    All fields must be JSON-safe.
    """

    ts: float                   # UNIX timestamp (seconds)
    module: str                 # Source module ("bot_core.nav.pathfinder", "agent.bot", ...)
    event_type: EventType
    message: str                # Short human-readable description
    payload: Dict[str, Any]     # Structured data (start, goal, cost, reason, ...)
    correlation_id: Optional[str] = None  # Groups events of one command/search

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name
        return data
