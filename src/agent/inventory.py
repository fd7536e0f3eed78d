# src/agent/inventory.py
"""
Capacity-limited item counter for the bot front end.

Capacity is a total item count across all types (36 by default), not a
slot model.
"""

from __future__ import annotations

import logging
from typing import Dict


log = logging.getLogger(__name__)


class Inventory:
    def __init__(self, capacity: int = 36) -> None:
        if capacity < 0:
            raise ValueError(f"Inventory capacity must be >= 0, got {capacity}")
        self._capacity = capacity
        self._items: Dict[str, int] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    def total(self) -> int:
        return sum(self._items.values())

    def count(self, item: str) -> int:
        return self._items.get(item, 0)

    def add_item(self, item: str, count: int = 1) -> bool:
        """Add `count` of `item`; refuse (False) if it would exceed capacity."""
        if count <= 0:
            raise ValueError(f"count must be positive, got {count}")
        if self.total() + count > self._capacity:
            log.info("Inventory full: cannot add %d %s (%d/%d)", count, item, self.total(), self._capacity)
            return False
        self._items[item] = self._items.get(item, 0) + count
        log.info("Added %d %s to inventory", count, item)
        return True

    def remove_item(self, item: str, count: int = 1) -> bool:
        """Remove `count` of `item`; refuse (False) if there are not enough."""
        if count <= 0:
            raise ValueError(f"count must be positive, got {count}")
        current = self._items.get(item)
        if current is None or current < count:
            return False
        remaining = current - count
        if remaining == 0:
            del self._items[item]
        else:
            self._items[item] = remaining
        return True

    def as_dict(self) -> Dict[str, int]:
        return dict(self._items)
