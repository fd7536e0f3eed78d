# hazard + footing checks for candidate standing positions
# src/bot_core/nav/safety.py
"""
Safety predicate for navigation.

A coordinate is a legal stepping point when:
  1. No hazard block (lava, fire, ...) lies inside the cube of `radius`
     around it, centre included.
  2. The block directly below it is known and solid.

The checker is pure: it only reads from the WorldQuery it was built with.
Unknown coordinates count as "no block", so an unscanned floor is unsafe.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List

from ..world import BlockInfo, WorldQuery
from .grid import Coord


DEFAULT_HAZARD_BLOCKS: FrozenSet[str] = frozenset(
    {"lava", "fire", "cactus", "magma_block", "powder_snow"}
)
DEFAULT_SAFETY_RADIUS = 2


@dataclass(frozen=True)
class SafetyPolicy:
    """Which block types are hazards, and how far away they still matter."""

    hazard_blocks: FrozenSet[str] = field(default_factory=lambda: DEFAULT_HAZARD_BLOCKS)
    radius: int = DEFAULT_SAFETY_RADIUS

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError(f"Safety radius must be >= 0, got {self.radius}")
        # Accept any iterable of names from config.
        object.__setattr__(self, "hazard_blocks", frozenset(self.hazard_blocks))

    def is_hazard(self, block: BlockInfo | None) -> bool:
        return block is not None and block.type in self.hazard_blocks


class SafetyChecker:
    """Answers "can the bot stand here?" against a WorldQuery."""

    def __init__(self, world: WorldQuery, policy: SafetyPolicy | None = None) -> None:
        self._world = world
        self._policy = policy or SafetyPolicy()

    @property
    def policy(self) -> SafetyPolicy:
        return self._policy

    def with_world(self, world: WorldQuery) -> "SafetyChecker":
        """Same policy, different world (used to bind a per-search cache)."""
        return SafetyChecker(world, self._policy)

    def hazards_near(self, coord: Coord) -> List[BlockInfo]:
        """All hazard blocks inside the safety cube around `coord`."""
        r = self._policy.radius
        found: List[BlockInfo] = []
        for dx in range(-r, r + 1):
            for dy in range(-r, r + 1):
                for dz in range(-r, r + 1):
                    block = self._world.block_at(coord.offset(dx, dy, dz))
                    if self._policy.is_hazard(block):
                        found.append(block)  # type: ignore[arg-type]
        return found

    def is_safe(self, coord: Coord) -> bool:
        r = self._policy.radius
        for dx in range(-r, r + 1):
            for dy in range(-r, r + 1):
                for dz in range(-r, r + 1):
                    if self._policy.is_hazard(self._world.block_at(coord.offset(dx, dy, dz))):
                        return False

        # Need solid footing; open air or unknown below means a fall.
        return self._world.is_solid(coord.below())

    def is_route_safe(self, route: Iterable[Coord]) -> bool:
        return all(self.is_safe(coord) for coord in route)
