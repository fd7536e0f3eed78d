# A* route search over the voxel grid
# src/bot_core/nav/pathfinder.py
"""
A* pathfinding over block coordinates.

- Euclidean distance heuristic.
- Ten move offsets (six axis steps + four climb diagonals), see grid.py.
- Two modes sharing one search: unconstrained, and safety-checked where
  every candidate must pass the SafetyChecker and stay within the
  vertical limits.
- max_expansions guard so searches in an unbounded world terminate.

Open-set ties (equal f) pop in discovery order: heap entries carry a
monotonically increasing sequence number after f.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event

from ..world import CachedWorldQuery, WorldQuery
from .grid import MOVE_OFFSETS, Bounds, Coord, heuristic, move_cost
from .safety import SafetyChecker


log = logging.getLogger(__name__)

# Failure reasons (success has reason None)
NO_ROUTE = "no_route"
MAX_EXPANSIONS_EXHAUSTED = "max_expansions_exhausted"


@dataclass(frozen=True)
class SearchLimits:
    """
    Limits applied by the pathfinder.

    min_y / max_y only apply to safety-checked searches.
    max_expansions bounds every search; hitting it counts as "not found".
    """

    min_y: int = 0
    max_y: int = 256
    max_expansions: int = 200_000

    def __post_init__(self) -> None:
        if self.min_y > self.max_y:
            raise ValueError(f"min_y ({self.min_y}) must be <= max_y ({self.max_y})")
        if self.max_expansions <= 0:
            raise ValueError(f"max_expansions must be > 0, got {self.max_expansions}")


@dataclass
class PathfindingResult:
    """Structured result for a pathfinding attempt."""

    path: List[Coord]
    success: bool
    reason: str | None = None
    cost: float = 0.0
    expansions: int = 0

    @property
    def found(self) -> bool:
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "reason": self.reason,
            "cost": self.cost,
            "expansions": self.expansions,
            "path": [list(c.as_tuple()) for c in self.path],
        }


@dataclass(order=True)
class _OpenEntry:
    """Heap entry: ordered by f, then by discovery sequence."""

    f: float
    seq: int
    coord: Coord = field(compare=False)


class PathFinder:
    """
    Route planner bound to one world.

    The world is only read. Each find_route call owns its own frontier
    (open heap, closed set, came_from, g_score) and its own world cache.
    """

    def __init__(
        self,
        world: WorldQuery,
        *,
        safety: Optional[SafetyChecker] = None,
        limits: Optional[SearchLimits] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self._world = world
        self._safety = safety or SafetyChecker(world)
        self._limits = limits or SearchLimits()
        self._bus = bus

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def find_path(self, start: Any, goal: Any) -> PathfindingResult:
        """Shortest route, ignoring hazards and footing."""
        return self.find_route(start, goal, safety_checked=False)

    def find_safe_path(self, start: Any, goal: Any) -> PathfindingResult:
        """Shortest route through positions the SafetyChecker accepts."""
        return self.find_route(start, goal, safety_checked=True)

    def find_route(
        self,
        start: Any,
        goal: Any,
        safety_checked: bool = False,
        *,
        max_expansions: Optional[int] = None,
        bounds: Optional[Bounds] = None,
    ) -> PathfindingResult:
        """
        A* search from start to goal.

        Returns a PathfindingResult with:
          - path: start..goal inclusive on success, [] otherwise
          - success: bool
          - reason: None, NO_ROUTE or MAX_EXPANSIONS_EXHAUSTED
          - cost: summed move cost of the path
          - expansions: number of nodes popped and expanded

        Raises InvalidCoordinateError for malformed start/goal.
        """
        start = Coord.of(start)
        goal = Coord.of(goal)
        budget = self._limits.max_expansions if max_expansions is None else max_expansions
        if budget <= 0:
            raise ValueError(f"max_expansions must be > 0, got {budget}")

        result = self._search(start, goal, safety_checked, budget, bounds)

        if result.success:
            log.debug(
                "Route %s -> %s: %d steps, cost %.2f, %d expansions",
                start, goal, len(result.path) - 1, result.cost, result.expansions,
            )
            log_event(
                bus=self._bus,
                module=__name__,
                event_type=EventType.ROUTE_FOUND,
                message="Route found",
                payload={
                    "start": list(start.as_tuple()),
                    "goal": list(goal.as_tuple()),
                    "safety_checked": safety_checked,
                    "steps": len(result.path) - 1,
                    "cost": result.cost,
                    "expansions": result.expansions,
                },
            )
        else:
            log.info(
                "No route %s -> %s (safety_checked=%s): %s after %d expansions",
                start, goal, safety_checked, result.reason, result.expansions,
            )
            log_event(
                bus=self._bus,
                module=__name__,
                event_type=EventType.ROUTE_NOT_FOUND,
                message="No route",
                payload={
                    "start": list(start.as_tuple()),
                    "goal": list(goal.as_tuple()),
                    "safety_checked": safety_checked,
                    "reason": result.reason,
                    "expansions": result.expansions,
                },
            )
        return result

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _search(
        self,
        start: Coord,
        goal: Coord,
        safety_checked: bool,
        budget: int,
        bounds: Optional[Bounds],
    ) -> PathfindingResult:
        # Pin world answers for the duration of this call.
        safety = self._safety.with_world(CachedWorldQuery(self._world))
        safe_cache: Dict[Coord, bool] = {}

        def passable(coord: Coord) -> bool:
            if bounds is not None and not bounds.contains(coord):
                return False
            if not safety_checked:
                return True
            if not (self._limits.min_y <= coord.y <= self._limits.max_y):
                return False
            ok = safe_cache.get(coord)
            if ok is None:
                ok = safe_cache[coord] = safety.is_safe(coord)
            return ok

        counter = itertools.count()
        open_heap: List[_OpenEntry] = [_OpenEntry(heuristic(start, goal), next(counter), start)]
        closed: Set[Coord] = set()
        came_from: Dict[Coord, Coord] = {}
        g_score: Dict[Coord, float] = {start: 0.0}
        expansions = 0

        while open_heap:
            current = heapq.heappop(open_heap).coord

            # Stale duplicate of a coordinate that was already finalized.
            if current in closed:
                continue

            if current == goal:
                return PathfindingResult(
                    path=_reconstruct_path(came_from, current),
                    success=True,
                    cost=g_score[current],
                    expansions=expansions,
                )

            if expansions >= budget:
                return PathfindingResult(
                    path=[], success=False, reason=MAX_EXPANSIONS_EXHAUSTED, expansions=expansions
                )
            expansions += 1
            closed.add(current)

            current_g = g_score[current]
            for step in MOVE_OFFSETS:
                neighbor = current + step
                if neighbor in closed:
                    continue
                if not passable(neighbor):
                    continue

                tentative_g = current_g + move_cost(step)
                if neighbor not in g_score or tentative_g < g_score[neighbor]:
                    came_from[neighbor] = current
                    g_score[neighbor] = tentative_g
                    f_score = tentative_g + heuristic(neighbor, goal)
                    heapq.heappush(open_heap, _OpenEntry(f_score, next(counter), neighbor))

        return PathfindingResult(path=[], success=False, reason=NO_ROUTE, expansions=expansions)


def _reconstruct_path(came_from: Dict[Coord, Coord], current: Coord) -> List[Coord]:
    """Walk came_from back to the start, then reverse."""
    path: List[Coord] = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path

