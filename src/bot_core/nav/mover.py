# convert routes into movement actions
# src/bot_core/nav/mover.py
"""
Mover: turn a PathfindingResult into something an executor can follow.

Only owns:
- route -> sequence of move_to Actions
- route -> compressed waypoint list (drop collinear intermediate steps)

It does NOT move anything itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from .grid import Coord, offset_between
from .pathfinder import PathfindingResult


@dataclass
class Action:
    """Abstract action handed to whatever executes movement."""

    type: str                   # e.g. "move_to"
    params: Dict[str, Any]


def route_to_actions(
    path_result: PathfindingResult,
    *,
    radius: float = 0.5,
) -> List[Action]:
    """
    Convert a PathfindingResult into a list of move_to Actions.

    Each coordinate becomes one move_to with integer x, y, z and an
    arrival radius. A failed result yields no actions.
    """
    if not path_result.success or not path_result.path:
        return []

    return [
        Action(
            type="move_to",
            params={"x": c.x, "y": c.y, "z": c.z, "radius": float(radius)},
        )
        for c in path_result.path
    ]


def compress_route(route: Sequence[Coord]) -> List[Coord]:
    """
    Keep the endpoints plus every coordinate where the step direction changes.

    An illegal step is treated as a direction change, not an error.
    """
    if len(route) <= 2:
        return list(route)

    waypoints: List[Coord] = [route[0]]
    for prev, here, nxt in zip(route, route[1:], route[2:]):
        if offset_between(prev, here) != offset_between(here, nxt):
            waypoints.append(here)
    waypoints.append(route[-1])
    return waypoints
