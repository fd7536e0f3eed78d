# src/bot_core/nav/__init__.py
"""
Navigation subsystem.

Provides:
- Coord, MOVE_OFFSETS, move_cost, heuristic: grid geometry
- SafetyChecker / SafetyPolicy: hazard + footing predicate
- PathFinder: A* route search (unconstrained or safety-checked)
- route_to_actions / compress_route: routes -> movement steps
"""

from __future__ import annotations

from .grid import (
    AXIS_MOVE_COST,
    DIAGONAL_MOVE_COST,
    MOVE_OFFSETS,
    Bounds,
    Coord,
    InvalidCoordinateError,
    MoveOffset,
    coord_from_position,
    heuristic,
    move_cost,
    offset_between,
    route_cost,
)
from .safety import SafetyChecker, SafetyPolicy
from .pathfinder import (
    MAX_EXPANSIONS_EXHAUSTED,
    NO_ROUTE,
    PathFinder,
    PathfindingResult,
    SearchLimits,
)
from .mover import Action, compress_route, route_to_actions

__all__ = [
    "AXIS_MOVE_COST",
    "DIAGONAL_MOVE_COST",
    "MOVE_OFFSETS",
    "Bounds",
    "Coord",
    "InvalidCoordinateError",
    "MoveOffset",
    "coord_from_position",
    "heuristic",
    "move_cost",
    "offset_between",
    "route_cost",
    "SafetyChecker",
    "SafetyPolicy",
    "MAX_EXPANSIONS_EXHAUSTED",
    "NO_ROUTE",
    "PathFinder",
    "PathfindingResult",
    "SearchLimits",
    "Action",
    "compress_route",
    "route_to_actions",
]
