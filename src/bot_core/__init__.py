# bot_core package
# src/bot_core/__init__.py
"""
Navigation core for the block-world agent.

Exports:
    - PathFinder / PathfindingResult: A* route search
    - SafetyChecker / SafetyPolicy: stepping-point predicate
    - Coord: integer block coordinate
    - BlockInfo / BlockWorld / WorldQuery: world lookups consumed by the above
"""

from __future__ import annotations

# nav must load before world: world pulls Coord from nav.grid, and
# nav.safety pulls BlockInfo back from world.
from .nav import Coord, PathFinder, PathfindingResult, SafetyChecker, SafetyPolicy
from .world import BlockInfo, BlockWorld, CachedWorldQuery, WorldQuery, load_world_file

__all__ = [
    "Coord",
    "PathFinder",
    "PathfindingResult",
    "SafetyChecker",
    "SafetyPolicy",
    "BlockInfo",
    "BlockWorld",
    "CachedWorldQuery",
    "WorldQuery",
    "load_world_file",
]
