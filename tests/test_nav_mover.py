# tests/test_nav_mover.py
"""
Tests for bot_core.nav.mover: route -> actions, route compression.
"""

from __future__ import annotations

from bot_core.nav import Coord, PathFinder, PathfindingResult, compress_route, route_to_actions
from bot_core.testing.fakes import flat_world


def test_route_to_actions_one_move_per_coordinate() -> None:
    result = PathFinder(flat_world(4, 1)).find_safe_path(Coord(0, 64, 0), Coord(2, 64, 0))

    actions = route_to_actions(result, radius=0.25)

    assert [a.type for a in actions] == ["move_to"] * 3
    assert [(a.params["x"], a.params["y"], a.params["z"]) for a in actions] == [
        (0, 64, 0),
        (1, 64, 0),
        (2, 64, 0),
    ]
    assert all(a.params["radius"] == 0.25 for a in actions)


def test_failed_result_yields_no_actions() -> None:
    failed = PathfindingResult(path=[], success=False, reason="no_route")

    assert route_to_actions(failed) == []


def test_compress_route_keeps_turns_and_endpoints() -> None:
    route = [
        Coord(0, 0, 0),
        Coord(1, 0, 0),
        Coord(2, 0, 0),
        Coord(3, 1, 0),
        Coord(3, 1, 1),
        Coord(3, 1, 2),
    ]

    assert compress_route(route) == [Coord(0, 0, 0), Coord(2, 0, 0), Coord(3, 1, 0), Coord(3, 1, 2)]


def test_compress_route_short_routes_unchanged() -> None:
    assert compress_route([]) == []
    assert compress_route([Coord(0, 0, 0)]) == [Coord(0, 0, 0)]
    assert compress_route([Coord(0, 0, 0), Coord(5, 5, 5)]) == [Coord(0, 0, 0), Coord(5, 5, 5)]


def test_compress_route_straight_line() -> None:
    route = [Coord(0, 0, z) for z in range(6)]

    assert compress_route(route) == [Coord(0, 0, 0), Coord(0, 0, 5)]
