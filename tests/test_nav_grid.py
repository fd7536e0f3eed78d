# tests/test_nav_grid.py
"""
Unit tests for grid geometry: Coord, move offsets, costs, heuristic.
"""

from __future__ import annotations

import math

import pytest

from bot_core.nav import (
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


def test_coord_structural_equality_and_hashing() -> None:
    a = Coord(1, 2, 3)
    b = Coord.of((1, 2, 3))

    assert a == b
    assert hash(a) == hash(b)
    assert {a: "x"}[b] == "x"


def test_coord_is_immutable() -> None:
    c = Coord(0, 0, 0)
    with pytest.raises(AttributeError):
        c.x = 5  # type: ignore[misc]


def test_coord_of_accepts_integral_floats() -> None:
    assert Coord.of([1.0, 64.0, -3.0]) == Coord(1, 64, -3)


@pytest.mark.parametrize(
    "value",
    [
        (0, float("nan"), 0),
        (float("inf"), 0, 0),
        (0.5, 0, 0),
        (True, 0, 0),
        ("1", 2, 3),
        (1, 2),
        "123",
        None,
    ],
)
def test_coord_of_rejects_malformed_input(value: object) -> None:
    with pytest.raises(InvalidCoordinateError):
        Coord.of(value)


def test_invalid_coordinate_error_is_value_error() -> None:
    with pytest.raises(ValueError) as excinfo:
        Coord.of((0, float("nan"), 0))
    assert excinfo.value.code == "non_finite_component"
    assert excinfo.value.details["axis"] == "y"


def test_coord_from_position_floors() -> None:
    assert coord_from_position({"x": 1.7, "y": 64.0, "z": -0.5}) == Coord(1, 64, -1)


def test_move_offsets_are_the_ten_legal_steps() -> None:
    deltas = {(o.dx, o.dy, o.dz) for o in MOVE_OFFSETS}

    assert len(MOVE_OFFSETS) == 10
    assert deltas == {
        (1, 0, 0), (-1, 0, 0),
        (0, 1, 0), (0, -1, 0),
        (0, 0, 1), (0, 0, -1),
        (1, 1, 0), (-1, 1, 0),
        (0, 1, 1), (0, 1, -1),
    }


def test_no_horizontal_only_or_descending_diagonals() -> None:
    for o in MOVE_OFFSETS:
        if o.is_diagonal:
            assert o.dy == 1
            assert abs(o.dx) + abs(o.dz) == 1

    assert offset_between(Coord(0, 0, 0), Coord(1, 0, 1)) is None
    assert offset_between(Coord(0, 0, 0), Coord(1, -1, 0)) is None
    assert offset_between(Coord(0, 0, 0), Coord(1, 1, 1)) is None


def test_move_costs() -> None:
    assert move_cost(MoveOffset(1, 0, 0)) == 1.0
    assert move_cost(MoveOffset(0, 1, 1)) == 1.4
    assert DIAGONAL_MOVE_COST == 1.4
    assert DIAGONAL_MOVE_COST != math.sqrt(2)


def test_heuristic_is_euclidean() -> None:
    assert heuristic(Coord(0, 0, 0), Coord(3, 4, 0)) == 5.0
    assert heuristic(Coord(1, 1, 1), Coord(1, 1, 1)) == 0.0


def test_single_diagonal_route_costs_exactly_one_point_four() -> None:
    assert route_cost([Coord(0, 0, 0), Coord(1, 1, 0)]) == 1.4


def test_route_cost_rejects_illegal_step() -> None:
    with pytest.raises(InvalidCoordinateError):
        route_cost([Coord(0, 0, 0), Coord(1, 0, 1)])


def test_bounds_contains_is_inclusive() -> None:
    box = Bounds(Coord(0, 0, 0), Coord(4, 4, 4))

    assert box.contains(Coord(0, 0, 0))
    assert box.contains(Coord(4, 4, 4))
    assert not box.contains(Coord(5, 0, 0))

    with pytest.raises(ValueError):
        Bounds(Coord(1, 0, 0), Coord(0, 0, 0))
