# block coordinates, legal move offsets, cost + heuristic
# src/bot_core/nav/grid.py
"""
Grid geometry for the navigation core.

This module does not know anything about blocks or hazards. It only:
- Defines the Coord value type (integer block coordinates).
- Defines the ten legal move offsets and their costs.
- Provides the distance heuristic used by the pathfinder.

Movement model:
- Six axis-aligned unit steps (cost 1.0).
- Four diagonals that combine one vertical step UP with one horizontal
  step (cost 1.4). There are no horizontal-only (x+z) diagonals and no
  three-axis diagonals.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple


AXIS_MOVE_COST = 1.0
# Literal constant, not sqrt(2). Route costs must stay reproducible.
DIAGONAL_MOVE_COST = 1.4


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


@dataclass
class InvalidCoordinateError(ValueError):
    """
    Raised when a caller hands the navigation core a malformed coordinate.

    Examples:
        - non-numeric or boolean components
        - NaN / infinite values
        - non-integral floats (64.5)
        - routes containing a step that is not a legal move
    """

    code: str
    details: dict[str, Any]

    def __str__(self) -> str:
        return f"InvalidCoordinateError(code={self.code!r}, details={self.details!r})"


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MoveOffset:
    """Single legal step delta."""

    dx: int
    dy: int
    dz: int

    @property
    def is_diagonal(self) -> bool:
        return (abs(self.dx) + abs(self.dy) + abs(self.dz)) > 1


@dataclass(frozen=True)
class Coord:
    """
    Integer block coordinate.

    Immutable; equality and hashing are structural, so Coords can be used
    directly as dict keys inside the search.
    """

    x: int
    y: int
    z: int

    @classmethod
    def of(cls, value: Any) -> "Coord":
        """
        Coerce a Coord or a 3-sequence of numbers into a Coord.

        Raises InvalidCoordinateError for anything that is not three finite,
        integral numbers.
        """
        if isinstance(value, Coord):
            return value

        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise InvalidCoordinateError(
                code="not_a_coordinate",
                details={"value": repr(value)},
            )
        if len(value) != 3:
            raise InvalidCoordinateError(
                code="wrong_arity",
                details={"value": repr(value), "length": len(value)},
            )

        x, y, z = (_component(v, axis) for v, axis in zip(value, "xyz"))
        return cls(x, y, z)

    def offset(self, dx: int, dy: int, dz: int) -> "Coord":
        return Coord(self.x + dx, self.y + dy, self.z + dz)

    def __add__(self, other: MoveOffset) -> "Coord":
        if not isinstance(other, MoveOffset):
            return NotImplemented
        return self.offset(other.dx, other.dy, other.dz)

    def below(self) -> "Coord":
        return Coord(self.x, self.y - 1, self.z)

    def distance_to(self, other: "Coord") -> float:
        """Straight-line (Euclidean) distance in 3D."""
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


def _component(value: Any, axis: str) -> int:
    # bool is an int subclass; (True, 0, 1) is almost certainly a bug upstream.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidCoordinateError(
            code="non_numeric_component",
            details={"axis": axis, "value": repr(value)},
        )
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidCoordinateError(
                code="non_finite_component",
                details={"axis": axis, "value": repr(value)},
            )
        if not value.is_integer():
            raise InvalidCoordinateError(
                code="non_integral_component",
                details={"axis": axis, "value": repr(value)},
            )
    return int(value)


def coord_from_position(position: Mapping[str, float]) -> Coord:
    """
    Floor a floating player position {"x", "y", "z"} onto the block grid.

    Missing axes default to 0.0. Non-finite values are rejected.
    """
    parts = []
    for axis in "xyz":
        value = position.get(axis, 0.0)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InvalidCoordinateError(
                code="bad_position",
                details={"axis": axis, "value": repr(value)},
            )
        parts.append(math.floor(value))
    return Coord(*parts)


# ---------------------------------------------------------------------------
# Movement model
# ---------------------------------------------------------------------------

MOVE_OFFSETS: Tuple[MoveOffset, ...] = (
    MoveOffset(1, 0, 0), MoveOffset(-1, 0, 0),   # x axis
    MoveOffset(0, 1, 0), MoveOffset(0, -1, 0),   # y axis
    MoveOffset(0, 0, 1), MoveOffset(0, 0, -1),   # z axis
    MoveOffset(1, 1, 0), MoveOffset(-1, 1, 0),   # climb along x
    MoveOffset(0, 1, 1), MoveOffset(0, 1, -1),   # climb along z
)

_OFFSETS_BY_DELTA = {(o.dx, o.dy, o.dz): o for o in MOVE_OFFSETS}


def move_cost(offset: MoveOffset) -> float:
    """Cost of a single step: 1.0 axis-aligned, 1.4 diagonal."""
    return DIAGONAL_MOVE_COST if offset.is_diagonal else AXIS_MOVE_COST


def heuristic(a: Coord, b: Coord) -> float:
    """
    Euclidean distance heuristic for A*.

    Note: a pure climb-diagonal covers sqrt(2) of distance for 1.4 of cost,
    so the estimate can exceed the true cost by ~1% per diagonal step.
    """
    return a.distance_to(b)


def offset_between(a: Coord, b: Coord) -> Optional[MoveOffset]:
    """Return the legal MoveOffset taking a to b, or None."""
    return _OFFSETS_BY_DELTA.get((b.x - a.x, b.y - a.y, b.z - a.z))


def route_cost(route: Iterable[Coord]) -> float:
    """
    Sum of per-step move costs along a route.

    Raises InvalidCoordinateError if two consecutive coordinates are not
    linked by a legal move.
    """
    total = 0.0
    prev: Optional[Coord] = None
    for index, coord in enumerate(route):
        if prev is not None:
            step = offset_between(prev, coord)
            if step is None:
                raise InvalidCoordinateError(
                    code="illegal_step",
                    details={"index": index, "from": str(prev), "to": str(coord)},
                )
            total += move_cost(step)
        prev = coord
    return total


@dataclass(frozen=True)
class Bounds:
    """
    Inclusive axis-aligned box used to bound a search.

    The world itself is unbounded; callers that need termination guarantees
    for unconstrained searches pass one of these to the pathfinder.
    """

    minimum: Coord
    maximum: Coord

    def __post_init__(self) -> None:
        lo, hi = self.minimum, self.maximum
        if lo.x > hi.x or lo.y > hi.y or lo.z > hi.z:
            raise ValueError(f"Bounds minimum {lo} exceeds maximum {hi}")

    def contains(self, coord: Coord) -> bool:
        lo, hi = self.minimum, self.maximum
        return (
            lo.x <= coord.x <= hi.x
            and lo.y <= coord.y <= hi.y
            and lo.z <= coord.z <= hi.z
        )
