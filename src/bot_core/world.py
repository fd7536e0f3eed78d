# read-only block lookups consumed by navigation
# src/bot_core/world.py
"""
World query layer for the navigation core.

The pathfinder and safety checker only ever see the narrow WorldQuery
protocol ("what block is at C?"). Concrete worlds live behind it:

- BlockWorld: in-memory map of known blocks (tests, CLI, demo bot).
- CachedWorldQuery: per-search read-through memo, so that one search call
  always sees the same answer for the same coordinate.
- load_world_file: build a BlockWorld from a YAML description.

Unknown coordinates are simply "no block" (None / not solid). Nothing in
this module raises for a coordinate it has never heard of.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, TYPE_CHECKING

import yaml

from .nav.grid import Coord

if TYPE_CHECKING:
    from .nav.safety import SafetyChecker


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockInfo:
    """A single known block: where it is, what it is, whether it can be stood on."""

    position: Coord
    type: str
    solid: bool = True


class WorldQuery(Protocol):
    """Read-only block lookup capability."""

    def block_at(self, coord: Coord) -> Optional[BlockInfo]:
        ...

    def is_solid(self, coord: Coord) -> bool:
        ...


# ---------------------------------------------------------------------------
# In-memory world
# ---------------------------------------------------------------------------


class BlockWorld:
    """
    In-memory block map.

    Keeps two indexes:
      - position -> BlockInfo
      - block type -> positions, in registration order

    The second index drives find_nearest_block (e.g. "#mine diamond").
    """

    def __init__(self) -> None:
        self._blocks: Dict[Coord, BlockInfo] = {}
        self._by_type: Dict[str, List[Coord]] = {}

    def __len__(self) -> int:
        return len(self._blocks)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_block(self, block: BlockInfo) -> None:
        """Insert or replace the block at block.position."""
        previous = self._blocks.get(block.position)
        if previous is not None:
            self._unindex(previous)
        self._blocks[block.position] = block
        self._by_type.setdefault(block.type, []).append(block.position)

    def set_block(self, x: int, y: int, z: int, block_type: str, solid: bool = True) -> BlockInfo:
        block = BlockInfo(position=Coord(x, y, z), type=block_type, solid=solid)
        self.add_block(block)
        return block

    def remove_block(self, coord: Coord) -> Optional[BlockInfo]:
        block = self._blocks.pop(coord, None)
        if block is not None:
            self._unindex(block)
        return block

    def fill(self, minimum: Coord, maximum: Coord, block_type: str, solid: bool = True) -> int:
        """
        Fill an inclusive box with one block type.

        Returns the number of blocks written.
        """
        x0, x1 = sorted((minimum.x, maximum.x))
        y0, y1 = sorted((minimum.y, maximum.y))
        z0, z1 = sorted((minimum.z, maximum.z))
        count = 0
        for x in range(x0, x1 + 1):
            for y in range(y0, y1 + 1):
                for z in range(z0, z1 + 1):
                    self.set_block(x, y, z, block_type, solid)
                    count += 1
        return count

    def _unindex(self, block: BlockInfo) -> None:
        positions = self._by_type.get(block.type)
        if not positions:
            return
        positions.remove(block.position)
        if not positions:
            del self._by_type[block.type]

    # ------------------------------------------------------------------
    # WorldQuery
    # ------------------------------------------------------------------

    def block_at(self, coord: Coord) -> Optional[BlockInfo]:
        return self._blocks.get(coord)

    def is_solid(self, coord: Coord) -> bool:
        block = self._blocks.get(coord)
        return block is not None and block.solid

    # ------------------------------------------------------------------
    # Resource lookups
    # ------------------------------------------------------------------

    def blocks_of_type(self, block_type: str) -> List[BlockInfo]:
        return [self._blocks[pos] for pos in self._by_type.get(block_type, [])]

    def find_nearest_block(
        self,
        current: Coord,
        block_type: str,
        safety: Optional["SafetyChecker"] = None,
    ) -> Optional[BlockInfo]:
        """
        Nearest known block of `block_type` by straight-line distance.

        If `safety` is given, blocks standing in unsafe positions are skipped.
        Equal distances keep the block registered first.
        """
        nearest: Optional[BlockInfo] = None
        best = float("inf")
        for block in self.blocks_of_type(block_type):
            distance = current.distance_to(block.position)
            if distance >= best:
                continue
            if safety is not None and not safety.is_safe(block.position):
                continue
            best = distance
            nearest = block
        return nearest


# ---------------------------------------------------------------------------
# Per-search memo
# ---------------------------------------------------------------------------


class CachedWorldQuery:
    """
    Read-through memo over another WorldQuery.

    The first answer for a coordinate is pinned for the lifetime of this
    object. Create one per search call and throw it away afterwards; do not
    share instances across calls or threads.
    """

    def __init__(self, inner: WorldQuery) -> None:
        self._inner = inner
        self._cache: Dict[Coord, Optional[BlockInfo]] = {}

    @property
    def lookups(self) -> int:
        """Number of distinct coordinates fetched from the inner world."""
        return len(self._cache)

    def block_at(self, coord: Coord) -> Optional[BlockInfo]:
        try:
            return self._cache[coord]
        except KeyError:
            block = self._inner.block_at(coord)
            self._cache[coord] = block
            return block

    def is_solid(self, coord: Coord) -> bool:
        block = self.block_at(coord)
        return block is not None and block.solid


# ---------------------------------------------------------------------------
# YAML world files
# ---------------------------------------------------------------------------


def _coord_field(raw: Any, where: str) -> Coord:
    try:
        return Coord.of(raw)
    except ValueError as exc:
        raise ValueError(f"{where}: invalid coordinate {raw!r}") from exc


def _solid_field(entry: Dict[str, Any], where: str) -> bool:
    solid = entry.get("solid", True)
    if not isinstance(solid, bool):
        raise ValueError(f"{where}: solid must be true or false, got {solid!r}")
    return solid


def load_world_file(path: Path) -> BlockWorld:
    """
    Build a BlockWorld from a YAML file.

    Expected shape:

        fills:
          - {from: [0, 63, 0], to: [15, 63, 15], type: stone}
        blocks:
          - {x: 10, y: 64, z: 15, type: diamond}
          - {x: 15, y: 64, z: 15, type: lava, solid: false}

    `solid` defaults to true. Fills are applied before single blocks, so a
    block entry can override part of a fill.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing world file: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")

    world = BlockWorld()

    for i, entry in enumerate(data.get("fills") or []):
        if not isinstance(entry, dict) or "type" not in entry:
            raise ValueError(f"{path}: fills[{i}] must be a mapping with a 'type'")
        world.fill(
            _coord_field(entry.get("from"), f"{path}: fills[{i}].from"),
            _coord_field(entry.get("to"), f"{path}: fills[{i}].to"),
            str(entry["type"]),
            _solid_field(entry, f"{path}: fills[{i}]"),
        )

    for i, entry in enumerate(data.get("blocks") or []):
        if not isinstance(entry, dict) or "type" not in entry:
            raise ValueError(f"{path}: blocks[{i}] must be a mapping with a 'type'")
        pos = _coord_field(
            [entry.get("x"), entry.get("y"), entry.get("z")],
            f"{path}: blocks[{i}]",
        )
        world.add_block(
            BlockInfo(position=pos, type=str(entry["type"]), solid=_solid_field(entry, f"{path}: blocks[{i}]"))
        )

    log.debug("Loaded %d blocks from %s", len(world), path)
    return world
