# tests/test_world.py
"""
Unit tests for bot_core.world: BlockWorld, CachedWorldQuery, load_world_file.
"""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from bot_core.nav import Coord, SafetyChecker
from bot_core.testing.fakes import CountingWorld, flat_world
from bot_core.world import BlockInfo, BlockWorld, CachedWorldQuery, load_world_file


def _write_yaml(path: Path, text: str) -> None:
    path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")


def test_unknown_coordinate_is_empty_and_not_solid() -> None:
    world = BlockWorld()

    assert world.block_at(Coord(1, 2, 3)) is None
    assert not world.is_solid(Coord(1, 2, 3))


def test_add_block_replaces_and_reindexes() -> None:
    world = BlockWorld()
    world.set_block(0, 0, 0, "iron")
    world.set_block(0, 0, 0, "gold")

    assert world.block_at(Coord(0, 0, 0)).type == "gold"
    assert world.blocks_of_type("iron") == []
    assert len(world.blocks_of_type("gold")) == 1
    assert len(world) == 1


def test_remove_block() -> None:
    world = BlockWorld()
    world.set_block(0, 0, 0, "iron")

    removed = world.remove_block(Coord(0, 0, 0))

    assert removed is not None and removed.type == "iron"
    assert world.block_at(Coord(0, 0, 0)) is None
    assert world.blocks_of_type("iron") == []
    assert world.remove_block(Coord(0, 0, 0)) is None


def test_fill_is_inclusive_and_order_independent() -> None:
    world = BlockWorld()

    written = world.fill(Coord(2, 0, 2), Coord(0, 0, 0), "stone")

    assert written == 9
    assert world.is_solid(Coord(0, 0, 0))
    assert world.is_solid(Coord(2, 0, 2))


def test_find_nearest_block_prefers_closest() -> None:
    world = BlockWorld()
    world.set_block(10, 64, 0, "diamond")
    world.set_block(3, 64, 0, "diamond")

    nearest = world.find_nearest_block(Coord(0, 64, 0), "diamond")

    assert nearest is not None
    assert nearest.position == Coord(3, 64, 0)
    assert world.find_nearest_block(Coord(0, 64, 0), "emerald") is None


def test_find_nearest_block_tie_keeps_first_registered() -> None:
    world = BlockWorld()
    world.set_block(2, 0, 0, "iron")
    world.set_block(-2, 0, 0, "iron")

    assert world.find_nearest_block(Coord(0, 0, 0), "iron").position == Coord(2, 0, 0)


def test_find_nearest_block_skips_unsafe_positions() -> None:
    world = flat_world(20, 3)
    world.set_block(3, 64, 1, "diamond")
    world.set_block(12, 64, 1, "diamond")
    world.set_block(4, 64, 1, "lava", solid=False)

    nearest = world.find_nearest_block(Coord(0, 64, 1), "diamond", safety=SafetyChecker(world))

    assert nearest is not None
    assert nearest.position == Coord(12, 64, 1)


def test_cached_world_query_pins_first_answer() -> None:
    inner = CountingWorld()
    inner.inner.set_block(0, 0, 0, "stone")
    cached = CachedWorldQuery(inner)

    assert cached.is_solid(Coord(0, 0, 0))
    inner.inner.remove_block(Coord(0, 0, 0))

    assert cached.is_solid(Coord(0, 0, 0))
    assert cached.block_at(Coord(0, 0, 0)) == BlockInfo(Coord(0, 0, 0), "stone", True)
    assert inner.calls[Coord(0, 0, 0)] == 1
    assert cached.lookups == 1


def test_load_world_file(tmp_path: Path) -> None:
    path = tmp_path / "world.yaml"
    _write_yaml(
        path,
        """
        fills:
          - {from: [0, 63, 0], to: [3, 63, 3], type: stone}
        blocks:
          - {x: 1, y: 63, z: 1, type: lava, solid: false}
          - {x: 2, y: 64, z: 2, type: diamond}
        """,
    )

    world = load_world_file(path)

    assert len(world) == 17
    assert world.block_at(Coord(1, 63, 1)).type == "lava"
    assert not world.is_solid(Coord(1, 63, 1))
    assert world.is_solid(Coord(2, 64, 2))


def test_load_world_file_rejects_bad_entries(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    _write_yaml(
        path,
        """
        blocks:
          - {x: 1, y: 2.5, z: 0, type: stone}
        """,
    )

    with pytest.raises(ValueError):
        load_world_file(path)


def test_load_world_file_requires_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_world_file(path)

    with pytest.raises(FileNotFoundError):
        load_world_file(tmp_path / "missing.yaml")


def test_demo_world_loads() -> None:
    demo = Path(__file__).resolve().parents[1] / "config" / "worlds" / "demo.yaml"

    world = load_world_file(demo)

    assert world.find_nearest_block(Coord(0, 64, 0), "diamond") is not None
    assert world.block_at(Coord(15, 64, 15)).type == "lava"


def test_load_world_file_wraps_yaml_syntax_errors(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("blocks: [ {x: 1, y: 2\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_world_file(path)


@pytest.mark.parametrize("solid", ['"false"', '"no"', "0", "1"])
def test_load_world_file_requires_boolean_solid(tmp_path: Path, solid: str) -> None:
    path = tmp_path / "world.yaml"
    path.write_text(f"blocks:\n  - {{x: 0, y: 0, z: 0, type: lava, solid: {solid}}}\n", encoding="utf-8")

    with pytest.raises(ValueError, match="solid must be true or false"):
        load_world_file(path)


def test_load_world_file_fill_requires_boolean_solid(tmp_path: Path) -> None:
    path = tmp_path / "world.yaml"
    path.write_text('fills:\n  - {from: [0, 0, 0], to: [1, 0, 1], type: water, solid: "false"}\n', encoding="utf-8")

    with pytest.raises(ValueError):
        load_world_file(path)
