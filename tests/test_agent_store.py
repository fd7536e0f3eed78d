# path: tests/test_agent_store.py

from __future__ import annotations

import json
from pathlib import Path

from agent.store import AgentStore
from bot_core.nav import Coord
from bot_core.world import BlockInfo


def test_waypoints_insert_or_replace(tmp_path: Path) -> None:
    store = AgentStore(tmp_path)

    store.save_waypoint("home", Coord(0, 64, 0))
    store.save_waypoint("home", Coord(5, 70, -2))
    store.save_waypoint("mine", Coord(10, 12, 15))

    assert store.get_waypoint("home") == Coord(5, 70, -2)
    assert store.get_waypoint("missing") is None
    assert store.waypoints() == {"home": Coord(5, 70, -2), "mine": Coord(10, 12, 15)}


def test_waypoints_survive_reopen(tmp_path: Path) -> None:
    AgentStore(tmp_path).save_waypoint("home", Coord(1, 2, 3))

    assert AgentStore(tmp_path).get_waypoint("home") == Coord(1, 2, 3)


def test_known_blocks_filters_by_type(tmp_path: Path) -> None:
    store = AgentStore(tmp_path)
    store.save_block(BlockInfo(Coord(10, 12, 15), "diamond"))
    store.save_block(BlockInfo(Coord(5, 40, 8), "iron"))
    store.save_block(BlockInfo(Coord(5, 40, 8), "gold"))

    assert [b.position for b in store.known_blocks("diamond")] == [Coord(10, 12, 15)]
    assert store.known_blocks("iron") == []
    assert [b.type for b in store.known_blocks("gold")] == ["gold"]


def test_mining_history_appends_and_skips_garbage(tmp_path: Path) -> None:
    store = AgentStore(tmp_path)
    store.record_mining("diamond", Coord(10, 12, 15))

    with store.history_path.open("a", encoding="utf-8") as f:
        f.write("not json\n")
        f.write(json.dumps({"block_type": "iron"}) + "\n")
        f.write("\n")

    store.record_mining("iron", Coord(5, 40, 8))

    records = list(store.mining_history())
    assert [(r.block_type, r.position) for r in records] == [
        ("diamond", Coord(10, 12, 15)),
        ("iron", Coord(5, 40, 8)),
    ]
    assert all(r.timestamp > 0 for r in records)


def test_empty_store_reads_cleanly(tmp_path: Path) -> None:
    store = AgentStore(tmp_path / "fresh")

    assert store.known_blocks("diamond") == []
    assert store.waypoints() == {}
    assert list(store.mining_history()) == []
