# path: src/agent/store.py
"""
File-backed persistence for the bot front end.

Three stores under one root directory:

- blocks.json              discovered blocks, keyed "x,y,z" (insert-or-replace)
- waypoints.json           named positions (insert-or-replace)
- mining_history.jsonl     one JSON object per mined block, append-only

The navigation core never touches these; MinecraftBot does.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from bot_core.nav import Coord
from bot_core.world import BlockInfo


log = logging.getLogger(__name__)


@dataclass
class MiningRecord:
    """One line of mining_history.jsonl."""

    block_type: str
    position: Coord
    timestamp: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "block_type": self.block_type,
            "x": self.position.x,
            "y": self.position.y,
            "z": self.position.z,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "MiningRecord":
        return cls(
            block_type=str(raw["block_type"]),
            position=Coord.of([raw["x"], raw["y"], raw["z"]]),
            timestamp=float(raw["timestamp"]),
        )


def _key(coord: Coord) -> str:
    return f"{coord.x},{coord.y},{coord.z}"


class AgentStore:
    """
    JSON/JSONL store rooted at a directory.

    Mapping files are rewritten whole on each save; they are small. The
    mining history is append-only.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.blocks_path = self.root / "blocks.json"
        self.waypoints_path = self.root / "waypoints.json"
        self.history_path = self.root / "mining_history.jsonl"

    # ------------------------------------------------------------------ #
    # JSON mapping helpers
    # ------------------------------------------------------------------ #

    def _read_mapping(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected JSON object in {path}, got {type(data)}")
        return data

    def _write_mapping(self, path: Path, data: Dict[str, Any]) -> None:
        tmp = path.with_suffix(path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2, sort_keys=True)
        tmp.replace(path)

    # ------------------------------------------------------------------ #
    # Blocks
    # ------------------------------------------------------------------ #

    def save_block(self, block: BlockInfo) -> None:
        data = self._read_mapping(self.blocks_path)
        data[_key(block.position)] = {"type": block.type, "solid": block.solid}
        self._write_mapping(self.blocks_path, data)

    def known_blocks(self, block_type: str) -> List[BlockInfo]:
        blocks: List[BlockInfo] = []
        for key, entry in self._read_mapping(self.blocks_path).items():
            if entry.get("type") != block_type:
                continue
            x, y, z = (int(part) for part in key.split(","))
            blocks.append(
                BlockInfo(position=Coord(x, y, z), type=block_type, solid=bool(entry.get("solid", True)))
            )
        return blocks

    # ------------------------------------------------------------------ #
    # Waypoints
    # ------------------------------------------------------------------ #

    def save_waypoint(self, name: str, coord: Coord) -> None:
        data = self._read_mapping(self.waypoints_path)
        data[name] = list(coord.as_tuple())
        self._write_mapping(self.waypoints_path, data)

    def get_waypoint(self, name: str) -> Optional[Coord]:
        raw = self._read_mapping(self.waypoints_path).get(name)
        if raw is None:
            return None
        return Coord.of(raw)

    def waypoints(self) -> Dict[str, Coord]:
        return {name: Coord.of(raw) for name, raw in self._read_mapping(self.waypoints_path).items()}

    # ------------------------------------------------------------------ #
    # Mining history
    # ------------------------------------------------------------------ #

    def record_mining(self, block_type: str, coord: Coord) -> MiningRecord:
        record = MiningRecord(block_type=block_type, position=coord, timestamp=time.time())
        line = json.dumps(record.to_dict(), ensure_ascii=False)
        with self.history_path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
        return record

    def mining_history(self) -> Iterator[MiningRecord]:
        """Yield mining records in file order, skipping unreadable lines."""
        if not self.history_path.exists():
            return
        with self.history_path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    record = MiningRecord.from_dict(json.loads(line))
                except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                    log.warning("Skipping malformed mining history line in %s", self.history_path)
                    continue
                yield record
