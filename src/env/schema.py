# NavConfig and section dataclasses
# src/env/schema.py

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Tuple

from bot_core.nav import Coord, SafetyPolicy, SearchLimits
from bot_core.nav.safety import DEFAULT_HAZARD_BLOCKS, DEFAULT_SAFETY_RADIUS


@dataclass
class SafetySettings:
    """Hazard set and radius fed into SafetyPolicy."""
    hazard_blocks: FrozenSet[str] = DEFAULT_HAZARD_BLOCKS
    radius: int = DEFAULT_SAFETY_RADIUS


@dataclass
class SearchSettings:
    """Pathfinder limits; min_y/max_y apply to safety-checked searches only."""
    min_y: int = 0
    max_y: int = 256
    max_expansions: int = 200_000


@dataclass
class AgentSettings:
    """Front-end defaults for MinecraftBot."""
    spawn: Tuple[int, int, int] = (0, 64, 0)
    inventory_capacity: int = 36
    data_dir: Path = Path("data")           # blocks.json, waypoints.json, mining_history.jsonl
    event_log: Path | None = None           # JSONL monitoring sink, disabled when None


@dataclass
class NavConfig:
    """Resolved navigation configuration."""
    safety: SafetySettings = field(default_factory=SafetySettings)
    search: SearchSettings = field(default_factory=SearchSettings)
    agent: AgentSettings = field(default_factory=AgentSettings)

    def safety_policy(self) -> SafetyPolicy:
        return SafetyPolicy(hazard_blocks=self.safety.hazard_blocks, radius=self.safety.radius)

    def search_limits(self) -> SearchLimits:
        return SearchLimits(
            min_y=self.search.min_y,
            max_y=self.search.max_y,
            max_expansions=self.search.max_expansions,
        )

    def spawn_coord(self) -> Coord:
        return Coord.of(self.agent.spawn)
