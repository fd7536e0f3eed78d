from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .schema import AgentSettings, NavConfig, SafetySettings, SearchSettings


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_ROOT / "navigation.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from disk."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    raw = cfg.get(name) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"navigation.yaml section '{name}' must be a mapping.")
    return raw


def _int(raw: Dict[str, Any], key: str, default: int) -> int:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected integer for '{key}', got {value!r}")
    return value


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_nav_config(path: Optional[Path] = None) -> NavConfig:
    """Main entry point: read navigation.yaml (or `path`) into a NavConfig."""
    cfg_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    cfg = _load_yaml(cfg_path)

    # Safety section
    safety_raw = _section(cfg, "safety")
    defaults = SafetySettings()
    hazards = safety_raw.get("hazard_blocks", sorted(defaults.hazard_blocks))
    if not isinstance(hazards, list) or not all(isinstance(h, str) for h in hazards):
        raise ValueError("safety.hazard_blocks must be a list of block type names.")
    safety = SafetySettings(
        hazard_blocks=frozenset(hazards),
        radius=_int(safety_raw, "radius", defaults.radius),
    )

    # Search section
    search_raw = _section(cfg, "search")
    search_defaults = SearchSettings()
    search = SearchSettings(
        min_y=_int(search_raw, "min_y", search_defaults.min_y),
        max_y=_int(search_raw, "max_y", search_defaults.max_y),
        max_expansions=_int(search_raw, "max_expansions", search_defaults.max_expansions),
    )

    # Agent section; relative paths resolve against the config file.
    agent_raw = _section(cfg, "agent")
    agent_defaults = AgentSettings()
    spawn = agent_raw.get("spawn", list(agent_defaults.spawn))
    if not isinstance(spawn, list) or len(spawn) != 3:
        raise ValueError(f"agent.spawn must be a list of three integers, got {spawn!r}")
    data_dir = Path(agent_raw.get("data_dir", str(agent_defaults.data_dir)))
    if not data_dir.is_absolute():
        data_dir = cfg_path.parent / data_dir
    event_log_raw = agent_raw.get("event_log")
    event_log: Optional[Path] = None
    if event_log_raw:
        event_log = Path(event_log_raw)
        if not event_log.is_absolute():
            event_log = cfg_path.parent / event_log
    agent = AgentSettings(
        spawn=(spawn[0], spawn[1], spawn[2]),
        inventory_capacity=_int(agent_raw, "inventory_capacity", agent_defaults.inventory_capacity),
        data_dir=data_dir,
        event_log=event_log,
    )

    nav_config = NavConfig(safety=safety, search=search, agent=agent)

    # perform basic validation before returning
    _validate_config(nav_config)
    return nav_config


def _validate_config(cfg: NavConfig) -> None:
    """Sanity checks that the dataclasses themselves don't enforce."""
    if cfg.safety.radius < 0:
        raise ValueError(f"safety.radius must be >= 0, got {cfg.safety.radius}")
    if cfg.search.min_y > cfg.search.max_y:
        raise ValueError(
            f"search.min_y ({cfg.search.min_y}) must be <= search.max_y ({cfg.search.max_y})"
        )
    if cfg.search.max_expansions <= 0:
        raise ValueError("search.max_expansions must be positive.")
    if cfg.agent.inventory_capacity < 0:
        raise ValueError("agent.inventory_capacity must be >= 0.")

    # spawn must be a real block coordinate
    cfg.spawn_coord()
