# src/cli/run_bot.py
"""
Run chat commands through MinecraftBot against a YAML block world.

    python -m cli.run_bot --world config/worlds/demo.yaml \
        "#mine diamond" "#waypoint ore" "#goto 0 64 0"

Commands run in order on one bot, sharing its position, inventory and the
store under `agent.data_dir`.

Exit codes: 0 every command succeeded, 1 at least one failed, 2 bad input
or config.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from agent.bot import CommandResult, MinecraftBot
from agent.logging_config import configure_logging
from agent.store import AgentStore
from bot_core.nav import Coord, coord_from_position
from bot_core.world import load_world_file
from env.loader import load_nav_config
from monitoring.bus import EventBus
from monitoring.logger import JsonFileLogger


log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_COMMAND_FAILED = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run bot commands (#mine, #goto, #waypoint, #farm) in a YAML block world."
    )
    parser.add_argument("commands", nargs="+", help="Commands, one per argument")
    parser.add_argument("--world", required=True, type=Path, help="World YAML file")
    parser.add_argument("--config", type=Path, default=None, help="navigation.yaml override")
    parser.add_argument(
        "--position",
        nargs=3,
        type=float,
        metavar=("X", "Y", "Z"),
        default=None,
        help="Player position; floored onto the block grid (default: config spawn)",
    )
    parser.add_argument("--data-dir", type=Path, default=None, help="Override agent.data_dir")
    parser.add_argument("--no-store", action="store_true", help="Run without persistence")
    parser.add_argument("--json", action="store_true", help="Emit results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def render_results(console: Console, results: List[CommandResult], position: Coord) -> None:
    table = Table(title=f"Commands (final position {position})")
    table.add_column("command")
    table.add_column("ok")
    table.add_column("error")
    table.add_column("message")
    for r in results:
        table.add_row(r.command, "yes" if r.success else "no", r.error or "", r.message)
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    console = Console()

    try:
        config = load_nav_config(args.config)
        world = load_world_file(args.world)
        position = None
        if args.position is not None:
            x, y, z = args.position
            position = coord_from_position({"x": x, "y": y, "z": z})
        store = None
        if not args.no_store:
            store = AgentStore(args.data_dir or config.agent.data_dir)
    except (OSError, KeyError, ValueError) as exc:
        console.print(f"[red]Cannot load inputs:[/red] {exc}")
        return EXIT_BAD_INPUT

    bus = EventBus()
    sink = JsonFileLogger(config.agent.event_log, bus) if config.agent.event_log else None

    bot = MinecraftBot(world, config=config, store=store, bus=bus, position=position)
    try:
        results = [bot.process_command(command) for command in args.commands]
    finally:
        if sink is not None:
            sink.close()

    if args.json:
        payload = {
            "position": list(bot.position.as_tuple()),
            "inventory": bot.inventory.as_dict(),
            "results": [r.to_dict() for r in results],
        }
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        render_results(console, results, bot.position)

    return EXIT_OK if all(r.success for r in results) else EXIT_COMMAND_FAILED


if __name__ == "__main__":
    sys.exit(main())
