# src/cli/navigate.py
"""
Offline route planner.

    python -m cli.navigate --world config/worlds/demo.yaml \
        --start 0 64 0 --goal 10 64 14 --safe

Exit codes: 0 route found, 1 no route, 2 bad input or config.
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

from agent.logging_config import configure_logging
from bot_core.nav import (
    Coord,
    InvalidCoordinateError,
    PathFinder,
    PathfindingResult,
    SafetyChecker,
    compress_route,
    offset_between,
)
from bot_core.world import load_world_file
from env.loader import load_nav_config
from monitoring.bus import EventBus
from monitoring.logger import JsonFileLogger


log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_ROUTE = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plan a route through a YAML block world."
    )
    parser.add_argument("--world", required=True, type=Path, help="World YAML file")
    parser.add_argument("--start", required=True, nargs=3, type=int, metavar=("X", "Y", "Z"))
    parser.add_argument("--goal", required=True, nargs=3, type=int, metavar=("X", "Y", "Z"))
    parser.add_argument("--safe", action="store_true", help="Only step on safe positions")
    parser.add_argument("--max-expansions", type=int, default=None, help="Override search budget")
    parser.add_argument("--config", type=Path, default=None, help="navigation.yaml override")
    parser.add_argument("--waypoints", action="store_true", help="Print direction changes only")
    parser.add_argument("--json", action="store_true", help="Emit the result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def render_route(console: Console, result: PathfindingResult, coords: List[Coord]) -> None:
    table = Table(title=f"Route: {len(result.path) - 1} moves, cost {result.cost:.1f}")
    table.add_column("#", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("z", justify="right")
    table.add_column("step")

    prev: Optional[Coord] = None
    for i, c in enumerate(coords):
        step = ""
        if prev is not None:
            offset = offset_between(prev, c)
            if offset is not None:
                step = "diagonal" if offset.is_diagonal else "axis"
        table.add_row(str(i), str(c.x), str(c.y), str(c.z), step)
        prev = c
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    console = Console()

    try:
        config = load_nav_config(args.config)
        world = load_world_file(args.world)
    except (FileNotFoundError, KeyError, ValueError) as exc:
        console.print(f"[red]Cannot load inputs:[/red] {exc}")
        return EXIT_BAD_INPUT

    bus = EventBus()
    sink = JsonFileLogger(config.agent.event_log, bus) if config.agent.event_log else None

    pathfinder = PathFinder(
        world,
        safety=SafetyChecker(world, config.safety_policy()),
        limits=config.search_limits(),
        bus=bus,
    )
    try:
        result = pathfinder.find_route(
            args.start,
            args.goal,
            safety_checked=args.safe,
            max_expansions=args.max_expansions,
        )
    except (InvalidCoordinateError, ValueError) as exc:
        console.print(f"[red]Invalid request:[/red] {exc}")
        return EXIT_BAD_INPUT
    finally:
        if sink is not None:
            sink.close()

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, sort_keys=True))
    elif result.success:
        coords = compress_route(result.path) if args.waypoints else result.path
        render_route(console, result, coords)
    else:
        console.print(f"[yellow]No route[/yellow] ({result.reason}, {result.expansions} expansions)")

    return EXIT_OK if result.success else EXIT_NO_ROUTE


if __name__ == "__main__":
    sys.exit(main())
