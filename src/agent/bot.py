# path: src/agent/bot.py
"""
Chat-command front end for the navigation core.

MinecraftBot owns the agent's position, inventory and (optionally) a
persistent store, and turns commands into pathfinder calls:

    #mine <resource>        route to the nearest safe known block and mine it
    #goto <x> <y> <z>       safety-checked route to a coordinate
    #goto <waypoint>        safety-checked route to a saved waypoint
    #waypoint <name>        save the current position
    #farm <resource>        acknowledge a farming request

Commands never raise; every outcome is a CommandResult. A store that
cannot be read or written yields error "store_error".
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from bot_core.nav import Coord, InvalidCoordinateError, PathFinder, PathfindingResult, SafetyChecker
from bot_core.world import BlockWorld
from env.schema import NavConfig
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event

from .inventory import Inventory
from .store import AgentStore


log = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one processed command."""

    success: bool
    command: str
    message: str = ""
    error: Optional[str] = None
    route: Optional[PathfindingResult] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "command": self.command,
            "success": self.success,
            "message": self.message,
            "error": self.error,
            "route": self.route.to_dict() if self.route is not None else None,
            "details": dict(self.details),
        }


class MinecraftBot:
    def __init__(
        self,
        world: BlockWorld,
        *,
        config: Optional[NavConfig] = None,
        store: Optional[AgentStore] = None,
        bus: Optional[EventBus] = None,
        position: Optional[Coord] = None,
    ) -> None:
        self._config = config or NavConfig()
        self._world = world
        self._store = store
        self._bus = bus
        self._safety = SafetyChecker(world, self._config.safety_policy())
        self._pathfinder = PathFinder(
            world,
            safety=self._safety,
            limits=self._config.search_limits(),
            bus=bus,
        )
        self.inventory = Inventory(self._config.agent.inventory_capacity)
        self.position: Coord = position or self._config.spawn_coord()

        self._handlers: Dict[str, Callable[[List[str]], CommandResult]] = {
            "#mine": self._cmd_mine,
            "#goto": self._cmd_goto,
            "#waypoint": self._cmd_waypoint,
            "#farm": self._cmd_farm,
        }

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def process_command(self, command: str) -> CommandResult:
        """Parse and run one command string (case-insensitive)."""
        parts = command.lower().split()
        if not parts:
            return CommandResult(success=False, command=command, error="empty_command")

        handler = self._handlers.get(parts[0])
        if handler is None:
            log.info("Unknown command: %r", command)
            return CommandResult(success=False, command=command, error="unknown_command")

        try:
            result = handler(parts[1:])
        except (OSError, ValueError) as exc:
            log.warning("Store failure while running %r: %s", command, exc)
            result = CommandResult(success=False, command=command, error="store_error", message=str(exc))
        result.command = command

        log_event(
            bus=self._bus,
            module=__name__,
            event_type=EventType.COMMAND_EXECUTED,
            message=f"{parts[0]} {'ok' if result.success else 'failed'}",
            payload={
                "command": command,
                "success": result.success,
                "error": result.error,
                "position": list(self.position.as_tuple()),
            },
            correlation_id=uuid.uuid4().hex,
        )
        return result

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _cmd_mine(self, args: List[str]) -> CommandResult:
        if len(args) != 1:
            return CommandResult(success=False, command="", error="bad_arguments")
        resource = args[0]

        target = self._world.find_nearest_block(self.position, resource, safety=self._safety)
        if target is None:
            return CommandResult(success=False, command="", error="resource_not_found")

        route = self._pathfinder.find_path(self.position, target.position)
        if not route.success:
            return CommandResult(success=False, command="", error="no_route", route=route)

        if self._store is not None:
            self._store.save_block(target)

        if not self.inventory.add_item(resource, 1):
            return CommandResult(success=False, command="", error="inventory_full", route=route)

        self._world.remove_block(target.position)
        if self._store is not None:
            self._store.record_mining(resource, target.position)

        log.info("Mining %s at %s", resource, target.position)
        log_event(
            bus=self._bus,
            module=__name__,
            event_type=EventType.BLOCK_MINED,
            message=f"Mined {resource}",
            payload={"block_type": resource, "position": list(target.position.as_tuple())},
        )
        return CommandResult(
            success=True,
            command="",
            message=f"Mining {resource} at {target.position}",
            route=route,
            details={"target": list(target.position.as_tuple())},
        )

    def _cmd_goto(self, args: List[str]) -> CommandResult:
        if len(args) == 3:
            try:
                target = Coord.of([int(a) for a in args])
            except (ValueError, InvalidCoordinateError):
                return CommandResult(success=False, command="", error="bad_arguments")
        elif len(args) == 1:
            if self._store is None:
                return CommandResult(success=False, command="", error="no_store")
            waypoint = self._store.get_waypoint(args[0])
            if waypoint is None:
                return CommandResult(success=False, command="", error="unknown_waypoint")
            target = waypoint
        else:
            return CommandResult(success=False, command="", error="bad_arguments")

        route = self._pathfinder.find_safe_path(self.position, target)
        if not route.success:
            return CommandResult(success=False, command="", error=route.reason, route=route)

        log.info("Moving to %s (%d steps)", target, len(route.path) - 1)
        self.position = target
        return CommandResult(success=True, command="", message=f"Moving to {target}", route=route)

    def _cmd_waypoint(self, args: List[str]) -> CommandResult:
        if len(args) != 1:
            return CommandResult(success=False, command="", error="bad_arguments")
        if self._store is None:
            return CommandResult(success=False, command="", error="no_store")
        self._store.save_waypoint(args[0], self.position)
        return CommandResult(success=True, command="", message=f"Saved waypoint {args[0]} at {self.position}")

    def _cmd_farm(self, args: List[str]) -> CommandResult:
        if len(args) != 1:
            return CommandResult(success=False, command="", error="bad_arguments")
        log.info("Starting automated farming of %s", args[0])
        return CommandResult(success=True, command="", message=f"Starting automated farming of {args[0]}")
