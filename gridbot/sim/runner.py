"""Robot contract and the tick driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from gridbot.errors import OutOfBounds
from gridbot.sim import events
from gridbot.sim.backpack import BackPack
from gridbot.sim.coordinates import Coordinate
from gridbot.sim.energy import Energy
from gridbot.sim.events import Event
from gridbot.sim.tile import TileType
from gridbot.sim.world import World, check_world
from gridbot.sim.world_generator import WorldGenerator

BACKPACK_SIZE = 20
TICK_RECHARGE = 10


class Runnable(Protocol):
    energy: Energy
    coordinate: Coordinate
    backpack: BackPack

    def process_tick(self, world: World) -> None:
        """Decide and perform this tick's actions."""

    def handle_event(self, event: Event) -> None:
        """Receive a domain event emitted by the engine or the runner."""


@dataclass
class Robot:
    """Robot state owned by the core; controllers subclass it."""

    energy: Energy = field(default_factory=Energy)
    coordinate: Coordinate = Coordinate(0, 0)
    backpack: BackPack = field(default_factory=BackPack)
    events: list[Event] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def process_tick(self, world: World) -> None:
        return None

    def handle_event(self, event: Event) -> None:
        self.events.append(event)

    def drain_events(self) -> list[Event]:
        drained, self.events = self.events, []
        return drained

    def drain_errors(self) -> list[str]:
        """Failed actions the controller recovered from since the last drain."""
        drained, self.errors = self.errors, []
        return drained


class Runner:
    def __init__(
        self,
        robot: Runnable,
        generator: WorldGenerator,
        *,
        seed: int | None = None,
    ) -> None:
        generated = generator.gen()
        check_world(generated.world_map)
        self.world = World.new(
            generated.world_map,
            generated.environmental_conditions,
            generated.max_score,
            generated.score_table,
            seed=seed,
        )
        spawn = generated.spawn
        if not self.world.in_bounds(spawn.row, spawn.col):
            raise OutOfBounds(f"spawn {spawn} is outside the map")
        self.robot = robot
        robot.coordinate = spawn
        robot.backpack = BackPack(size=BACKPACK_SIZE)
        spawn_tile = self.world.tile_at(spawn)
        if spawn_tile.tile_type == TileType.TELEPORT:
            spawn_tile.teleport_active = True
        robot.handle_event(events.ready())

    def game_tick(self) -> None:
        conditions = self.world.environmental_conditions
        if conditions.tick():
            self.robot.handle_event(events.day_changed(conditions))
        else:
            self.robot.handle_event(events.time_changed(conditions))
        self.robot.process_tick(self.world)
        self.robot.energy.recharge(TICK_RECHARGE)
        self.robot.handle_event(events.energy_recharged(TICK_RECHARGE))

    def terminate(self) -> None:
        self.robot.handle_event(events.terminated())
