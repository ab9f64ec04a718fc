"""Deterministic demo controller: gather loose resources and dispose of them."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from gridbot.errors import LibError
from gridbot.sim import interface
from gridbot.sim.coordinates import Coordinate, Direction
from gridbot.sim.runner import Robot
from gridbot.sim.tile import Content, ContentKind, Tile
from gridbot.sim.world import World
from gridbot.tools.known_map import plan_route

COLLECTABLE = frozenset(
    {
        ContentKind.ROCK,
        ContentKind.TREE,
        ContentKind.GARBAGE,
        ContentKind.COIN,
        ContentKind.FISH,
    }
)
# Energy kept aside so a long walk does not strand the robot.
ENERGY_RESERVE = 40


@dataclass
class CollectorRobot(Robot):
    seed: int | None = None
    rng: random.Random = field(init=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)

    def process_tick(self, world: World) -> None:
        view = interface.robot_view(self, world)
        try:
            if self._act_on_neighbours(world, view):
                return
            if not self.energy.has_enough_energy(ENERGY_RESERVE):
                return
            self._move(world, view)
        except LibError as exc:
            self.errors.append(f"{type(exc).__name__}: {exc}")

    def _act_on_neighbours(self, world: World, view: list[list[Tile | None]]) -> bool:
        for direction in Direction:
            d_row, d_col = direction.delta
            tile = view[1 + d_row][1 + d_col]
            if tile is None:
                continue
            placed = tile.content
            disposable = self._disposable_for(placed)
            if disposable is not None:
                interface.put(
                    self, world, disposable, self.backpack.get(disposable), direction
                )
                return True
            if placed.kind in COLLECTABLE and self.backpack.free_space() > 0:
                interface.destroy(self, world, direction)
                return True
        return False

    def _disposable_for(self, placed: Content) -> Content | None:
        if placed.kind == ContentKind.MARKET:
            if placed.amount < 1:
                return None
            for kind in (ContentKind.FISH, ContentKind.TREE, ContentKind.ROCK):
                if self.backpack.get(Content(kind)):
                    return Content(kind)
            return None
        if not placed.is_range or len(placed.amount) == 0:
            return None
        wanted = Content(placed.properties.disposable)
        if self.backpack.get(wanted):
            return wanted
        return None

    def _move(self, world: World, view: list[list[Tile | None]]) -> None:
        direction = self._next_step(world)
        if direction is None:
            direction = self._wander(view)
        if direction is not None:
            interface.go(self, world, direction)

    def _next_step(self, world: World) -> Direction | None:
        known = {
            coordinate.as_tuple(): tile
            for coordinate, tile in _known_tiles(interface.robot_map(world))
        }
        targets = [
            position
            for position, tile in known.items()
            if self._wants(tile) and tile.tile_type.properties.walk
        ]
        if not targets:
            return None
        legs = plan_route(known, self.coordinate.as_tuple(), targets)
        if not legs or len(legs[0]) < 2:
            return None
        return legs[0][0]

    def _wants(self, tile: Tile) -> bool:
        if tile.content.kind in COLLECTABLE:
            return self.backpack.free_space() > 0
        return self._disposable_for(tile.content) is not None

    def _wander(self, view: list[list[Tile | None]]) -> Direction | None:
        options = []
        for direction in Direction:
            d_row, d_col = direction.delta
            tile = view[1 + d_row][1 + d_col]
            if tile is not None and tile.tile_type.properties.walk:
                options.append(direction)
        if not options:
            return None
        return self.rng.choice(options)


def _known_tiles(
    known: list[list[Tile | None]],
) -> list[tuple[Coordinate, Tile]]:
    return [
        (Coordinate(row, col), tile)
        for row, line in enumerate(known)
        for col, tile in enumerate(line)
        if tile is not None
    ]
