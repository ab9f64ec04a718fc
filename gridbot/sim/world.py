"""World state, generation-time validation and map statistics."""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass, field

from gridbot.errors import (
    ContentNotAllowedOnTile,
    ContentValueIsHigherThanMax,
    TeleportIsTrueOnGeneration,
    WorldIsNotASquare,
)
from gridbot.sim.coordinates import Coordinate
from gridbot.sim.environment import EnvironmentalConditions
from gridbot.sim.score import ScoreCounter
from gridbot.sim.tile import Content, ContentKind, Tile, TileType


@dataclass
class World:
    world_map: list[list[Tile]]
    dimension: int
    discoverable: int
    environmental_conditions: EnvironmentalConditions
    score_counter: ScoreCounter
    discovered: set[Coordinate] = field(default_factory=set)
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def new(
        cls,
        world_map: list[list[Tile]],
        environmental_conditions: EnvironmentalConditions,
        max_score: float,
        score_table: dict[Content, float] | None = None,
        *,
        seed: int | None = None,
    ) -> World:
        dimension = len(world_map)
        return cls(
            world_map=world_map,
            dimension=dimension,
            discoverable=discovery_budget(dimension),
            environmental_conditions=environmental_conditions,
            score_counter=ScoreCounter(max_score, world_map, score_table),
            rng=random.Random(seed),
        )

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.dimension and 0 <= col < self.dimension

    def tile_at(self, coordinate: Coordinate) -> Tile:
        return self.world_map[coordinate.row][coordinate.col]

    def mark_discovered(self, row: int, col: int) -> None:
        self.discovered.add(Coordinate(row, col))


def discovery_budget(dimension: int) -> int:
    return (dimension * dimension // 10 + 1) * 3


def check_world(world_map: list[list[Tile]]) -> None:
    """Raise on the first rule the generated map breaks."""
    size = len(world_map)
    if any(len(row) != size for row in world_map):
        raise WorldIsNotASquare()
    for row_index, row in enumerate(world_map):
        for col_index, tile in enumerate(row):
            where = f"tile ({row_index}, {col_index})"
            if tile.teleport_active:
                raise TeleportIsTrueOnGeneration(where)
            content = tile.content
            if _generated_value(content) > content.world_generator_max():
                raise ContentValueIsHigherThanMax(f"{where}: {content}")
            if not tile.tile_type.properties.can_hold(content):
                raise ContentNotAllowedOnTile(
                    f"{where}: {tile.tile_type.value} cannot hold {content.kind.value}"
                )


def _generated_value(content: Content) -> int:
    if isinstance(content.amount, range):
        return content.amount.stop
    if isinstance(content.amount, int):
        return content.amount
    return 0


def get_tiletype_percentage(world_map: list[list[Tile]]) -> dict[TileType, float]:
    counts = Counter(tile.tile_type for row in world_map for tile in row)
    return _as_fractions(counts)


def get_content_percentage(world_map: list[list[Tile]]) -> dict[ContentKind, float]:
    counts = Counter(tile.content.kind for row in world_map for tile in row)
    return _as_fractions(counts)


def _as_fractions(counts: Counter) -> dict:
    total = sum(counts.values())
    if total == 0:
        return {}
    return {key: value / total for key, value in counts.items()}
