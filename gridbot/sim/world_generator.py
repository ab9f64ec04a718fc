"""World generation contract, JSON world documents and a seeded demo map."""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gridbot.sim.coordinates import Coordinate
from gridbot.sim.environment import EnvironmentalConditions, WeatherType
from gridbot.sim.tile import Content, ContentKind, Tile, TileType


@dataclass
class GeneratedWorld:
    world_map: list[list[Tile]]
    spawn: Coordinate
    environmental_conditions: EnvironmentalConditions
    max_score: float
    score_table: dict[Content, float] | None = None


class WorldGenerator(Protocol):
    def gen(self) -> GeneratedWorld:
        """Return a fresh map, spawn point and environment."""


class ContentModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: ContentKind = ContentKind.NONE
    amount: int | tuple[int, int] | None = None

    @model_validator(mode="after")
    def validate_amount(self) -> "ContentModel":
        self.to_content()
        return self

    def to_content(self) -> Content:
        amount = self.amount
        if isinstance(amount, tuple):
            amount = range(*amount)
        return Content(self.kind, amount)


class TileModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tile_type: TileType
    content: ContentModel = Field(default_factory=ContentModel)
    elevation: int = Field(default=0, ge=0)
    teleport_active: bool = False

    def to_tile(self) -> Tile:
        return Tile(
            tile_type=self.tile_type,
            content=self.content.to_content(),
            elevation=self.elevation,
            teleport_active=self.teleport_active,
        )


class EnvironmentModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    forecast: list[WeatherType] = Field(default_factory=lambda: [WeatherType.SUNNY])
    time_progression_minutes: int = Field(default=10, ge=0, le=255)
    starting_hour: int = Field(default=12, ge=0)


class WorldDocument(BaseModel):
    """On-disk world description consumed by `JsonWorldGenerator`."""

    model_config = ConfigDict(extra="forbid")

    tiles: list[list[TileModel]]
    spawn: tuple[int, int]
    environment: EnvironmentModel = Field(default_factory=EnvironmentModel)
    max_score: float = Field(default=100.0, gt=0)
    score_table: dict[ContentKind, float] | None = None

    @model_validator(mode="after")
    def validate_layout(self) -> "WorldDocument":
        if not self.tiles or not self.tiles[0]:
            raise ValueError("tiles must not be empty")
        row, col = self.spawn
        if not (0 <= row < len(self.tiles) and 0 <= col < len(self.tiles[row])):
            raise ValueError("spawn must be inside the map")
        return self

    def to_generated(self) -> GeneratedWorld:
        environment = EnvironmentalConditions.new(
            self.environment.forecast,
            self.environment.time_progression_minutes,
            self.environment.starting_hour,
        )
        score_table = None
        if self.score_table is not None:
            score_table = {
                Content(kind): weight for kind, weight in self.score_table.items()
            }
        return GeneratedWorld(
            world_map=[[tile.to_tile() for tile in row] for row in self.tiles],
            spawn=Coordinate(*self.spawn),
            environmental_conditions=environment,
            max_score=self.max_score,
            score_table=score_table,
        )

    @classmethod
    def from_generated(cls, generated: GeneratedWorld) -> "WorldDocument":
        conditions = generated.environmental_conditions
        score_table = None
        if generated.score_table is not None:
            score_table = {
                content.kind: weight
                for content, weight in generated.score_table.items()
            }
        return cls(
            tiles=[
                [
                    TileModel(
                        tile_type=tile.tile_type,
                        content=ContentModel.model_validate(tile.content.to_dict()),
                        elevation=tile.elevation,
                        teleport_active=tile.teleport_active,
                    )
                    for tile in row
                ]
                for row in generated.world_map
            ],
            spawn=generated.spawn.as_tuple(),
            environment=EnvironmentModel(
                forecast=list(conditions.weather_forecast),
                time_progression_minutes=conditions.time_progression_minutes,
                starting_hour=conditions.hour,
            ),
            max_score=generated.max_score,
            score_table=score_table,
        )


class JsonWorldGenerator:
    def __init__(self, path: Path) -> None:
        self._path = path

    def gen(self) -> GeneratedWorld:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise FileNotFoundError(f"Missing world file: {self._path}") from exc
        return WorldDocument.model_validate_json(text).to_generated()


def write_world_document(path: Path, generated: GeneratedWorld) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    document = WorldDocument.from_generated(generated)
    path.write_text(document.model_dump_json(indent=2), encoding="utf-8")


class DemoWorldGenerator:
    """Seeded square map: grassland with scattered resources and stations."""

    def __init__(
        self,
        size: int = 20,
        *,
        seed: int | None = None,
        max_score: float = 100.0,
        forecast: list[WeatherType] | None = None,
        starting_hour: int = 12,
    ) -> None:
        if size < 5:
            raise ValueError("demo worlds need a size of at least 5")
        self._size = size
        self._rng = random.Random(seed)
        self._max_score = max_score
        self._forecast = forecast or [
            WeatherType.SUNNY,
            WeatherType.RAINY,
            WeatherType.FOGGY,
        ]
        self._starting_hour = starting_hour

    def gen(self) -> GeneratedWorld:
        rng = self._rng
        size = self._size
        world_map = [
            [Tile(tile_type=TileType.GRASS) for _ in range(size)] for _ in range(size)
        ]
        center = size // 2

        for row in range(size):
            for col in range(size):
                if (row, col) == (center, center):
                    continue
                world_map[row][col] = self._random_tile(rng)

        for row, col in self._free_cells(rng, world_map, center, 2):
            world_map[row][col] = Tile(tile_type=TileType.TELEPORT)
        stations = [
            (TileType.STREET, Content(ContentKind.BANK, range(0, 10))),
            (TileType.STREET, Content(ContentKind.BIN, range(0, 6))),
            (TileType.SAND, Content(ContentKind.CRATE, range(0, 8))),
            (TileType.STREET, Content(ContentKind.MARKET, 3)),
        ]
        for (row, col), (tile_type, station) in zip(
            self._free_cells(rng, world_map, center, len(stations)), stations
        ):
            world_map[row][col] = Tile(tile_type=tile_type, content=station)

        environment = EnvironmentalConditions.new(
            self._forecast, 15, self._starting_hour
        )
        return GeneratedWorld(
            world_map=world_map,
            spawn=Coordinate(center, center),
            environmental_conditions=environment,
            max_score=self._max_score,
        )

    @staticmethod
    def _random_tile(rng: random.Random) -> Tile:
        roll = rng.random()
        if roll < 0.08:
            return Tile(
                tile_type=TileType.SHALLOW_WATER,
                content=Content(ContentKind.FISH, rng.randint(0, 3)),
            )
        if roll < 0.11:
            return Tile(tile_type=TileType.DEEP_WATER)
        if roll < 0.2:
            return Tile(
                tile_type=TileType.HILL,
                content=Content(ContentKind.TREE, rng.randint(1, 5)),
                elevation=rng.randint(1, 3),
            )
        if roll < 0.24:
            return Tile(tile_type=TileType.MOUNTAIN, elevation=rng.randint(3, 5))
        if roll < 0.3:
            return Tile(
                tile_type=TileType.SAND,
                content=Content(ContentKind.GARBAGE, rng.randint(1, 3)),
            )
        if roll < 0.42:
            return Tile(
                tile_type=TileType.GRASS,
                content=Content(ContentKind.ROCK, rng.randint(1, 4)),
            )
        if roll < 0.46:
            return Tile(
                tile_type=TileType.GRASS,
                content=Content(ContentKind.COIN, rng.randint(1, 10)),
            )
        if roll < 0.48:
            return Tile(tile_type=TileType.GRASS, content=Content(ContentKind.FIRE))
        if roll < 0.5:
            return Tile(tile_type=TileType.LAVA)
        return Tile(tile_type=TileType.GRASS)

    @staticmethod
    def _free_cells(
        rng: random.Random, world_map: list[list[Tile]], center: int, count: int
    ) -> list[tuple[int, int]]:
        size = len(world_map)
        candidates = [
            (row, col)
            for row in range(size)
            for col in range(size)
            if (row, col) != (center, center)
            and world_map[row][col].tile_type == TileType.GRASS
            and world_map[row][col].content.is_none
        ]
        rng.shuffle(candidates)
        return candidates[:count]


class FixedWorldGenerator:
    """Hands out a world generated ahead of time, e.g. to save it first."""

    def __init__(self, generated: GeneratedWorld) -> None:
        self._generated = generated

    def gen(self) -> GeneratedWorld:
        return self._generated
