"""Simulation core: world model, action engine and tick driver."""

from gridbot.sim.backpack import BackPack
from gridbot.sim.coordinates import Coordinate, Direction
from gridbot.sim.energy import MAX_ENERGY_LEVEL, Energy
from gridbot.sim.environment import DayTime, EnvironmentalConditions, WeatherType
from gridbot.sim.events import (
    Event,
    EventKind,
    RunHeader,
    RunSummary,
    TickRecord,
)
from gridbot.sim.runner import Robot, Runnable, Runner
from gridbot.sim.score import ScoreCounter
from gridbot.sim.tile import NO_CONTENT, Content, ContentKind, Tile, TileType
from gridbot.sim.world import World, check_world
from gridbot.sim.world_generator import (
    DemoWorldGenerator,
    GeneratedWorld,
    JsonWorldGenerator,
    WorldGenerator,
)

__all__ = [
    "BackPack",
    "Content",
    "ContentKind",
    "Coordinate",
    "DayTime",
    "DemoWorldGenerator",
    "Direction",
    "Energy",
    "EnvironmentalConditions",
    "Event",
    "EventKind",
    "GeneratedWorld",
    "JsonWorldGenerator",
    "MAX_ENERGY_LEVEL",
    "NO_CONTENT",
    "Robot",
    "RunHeader",
    "RunSummary",
    "Runnable",
    "Runner",
    "ScoreCounter",
    "TickRecord",
    "Tile",
    "TileType",
    "WeatherType",
    "World",
    "WorldGenerator",
    "check_world",
]
