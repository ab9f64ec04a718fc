"""Domain events delivered to a robot's event sink."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from gridbot.sim.coordinates import Coordinate
from gridbot.sim.tile import Content, Tile

if TYPE_CHECKING:
    from gridbot.sim.environment import EnvironmentalConditions


class EventKind(str, Enum):
    READY = "ready"
    TERMINATED = "terminated"
    TIME_CHANGED = "time_changed"
    DAY_CHANGED = "day_changed"
    ENERGY_RECHARGED = "energy_recharged"
    ENERGY_CONSUMED = "energy_consumed"
    MOVED = "moved"
    TILE_CONTENT_UPDATED = "tile_content_updated"
    ADDED_TO_BACKPACK = "added_to_backpack"
    REMOVED_FROM_BACKPACK = "removed_from_backpack"


class Event(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: EventKind
    payload: dict[str, Any] = Field(default_factory=dict)


def ready() -> Event:
    return Event(kind=EventKind.READY)


def terminated() -> Event:
    return Event(kind=EventKind.TERMINATED)


def time_changed(conditions: EnvironmentalConditions) -> Event:
    return Event(kind=EventKind.TIME_CHANGED, payload=conditions.to_dict())


def day_changed(conditions: EnvironmentalConditions) -> Event:
    return Event(kind=EventKind.DAY_CHANGED, payload=conditions.to_dict())


def energy_recharged(amount: int) -> Event:
    return Event(kind=EventKind.ENERGY_RECHARGED, payload={"amount": amount})


def energy_consumed(amount: int) -> Event:
    return Event(kind=EventKind.ENERGY_CONSUMED, payload={"amount": amount})


def moved(tile: Tile, coordinate: Coordinate) -> Event:
    return Event(
        kind=EventKind.MOVED,
        payload={"tile": tile.to_dict(), "coordinate": list(coordinate.as_tuple())},
    )


def tile_content_updated(tile: Tile, coordinate: Coordinate) -> Event:
    return Event(
        kind=EventKind.TILE_CONTENT_UPDATED,
        payload={"tile": tile.to_dict(), "coordinate": list(coordinate.as_tuple())},
    )


def added_to_backpack(content: Content, amount: int) -> Event:
    return Event(
        kind=EventKind.ADDED_TO_BACKPACK,
        payload={"content": content.kind.value, "amount": amount},
    )


def removed_from_backpack(content: Content, amount: int) -> Event:
    return Event(
        kind=EventKind.REMOVED_FROM_BACKPACK,
        payload={"content": content.kind.value, "amount": amount},
    )


class TickRecord(BaseModel):
    """Per-tick snapshot written to the run log."""

    model_config = ConfigDict(extra="forbid")

    tick: int
    time: str
    weather: str
    energy: int
    coordinate: tuple[int, int]
    score: float
    backpack: dict[str, int] = Field(default_factory=dict)
    events: list[Event] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class RunHeader(BaseModel):
    """First line of a run log: how the run was configured."""

    model_config = ConfigDict(extra="forbid")

    run_id: str
    seed: int
    dimension: int
    max_score: float
    ticks: int | None = None
    world_file: str | None = None


class RunSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ticks_run: int
    score: float
    energy: int
    discovered: int
