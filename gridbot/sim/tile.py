"""Tile, terrain and content definitions with their static property tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TileType(str, Enum):
    DEEP_WATER = "deep_water"
    SHALLOW_WATER = "shallow_water"
    SAND = "sand"
    GRASS = "grass"
    STREET = "street"
    HILL = "hill"
    MOUNTAIN = "mountain"
    SNOW = "snow"
    LAVA = "lava"
    TELEPORT = "teleport"
    WALL = "wall"

    @property
    def properties(self) -> TileTypeProps:
        return TILE_PROPERTIES[self]


class ContentKind(str, Enum):
    ROCK = "rock"
    TREE = "tree"
    GARBAGE = "garbage"
    FIRE = "fire"
    COIN = "coin"
    BIN = "bin"
    CRATE = "crate"
    BANK = "bank"
    WATER = "water"
    NONE = "none"
    FISH = "fish"
    MARKET = "market"
    BUILDING = "building"
    BUSH = "bush"
    JOLLY_BLOCK = "jolly_block"
    SCARECROW = "scarecrow"


SCALAR_KINDS: frozenset[ContentKind] = frozenset(
    {
        ContentKind.ROCK,
        ContentKind.TREE,
        ContentKind.GARBAGE,
        ContentKind.COIN,
        ContentKind.WATER,
        ContentKind.FISH,
        ContentKind.MARKET,
        ContentKind.BUSH,
        ContentKind.JOLLY_BLOCK,
    }
)
RANGE_KINDS: frozenset[ContentKind] = frozenset(
    {ContentKind.BIN, ContentKind.CRATE, ContentKind.BANK}
)


@dataclass(frozen=True, eq=False)
class Content:
    """A tile or backpack item.

    Scalar kinds carry an `int`, receptacles (bin, crate, bank) carry a
    half-open `range(filled, capacity)` and the remaining kinds carry nothing.
    `Content(kind)` builds the default (zero quantity) form.
    """

    kind: ContentKind
    amount: int | range | None = None

    def __post_init__(self) -> None:
        if self.kind in RANGE_KINDS:
            if self.amount is None:
                object.__setattr__(self, "amount", range(0, 0))
            elif not isinstance(self.amount, range) or self.amount.step != 1:
                raise ValueError(f"{self.kind.value} needs a range amount")
        elif self.kind in SCALAR_KINDS:
            if self.amount is None:
                object.__setattr__(self, "amount", 0)
            elif not isinstance(self.amount, int) or self.amount < 0:
                raise ValueError(f"{self.kind.value} needs a non-negative int amount")
        elif self.amount is not None:
            raise ValueError(f"{self.kind.value} carries no amount")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Content):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __repr__(self) -> str:
        return f"Content({self})"

    def __str__(self) -> str:
        if isinstance(self.amount, range):
            return f"{self.kind.value}({self.amount.start}..{self.amount.stop})"
        if self.amount is None:
            return self.kind.value
        return f"{self.kind.value}({self.amount})"

    def _identity(self) -> tuple[Any, ...]:
        if isinstance(self.amount, range):
            return (self.kind, self.amount.start, self.amount.stop)
        return (self.kind, self.amount)

    @property
    def properties(self) -> ContentProps:
        return CONTENT_PROPERTIES[self.kind]

    @property
    def is_range(self) -> bool:
        return self.kind in RANGE_KINDS

    @property
    def is_none(self) -> bool:
        return self.kind == ContentKind.NONE

    @property
    def quantity(self) -> int | None:
        if self.kind == ContentKind.FIRE:
            return 1
        if isinstance(self.amount, int):
            return self.amount
        return None

    def to_default(self) -> Content:
        return Content(self.kind)

    def with_amount(self, value: int) -> Content:
        if self.kind in RANGE_KINDS:
            return Content(self.kind, range(0, value))
        if self.kind in SCALAR_KINDS:
            return Content(self.kind, value)
        return Content(self.kind)

    def world_generator_max(self) -> int:
        if self.kind in RANGE_KINDS or self.kind in SCALAR_KINDS:
            return self.properties.max
        return 0

    def to_dict(self) -> dict[str, Any]:
        amount: Any = self.amount
        if isinstance(amount, range):
            amount = [amount.start, amount.stop]
        return {"kind": self.kind.value, "amount": amount}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Content:
        kind = ContentKind(data["kind"])
        amount = data.get("amount")
        if kind in RANGE_KINDS and amount is not None:
            start, stop = amount
            amount = range(start, stop)
        return cls(kind, amount)


NO_CONTENT = Content(ContentKind.NONE)


@dataclass(frozen=True)
class ContentProps:
    destroy: bool
    max: int
    store: bool
    cost: int
    score_weight: int
    craft: tuple[tuple[ContentKind, int], ...] = ()
    disposable: ContentKind | None = None


@dataclass(frozen=True)
class TileTypeProps:
    walk: bool
    cost: int
    hold: frozenset[ContentKind]

    def can_hold(self, content: Content) -> bool:
        return content.kind in self.hold


@dataclass
class Tile:
    tile_type: TileType
    content: Content = NO_CONTENT
    elevation: int = 0
    teleport_active: bool = False

    def copy(self) -> Tile:
        return Tile(
            tile_type=self.tile_type,
            content=self.content,
            elevation=self.elevation,
            teleport_active=self.teleport_active,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "tile_type": self.tile_type.value,
            "content": self.content.to_dict(),
            "elevation": self.elevation,
            "teleport_active": self.teleport_active,
        }


def elevation_cost(from_tile: Tile, to_tile: Tile) -> int:
    """Uphill moves pay the squared elevation gain; flat or downhill is free."""
    if to_tile.elevation <= from_tile.elevation:
        return 0
    return (to_tile.elevation - from_tile.elevation) ** 2


_K = ContentKind

_ALL_CONTENT = frozenset(ContentKind)

TILE_PROPERTIES: dict[TileType, TileTypeProps] = {
    TileType.DEEP_WATER: TileTypeProps(
        walk=False, cost=0, hold=frozenset({_K.WATER, _K.NONE, _K.FISH})
    ),
    TileType.SHALLOW_WATER: TileTypeProps(
        walk=True,
        cost=5,
        hold=frozenset({_K.WATER, _K.NONE, _K.FISH, _K.SCARECROW}),
    ),
    TileType.SAND: TileTypeProps(
        walk=True,
        cost=3,
        hold=frozenset(
            {
                _K.ROCK,
                _K.GARBAGE,
                _K.COIN,
                _K.BIN,
                _K.CRATE,
                _K.NONE,
                _K.JOLLY_BLOCK,
                _K.SCARECROW,
            }
        ),
    ),
    TileType.GRASS: TileTypeProps(
        walk=True, cost=1, hold=_ALL_CONTENT - {_K.WATER, _K.FISH}
    ),
    TileType.STREET: TileTypeProps(
        walk=True,
        cost=0,
        hold=frozenset(
            {
                _K.ROCK,
                _K.GARBAGE,
                _K.COIN,
                _K.BIN,
                _K.BANK,
                _K.NONE,
                _K.MARKET,
                _K.BUILDING,
                _K.JOLLY_BLOCK,
                _K.SCARECROW,
            }
        ),
    ),
    TileType.HILL: TileTypeProps(
        walk=True,
        cost=5,
        hold=frozenset(
            {
                _K.ROCK,
                _K.TREE,
                _K.GARBAGE,
                _K.FIRE,
                _K.COIN,
                _K.BIN,
                _K.CRATE,
                _K.NONE,
                _K.BUILDING,
                _K.BUSH,
                _K.JOLLY_BLOCK,
                _K.SCARECROW,
            }
        ),
    ),
    TileType.MOUNTAIN: TileTypeProps(
        walk=True,
        cost=10,
        hold=frozenset(
            {
                _K.ROCK,
                _K.TREE,
                _K.GARBAGE,
                _K.COIN,
                _K.BIN,
                _K.CRATE,
                _K.NONE,
                _K.BUILDING,
                _K.BUSH,
                _K.JOLLY_BLOCK,
                _K.SCARECROW,
            }
        ),
    ),
    TileType.SNOW: TileTypeProps(
        walk=True,
        cost=3,
        hold=frozenset(
            {
                _K.ROCK,
                _K.COIN,
                _K.CRATE,
                _K.NONE,
                _K.BUILDING,
                _K.BUSH,
                _K.JOLLY_BLOCK,
                _K.SCARECROW,
            }
        ),
    ),
    TileType.LAVA: TileTypeProps(walk=False, cost=0, hold=frozenset({_K.NONE})),
    TileType.TELEPORT: TileTypeProps(
        walk=True,
        cost=0,
        hold=frozenset(
            {_K.ROCK, _K.GARBAGE, _K.COIN, _K.BIN, _K.BANK, _K.NONE, _K.MARKET}
        ),
    ),
    TileType.WALL: TileTypeProps(
        walk=False, cost=0, hold=frozenset({_K.FIRE, _K.NONE})
    ),
}

# Each entry is an alternative recipe: one of the listed ingredients in the
# given quantity crafts a single unit.
_JOLLY_RECIPE = tuple(
    (kind, 2)
    for kind in (
        _K.ROCK,
        _K.TREE,
        _K.GARBAGE,
        _K.COIN,
        _K.FISH,
        _K.SCARECROW,
        _K.BUSH,
    )
)

CONTENT_PROPERTIES: dict[ContentKind, ContentProps] = {
    _K.ROCK: ContentProps(destroy=True, max=4, store=False, cost=1, score_weight=1),
    _K.TREE: ContentProps(destroy=True, max=5, store=False, cost=3, score_weight=3),
    _K.GARBAGE: ContentProps(
        destroy=True,
        max=3,
        store=False,
        cost=4,
        score_weight=2,
        craft=((_K.ROCK, 3), (_K.TREE, 1), (_K.FISH, 1)),
    ),
    _K.FIRE: ContentProps(
        destroy=True,
        max=1,
        store=False,
        cost=5,
        score_weight=10,
        disposable=_K.WATER,
    ),
    _K.COIN: ContentProps(
        destroy=True,
        max=10,
        store=True,
        cost=0,
        score_weight=2,
        craft=((_K.GARBAGE, 5),),
    ),
    _K.BIN: ContentProps(
        destroy=False,
        max=10,
        store=True,
        cost=0,
        score_weight=10,
        disposable=_K.GARBAGE,
    ),
    _K.CRATE: ContentProps(
        destroy=False,
        max=20,
        store=True,
        cost=0,
        score_weight=7,
        disposable=_K.TREE,
    ),
    _K.BANK: ContentProps(
        destroy=False,
        max=50,
        store=True,
        cost=0,
        score_weight=10,
        disposable=_K.COIN,
    ),
    _K.WATER: ContentProps(destroy=True, max=20, store=True, cost=3, score_weight=2),
    _K.NONE: ContentProps(destroy=False, max=0, store=False, cost=0, score_weight=0),
    _K.FISH: ContentProps(destroy=True, max=3, store=True, cost=1, score_weight=1),
    _K.MARKET: ContentProps(
        destroy=False,
        max=20,
        store=False,
        cost=0,
        score_weight=5,
        disposable=_K.FISH,
    ),
    _K.BUILDING: ContentProps(
        destroy=False, max=0, store=False, cost=0, score_weight=0
    ),
    _K.BUSH: ContentProps(destroy=True, max=10, store=True, cost=0, score_weight=1),
    _K.JOLLY_BLOCK: ContentProps(
        destroy=True,
        max=2,
        store=True,
        cost=2,
        score_weight=2,
        craft=_JOLLY_RECIPE,
    ),
    _K.SCARECROW: ContentProps(
        destroy=False, max=0, store=False, cost=0, score_weight=2
    ),
}
