"""Grid positions and cardinal directions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


@dataclass(frozen=True, order=True)
class Coordinate:
    row: int
    col: int

    def step(self, direction: Direction) -> tuple[int, int]:
        """Return the raw (row, col) one step away; may fall off the map."""
        d_row, d_col = direction.delta
        return self.row + d_row, self.col + d_col

    def as_tuple(self) -> tuple[int, int]:
        return self.row, self.col
