"""Bounded robot inventory plus the transfer helpers used by the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gridbot.errors import NoContent, NotEnoughSpace
from gridbot.sim import events
from gridbot.sim.tile import Content, ContentKind

if TYPE_CHECKING:
    from gridbot.sim.runner import Runnable


def _seeded_contents() -> dict[Content, int]:
    return {Content(kind): 0 for kind in ContentKind}


@dataclass
class BackPack:
    size: int = 0
    contents: dict[Content, int] = field(default_factory=_seeded_contents)

    def total(self) -> int:
        return sum(self.contents.values())

    def free_space(self) -> int:
        return max(self.size - self.total(), 0)

    def get(self, content: Content) -> int:
        return self.contents.get(content.to_default(), 0)


def add_to_backpack(robot: Runnable, content: Content, quantity: int) -> int:
    """Store up to `quantity` units and return the amount stored.

    When the backpack cannot take everything the partial amount is still
    stored and `NotEnoughSpace(stored)` is raised.
    """
    backpack = robot.backpack
    key = content.to_default()
    stored = min(quantity, backpack.free_space())
    backpack.contents[key] = backpack.contents.get(key, 0) + stored
    robot.handle_event(events.added_to_backpack(key, stored))
    if stored < quantity:
        raise NotEnoughSpace(stored)
    return stored


def remove_from_backpack(robot: Runnable, content: Content, quantity: int) -> int:
    backpack = robot.backpack
    key = content.to_default()
    held = backpack.contents.get(key, 0)
    if held == 0:
        raise NoContent()
    removed = min(held, quantity)
    backpack.contents[key] = held - removed
    robot.handle_event(events.removed_from_backpack(key, removed))
    return removed
