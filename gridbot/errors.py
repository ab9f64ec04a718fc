"""Error taxonomy shared by the world model and the action engine."""

from __future__ import annotations


class LibError(Exception):
    """Base class for every expected failure raised by gridbot."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.__class__.__name__)


class CapacityError(LibError):
    pass


class NotEnoughEnergy(CapacityError):
    pass


class NotEnoughSpace(CapacityError):
    """Raised after a partial backpack insert; `quantity` is what was stored."""

    def __init__(self, quantity: int) -> None:
        super().__init__(f"NotEnoughSpace({quantity})")
        self.quantity = quantity

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NotEnoughSpace):
            return NotImplemented
        return self.quantity == other.quantity

    def __hash__(self) -> int:
        return hash((NotEnoughSpace, self.quantity))


class NotEnoughContentInBackPack(CapacityError):
    pass


class SpatialError(LibError):
    pass


class OutOfBounds(SpatialError):
    pass


class CannotWalk(SpatialError):
    pass


class ContentStateError(LibError):
    pass


class NoContent(ContentStateError):
    pass


class CannotDestroy(ContentStateError):
    pass


class WrongContentUsed(ContentStateError):
    pass


class NotEnoughContentProvided(ContentStateError):
    pass


class MustDestroyContentFirst(ContentStateError):
    pass


class NotCraftable(ContentStateError):
    pass


class OperationNotAllowed(LibError):
    pass


class NoMoreDiscovery(LibError):
    pass


class WorldConstructionError(LibError):
    pass


class WorldIsNotASquare(WorldConstructionError):
    pass


class TeleportIsTrueOnGeneration(WorldConstructionError):
    pass


class ContentValueIsHigherThanMax(WorldConstructionError):
    pass


class ContentNotAllowedOnTile(WorldConstructionError):
    pass


class EmptyForecast(WorldConstructionError):
    pass


class WrongHour(WorldConstructionError):
    pass
