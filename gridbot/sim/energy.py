"""Bounded energy ledger."""

from __future__ import annotations

from dataclasses import dataclass

from gridbot.errors import NotEnoughEnergy

MAX_ENERGY_LEVEL = 1000


@dataclass
class Energy:
    energy_level: int = MAX_ENERGY_LEVEL

    def __post_init__(self) -> None:
        self.energy_level = max(0, min(self.energy_level, MAX_ENERGY_LEVEL))

    def has_enough_energy(self, amount: int) -> bool:
        return self.energy_level >= amount

    def consume(self, amount: int) -> None:
        if not self.has_enough_energy(amount):
            raise NotEnoughEnergy()
        self.energy_level -= amount

    def recharge(self, amount: int) -> None:
        self.energy_level = min(self.energy_level + amount, MAX_ENERGY_LEVEL)
