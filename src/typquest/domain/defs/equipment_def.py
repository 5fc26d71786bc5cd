"""Equipment definition structures."""
from __future__ import annotations

from dataclasses import dataclass

EQUIPMENT_SLOTS: tuple[str, ...] = ("weapon", "head", "body", "hands", "accessory")


@dataclass(frozen=True, slots=True)
class StatDelta:
    """Flat bonuses (or penalties) to the four combat stats."""

    strength: int = 0
    willpower: int = 0
    agility: int = 0
    fortune: int = 0

    def __add__(self, other: StatDelta) -> StatDelta:
        if not isinstance(other, StatDelta):
            return NotImplemented
        return StatDelta(
            strength=self.strength + other.strength,
            willpower=self.willpower + other.willpower,
            agility=self.agility + other.agility,
            fortune=self.fortune + other.fortune,
        )


@dataclass(frozen=True, slots=True)
class EquipmentDef:
    """Equippable item carrying flat stat bonuses."""

    id: str
    name: str
    slot: str
    strength: int = 0
    willpower: int = 0
    agility: int = 0
    fortune: int = 0
    value: int = 0

    @property
    def bonuses(self) -> StatDelta:
        return StatDelta(
            strength=self.strength,
            willpower=self.willpower,
            agility=self.agility,
            fortune=self.fortune,
        )
