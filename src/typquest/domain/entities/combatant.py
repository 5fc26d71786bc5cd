"""Shared runtime model for anything that fights."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Tuple

from typquest.core.types import Side
from typquest.domain.defs import SkillDef

from .stats import StatBlock


@dataclass(slots=True)
class Combatant:
    """Base stats plus mutable HP/MP pools, clamped to [0, max]."""

    side: ClassVar[Side]

    id: str
    name: str
    level: int
    base_stats: StatBlock
    hp: int
    mp: int
    skills: Tuple[SkillDef, ...] = ()
    guard: int = 0

    def __post_init__(self) -> None:
        if self.level < 1:
            raise ValueError(f"{self.name}: level must be at least 1.")
        if not 0 <= self.hp <= self.base_stats.max_hp:
            raise ValueError(f"{self.name}: hp must be between 0 and {self.base_stats.max_hp}.")
        if not 0 <= self.mp <= self.base_stats.max_mp:
            raise ValueError(f"{self.name}: mp must be between 0 and {self.base_stats.max_mp}.")

    @property
    def max_hp(self) -> int:
        return self.base_stats.max_hp

    @property
    def max_mp(self) -> int:
        return self.base_stats.max_mp

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def take_damage(self, amount: int) -> int:
        """Reduce HP and return the amount actually lost."""
        if amount < 0:
            raise ValueError("Damage must be non-negative.")
        lost = min(self.hp, amount)
        self.hp -= lost
        return lost

    def heal(self, amount: int) -> int:
        """Restore HP up to the maximum and return the amount gained."""
        if amount < 0:
            raise ValueError("Heal amount must be non-negative.")
        gained = min(self.max_hp - self.hp, amount)
        self.hp += gained
        return gained

    def can_afford(self, mp_cost: int) -> bool:
        return self.mp >= mp_cost

    def spend_mp(self, amount: int) -> bool:
        if amount < 0:
            raise ValueError("MP cost must be non-negative.")
        if self.mp < amount:
            return False
        self.mp -= amount
        return True

    def restore_mp(self, amount: int) -> int:
        if amount < 0:
            raise ValueError("MP amount must be non-negative.")
        gained = min(self.max_mp - self.mp, amount)
        self.mp += gained
        return gained

    def set_pools(self, hp: int, mp: int) -> None:
        """Overwrite HP/MP (used when restoring saves), clamping into range."""
        self.hp = max(0, min(hp, self.max_hp))
        self.mp = max(0, min(mp, self.max_mp))
