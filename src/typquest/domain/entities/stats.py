"""Stat models for runtime entities."""
from __future__ import annotations

from dataclasses import dataclass

COMBAT_STATS: tuple[str, ...] = ("strength", "willpower", "agility", "fortune")


@dataclass(frozen=True, slots=True)
class StatBlock:
    """Immutable set of combat stats (base or effective)."""

    max_hp: int
    max_mp: int
    strength: int
    willpower: int
    agility: int
    fortune: int

    def __post_init__(self) -> None:
        if self.max_hp < 1:
            raise ValueError("max_hp must be at least 1.")
        if self.max_mp < 0:
            raise ValueError("max_mp must be non-negative.")
