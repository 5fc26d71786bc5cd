"""Enemy definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class DropDef:
    """One entry of an enemy drop table; drop_rate is a percentage."""

    item_id: str
    drop_rate: float


@dataclass(slots=True)
class EnemyDef:
    """Enemy definition with base combat stats."""

    id: str
    name: str
    description: str
    level: int
    max_hp: int
    max_mp: int
    strength: int
    willpower: int
    agility: int
    fortune: int
    skill_ids: Tuple[str, ...] = ()
    drops: Tuple[DropDef, ...] = ()
    tags: Tuple[str, ...] = ()
