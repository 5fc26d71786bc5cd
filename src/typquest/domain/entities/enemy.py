"""Enemy runtime models."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Tuple

from typquest.core.types import Side
from typquest.domain.defs import DropDef

from .combatant import Combatant


@dataclass(slots=True)
class Enemy(Combatant):
    """Represents a spawned enemy owned by a single battle."""

    side: ClassVar[Side] = "enemy"

    enemy_id: str = ""
    description: str = ""
    drops: Tuple[DropDef, ...] = ()
    tags: Tuple[str, ...] = ()
