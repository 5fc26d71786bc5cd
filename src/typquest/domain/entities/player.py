"""Player runtime model."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from typquest.core.types import Side

from .combatant import Combatant
from .equipment import EquipmentLoadout


@dataclass(slots=True)
class Player(Combatant):
    """The player character; outlives any single battle."""

    side: ClassVar[Side] = "player"

    equipment: EquipmentLoadout = field(default_factory=EquipmentLoadout)
