"""Runtime entity exports."""

from .combatant import Combatant
from .enemy import Enemy
from .equipment import EquipmentLoadout
from .player import Player
from .stats import COMBAT_STATS, StatBlock

__all__ = [
    "COMBAT_STATS",
    "Combatant",
    "Enemy",
    "EquipmentLoadout",
    "Player",
    "StatBlock",
]
