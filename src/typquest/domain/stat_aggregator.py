"""Merge base stats with equipment bonuses into effective combat stats."""
from __future__ import annotations

from typquest.domain.defs import StatDelta
from typquest.domain.entities import Combatant, Player, StatBlock


def equipment_bonuses(player: Player) -> StatDelta:
    """Sum the bonuses of every item currently equipped."""
    total = StatDelta()
    for item in player.equipment.equipped_items():
        total = total + item.bonuses
    return total


def compute_effective_stats(combatant: Combatant) -> StatBlock:
    """
    Return base stats plus every equipped item's bonuses.

    Slots are re-read on every call, so an equipment change takes effect the
    next time stats are requested. Enemies have no equipment layer.
    """
    base = combatant.base_stats
    if not isinstance(combatant, Player):
        return base

    bonus = equipment_bonuses(combatant)
    return StatBlock(
        max_hp=base.max_hp,
        max_mp=base.max_mp,
        strength=max(0, base.strength + bonus.strength),
        willpower=max(0, base.willpower + bonus.willpower),
        agility=max(0, base.agility + bonus.agility),
        fortune=max(0, base.fortune + bonus.fortune),
    )
