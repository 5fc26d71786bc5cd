"""Per-round turn ordering."""
from __future__ import annotations

from typing import List, Sequence

from typquest.domain.entities import Combatant
from typquest.domain.stat_aggregator import compute_effective_stats

_SIDE_PRIORITY = {"player": 0, "enemy": 1}


def compute_turn_order(combatants: Sequence[Combatant]) -> List[str]:
    """
    Order living combatants by descending effective agility.

    Ties go to the player, then to the order the combatants were given in.
    """
    indexed = [(index, combatant) for index, combatant in enumerate(combatants) if combatant.is_alive]
    indexed.sort(
        key=lambda pair: (
            -compute_effective_stats(pair[1]).agility,
            _SIDE_PRIORITY[pair[1].side],
            pair[0],
        )
    )
    return [combatant.id for _, combatant in indexed]
