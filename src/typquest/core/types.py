"""Shared type aliases for the core and domain layers."""
from enum import Enum
from typing import Literal


class BattlePhase(str, Enum):
    """Lifecycle phases of a battle. Terminal phases accept no further turns."""

    IDLE = "Idle"
    ACTIVE = "Active"
    VICTORY = "Victory"
    DEFEAT = "Defeat"
    FLED = "Fled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_PHASES


TERMINAL_PHASES = frozenset({BattlePhase.VICTORY, BattlePhase.DEFEAT, BattlePhase.FLED})

Side = Literal["player", "enemy"]

RejectionReason = Literal[
    "invalid_transition",
    "invalid_actor",
    "insufficient_mp",
    "insufficient_action_points",
    "invalid_target",
]

__all__ = ["BattlePhase", "RejectionReason", "Side", "TERMINAL_PHASES"]
