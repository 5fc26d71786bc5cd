"""UI-agnostic controllers for game flow orchestration."""
from __future__ import annotations

from .battle_controller import AvailableActions, BattleAction, BattleActionType, BattleController

__all__ = [
    "AvailableActions",
    "BattleController",
    "BattleAction",
    "BattleActionType",
]
