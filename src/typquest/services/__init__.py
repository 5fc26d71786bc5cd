"""Service layer exports."""

from .errors import FactoryError, SaveLoadError
from .action_resolver import ActionResolver, select_enemy_skill
from .battle_service import (
    ActionRejectedEvent,
    ActionResolvedEvent,
    Battle,
    BattleEvent,
    BattleResolvedEvent,
    BattleStartedEvent,
    ChallengePresentedEvent,
    CombatantDefeatedEvent,
    PlayerFledEvent,
    RewardEarnedEvent,
    RoundStartedEvent,
    TurnStartedEvent,
)
from .save_service import BattleSaveService
from .typing_service import ChallengeGenerator

__all__ = [
    "FactoryError",
    "SaveLoadError",
    "ActionResolver",
    "select_enemy_skill",
    "ActionRejectedEvent",
    "ActionResolvedEvent",
    "Battle",
    "BattleEvent",
    "BattleResolvedEvent",
    "BattleStartedEvent",
    "ChallengePresentedEvent",
    "CombatantDefeatedEvent",
    "PlayerFledEvent",
    "RewardEarnedEvent",
    "RoundStartedEvent",
    "TurnStartedEvent",
    "BattleSaveService",
    "ChallengeGenerator",
]
