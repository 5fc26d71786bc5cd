"""Battle domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Tuple

from typquest.core.types import BattlePhase, RejectionReason, Side
from typquest.domain.typing_challenge import TypingChallenge

BattleActionType = Literal["skill", "flee", "end_turn"]


@dataclass(frozen=True, slots=True)
class BattleAction:
    """An already-parsed action intent for the current turn."""

    action_type: BattleActionType
    skill_id: str | None = None
    target_id: str | None = None


@dataclass(slots=True)
class BattleState:
    """Tracks the state of an ongoing battle."""

    player_id: str
    enemy_id: str
    phase: BattlePhase = BattlePhase.IDLE
    turn_order: List[str] = field(default_factory=list)
    turn_index: int = 0
    turn_count: int = 0
    round_number: int = 0
    action_points_remaining: int = 0
    reward_points: int = 0
    outcome: BattlePhase | None = None

    @property
    def current_actor_id(self) -> str | None:
        if self.phase is not BattlePhase.ACTIVE or not self.turn_order:
            return None
        return self.turn_order[self.turn_index]


@dataclass(frozen=True, slots=True)
class ActionOutcome:
    """Everything one resolved (or rejected) action did."""

    actor_id: str
    target_id: str
    skill_id: str
    accepted: bool = True
    rejection: RejectionReason | None = None
    damage: int = 0
    healing: int = 0
    guard_gained: int = 0
    guard_absorbed: int = 0
    is_critical: bool = False
    evaded: bool = False
    mp_spent: int = 0
    mp_recovered: int = 0
    reward_points: int = 0
    target_hp: int = 0
    target_defeated: bool = False

    @classmethod
    def rejected(cls, actor_id: str, target_id: str, skill_id: str, reason: RejectionReason) -> "ActionOutcome":
        return cls(actor_id=actor_id, target_id=target_id, skill_id=skill_id, accepted=False, rejection=reason)


@dataclass(frozen=True, slots=True)
class BattleSnapshot:
    """Serializable mid-battle state used by save/load."""

    phase: BattlePhase
    enemy_def_id: str
    enemy_name: str
    enemy_hp: int
    enemy_max_hp: int
    enemy_mp: int
    player_hp: int
    player_mp: int
    turn_order: Tuple[Side, ...]
    turn_index: int
    turn_count: int
    round_number: int
    action_points_remaining: int
    reward_points: int = 0
    player_guard: int = 0
    enemy_guard: int = 0
    current_challenge: TypingChallenge | None = None


@dataclass(frozen=True, slots=True)
class BattleResult:
    """What the encounter collaborator receives once the battle ends."""

    outcome: BattlePhase
    turns: int
    reward_points: int
    enemy_name: str
    drop_eligible: bool
