"""Battle state machine for one Player against one Enemy."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

from typquest.core.rng import RNG
from typquest.core.types import BattlePhase, RejectionReason, Side
from typquest.domain.battle_models import (
    ActionOutcome,
    BattleAction,
    BattleResult,
    BattleSnapshot,
    BattleState,
)
from typquest.domain.defs import NORMAL_ATTACK, SkillDef
from typquest.domain.entities import Combatant, Enemy, Player
from typquest.domain.progression import ProgressionLedger
from typquest.domain.rewards import calculate_drop_rate
from typquest.domain.stat_aggregator import compute_effective_stats
from typquest.domain.turn_order import compute_turn_order
from typquest.domain.typing_challenge import TypingChallenge, TypingPerformance
from typquest.services.action_resolver import ActionResolver, select_enemy_skill

logger = logging.getLogger(__name__)

BASE_ACTION_POINTS = 3
AGILITY_PER_ACTION_POINT = 50
MIN_ACTION_POINTS = 1


@dataclass(slots=True)
class BattleEvent:
    """Base battle event."""


@dataclass(slots=True)
class BattleStartedEvent(BattleEvent):
    player_name: str
    enemy_name: str


@dataclass(slots=True)
class RoundStartedEvent(BattleEvent):
    round_number: int
    turn_order: List[str]


@dataclass(slots=True)
class TurnStartedEvent(BattleEvent):
    actor_id: str
    actor_name: str
    action_points: int


@dataclass(slots=True)
class ChallengePresentedEvent(BattleEvent):
    word: str
    time_limit: int
    difficulty: int


@dataclass(slots=True)
class ActionResolvedEvent(BattleEvent):
    actor_name: str
    skill_name: str
    target_name: str
    outcome: ActionOutcome


@dataclass(slots=True)
class ActionRejectedEvent(BattleEvent):
    actor_id: str
    reason: RejectionReason
    message: str


@dataclass(slots=True)
class RewardEarnedEvent(BattleEvent):
    points: int
    battle_total: int


@dataclass(slots=True)
class CombatantDefeatedEvent(BattleEvent):
    combatant_id: str
    combatant_name: str


@dataclass(slots=True)
class PlayerFledEvent(BattleEvent):
    player_name: str


@dataclass(slots=True)
class BattleResolvedEvent(BattleEvent):
    outcome: BattlePhase


class Battle:
    """
    Owns one encounter: phase, round order, action points and reward tally.

    The battle never raises for gameplay mistakes. Out-of-turn actions, actions
    after the battle has ended, unaffordable skills and bad targets come back as
    a single ActionRejectedEvent and leave every piece of state as it was.
    """

    def __init__(
        self,
        player: Player,
        enemy: Enemy,
        *,
        ledger: ProgressionLedger | None = None,
        rng: RNG | None = None,
    ) -> None:
        if player.id == enemy.id:
            raise ValueError("Player and enemy must have distinct ids.")
        self._player = player
        self._enemy = enemy
        self._resolver = ActionResolver(ledger, rng)
        self._state = BattleState(player_id=player.id, enemy_id=enemy.id)
        self._current_challenge: TypingChallenge | None = None

    # -----------------------
    # Read-only views
    # -----------------------
    @property
    def player(self) -> Player:
        return self._player

    @property
    def enemy(self) -> Enemy:
        return self._enemy

    @property
    def phase(self) -> BattlePhase:
        return self._state.phase

    @property
    def is_active(self) -> bool:
        return self._state.phase is BattlePhase.ACTIVE

    @property
    def is_over(self) -> bool:
        return self._state.phase.is_terminal

    @property
    def turn_order(self) -> tuple[str, ...]:
        return tuple(self._state.turn_order)

    @property
    def turn_count(self) -> int:
        return self._state.turn_count

    @property
    def round_number(self) -> int:
        return self._state.round_number

    @property
    def action_points_remaining(self) -> int:
        return self._state.action_points_remaining

    @property
    def reward_points(self) -> int:
        return self._state.reward_points

    @property
    def current_challenge(self) -> TypingChallenge | None:
        return self._current_challenge

    # -----------------------
    # Lifecycle
    # -----------------------
    def start(self) -> List[BattleEvent]:
        if self._state.phase is not BattlePhase.IDLE:
            return [self._reject(self._player.id, "invalid_transition", "Battle has already started.")]
        self._player.guard = 0
        self._enemy.guard = 0
        self._state.phase = BattlePhase.ACTIVE
        logger.info("Battle started: %s vs %s", self._player.name, self._enemy.name)
        events: List[BattleEvent] = [BattleStartedEvent(player_name=self._player.name, enemy_name=self._enemy.name)]
        # A side that is already down ends the battle before any round is built.
        outcome = self.check_battle_end()
        if outcome is not None:
            events.append(BattleResolvedEvent(outcome=outcome))
            return events
        self._begin_round(events)
        self._begin_turn(events)
        return events

    def get_current_turn_actor(self) -> Combatant | None:
        actor_id = self._state.current_actor_id
        if actor_id is None:
            return None
        return self._combatant(actor_id)

    def calculate_player_action_points(self) -> int:
        agility = compute_effective_stats(self._player).agility
        return max(MIN_ACTION_POINTS, BASE_ACTION_POINTS + agility // AGILITY_PER_ACTION_POINT)

    def present_challenge(self, challenge: TypingChallenge) -> List[BattleEvent]:
        """Record the challenge currently shown to the player."""
        rejection = self._check_turn(self._player.id)
        if rejection is not None:
            return [rejection]
        self._current_challenge = challenge
        return [
            ChallengePresentedEvent(
                word=challenge.word,
                time_limit=challenge.time_limit,
                difficulty=challenge.difficulty,
            )
        ]

    def take_turn(
        self,
        actor_id: str,
        action: BattleAction,
        performance: TypingPerformance | None = None,
    ) -> List[BattleEvent]:
        rejection = self._check_turn(actor_id)
        if rejection is not None:
            return [rejection]
        actor = self._combatant(actor_id)

        if action.action_type == "flee":
            return self._flee(actor)
        if action.action_type == "end_turn":
            return self._end_turn(actor)
        if action.action_type == "skill":
            return self._use_skill(actor, action, performance)
        raise ValueError(f"Unknown battle action type: {action.action_type}")

    def run_enemy_turn(self) -> List[BattleEvent]:
        """Let the enemy pick and perform its single action for this turn."""
        rejection = self._check_turn(self._enemy.id)
        if rejection is not None:
            return [rejection]
        skill = select_enemy_skill(self._enemy, self._state.turn_count)
        return self.take_turn(self._enemy.id, BattleAction(action_type="skill", skill_id=skill.id))

    def check_battle_end(self) -> BattlePhase | None:
        """Move to Victory or Defeat when a side has fallen and return the outcome."""
        if self._state.phase.is_terminal:
            return self._state.outcome
        if self._state.phase is not BattlePhase.ACTIVE:
            return None
        if not self._enemy.is_alive:
            self._finish(BattlePhase.VICTORY)
        elif not self._player.is_alive:
            self._finish(BattlePhase.DEFEAT)
        return self._state.outcome

    def get_result(self) -> BattleResult | None:
        if not self._state.phase.is_terminal:
            return None
        return BattleResult(
            outcome=self._state.phase,
            turns=self._state.turn_count,
            reward_points=self._state.reward_points,
            enemy_name=self._enemy.name,
            drop_eligible=self._state.phase is BattlePhase.VICTORY,
        )

    def roll_drops(self, rng: RNG, world_level: int = 1) -> List[str]:
        """
        Roll the defeated enemy's drop table.

        One base roll against the fortune-scaled drop rate decides whether
        anything drops; each entry then rolls against its own rate.
        """
        if self._state.phase is not BattlePhase.VICTORY:
            return []
        fortune = compute_effective_stats(self._player).fortune
        drop_rate = calculate_drop_rate(fortune, world_level)
        if rng.roll_percent() >= drop_rate:
            logger.debug("No drops from %s (base rate %.1f%%)", self._enemy.name, drop_rate)
            return []
        dropped: List[str] = []
        for drop in self._enemy.drops:
            if rng.roll_percent() < drop.drop_rate:
                dropped.append(drop.item_id)
        logger.debug("Drops from %s: %s", self._enemy.name, dropped)
        return dropped

    # -----------------------
    # Save / load
    # -----------------------
    def snapshot(self) -> BattleSnapshot:
        sides: Dict[str, Side] = {self._player.id: "player", self._enemy.id: "enemy"}
        return BattleSnapshot(
            phase=self._state.phase,
            enemy_def_id=self._enemy.enemy_id,
            enemy_name=self._enemy.name,
            enemy_hp=self._enemy.hp,
            enemy_max_hp=self._enemy.max_hp,
            enemy_mp=self._enemy.mp,
            player_hp=self._player.hp,
            player_mp=self._player.mp,
            turn_order=tuple(sides[combatant_id] for combatant_id in self._state.turn_order),
            turn_index=self._state.turn_index,
            turn_count=self._state.turn_count,
            round_number=self._state.round_number,
            action_points_remaining=self._state.action_points_remaining,
            reward_points=self._state.reward_points,
            player_guard=self._player.guard,
            enemy_guard=self._enemy.guard,
            current_challenge=self._current_challenge,
        )

    @classmethod
    def restore(
        cls,
        player: Player,
        enemy: Enemy,
        snapshot: BattleSnapshot,
        *,
        ledger: ProgressionLedger | None = None,
        rng: RNG | None = None,
    ) -> "Battle":
        """Rebuild a battle from a snapshot using fresh combatants."""
        if snapshot.enemy_max_hp != enemy.max_hp:
            raise ValueError(
                f"Snapshot max HP {snapshot.enemy_max_hp} does not match enemy '{enemy.name}' ({enemy.max_hp})."
            )
        if snapshot.phase is BattlePhase.ACTIVE:
            if not snapshot.turn_order:
                raise ValueError("An active battle snapshot needs a turn order.")
            if not 0 <= snapshot.turn_index < len(snapshot.turn_order):
                raise ValueError("Snapshot turn index is out of range.")
            if snapshot.player_hp <= 0 or snapshot.enemy_hp <= 0:
                raise ValueError("An active battle snapshot cannot contain a defeated combatant.")
        for value, label in (
            (snapshot.turn_count, "turn_count"),
            (snapshot.round_number, "round_number"),
            (snapshot.action_points_remaining, "action_points_remaining"),
            (snapshot.reward_points, "reward_points"),
            (snapshot.player_guard, "player_guard"),
            (snapshot.enemy_guard, "enemy_guard"),
        ):
            if value < 0:
                raise ValueError(f"Snapshot {label} must be non-negative.")

        battle = cls(player, enemy, ledger=ledger, rng=rng)
        enemy.set_pools(snapshot.enemy_hp, snapshot.enemy_mp)
        player.set_pools(snapshot.player_hp, snapshot.player_mp)
        enemy.guard = snapshot.enemy_guard
        player.guard = snapshot.player_guard
        ids: Dict[Side, str] = {"player": player.id, "enemy": enemy.id}
        state = battle._state
        state.phase = snapshot.phase
        state.turn_order = [ids[side] for side in snapshot.turn_order]
        state.turn_index = snapshot.turn_index
        state.turn_count = snapshot.turn_count
        state.round_number = snapshot.round_number
        state.action_points_remaining = snapshot.action_points_remaining
        state.reward_points = snapshot.reward_points
        if snapshot.phase.is_terminal:
            state.outcome = snapshot.phase
        battle._current_challenge = snapshot.current_challenge
        logger.info("Battle restored: %s vs %s (round %d)", player.name, enemy.name, state.round_number)
        return battle

    # -----------------------
    # Actions
    # -----------------------
    def _flee(self, actor: Combatant) -> List[BattleEvent]:
        if actor is not self._player:
            return [self._reject(actor.id, "invalid_actor", "Only the player can flee.")]
        self._current_challenge = None
        self._finish(BattlePhase.FLED)
        return [PlayerFledEvent(player_name=self._player.name), BattleResolvedEvent(outcome=BattlePhase.FLED)]

    def _end_turn(self, actor: Combatant) -> List[BattleEvent]:
        if actor is not self._player:
            return [self._reject(actor.id, "invalid_actor", "Only the player can end a turn early.")]
        events: List[BattleEvent] = []
        self._current_challenge = None
        self._state.action_points_remaining = 0
        self._advance_turn(events)
        return events

    def _use_skill(
        self,
        actor: Combatant,
        action: BattleAction,
        performance: TypingPerformance | None,
    ) -> List[BattleEvent]:
        skill = self._find_skill(actor, action.skill_id)
        is_player = actor is self._player
        if is_player and skill.action_cost > self._state.action_points_remaining:
            return [
                self._reject(
                    actor.id,
                    "insufficient_action_points",
                    f"{skill.name} needs {skill.action_cost} action points.",
                )
            ]

        target = self._resolve_target(actor, skill, action.target_id)
        if target is None:
            return [self._reject(actor.id, "invalid_target", f"Invalid target for {skill.name}.")]

        outcome = self._resolver.resolve(actor, target, skill, performance)
        if not outcome.accepted:
            assert outcome.rejection is not None
            return [self._reject(actor.id, outcome.rejection, f"{actor.name} cannot use {skill.name}.")]

        events: List[BattleEvent] = [
            ActionResolvedEvent(
                actor_name=actor.name,
                skill_name=skill.name,
                target_name=target.name,
                outcome=outcome,
            )
        ]
        if outcome.reward_points > 0:
            self._state.reward_points += outcome.reward_points
            events.append(RewardEarnedEvent(points=outcome.reward_points, battle_total=self._state.reward_points))
        if outcome.target_defeated:
            events.append(CombatantDefeatedEvent(combatant_id=target.id, combatant_name=target.name))

        if is_player:
            self._current_challenge = None
            self._state.action_points_remaining -= skill.action_cost

        outcome_phase = self.check_battle_end()
        if outcome_phase is not None:
            events.append(BattleResolvedEvent(outcome=outcome_phase))
            return events

        if not is_player or self._state.action_points_remaining <= 0:
            self._advance_turn(events)
        return events

    # -----------------------
    # Helpers
    # -----------------------
    def _check_turn(self, actor_id: str) -> ActionRejectedEvent | None:
        if self._state.phase is not BattlePhase.ACTIVE:
            return self._reject(actor_id, "invalid_transition", f"Battle is {self._state.phase.value}.")
        if actor_id != self._state.current_actor_id:
            return self._reject(actor_id, "invalid_actor", f"It is not {actor_id}'s turn.")
        return None

    def _reject(self, actor_id: str, reason: RejectionReason, message: str) -> ActionRejectedEvent:
        logger.debug("Rejected action from %s: %s (%s)", actor_id, reason, message)
        return ActionRejectedEvent(actor_id=actor_id, reason=reason, message=message)

    def _combatant(self, combatant_id: str) -> Combatant:
        if combatant_id == self._player.id:
            return self._player
        if combatant_id == self._enemy.id:
            return self._enemy
        raise KeyError(combatant_id)

    def _opponent(self, combatant: Combatant) -> Combatant:
        return self._enemy if combatant is self._player else self._player

    @staticmethod
    def _find_skill(actor: Combatant, skill_id: str | None) -> SkillDef:
        if skill_id is None or skill_id == NORMAL_ATTACK.id:
            return NORMAL_ATTACK
        for skill in actor.skills:
            if skill.id == skill_id:
                return skill
        raise ValueError(f"{actor.name} does not know skill '{skill_id}'.")

    def _resolve_target(self, actor: Combatant, skill: SkillDef, target_id: str | None) -> Combatant | None:
        if target_id is None:
            return actor if skill.target == "self" else self._opponent(actor)
        if target_id not in (self._player.id, self._enemy.id):
            return None
        return self._combatant(target_id)

    def _finish(self, outcome: BattlePhase) -> None:
        self._state.phase = outcome
        self._state.outcome = outcome
        self._state.action_points_remaining = 0
        self._player.guard = 0
        self._enemy.guard = 0
        logger.info("Battle ended: %s after %d turns", outcome.value, self._state.turn_count)

    def _begin_round(self, events: List[BattleEvent]) -> None:
        self._state.round_number += 1
        self._state.turn_order = compute_turn_order([self._player, self._enemy])
        self._state.turn_index = 0
        logger.debug("Round %d order: %s", self._state.round_number, self._state.turn_order)
        events.append(RoundStartedEvent(round_number=self._state.round_number, turn_order=list(self._state.turn_order)))

    def _begin_turn(self, events: List[BattleEvent]) -> None:
        actor = self._combatant(self._state.turn_order[self._state.turn_index])
        self._state.turn_count += 1
        if actor is self._player:
            self._state.action_points_remaining = self.calculate_player_action_points()
        else:
            self._state.action_points_remaining = 0
        events.append(
            TurnStartedEvent(
                actor_id=actor.id,
                actor_name=actor.name,
                action_points=self._state.action_points_remaining,
            )
        )

    def _advance_turn(self, events: List[BattleEvent]) -> None:
        self._state.turn_index += 1
        while self._state.turn_index < len(self._state.turn_order):
            if self._combatant(self._state.turn_order[self._state.turn_index]).is_alive:
                break
            self._state.turn_index += 1
        if self._state.turn_index >= len(self._state.turn_order):
            self._begin_round(events)
        self._begin_turn(events)
