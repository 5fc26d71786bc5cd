"""Applies a single combat action to the actor and target pools."""
from __future__ import annotations

import logging
import math
from typing import Sequence

from typquest.core.rng import RNG
from typquest.domain.battle_models import ActionOutcome
from typquest.domain.defs import NORMAL_ATTACK, SkillDef
from typquest.domain.entities import Combatant, Enemy, StatBlock
from typquest.domain.progression import ProgressionLedger
from typquest.domain.ratings import AccuracyRating, accuracy_multiplier, speed_multiplier
from typquest.domain.rewards import calculate_reward_points
from typquest.domain.stat_aggregator import compute_effective_stats
from typquest.domain.typing_challenge import TypingPerformance

logger = logging.getLogger(__name__)

DEFENSE_FACTOR = 0.5
MIN_DAMAGE = 1
MIN_SUPPORT_AMOUNT = 1
LOW_HP_HEAL_RATIO = 0.3
CRITICAL_MULTIPLIER = 1.5
MIN_CRITICAL_RATE = 5.0
MAX_CRITICAL_RATE = 25.0
MIN_EVADE_RATE = 5.0
MAX_EVADE_RATE = 30.0
EFFECT_TYPES = ("damage", "heal", "guard")
MP_CHARGE_MULTIPLIERS: dict[AccuracyRating, float] = {
    AccuracyRating.PERFECT: 1.5,
    AccuracyRating.GOOD: 1.2,
}


def typing_scalar(performance: TypingPerformance | None) -> float:
    """Speed multiplier times accuracy multiplier; 1.0 for untyped (enemy) actions."""
    if performance is None:
        return 1.0
    return speed_multiplier(performance.speed_rating) * accuracy_multiplier(performance.accuracy_rating)


def compute_damage(
    attacker_stats: StatBlock,
    defender_stats: StatBlock,
    skill: SkillDef,
    scalar: float,
    *,
    missed: bool = False,
    critical: bool = False,
) -> int:
    """
    floor(stat * power * scalar - willpower * 0.5), never below 1 unless the attempt missed.

    A critical hit multiplies the floored-at-1 amount by 1.5 before rounding down.
    """
    if missed:
        return 0
    attack_stat = getattr(attacker_stats, skill.stat)
    raw = max(MIN_DAMAGE, attack_stat * skill.power * scalar - defender_stats.willpower * DEFENSE_FACTOR)
    if critical:
        raw *= CRITICAL_MULTIPLIER
    return math.floor(raw)


def calculate_critical_rate(fortune: int) -> float:
    """Critical chance in percent: 5 + fortune / 15, clamped to [5, 25]."""
    return max(MIN_CRITICAL_RATE, min(MAX_CRITICAL_RATE, 5 + fortune / 15))


def calculate_evade_rate(agility: int) -> float:
    """Evasion chance in percent: 5 + agility / 20, clamped to [5, 30]."""
    return max(MIN_EVADE_RATE, min(MAX_EVADE_RATE, 5 + agility / 20))


def compute_support_amount(actor_stats: StatBlock, skill: SkillDef, scalar: float, *, missed: bool = False) -> int:
    if missed:
        return 0
    return max(MIN_SUPPORT_AMOUNT, math.floor(actor_stats.willpower * skill.power * scalar))


def compute_mp_charge(skill: SkillDef, performance: TypingPerformance | None) -> int:
    if skill.mp_charge <= 0:
        return 0
    if performance is None:
        return skill.mp_charge
    multiplier = MP_CHARGE_MULTIPLIERS.get(performance.accuracy_rating, 1.0)
    return math.floor(skill.mp_charge * multiplier)


def select_enemy_skill(enemy: Enemy, turn_count: int) -> SkillDef:
    """
    Pick the enemy's next skill with fixed rules, no randomness.

    A wounded enemy (HP at or below 30%) heals if it can afford a heal skill.
    Otherwise it rotates through its affordable offensive skills by turn
    count, falling back to the normal attack.
    """
    affordable: Sequence[SkillDef] = [skill for skill in enemy.skills if enemy.can_afford(skill.mp_cost)]
    if enemy.hp <= enemy.max_hp * LOW_HP_HEAL_RATIO:
        heals = [skill for skill in affordable if skill.effect_type == "heal"]
        if heals:
            return heals[0]
    offensive = [skill for skill in affordable if skill.effect_type != "heal"]
    if not offensive:
        return NORMAL_ATTACK
    return offensive[turn_count % len(offensive)]


class ActionResolver:
    """
    Resolves actions and reports EX points for player attempts to the ledger.

    With an RNG, damaging attempts that were typed in time first roll against
    the target's evasion and then against the attacker's critical rate. Without
    one, every such attempt lands as a normal hit.
    """

    def __init__(self, ledger: ProgressionLedger | None = None, rng: RNG | None = None) -> None:
        self._ledger = ledger
        self._rng = rng

    def resolve(
        self,
        actor: Combatant,
        target: Combatant,
        skill: SkillDef,
        performance: TypingPerformance | None = None,
    ) -> ActionOutcome:
        is_player = actor.side == "player"
        if is_player and performance is None:
            raise ValueError("Player actions require a typing performance.")

        rejection = self._check_preconditions(actor, target, skill)
        if rejection is not None:
            logger.debug("Rejected %s by %s: %s", skill.id, actor.id, rejection)
            return ActionOutcome.rejected(actor.id, target.id, skill.id, rejection)

        missed = performance is not None and performance.is_miss
        scalar = typing_scalar(performance)
        actor.spend_mp(skill.mp_cost)
        actor_stats = compute_effective_stats(actor)

        damage = 0
        healing = 0
        guard_gained = 0
        guard_absorbed = 0
        critical = False
        evaded = False
        if skill.effect_type == "damage":
            target_stats = compute_effective_stats(target)
            if not missed:
                evaded = self._roll_evasion(target_stats)
                critical = not evaded and self._roll_critical(actor_stats)
            raw_damage = compute_damage(
                actor_stats,
                target_stats,
                skill,
                scalar,
                missed=missed or evaded,
                critical=critical,
            )
            # A guard soaks part of a hit but a landed hit still deals at least 1.
            if raw_damage > 0 and target.guard > 0:
                guard_absorbed = min(raw_damage - MIN_DAMAGE, target.guard)
                target.guard = 0
            damage = target.take_damage(raw_damage - guard_absorbed)
        elif skill.effect_type == "heal":
            healing = actor.heal(compute_support_amount(actor_stats, skill, scalar, missed=missed))
        else:
            guard_gained = compute_support_amount(actor_stats, skill, scalar, missed=missed)
            actor.guard = guard_gained

        mp_recovered = actor.restore_mp(compute_mp_charge(skill, performance))

        reward_points = 0
        if is_player:
            assert performance is not None
            reward_points = calculate_reward_points(
                performance.typing_difficulty,
                performance.speed_rating,
                performance.accuracy_rating,
            )
            if reward_points > 0 and self._ledger is not None:
                self._ledger.add_points(reward_points)

        logger.debug(
            "%s used %s on %s: damage=%d critical=%s evaded=%s healing=%d guard=%d ex=%d",
            actor.id,
            skill.id,
            target.id,
            damage,
            critical,
            evaded,
            healing,
            guard_gained,
            reward_points,
        )
        return ActionOutcome(
            actor_id=actor.id,
            target_id=target.id,
            skill_id=skill.id,
            damage=damage,
            healing=healing,
            guard_gained=guard_gained,
            guard_absorbed=guard_absorbed,
            is_critical=critical,
            evaded=evaded,
            mp_spent=skill.mp_cost,
            mp_recovered=mp_recovered,
            reward_points=reward_points,
            target_hp=target.hp,
            target_defeated=not target.is_alive,
        )

    @staticmethod
    def _check_preconditions(actor: Combatant, target: Combatant, skill: SkillDef):
        if skill.effect_type not in EFFECT_TYPES:
            raise ValueError(f"Unknown skill effect type: {skill.effect_type}")
        if not actor.is_alive or not target.is_alive:
            return "invalid_target"
        if skill.target == "self" and target is not actor:
            return "invalid_target"
        if skill.target == "enemy" and target.side == actor.side:
            return "invalid_target"
        if not actor.can_afford(skill.mp_cost):
            return "insufficient_mp"
        return None

    def _roll_evasion(self, target_stats: StatBlock) -> bool:
        if self._rng is None:
            return False
        return self._rng.roll_percent() < calculate_evade_rate(target_stats.agility)

    def _roll_critical(self, actor_stats: StatBlock) -> bool:
        if self._rng is None:
            return False
        return self._rng.roll_percent() < calculate_critical_rate(actor_stats.fortune)
