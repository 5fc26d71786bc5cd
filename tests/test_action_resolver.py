from __future__ import annotations

import pytest

from typquest.domain.defs import NORMAL_ATTACK
from typquest.domain.progression import ExPointsLedger
from typquest.domain.ratings import AccuracyRating, SpeedRating
from typquest.domain.typing_challenge import TypingPerformance
from typquest.services.action_resolver import (
    ActionResolver,
    calculate_critical_rate,
    calculate_evade_rate,
    select_enemy_skill,
)
from tests.helpers.builders import ScriptedRolls, make_enemy, make_player, make_skill

FAST_PERFECT = TypingPerformance(SpeedRating.FAST, AccuracyRating.PERFECT)
SLOW_POOR = TypingPerformance(SpeedRating.SLOW, AccuracyRating.POOR)
MISS = TypingPerformance(SpeedRating.MISS, AccuracyRating.PERFECT)


def test_player_damage_uses_typing_scalar() -> None:
    player = make_player(strength=10)
    enemy = make_enemy(willpower=4)

    outcome = ActionResolver().resolve(player, enemy, NORMAL_ATTACK, FAST_PERFECT)

    # 10 * 1.0 * (2.0 * 2.0) - 4 * 0.5
    assert outcome.accepted
    assert outcome.damage == 38
    assert enemy.hp == 12
    assert outcome.target_hp == 12


def test_damage_has_a_floor_of_one() -> None:
    player = make_player(strength=1)
    enemy = make_enemy(willpower=100)

    outcome = ActionResolver().resolve(player, enemy, NORMAL_ATTACK, SLOW_POOR)

    assert outcome.damage == 1


def test_miss_deals_no_damage_and_earns_nothing() -> None:
    ledger = ExPointsLedger()
    player = make_player()
    enemy = make_enemy()

    outcome = ActionResolver(ledger).resolve(player, enemy, NORMAL_ATTACK, MISS)

    assert outcome.accepted
    assert outcome.damage == 0
    assert outcome.reward_points == 0
    assert enemy.hp == enemy.max_hp
    assert ledger.total == 0


def test_player_actions_require_performance() -> None:
    with pytest.raises(ValueError):
        ActionResolver().resolve(make_player(), make_enemy(), NORMAL_ATTACK)


def test_reward_points_reach_the_ledger() -> None:
    ledger = ExPointsLedger()
    performance = TypingPerformance(SpeedRating.FAST, AccuracyRating.PERFECT, typing_difficulty=5)

    outcome = ActionResolver(ledger).resolve(make_player(), make_enemy(max_hp=500), NORMAL_ATTACK, performance)

    assert outcome.reward_points == 20
    assert ledger.total == 20
    assert ledger.history == [20]


def test_enemy_actions_use_unit_scalar_and_earn_nothing() -> None:
    ledger = ExPointsLedger()
    player = make_player(willpower=10)
    enemy = make_enemy(strength=8)
    bite = make_skill("bite", power=1.2)

    outcome = ActionResolver(ledger).resolve(enemy, player, bite)

    # floor(8 * 1.2 - 10 * 0.5)
    assert outcome.damage == 4
    assert player.hp == 96
    assert outcome.reward_points == 0
    assert ledger.total == 0


def test_insufficient_mp_is_rejected_without_mutation() -> None:
    player = make_player(hp=40, mp=0)
    mend = make_skill("mend", effect_type="heal", stat="willpower", power=1.5, mp_cost=10)

    outcome = ActionResolver().resolve(player, player, mend, FAST_PERFECT)

    assert not outcome.accepted
    assert outcome.rejection == "insufficient_mp"
    assert player.hp == 40
    assert player.mp == 0


def test_defeated_target_is_rejected() -> None:
    player = make_player(mp=20)
    enemy = make_enemy(hp=0)

    outcome = ActionResolver().resolve(player, enemy, make_skill("spark", mp_cost=5), FAST_PERFECT)

    assert outcome.rejection == "invalid_target"
    assert player.mp == 20


def test_self_skill_cannot_target_opponent() -> None:
    mend = make_skill("mend", effect_type="heal", stat="willpower")
    outcome = ActionResolver().resolve(make_player(), make_enemy(), mend, FAST_PERFECT)

    assert outcome.rejection == "invalid_target"


def test_heal_is_clamped_to_max_hp() -> None:
    player = make_player(hp=50, mp=20, willpower=10)
    mend = make_skill("mend", effect_type="heal", stat="willpower", power=1.5, mp_cost=10)

    outcome = ActionResolver().resolve(player, player, mend, FAST_PERFECT)

    assert outcome.healing == 50
    assert player.hp == player.max_hp
    assert player.mp == 10


def test_guard_absorbs_next_hit_then_clears() -> None:
    player = make_player(willpower=10, hp=100)
    enemy = make_enemy(strength=8)
    player.guard = 5

    outcome = ActionResolver().resolve(enemy, player, make_skill("bite", power=1.2))

    # 4 raw damage; the guard blocks all but the minimum 1.
    assert outcome.guard_absorbed == 3
    assert outcome.damage == 1
    assert player.hp == 99
    assert player.guard == 0


def test_large_guard_still_lets_one_damage_through() -> None:
    player = make_player(willpower=10)
    enemy = make_enemy(strength=8)
    player.guard = 50

    outcome = ActionResolver().resolve(enemy, player, make_skill("bite", power=1.2))

    assert outcome.damage == 1
    assert player.hp == 99
    assert player.guard == 0


def test_guard_survives_a_miss() -> None:
    enemy = make_enemy(max_hp=500)
    enemy.guard = 10

    outcome = ActionResolver().resolve(make_player(), enemy, NORMAL_ATTACK, MISS)

    assert outcome.damage == 0
    assert outcome.guard_absorbed == 0
    assert enemy.guard == 10


def test_guard_skill_sets_guard_and_charges_mp() -> None:
    player = make_player(mp=20, willpower=10)
    focus = make_skill("focus_guard", effect_type="guard", stat="willpower", power=1.0, mp_charge=10)

    outcome = ActionResolver().resolve(player, player, focus, FAST_PERFECT)

    assert outcome.guard_gained == 40
    assert player.guard == 40
    # Perfect accuracy boosts the charge by half.
    assert outcome.mp_recovered == 15
    assert player.mp == 35


def test_mp_charge_good_accuracy() -> None:
    player = make_player(mp=0)
    focus = make_skill("focus_guard", effect_type="guard", stat="willpower", mp_charge=10)

    outcome = ActionResolver().resolve(player, player, focus, TypingPerformance("Normal", "Good"))

    assert outcome.mp_recovered == 12


def test_enemy_selection_rotates_offensive_skills() -> None:
    bite = make_skill("bite")
    claw = make_skill("claw")
    enemy = make_enemy(skills=[bite, claw])

    assert select_enemy_skill(enemy, 0) is bite
    assert select_enemy_skill(enemy, 1) is claw
    assert select_enemy_skill(enemy, 2) is bite


def test_wounded_enemy_heals_when_affordable() -> None:
    bite = make_skill("bite")
    repair = make_skill("self_repair", effect_type="heal", stat="willpower", mp_cost=8)
    enemy = make_enemy(hp=10, max_hp=50, max_mp=10, skills=[bite, repair])

    assert select_enemy_skill(enemy, 0) is repair

    enemy.mp = 0
    assert select_enemy_skill(enemy, 0) is bite


def test_enemy_falls_back_to_normal_attack() -> None:
    spell = make_skill("spell", mp_cost=50)
    enemy = make_enemy(max_mp=10, skills=[spell])

    assert select_enemy_skill(enemy, 3) is NORMAL_ATTACK


def test_critical_and_evade_rates_are_clamped() -> None:
    assert calculate_critical_rate(0) == 5
    assert calculate_critical_rate(150) == 15
    assert calculate_critical_rate(1000) == 25
    assert calculate_evade_rate(0) == 5
    assert calculate_evade_rate(100) == 10
    assert calculate_evade_rate(1000) == 30


def test_critical_hit_multiplies_damage() -> None:
    enemy = make_enemy(max_hp=500, willpower=4)
    rolls = ScriptedRolls([50, 1])

    outcome = ActionResolver(rng=rolls).resolve(make_player(strength=10), enemy, NORMAL_ATTACK, FAST_PERFECT)

    # floor(38 * 1.5)
    assert outcome.is_critical
    assert not outcome.evaded
    assert outcome.damage == 57
    assert enemy.hp == 443
    assert rolls.remaining == 0


def test_evaded_hit_deals_nothing_but_still_earns_ex() -> None:
    ledger = ExPointsLedger()
    player = make_player()
    enemy = make_enemy()
    enemy.guard = 10

    outcome = ActionResolver(ledger, ScriptedRolls([0])).resolve(player, enemy, NORMAL_ATTACK, FAST_PERFECT)

    assert outcome.accepted
    assert outcome.evaded
    assert not outcome.is_critical
    assert outcome.damage == 0
    assert enemy.hp == enemy.max_hp
    assert enemy.guard == 10
    assert outcome.reward_points == 4
    assert ledger.total == 4


def test_enemy_critical_uses_unit_scalar() -> None:
    player = make_player(willpower=10)
    enemy = make_enemy(strength=8)

    outcome = ActionResolver(rng=ScriptedRolls([99, 0])).resolve(enemy, player, make_skill("bite", power=1.2))

    # floor((8 * 1.2 - 10 * 0.5) * 1.5)
    assert outcome.is_critical
    assert outcome.damage == 6
    assert player.hp == 94


def test_miss_takes_no_rolls() -> None:
    rolls = ScriptedRolls([])

    outcome = ActionResolver(rng=rolls).resolve(make_player(), make_enemy(), NORMAL_ATTACK, MISS)

    assert outcome.damage == 0
    assert not outcome.evaded
    assert not outcome.is_critical


def test_support_skills_take_no_rolls() -> None:
    player = make_player(hp=50, mp=20)
    mend = make_skill("mend", effect_type="heal", stat="willpower", power=1.5, mp_cost=10)

    outcome = ActionResolver(rng=ScriptedRolls([])).resolve(player, player, mend, FAST_PERFECT)

    assert outcome.healing == 50


def test_unknown_effect_type_raises_before_spending_mp() -> None:
    player = make_player(mp=20)
    poison = make_skill("poison", effect_type="poison", mp_cost=5)

    with pytest.raises(ValueError):
        ActionResolver().resolve(player, make_enemy(), poison, FAST_PERFECT)
    assert player.mp == 20
