from __future__ import annotations

import json

import pytest

from typquest.core.rng import RNG
from typquest.core.types import BattlePhase
from typquest.data.repositories import EnemiesRepository, EquipmentRepository, SkillsRepository
from typquest.domain.battle_models import BattleAction
from typquest.domain.ratings import AccuracyRating, SpeedRating
from typquest.domain.typing_challenge import TypingChallenge, TypingPerformance
from typquest.services import Battle, BattleSaveService, SaveLoadError
from typquest.services.factories import create_enemy, create_player

FAST_GOOD = TypingPerformance(SpeedRating.FAST, AccuracyRating.GOOD)


def _make_service() -> BattleSaveService:
    return BattleSaveService(enemies_repo=EnemiesRepository(), skills_repo=SkillsRepository())


def _make_player(seed: int = 1):
    return create_player("Tester", 1, SkillsRepository(), EquipmentRepository(), RNG(seed))


def _make_battle_in_progress() -> Battle:
    rng = RNG(42)
    player = create_player("Tester", 1, SkillsRepository(), EquipmentRepository(), rng)
    enemy = create_enemy("memory_leak", EnemiesRepository(), SkillsRepository(), rng)
    battle = Battle(player, enemy)
    battle.start()
    battle.take_turn(player.id, BattleAction(action_type="skill", skill_id="normal_attack"), FAST_GOOD)
    battle.present_challenge(TypingChallenge(word="stack", time_limit=4, difficulty=2))
    return battle


def test_serialize_contains_battle_data_keys() -> None:
    battle = _make_battle_in_progress()

    payload = _make_service().serialize(battle)

    assert payload["enemyName"] == "Memory Leak"
    assert payload["enemyMaxHealth"] == 90
    assert payload["enemyHealth"] == battle.enemy.hp
    assert payload["currentChallenge"] == {"word": "stack", "timeLimit": 4, "difficulty": 2}
    assert payload["phase"] == "Active"
    assert payload["turnOrder"] == ["player", "enemy"]
    assert payload["playerGuard"] == 0
    assert payload["enemyGuard"] == 0
    assert payload["saveVersion"] == BattleSaveService.SAVE_VERSION


def test_round_trip_reproduces_battle() -> None:
    service = _make_service()
    battle = _make_battle_in_progress()
    payload = json.loads(json.dumps(service.serialize(battle)))

    restored = service.deserialize(payload, _make_player(seed=7), RNG(7))

    assert restored.snapshot() == battle.snapshot()
    assert restored.phase is BattlePhase.ACTIVE
    assert restored.get_current_turn_actor() is restored.player


def test_restored_battle_keeps_playing() -> None:
    service = _make_service()
    payload = service.serialize(_make_battle_in_progress())
    restored = service.deserialize(payload, _make_player(), RNG(7))

    events = restored.take_turn(
        restored.player.id,
        BattleAction(action_type="skill", skill_id="normal_attack"),
        FAST_GOOD,
    )

    assert events
    assert restored.action_points_remaining == 1


def test_deserialize_rejects_wrong_version() -> None:
    service = _make_service()
    payload = service.serialize(_make_battle_in_progress())
    payload["saveVersion"] = 99

    with pytest.raises(SaveLoadError):
        service.deserialize(payload, _make_player(), RNG(1))


@pytest.mark.parametrize(
    "key, value",
    [
        ("enemyId", "dragon"),
        ("enemyName", "Someone Else"),
        ("enemyMaxHealth", 12),
        ("enemyHealth", 500),
        ("enemyHealth", "lots"),
        ("playerMana", -1),
        ("phase", "Sleeping"),
        ("phase", "Idle"),
        ("turnOrder", ["player", "player"]),
        ("turnOrder", ["boss"]),
        ("turnIndex", 5),
        ("rewardPoints", True),
        ("enemyHealth", 0),
        ("playerHealth", 0),
        ("playerGuard", -1),
        ("enemyGuard", "high"),
        ("currentChallenge", {"word": "", "timeLimit": 3, "difficulty": 1}),
        ("currentChallenge", "stack"),
    ],
)
def test_deserialize_rejects_invalid_fields(key: str, value: object) -> None:
    service = _make_service()
    payload = service.serialize(_make_battle_in_progress())
    payload[key] = value

    with pytest.raises(SaveLoadError):
        service.deserialize(payload, _make_player(), RNG(1))


def test_deserialize_rejects_non_mapping() -> None:
    with pytest.raises(SaveLoadError):
        _make_service().deserialize(["not", "a", "dict"], _make_player(), RNG(1))


def test_round_trip_keeps_pending_guard() -> None:
    service = _make_service()
    battle = _make_battle_in_progress()
    battle.player.guard = 7
    battle.enemy.guard = 2
    payload = json.loads(json.dumps(service.serialize(battle)))

    restored = service.deserialize(payload, _make_player(seed=7), RNG(7))

    assert payload["playerGuard"] == 7
    assert payload["enemyGuard"] == 2
    assert restored.player.guard == 7
    assert restored.enemy.guard == 2
    assert restored.snapshot() == battle.snapshot()


def test_missing_guard_fields_are_rejected() -> None:
    service = _make_service()
    payload = service.serialize(_make_battle_in_progress())
    del payload["playerGuard"]

    with pytest.raises(SaveLoadError):
        service.deserialize(payload, _make_player(), RNG(1))
