from __future__ import annotations

import json
from pathlib import Path

import pytest

from typquest.data.errors import DataLoadError, DataValidationError
from typquest.data.repositories import (
    EnemiesRepository,
    EquipmentRepository,
    SkillsRepository,
    WordsRepository,
)
from typquest.domain.defs import NORMAL_ATTACK


def _write(tmp_path: Path, filename: str, payload: object) -> Path:
    (tmp_path / filename).write_text(json.dumps(payload), encoding="utf-8")
    return tmp_path


def test_bundled_definitions_load() -> None:
    assert EnemiesRepository().all()
    assert SkillsRepository().all()
    assert EquipmentRepository().all()
    assert WordsRepository().levels() == [1, 2, 3, 4, 5]


def test_enemy_definition_fields() -> None:
    enemy = EnemiesRepository().get("bug_sprite")

    assert enemy.name == "Bug Sprite"
    assert enemy.max_hp == 50
    assert enemy.skill_ids == ("bite",)
    assert enemy.drops[0].item_id == "debug_gloves"


def test_enemy_lookup_by_name() -> None:
    assert EnemiesRepository().find_by_name("Memory Leak").id == "memory_leak"
    with pytest.raises(KeyError):
        EnemiesRepository().find_by_name("Nobody")


def test_enemy_skill_references_exist() -> None:
    skills_repo = SkillsRepository()
    for enemy in EnemiesRepository().all():
        for skill_id in enemy.skill_ids:
            skills_repo.get(skill_id)


def test_normal_attack_is_always_available() -> None:
    assert SkillsRepository().get("normal_attack") is NORMAL_ATTACK


def test_unknown_id_raises_key_error() -> None:
    with pytest.raises(KeyError):
        SkillsRepository().get("does_not_exist")


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    with pytest.raises(DataLoadError):
        EnemiesRepository(base_path=tmp_path).all()


def test_invalid_json_raises_load_error(tmp_path: Path) -> None:
    (tmp_path / "skills.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(DataLoadError):
        SkillsRepository(base_path=tmp_path).all()


def test_enemy_missing_fields_rejected(tmp_path: Path) -> None:
    base = _write(tmp_path, "enemies.json", {"slime": {"name": "Slime", "level": 1}})
    with pytest.raises(DataValidationError):
        EnemiesRepository(base_path=base).all()


def test_drop_rate_out_of_range_rejected(tmp_path: Path) -> None:
    payload = {
        "slime": {
            "name": "Slime",
            "level": 1,
            "hp": 10,
            "mp": 0,
            "strength": 1,
            "willpower": 1,
            "agility": 1,
            "fortune": 1,
            "drops": [{"item_id": "goo", "drop_rate": 150}],
        }
    }
    with pytest.raises(DataValidationError):
        EnemiesRepository(base_path=_write(tmp_path, "enemies.json", payload)).all()


def test_heal_skill_must_target_self(tmp_path: Path) -> None:
    payload = {
        "drain": {
            "name": "Drain",
            "effect_type": "heal",
            "target": "enemy",
            "stat": "willpower",
            "power": 1.0,
            "mp_cost": 1,
            "typing_difficulty": 1,
        }
    }
    with pytest.raises(DataValidationError):
        SkillsRepository(base_path=_write(tmp_path, "skills.json", payload)).all()


def test_reserved_skill_id_rejected(tmp_path: Path) -> None:
    payload = {
        "normal_attack": {
            "name": "Attack",
            "effect_type": "damage",
            "target": "enemy",
            "stat": "strength",
            "power": 1.0,
            "mp_cost": 0,
            "typing_difficulty": 1,
        }
    }
    with pytest.raises(DataValidationError):
        SkillsRepository(base_path=_write(tmp_path, "skills.json", payload)).all()


def test_equipment_unknown_bonus_rejected(tmp_path: Path) -> None:
    payload = {"ring": {"name": "Ring", "slot": "accessory", "bonuses": {"charisma": 3}}}
    with pytest.raises(DataValidationError):
        EquipmentRepository(base_path=_write(tmp_path, "equipment.json", payload)).all()


def test_equipment_unknown_slot_rejected(tmp_path: Path) -> None:
    payload = {"cape": {"name": "Cape", "slot": "back"}}
    with pytest.raises(DataValidationError):
        EquipmentRepository(base_path=_write(tmp_path, "equipment.json", payload)).all()


def test_empty_word_pool_rejected(tmp_path: Path) -> None:
    with pytest.raises(DataValidationError):
        WordsRepository(base_path=_write(tmp_path, "words.json", {"1": []})).all()
