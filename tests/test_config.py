from __future__ import annotations

import json
from pathlib import Path

from typquest.presentation.cli import config


def test_defaults_when_missing(tmp_path: Path) -> None:
    assert config.load_config(tmp_path / "config.json") == {
        "challenge_difficulty": 2,
        "save_slot_count": 3,
    }


def test_defaults_when_corrupt(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{broken", encoding="utf-8")

    assert config.load_config(path) == config.default_config()


def test_out_of_range_values_fall_back(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"challenge_difficulty": 9, "save_slot_count": 0}), encoding="utf-8")

    assert config.load_config(path) == config.default_config()


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    config.save_config({"challenge_difficulty": 4, "save_slot_count": 5}, path)

    assert config.load_config(path) == {"challenge_difficulty": 4, "save_slot_count": 5}


def test_user_data_dir_on_posix(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(config.os, "name", "posix")
    monkeypatch.setattr(config.Path, "home", classmethod(lambda cls: tmp_path))

    assert config.get_user_data_dir() == tmp_path / ".config" / "typquest"
    assert config.get_save_dir() == tmp_path / ".config" / "typquest" / "saves"
