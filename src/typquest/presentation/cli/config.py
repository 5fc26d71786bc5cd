"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

DEFAULT_CHALLENGE_DIFFICULTY = 2
MIN_CHALLENGE_DIFFICULTY = 1
MAX_CHALLENGE_DIFFICULTY = 5
DEFAULT_SAVE_SLOT_COUNT = 3


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "TypQuest"
        return Path.home() / "TypQuest"
    return Path.home() / ".config" / "typquest"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_save_dir() -> Path:
    """Return the per-user save directory."""
    return get_user_data_dir() / "saves"


def default_config() -> Dict[str, int]:
    return {
        "challenge_difficulty": DEFAULT_CHALLENGE_DIFFICULTY,
        "save_slot_count": DEFAULT_SAVE_SLOT_COUNT,
    }


def _normalize_difficulty(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_CHALLENGE_DIFFICULTY
    if not MIN_CHALLENGE_DIFFICULTY <= value <= MAX_CHALLENGE_DIFFICULTY:
        return DEFAULT_CHALLENGE_DIFFICULTY
    return value


def _normalize_slot_count(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return DEFAULT_SAVE_SLOT_COUNT
    return value


def _normalize(raw: Dict[str, object]) -> Dict[str, int]:
    return {
        "challenge_difficulty": _normalize_difficulty(raw.get("challenge_difficulty")),
        "save_slot_count": _normalize_slot_count(raw.get("save_slot_count")),
    }


def load_config(path: Path | None = None) -> Dict[str, int]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return default_config()
    if not isinstance(raw, dict):
        return default_config()
    return _normalize(raw)


def save_config(config: Dict[str, int], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = _normalize(dict(config))
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
