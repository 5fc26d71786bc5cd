"""File-system helpers for battle save slots."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from typquest.presentation.cli import config

logger = logging.getLogger(__name__)

_SUMMARY_KEYS = ("enemyName", "enemyHealth", "enemyMaxHealth", "phase", "roundNumber", "savedAt")


@dataclass(slots=True)
class SlotMetadata:
    """Describes the contents of a save slot for menu display."""

    slot: int
    exists: bool
    metadata: Dict[str, Any] | None = None
    is_corrupt: bool = False


class SaveSlotStore:
    """Handles slot-based persistence on disk."""

    def __init__(self, base_dir: Path | str | None = None, slot_count: int = config.DEFAULT_SAVE_SLOT_COUNT) -> None:
        if slot_count < 1:
            raise ValueError("slot_count must be at least 1.")
        self._base_dir = Path(base_dir) if base_dir is not None else config.get_save_dir()
        self._slot_count = slot_count

    @property
    def slot_count(self) -> int:
        return self._slot_count

    def list_slots(self) -> List[SlotMetadata]:
        """Return a battle summary for each configured slot."""
        slots: List[SlotMetadata] = []
        for slot_index in range(1, self._slot_count + 1):
            path = self._slot_path(slot_index)
            if not path.exists():
                slots.append(SlotMetadata(slot=slot_index, exists=False))
                continue
            try:
                payload = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                logger.warning("Save slot %d is corrupt: %s", slot_index, exc)
                slots.append(SlotMetadata(slot=slot_index, exists=True, is_corrupt=True))
                continue
            battle_data = payload.get("battleData") if isinstance(payload, dict) else None
            if not isinstance(battle_data, dict):
                logger.warning("Save slot %d has no battle data.", slot_index)
                slots.append(SlotMetadata(slot=slot_index, exists=True, is_corrupt=True))
                continue
            metadata = {key: battle_data.get(key) for key in _SUMMARY_KEYS}
            slots.append(SlotMetadata(slot=slot_index, exists=True, metadata=metadata))
        return slots

    def slot_exists(self, slot: int) -> bool:
        """Return True if the slot has data on disk."""
        self._validate_slot(slot)
        return self._slot_path(slot).exists()

    def read_slot(self, slot: int) -> Dict[str, Any]:
        """Load and parse the payload stored in the requested slot."""
        self._validate_slot(slot)
        text = self._slot_path(slot).read_text(encoding="utf-8")
        return json.loads(text)

    def write_slot(self, slot: int, payload: Dict[str, Any]) -> None:
        """Persist the payload into the requested slot."""
        self._validate_slot(slot)
        self._base_dir.mkdir(parents=True, exist_ok=True)
        path = self._slot_path(slot)
        path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        logger.debug("Wrote save slot %d to %s", slot, path)

    def delete_slot(self, slot: int) -> None:
        """Delete the requested slot payload if it exists."""
        self._validate_slot(slot)
        try:
            self._slot_path(slot).unlink()
        except FileNotFoundError:
            return

    def _slot_path(self, slot: int) -> Path:
        return self._base_dir / f"slot_{slot}.json"

    def _validate_slot(self, slot: int) -> None:
        if not 1 <= slot <= self._slot_count:
            raise ValueError(f"Slot index must be between 1 and {self._slot_count}.")
