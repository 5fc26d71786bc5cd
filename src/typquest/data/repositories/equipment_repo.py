"""Equipment repository."""
from __future__ import annotations

from typing import Dict

from typquest.data.errors import DataValidationError
from typquest.data.repositories.base import RepositoryBase
from typquest.domain.defs import EQUIPMENT_SLOTS, EquipmentDef


class EquipmentRepository(RepositoryBase[EquipmentDef]):
    """Loads and validates equippable item definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("equipment.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EquipmentDef]:
        equipment: Dict[str, EquipmentDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Equipment IDs must be strings.")
            context = f"equipment '{raw_id}'"
            item_data = self._require_mapping(payload, context)
            self._assert_required(item_data, {"name", "slot"}, context)
            bonuses = self._require_mapping(item_data.get("bonuses", {}), f"{context} bonuses")
            unknown = set(bonuses) - {"strength", "willpower", "agility", "fortune"}
            if unknown:
                raise DataValidationError(f"{context} bonuses has unknown stats: {sorted(unknown)}")

            equipment[raw_id] = EquipmentDef(
                id=raw_id,
                name=self._require_str(item_data["name"], f"{context} name"),
                slot=self._require_literal(item_data["slot"], set(EQUIPMENT_SLOTS), f"{context} slot"),
                strength=self._require_int(bonuses.get("strength", 0), f"{context} strength"),
                willpower=self._require_int(bonuses.get("willpower", 0), f"{context} willpower"),
                agility=self._require_int(bonuses.get("agility", 0), f"{context} agility"),
                fortune=self._require_int(bonuses.get("fortune", 0), f"{context} fortune"),
                value=self._require_int(item_data.get("value", 0), f"{context} value", minimum=0),
            )
        return equipment
