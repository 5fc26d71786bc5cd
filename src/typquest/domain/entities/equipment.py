"""Equipment runtime models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from typquest.domain.defs import EQUIPMENT_SLOTS, EquipmentDef


def _default_slots() -> Dict[str, EquipmentDef | None]:
    return {slot: None for slot in EQUIPMENT_SLOTS}


@dataclass(slots=True)
class EquipmentLoadout:
    """Ordered equipment slots, each optionally holding one item."""

    slots: Dict[str, EquipmentDef | None] = field(default_factory=_default_slots)

    def equip(self, item: EquipmentDef) -> EquipmentDef | None:
        """Place an item in its slot and return whatever it replaced."""
        self._validate_slot(item.slot)
        previous = self.slots.get(item.slot)
        self.slots[item.slot] = item
        return previous

    def unequip(self, slot: str) -> EquipmentDef | None:
        self._validate_slot(slot)
        previous = self.slots.get(slot)
        self.slots[slot] = None
        return previous

    def equipped_items(self) -> List[EquipmentDef]:
        """Return equipped items in slot order."""
        items: List[EquipmentDef] = []
        for slot in EQUIPMENT_SLOTS:
            item = self.slots.get(slot)
            if item is not None:
                items.append(item)
        return items

    @staticmethod
    def _validate_slot(slot: str) -> None:
        if slot not in EQUIPMENT_SLOTS:
            raise ValueError(f"Unknown equipment slot '{slot}'.")
