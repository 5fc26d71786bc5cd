"""Enemies repository."""
from __future__ import annotations

from typing import Dict, List

from typquest.data.errors import DataValidationError
from typquest.data.repositories.base import RepositoryBase
from typquest.domain.defs import DropDef, EnemyDef


class EnemiesRepository(RepositoryBase[EnemyDef]):
    """Loads and validates enemy definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyDef]:
        enemies: Dict[str, EnemyDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Enemy IDs must be strings.")
            context = f"enemy '{raw_id}'"
            enemy_data = self._require_mapping(payload, context)
            required_fields = {
                "name",
                "level",
                "hp",
                "mp",
                "strength",
                "willpower",
                "agility",
                "fortune",
            }
            self._assert_required(enemy_data, required_fields, context)

            enemies[raw_id] = EnemyDef(
                id=raw_id,
                name=self._require_str(enemy_data["name"], f"{context} name"),
                description=self._require_str(enemy_data.get("description", ""), f"{context} description"),
                level=self._require_int(enemy_data["level"], f"{context} level", minimum=1),
                max_hp=self._require_int(enemy_data["hp"], f"{context} hp", minimum=1),
                max_mp=self._require_int(enemy_data["mp"], f"{context} mp", minimum=0),
                strength=self._require_int(enemy_data["strength"], f"{context} strength", minimum=0),
                willpower=self._require_int(enemy_data["willpower"], f"{context} willpower", minimum=0),
                agility=self._require_int(enemy_data["agility"], f"{context} agility", minimum=0),
                fortune=self._require_int(enemy_data["fortune"], f"{context} fortune", minimum=0),
                skill_ids=tuple(self._require_str_list(enemy_data.get("skills", []), f"{context} skills")),
                drops=tuple(self._build_drops(enemy_data.get("drops", []), context)),
                tags=tuple(self._require_str_list(enemy_data.get("tags", []), f"{context} tags")),
            )
        return enemies

    def find_by_name(self, name: str) -> EnemyDef:
        """Return the first definition whose display name matches."""
        for enemy_def in self.all():
            if enemy_def.name == name:
                return enemy_def
        raise KeyError(name)

    def _build_drops(self, value: object, context: str) -> List[DropDef]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} drops must be a list.")
        drops: List[DropDef] = []
        for index, entry in enumerate(value):
            entry_context = f"{context} drops[{index}]"
            drop_data = self._require_mapping(entry, entry_context)
            self._assert_required(drop_data, {"item_id", "drop_rate"}, entry_context)
            drop_rate = self._require_number(drop_data["drop_rate"], f"{entry_context} drop_rate")
            if not 0 <= drop_rate <= 100:
                raise DataValidationError(f"{entry_context} drop_rate must be between 0 and 100.")
            drops.append(
                DropDef(
                    item_id=self._require_str(drop_data["item_id"], f"{entry_context} item_id"),
                    drop_rate=drop_rate,
                )
            )
        return drops
