"""Skills repository."""
from __future__ import annotations

from typing import Dict

from typquest.data.errors import DataValidationError
from typquest.data.repositories.base import RepositoryBase
from typquest.domain.defs import NORMAL_ATTACK, SkillDef

VALID_EFFECT_TYPES = {"damage", "heal", "guard"}
VALID_TARGETS = {"enemy", "self"}
VALID_STATS = {"strength", "willpower"}


class SkillsRepository(RepositoryBase[SkillDef]):
    """Loads typing skills shared by players and enemies."""

    def __init__(self, base_path=None) -> None:
        super().__init__("skills.json", base_path)

    def get(self, def_id: str) -> SkillDef:
        if def_id == NORMAL_ATTACK.id:
            return NORMAL_ATTACK
        return super().get(def_id)

    def _build(self, raw: dict[str, object]) -> Dict[str, SkillDef]:
        skills: Dict[str, SkillDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Skill IDs must be strings.")
            if raw_id == NORMAL_ATTACK.id:
                raise DataValidationError(f"Skill id '{raw_id}' is reserved.")
            context = f"skill '{raw_id}'"
            skill_data = self._require_mapping(payload, context)
            self._assert_required(
                skill_data,
                {"name", "effect_type", "target", "stat", "power", "mp_cost", "typing_difficulty"},
                context,
            )
            effect_type = self._require_literal(skill_data["effect_type"], VALID_EFFECT_TYPES, f"{context} effect_type")
            target = self._require_literal(skill_data["target"], VALID_TARGETS, f"{context} target")
            if effect_type == "damage" and target != "enemy":
                raise DataValidationError(f"{context} damage skills must target the enemy.")
            if effect_type != "damage" and target != "self":
                raise DataValidationError(f"{context} {effect_type} skills must target self.")
            power = self._require_number(skill_data["power"], f"{context} power")
            if power <= 0:
                raise DataValidationError(f"{context} power must be positive.")

            skills[raw_id] = SkillDef(
                id=raw_id,
                name=self._require_str(skill_data["name"], f"{context} name"),
                description=self._require_str(skill_data.get("description", ""), f"{context} description"),
                effect_type=effect_type,
                target=target,
                stat=self._require_literal(skill_data["stat"], VALID_STATS, f"{context} stat"),
                power=power,
                mp_cost=self._require_int(skill_data["mp_cost"], f"{context} mp_cost", minimum=0),
                mp_charge=self._require_int(skill_data.get("mp_charge", 0), f"{context} mp_charge", minimum=0),
                action_cost=self._require_int(skill_data.get("action_cost", 1), f"{context} action_cost", minimum=1),
                typing_difficulty=self._require_int(
                    skill_data["typing_difficulty"], f"{context} typing_difficulty", minimum=1
                ),
            )
        return skills
