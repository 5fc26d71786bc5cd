"""Skill definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SkillEffectType = Literal["damage", "heal", "guard"]
SkillTarget = Literal["enemy", "self"]
SkillStat = Literal["strength", "willpower"]


@dataclass(frozen=True, slots=True)
class SkillDef:
    """Describes a combat skill usable through a typing challenge."""

    id: str
    name: str
    description: str
    effect_type: SkillEffectType
    target: SkillTarget
    stat: SkillStat
    power: float
    mp_cost: int
    mp_charge: int = 0
    action_cost: int = 1
    typing_difficulty: int = 1


NORMAL_ATTACK = SkillDef(
    id="normal_attack",
    name="Attack",
    description="A basic attack.",
    effect_type="damage",
    target="enemy",
    stat="strength",
    power=1.0,
    mp_cost=0,
    action_cost=1,
    typing_difficulty=1,
)
