"""Domain definition exports."""

from .enemy_def import DropDef, EnemyDef
from .equipment_def import EQUIPMENT_SLOTS, EquipmentDef, StatDelta
from .skill_def import NORMAL_ATTACK, SkillDef, SkillEffectType, SkillStat, SkillTarget

__all__ = [
    "DropDef",
    "EQUIPMENT_SLOTS",
    "EnemyDef",
    "EquipmentDef",
    "NORMAL_ATTACK",
    "SkillDef",
    "SkillEffectType",
    "SkillStat",
    "SkillTarget",
    "StatDelta",
]
