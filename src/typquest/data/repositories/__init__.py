"""Repository exports."""

from .enemies_repo import EnemiesRepository
from .equipment_repo import EquipmentRepository
from .skills_repo import SkillsRepository
from .words_repo import WordsRepository

__all__ = [
    "EnemiesRepository",
    "EquipmentRepository",
    "SkillsRepository",
    "WordsRepository",
]
