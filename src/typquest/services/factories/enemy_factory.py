"""Factory for creating enemy instances from definitions."""
from __future__ import annotations

from typing import List

from typquest.core.rng import RNG
from typquest.data.repositories import EnemiesRepository, SkillsRepository
from typquest.domain.defs import SkillDef
from typquest.domain.entities import Enemy, StatBlock
from typquest.services.errors import FactoryError

from .id_factory import make_instance_id


def create_enemy(
    enemy_id: str,
    enemies_repo: EnemiesRepository,
    skills_repo: SkillsRepository,
    rng: RNG,
) -> Enemy:
    """Instantiate an enemy at full HP/MP using the provided repositories."""
    try:
        enemy_def = enemies_repo.get(enemy_id)
    except KeyError as exc:
        raise FactoryError(f"Enemy '{enemy_id}' not found.") from exc

    skills: List[SkillDef] = []
    for skill_id in enemy_def.skill_ids:
        try:
            skills.append(skills_repo.get(skill_id))
        except KeyError as exc:
            raise FactoryError(f"Skill '{skill_id}' not found for enemy '{enemy_id}'.") from exc

    stats = StatBlock(
        max_hp=enemy_def.max_hp,
        max_mp=enemy_def.max_mp,
        strength=enemy_def.strength,
        willpower=enemy_def.willpower,
        agility=enemy_def.agility,
        fortune=enemy_def.fortune,
    )
    return Enemy(
        id=make_instance_id("enemy", rng),
        name=enemy_def.name,
        level=enemy_def.level,
        base_stats=stats,
        hp=stats.max_hp,
        mp=stats.max_mp,
        skills=tuple(skills),
        enemy_id=enemy_def.id,
        description=enemy_def.description,
        drops=enemy_def.drops,
        tags=enemy_def.tags,
    )
