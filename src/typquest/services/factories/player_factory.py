"""Factory for creating the player from a level and starting loadout."""
from __future__ import annotations

from typing import List, Sequence

from typquest.core.rng import RNG
from typquest.data.repositories import EquipmentRepository, SkillsRepository
from typquest.domain.defs import SkillDef
from typquest.domain.entities import EquipmentLoadout, Player, StatBlock
from typquest.services.errors import FactoryError

from .id_factory import make_instance_id

BASE_HP = 100
HP_PER_LEVEL = 20
BASE_MP = 50
MP_PER_LEVEL = 10
BASE_COMBAT_STAT = 10
COMBAT_STAT_PER_LEVEL = 2

DEFAULT_SKILL_IDS: tuple[str, ...] = ("power_strike", "mend", "focus_guard")


def player_stats_for_level(level: int) -> StatBlock:
    """Base stats for a player of the given level; growth starts above level 1."""
    if level < 1:
        raise FactoryError("Player level must be at least 1.")
    gained = level - 1
    combat = BASE_COMBAT_STAT + COMBAT_STAT_PER_LEVEL * gained
    return StatBlock(
        max_hp=BASE_HP + HP_PER_LEVEL * gained,
        max_mp=BASE_MP + MP_PER_LEVEL * gained,
        strength=combat,
        willpower=combat,
        agility=combat,
        fortune=combat,
    )


def create_player(
    name: str,
    level: int,
    skills_repo: SkillsRepository,
    equipment_repo: EquipmentRepository,
    rng: RNG,
    *,
    skill_ids: Sequence[str] = DEFAULT_SKILL_IDS,
    equipment_ids: Sequence[str] = (),
) -> Player:
    """Instantiate a player at full HP/MP with the requested skills and equipment."""
    if not name:
        raise FactoryError("Player name must not be empty.")
    stats = player_stats_for_level(level)

    skills: List[SkillDef] = []
    for skill_id in skill_ids:
        try:
            skills.append(skills_repo.get(skill_id))
        except KeyError as exc:
            raise FactoryError(f"Skill '{skill_id}' not found.") from exc

    loadout = EquipmentLoadout()
    for equipment_id in equipment_ids:
        try:
            item = equipment_repo.get(equipment_id)
        except KeyError as exc:
            raise FactoryError(f"Equipment '{equipment_id}' not found.") from exc
        if loadout.equip(item) is not None:
            raise FactoryError(f"Equipment slot '{item.slot}' is assigned twice.")

    return Player(
        id=make_instance_id("player", rng),
        name=name,
        level=level,
        base_stats=stats,
        hp=stats.max_hp,
        mp=stats.max_mp,
        skills=tuple(skills),
        equipment=loadout,
    )
