from __future__ import annotations

from typing import Sequence

from typquest.domain.defs import DropDef, SkillDef
from typquest.domain.entities import Enemy, Player, StatBlock


def make_player(
    *,
    hp: int | None = None,
    mp: int | None = None,
    max_hp: int = 100,
    max_mp: int = 50,
    strength: int = 10,
    willpower: int = 10,
    agility: int = 10,
    fortune: int = 10,
    skills: Sequence[SkillDef] = (),
    player_id: str = "player_1",
) -> Player:
    stats = StatBlock(
        max_hp=max_hp,
        max_mp=max_mp,
        strength=strength,
        willpower=willpower,
        agility=agility,
        fortune=fortune,
    )
    return Player(
        id=player_id,
        name="Hero",
        level=1,
        base_stats=stats,
        hp=max_hp if hp is None else hp,
        mp=max_mp if mp is None else mp,
        skills=tuple(skills),
    )


def make_enemy(
    *,
    hp: int | None = None,
    mp: int | None = None,
    max_hp: int = 50,
    max_mp: int = 0,
    strength: int = 8,
    willpower: int = 4,
    agility: int = 6,
    fortune: int = 2,
    skills: Sequence[SkillDef] = (),
    drops: Sequence[DropDef] = (),
    enemy_id: str = "enemy_1",
) -> Enemy:
    stats = StatBlock(
        max_hp=max_hp,
        max_mp=max_mp,
        strength=strength,
        willpower=willpower,
        agility=agility,
        fortune=fortune,
    )
    return Enemy(
        id=enemy_id,
        name="Bug Sprite",
        level=1,
        base_stats=stats,
        hp=max_hp if hp is None else hp,
        mp=max_mp if mp is None else mp,
        skills=tuple(skills),
        enemy_id="bug_sprite",
        drops=tuple(drops),
    )


def make_skill(
    skill_id: str,
    *,
    effect_type: str = "damage",
    target: str | None = None,
    stat: str = "strength",
    power: float = 1.0,
    mp_cost: int = 0,
    mp_charge: int = 0,
    action_cost: int = 1,
) -> SkillDef:
    if target is None:
        target = "enemy" if effect_type == "damage" else "self"
    return SkillDef(
        id=skill_id,
        name=skill_id.replace("_", " ").title(),
        description="",
        effect_type=effect_type,  # type: ignore[arg-type]
        target=target,  # type: ignore[arg-type]
        stat=stat,  # type: ignore[arg-type]
        power=power,
        mp_cost=mp_cost,
        mp_charge=mp_charge,
        action_cost=action_cost,
    )


class ScriptedRolls:
    """Stands in for RNG.roll_percent with a fixed list of rolls, consumed in order."""

    def __init__(self, rolls: Sequence[float]) -> None:
        self._rolls = list(rolls)

    @property
    def remaining(self) -> int:
        return len(self._rolls)

    def roll_percent(self) -> float:
        return self._rolls.pop(0)
