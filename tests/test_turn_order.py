from __future__ import annotations

from typquest.domain.defs import EquipmentDef
from typquest.domain.turn_order import compute_turn_order
from tests.helpers.builders import make_enemy, make_player


def test_faster_combatant_goes_first() -> None:
    player = make_player(agility=5)
    enemy = make_enemy(agility=12)

    assert compute_turn_order([player, enemy]) == [enemy.id, player.id]


def test_player_wins_agility_ties() -> None:
    player = make_player(agility=8)
    enemy = make_enemy(agility=8)

    assert compute_turn_order([enemy, player]) == [player.id, enemy.id]


def test_equipment_agility_counts() -> None:
    player = make_player(agility=5)
    enemy = make_enemy(agility=8)
    player.equipment.equip(EquipmentDef(id="boots", name="Boots", slot="accessory", agility=10))

    assert compute_turn_order([player, enemy])[0] == player.id


def test_defeated_combatants_are_skipped() -> None:
    player = make_player()
    enemy = make_enemy(hp=0)

    assert compute_turn_order([player, enemy]) == [player.id]
