"""Console-driven UI loops for TypQuest."""
from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Tuple

from typquest.core.rng import RNG
from typquest.data.repositories import (
    EnemiesRepository,
    EquipmentRepository,
    SkillsRepository,
    WordsRepository,
)
from typquest.domain.battle_models import BattleAction
from typquest.domain.defs import SkillDef
from typquest.domain.entities import Player
from typquest.domain.progression import ExPointsLedger
from typquest.domain.typing_challenge import TypingPerformance, evaluate_attempt
from typquest.presentation.cli import config, render
from typquest.presentation.cli.save_slots import SaveSlotStore
from typquest.services import Battle, BattleSaveService, ChallengeGenerator, FactoryError, SaveLoadError
from typquest.services.controllers import BattleController
from typquest.services.factories import create_enemy, create_player

logger = logging.getLogger(__name__)

MenuAction = Literal["new_battle", "load_battle", "options", "quit"]
TurnCommand = Literal["skill", "flee", "end_turn", "save", "invalid"]
_MAX_RANDOM_SEED = 2**31 - 1
_DEFAULT_PLAYER_NAME = "Hero"


@dataclass(slots=True)
class Repositories:
    enemies: EnemiesRepository
    skills: SkillsRepository
    equipment: EquipmentRepository
    words: WordsRepository


def main() -> None:
    """Start the interactive CLI session."""
    repos = _build_repositories()
    settings = config.load_config()
    print("=== TypQuest ===")
    while True:
        action = _main_menu_loop()
        if action == "quit":
            break
        if action == "options":
            settings = _options_menu(settings)
            continue
        store = SaveSlotStore(slot_count=settings["save_slot_count"])
        if action == "load_battle":
            loaded = _load_battle(repos, store)
            if loaded is None:
                continue
            battle, rng, ledger = loaded
        else:
            battle, rng, ledger = _new_battle(repos)
        _run_battle_loop(battle, repos, rng, ledger, store, settings["challenge_difficulty"])
    print("Goodbye!")


def _build_repositories() -> Repositories:
    """Construct the definition repositories backed by the bundled JSON."""
    return Repositories(
        enemies=EnemiesRepository(),
        skills=SkillsRepository(),
        equipment=EquipmentRepository(),
        words=WordsRepository(),
    )


def _main_menu_loop() -> MenuAction:
    while True:
        render.render_menu("Main Menu", ["New Battle", "Load Battle", "Options", "Quit"])
        choice = input("Select an option: ").strip()
        if choice == "1":
            return "new_battle"
        if choice == "2":
            return "load_battle"
        if choice == "3":
            return "options"
        if choice == "4":
            return "quit"
        print("Invalid selection. Please enter 1-4.")


def _options_menu(settings: Dict[str, int]) -> Dict[str, int]:
    raw = input(
        f"Challenge difficulty {config.MIN_CHALLENGE_DIFFICULTY}-{config.MAX_CHALLENGE_DIFFICULTY} "
        f"(current {settings['challenge_difficulty']}): "
    ).strip()
    if not raw:
        return settings
    try:
        difficulty = int(raw)
    except ValueError:
        print("Invalid difficulty.")
        return settings
    if not config.MIN_CHALLENGE_DIFFICULTY <= difficulty <= config.MAX_CHALLENGE_DIFFICULTY:
        print("Invalid difficulty.")
        return settings
    updated = dict(settings)
    updated["challenge_difficulty"] = difficulty
    config.save_config(updated)
    return updated


def _prompt_seed() -> int:
    while True:
        raw_value = input("Enter seed (blank for random): ").strip()
        if not raw_value:
            return secrets.randbelow(_MAX_RANDOM_SEED)
        try:
            return int(raw_value)
        except ValueError:
            print("Invalid seed. Please enter a valid integer.")


def _prompt_player_name() -> str:
    name = input(f"Enter hero name (default {_DEFAULT_PLAYER_NAME}): ").strip()
    return name or _DEFAULT_PLAYER_NAME


def _prompt_enemy_id(enemies_repo: EnemiesRepository) -> str:
    enemies = sorted(enemies_repo.all(), key=lambda enemy: (enemy.level, enemy.id))
    render.render_menu("Choose an opponent", [f"{enemy.name} (Lv {enemy.level})" for enemy in enemies])
    while True:
        raw = input("Select an enemy: ").strip()
        if raw.isdigit() and 1 <= int(raw) <= len(enemies):
            return enemies[int(raw) - 1].id
        print("Invalid selection.")


def _new_battle(repos: Repositories) -> Tuple[Battle, RNG, ExPointsLedger]:
    seed = _prompt_seed()
    rng = RNG(seed)
    player = create_player(_prompt_player_name(), 1, repos.skills, repos.equipment, rng)
    enemy = create_enemy(_prompt_enemy_id(repos.enemies), repos.enemies, repos.skills, rng)
    ledger = ExPointsLedger()
    print(f"Battle seed: {seed}")
    return Battle(player, enemy, ledger=ledger, rng=rng), rng, ledger


def _player_payload(player: Player) -> Dict[str, Any]:
    return {
        "name": player.name,
        "level": player.level,
        "skillIds": [skill.id for skill in player.skills],
        "equipmentIds": [item.id for item in player.equipment.equipped_items()],
    }


def _player_from_payload(payload: Any, repos: Repositories, rng: RNG) -> Player:
    if not isinstance(payload, Mapping):
        raise SaveLoadError("player must be an object.")
    name = payload.get("name")
    level = payload.get("level")
    skill_ids = payload.get("skillIds")
    equipment_ids = payload.get("equipmentIds")
    if not isinstance(name, str) or isinstance(level, bool) or not isinstance(level, int):
        raise SaveLoadError("player.name and player.level are required.")
    if not isinstance(skill_ids, list) or not isinstance(equipment_ids, list):
        raise SaveLoadError("player.skillIds and player.equipmentIds must be lists.")
    try:
        return create_player(
            name,
            level,
            repos.skills,
            repos.equipment,
            rng,
            skill_ids=tuple(skill_ids),
            equipment_ids=tuple(equipment_ids),
        )
    except FactoryError as exc:
        raise SaveLoadError(f"Invalid player data: {exc}") from exc


def _build_slot_payload(battle: Battle, rng: RNG, save_service: BattleSaveService) -> Dict[str, Any]:
    return {
        "seed": rng.seed,
        "player": _player_payload(battle.player),
        "battleData": save_service.serialize(battle),
    }


def _restore_from_slot_payload(
    payload: Any,
    repos: Repositories,
    save_service: BattleSaveService,
) -> Tuple[Battle, RNG, ExPointsLedger]:
    if not isinstance(payload, Mapping):
        raise SaveLoadError("Save data must be a JSON object.")
    seed = payload.get("seed")
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise SaveLoadError("seed must be an integer.")
    rng = RNG(seed)
    player = _player_from_payload(payload.get("player"), repos, rng)
    ledger = ExPointsLedger()
    battle = save_service.deserialize(payload.get("battleData"), player, rng, ledger=ledger)
    return battle, rng, ledger


def _save_service(repos: Repositories) -> BattleSaveService:
    return BattleSaveService(enemies_repo=repos.enemies, skills_repo=repos.skills)


def _prompt_slot(store: SaveSlotStore, title: str) -> int | None:
    labels: List[str] = []
    for slot in store.list_slots():
        if not slot.exists:
            labels.append(f"Slot {slot.slot}: empty")
        elif slot.is_corrupt or slot.metadata is None:
            labels.append(f"Slot {slot.slot}: corrupt")
        else:
            meta = slot.metadata
            labels.append(
                f"Slot {slot.slot}: {meta.get('enemyName')} "
                f"{meta.get('enemyHealth')}/{meta.get('enemyMaxHealth')} HP, round {meta.get('roundNumber')}"
            )
    render.render_menu(title, labels)
    raw = input("Select a slot (blank to cancel): ").strip()
    if not raw:
        return None
    if not raw.isdigit() or not 1 <= int(raw) <= store.slot_count:
        print("Invalid slot.")
        return None
    return int(raw)


def _load_battle(repos: Repositories, store: SaveSlotStore) -> Tuple[Battle, RNG, ExPointsLedger] | None:
    slot = _prompt_slot(store, "Load Battle")
    if slot is None:
        return None
    if not store.slot_exists(slot):
        print("That slot is empty.")
        return None
    try:
        payload = store.read_slot(slot)
        return _restore_from_slot_payload(payload, repos, _save_service(repos))
    except (OSError, ValueError, SaveLoadError) as exc:
        logger.warning("Failed to load slot %d: %s", slot, exc)
        print(f"Could not load slot {slot}: {exc}")
        return None


def _save_battle(battle: Battle, repos: Repositories, rng: RNG, store: SaveSlotStore) -> None:
    slot = _prompt_slot(store, "Save Battle")
    if slot is None:
        return
    store.write_slot(slot, _build_slot_payload(battle, rng, _save_service(repos)))
    print(f"Saved to slot {slot}.")


def _parse_turn_command(raw: str, skill_count: int) -> Tuple[TurnCommand, int]:
    """Map a typed menu entry to a command; skill choices carry their 0-based index."""
    value = raw.strip().lower()
    if value == "f":
        return "flee", -1
    if value == "e":
        return "end_turn", -1
    if value == "s":
        return "save", -1
    if value.isdigit() and 1 <= int(value) <= skill_count:
        return "skill", int(value) - 1
    return "invalid", -1


def _skill_label(skill: SkillDef, usable: bool) -> str:
    label = f"{skill.name} (MP {skill.mp_cost}, AP {skill.action_cost})"
    return label if usable else f"{label} [unavailable]"


def _type_challenge(
    controller: BattleController, generator: ChallengeGenerator, difficulty: int
) -> TypingPerformance:
    challenge = controller.prepare_challenge(generator, difficulty)
    print(f"Type: {challenge.word}   ({challenge.time_limit}s)")
    started = time.monotonic()
    typed = input("> ")
    elapsed = time.monotonic() - started
    performance = evaluate_attempt(challenge, typed.strip(), elapsed)
    print(f"{performance.speed_rating.value} / {performance.accuracy_rating.value}")
    return performance


def _run_player_turn(
    controller: BattleController,
    repos: Repositories,
    generator: ChallengeGenerator,
    rng: RNG,
    store: SaveSlotStore,
    difficulty: int,
) -> None:
    available = controller.get_available_actions()
    skills = available["skills"]
    options = [_skill_label(skill, usable) for skill, usable in skills]
    render.render_menu(f"Actions ({available['action_points']} AP)", options)
    print("f. Flee   e. End turn   s. Save")
    command, index = _parse_turn_command(input("Choose: "), len(skills))
    if command == "invalid":
        print("Invalid selection.")
        return
    if command == "save":
        _save_battle(controller.battle, repos, rng, store)
        return
    if command == "flee":
        render.render_events(controller.apply_player_action(BattleAction(action_type="flee")))
        return
    if command == "end_turn":
        render.render_events(controller.apply_player_action(BattleAction(action_type="end_turn")))
        return
    skill, usable = skills[index]
    if not usable:
        print("You cannot use that right now.")
        return
    challenge_difficulty = min(max(difficulty, skill.typing_difficulty), config.MAX_CHALLENGE_DIFFICULTY)
    performance = _type_challenge(controller, generator, challenge_difficulty)
    events = controller.apply_player_action(BattleAction(action_type="skill", skill_id=skill.id), performance)
    render.render_events(events)


def _run_battle_loop(
    battle: Battle,
    repos: Repositories,
    rng: RNG,
    ledger: ExPointsLedger,
    store: SaveSlotStore,
    difficulty: int,
) -> None:
    controller = BattleController(battle)
    generator = ChallengeGenerator(repos.words, rng)
    if not battle.is_active and not battle.is_over:
        render.render_events(controller.start())
    while battle.is_active:
        render.render_battle_status(battle)
        if controller.is_player_turn():
            _run_player_turn(controller, repos, generator, rng, store, difficulty)
        elif controller.is_enemy_turn():
            render.render_events(controller.run_enemy_turn())
    result = controller.get_result()
    if result is None:
        return
    render.render_heading("Result")
    print(f"{result.outcome.value} against {result.enemy_name} in {result.turns} turns.")
    print(f"EX earned: {result.reward_points} (ledger total {ledger.total})")
    if result.drop_eligible:
        drops = battle.roll_drops(rng)
        if drops:
            render.render_bullet_lines(f"Dropped: {item_id}" for item_id in drops)
        else:
            print("No items dropped.")
