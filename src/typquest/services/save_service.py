"""Serialization helpers for saving and resuming an in-progress battle."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Tuple

from typquest.core.rng import RNG
from typquest.core.types import BattlePhase, Side
from typquest.data.repositories import EnemiesRepository, SkillsRepository
from typquest.domain.battle_models import BattleSnapshot
from typquest.domain.entities import Player
from typquest.domain.progression import ProgressionLedger
from typquest.domain.typing_challenge import TypingChallenge
from typquest.services.battle_service import Battle
from typquest.services.errors import FactoryError, SaveLoadError
from typquest.services.factories import create_enemy

logger = logging.getLogger(__name__)

SavePayload = Dict[str, Any]
_VALID_SIDES: tuple[Side, ...] = ("player", "enemy")


class BattleSaveService:
    """Converts a battle to/from a validated, versioned battleData payload."""

    SAVE_VERSION = 1

    def __init__(self, *, enemies_repo: EnemiesRepository, skills_repo: SkillsRepository) -> None:
        self._enemies_repo = enemies_repo
        self._skills_repo = skills_repo

    def serialize(self, battle: Battle) -> SavePayload:
        """Return a JSON-serializable battleData payload for disk persistence."""
        snapshot = battle.snapshot()
        challenge = snapshot.current_challenge
        return {
            "saveVersion": self.SAVE_VERSION,
            "savedAt": datetime.now(timezone.utc).isoformat(),
            "enemyName": snapshot.enemy_name,
            "enemyHealth": snapshot.enemy_hp,
            "enemyMaxHealth": snapshot.enemy_max_hp,
            "currentChallenge": None
            if challenge is None
            else {
                "word": challenge.word,
                "timeLimit": challenge.time_limit,
                "difficulty": challenge.difficulty,
            },
            "enemyId": snapshot.enemy_def_id,
            "enemyMana": snapshot.enemy_mp,
            "playerHealth": snapshot.player_hp,
            "playerMana": snapshot.player_mp,
            "playerGuard": snapshot.player_guard,
            "enemyGuard": snapshot.enemy_guard,
            "phase": snapshot.phase.value,
            "turnOrder": list(snapshot.turn_order),
            "turnIndex": snapshot.turn_index,
            "turnCount": snapshot.turn_count,
            "roundNumber": snapshot.round_number,
            "actionPointsRemaining": snapshot.action_points_remaining,
            "rewardPoints": snapshot.reward_points,
        }

    def deserialize(
        self,
        payload: Mapping[str, Any],
        player: Player,
        rng: RNG,
        *,
        ledger: ProgressionLedger | None = None,
    ) -> Battle:
        """Rebuild the saved battle against a fresh enemy from the repository."""
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Battle data must be a JSON object.")
        version = payload.get("saveVersion")
        if version != self.SAVE_VERSION:
            raise SaveLoadError(f"Unsupported battle save version: {version!r}")

        enemy_id = self._require_str(payload.get("enemyId"), "enemyId")
        try:
            enemy = create_enemy(enemy_id, self._enemies_repo, self._skills_repo, rng)
        except FactoryError as exc:
            raise SaveLoadError(f"Save references unknown enemy: {enemy_id}") from exc

        enemy_name = self._require_str(payload.get("enemyName"), "enemyName")
        if enemy_name != enemy.name:
            raise SaveLoadError(f"enemyName '{enemy_name}' does not match enemy '{enemy_id}'.")
        enemy_max_hp = self._require_int(payload.get("enemyMaxHealth"), "enemyMaxHealth", minimum=1)
        if enemy_max_hp != enemy.max_hp:
            raise SaveLoadError(f"enemyMaxHealth {enemy_max_hp} does not match enemy '{enemy_id}'.")

        snapshot = BattleSnapshot(
            phase=self._require_phase(payload.get("phase")),
            enemy_def_id=enemy_id,
            enemy_name=enemy_name,
            enemy_hp=self._require_pool(payload.get("enemyHealth"), "enemyHealth", enemy_max_hp),
            enemy_max_hp=enemy_max_hp,
            enemy_mp=self._require_pool(payload.get("enemyMana"), "enemyMana", enemy.max_mp),
            player_hp=self._require_pool(payload.get("playerHealth"), "playerHealth", player.max_hp),
            player_mp=self._require_pool(payload.get("playerMana"), "playerMana", player.max_mp),
            turn_order=self._require_turn_order(payload.get("turnOrder")),
            turn_index=self._require_int(payload.get("turnIndex"), "turnIndex", minimum=0),
            turn_count=self._require_int(payload.get("turnCount"), "turnCount", minimum=0),
            round_number=self._require_int(payload.get("roundNumber"), "roundNumber", minimum=0),
            action_points_remaining=self._require_int(
                payload.get("actionPointsRemaining"), "actionPointsRemaining", minimum=0
            ),
            reward_points=self._require_int(payload.get("rewardPoints"), "rewardPoints", minimum=0),
            player_guard=self._require_int(payload.get("playerGuard"), "playerGuard", minimum=0),
            enemy_guard=self._require_int(payload.get("enemyGuard"), "enemyGuard", minimum=0),
            current_challenge=self._coerce_challenge(payload.get("currentChallenge")),
        )
        try:
            battle = Battle.restore(player, enemy, snapshot, ledger=ledger, rng=rng)
        except ValueError as exc:
            raise SaveLoadError(f"Invalid battle state: {exc}") from exc
        logger.info("Loaded battle against %s (%s)", enemy.name, snapshot.phase.value)
        return battle

    @staticmethod
    def _require_str(value: Any, context: str) -> str:
        if not isinstance(value, str) or not value:
            raise SaveLoadError(f"{context} must be a non-empty string.")
        return value

    @staticmethod
    def _require_int(value: Any, context: str, *, minimum: int | None = None) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SaveLoadError(f"{context} must be an integer.")
        if minimum is not None and value < minimum:
            raise SaveLoadError(f"{context} must be at least {minimum}.")
        return value

    def _require_pool(self, value: Any, context: str, maximum: int) -> int:
        pool = self._require_int(value, context, minimum=0)
        if pool > maximum:
            raise SaveLoadError(f"{context} must not exceed {maximum}.")
        return pool

    @staticmethod
    def _require_phase(value: Any) -> BattlePhase:
        if value == BattlePhase.IDLE.value:
            raise SaveLoadError("A battle that never started cannot be loaded.")
        try:
            return BattlePhase(value)
        except ValueError as exc:
            raise SaveLoadError(f"Invalid phase value: {value}") from exc

    @staticmethod
    def _require_turn_order(value: Any) -> Tuple[Side, ...]:
        if not isinstance(value, list):
            raise SaveLoadError("turnOrder must be a list.")
        order: List[Side] = []
        for entry in value:
            if entry not in _VALID_SIDES:
                raise SaveLoadError(f"Invalid turnOrder entry: {entry!r}")
            order.append(entry)
        if len(set(order)) != len(order):
            raise SaveLoadError("turnOrder must not repeat a side.")
        return tuple(order)

    def _coerce_challenge(self, value: Any) -> TypingChallenge | None:
        if value is None:
            return None
        if not isinstance(value, Mapping):
            raise SaveLoadError("currentChallenge must be an object.")
        word = self._require_str(value.get("word"), "currentChallenge.word")
        time_limit = self._require_int(value.get("timeLimit"), "currentChallenge.timeLimit", minimum=1)
        difficulty = self._require_int(value.get("difficulty"), "currentChallenge.difficulty", minimum=1)
        return TypingChallenge(word=word, time_limit=time_limit, difficulty=difficulty)
