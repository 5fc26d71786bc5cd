"""UI-agnostic battle controller that separates state progression from rendering."""
from __future__ import annotations

from typing import List, Tuple, TypedDict

from typquest.domain.battle_models import BattleAction, BattleActionType, BattleResult
from typquest.domain.defs import NORMAL_ATTACK, SkillDef
from typquest.domain.typing_challenge import TypingChallenge, TypingPerformance
from typquest.services.battle_service import Battle, BattleEvent
from typquest.services.typing_service import ChallengeGenerator


class AvailableActions(TypedDict):
    """What the player may do right now; each skill is paired with whether it is usable."""

    can_act: bool
    can_flee: bool
    action_points: int
    skills: List[Tuple[SkillDef, bool]]


class BattleController:
    """
    UI-agnostic controller for battle state progression.

    This controller wraps a Battle and exposes only structured state and actions.
    It does NOT handle rendering, formatting, or input prompts.
    """

    def __init__(self, battle: Battle) -> None:
        self._battle = battle

    @property
    def battle(self) -> Battle:
        return self._battle

    def start(self) -> List[BattleEvent]:
        return self._battle.start()

    def is_player_turn(self) -> bool:
        actor = self._battle.get_current_turn_actor()
        return actor is not None and actor is self._battle.player

    def is_enemy_turn(self) -> bool:
        actor = self._battle.get_current_turn_actor()
        return actor is not None and actor is self._battle.enemy

    def get_available_actions(self) -> AvailableActions:
        """Return structured data about available actions for the current player turn."""
        if not self.is_player_turn():
            return {"can_act": False, "can_flee": False, "action_points": 0, "skills": []}

        player = self._battle.player
        action_points = self._battle.action_points_remaining
        options: List[SkillDef] = [NORMAL_ATTACK, *player.skills]
        skills = [
            (skill, player.can_afford(skill.mp_cost) and skill.action_cost <= action_points)
            for skill in options
        ]
        return {"can_act": True, "can_flee": True, "action_points": action_points, "skills": skills}

    def prepare_challenge(self, generator: ChallengeGenerator, difficulty: int) -> TypingChallenge:
        """Draw a challenge and register it with the battle as the one on screen."""
        challenge = generator.generate(difficulty)
        self._battle.present_challenge(challenge)
        return challenge

    def apply_player_action(
        self,
        action: BattleAction,
        performance: TypingPerformance | None = None,
    ) -> List[BattleEvent]:
        """
        Apply a player action and return the resulting events.

        This method does NOT print or format anything. It only executes game logic.
        """
        if action.action_type == "skill" and performance is None:
            raise ValueError("Skill action requires a typing performance.")
        return self._battle.take_turn(self._battle.player.id, action, performance)

    def run_enemy_turn(self) -> List[BattleEvent]:
        """Execute enemy AI logic and return events."""
        return self._battle.run_enemy_turn()

    def get_result(self) -> BattleResult | None:
        return self._battle.get_result()


__all__ = ["AvailableActions", "BattleAction", "BattleActionType", "BattleController"]
