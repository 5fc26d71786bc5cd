"""EX point and drop-rate calculations."""
from __future__ import annotations

import math
from dataclasses import dataclass

from typquest.domain.ratings import AccuracyRating, SpeedRating, accuracy_multiplier, speed_multiplier

BASE_DROP_RATE = 30.0
MAX_DROP_RATE = 80.0
FORTUNE_PER_DROP_PERCENT = 10
DROP_RATE_PER_WORLD_LEVEL = 5


@dataclass(frozen=True, slots=True)
class RewardResult:
    points: int


def calculate_reward_points(
    difficulty: int,
    speed: SpeedRating | str,
    accuracy: AccuracyRating | str,
) -> int:
    """
    Return EX points for one typed attempt.

    points = floor(difficulty * speed multiplier * accuracy multiplier), so a
    Miss always yields 0. Fractions are truncated, never rounded.
    """
    if isinstance(difficulty, bool) or not isinstance(difficulty, int):
        raise ValueError("difficulty must be an integer.")
    if difficulty < 1:
        raise ValueError("difficulty must be at least 1.")
    return math.floor(difficulty * speed_multiplier(speed) * accuracy_multiplier(accuracy))


def calculate_reward(
    difficulty: int,
    speed: SpeedRating | str,
    accuracy: AccuracyRating | str,
) -> RewardResult:
    return RewardResult(points=calculate_reward_points(difficulty, speed, accuracy))


def calculate_drop_rate(fortune: int, world_level: int) -> float:
    """Percentage chance that a defeated enemy drops anything at all."""
    rate = BASE_DROP_RATE + fortune / FORTUNE_PER_DROP_PERCENT + world_level * DROP_RATE_PER_WORLD_LEVEL
    return max(BASE_DROP_RATE, min(MAX_DROP_RATE, rate))
