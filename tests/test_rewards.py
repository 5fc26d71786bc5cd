from __future__ import annotations

import math

import pytest

from typquest.domain.ratings import ACCURACY_MULTIPLIERS, SPEED_MULTIPLIERS, AccuracyRating, SpeedRating
from typquest.domain.rewards import (
    MAX_DROP_RATE,
    calculate_drop_rate,
    calculate_reward,
    calculate_reward_points,
)


def test_reward_scenarios() -> None:
    assert calculate_reward_points(5, SpeedRating.FAST, AccuracyRating.PERFECT) == 20
    assert calculate_reward_points(3, SpeedRating.NORMAL, AccuracyRating.GOOD) == 4
    assert calculate_reward_points(5, SpeedRating.SLOW, AccuracyRating.POOR) == 2


def test_miss_always_yields_zero() -> None:
    for accuracy in AccuracyRating:
        for difficulty in (1, 5, 50):
            assert calculate_reward_points(difficulty, SpeedRating.MISS, accuracy) == 0


def test_reward_matches_floor_of_product_for_all_ratings() -> None:
    for difficulty in range(1, 12):
        for speed, speed_mult in SPEED_MULTIPLIERS.items():
            for accuracy, accuracy_mult in ACCURACY_MULTIPLIERS.items():
                points = calculate_reward_points(difficulty, speed, accuracy)
                assert isinstance(points, int)
                assert points >= 0
                assert points == math.floor(difficulty * speed_mult * accuracy_mult)


def test_reward_accepts_string_ratings() -> None:
    assert calculate_reward(2, "Normal", "Perfect").points == 6


@pytest.mark.parametrize("difficulty", [0, -1, 1.5, True, "3"])
def test_invalid_difficulty_is_rejected(difficulty) -> None:
    with pytest.raises(ValueError):
        calculate_reward_points(difficulty, SpeedRating.FAST, AccuracyRating.GOOD)


def test_drop_rate_scales_with_fortune_and_world_level() -> None:
    assert calculate_drop_rate(0, 0) == 30
    assert calculate_drop_rate(10, 1) == 36
    assert calculate_drop_rate(100, 2) == 50


def test_drop_rate_is_clamped() -> None:
    assert calculate_drop_rate(10_000, 10) == MAX_DROP_RATE
    assert calculate_drop_rate(0, -10) == 30
