"""Typing rating enums and their damage/reward multiplier tables."""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class SpeedRating(str, Enum):
    FAST = "Fast"
    NORMAL = "Normal"
    SLOW = "Slow"
    MISS = "Miss"


class AccuracyRating(str, Enum):
    PERFECT = "Perfect"
    GOOD = "Good"
    POOR = "Poor"


SPEED_MULTIPLIERS: Mapping[SpeedRating, float] = MappingProxyType(
    {
        SpeedRating.FAST: 2.0,
        SpeedRating.NORMAL: 1.5,
        SpeedRating.SLOW: 1.0,
        SpeedRating.MISS: 0.0,
    }
)

ACCURACY_MULTIPLIERS: Mapping[AccuracyRating, float] = MappingProxyType(
    {
        AccuracyRating.PERFECT: 2.0,
        AccuracyRating.GOOD: 1.0,
        AccuracyRating.POOR: 0.5,
    }
)


def speed_multiplier(rating: SpeedRating | str) -> float:
    """Return the multiplier for a speed rating ("Fast" and SpeedRating.FAST both work)."""
    return SPEED_MULTIPLIERS[SpeedRating(rating)]


def accuracy_multiplier(rating: AccuracyRating | str) -> float:
    return ACCURACY_MULTIPLIERS[AccuracyRating(rating)]
