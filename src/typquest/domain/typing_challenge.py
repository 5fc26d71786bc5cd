"""Typing challenges and the rating of a single typed attempt."""
from __future__ import annotations

import math
from dataclasses import dataclass

from typquest.domain.ratings import AccuracyRating, SpeedRating

MIN_TIME_LIMIT = 2
MAX_TIME_LIMIT = 30
# Seconds allowed per character, indexed by difficulty level.
SECONDS_PER_CHAR: dict[int, float] = {1: 1.0, 2: 0.8, 3: 0.6, 4: 0.5, 5: 0.4}
FAST_THRESHOLD_PERCENT = 70
NORMAL_THRESHOLD_PERCENT = 85
GOOD_ACCURACY_PERCENT = 95


@dataclass(frozen=True, slots=True)
class TypingPerformance:
    """Graded result of one typed attempt, consumed read-only by the battle."""

    speed_rating: SpeedRating
    accuracy_rating: AccuracyRating
    typing_difficulty: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "speed_rating", SpeedRating(self.speed_rating))
        object.__setattr__(self, "accuracy_rating", AccuracyRating(self.accuracy_rating))
        if isinstance(self.typing_difficulty, bool) or not isinstance(self.typing_difficulty, int):
            raise ValueError("typing_difficulty must be an integer.")
        if self.typing_difficulty < 1:
            raise ValueError("typing_difficulty must be at least 1.")

    @property
    def is_miss(self) -> bool:
        return self.speed_rating is SpeedRating.MISS


@dataclass(frozen=True, slots=True)
class TypingChallenge:
    """A word the player must type within time_limit seconds."""

    word: str
    time_limit: int
    difficulty: int

    def __post_init__(self) -> None:
        if not self.word:
            raise ValueError("Challenge word must not be empty.")
        if self.time_limit <= 0:
            raise ValueError("Challenge time limit must be positive.")
        if self.difficulty < 1:
            raise ValueError("Challenge difficulty must be at least 1.")


def time_limit_for(word: str, difficulty: int) -> int:
    if difficulty < 1:
        raise ValueError("difficulty must be at least 1.")
    per_char = SECONDS_PER_CHAR[min(difficulty, max(SECONDS_PER_CHAR))]
    return max(MIN_TIME_LIMIT, min(MAX_TIME_LIMIT, math.ceil(len(word) * per_char)))


def measure_accuracy(target: str, typed: str) -> int:
    """Percentage of target characters typed correctly in position."""
    if not target:
        return 100 if not typed else 0
    if not typed:
        return 0
    correct = sum(1 for expected, actual in zip(target, typed) if expected == actual)
    # Extra trailing characters count against the attempt.
    overflow = max(0, len(typed) - len(target))
    return max(0, round((correct - overflow) / len(target) * 100))


def rate_speed(elapsed_seconds: float, time_limit: float) -> SpeedRating:
    if elapsed_seconds < 0:
        raise ValueError("elapsed_seconds must be non-negative.")
    percentage = elapsed_seconds / time_limit * 100
    if percentage > 100:
        return SpeedRating.MISS
    if percentage <= FAST_THRESHOLD_PERCENT:
        return SpeedRating.FAST
    if percentage <= NORMAL_THRESHOLD_PERCENT:
        return SpeedRating.NORMAL
    return SpeedRating.SLOW


def rate_accuracy(accuracy_percent: float) -> AccuracyRating:
    if accuracy_percent >= 100:
        return AccuracyRating.PERFECT
    if accuracy_percent >= GOOD_ACCURACY_PERCENT:
        return AccuracyRating.GOOD
    return AccuracyRating.POOR


def evaluate_attempt(challenge: TypingChallenge, typed: str, elapsed_seconds: float) -> TypingPerformance:
    """Grade a finished attempt. Empty input or a blown time limit is a Miss."""
    accuracy_rating = rate_accuracy(measure_accuracy(challenge.word, typed))
    if not typed:
        speed_rating = SpeedRating.MISS
    else:
        speed_rating = rate_speed(elapsed_seconds, challenge.time_limit)
    return TypingPerformance(
        speed_rating=speed_rating,
        accuracy_rating=accuracy_rating,
        typing_difficulty=challenge.difficulty,
    )
