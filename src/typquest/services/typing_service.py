"""Picks typing challenges for the player's turns."""
from __future__ import annotations

from typquest.core.rng import RNG
from typquest.data.repositories import WordsRepository
from typquest.domain.typing_challenge import TypingChallenge, time_limit_for


class ChallengeGenerator:
    """Draws challenge words from the words repository with an injected RNG."""

    def __init__(self, words_repo: WordsRepository, rng: RNG) -> None:
        self._words_repo = words_repo
        self._rng = rng

    def generate(self, difficulty: int) -> TypingChallenge:
        try:
            words = self._words_repo.words_for(difficulty)
        except KeyError as exc:
            raise ValueError(f"No challenge words for difficulty {difficulty}.") from exc
        word = self._rng.choice(words)
        return TypingChallenge(word=word, time_limit=time_limit_for(word, difficulty), difficulty=difficulty)
