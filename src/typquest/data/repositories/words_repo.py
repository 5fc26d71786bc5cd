"""Typing challenge word pools."""
from __future__ import annotations

from typing import Dict, Tuple

from typquest.data.errors import DataValidationError
from typquest.data.repositories.base import RepositoryBase


class WordsRepository(RepositoryBase[Tuple[str, ...]]):
    """Loads challenge words keyed by difficulty level."""

    def __init__(self, base_path=None) -> None:
        super().__init__("words.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, Tuple[str, ...]]:
        pools: Dict[str, Tuple[str, ...]] = {}
        for raw_level, payload in raw.items():
            if not isinstance(raw_level, str) or not raw_level.isdigit() or int(raw_level) < 1:
                raise DataValidationError(f"Word pool key '{raw_level}' must be a positive integer string.")
            words = self._require_str_list(payload, f"words '{raw_level}'")
            if not words:
                raise DataValidationError(f"words '{raw_level}' must not be empty.")
            if any(not word.strip() for word in words):
                raise DataValidationError(f"words '{raw_level}' entries must not be blank.")
            pools[raw_level] = tuple(words)
        return pools

    def words_for(self, difficulty: int) -> Tuple[str, ...]:
        """Return the word pool for the requested difficulty level."""
        return self.get(str(difficulty))

    def levels(self) -> list[int]:
        self._ensure_loaded()
        assert self._definitions is not None
        return sorted(int(level) for level in self._definitions)
