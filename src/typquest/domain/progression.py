"""Progression ledger interface for EX points earned in battle."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Protocol


class ProgressionLedger(Protocol):
    """Receives EX points as plain integers; owns any leveling thresholds."""

    def add_points(self, points: int) -> None:
        ...


@dataclass(slots=True)
class ExPointsLedger:
    """In-memory ledger that keeps a running total and every award."""

    total: int = 0
    history: List[int] = field(default_factory=list)

    def add_points(self, points: int) -> None:
        if points < 0:
            raise ValueError("EX points must be non-negative.")
        self.total += points
        self.history.append(points)
