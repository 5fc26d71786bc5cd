"""Utilities for creating deterministic instance identifiers."""
from __future__ import annotations

from typquest.core.rng import RNG

_SUFFIX_MIN = 100000
_SUFFIX_MAX = 999999


def make_instance_id(prefix: str, rng: RNG) -> str:
    """Return '<prefix>_<6 digits>' drawn from the injected RNG."""
    return f"{prefix}_{rng.randint(_SUFFIX_MIN, _SUFFIX_MAX)}"
