"""Factory helpers for runtime entities."""

from .enemy_factory import create_enemy
from .id_factory import make_instance_id
from .player_factory import create_player, player_stats_for_level

__all__ = [
    "create_enemy",
    "create_player",
    "make_instance_id",
    "player_stats_for_level",
]
