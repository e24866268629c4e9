"""Canonical game entity models shared by the store, analytics and persistence."""

from .catalog import Obstacle, PowerUp
from .enums import (
    RANK_THRESHOLDS,
    Difficulty,
    ObstacleType,
    Rank,
    Rarity,
    level_for_score,
    rank_for_score,
)
from .patches import GameSessionPatch, ObstaclePatch, PlayerPatch, PowerUpPatch
from .player import Player, utcnow
from .session import GameSession

__all__ = [
    "RANK_THRESHOLDS",
    "Difficulty",
    "GameSession",
    "GameSessionPatch",
    "Obstacle",
    "ObstaclePatch",
    "ObstacleType",
    "Player",
    "PlayerPatch",
    "PowerUp",
    "PowerUpPatch",
    "Rank",
    "Rarity",
    "level_for_score",
    "rank_for_score",
    "utcnow",
]
