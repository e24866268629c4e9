"""Immutable report records produced by the analytics layer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from dodger.models import GameSession, Obstacle, Player, PowerUp, Rank


@dataclass(frozen=True)
class GroupCount:
    label: str
    count: int


@dataclass(frozen=True)
class PlayerStatistics:
    total_players: int
    average_high_score: float
    max_high_score: int
    min_high_score: int
    total_games_played: int
    by_rank: tuple[GroupCount, ...]
    most_active: tuple[Player, ...]
    top_scorers: tuple[Player, ...]


@dataclass(frozen=True)
class LeaderboardRow:
    position: int
    player: Player
    average_score: float


@dataclass(frozen=True)
class SessionStatistics:
    total_sessions: int
    average_score: float
    max_score: int
    average_level: float
    max_level: int
    average_duration: timedelta
    by_difficulty: tuple[GroupCount, ...]
    total_obstacles_dodged: int
    total_power_ups_collected: int
    new_high_score_sessions: int


@dataclass(frozen=True)
class ObstacleStatistics:
    total_obstacles: int
    average_speed: float
    fastest: Obstacle
    average_damage: float
    most_dangerous: Obstacle
    by_type: tuple[GroupCount, ...]
    active_count: int
    inactive_count: int


@dataclass(frozen=True)
class PowerUpStatistics:
    total_power_ups: int
    average_points: float
    most_valuable: PowerUp
    average_duration: float
    by_rarity: tuple[GroupCount, ...]
    by_type: tuple[GroupCount, ...]
    top_valuable: tuple[PowerUp, ...]


@dataclass(frozen=True)
class PlayerPerformance:
    """Per-player rollup joined across the player's sessions."""

    player_id: int
    name: str
    rank: Rank
    total_sessions: int
    average_score: float
    best_score: int


@dataclass(frozen=True)
class ScoreBucket:
    """Half-open score range ``[low, high)``; ``high`` is ``None`` when unbounded."""

    low: int
    high: int | None
    count: int

    @property
    def label(self) -> str:
        if self.high is None:
            return f"{self.low}+"
        return f"{self.low}-{self.high - 1}"

    def contains(self, score: int) -> bool:
        return score >= self.low and (self.high is None or score < self.high)


@dataclass(frozen=True)
class LevelStat:
    level: int
    session_count: int
    average_score: float
    average_duration: timedelta


@dataclass(frozen=True)
class AdvancedAnalytics:
    top_performers: tuple[PlayerPerformance, ...]
    score_distribution: tuple[ScoreBucket, ...]
    level_progression: tuple[LevelStat, ...]


@dataclass(frozen=True)
class RecentSessions:
    sessions: tuple[GameSession, ...]
    requested: int
