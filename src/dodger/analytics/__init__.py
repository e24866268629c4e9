"""Read-only reporting over the game data store."""

from .filtering import SpeedRange, filter_obstacles, search_players
from .reports import (
    AdvancedAnalytics,
    GroupCount,
    LeaderboardRow,
    LevelStat,
    ObstacleStatistics,
    PlayerPerformance,
    PlayerStatistics,
    PowerUpStatistics,
    RecentSessions,
    ScoreBucket,
    SessionStatistics,
)
from .service import SCORE_BUCKET_BOUNDS, AnalyticsService, score_distribution

__all__ = [
    "SCORE_BUCKET_BOUNDS",
    "AdvancedAnalytics",
    "AnalyticsService",
    "GroupCount",
    "LeaderboardRow",
    "LevelStat",
    "ObstacleStatistics",
    "PlayerPerformance",
    "PlayerStatistics",
    "PowerUpStatistics",
    "RecentSessions",
    "ScoreBucket",
    "SessionStatistics",
    "SpeedRange",
    "filter_obstacles",
    "score_distribution",
    "search_players",
]
