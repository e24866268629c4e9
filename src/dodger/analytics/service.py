"""Aggregate reports computed from store snapshots."""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import timedelta
from statistics import fmean
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from dodger.models import GameSession, Obstacle, Player
from dodger.store import GameDataStore

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


_T = TypeVar("_T")

# Lower bounds of the half-open score distribution bins; the last is unbounded.
SCORE_BUCKET_BOUNDS: tuple[int, ...] = (0, 500, 1_000, 2_500, 5_000, 10_000)
LEVEL_PROGRESSION_LIMIT = 10


def _group_counts(values: Iterable[str]) -> tuple[GroupCount, ...]:
    """Counts per label, largest first; ties keep first-seen order."""

    counts = Counter(values)
    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return tuple(GroupCount(label=label, count=count) for label, count in ordered)


def _top(items: Sequence[_T], key: Callable[[_T], float], limit: int) -> tuple[_T, ...]:
    return tuple(sorted(items, key=key, reverse=True)[:limit])


def _first_max(items: Sequence[_T], key: Callable[[_T], float]) -> _T:
    # max() returns the first maximal element, matching a "first with max value" lookup.
    return max(items, key=key)


def _mean_duration(sessions: Iterable[GameSession]) -> timedelta:
    return timedelta(seconds=fmean(session.duration.total_seconds() for session in sessions))


def score_distribution(sessions: Sequence[GameSession]) -> tuple[ScoreBucket, ...]:
    """Bucket session scores into the fixed half-open bins, empty bins included."""

    buckets: list[ScoreBucket] = []
    for index, low in enumerate(SCORE_BUCKET_BOUNDS):
        high = SCORE_BUCKET_BOUNDS[index + 1] if index + 1 < len(SCORE_BUCKET_BOUNDS) else None
        probe = ScoreBucket(low=low, high=high, count=0)
        count = sum(1 for session in sessions if probe.contains(session.score))
        buckets.append(ScoreBucket(low=low, high=high, count=count))
    return tuple(buckets)


class AnalyticsService:
    """Read-only reporting over a :class:`GameDataStore`.

    Every report reads a fresh snapshot and returns ``None`` when the
    collections it summarises are empty.
    """

    def __init__(self, store: GameDataStore, *, top_n: int = 5) -> None:
        self._store = store
        self._top_n = max(1, top_n)

    def player_statistics(self) -> Optional[PlayerStatistics]:
        players = self._store.get_all_players()
        if not players:
            return None
        high_scores = [player.highest_score for player in players]
        return PlayerStatistics(
            total_players=len(players),
            average_high_score=fmean(high_scores),
            max_high_score=max(high_scores),
            min_high_score=min(high_scores),
            total_games_played=sum(player.total_games_played for player in players),
            by_rank=_group_counts(player.rank.value for player in players),
            most_active=_top(players, lambda p: p.total_games_played, self._top_n),
            top_scorers=_top(players, lambda p: p.highest_score, self._top_n),
        )

    def player_rankings(self) -> Optional[list[LeaderboardRow]]:
        players = sorted(self._store.get_all_players(), key=lambda p: p.highest_score, reverse=True)
        if not players:
            return None
        return [
            LeaderboardRow(position=index, player=player, average_score=player.average_score())
            for index, player in enumerate(players, start=1)
        ]

    def session_statistics(self) -> Optional[SessionStatistics]:
        sessions = self._store.get_all_game_sessions()
        if not sessions:
            return None
        scores = [session.score for session in sessions]
        levels = [session.level for session in sessions]
        return SessionStatistics(
            total_sessions=len(sessions),
            average_score=fmean(scores),
            max_score=max(scores),
            average_level=fmean(levels),
            max_level=max(levels),
            average_duration=_mean_duration(sessions),
            by_difficulty=_group_counts(session.difficulty.value for session in sessions),
            total_obstacles_dodged=sum(session.obstacles_dodged for session in sessions),
            total_power_ups_collected=sum(session.power_ups_collected for session in sessions),
            new_high_score_sessions=sum(1 for session in sessions if session.new_high_score),
        )

    def recent_sessions(self, count: int = 10) -> Optional[RecentSessions]:
        sessions = self._store.get_all_game_sessions()
        if not sessions:
            return None
        latest = _top(sessions, lambda s: s.session_date.timestamp(), max(1, count))
        return RecentSessions(sessions=latest, requested=count)

    def obstacle_statistics(self) -> Optional[ObstacleStatistics]:
        obstacles = self._store.get_all_obstacles()
        if not obstacles:
            return None
        active = sum(1 for obstacle in obstacles if obstacle.is_active)
        return ObstacleStatistics(
            total_obstacles=len(obstacles),
            average_speed=fmean(obstacle.speed for obstacle in obstacles),
            fastest=_first_max(obstacles, lambda o: o.speed),
            average_damage=fmean(obstacle.damage_points for obstacle in obstacles),
            most_dangerous=_first_max(obstacles, lambda o: o.damage_points),
            by_type=_group_counts(obstacle.obstacle_type.value for obstacle in obstacles),
            active_count=active,
            inactive_count=len(obstacles) - active,
        )

    def power_up_statistics(self) -> Optional[PowerUpStatistics]:
        power_ups = self._store.get_all_power_ups()
        if not power_ups:
            return None
        rarity_counts = Counter(power_up.rarity for power_up in power_ups)
        by_rarity = tuple(
            GroupCount(label=rarity.value, count=rarity_counts[rarity])
            for rarity in sorted(rarity_counts, key=lambda r: r.order)
        )
        return PowerUpStatistics(
            total_power_ups=len(power_ups),
            average_points=fmean(power_up.points_value for power_up in power_ups),
            most_valuable=_first_max(power_ups, lambda p: p.points_value),
            average_duration=fmean(power_up.duration_seconds for power_up in power_ups),
            by_rarity=by_rarity,
            by_type=_group_counts(power_up.power_up_type for power_up in power_ups),
            top_valuable=_top(power_ups, lambda p: p.points_value, self._top_n),
        )

    def player_performance(self) -> list[PlayerPerformance]:
        """Join every player with their sessions; players without sessions average 0."""

        by_player: dict[int, list[GameSession]] = defaultdict(list)
        for session in self._store.get_all_game_sessions():
            by_player[session.player_id].append(session)

        rollup: list[PlayerPerformance] = []
        for player in self._store.get_all_players():
            owned = by_player.get(player.player_id, [])
            rollup.append(
                PlayerPerformance(
                    player_id=player.player_id,
                    name=player.name,
                    rank=player.rank,
                    total_sessions=len(owned),
                    average_score=fmean(s.score for s in owned) if owned else 0.0,
                    best_score=player.highest_score,
                )
            )
        return rollup

    def advanced_analytics(self) -> Optional[AdvancedAnalytics]:
        sessions = self._store.get_all_game_sessions()
        if not sessions or self._store.count_players() == 0:
            return None

        by_level: dict[int, list[GameSession]] = defaultdict(list)
        for session in sessions:
            by_level[session.level].append(session)
        progression = tuple(
            LevelStat(
                level=level,
                session_count=len(by_level[level]),
                average_score=fmean(s.score for s in by_level[level]),
                average_duration=_mean_duration(by_level[level]),
            )
            for level in sorted(by_level)[:LEVEL_PROGRESSION_LIMIT]
        )

        return AdvancedAnalytics(
            top_performers=_top(self.player_performance(), lambda p: p.average_score, self._top_n),
            score_distribution=score_distribution(sessions),
            level_progression=progression,
        )

    def search_players(self, term: str) -> list[Player]:
        return search_players(self._store.get_all_players(), term)

    def filter_obstacles_by_speed(self, min_speed: float, max_speed: float) -> list[Obstacle]:
        criteria = SpeedRange(min_speed=min_speed, max_speed=max_speed)
        return filter_obstacles(self._store.get_all_obstacles(), criteria)
