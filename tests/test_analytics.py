from datetime import timedelta

import pytest

from dodger.analytics import AnalyticsService, SpeedRange, filter_obstacles, score_distribution
from dodger.models import Difficulty, GameSessionPatch, ObstaclePatch, ObstacleType, PowerUpPatch, Rank, Rarity
from dodger.store import GameDataStore


@pytest.fixture()
def store() -> GameDataStore:
    return GameDataStore()


@pytest.fixture()
def analytics(store: GameDataStore) -> AnalyticsService:
    return AnalyticsService(store, top_n=2)


def _seed_players(store: GameDataStore) -> None:
    star = store.create_player("StarNavigator")
    comet = store.create_player("CometCrusher")
    store.create_player("Idle")
    store.create_game_session(star.player_id, 12000, 13, timedelta(minutes=10))
    store.create_game_session(star.player_id, 400, 1, timedelta(minutes=2))
    store.create_game_session(comet.player_id, 2500, 3, timedelta(minutes=6))


def test_reports_are_none_without_data(analytics: AnalyticsService):
    assert analytics.player_statistics() is None
    assert analytics.player_rankings() is None
    assert analytics.session_statistics() is None
    assert analytics.recent_sessions() is None
    assert analytics.obstacle_statistics() is None
    assert analytics.power_up_statistics() is None
    assert analytics.advanced_analytics() is None


def test_advanced_requires_players_and_sessions(store: GameDataStore, analytics: AnalyticsService):
    store.create_game_session(5, 100, 1, timedelta(minutes=1))
    assert analytics.advanced_analytics() is None


def test_player_statistics(store: GameDataStore, analytics: AnalyticsService):
    _seed_players(store)

    report = analytics.player_statistics()

    assert report.total_players == 3
    assert report.max_high_score == 12000
    assert report.min_high_score == 0
    assert report.average_high_score == pytest.approx((12000 + 2500) / 3)
    assert report.total_games_played == 3
    assert {group.label: group.count for group in report.by_rank} == {"Legend": 1, "Expert": 1, "Beginner": 1}
    assert [p.name for p in report.most_active] == ["StarNavigator", "CometCrusher"]
    assert [p.name for p in report.top_scorers] == ["StarNavigator", "CometCrusher"]


def test_player_rankings_order(store: GameDataStore, analytics: AnalyticsService):
    _seed_players(store)

    rows = analytics.player_rankings()

    assert [row.position for row in rows] == [1, 2, 3]
    assert [row.player.name for row in rows] == ["StarNavigator", "CometCrusher", "Idle"]
    assert rows[0].average_score == pytest.approx(6200)
    assert rows[2].average_score == 0


def test_session_statistics(store: GameDataStore, analytics: AnalyticsService):
    _seed_players(store)
    store.update_game_session(1, GameSessionPatch(difficulty=Difficulty.HARD, obstacles_dodged=100, power_ups_collected=4))
    store.update_game_session(2, GameSessionPatch(obstacles_dodged=20))

    report = analytics.session_statistics()

    assert report.total_sessions == 3
    assert report.max_score == 12000
    assert report.average_score == pytest.approx(14900 / 3)
    assert report.max_level == 13
    assert report.average_duration == timedelta(minutes=6)
    assert report.total_obstacles_dodged == 120
    assert report.total_power_ups_collected == 4
    assert report.new_high_score_sessions == 2
    assert report.by_difficulty[0].label == "Normal"
    assert report.by_difficulty[0].count == 2


def test_recent_sessions_newest_first(store: GameDataStore, analytics: AnalyticsService):
    _seed_players(store)
    base = store.get_game_session_by_id(1).session_date
    for session_id, days in ((1, 3), (2, 1), (3, 2)):
        store.update_game_session(session_id, GameSessionPatch(session_date=base - timedelta(days=days)))

    report = analytics.recent_sessions(2)

    assert [s.session_id for s in report.sessions] == [2, 3]
    assert report.requested == 2


def test_obstacle_statistics(store: GameDataStore, analytics: AnalyticsService):
    store.create_obstacle("Slow Rock", ObstacleType.ASTEROID, 1.5, 80, 20)
    store.create_obstacle("Fast Comet", ObstacleType.COMET, 5.5, 60, 15)
    store.create_obstacle("Big Rock", ObstacleType.ASTEROID, 2.5, 140, 35)
    store.update_obstacle(3, ObstaclePatch(is_active=False))

    report = analytics.obstacle_statistics()

    assert report.total_obstacles == 3
    assert report.average_speed == pytest.approx(9.5 / 3)
    assert report.fastest.name == "Fast Comet"
    assert report.most_dangerous.name == "Big Rock"
    assert report.by_type[0].label == "Asteroid"
    assert report.by_type[0].count == 2
    assert report.active_count == 2
    assert report.inactive_count == 1


def test_power_up_statistics_orders_rarity(store: GameDataStore, analytics: AnalyticsService):
    store.create_power_up("Shield", "Defensive", "Temporary Shield", 5, 100)
    store.create_power_up("Star Power", "Special", "All Buffs", 10, 900)
    store.create_power_up("Magnet", "Utility", "Attract Points", 8, 300)
    store.update_power_up(2, PowerUpPatch(rarity=Rarity.LEGENDARY))
    store.update_power_up(3, PowerUpPatch(rarity=Rarity.RARE))

    report = analytics.power_up_statistics()

    assert report.total_power_ups == 3
    assert report.most_valuable.name == "Star Power"
    assert report.average_duration == pytest.approx(23 / 3)
    assert [group.label for group in report.by_rarity] == ["Common", "Rare", "Legendary"]
    assert [p.name for p in report.top_valuable] == ["Star Power", "Magnet"]


def test_advanced_analytics(store: GameDataStore, analytics: AnalyticsService):
    _seed_players(store)

    report = analytics.advanced_analytics()

    top = report.top_performers[0]
    assert top.name == "StarNavigator"
    assert top.rank is Rank.LEGEND
    assert top.total_sessions == 2
    assert top.average_score == pytest.approx(6200)
    assert top.best_score == 12000
    assert len(report.top_performers) == 2
    assert [stat.level for stat in report.level_progression] == [1, 3, 13]
    assert {bucket.label: bucket.count for bucket in report.score_distribution}["10000+"] == 1


def test_player_performance_includes_players_without_sessions(store: GameDataStore, analytics: AnalyticsService):
    _seed_players(store)

    rollup = {row.name: row for row in analytics.player_performance()}

    assert rollup["Idle"].total_sessions == 0
    assert rollup["Idle"].average_score == 0


def test_score_distribution_half_open_bins(store: GameDataStore):
    player = store.create_player("Bins")
    for score in (0, 499, 500, 999, 1000, 2499, 2500, 4999, 5000, 9999, 10000, 50000):
        store.create_game_session(player.player_id, score, 1, timedelta(minutes=1))

    buckets = score_distribution(store.get_all_game_sessions())

    assert [bucket.label for bucket in buckets] == [
        "0-499",
        "500-999",
        "1000-2499",
        "2500-4999",
        "5000-9999",
        "10000+",
    ]
    assert [bucket.count for bucket in buckets] == [2, 2, 2, 2, 2, 2]
    assert buckets[-1].high is None


def test_search_players_case_insensitive(store: GameDataStore, analytics: AnalyticsService):
    _seed_players(store)

    assert [p.name for p in analytics.search_players("star")] == ["StarNavigator"]
    assert [p.name for p in analytics.search_players("R")] == ["StarNavigator", "CometCrusher"]
    assert analytics.search_players("nobody") == []


def test_filter_obstacles_by_speed_inclusive_descending(store: GameDataStore, analytics: AnalyticsService):
    for name, speed in (("A", 2.9), ("B", 3.0), ("C", 4.2), ("D", 5.0), ("E", 5.1)):
        store.create_obstacle(name, ObstacleType.METEOR, speed, 10, 10)

    results = analytics.filter_obstacles_by_speed(3.0, 5.0)

    assert [o.name for o in results] == ["D", "C", "B"]


def test_speed_range_open_bounds_and_ascending(store: GameDataStore):
    for name, speed in (("A", 1.0), ("B", 4.0), ("C", 2.0)):
        store.create_obstacle(name, ObstacleType.DEBRIS, speed, 10, 10)

    results = filter_obstacles(store.get_all_obstacles(), SpeedRange(min_speed=1.5, sort_direction="asc"))

    assert [o.name for o in results] == ["C", "B"]
