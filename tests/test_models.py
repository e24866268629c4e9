from datetime import timedelta

import pytest
from pydantic import ValidationError

from dodger.models import (
    RANK_THRESHOLDS,
    GameSession,
    GameSessionPatch,
    Obstacle,
    ObstacleType,
    Player,
    PlayerPatch,
    PowerUp,
    Rank,
    Rarity,
    level_for_score,
    rank_for_score,
)


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (0, Rank.BEGINNER),
        (499, Rank.BEGINNER),
        (500, Rank.INTERMEDIATE),
        (999, Rank.INTERMEDIATE),
        (1000, Rank.ADVANCED),
        (2499, Rank.ADVANCED),
        (2500, Rank.EXPERT),
        (4999, Rank.EXPERT),
        (5000, Rank.MASTER),
        (9999, Rank.MASTER),
        (10000, Rank.LEGEND),
        (250000, Rank.LEGEND),
    ],
)
def test_rank_for_score_boundaries(score, expected):
    assert rank_for_score(score) is expected


def test_rank_thresholds_descend_with_rank_order():
    thresholds = [threshold for threshold, _ in RANK_THRESHOLDS]
    assert thresholds == sorted(thresholds, reverse=True)
    orders = [rank.order for _, rank in RANK_THRESHOLDS]
    assert orders == sorted(orders, reverse=True)


def test_rarity_and_type_parse_ignores_case():
    assert Rarity.parse("legendary") is Rarity.LEGENDARY
    assert ObstacleType.parse(" COMET ") is ObstacleType.COMET
    assert Rarity.COMMON.order < Rarity.EPIC.order
    with pytest.raises(ValueError):
        Rarity.parse("mythic")


def test_level_for_score():
    assert level_for_score(0) == 1
    assert level_for_score(999) == 1
    assert level_for_score(1000) == 2
    assert level_for_score(12345) == 13


def test_player_average_score():
    player = Player(player_id=1, name="TestPlayer", total_games_played=10, total_score=5000, highest_score=1000)
    assert player.average_score() == 500


def test_player_average_score_zero_without_games():
    player = Player(player_id=1, name="NewPlayer")
    assert player.average_score() == 0
    assert player.rank is Rank.BEGINNER


def test_player_str_contains_details():
    player = Player(player_id=1, name="TestPlayer", highest_score=800, rank=Rank.INTERMEDIATE)
    text = str(player)
    assert "TestPlayer" in text
    assert "Intermediate" in text
    assert "800" in text


def test_session_score_per_minute():
    session = GameSession(session_id=1, player_id=1, score=3000, level=5, duration=timedelta(minutes=10))
    assert session.score_per_minute() == 300


def test_session_score_per_minute_zero_duration():
    session = GameSession(session_id=1, player_id=1, score=1000, duration=timedelta(0))
    assert session.score_per_minute() == 0


def test_entities_validate_assignment():
    player = Player(player_id=1, name="Valid")
    with pytest.raises(ValidationError):
        player.total_score = -1
    obstacle = Obstacle(obstacle_id=1, name="Meteor", obstacle_type=ObstacleType.METEOR, speed=2.0)
    with pytest.raises(ValidationError):
        obstacle.speed = 0
    power_up = PowerUp(power_up_id=1, name="Shield", power_up_type="Defensive")
    with pytest.raises(ValidationError):
        power_up.spawn_rate = 1.5


def test_entity_defaults():
    obstacle = Obstacle(obstacle_id=1, name="Giant Asteroid", obstacle_type=ObstacleType.ASTEROID, speed=3.0)
    assert obstacle.is_active
    assert "Giant Asteroid" in str(obstacle)
    power_up = PowerUp(power_up_id=1, name="Shield", power_up_type="Defensive")
    assert power_up.is_collectible
    assert power_up.rarity is Rarity.COMMON


def test_patch_reports_only_set_fields():
    patch = PlayerPatch(name="Renamed", total_games_played=0)
    assert patch.changes() == {"name": "Renamed", "total_games_played": 0}


def test_patch_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        PlayerPatch(rank="Legend")  # type: ignore[call-arg]


def test_negative_duration_rejected():
    with pytest.raises(ValidationError):
        GameSession(session_id=1, player_id=1, score=300, duration=timedelta(minutes=-5))
    with pytest.raises(ValidationError):
        GameSessionPatch(duration=timedelta(seconds=-1))
    session = GameSession(session_id=1, player_id=1, score=300, duration=timedelta(minutes=1))
    with pytest.raises(ValidationError):
        session.duration = timedelta(minutes=-1)


def test_rank_follows_highest_score():
    player = Player(player_id=1, name="Climber", highest_score=2600, rank=Rank.BEGINNER)
    assert player.rank is Rank.EXPERT

    player.highest_score = 10000
    assert player.rank is Rank.LEGEND

    player.rank = Rank.BEGINNER
    assert player.rank is Rank.LEGEND


def test_catalog_names_accept_legacy_keys():
    player = Player.model_validate({"player_id": 1, "player_name": "Legacy"})
    obstacle = Obstacle.model_validate(
        {"obstacle_id": 1, "obstacle_name": "Rock", "obstacle_type": "Debris", "speed": 1.5}
    )
    power_up = PowerUp.model_validate({"power_up_id": 1, "power_up_name": "Magnet", "power_up_type": "Utility"})

    assert (player.name, obstacle.name, power_up.name) == ("Legacy", "Rock", "Magnet")
    assert "name" in player.model_dump()
