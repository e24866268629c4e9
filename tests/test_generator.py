import random

from dodger.generator import DataGenerator, DatasetSummary, MAX_SCORE
from dodger.models import level_for_score, rank_for_score
from dodger.store import GameDataStore


def _generator(seed: int = 7) -> tuple[GameDataStore, DataGenerator]:
    store = GameDataStore()
    return store, DataGenerator(store, rng=random.Random(seed))


def test_complete_dataset_counts():
    store, generator = _generator()

    summary = generator.generate_complete_dataset()

    assert summary == DatasetSummary(players=15, obstacles=20, power_ups=12, game_sessions=50)
    assert store.count_game_sessions() == 50


def test_generated_players_keep_rank_invariant():
    store, generator = _generator()
    generator.generate_complete_dataset()

    for player in store.get_all_players():
        assert player.rank is rank_for_score(player.highest_score)
        assert player.highest_score <= player.total_score


def test_generated_player_names_are_unique():
    store, generator = _generator()

    generator.generate_players(40)

    names = [player.name for player in store.get_all_players()]
    assert len(names) == len(set(names)) == 40


def test_sessions_require_players():
    store, generator = _generator()

    assert generator.generate_game_sessions(5) == 0
    assert store.count_game_sessions() == 0


def test_generated_sessions_reference_players():
    store, generator = _generator()
    generator.generate_players(3)

    generator.generate_game_sessions(25)

    ids = {player.player_id for player in store.get_all_players()}
    for session in store.get_all_game_sessions():
        assert session.player_id in ids
        assert 0 <= session.score < MAX_SCORE
        assert session.level == level_for_score(session.score)


def test_generated_catalog_values_in_range():
    store, generator = _generator()

    generator.generate_obstacles(30)
    generator.generate_power_ups(30)

    for obstacle in store.get_all_obstacles():
        assert 1.0 <= obstacle.speed <= 6.0
    for power_up in store.get_all_power_ups():
        assert 0.0 <= power_up.spawn_rate <= 1.0


def test_same_seed_same_data():
    first, first_generator = _generator(seed=11)
    second, second_generator = _generator(seed=11)

    first_generator.generate_obstacles(5)
    second_generator.generate_obstacles(5)

    assert [o.speed for o in first.get_all_obstacles()] == [o.speed for o in second.get_all_obstacles()]
