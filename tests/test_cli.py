import io
import random

import pytest

from dodger.cli import Console, run
from dodger.config import Settings
from dodger.context import AppContext


@pytest.fixture()
def ctx(tmp_path) -> AppContext:
    settings = Settings(
        data_dir=tmp_path,
        export_filename="export.json",
        log_level="INFO",
        top_n=5,
        recent_sessions=10,
    )
    return AppContext.build(settings, rng=random.Random(3))


def _drive(ctx: AppContext, *lines: str) -> str:
    stdout = io.StringIO()
    run(ctx, Console(io.StringIO("".join(f"{line}\n" for line in lines)), stdout))
    return stdout.getvalue()


def test_exit_immediately(ctx):
    output = _drive(ctx, "0")

    assert "=== Dodger Game Data Manager ===" in output
    assert output.rstrip().endswith("Goodbye!")


def test_end_of_input_exits_cleanly(ctx):
    output = _drive(ctx, "1")

    assert output.rstrip().endswith("Goodbye!")


def test_add_player_and_record_session(ctx):
    output = _drive(ctx, "1", "2", "Zed", "0", "2", "2", "1", "1200", "2", "3.5", "0", "0")

    assert "Created player 1: Zed" in output
    assert "Recorded session 1." in output
    assert "New personal high score!" in output
    player = ctx.store.get_player_by_id(1)
    assert player.highest_score == 1200
    assert player.total_games_played == 1


def test_invalid_input_is_reported(ctx):
    output = _drive(ctx, "42", "1", "3", "abc", "3", "9", "0", "0")

    assert "Invalid choice, please try again." in output
    assert "'abc' is not a whole number." in output
    assert "Player 9 not found." in output


def test_empty_name_rejected(ctx):
    output = _drive(ctx, "1", "2", "", "0", "0")

    assert "Value cannot be empty." in output
    assert ctx.store.count_players() == 0


def test_add_obstacle_rejects_unknown_type(ctx):
    output = _drive(ctx, "3", "2", "Rock", "Boulder", "2", "Rock", "meteor", "0", "0", "0")

    assert "Value must be greater than 0." in output
    assert ctx.store.count_obstacles() == 0


def test_add_obstacle(ctx):
    _drive(ctx, "3", "2", "Rock", "comet", "4.5", "60", "20", "0", "0")

    obstacle = ctx.store.get_obstacle_by_id(1)
    assert obstacle.name == "Rock"
    assert obstacle.speed == 4.5
    assert obstacle.color == "Red"


def test_generate_and_report(ctx):
    output = _drive(ctx, "5", "1", "0", "6", "1", "0", "0")

    assert "Complete dataset generated." in output
    assert "  Players: 15" in output
    assert "=== Player Statistics ===" in output


def test_save_and_load_round_trip(ctx, tmp_path):
    _drive(ctx, "1", "2", "Saver", "0", "7", "0")
    assert (tmp_path / "players.json").exists()

    fresh = AppContext.build(ctx.settings)
    output = _drive(fresh, "8", "0")

    assert "Data loaded." in output
    assert [p.name for p in fresh.store.get_all_players()] == ["Saver"]


def test_export(ctx, tmp_path):
    output = _drive(ctx, "9", "0")

    assert "Data exported to" in output
    assert (tmp_path / "export.json").exists()
