"""Interactive console menu for managing game data."""

from __future__ import annotations

import argparse
import functools
import logging
import math
import sys
from datetime import timedelta
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, TextIO, Tuple

import anyio

from dodger import render
from dodger.config import load_settings
from dodger.context import AppContext
from dodger.models import ObstaclePatch, ObstacleType, PlayerPatch, PowerUpPatch, Rarity


class Console:
    """Line-based prompt helpers; invalid input is reported inline and yields ``None``."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    def write(self, text: str = "") -> None:
        self._stdout.write(text + "\n")

    def write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write(line)

    def prompt(self, label: str) -> str:
        self._stdout.write(label)
        self._stdout.flush()
        line = self._stdin.readline()
        if not line:
            raise EOFError
        return line.strip()

    def ask_text(self, label: str) -> Optional[str]:
        value = self.prompt(label)
        if not value:
            self.write("Value cannot be empty.")
            return None
        return value

    def ask_int(self, label: str, *, minimum: Optional[int] = None) -> Optional[int]:
        raw = self.prompt(label)
        try:
            value = int(raw)
        except ValueError:
            self.write(f"'{raw}' is not a whole number.")
            return None
        if minimum is not None and value < minimum:
            self.write(f"Value must be at least {minimum}.")
            return None
        return value

    def ask_float(self, label: str, *, minimum: Optional[float] = None, exclusive: bool = False) -> Optional[float]:
        raw = self.prompt(label)
        try:
            value = float(raw)
        except ValueError:
            self.write(f"'{raw}' is not a number.")
            return None
        if not math.isfinite(value):
            self.write(f"'{raw}' is not a finite number.")
            return None
        if minimum is not None and (value <= minimum if exclusive else value < minimum):
            qualifier = "greater than" if exclusive else "at least"
            self.write(f"Value must be {qualifier} {minimum:g}.")
            return None
        return value

    def confirm(self, label: str) -> bool:
        return self.prompt(f"{label} (y/N): ").lower() in {"y", "yes"}


Handler = Callable[[AppContext, Console], None]
MenuItems = List[Tuple[str, str, Handler]]


def _run_menu(
    title: str, items: MenuItems, ctx: AppContext, console: Console, *, exit_label: str = "Back"
) -> None:
    handlers: Dict[str, Handler] = {key: handler for key, _, handler in items}
    while True:
        console.write_lines(render.heading(title))
        for key, label, _ in items:
            console.write(f"{key}. {label}")
        console.write(f"0. {exit_label}")
        choice = console.prompt("Select an option: ")
        if choice == "0":
            return
        handler = handlers.get(choice)
        if handler is None:
            console.write("Invalid choice, please try again.")
            continue
        handler(ctx, console)


# Players -----------------------------------------------------------------


def _list_players(ctx: AppContext, console: Console) -> None:
    console.write_lines(render.render_items("All Players", ctx.store.get_all_players(), "No players found."))


def _add_player(ctx: AppContext, console: Console) -> None:
    name = console.ask_text("Player name: ")
    if name is None:
        return
    player = ctx.store.create_player(name)
    console.write(f"Created player {player.player_id}: {player.name}")


def _view_player(ctx: AppContext, console: Console) -> None:
    player_id = console.ask_int("Player id: ", minimum=1)
    if player_id is None:
        return
    player = ctx.store.get_player_by_id(player_id)
    if player is None:
        console.write(f"Player {player_id} not found.")
        return
    console.write(str(player))
    sessions = ctx.store.get_sessions_for_player(player_id)
    console.write(f"Sessions recorded: {len(sessions)}")


def _rename_player(ctx: AppContext, console: Console) -> None:
    player_id = console.ask_int("Player id: ", minimum=1)
    if player_id is None:
        return
    if ctx.store.get_player_by_id(player_id) is None:
        console.write(f"Player {player_id} not found.")
        return
    name = console.ask_text("New name: ")
    if name is None:
        return
    ctx.store.update_player(player_id, PlayerPatch(name=name))
    console.write("Player updated.")


def _delete_player(ctx: AppContext, console: Console) -> None:
    player_id = console.ask_int("Player id: ", minimum=1)
    if player_id is None:
        return
    if ctx.store.delete_player(player_id):
        console.write(f"Player {player_id} deleted.")
    else:
        console.write(f"Player {player_id} not found.")


PLAYER_MENU: MenuItems = [
    ("1", "List players", _list_players),
    ("2", "Add player", _add_player),
    ("3", "View player", _view_player),
    ("4", "Rename player", _rename_player),
    ("5", "Delete player", _delete_player),
]


# Sessions ----------------------------------------------------------------


def _list_sessions(ctx: AppContext, console: Console) -> None:
    console.write_lines(
        render.render_items("All Game Sessions", ctx.store.get_all_game_sessions(), "No game sessions found.")
    )


def _record_session(ctx: AppContext, console: Console) -> None:
    player_id = console.ask_int("Player id: ", minimum=1)
    if player_id is None:
        return
    if ctx.store.get_player_by_id(player_id) is None:
        console.write(f"Player {player_id} not found.")
        return
    score = console.ask_int("Score: ", minimum=0)
    if score is None:
        return
    level = console.ask_int("Level reached: ", minimum=1)
    if level is None:
        return
    minutes = console.ask_float("Duration (minutes): ", minimum=0.0)
    if minutes is None:
        return
    session = ctx.store.create_game_session(player_id, score, level, timedelta(minutes=minutes))
    console.write(f"Recorded session {session.session_id}.")
    if session.new_high_score:
        console.write("New personal high score!")


def _view_session(ctx: AppContext, console: Console) -> None:
    session_id = console.ask_int("Session id: ", minimum=1)
    if session_id is None:
        return
    session = ctx.store.get_game_session_by_id(session_id)
    if session is None:
        console.write(f"Session {session_id} not found.")
        return
    console.write(str(session))
    console.write(f"Score per minute: {session.score_per_minute():.1f}")


def _delete_session(ctx: AppContext, console: Console) -> None:
    session_id = console.ask_int("Session id: ", minimum=1)
    if session_id is None:
        return
    if ctx.store.delete_game_session(session_id):
        console.write(f"Session {session_id} deleted.")
    else:
        console.write(f"Session {session_id} not found.")


SESSION_MENU: MenuItems = [
    ("1", "List sessions", _list_sessions),
    ("2", "Record session", _record_session),
    ("3", "View session", _view_session),
    ("4", "Delete session", _delete_session),
]


# Obstacles ---------------------------------------------------------------


def _list_obstacles(ctx: AppContext, console: Console) -> None:
    console.write_lines(render.render_items("All Obstacles", ctx.store.get_all_obstacles(), "No obstacles found."))


def _ask_choice(console: Console, label: str, parse: Callable[[str], object]) -> Optional[object]:
    raw = console.prompt(label)
    try:
        return parse(raw)
    except ValueError as exc:
        console.write(str(exc))
        return None


def _add_obstacle(ctx: AppContext, console: Console) -> None:
    name = console.ask_text("Obstacle name: ")
    if name is None:
        return
    choices = ", ".join(member.value for member in ObstacleType)
    obstacle_type = _ask_choice(console, f"Type ({choices}): ", ObstacleType.parse)
    if obstacle_type is None:
        return
    speed = console.ask_float("Speed: ", minimum=0.0, exclusive=True)
    if speed is None:
        return
    damage = console.ask_int("Damage points: ", minimum=0)
    if damage is None:
        return
    size = console.ask_int("Size: ", minimum=0)
    if size is None:
        return
    obstacle = ctx.store.create_obstacle(name, obstacle_type, speed, damage, size)
    console.write(f"Created obstacle {obstacle.obstacle_id}: {obstacle.name}")


def _toggle_obstacle(ctx: AppContext, console: Console) -> None:
    obstacle_id = console.ask_int("Obstacle id: ", minimum=1)
    if obstacle_id is None:
        return
    obstacle = ctx.store.get_obstacle_by_id(obstacle_id)
    if obstacle is None:
        console.write(f"Obstacle {obstacle_id} not found.")
        return
    updated = ctx.store.update_obstacle(obstacle_id, ObstaclePatch(is_active=not obstacle.is_active))
    console.write(f"Obstacle {obstacle_id} is now {'active' if updated.is_active else 'inactive'}.")


def _delete_obstacle(ctx: AppContext, console: Console) -> None:
    obstacle_id = console.ask_int("Obstacle id: ", minimum=1)
    if obstacle_id is None:
        return
    if ctx.store.delete_obstacle(obstacle_id):
        console.write(f"Obstacle {obstacle_id} deleted.")
    else:
        console.write(f"Obstacle {obstacle_id} not found.")


OBSTACLE_MENU: MenuItems = [
    ("1", "List obstacles", _list_obstacles),
    ("2", "Add obstacle", _add_obstacle),
    ("3", "Toggle obstacle active", _toggle_obstacle),
    ("4", "Delete obstacle", _delete_obstacle),
]


# Power-ups ---------------------------------------------------------------


def _list_power_ups(ctx: AppContext, console: Console) -> None:
    console.write_lines(render.render_items("All Power-ups", ctx.store.get_all_power_ups(), "No power-ups found."))


def _add_power_up(ctx: AppContext, console: Console) -> None:
    name = console.ask_text("Power-up name: ")
    if name is None:
        return
    power_up_type = console.ask_text("Type: ")
    if power_up_type is None:
        return
    effect = console.ask_text("Effect: ")
    if effect is None:
        return
    duration = console.ask_int("Duration (seconds): ", minimum=0)
    if duration is None:
        return
    points = console.ask_int("Points value: ", minimum=0)
    if points is None:
        return
    power_up = ctx.store.create_power_up(name, power_up_type, effect, duration, points)
    console.write(f"Created power-up {power_up.power_up_id}: {power_up.name}")


def _set_rarity(ctx: AppContext, console: Console) -> None:
    power_up_id = console.ask_int("Power-up id: ", minimum=1)
    if power_up_id is None:
        return
    if ctx.store.get_power_up_by_id(power_up_id) is None:
        console.write(f"Power-up {power_up_id} not found.")
        return
    choices = ", ".join(member.value for member in Rarity)
    rarity = _ask_choice(console, f"Rarity ({choices}): ", Rarity.parse)
    if rarity is None:
        return
    ctx.store.update_power_up(power_up_id, PowerUpPatch(rarity=rarity))
    console.write("Power-up updated.")


def _delete_power_up(ctx: AppContext, console: Console) -> None:
    power_up_id = console.ask_int("Power-up id: ", minimum=1)
    if power_up_id is None:
        return
    if ctx.store.delete_power_up(power_up_id):
        console.write(f"Power-up {power_up_id} deleted.")
    else:
        console.write(f"Power-up {power_up_id} not found.")


POWER_UP_MENU: MenuItems = [
    ("1", "List power-ups", _list_power_ups),
    ("2", "Add power-up", _add_power_up),
    ("3", "Set rarity", _set_rarity),
    ("4", "Delete power-up", _delete_power_up),
]


# Data generation ---------------------------------------------------------


def _generate_complete(ctx: AppContext, console: Console) -> None:
    summary = ctx.generator.generate_complete_dataset()
    console.write("Complete dataset generated.")
    console.write(f"  Players: {summary.players}")
    console.write(f"  Obstacles: {summary.obstacles}")
    console.write(f"  Power-ups: {summary.power_ups}")
    console.write(f"  Game Sessions: {summary.game_sessions}")


def _generate(kind: str, method_name: str) -> Handler:
    def handler(ctx: AppContext, console: Console) -> None:
        count = console.ask_int(f"How many {kind}? ", minimum=1)
        if count is None:
            return
        created = getattr(ctx.generator, method_name)(count)
        if created == 0:
            console.write(f"No {kind} generated; add players first.")
        else:
            console.write(f"Generated {created} {kind}.")

    return handler


def _clear_all(ctx: AppContext, console: Console) -> None:
    if console.confirm("Delete all data from memory?"):
        ctx.store.clear_all()
        console.write("All data cleared.")


GENERATE_MENU: MenuItems = [
    ("1", "Generate complete dataset", _generate_complete),
    ("2", "Generate players", _generate("players", "generate_players")),
    ("3", "Generate game sessions", _generate("game sessions", "generate_game_sessions")),
    ("4", "Generate obstacles", _generate("obstacles", "generate_obstacles")),
    ("5", "Generate power-ups", _generate("power-ups", "generate_power_ups")),
    ("6", "Clear all data", _clear_all),
]


# Analytics ---------------------------------------------------------------


def _search_players(ctx: AppContext, console: Console) -> None:
    term = console.ask_text("Search term: ")
    if term is None:
        return
    console.write_lines(
        render.render_items(
            f"Search Results for '{term}'",
            ctx.analytics.search_players(term),
            f"No players found matching '{term}'",
        )
    )


def _filter_obstacles(ctx: AppContext, console: Console) -> None:
    min_speed = console.ask_float("Minimum speed: ", minimum=0.0)
    if min_speed is None:
        return
    max_speed = console.ask_float("Maximum speed: ", minimum=min_speed)
    if max_speed is None:
        return
    console.write_lines(
        render.render_items(
            f"Obstacles with speed {min_speed:g} - {max_speed:g}",
            ctx.analytics.filter_obstacles_by_speed(min_speed, max_speed),
            f"No obstacles found with speed between {min_speed:g} and {max_speed:g}",
        )
    )


def _report(build: Callable[[AppContext], List[str]]) -> Handler:
    def handler(ctx: AppContext, console: Console) -> None:
        console.write_lines(build(ctx))

    return handler


ANALYTICS_MENU: MenuItems = [
    ("1", "Player statistics", _report(lambda c: render.render_player_statistics(c.analytics.player_statistics()))),
    ("2", "Player leaderboard", _report(lambda c: render.render_leaderboard(c.analytics.player_rankings()))),
    ("3", "Session statistics", _report(lambda c: render.render_session_statistics(c.analytics.session_statistics()))),
    (
        "4",
        "Recent sessions",
        _report(
            lambda c: render.render_recent_sessions(c.analytics.recent_sessions(c.settings.recent_sessions))
        ),
    ),
    ("5", "Obstacle statistics", _report(lambda c: render.render_obstacle_statistics(c.analytics.obstacle_statistics()))),
    ("6", "Power-up statistics", _report(lambda c: render.render_power_up_statistics(c.analytics.power_up_statistics()))),
    ("7", "Advanced analytics", _report(lambda c: render.render_advanced_analytics(c.analytics.advanced_analytics()))),
    ("8", "Search players", _search_players),
    ("9", "Filter obstacles by speed", _filter_obstacles),
]


# Persistence -------------------------------------------------------------


def _save(ctx: AppContext, console: Console) -> None:
    if anyio.run(ctx.persistence.save_all):
        console.write(f"All data saved to {ctx.persistence.data_dir}")
    else:
        console.write("Saving failed; see the log for details.")


def _load(ctx: AppContext, console: Console) -> None:
    if not ctx.persistence.has_saved_data():
        console.write("No saved data found.")
        return
    clear_existing = False
    if ctx.store.count_players() or ctx.store.count_obstacles() or ctx.store.count_power_ups():
        clear_existing = console.confirm("Replace the data currently in memory?")
    loaded = anyio.run(functools.partial(ctx.persistence.load_all, clear_existing=clear_existing))
    if not loaded:
        console.write("Loading failed; see the log for details.")
        return
    console.write("Data loaded.")
    console.write(f"  Players: {ctx.store.count_players()}")
    console.write(f"  Obstacles: {ctx.store.count_obstacles()}")
    console.write(f"  Power-ups: {ctx.store.count_power_ups()}")
    console.write(f"  Game Sessions: {ctx.store.count_game_sessions()}")


def _export(ctx: AppContext, console: Console) -> None:
    file_name = ctx.settings.export_filename
    if anyio.run(ctx.persistence.export_to_single_file, file_name):
        console.write(f"Data exported to {ctx.persistence.data_dir / file_name}")
    else:
        console.write("Export failed; see the log for details.")


def _submenu(title: str, items: MenuItems) -> Handler:
    return functools.partial(_run_menu, title, items)


MAIN_MENU: MenuItems = [
    ("1", "Player management", _submenu("Player Management", PLAYER_MENU)),
    ("2", "Game session management", _submenu("Game Session Management", SESSION_MENU)),
    ("3", "Obstacle management", _submenu("Obstacle Management", OBSTACLE_MENU)),
    ("4", "Power-up management", _submenu("Power-up Management", POWER_UP_MENU)),
    ("5", "Generate random data", _submenu("Data Generation", GENERATE_MENU)),
    ("6", "Analytics & reports", _submenu("Analytics & Reports", ANALYTICS_MENU)),
    ("7", "Save data", _save),
    ("8", "Load data", _load),
    ("9", "Export data", _export),
]


def run(ctx: AppContext, console: Console) -> None:
    """Drive the main menu until the user exits or input runs out."""

    try:
        _run_menu("Dodger Game Data Manager", MAIN_MENU, ctx, console, exit_label="Exit")
    except EOFError:
        console.write("")
    console.write("Goodbye!")


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage Dodger game players, sessions, obstacles and power-ups")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory for saved JSON files")
    parser.add_argument("--log-level", default=None, help="Logging level (e.g. INFO, DEBUG)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    settings = load_settings().with_overrides(data_dir=args.data_dir, log_level=args.log_level)
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run(AppContext.build(settings), Console())


if __name__ == "__main__":
    main()
