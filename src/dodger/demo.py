"""Non-interactive walkthrough: generate a dataset and print every report."""

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

from dodger import render
from dodger.config import load_settings
from dodger.context import AppContext


def build_report(ctx: AppContext, *, search_term: str = "Star", min_speed: float = 3.0, max_speed: float = 5.0) -> List[str]:
    """Populate ``ctx`` with a complete sample dataset and render all reports."""

    summary = ctx.generator.generate_complete_dataset()
    analytics = ctx.analytics
    lines = render.heading("Dodger Game Data Demo")
    lines += [
        f"Players: {summary.players}",
        f"Obstacles: {summary.obstacles}",
        f"Power-ups: {summary.power_ups}",
        f"Game Sessions: {summary.game_sessions}",
    ]
    lines += render.render_player_statistics(analytics.player_statistics())
    lines += render.render_session_statistics(analytics.session_statistics())
    lines += render.render_obstacle_statistics(analytics.obstacle_statistics())
    lines += render.render_power_up_statistics(analytics.power_up_statistics())
    lines += render.render_advanced_analytics(analytics.advanced_analytics())
    lines += render.render_items(
        f"Search Results for '{search_term}'",
        analytics.search_players(search_term),
        f"No players found matching '{search_term}'",
    )
    lines += render.render_items(
        f"Obstacles with speed {min_speed:g} - {max_speed:g}",
        analytics.filter_obstacles_by_speed(min_speed, max_speed),
        f"No obstacles found with speed between {min_speed:g} and {max_speed:g}",
    )
    return lines


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Print a sample Dodger analytics report")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ctx = AppContext.build(settings, rng=random.Random(args.seed))
    for line in build_report(ctx):
        print(line)


if __name__ == "__main__":
    main()
