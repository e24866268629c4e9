"""Plain-text rendering of entities and analytics reports."""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, List, Optional, Sequence

from dodger.analytics import (
    AdvancedAnalytics,
    GroupCount,
    LeaderboardRow,
    ObstacleStatistics,
    PlayerStatistics,
    PowerUpStatistics,
    RecentSessions,
    SessionStatistics,
)

RULE = "-" * 75
NO_DATA = "No data available."


def heading(title: str) -> List[str]:
    return ["", f"=== {title} ===", ""]


def format_duration(value: timedelta) -> str:
    total = int(round(value.total_seconds()))
    return f"{total // 60:02d}:{total % 60:02d}"


def _groups(title: str, groups: Sequence[GroupCount], noun: str) -> List[str]:
    lines = ["", f"{title}:"]
    lines.extend(f"  {group.label}: {group.count} {noun}" for group in groups)
    return lines


def render_items(title: str, items: Iterable[object], empty: str) -> List[str]:
    rows = [str(item) for item in items]
    if not rows:
        return [empty]
    return [*heading(title), *rows]


def render_player_statistics(report: Optional[PlayerStatistics]) -> List[str]:
    if report is None:
        return ["No players found."]
    lines = heading("Player Statistics")
    lines += [
        f"Total Players: {report.total_players}",
        f"Average High Score: {report.average_high_score:.2f}",
        f"Highest Score Ever: {report.max_high_score}",
        f"Lowest High Score: {report.min_high_score}",
        f"Total Games Played: {report.total_games_played}",
    ]
    lines += _groups("Players by Rank", report.by_rank, "players")
    lines += ["", "Most Active Players:"]
    lines += [f"  {p.name}: {p.total_games_played} games" for p in report.most_active]
    lines += ["", "Top Players by High Score:"]
    lines += [f"  {p.name}: {p.highest_score} points" for p in report.top_scorers]
    return lines


def render_leaderboard(rows: Optional[Sequence[LeaderboardRow]]) -> List[str]:
    if not rows:
        return ["No players found."]
    lines = heading("Player Leaderboard")
    lines.append(f"{'Rank':<6}{'Player Name':<25}{'High Score':>12}{'Avg Score':>12}{'Games':>8}")
    lines.append(RULE)
    for row in rows:
        lines.append(
            f"{row.position:<6}{row.player.name:<25}{row.player.highest_score:>12}"
            f"{row.average_score:>12.0f}{row.player.total_games_played:>8}"
        )
    return lines


def render_session_statistics(report: Optional[SessionStatistics]) -> List[str]:
    if report is None:
        return ["No game sessions found."]
    lines = heading("Game Session Statistics")
    lines += [
        f"Total Game Sessions: {report.total_sessions}",
        f"Average Session Score: {report.average_score:.2f}",
        f"Highest Session Score: {report.max_score}",
        f"Average Level Reached: {report.average_level:.2f}",
        f"Highest Level Reached: {report.max_level}",
        f"Average Game Duration: {format_duration(report.average_duration)}",
    ]
    lines += _groups("Sessions by Difficulty", report.by_difficulty, "sessions")
    lines += [
        "",
        f"Total Obstacles Dodged: {report.total_obstacles_dodged}",
        f"Total Power-ups Collected: {report.total_power_ups_collected}",
        f"New High Score Sessions: {report.new_high_score_sessions}",
    ]
    return lines


def render_recent_sessions(report: Optional[RecentSessions]) -> List[str]:
    if report is None:
        return ["No game sessions found."]
    return render_items(f"Recent {report.requested} Game Sessions", report.sessions, NO_DATA)


def render_obstacle_statistics(report: Optional[ObstacleStatistics]) -> List[str]:
    if report is None:
        return ["No obstacles found."]
    lines = heading("Obstacle Statistics")
    lines += [
        f"Total Obstacles: {report.total_obstacles}",
        f"Average Speed: {report.average_speed:.2f}",
        f"Fastest Obstacle: {report.fastest.name} ({report.fastest.speed:g})",
        f"Average Damage: {report.average_damage:.2f}",
        f"Most Dangerous: {report.most_dangerous.name} ({report.most_dangerous.damage_points} damage)",
    ]
    lines += _groups("Obstacles by Type", report.by_type, "obstacles")
    lines += [
        "",
        f"Active Obstacles: {report.active_count}",
        f"Inactive Obstacles: {report.inactive_count}",
    ]
    return lines


def render_power_up_statistics(report: Optional[PowerUpStatistics]) -> List[str]:
    if report is None:
        return ["No power-ups found."]
    lines = heading("Power-up Statistics")
    lines += [
        f"Total Power-ups: {report.total_power_ups}",
        f"Average Points Value: {report.average_points:.2f}",
        f"Most Valuable: {report.most_valuable.name} ({report.most_valuable.points_value} points)",
        f"Average Duration: {report.average_duration:.2f} seconds",
    ]
    lines += _groups("Power-ups by Rarity", report.by_rarity, "power-ups")
    lines += _groups("Power-ups by Type", report.by_type, "power-ups")
    lines += ["", "Most Valuable Power-ups:"]
    lines += [f"  {p.name}: {p.points_value} points ({p.rarity})" for p in report.top_valuable]
    return lines


def render_advanced_analytics(report: Optional[AdvancedAnalytics]) -> List[str]:
    if report is None:
        return ["Not enough data for advanced analytics."]
    lines = heading("Advanced Analytics")
    lines.append("Top Performers (by average session score):")
    for performer in report.top_performers:
        lines.append(f"  {performer.name} ({performer.rank})")
        lines.append(
            f"    Avg Score: {performer.average_score:.2f} | Best: {performer.best_score} "
            f"| Sessions: {performer.total_sessions}"
        )
    lines += ["", "Score Distribution:"]
    lines += [f"  {bucket.label}: {bucket.count} sessions" for bucket in report.score_distribution]
    lines += ["", "Level Progression:"]
    for stat in report.level_progression:
        lines.append(
            f"  Level {stat.level}: {stat.session_count} sessions | Avg Score: {stat.average_score:.0f} "
            f"| Avg Duration: {format_duration(stat.average_duration)}"
        )
    return lines
