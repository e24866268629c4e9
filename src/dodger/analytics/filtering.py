"""Predicate helpers for slicing entity snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Sequence

from dodger.models import Obstacle, Player


@dataclass(frozen=True)
class SpeedRange:
    """Inclusive obstacle speed bounds; ``None`` leaves a side open."""

    min_speed: float | None = None
    max_speed: float | None = None
    sort_direction: Literal["asc", "desc"] = "desc"

    def contains(self, speed: float) -> bool:
        if self.min_speed is not None and speed < self.min_speed:
            return False
        if self.max_speed is not None and speed > self.max_speed:
            return False
        return True


def search_players(players: Iterable[Player], term: str) -> list[Player]:
    """Players whose name contains ``term``, ignoring case, in store order."""

    needle = term.casefold()
    return [player for player in players if needle in player.name.casefold()]


def filter_obstacles(obstacles: Sequence[Obstacle], criteria: SpeedRange) -> list[Obstacle]:
    selected = [obstacle for obstacle in obstacles if criteria.contains(obstacle.speed)]
    # sort() is stable, so equal speeds keep their store order.
    selected.sort(key=lambda o: o.speed, reverse=criteria.sort_direction != "asc")
    return selected


__all__ = [
    "SpeedRange",
    "filter_obstacles",
    "search_players",
]
