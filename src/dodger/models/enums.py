"""Closed vocabularies used by the game entities."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple, Type, TypeVar


_E = TypeVar("_E", bound="_Label")


class _Label(str, Enum):
    """String-valued enumeration with case-insensitive parsing."""

    @classmethod
    def parse(cls: Type[_E], value: str) -> _E:
        text = value.strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        choices = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown {cls.__name__} {value!r}; expected one of {choices}")

    def __str__(self) -> str:
        return self.value


class Rank(_Label):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"
    MASTER = "Master"
    LEGEND = "Legend"

    @property
    def order(self) -> int:
        return _RANK_ORDER[self]


class Rarity(_Label):
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"

    @property
    def order(self) -> int:
        return _RARITY_ORDER[self]


class Difficulty(_Label):
    EASY = "Easy"
    NORMAL = "Normal"
    HARD = "Hard"
    EXPERT = "Expert"


class ObstacleType(_Label):
    METEOR = "Meteor"
    COMET = "Comet"
    ASTEROID = "Asteroid"
    DEBRIS = "Debris"
    CRYSTAL = "Crystal"


_RANK_ORDER: Dict[Rank, int] = {rank: index for index, rank in enumerate(Rank)}
_RARITY_ORDER: Dict[Rarity, int] = {rarity: index for index, rarity in enumerate(Rarity)}


# Evaluated top-down; the first threshold the score reaches wins.
RANK_THRESHOLDS: Tuple[Tuple[int, Rank], ...] = (
    (10_000, Rank.LEGEND),
    (5_000, Rank.MASTER),
    (2_500, Rank.EXPERT),
    (1_000, Rank.ADVANCED),
    (500, Rank.INTERMEDIATE),
    (0, Rank.BEGINNER),
)

POINTS_PER_LEVEL = 1_000


def rank_for_score(highest_score: int) -> Rank:
    """Return the rank earned by ``highest_score``."""

    for threshold, rank in RANK_THRESHOLDS:
        if highest_score >= threshold:
            return rank
    return Rank.BEGINNER


def level_for_score(score: int) -> int:
    """Level reached in-game for ``score``; every 1000 points is a new level."""

    return max(0, score) // POINTS_PER_LEVEL + 1
