"""Recorded game sessions."""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .enums import Difficulty
from .player import utcnow


class GameSession(BaseModel):
    """One finished run of the game by a player.

    ``player_name`` is a snapshot taken when the session is recorded and is
    not kept in sync with later renames. ``player_id`` may dangle once the
    player is deleted.
    """

    session_id: int = Field(..., ge=1)
    player_id: int
    player_name: str = ""
    score: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    duration: timedelta = Field(default=timedelta(0), ge=timedelta(0))
    obstacles_dodged: int = Field(default=0, ge=0)
    power_ups_collected: int = Field(default=0, ge=0)
    new_high_score: bool = False
    difficulty: Difficulty = Difficulty.NORMAL
    session_date: datetime = Field(default_factory=utcnow)

    model_config = ConfigDict(validate_assignment=True)

    def score_per_minute(self) -> float:
        minutes = self.duration.total_seconds() / 60
        if minutes <= 0:
            return 0.0
        return self.score / minutes

    def __str__(self) -> str:
        total_seconds = int(self.duration.total_seconds())
        marker = " NEW HIGH SCORE" if self.new_high_score else ""
        return (
            f"[{self.session_id}] {self.player_name} | Score: {self.score} | Level: {self.level} "
            f"| Duration: {total_seconds // 60:02d}:{total_seconds % 60:02d} "
            f"| {self.difficulty} | {self.session_date:%Y-%m-%d %H:%M}{marker}"
        )
