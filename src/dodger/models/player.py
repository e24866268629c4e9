"""Player records tracked by the data manager."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import AliasChoices, BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from .enums import Rank, rank_for_score


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Player(BaseModel):
    """A registered player and their accumulated statistics.

    ``rank`` always follows ``highest_score``; any value passed in or assigned
    is replaced by the derived rank.
    """

    player_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, validation_alias=AliasChoices("name", "player_name"))
    total_games_played: int = Field(default=0, ge=0)
    total_score: int = Field(default=0, ge=0)
    highest_score: int = Field(default=0, ge=0)
    date_registered: datetime = Field(default_factory=utcnow)
    last_played: datetime = Field(default_factory=utcnow)
    rank: Rank = Rank.BEGINNER

    model_config = ConfigDict(validate_assignment=True)

    @model_validator(mode="after")
    def _derive_rank(self) -> "Player":
        # Written through __dict__ so validate_assignment does not re-enter this hook.
        self.__dict__["rank"] = rank_for_score(self.highest_score)
        return self

    def average_score(self) -> float:
        if self.total_games_played == 0:
            return 0.0
        return self.total_score / self.total_games_played

    def __str__(self) -> str:
        return (
            f"[{self.player_id}] {self.name} | Rank: {self.rank} | High Score: {self.highest_score} "
            f"| Games: {self.total_games_played} | Avg: {self.average_score():.0f}"
        )
