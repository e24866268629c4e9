"""Partial updates applied by the store.

A patch lists only the fields being changed; unset fields leave the entity
untouched. Derived fields (a player's rank) are absent on purpose and are
recomputed by the store after the patch is applied.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .enums import Difficulty, ObstacleType, Rarity


class _Patch(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class PlayerPatch(_Patch):
    name: str | None = Field(default=None, min_length=1)
    total_games_played: int | None = Field(default=None, ge=0)
    total_score: int | None = Field(default=None, ge=0)
    highest_score: int | None = Field(default=None, ge=0)
    date_registered: datetime | None = None
    last_played: datetime | None = None


class GameSessionPatch(_Patch):
    """Session fields that do not feed player aggregates.

    Score is deliberately not patchable: it was already folded into the
    owning player's totals when the session was recorded.
    """

    player_name: str | None = None
    level: int | None = Field(default=None, ge=1)
    duration: timedelta | None = Field(default=None, ge=timedelta(0))
    obstacles_dodged: int | None = Field(default=None, ge=0)
    power_ups_collected: int | None = Field(default=None, ge=0)
    new_high_score: bool | None = None
    difficulty: Difficulty | None = None
    session_date: datetime | None = None


class ObstaclePatch(_Patch):
    name: str | None = Field(default=None, min_length=1)
    obstacle_type: ObstacleType | None = None
    speed: float | None = Field(default=None, gt=0.0)
    damage_points: int | None = Field(default=None, ge=0)
    size: int | None = Field(default=None, ge=0)
    color: str | None = None
    points_on_dodge: int | None = Field(default=None, ge=0)
    is_active: bool | None = None


class PowerUpPatch(_Patch):
    name: str | None = Field(default=None, min_length=1)
    power_up_type: str | None = None
    duration_seconds: int | None = Field(default=None, ge=0)
    points_value: int | None = Field(default=None, ge=0)
    effect: str | None = None
    spawn_rate: float | None = Field(default=None, ge=0.0, le=1.0)
    rarity: Rarity | None = None
    is_collectible: bool | None = None
