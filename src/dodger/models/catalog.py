"""Catalog entities: obstacles and power-ups spawned by the game."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field
from pydantic.config import ConfigDict

from .enums import ObstacleType, Rarity


class Obstacle(BaseModel):
    obstacle_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, validation_alias=AliasChoices("name", "obstacle_name"))
    obstacle_type: ObstacleType
    speed: float = Field(..., gt=0.0)
    damage_points: int = Field(default=0, ge=0)
    size: int = Field(default=0, ge=0)
    color: str = "Red"
    points_on_dodge: int = Field(default=10, ge=0)
    is_active: bool = True

    model_config = ConfigDict(validate_assignment=True)

    def __str__(self) -> str:
        status = "Active" if self.is_active else "Inactive"
        return (
            f"[{self.obstacle_id}] {self.name} ({self.obstacle_type}) | Speed: {self.speed:g} "
            f"| Damage: {self.damage_points} | Size: {self.size} | {self.color} "
            f"| Dodge: +{self.points_on_dodge} | {status}"
        )


class PowerUp(BaseModel):
    power_up_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, validation_alias=AliasChoices("name", "power_up_name"))
    power_up_type: str
    duration_seconds: int = Field(default=0, ge=0)
    points_value: int = Field(default=0, ge=0)
    effect: str = ""
    spawn_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    rarity: Rarity = Rarity.COMMON
    is_collectible: bool = True

    model_config = ConfigDict(validate_assignment=True)

    def __str__(self) -> str:
        status = "Collectible" if self.is_collectible else "Locked"
        return (
            f"[{self.power_up_id}] {self.name} ({self.power_up_type}, {self.rarity}) "
            f"| {self.effect} | {self.duration_seconds}s | +{self.points_value} "
            f"| Spawn: {self.spawn_rate:.3f} | {status}"
        )
