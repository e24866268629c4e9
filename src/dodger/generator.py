"""Random sample data for demos and manual testing."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from dodger.models import (
    Difficulty,
    GameSessionPatch,
    ObstaclePatch,
    ObstacleType,
    PlayerPatch,
    PowerUpPatch,
    Rarity,
    level_for_score,
    utcnow,
)
from dodger.store import GameDataStore


logger = logging.getLogger(__name__)

PLAYER_NAMES = (
    "SpaceAce", "MeteorMaster", "DodgeKing", "StarNavigator", "CosmicPilot",
    "NovaHunter", "OrbitRacer", "GalaxyGuardian", "StellarDodger", "AstroNinja",
    "NebulaKnight", "QuasarQueen", "VoidVoyager", "PlanetaryPro", "CometCrusher",
    "LunarLegend", "SolarSurfer", "ZenithZapper", "HorizonHero", "CelestialChamp",
)

OBSTACLE_NAMES = (
    "Red Meteor", "Blue Comet", "Asteroid Fragment", "Space Debris", "Ice Crystal",
    "Burning Rock", "Dark Matter", "Plasma Ball", "Cosmic Stone", "Solar Flare",
    "Iron Meteorite", "Crystal Shard", "Frozen Boulder", "Lava Rock", "Neutron Star Chunk",
)

POWER_UP_NAMES = (
    "Shield Boost", "Speed Burst", "Score Multiplier", "Invincibility", "Time Slow",
    "Magnet", "Double Points", "Extra Life", "Turbo Charge", "Star Power",
    "Energy Shield", "Hyper Mode", "Lucky Star", "Power Surge", "Cosmic Blessing",
)
POWER_UP_EFFECTS = (
    "Temporary Shield", "Increased Speed", "2x Score", "Immunity", "Slow Motion",
    "Attract Points", "Double Points", "Extra Life", "Boost Speed", "All Buffs",
    "Damage Protection", "Ultra Fast", "Lucky Bonus", "Power Increase", "Divine Protection",
)
POWER_UP_TYPES = ("Defensive", "Offensive", "Bonus", "Utility", "Special")
COLORS = ("Red", "Blue", "Green", "Purple", "Orange", "Yellow", "White", "Black")

# points multiplier, spawn-rate multiplier
RARITY_ADJUSTMENTS = {
    Rarity.LEGENDARY: (3.0, 0.2),
    Rarity.EPIC: (2.0, 0.5),
    Rarity.RARE: (1.5, 0.7),
}

MAX_SCORE = 15_000


@dataclass(frozen=True)
class DatasetSummary:
    players: int
    obstacles: int
    power_ups: int
    game_sessions: int


class DataGenerator:
    """Populate a store with plausible random entities.

    Everything goes through the store's create/update calls, so ids and the
    rank invariant are maintained exactly as for user-entered data.
    """

    def __init__(self, store: GameDataStore, rng: Optional[random.Random] = None) -> None:
        self._store = store
        self._rng = rng or random.Random()

    def generate_players(self, count: int) -> int:
        rng = self._rng
        used = {player.name for player in self._store.get_all_players()}
        now = utcnow()
        for _ in range(count):
            name = self._unique_name(used)
            used.add(name)
            highest = rng.randint(100, MAX_SCORE - 1)
            player = self._store.create_player(name)
            self._store.update_player(
                player.player_id,
                PlayerPatch(
                    total_games_played=rng.randint(5, 99),
                    highest_score=highest,
                    total_score=highest + rng.randint(1_000, 49_999),
                    date_registered=now - timedelta(days=rng.randint(1, 364)),
                    last_played=now - timedelta(days=rng.randint(0, 29)),
                ),
            )
        logger.info("Generated %d players", count)
        return count

    def generate_game_sessions(self, count: int) -> int:
        players = self._store.get_all_players()
        if not players:
            logger.warning("No players found; generate players before sessions")
            return 0

        rng = self._rng
        now = utcnow()
        for _ in range(count):
            player = rng.choice(players)
            score = rng.randint(100, MAX_SCORE - 1)
            duration = timedelta(minutes=rng.randint(1, 14), seconds=rng.randint(0, 59))
            session = self._store.create_game_session(
                player.player_id,
                score,
                level_for_score(score),
                duration,
                player_name=player.name,
            )
            self._store.update_game_session(
                session.session_id,
                GameSessionPatch(
                    obstacles_dodged=rng.randint(50, 499),
                    power_ups_collected=rng.randint(0, 19),
                    difficulty=rng.choice(list(Difficulty)),
                    session_date=now - timedelta(days=rng.randint(0, 89)),
                    new_high_score=rng.random() < 0.2,
                ),
            )
        logger.info("Generated %d game sessions", count)
        return count

    def generate_obstacles(self, count: int) -> int:
        rng = self._rng
        for _ in range(count):
            speed = round(rng.random() * 5 + 1, 2)
            damage = rng.randint(50, 149)
            obstacle = self._store.create_obstacle(
                rng.choice(OBSTACLE_NAMES),
                rng.choice(list(ObstacleType)),
                speed,
                damage,
                rng.randint(15, 39),
            )
            self._store.update_obstacle(
                obstacle.obstacle_id,
                ObstaclePatch(
                    color=rng.choice(COLORS),
                    points_on_dodge=int(speed * 5) + damage // 10,
                    is_active=rng.random() < 0.9,
                ),
            )
        logger.info("Generated %d obstacles", count)
        return count

    def generate_power_ups(self, count: int) -> int:
        rng = self._rng
        for _ in range(count):
            rarity = rng.choice(list(Rarity))
            points = rng.randint(50, 499)
            spawn_rate = round(rng.random() * 0.3, 3)
            points_factor, spawn_factor = RARITY_ADJUSTMENTS.get(rarity, (1.0, 1.0))
            power_up = self._store.create_power_up(
                rng.choice(POWER_UP_NAMES),
                rng.choice(POWER_UP_TYPES),
                rng.choice(POWER_UP_EFFECTS),
                rng.randint(3, 14),
                points,
            )
            self._store.update_power_up(
                power_up.power_up_id,
                PowerUpPatch(
                    rarity=rarity,
                    points_value=int(points * points_factor),
                    spawn_rate=spawn_rate * spawn_factor,
                    is_collectible=rng.random() < 0.9,
                ),
            )
        logger.info("Generated %d power-ups", count)
        return count

    def generate_complete_dataset(self) -> DatasetSummary:
        self.generate_players(15)
        self.generate_obstacles(20)
        self.generate_power_ups(12)
        self.generate_game_sessions(50)
        return DatasetSummary(
            players=self._store.count_players(),
            obstacles=self._store.count_obstacles(),
            power_ups=self._store.count_power_ups(),
            game_sessions=self._store.count_game_sessions(),
        )

    def _unique_name(self, used: set[str]) -> str:
        while True:
            name = f"{self._rng.choice(PLAYER_NAMES)}{self._rng.randint(100, 998)}"
            if name not in used:
                return name
