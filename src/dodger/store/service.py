"""In-memory owner of the game entity collections."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import List, Optional, TypeVar

from pydantic import BaseModel

from dodger.models import (
    Difficulty,
    GameSession,
    GameSessionPatch,
    Obstacle,
    ObstaclePatch,
    ObstacleType,
    Player,
    PlayerPatch,
    PowerUp,
    PowerUpPatch,
    Rarity,
    utcnow,
)


logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


class GameDataStore:
    """Single-writer store for players, sessions, obstacles and power-ups.

    Each entity kind has its own id counter starting at 1. Ids are never
    reused, and :meth:`clear_all` leaves the counters where they were.
    Readers receive list copies, so iterating a snapshot is unaffected by
    later mutation; the entities inside are shared.
    """

    def __init__(self) -> None:
        self._players: List[Player] = []
        self._sessions: List[GameSession] = []
        self._obstacles: List[Obstacle] = []
        self._power_ups: List[PowerUp] = []
        self._next_player_id = 1
        self._next_session_id = 1
        self._next_obstacle_id = 1
        self._next_power_up_id = 1

    # Players -------------------------------------------------------------

    def create_player(self, name: str) -> Player:
        player = Player(player_id=self._next_player_id, name=name)
        self._next_player_id += 1
        self._players.append(player)
        logger.debug("Created player %s (%s)", player.player_id, player.name)
        return player

    def get_player_by_id(self, player_id: int) -> Optional[Player]:
        return _find(self._players, "player_id", player_id)

    def get_all_players(self) -> List[Player]:
        return list(self._players)

    def update_player(self, player_id: int, patch: PlayerPatch) -> Optional[Player]:
        player = self.get_player_by_id(player_id)
        if player is None:
            return None
        _apply(player, patch.changes())
        logger.debug("Updated player %s", player_id)
        return player

    def delete_player(self, player_id: int) -> bool:
        # Sessions owned by the player are left in place.
        return _remove(self._players, "player_id", player_id)

    def count_players(self) -> int:
        return len(self._players)

    # Game sessions -------------------------------------------------------

    def create_game_session(
        self,
        player_id: int,
        score: int,
        level: int,
        duration: timedelta,
        *,
        player_name: str | None = None,
    ) -> GameSession:
        """Record a session and fold it into the owning player's statistics.

        A missing player does not prevent the session from being stored; the
        caller is expected to have checked the id beforehand.
        """

        player = self.get_player_by_id(player_id)
        if player_name is None:
            player_name = player.name if player is not None else ""

        session = GameSession(
            session_id=self._next_session_id,
            player_id=player_id,
            player_name=player_name,
            score=score,
            level=level,
            duration=duration,
            difficulty=Difficulty.NORMAL,
        )
        self._next_session_id += 1
        self._sessions.append(session)

        if player is None:
            logger.debug("Session %s references unknown player %s", session.session_id, player_id)
            return session

        previous_best = player.highest_score
        player.total_games_played += 1
        player.total_score += score
        player.highest_score = max(previous_best, score)
        player.last_played = utcnow()
        session.new_high_score = score > previous_best
        logger.debug(
            "Recorded session %s for player %s (score=%s, rank=%s)",
            session.session_id,
            player_id,
            score,
            player.rank,
        )
        return session

    def get_game_session_by_id(self, session_id: int) -> Optional[GameSession]:
        return _find(self._sessions, "session_id", session_id)

    def get_all_game_sessions(self) -> List[GameSession]:
        return list(self._sessions)

    def get_sessions_for_player(self, player_id: int) -> List[GameSession]:
        return [session for session in self._sessions if session.player_id == player_id]

    def update_game_session(self, session_id: int, patch: GameSessionPatch) -> Optional[GameSession]:
        session = self.get_game_session_by_id(session_id)
        if session is None:
            return None
        _apply(session, patch.changes())
        logger.debug("Updated session %s", session_id)
        return session

    def delete_game_session(self, session_id: int) -> bool:
        return _remove(self._sessions, "session_id", session_id)

    def count_game_sessions(self) -> int:
        return len(self._sessions)

    # Obstacles -----------------------------------------------------------

    def create_obstacle(
        self,
        name: str,
        obstacle_type: ObstacleType,
        speed: float,
        damage_points: int,
        size: int,
    ) -> Obstacle:
        obstacle = Obstacle(
            obstacle_id=self._next_obstacle_id,
            name=name,
            obstacle_type=obstacle_type,
            speed=speed,
            damage_points=damage_points,
            size=size,
        )
        self._next_obstacle_id += 1
        self._obstacles.append(obstacle)
        logger.debug("Created obstacle %s (%s)", obstacle.obstacle_id, obstacle.name)
        return obstacle

    def get_obstacle_by_id(self, obstacle_id: int) -> Optional[Obstacle]:
        return _find(self._obstacles, "obstacle_id", obstacle_id)

    def get_all_obstacles(self) -> List[Obstacle]:
        return list(self._obstacles)

    def update_obstacle(self, obstacle_id: int, patch: ObstaclePatch) -> Optional[Obstacle]:
        obstacle = self.get_obstacle_by_id(obstacle_id)
        if obstacle is None:
            return None
        _apply(obstacle, patch.changes())
        logger.debug("Updated obstacle %s", obstacle_id)
        return obstacle

    def delete_obstacle(self, obstacle_id: int) -> bool:
        return _remove(self._obstacles, "obstacle_id", obstacle_id)

    def count_obstacles(self) -> int:
        return len(self._obstacles)

    # Power-ups -----------------------------------------------------------

    def create_power_up(
        self,
        name: str,
        power_up_type: str,
        effect: str,
        duration_seconds: int,
        points_value: int,
    ) -> PowerUp:
        power_up = PowerUp(
            power_up_id=self._next_power_up_id,
            name=name,
            power_up_type=power_up_type,
            effect=effect,
            duration_seconds=duration_seconds,
            points_value=points_value,
            rarity=Rarity.COMMON,
        )
        self._next_power_up_id += 1
        self._power_ups.append(power_up)
        logger.debug("Created power-up %s (%s)", power_up.power_up_id, power_up.name)
        return power_up

    def get_power_up_by_id(self, power_up_id: int) -> Optional[PowerUp]:
        return _find(self._power_ups, "power_up_id", power_up_id)

    def get_all_power_ups(self) -> List[PowerUp]:
        return list(self._power_ups)

    def update_power_up(self, power_up_id: int, patch: PowerUpPatch) -> Optional[PowerUp]:
        power_up = self.get_power_up_by_id(power_up_id)
        if power_up is None:
            return None
        _apply(power_up, patch.changes())
        logger.debug("Updated power-up %s", power_up_id)
        return power_up

    def delete_power_up(self, power_up_id: int) -> bool:
        return _remove(self._power_ups, "power_up_id", power_up_id)

    def count_power_ups(self) -> int:
        return len(self._power_ups)

    # Whole store ---------------------------------------------------------

    def clear_all(self) -> None:
        """Empty every collection; id counters keep counting."""

        self._players.clear()
        self._sessions.clear()
        self._obstacles.clear()
        self._power_ups.clear()
        logger.debug("Cleared all collections")


def _find(items: List[_M], key: str, value: int) -> Optional[_M]:
    for item in items:
        if getattr(item, key) == value:
            return item
    return None


def _remove(items: List[_M], key: str, value: int) -> bool:
    for index, item in enumerate(items):
        if getattr(item, key) == value:
            del items[index]
            logger.debug("Deleted %s=%s", key, value)
            return True
    return False


def _apply(entity: BaseModel, changes: dict) -> None:
    for field, value in changes.items():
        setattr(entity, field, value)
