"""JSON file persistence for the game data store."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Type, TypeVar

import anyio
from pydantic import AliasChoices, BaseModel

from dodger.models import (
    GameSession,
    GameSessionPatch,
    Obstacle,
    ObstaclePatch,
    Player,
    PlayerPatch,
    PowerUp,
    PowerUpPatch,
)
from dodger.store import GameDataStore


logger = logging.getLogger(__name__)

PLAYERS_FILE = "players.json"
SESSIONS_FILE = "sessions.json"
OBSTACLES_FILE = "obstacles.json"
POWER_UPS_FILE = "powerups.json"
DEFAULT_EXPORT_FILE = "game_data_export.json"

_M = TypeVar("_M", bound=BaseModel)


def _field_token(name: str) -> str:
    return name.replace("_", "").lower()


def _normalize_keys(raw: Mapping[str, Any], model: Type[BaseModel]) -> Dict[str, Any]:
    """Map keys onto ``model`` fields ignoring case and underscores; drop unknown keys.

    Alias choices declared on a field (``PlayerName`` for ``Player.name``) resolve
    to that field as well.
    """

    lookup: Dict[str, str] = {}
    for name, info in model.model_fields.items():
        lookup[_field_token(name)] = name
        if isinstance(info.validation_alias, AliasChoices):
            for choice in info.validation_alias.choices:
                if isinstance(choice, str):
                    lookup[_field_token(choice)] = name
    normalized: Dict[str, Any] = {}
    for key, value in raw.items():
        canonical = lookup.get(_field_token(str(key)))
        if canonical is not None:
            normalized[canonical] = value
    return normalized


def parse_entities(text: str, model: Type[_M]) -> List[_M]:
    """Decode a JSON array of ``model`` records.

    Raises ``ValueError`` (including ``json.JSONDecodeError`` and pydantic's
    ``ValidationError``) when the payload is malformed.
    """

    payload = json.loads(text)
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array of {model.__name__} records")
    entities: List[_M] = []
    for item in payload:
        if not isinstance(item, Mapping):
            raise ValueError(f"Expected an object for each {model.__name__} record")
        entities.append(model.model_validate(_normalize_keys(item, model)))
    return entities


def dump_entities(entities: Sequence[BaseModel]) -> str:
    return json.dumps([entity.model_dump(mode="json") for entity in entities], indent=2)


@dataclass
class _Snapshot:
    players: List[Player] = field(default_factory=list)
    sessions: List[GameSession] = field(default_factory=list)
    obstacles: List[Obstacle] = field(default_factory=list)
    power_ups: List[PowerUp] = field(default_factory=list)
    files_found: int = 0


class DataPersistence:
    """Save and load store snapshots as one JSON array per entity kind.

    Failures are logged and reported as ``False``; writes are not atomic, so
    an interrupted save can leave a truncated file behind.
    """

    def __init__(self, store: GameDataStore, data_dir: Path | str) -> None:
        self._store = store
        self.data_dir = Path(data_dir)

    @property
    def players_file(self) -> Path:
        return self.data_dir / PLAYERS_FILE

    @property
    def sessions_file(self) -> Path:
        return self.data_dir / SESSIONS_FILE

    @property
    def obstacles_file(self) -> Path:
        return self.data_dir / OBSTACLES_FILE

    @property
    def power_ups_file(self) -> Path:
        return self.data_dir / POWER_UPS_FILE

    def has_saved_data(self) -> bool:
        return any(
            path.exists()
            for path in (self.players_file, self.sessions_file, self.obstacles_file, self.power_ups_file)
        )

    async def save_all(self) -> bool:
        players = self._store.get_all_players()
        sessions = self._store.get_all_game_sessions()
        obstacles = self._store.get_all_obstacles()
        power_ups = self._store.get_all_power_ups()
        try:
            await anyio.Path(self.data_dir).mkdir(parents=True, exist_ok=True)
            await self._write(self.players_file, dump_entities(players))
            await self._write(self.sessions_file, dump_entities(sessions))
            await self._write(self.obstacles_file, dump_entities(obstacles))
            await self._write(self.power_ups_file, dump_entities(power_ups))
        except OSError as exc:
            logger.error("Error saving data to %s: %s", self.data_dir, exc)
            return False
        logger.info(
            "Saved %d players, %d sessions, %d obstacles, %d power-ups to %s",
            len(players),
            len(sessions),
            len(obstacles),
            len(power_ups),
            self.data_dir,
        )
        return True

    async def load_all(self, *, clear_existing: bool = False) -> bool:
        """Load every saved file into the store.

        All files are decoded before the store is touched, so a malformed file
        leaves the store unchanged. Returns ``False`` when nothing was saved
        or decoding failed.
        """

        try:
            snapshot = await self._read_snapshot()
        except (OSError, ValueError) as exc:
            logger.error("Error loading data from %s: %s", self.data_dir, exc)
            return False

        if snapshot.files_found == 0:
            logger.info("No saved data found in %s", self.data_dir)
            return False

        if clear_existing:
            self._store.clear_all()
        skipped = self._apply_snapshot(snapshot)
        if skipped:
            logger.info("Skipped %d sessions referencing unknown players", skipped)
        logger.info(
            "Loaded data: %d players, %d sessions, %d obstacles, %d power-ups",
            self._store.count_players(),
            self._store.count_game_sessions(),
            self._store.count_obstacles(),
            self._store.count_power_ups(),
        )
        return True

    async def export_to_single_file(self, file_name: str = DEFAULT_EXPORT_FILE) -> bool:
        export_path = self.data_dir / file_name
        payload = {
            "export_date": datetime.now(timezone.utc).isoformat(),
            "players": [p.model_dump(mode="json") for p in self._store.get_all_players()],
            "game_sessions": [s.model_dump(mode="json") for s in self._store.get_all_game_sessions()],
            "obstacles": [o.model_dump(mode="json") for o in self._store.get_all_obstacles()],
            "power_ups": [p.model_dump(mode="json") for p in self._store.get_all_power_ups()],
        }
        try:
            await anyio.Path(self.data_dir).mkdir(parents=True, exist_ok=True)
            await self._write(export_path, json.dumps(payload, indent=2))
        except OSError as exc:
            logger.error("Error exporting data to %s: %s", export_path, exc)
            return False
        logger.info("Data exported to %s", export_path)
        return True

    async def _write(self, path: Path, text: str) -> None:
        await anyio.Path(path).write_text(text, encoding="utf-8")

    async def _read_if_present(self, path: Path, model: Type[_M], snapshot: _Snapshot) -> List[_M]:
        target = anyio.Path(path)
        if not await target.exists():
            return []
        snapshot.files_found += 1
        return parse_entities(await target.read_text(encoding="utf-8"), model)

    async def _read_snapshot(self) -> _Snapshot:
        snapshot = _Snapshot()
        snapshot.players = await self._read_if_present(self.players_file, Player, snapshot)
        snapshot.obstacles = await self._read_if_present(self.obstacles_file, Obstacle, snapshot)
        snapshot.power_ups = await self._read_if_present(self.power_ups_file, PowerUp, snapshot)
        snapshot.sessions = await self._read_if_present(self.sessions_file, GameSession, snapshot)
        return snapshot

    def _apply_snapshot(self, snapshot: _Snapshot) -> int:
        """Rebuild entities through the store's public contract; returns skipped sessions."""

        store = self._store
        remapped: Dict[int, int] = {}
        restored: List[Tuple[int, Player]] = []
        for saved in snapshot.players:
            created_id = store.create_player(saved.name).player_id
            if saved.player_id in remapped:
                logger.warning(
                    "Duplicate saved player id %s; its sessions stay with the first record", saved.player_id
                )
            else:
                remapped[saved.player_id] = created_id
            restored.append((created_id, saved))

        for saved in snapshot.obstacles:
            created = store.create_obstacle(
                saved.name, saved.obstacle_type, saved.speed, saved.damage_points, saved.size
            )
            store.update_obstacle(
                created.obstacle_id,
                ObstaclePatch(color=saved.color, points_on_dodge=saved.points_on_dodge, is_active=saved.is_active),
            )

        for saved in snapshot.power_ups:
            created = store.create_power_up(
                saved.name, saved.power_up_type, saved.effect, saved.duration_seconds, saved.points_value
            )
            store.update_power_up(
                created.power_up_id,
                PowerUpPatch(rarity=saved.rarity, spawn_rate=saved.spawn_rate, is_collectible=saved.is_collectible),
            )

        skipped = 0
        for saved in snapshot.sessions:
            player_id = remapped.get(saved.player_id)
            if player_id is None:
                skipped += 1
                continue
            created = store.create_game_session(
                player_id,
                saved.score,
                saved.level,
                saved.duration,
                player_name=saved.player_name,
            )
            store.update_game_session(
                created.session_id,
                GameSessionPatch(
                    obstacles_dodged=saved.obstacles_dodged,
                    power_ups_collected=saved.power_ups_collected,
                    difficulty=saved.difficulty,
                    session_date=saved.session_date,
                    new_high_score=saved.new_high_score,
                ),
            )

        # Replaying sessions bumps player totals; restore the saved figures last.
        for created_id, saved in restored:
            store.update_player(
                created_id,
                PlayerPatch(
                    total_games_played=saved.total_games_played,
                    total_score=saved.total_score,
                    highest_score=saved.highest_score,
                    date_registered=saved.date_registered,
                    last_played=saved.last_played,
                ),
            )
        return skipped


__all__ = [
    "DEFAULT_EXPORT_FILE",
    "OBSTACLES_FILE",
    "PLAYERS_FILE",
    "POWER_UPS_FILE",
    "SESSIONS_FILE",
    "DataPersistence",
    "dump_entities",
    "parse_entities",
]
