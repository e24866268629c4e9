"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path


logger = logging.getLogger(__name__)

_DATA_DIR_ENV = "DODGER_DATA_DIR"
_EXPORT_FILE_ENV = "DODGER_EXPORT_FILE"
_LOG_LEVEL_ENV = "DODGER_LOG_LEVEL"
_TOP_N_ENV = "DODGER_TOP_N"
_RECENT_SESSIONS_ENV = "DODGER_RECENT_SESSIONS"

_DATA_DIR_DEFAULT = "GameData"
_EXPORT_FILE_DEFAULT = "game_data_export.json"
_LOG_LEVEL_DEFAULT = "INFO"
_TOP_N_DEFAULT = 5
_RECENT_SESSIONS_DEFAULT = 10

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    export_filename: str
    log_level: str
    top_n: int
    recent_sessions: int

    def with_overrides(self, *, data_dir: Path | None = None, log_level: str | None = None) -> "Settings":
        updated = self
        if data_dir is not None:
            updated = replace(updated, data_dir=data_dir)
        if log_level is not None:
            updated = replace(updated, log_level=_normalize_level(log_level, updated.log_level))
        return updated


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = _env_str(name, "")
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r is not a whole number; using %d", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("%s=%d is below the minimum; using %d", name, value, min_value)
        return min_value
    return value


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _normalize_level(raw: str, default: str) -> str:
    level = raw.strip().upper()
    if level not in _LOG_LEVELS:
        logger.warning("Invalid log level %s; using %s", raw, default)
        return default
    return level


def load_settings() -> Settings:
    """Read settings from the environment, falling back to defaults."""

    return Settings(
        data_dir=Path(_env_str(_DATA_DIR_ENV, _DATA_DIR_DEFAULT)),
        export_filename=_env_str(_EXPORT_FILE_ENV, _EXPORT_FILE_DEFAULT),
        log_level=_normalize_level(_env_str(_LOG_LEVEL_ENV, _LOG_LEVEL_DEFAULT), _LOG_LEVEL_DEFAULT),
        top_n=_env_int(_TOP_N_ENV, _TOP_N_DEFAULT, min_value=1),
        recent_sessions=_env_int(_RECENT_SESSIONS_ENV, _RECENT_SESSIONS_DEFAULT, min_value=1),
    )
