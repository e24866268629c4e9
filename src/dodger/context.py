"""Application context handed to the presentation layer."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from dodger.analytics import AnalyticsService
from dodger.config import Settings, load_settings
from dodger.generator import DataGenerator
from dodger.persistence import DataPersistence
from dodger.store import GameDataStore


@dataclass
class AppContext:
    """Services built once per process and passed explicitly to handlers."""

    settings: Settings
    store: GameDataStore
    analytics: AnalyticsService
    persistence: DataPersistence
    generator: DataGenerator

    @classmethod
    def build(cls, settings: Optional[Settings] = None, *, rng: Optional[random.Random] = None) -> "AppContext":
        settings = settings or load_settings()
        store = GameDataStore()
        return cls(
            settings=settings,
            store=store,
            analytics=AnalyticsService(store, top_n=settings.top_n),
            persistence=DataPersistence(store, settings.data_dir),
            generator=DataGenerator(store, rng=rng),
        )
