"""Domain store owning the game entity collections."""

from .service import GameDataStore

__all__ = ["GameDataStore"]
