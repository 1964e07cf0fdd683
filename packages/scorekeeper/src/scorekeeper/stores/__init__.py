"""Store backends."""

from .base import GameStore
from .memory_store import InMemoryStore
from .redis_store import RedisStore

__all__ = ["GameStore", "InMemoryStore", "RedisStore"]
