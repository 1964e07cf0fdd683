"""Store construction from settings."""

from __future__ import annotations

import logging

from .settings import StoreSettings
from .stores import GameStore, InMemoryStore, RedisStore

logger = logging.getLogger(__name__)


async def create_store(settings: StoreSettings) -> GameStore:
    """Builds the configured store backend.

    For redis the server must answer a ping, otherwise the connection error
    is raised and no store is returned.
    """

    if settings.backend == "memory":
        logger.warning("Using in-memory store, data is lost on exit")
        return InMemoryStore()
    logger.debug("Connecting to redis store at %s (pool=%d)", settings.redis_url, settings.redis_pool_size)
    return await RedisStore.create(settings.redis_url, pool_size=settings.redis_pool_size)
