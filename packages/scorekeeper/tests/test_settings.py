from __future__ import annotations

import pytest
from pydantic import ValidationError

from scorekeeper.runtime import create_store
from scorekeeper.settings import StoreSettings, get_settings
from scorekeeper.stores import InMemoryStore, RedisStore


def test_defaults() -> None:
    settings = get_settings()

    assert settings.backend == "redis"
    assert settings.redis_url == "redis://localhost:6379/0"
    assert settings.redis_pool_size == 10


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCOREKEEPER_BACKEND", "memory")
    monkeypatch.setenv("SCOREKEEPER_REDIS_POOL_SIZE", "4")

    settings = get_settings()

    assert settings.backend == "memory"
    assert settings.redis_pool_size == 4


def test_invalid_pool_size_rejected() -> None:
    with pytest.raises(ValidationError):
        StoreSettings(redis_pool_size=0)


@pytest.mark.asyncio
async def test_create_store_memory_backend() -> None:
    store = await create_store(StoreSettings(backend="memory"))

    assert isinstance(store, InMemoryStore)


@pytest.mark.asyncio
async def test_create_store_redis_backend_checks_server() -> None:
    store = await create_store(StoreSettings(backend="redis", redis_url="fakeredis://"))

    assert isinstance(store, RedisStore)
    assert not store.is_open
