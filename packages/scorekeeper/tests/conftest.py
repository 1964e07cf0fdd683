from __future__ import annotations

from typing import Iterator

import fakeredis
import pytest

from scorekeeper.settings import get_settings
from scorekeeper.stores import GameStore, InMemoryStore, RedisStore
from scorekeeper.stores import redis_store as redis_store_module


@pytest.fixture(autouse=True)
def fake_server(monkeypatch: pytest.MonkeyPatch) -> fakeredis.FakeServer:
    """Gives every test its own fakeredis server behind ``fakeredis://``."""

    server = fakeredis.FakeServer()
    monkeypatch.setattr(redis_store_module, "_FAKE_SERVER", server)
    return server


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("SCOREKEEPER_BACKEND", "SCOREKEEPER_REDIS_URL", "SCOREKEEPER_REDIS_POOL_SIZE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(params=["redis", "memory"])
def store(request: pytest.FixtureRequest) -> GameStore:
    if request.param == "redis":
        return RedisStore("fakeredis://")
    return InMemoryStore()
