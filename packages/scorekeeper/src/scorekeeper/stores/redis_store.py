"""Redis-backed game store.

Key layout:

* hashes ``events``, ``players`` and ``rules`` map a canonical id to the
  entity JSON;
* list ``players:<name>:events`` holds event ids, newest first.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, TypeVar
from uuid import uuid4

import redis.asyncio as redis
from redis.asyncio.client import Pipeline
from pydantic import BaseModel

try:  # pragma: no cover - optional in production
    import fakeredis
    import fakeredis.aioredis
except ImportError:  # pragma: no cover
    fakeredis = None  # type: ignore

from ..exceptions import NotFoundError
from ..keys import EVENTS, PLAYERS, RULES, canonical, event_key, player_events_key, player_key, rule_key
from ..models import Event, Player, Rule
from .base import newest_first

logger = logging.getLogger(__name__)

_FAKE_SERVER: Optional[object] = None
if fakeredis:
    _FAKE_SERVER = fakeredis.FakeServer()

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_POOL_SIZE = 10


class RedisStore:
    """Game store on top of a single pooled Redis client.

    The client is created lazily on first use (or by ``open``) and kept until
    ``close``. Use ``RedisStore.create`` to get a store whose server has
    answered a ping.
    """

    def __init__(self, url: str, *, pool_size: int = DEFAULT_POOL_SIZE) -> None:
        self._url = url
        self._pool_size = pool_size
        self._client: redis.Redis | None = None
        self._lock = asyncio.Lock()

    @classmethod
    async def create(cls, url: str, *, pool_size: int = DEFAULT_POOL_SIZE) -> "RedisStore":
        """Build a store after checking the server is reachable.

        The connection used for the check is closed again; the store
        reconnects on first real use.

        Raises:
            redis.exceptions.ConnectionError: If the server does not answer.
        """

        store = cls(url, pool_size=pool_size)
        await store.open()
        await store.close()
        return store

    @property
    def is_open(self) -> bool:
        return self._client is not None

    # Events
    async def save_event(self, event: Event) -> Event:
        event.id = str(uuid4())
        await self._save(EVENTS, event_key(event.id), event)
        try:
            await self._push(player_events_key(event.player), event.id)
        except Exception:
            logger.warning(
                "Event %s stored but not indexed for player %s", event.id, event.player
            )
            raise
        return event

    async def get_event(self, event_id: str) -> Event:
        return await self._get(EVENTS, event_key(event_id), Event)

    async def get_player_events(self, name: str, count: int) -> list[Event]:
        if count <= 0:
            return []
        client = await self._conn()
        ids = await client.lrange(player_events_key(name), 0, count - 1)
        return [await self.get_event(event_id) for event_id in ids]

    async def reindex_player_events(self, name: str) -> int:
        """Rebuild a player's event index from the ``events`` collection.

        The index key is watched while the events are read; an id pushed by a
        concurrent ``save_event`` aborts the rewrite, which then starts over.
        """

        wanted = canonical(name)
        index_key = player_events_key(name)

        async def _rebuild(pipe: Pipeline) -> int:
            ordered = newest_first(await self._player_events_from(pipe, wanted))
            pipe.multi()
            pipe.delete(index_key)
            if ordered:
                pipe.rpush(index_key, *[e.id for e in ordered])
            return len(ordered)

        client = await self._conn()
        indexed = await client.transaction(_rebuild, index_key, value_from_callable=True)
        logger.info("Reindexed %d events for player %s", indexed, wanted)
        return indexed

    # Players
    async def save_player(self, player: Player) -> None:
        await self._save(PLAYERS, player_key(player.name), player)

    async def get_player(self, name: str) -> Player:
        return await self._get(PLAYERS, player_key(name), Player)

    async def list_players(self) -> list[Player]:
        return await self._list(PLAYERS, Player)

    # Rules
    async def save_rule(self, rule: Rule) -> None:
        await self._save(RULES, rule_key(rule.code), rule)

    async def get_rule(self, code: str) -> Rule:
        return await self._get(RULES, rule_key(code), Rule)

    async def list_rules(self) -> list[Rule]:
        return await self._list(RULES, Rule)

    # Lifecycle
    async def open(self) -> None:
        async with self._lock:
            if self._client is not None:
                return
            client = self._build_client()
            try:
                await client.ping()
            except Exception:
                await _close_client(client)
                raise
            self._client = client
            logger.debug("Opened redis connection to %s", self._url)

    async def close(self) -> None:
        async with self._lock:
            if self._client is None:
                return
            client, self._client = self._client, None
            await _close_client(client)
            logger.debug("Closed redis connection to %s", self._url)

    async def flush_db(self) -> None:
        client = await self._conn()
        await client.flushdb()

    async def _conn(self) -> redis.Redis:
        if self._client is None:
            await self.open()
        assert self._client is not None
        return self._client

    def _build_client(self) -> redis.Redis:
        if self._url.startswith("fakeredis://"):
            if not fakeredis:
                raise RuntimeError("fakeredis is not installed")
            return fakeredis.aioredis.FakeRedis(server=_FAKE_SERVER, decode_responses=True)
        return redis.from_url(self._url, decode_responses=True, max_connections=self._pool_size)

    async def _save(self, collection: str, key: str, entity: BaseModel) -> None:
        client = await self._conn()
        await client.hset(collection, key, entity.model_dump_json(by_alias=True))

    async def _get(self, collection: str, key: str, model: type[ModelT]) -> ModelT:
        client = await self._conn()
        raw = await client.hget(collection, key)
        if raw is None:
            raise NotFoundError(collection, key)
        return model.model_validate_json(raw)

    async def _list(self, collection: str, model: type[ModelT]) -> list[ModelT]:
        client = await self._conn()
        values = await client.hgetall(collection)
        return [model.model_validate_json(values[key]) for key in sorted(values)]

    async def _push(self, list_key: str, value: str) -> None:
        client = await self._conn()
        await client.lpush(list_key, value)
        logger.debug("Indexed %s under %s", value, list_key)

    async def _player_events_from(self, pipe: Pipeline, wanted: str) -> list[Event]:
        values = await pipe.hgetall(EVENTS)
        events = [Event.model_validate_json(values[key]) for key in sorted(values)]
        return [e for e in events if canonical(e.player) == wanted]


async def _close_client(client: redis.Redis) -> None:
    try:
        await client.aclose()
    except Exception:
        logger.debug("Failed to close redis client", exc_info=True)


__all__ = ["RedisStore", "DEFAULT_POOL_SIZE"]
