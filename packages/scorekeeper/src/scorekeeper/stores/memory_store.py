"""In-memory game store for tests and dev runs without Redis."""

from __future__ import annotations

import logging
from typing import Dict, List, TypeVar
from uuid import uuid4

from pydantic import BaseModel

from ..exceptions import NotFoundError
from ..keys import EVENTS, PLAYERS, RULES, canonical, event_key, player_events_key, player_key, rule_key
from ..models import Event, Player, Rule
from .base import newest_first

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class InMemoryStore:
    """Same key layout and semantics as ``RedisStore``, kept in dicts.

    Entities are stored as JSON so callers never share mutable state with
    the store.
    """

    def __init__(self) -> None:
        self.collections: Dict[str, Dict[str, str]] = {EVENTS: {}, PLAYERS: {}, RULES: {}}
        self.lists: Dict[str, List[str]] = {}
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    # Events
    async def save_event(self, event: Event) -> Event:
        event.id = str(uuid4())
        self._save(EVENTS, event_key(event.id), event)
        self.lists.setdefault(player_events_key(event.player), []).insert(0, event.id)
        return event

    async def get_event(self, event_id: str) -> Event:
        return self._get(EVENTS, event_key(event_id), Event)

    async def get_player_events(self, name: str, count: int) -> list[Event]:
        if count <= 0:
            return []
        ids = self.lists.get(player_events_key(name), [])[:count]
        return [await self.get_event(event_id) for event_id in ids]

    async def reindex_player_events(self, name: str) -> int:
        wanted = canonical(name)
        events = [e for e in self._list(EVENTS, Event) if canonical(e.player) == wanted]
        ordered = newest_first(events)
        self.lists[player_events_key(name)] = [e.id for e in ordered]
        logger.info("Reindexed %d events for player %s", len(ordered), wanted)
        return len(ordered)

    # Players
    async def save_player(self, player: Player) -> None:
        self._save(PLAYERS, player_key(player.name), player)

    async def get_player(self, name: str) -> Player:
        return self._get(PLAYERS, player_key(name), Player)

    async def list_players(self) -> list[Player]:
        return self._list(PLAYERS, Player)

    # Rules
    async def save_rule(self, rule: Rule) -> None:
        self._save(RULES, rule_key(rule.code), rule)

    async def get_rule(self, code: str) -> Rule:
        return self._get(RULES, rule_key(code), Rule)

    async def list_rules(self) -> list[Rule]:
        return self._list(RULES, Rule)

    # Lifecycle
    async def open(self) -> None:
        self._open = True

    async def close(self) -> None:
        self._open = False

    async def flush_db(self) -> None:
        for collection in self.collections.values():
            collection.clear()
        self.lists.clear()

    def _save(self, collection: str, key: str, entity: BaseModel) -> None:
        self.collections[collection][key] = entity.model_dump_json(by_alias=True)

    def _get(self, collection: str, key: str, model: type[ModelT]) -> ModelT:
        try:
            raw = self.collections[collection][key]
        except KeyError as exc:
            raise NotFoundError(collection, key) from exc
        return model.model_validate_json(raw)

    def _list(self, collection: str, model: type[ModelT]) -> list[ModelT]:
        values = self.collections[collection]
        return [model.model_validate_json(values[key]) for key in sorted(values)]


__all__ = ["InMemoryStore"]
