from __future__ import annotations

from typing import Iterable, Protocol

from ..models import Event, Player, Rule


class GameStore(Protocol):
    """Persistence contract for players, rules and events.

    ``save_event`` is a two-step write: the event record first, then its id
    in the player's index. If the second step fails the record exists but
    is missing from the index until ``reindex_player_events`` runs.
    """

    async def save_event(self, event: Event) -> Event: ...
    async def get_event(self, event_id: str) -> Event: ...
    async def get_player_events(self, name: str, count: int) -> list[Event]: ...
    async def reindex_player_events(self, name: str) -> int: ...

    async def save_player(self, player: Player) -> None: ...
    async def get_player(self, name: str) -> Player: ...
    async def list_players(self) -> list[Player]: ...

    async def save_rule(self, rule: Rule) -> None: ...
    async def get_rule(self, code: str) -> Rule: ...
    async def list_rules(self) -> list[Rule]: ...

    async def open(self) -> None: ...
    async def close(self) -> None: ...
    async def flush_db(self) -> None: ...


def newest_first(events: Iterable[Event]) -> list[Event]:
    """Orders events by ``date`` descending; undated events go last."""

    def _key(event: Event) -> tuple[bool, float]:
        if event.date is None:
            return (False, 0.0)
        return (True, event.date.timestamp())

    return sorted(events, key=_key, reverse=True)
