"""Storage key derivation.

Every id, code and name is lowercased before it is used as a key, so
identity is case-insensitive across all collections.
"""

from __future__ import annotations

EVENTS = "events"
PLAYERS = "players"
RULES = "rules"


def canonical(value: str) -> str:
    return value.lower()


def player_key(name: str) -> str:
    return canonical(name)


def rule_key(code: str) -> str:
    return canonical(code)


def event_key(event_id: str) -> str:
    return canonical(event_id)


def player_events_key(name: str) -> str:
    """Name of the list holding a player's event ids, newest first."""

    return f"{PLAYERS}:{player_key(name)}:events"


__all__ = [
    "EVENTS",
    "PLAYERS",
    "RULES",
    "canonical",
    "player_key",
    "rule_key",
    "event_key",
    "player_events_key",
]
