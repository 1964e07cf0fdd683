"""Scorekeeper: persistence for players, scoring rules and scored events."""

from .exceptions import NotFoundError, StoreError
from .keys import player_events_key
from .loader import load_rules_from_yaml
from .models import Event, Player, Rule, Score
from .runtime import create_store
from .scoring import compute_total, record_event
from .settings import StoreSettings, get_settings
from .stores import GameStore, InMemoryStore, RedisStore
from .version import __version__

__all__ = [
    "Event",
    "Player",
    "Rule",
    "Score",
    "GameStore",
    "InMemoryStore",
    "RedisStore",
    "create_store",
    "compute_total",
    "record_event",
    "load_rules_from_yaml",
    "player_events_key",
    "StoreSettings",
    "get_settings",
    "NotFoundError",
    "StoreError",
    "__version__",
]
