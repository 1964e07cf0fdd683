"""Point totals and event recording on top of a store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Mapping

from .exceptions import NotFoundError
from .keys import RULES, canonical, rule_key
from .models import Event, Rule, Score
from .stores.base import GameStore


def compute_total(scores: Iterable[Score], rules: Mapping[str, Rule]) -> int:
    """Sums ``points * times`` over the scores.

    Args:
        scores: Matched rules of an event.
        rules: Rules by code; lookup is case-insensitive.

    Raises:
        NotFoundError: If a score references an unknown rule.
    """

    by_key = {rule_key(code): rule for code, rule in rules.items()}
    total = 0
    for score in scores:
        rule = by_key.get(rule_key(score.rule))
        if rule is None:
            raise NotFoundError(RULES, canonical(score.rule))
        total += rule.points * score.times
    return total


async def record_event(
    store: GameStore,
    *,
    player: str,
    description: str,
    scores: list[Score],
    url: str | None = None,
    date: datetime | None = None,
) -> Event:
    """Resolves the rules, computes the total and saves a new event.

    The player is not required to exist. Unknown rules raise
    ``NotFoundError`` before anything is written.
    """

    rules: dict[str, Rule] = {}
    for score in scores:
        key = rule_key(score.rule)
        if key not in rules:
            rules[key] = await store.get_rule(score.rule)
    event = Event(
        player=player,
        description=description,
        url=url,
        scores=scores,
        total=compute_total(scores, rules),
        date=date or datetime.now(tz=timezone.utc),
    )
    return await store.save_event(event)


__all__ = ["compute_total", "record_event"]
