from __future__ import annotations

from datetime import datetime, timezone

import pytest

from scorekeeper.exceptions import NotFoundError
from scorekeeper.models import Rule, Score
from scorekeeper.scoring import compute_total, record_event
from scorekeeper.stores import InMemoryStore


def test_compute_total_sums_points_times_triggers() -> None:
    rules = {
        "coffee": Rule(code="coffee", points=5),
        "Tests": Rule(code="Tests", points=2),
    }
    scores = [Score(rule="COFFEE", times=1), Score(rule="tests", times=3)]

    assert compute_total(scores, rules) == 11


def test_compute_total_unknown_rule() -> None:
    with pytest.raises(NotFoundError):
        compute_total([Score(rule="nope")], {})


@pytest.mark.asyncio
async def test_record_event_resolves_rules_and_saves() -> None:
    store = InMemoryStore()
    await store.save_rule(Rule(code="coffee", description="made coffee", points=5))
    await store.save_rule(Rule(code="build_failure", description="broke the build", points=-3))
    when = datetime(2024, 2, 2, 8, 0, tzinfo=timezone.utc)

    event = await record_event(
        store,
        player="alice",
        description="morning",
        scores=[Score(rule="coffee", times=2), Score(rule="build_failure")],
        date=when,
    )

    assert event.total == 7
    assert event.id
    assert await store.get_player_events("alice", 10) == [event]


@pytest.mark.asyncio
async def test_record_event_unknown_rule_writes_nothing() -> None:
    store = InMemoryStore()

    with pytest.raises(NotFoundError):
        await record_event(store, player="alice", description="?", scores=[Score(rule="missing")])

    assert await store.get_player_events("alice", 10) == []
