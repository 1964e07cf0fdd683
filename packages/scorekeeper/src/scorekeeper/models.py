"""Gamification entities: players, scoring rules and scored events."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Score(BaseModel):
    """A rule matched one or more times inside an event."""

    rule: str = Field(..., description="Code of the matched rule.")
    times: int = Field(1, description="How many times the rule was triggered.")


class Event(BaseModel):
    """Something that happened to a player and produced scores.

    Events are append-only: the store assigns ``id`` on save and never
    updates or deletes the record afterwards.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field("", description="Identifier assigned by the store on save.")
    player: str = Field(..., description="Name of the player the event is for.")
    description: str = Field("", alias="desc", description="Short description of what happened.")
    url: str | None = Field(
        default=None,
        description="Optional link to a resource with more details.",
    )
    scores: list[Score] = Field(default_factory=list)
    total: int = Field(0, description="Precomputed sum of points across all scores.")
    date: datetime | None = Field(default=None, description="When the event happened.")


class Player(BaseModel):
    """A participant; identified case-insensitively by ``name``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    display_name: str | None = Field(default=None, alias="displayName")
    image: str | None = Field(default=None, description="Avatar URL.")
    score: int = Field(0, description="Running point total.")


class Rule(BaseModel):
    """A scoring rule; identified case-insensitively by ``code``."""

    model_config = ConfigDict(populate_by_name=True)

    code: str
    description: str = Field("", alias="desc")
    points: int = Field(..., description="Points awarded per trigger.")


__all__ = ["Score", "Event", "Player", "Rule"]
