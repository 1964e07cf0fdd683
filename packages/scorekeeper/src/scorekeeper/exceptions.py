"""Errors raised by the scorekeeper store layer."""

from __future__ import annotations


class StoreError(RuntimeError):
    """Base error of the store layer."""


class NotFoundError(StoreError):
    """The requested key does not exist in its primary collection."""

    def __init__(self, collection: str, key: str) -> None:
        super().__init__(f"{collection}: '{key}' not found")
        self.collection = collection
        self.key = key
