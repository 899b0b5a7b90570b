"""Fake stores for engine and CLI tests (no database)."""

from .stores import CountingStore, FailingStore, FakeStore

__all__ = [
    "CountingStore",
    "FailingStore",
    "FakeStore",
]
