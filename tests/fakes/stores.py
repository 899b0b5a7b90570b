"""
In-memory stores for engine and CLI tests: dict-backed, always-fail, and call counting.

No files or network; every store satisfies randomizer.store.backend.Store.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from randomizer.core.context import OperationContext
from randomizer.store.backend import Store


class FakeStore(Store):
    """
    Dict-backed store for one partition.

    put() keeps a sorted copy, so saved-group messages and later reads are
    deterministic regardless of the order options were given in.
    """

    def __init__(self, groups: Optional[Mapping[str, Iterable[str]]] = None):
        self.groups: Dict[str, List[str]] = {}
        for name, options in (groups or {}).items():
            self.groups[name] = sorted(options)

    def list(self, ctx: OperationContext) -> List[str]:
        ctx.check()
        return list(self.groups)

    def get(self, ctx: OperationContext, name: str) -> List[str]:
        ctx.check()
        return list(self.groups.get(name, []))

    def put(self, ctx: OperationContext, name: str, options: Sequence[str]) -> None:
        ctx.check()
        self.groups[name] = sorted(options)

    def delete(self, ctx: OperationContext, name: str) -> bool:
        ctx.check()
        return self.groups.pop(name, None) is not None


class FailingStore(Store):
    """Store whose every call raises; simulates an unavailable database."""

    def __init__(self, message: str = "store is unavailable"):
        self.message = message
        self.call_count = 0

    def _fail(self):
        self.call_count += 1
        raise RuntimeError(self.message)

    def list(self, ctx: OperationContext) -> List[str]:
        self._fail()

    def get(self, ctx: OperationContext, name: str) -> List[str]:
        self._fail()

    def put(self, ctx: OperationContext, name: str, options: Sequence[str]) -> None:
        self._fail()

    def delete(self, ctx: OperationContext, name: str) -> bool:
        self._fail()


class CountingStore(Store):
    """Wraps another store and counts calls per method name."""

    def __init__(self, inner: Store):
        self.inner = inner
        self.calls: Dict[str, int] = {"list": 0, "get": 0, "put": 0, "delete": 0}

    @property
    def call_count(self) -> int:
        return sum(self.calls.values())

    def list(self, ctx: OperationContext) -> List[str]:
        self.calls["list"] += 1
        return self.inner.list(ctx)

    def get(self, ctx: OperationContext, name: str) -> List[str]:
        self.calls["get"] += 1
        return self.inner.get(ctx, name)

    def put(self, ctx: OperationContext, name: str, options: Sequence[str]) -> None:
        self.calls["put"] += 1
        self.inner.put(ctx, name, options)

    def delete(self, ctx: OperationContext, name: str) -> bool:
        self.calls["delete"] += 1
        return self.inner.delete(ctx, name)
