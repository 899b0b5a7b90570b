"""
Store interface: partition-scoped persistence for named groups of options.
No user-facing text here; the engine turns store failures into CommandErrors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, List, Sequence

from randomizer.core.context import OperationContext


class Store(ABC):
    """
    Groups for one partition (e.g. one chat channel).

    Missing groups are not errors at this layer: get() returns an empty list
    and delete() returns False. Each call must be atomic on its own.
    """

    @abstractmethod
    def list(self, ctx: OperationContext) -> List[str]:
        """Names of all groups in the partition; empty list if there are none."""
        ...

    @abstractmethod
    def get(self, ctx: OperationContext, name: str) -> List[str]:
        """Options of the named group; empty list if it does not exist."""
        ...

    @abstractmethod
    def put(self, ctx: OperationContext, name: str, options: Sequence[str]) -> None:
        """Save options as the named group, replacing any previous options."""
        ...

    @abstractmethod
    def delete(self, ctx: OperationContext, name: str) -> bool:
        """Remove the named group. Returns whether it existed beforehand."""
        ...


# Builds the Store for one partition. Chosen once per process by the selector.
StoreFactory = Callable[[str], Store]


def require_partition(partition: str) -> str:
    if not partition:
        raise ValueError("a non-empty partition is required")
    return partition
