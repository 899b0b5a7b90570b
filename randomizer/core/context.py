"""
Cancellable operation context passed to every store call.
Core-only: no imports from engine, store, or cli.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Optional

from .errors import OperationCancelled


@dataclass
class OperationContext:
    """
    Cancellation and deadline for one operation.

    Stores call check() before doing I/O; the executor reports the resulting
    OperationCancelled like any other store failure.
    """

    timeout_s: Optional[float] = None
    _event: threading.Event = field(default_factory=threading.Event, init=False, repr=False)
    _deadline: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.timeout_s is not None:
            if self.timeout_s <= 0:
                raise ValueError("OperationContext.timeout_s must be positive")
            self._deadline = time.monotonic() + self.timeout_s

    @classmethod
    def background(cls) -> "OperationContext":
        """A context that is never cancelled unless cancel() is called."""
        return cls()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def check(self) -> None:
        if self._event.is_set():
            raise OperationCancelled("operation was cancelled")
        if self._deadline is not None and time.monotonic() >= self._deadline:
            raise OperationCancelled(f"operation timed out after {self.timeout_s}s")
