"""
Shared exception types for randomizer.
CommandError is the only failure a caller of App.main ever sees; it pairs a
developer-oriented cause with a short sentence that is safe to show users.
"""

from __future__ import annotations

import enum
from typing import Iterable, Sequence, Union


class RandomizerError(Exception):
    """Base exception for randomizer; catch this for any package-raised error."""

    pass


class ErrorKind(enum.Enum):
    """Category of a CommandError."""

    USAGE = "usage"
    NOT_FOUND = "not_found"
    BACKEND = "backend"
    UNEXPECTED = "unexpected"


class CommandError(RandomizerError):
    """
    Failure of a single randomizer invocation.

    str(err) is the underlying cause (for logs); help_text is the friendly
    message for the person who typed the command. Build instances through the
    classmethod constructors, one per ErrorKind.
    """

    def __init__(
        self,
        kind: ErrorKind,
        cause: Union[str, BaseException],
        help_text: str = "",
    ) -> None:
        if isinstance(cause, str):
            cause = RandomizerError(cause)
        super().__init__(str(cause))
        self.kind = kind
        self.cause = cause
        self._help_text = help_text
        self.__cause__ = cause

    @property
    def help_text(self) -> str:
        if self._help_text:
            return self._help_text
        return f"Whoops, I had a problem… {self.cause}."

    @classmethod
    def usage(cls, cause: Union[str, BaseException], help_text: str) -> "CommandError":
        return cls(ErrorKind.USAGE, cause, help_text)

    @classmethod
    def not_found(cls, cause: Union[str, BaseException], help_text: str) -> "CommandError":
        return cls(ErrorKind.NOT_FOUND, cause, help_text)

    @classmethod
    def backend(cls, cause: BaseException, help_text: str) -> "CommandError":
        """Wrap a store failure. The help text must not reveal the cause."""
        return cls(ErrorKind.BACKEND, cause, help_text)

    @classmethod
    def unexpected(cls, cause: BaseException) -> "CommandError":
        return cls(ErrorKind.UNEXPECTED, cause)

    def __repr__(self) -> str:
        return f"CommandError(kind={self.kind.value}, cause={self.cause!r})"


class OperationCancelled(RandomizerError):
    """Raised by OperationContext.check() once the context is cancelled or expired."""

    pass


class ConfigurationError(RandomizerError):
    """Startup failure: the process cannot be configured to serve requests."""

    pass


class BackendSelectionError(ConfigurationError):
    """The environment selects no store backend, or more than one."""

    def __init__(
        self,
        message: str,
        *,
        candidates: Sequence[str] = (),
        available: Iterable[str] = (),
    ) -> None:
        super().__init__(message)
        self.candidates = tuple(candidates)
        self.available = tuple(available)


def describe_names(names: Iterable[str]) -> str:
    """Sorted, comma separated names for error messages."""
    return ", ".join(sorted(names)) or "none"


__all__ = [
    "BackendSelectionError",
    "CommandError",
    "ConfigurationError",
    "ErrorKind",
    "OperationCancelled",
    "RandomizerError",
    "describe_names",
]