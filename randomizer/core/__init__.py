"""
Stable facade: value types, errors and the operation context. No engine, store, or cli.
Do not add exports without updating __all__.
"""

from __future__ import annotations

from .context import OperationContext
from .errors import (
    BackendSelectionError,
    CommandError,
    ConfigurationError,
    ErrorKind,
    OperationCancelled,
    RandomizerError,
)
from .types import Operation, Request, Result, ResultType

# Do not add exports without updating __all__.
__all__ = [
    "BackendSelectionError",
    "CommandError",
    "ConfigurationError",
    "ErrorKind",
    "Operation",
    "OperationCancelled",
    "OperationContext",
    "RandomizerError",
    "Request",
    "Result",
    "ResultType",
]
