"""
Value types shared by the parser, the executor and callers.
Frozen dataclasses; a Request is built once per invocation and a Result is returned once.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple


class Operation(enum.Enum):
    """What a request asks the randomizer to do."""

    SELECT = "select"
    HELP = "help"
    LIST = "list"
    SHOW = "show"
    SAVE = "save"
    DELETE = "delete"


class ResultType(enum.Enum):
    """Kind of successful outcome, one per Operation."""

    SELECTION = "selection"
    SHOWED_HELP = "showed_help"
    LISTED_GROUPS = "listed_groups"
    SHOWED_GROUP = "showed_group"
    SAVED_GROUP = "saved_group"
    DELETED_GROUP = "deleted_group"


@dataclass(frozen=True)
class Request:
    """
    Parsed form of one argument list.

    operand is the group name for show/save/delete and empty otherwise.
    args are the remaining raw tokens (options and +/- modifiers, or a help topic).
    count is the number of options to pick; None picks all of them.
    """

    operation: Operation
    operand: str = ""
    args: Tuple[str, ...] = ()
    count: Optional[int] = None


@dataclass(frozen=True)
class Result:
    """Successful outcome of one invocation."""

    type: ResultType
    message: str

    def __str__(self) -> str:
        return self.message
