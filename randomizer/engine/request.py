"""
Request parser: raw argument list -> Request.

Grammar: [operation-flag [operand]] (modifier-flag value | token)*

Operation flags (/help, /list, /show, /save, /delete, and a lone "help") are
only recognized as the first token. Any other first token starting with the
flag prefix is rejected, so a typo is never randomized as an option. The /n
modifier may appear anywhere. Matching is exact: no abbreviations, no case folding.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from randomizer.core.errors import CommandError
from randomizer.core.types import Operation, Request

from .formatting import quoted

FLAG_PREFIX = "/"
HELP_KEYWORD = "help"

HELP_FLAG = "/help"
LIST_FLAG = "/list"
SHOW_FLAG = "/show"
SAVE_FLAG = "/save"
DELETE_FLAG = "/delete"
COUNT_FLAG = "/n"

COUNT_ALL = "all"

MODIFIER_FLAGS = (COUNT_FLAG,)


def is_flag(token: str) -> bool:
    return token.startswith(FLAG_PREFIX)


def parse_request(args: Sequence[str], *, name: str = "randomizer") -> Request:
    """
    Parse args into a Request.

    name is the command name, used only in help hints of usage errors.
    Raises CommandError (kind USAGE) for unknown flags, missing flag values, bad counts
    and /n outside a selection.
    """
    tokens = list(args)
    if not tokens:
        return Request(Operation.HELP)

    operation = Operation.SELECT
    operand = ""
    first = tokens[0]

    if first == HELP_FLAG or (first == HELP_KEYWORD and len(tokens) == 1):
        # "help" followed by more tokens is just an option to randomize.
        operation = Operation.HELP
        tokens = tokens[1:]
    elif first == LIST_FLAG:
        operation = Operation.LIST
        tokens = tokens[1:]
    elif first in (SHOW_FLAG, SAVE_FLAG, DELETE_FLAG):
        operand = _flag_value(tokens)
        if first == SHOW_FLAG:
            operation = Operation.SHOW
        elif first == SAVE_FLAG:
            operation = Operation.SAVE
        else:
            operation = Operation.DELETE
        tokens = tokens[2:]
    elif is_flag(first) and first not in MODIFIER_FLAGS:
        raise CommandError.usage(
            f"{quoted(first)} is not a valid flag",
            f'Whoops, {quoted(first)} isn\'t a valid flag! (Type "{name} help" to see what I can do.)',
        )

    if operation is Operation.HELP:
        # Help never fails: everything after the flag is a topic.
        return Request(operation, args=tuple(tokens))

    rest: List[str] = []
    count: Optional[int] = None
    while tokens:
        if tokens[0] == COUNT_FLAG:
            if operation is not Operation.SELECT:
                raise CommandError.usage(
                    f"{quoted(COUNT_FLAG)} used with {operation.value}",
                    f"Whoops, {quoted(COUNT_FLAG)} only works when I'm picking options! "
                    f'(Type "{name} help" to see how it works.)',
                )
            count = _parse_count(_flag_value(tokens))
            tokens = tokens[2:]
            continue
        rest.append(tokens[0])
        tokens = tokens[1:]

    return Request(operation=operation, operand=operand, args=tuple(rest), count=count)


def _flag_value(tokens: Sequence[str]) -> str:
    """The token after the flag at tokens[0]."""
    if len(tokens) < 2:
        flag = quoted(tokens[0])
        raise CommandError.usage(
            f"{flag} flag requires an argument",
            f"Whoops, {flag} requires an argument!",
        )
    return tokens[1]


def _parse_count(value: str) -> Optional[int]:
    """Integer count, or None for "all". Range is checked once the options are known."""
    if value == COUNT_ALL:
        return None
    try:
        return int(value)
    except ValueError as e:
        raise CommandError.usage(e, f"Whoops, {quoted(value)} isn't a valid count!") from e
