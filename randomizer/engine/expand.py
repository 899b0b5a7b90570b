"""
Option-list expansion for the select and save paths.

Single left-to-right pass over the request args:
- plain token: appended as an option
- +name: every option of the named group is appended (duplicates kept, so
  repeated options weigh more)
- -item: the first matching option already in the list is removed; an item
  that is not there is an error, never a silent no-op

Each step returns a new tuple; the input is never mutated.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from randomizer.core.context import OperationContext
from randomizer.core.errors import CommandError
from randomizer.store.backend import Store

from .formatting import quoted

logger = logging.getLogger(__name__)

INCLUDE_PREFIX = "+"
EXCLUDE_PREFIX = "-"


def expand_options(
    ctx: OperationContext,
    store: Store,
    args: Sequence[str],
    *,
    name: str = "randomizer",
) -> Tuple[str, ...]:
    """Resolve +group / -item modifiers in args into the final candidate options."""
    options: Tuple[str, ...] = ()
    for arg in args:
        if arg.startswith(INCLUDE_PREFIX):
            options = options + fetch_group(ctx, store, arg[1:], name=name)
        elif arg.startswith(EXCLUDE_PREFIX):
            item = arg[1:]
            remaining = remove_first(options, item)
            if remaining is None:
                raise CommandError.usage(
                    f"option {quoted(item)} not found for removal",
                    f"Whoops, {quoted(item)} wasn't available for me to remove!",
                )
            options = remaining
        else:
            options = options + (arg,)
    return options


def fetch_group(
    ctx: OperationContext,
    store: Store,
    group: str,
    *,
    name: str = "randomizer",
) -> Tuple[str, ...]:
    """Options of a group referenced with +; a missing or empty group is an error."""
    try:
        expansion = store.get(ctx, group)
    except Exception as e:
        raise CommandError.backend(
            e,
            f"Whoops, I had trouble getting the {quoted(group)} group. Please try again later!",
        ) from e
    if not expansion:
        raise CommandError.not_found(
            f"group {quoted(group)} not found",
            f"Whoops, I couldn't find the {quoted(group)} group in this channel. "
            f'(Type "{name} /help groups" to learn more about groups!)',
        )
    logger.debug("Expanded group %s to %d options", group, len(expansion))
    return tuple(expansion)


def remove_first(options: Tuple[str, ...], item: str) -> Optional[Tuple[str, ...]]:
    """options without the first occurrence of item, or None if item is absent."""
    try:
        i = options.index(item)
    except ValueError:
        return None
    return options[:i] + options[i + 1:]
