"""
Command executor: run one parsed request against a partition's Store.

App.main is the single entry point. It returns a Result or raises a
CommandError; any other exception is wrapped so that contract always holds.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Sequence

from randomizer.core.context import OperationContext
from randomizer.core.errors import CommandError
from randomizer.core.types import Operation, Request, Result, ResultType
from randomizer.store.backend import Store

from .expand import expand_options
from .formatting import inline_list, quoted, sorted_bullets
from .help import help_message
from .request import FLAG_PREFIX, HELP_KEYWORD, parse_request

logger = logging.getLogger(__name__)

# Shuffles a list in place. Tests pass list.sort for predictable output.
Shuffle = Callable[[List[str]], None]

MIN_OPTIONS = 2


def is_forbidden_group_name(name: str) -> bool:
    """Names that would collide with flag syntax or the bare help keyword."""
    return name == HELP_KEYWORD or name.startswith(FLAG_PREFIX)


class App:
    """
    Randomizer bound to one command name and one partition's store.

    Usage:
        app = App("randomizer", store_factory(channel_id))
        result = app.main(OperationContext.background(), ["/save", "snacks", "chips", "pretzels"])
        print(result.message)
    """

    def __init__(
        self,
        name: str,
        store: Store,
        *,
        shuffle: Optional[Shuffle] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.name = name
        self.store = store
        if shuffle is None:
            shuffle = random.Random(seed).shuffle
        self._shuffle = shuffle

    def main(self, ctx: OperationContext, args: Sequence[str]) -> Result:
        """Parse args and run the requested operation."""
        try:
            request = parse_request(args, name=self.name)
            logger.debug("Parsed request: %s", request)
            return self._dispatch(ctx, request)
        except CommandError:
            raise
        except Exception as e:
            raise CommandError.unexpected(e) from e

    def _dispatch(self, ctx: OperationContext, request: Request) -> Result:
        op = request.operation
        if op is Operation.SELECT:
            return self.make_selection(ctx, request)
        if op is Operation.HELP:
            return self.show_help(request)
        if op is Operation.LIST:
            return self.list_groups(ctx)
        if op is Operation.SHOW:
            return self.show_group(ctx, request.operand)
        if op is Operation.SAVE:
            return self.save_group(ctx, request.operand, request.args)
        if op is Operation.DELETE:
            return self.delete_group(ctx, request.operand)
        raise CommandError.unexpected(RuntimeError(f"unhandled operation {op!r}"))

    def make_selection(self, ctx: OperationContext, request: Request) -> Result:
        options = expand_options(ctx, self.store, request.args, name=self.name)
        if len(options) < MIN_OPTIONS:
            raise CommandError.usage(
                "too few options",
                "Whoops, I need at least two options to pick from!",
            )
        count = request.count
        if count is not None:
            if count < 1:
                raise CommandError.usage("count too small", "Whoops, I can't pick less than one option!")
            if count > len(options):
                raise CommandError.usage(
                    "count too large",
                    "Whoops, I can't pick more options than I was given!",
                )

        shuffled = list(options)
        self._shuffle(shuffled)
        choices = shuffled if count is None else shuffled[:count]
        return Result(ResultType.SELECTION, f"I randomized and got: {inline_list(choices)}.")

    def show_help(self, request: Request) -> Result:
        topic = request.args[0] if request.args else None
        return Result(ResultType.SHOWED_HELP, help_message(self.name, topic))

    def list_groups(self, ctx: OperationContext) -> Result:
        try:
            groups = self.store.list(ctx)
        except Exception as e:
            raise CommandError.backend(
                e,
                "Whoops, I had trouble getting this channel's groups. Please try again later!",
            ) from e
        if not groups:
            return Result(
                ResultType.LISTED_GROUPS,
                "Whoops, no groups are available in this channel. (Use the /save flag to create one!)",
            )
        return Result(
            ResultType.LISTED_GROUPS,
            f"The following groups are available in this channel:\n{sorted_bullets(groups)}",
        )

    def show_group(self, ctx: OperationContext, name: str) -> Result:
        try:
            options = self.store.get(ctx, name)
        except Exception as e:
            raise CommandError.backend(
                e,
                "Whoops, I had trouble getting that group. Please try again later!",
            ) from e
        if not options:
            raise CommandError.not_found(
                "group does not exist",
                "Whoops, I can't find that group in this channel. (Use the /save flag to create it!)",
            )
        return Result(
            ResultType.SHOWED_GROUP,
            f"The {quoted(name)} group has the following options:\n{sorted_bullets(options)}",
        )

    def save_group(self, ctx: OperationContext, name: str, args: Sequence[str]) -> Result:
        # Checked before any store access so a reserved name never reaches the store.
        if is_forbidden_group_name(name):
            raise CommandError.usage(
                f"saving with forbidden group name {quoted(name)}",
                f"Whoops, {quoted(name)} has a special meaning and can't be used as a group name. "
                f'(Type "{self.name} help" to learn more!)',
            )
        options = expand_options(ctx, self.store, args, name=self.name)
        if len(options) < MIN_OPTIONS:
            raise CommandError.usage(
                "too few options to save",
                "Whoops, I need at least two options to save a group!",
            )
        try:
            self.store.put(ctx, name, options)
        except Exception as e:
            raise CommandError.backend(
                e,
                "Whoops, I had trouble saving that group. Please try again later!",
            ) from e
        return Result(
            ResultType.SAVED_GROUP,
            f"Done! The {quoted(name)} group was saved in this channel with the following options:\n"
            f"{sorted_bullets(options)}",
        )

    def delete_group(self, ctx: OperationContext, name: str) -> Result:
        try:
            existed = self.store.delete(ctx, name)
        except Exception as e:
            raise CommandError.backend(
                e,
                "Whoops, I had trouble deleting that group. Please try again later!",
            ) from e
        if not existed:
            raise CommandError.not_found(
                "group does not exist",
                "Whoops, I can't find that group in this channel!",
            )
        return Result(ResultType.DELETED_GROUP, f"Done! The {quoted(name)} group was deleted.")
