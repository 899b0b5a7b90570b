"""
Run one randomizer command against the configured store.
Use: randomizer pick [--partition P] [--name N] [--timeout S] [-v] ARGS...
Example: randomizer pick --partition lunch /save snacks chips pretzels
Put -- before ARGS when the first one starts with a dash (e.g. -- -chips +snacks).
Exit codes: 0 success, 1 command failed (help text on stderr), 2 configuration error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from randomizer import config
from randomizer.core.context import OperationContext
from randomizer.core.errors import CommandError, ConfigurationError
from randomizer.engine.app import App
from randomizer.store.selector import factory_from_env

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_COMMAND_FAILED = 1
EXIT_CONFIG_ERROR = 2


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    ap = argparse.ArgumentParser(
        prog="randomizer pick",
        description="Randomize options, or manage the saved groups of one partition.",
    )
    ap.add_argument("--partition", default=None, help="Partition (channel) the groups live in")
    ap.add_argument("--name", default=None, help="Command name shown in help text")
    ap.add_argument("--timeout", type=float, default=None, help="Give up on the store after this many seconds")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    ap.add_argument("args", nargs=argparse.REMAINDER, help="Options, +group / -item, or a /flag command")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    command_args = list(args.args)
    if command_args[:1] == ["--"]:
        command_args = command_args[1:]

    try:
        ctx = OperationContext(timeout_s=args.timeout)
        seed = config.selection_seed()
        name = args.name or config.app_name()
        partition = args.partition or config.default_partition()
        store_factory = factory_from_env(ctx)
        store = store_factory(partition)
    except (ConfigurationError, ValueError) as e:
        print(f"randomizer: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    app = App(name, store, seed=seed)
    try:
        result = app.main(ctx, command_args)
    except CommandError as e:
        logger.warning("Command failed (%s): %s", e.kind.value, e)
        print(e.help_text, file=sys.stderr)
        return EXIT_COMMAND_FAILED
    print(result.message)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
