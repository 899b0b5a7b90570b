"""
Top-level CLI dispatcher: randomizer <command> [args...].
Subcommands are imported lazily so a bad backend install never breaks --help.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from randomizer import __version__


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = argparse.ArgumentParser(
        prog="randomizer",
        description="Randomize options and manage saved groups of options",
    )
    parser.add_argument("--version", action="version", version=f"randomizer {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="command")
    # Subcommands parse their own flags, including -h.
    subparsers.add_parser("pick", add_help=False, help="Run one randomizer command")
    subparsers.add_parser(
        "backends",
        add_help=False,
        help="List store backends and the one the environment selects",
    )

    args, rest = parser.parse_known_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    cmd = args.command

    if cmd == "pick":
        from randomizer.cli import pick as mod

        return mod.main(rest)
    if cmd == "backends":
        from randomizer.cli import backends as mod

        return mod.main(rest)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
