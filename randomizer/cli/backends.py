"""
Diagnostic: list registered store backends and the one the environment selects.
Use: randomizer backends
Exit 0 when exactly one backend is selected, 2 on a selection error.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Mapping, Optional

from randomizer.core.errors import BackendSelectionError
from randomizer.store.defaults import create_default_registry
from randomizer.store.registry import BackendRegistry
from randomizer.store.selector import select_backend


def describe_backends(registry: BackendRegistry, environ: Mapping[str, str]) -> List[str]:
    """One line per backend: name, environment keys, and which of them are set."""
    default = registry.default
    lines = []
    for entry in registry:
        present = entry.keys_present(environ)
        marker = " (default)" if default is not None and entry.name == default.name else ""
        lines.append(
            f"  {entry.name}{marker}: keys {', '.join(entry.environment_keys)}; "
            f"set: {', '.join(present) or 'none'}"
        )
    return lines


def main(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    ap = argparse.ArgumentParser(
        prog="randomizer backends",
        description="List store backends, their environment keys and the current selection.",
    )
    ap.parse_args(argv)
    env = dict(os.environ if environ is None else environ)

    registry = create_default_registry()
    print("Store backends:")
    for line in describe_backends(registry, env):
        print(line)
    try:
        entry = select_backend(registry, env)
    except BackendSelectionError as e:
        print(f"Selection error: {e}", file=sys.stderr)
        return 2
    print(f"Selected: {entry.name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
