"""Allow python -m randomizer to run the CLI."""
from __future__ import annotations

from randomizer.cli.main import main

if __name__ == "__main__":
    raise SystemExit(main())
