"""
Top-level public API surface. Stable facades only.
Canonical entrypoint: import randomizer; use randomizer.core, randomizer.engine, randomizer.store.
Does not import cli.
"""

from __future__ import annotations

from . import config, core, engine, store
from ._version import __version__

# Do not add exports without updating __all__.
__all__ = [
    "__version__",
    "config",
    "core",
    "engine",
    "store",
]
