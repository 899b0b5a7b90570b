"""
Default store registry configuration.

Registers the built-in backends. To add a backend, give it a factory_from_env
and its environment keys, and add an entry here.
"""
from __future__ import annotations

from . import sql_backend, sqlite_backend
from .registry import BackendEntry, BackendRegistry

DEFAULT_BACKEND = "sqlite"


def create_default_registry() -> BackendRegistry:
    """Create a registry with all built-in backends; sqlite is the default."""
    return BackendRegistry(
        [
            BackendEntry(
                name="sqlite",
                environment_keys=sqlite_backend.ENVIRONMENT_KEYS,
                factory_from_env=sqlite_backend.factory_from_env,
            ),
            BackendEntry(
                name="sql",
                environment_keys=sql_backend.ENVIRONMENT_KEYS,
                factory_from_env=sql_backend.factory_from_env,
            ),
        ],
        default=DEFAULT_BACKEND,
    )
