"""
Backend registry: immutable catalog of the store backends this process can use.

Each entry names the environment variables that select it and a constructor
that builds a partition-scoped StoreFactory. The registry is built once by the
composition root (see defaults.create_default_registry) and only read afterwards.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, List, Mapping, Optional, Tuple

from randomizer.core.context import OperationContext

from .backend import StoreFactory

logger = logging.getLogger(__name__)

# (ctx, environ) -> StoreFactory; raise on misconfiguration
FactoryFromEnv = Callable[[OperationContext, Mapping[str, str]], StoreFactory]


@dataclass(frozen=True)
class BackendEntry:
    """One store backend: the env keys that select it and how to build it."""

    name: str
    environment_keys: Tuple[str, ...]
    factory_from_env: FactoryFromEnv

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("BackendEntry.name must be set")
        if not self.environment_keys:
            raise ValueError(f"Backend '{self.name}' must declare at least one environment key")
        object.__setattr__(self, "environment_keys", tuple(self.environment_keys))

    def keys_present(self, environ: Mapping[str, str]) -> List[str]:
        """Environment keys of this backend that are set in environ (even if empty)."""
        return [k for k in self.environment_keys if k in environ]


class BackendRegistry:
    """
    Read-only mapping of backend name to BackendEntry.

    Usage:
        registry = BackendRegistry(
            [BackendEntry("sqlite", ("RANDOMIZER_DB_PATH",), sqlite_factory_from_env)],
            default="sqlite",
        )
        entry = registry.get("sqlite")
    """

    def __init__(self, entries: Iterable[BackendEntry], *, default: Optional[str] = None) -> None:
        table = {}
        for entry in entries:
            if entry.name in table:
                raise ValueError(f"'{entry.name}' is already registered as a store backend")
            table[entry.name] = entry
            logger.debug("Registered store backend: %s %s", entry.name, list(entry.environment_keys))
        if default is not None and default not in table:
            raise KeyError(f"Default store backend '{default}' is not registered. Available: {sorted(table)}")
        self._entries: Mapping[str, BackendEntry] = MappingProxyType(table)
        self._default = default

    def get(self, name: str) -> BackendEntry:
        entry = self._entries.get(name)
        if entry is None:
            raise KeyError(f"Unknown store backend '{name}'. Available: {sorted(self._entries)}")
        return entry

    @property
    def names(self) -> List[str]:
        return sorted(self._entries)

    @property
    def default(self) -> Optional[BackendEntry]:
        """The backend used when the environment selects none, if one is designated."""
        if self._default is None:
            return None
        return self._entries[self._default]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[BackendEntry]:
        return iter(self._entries[name] for name in self.names)

    def __len__(self) -> int:
        return len(self._entries)
