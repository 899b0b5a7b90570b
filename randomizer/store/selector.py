"""
Backend selection: pick exactly one registered store backend from the environment.

A backend is a candidate when any of its environment keys is present. No
candidates falls back to the registry default (if designated); more than one
candidate is an error rather than a priority pick. Runs once at startup.
"""
from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from randomizer.core.context import OperationContext
from randomizer.core.errors import (
    BackendSelectionError,
    ConfigurationError,
    RandomizerError,
    describe_names,
)

from .backend import StoreFactory
from .registry import BackendEntry, BackendRegistry

logger = logging.getLogger(__name__)


def select_backend(
    registry: BackendRegistry,
    environ: Optional[Mapping[str, str]] = None,
) -> BackendEntry:
    """Return the single backend the environment selects, or raise BackendSelectionError."""
    env = os.environ if environ is None else environ
    if len(registry) == 0:
        raise BackendSelectionError("no store backends are available in this build")

    candidates = [entry for entry in registry if entry.keys_present(env)]
    if not candidates:
        default = registry.default
        if default is not None:
            logger.debug("No backend environment keys set; using default backend %s", default.name)
            return default
        raise BackendSelectionError(
            "cannot find environment settings to select a store backend "
            f"(available: {describe_names(registry.names)})",
            available=registry.names,
        )
    if len(candidates) > 1:
        names = [c.name for c in candidates]
        raise BackendSelectionError(
            f"environment settings match multiple store backends: {describe_names(names)}",
            candidates=names,
            available=registry.names,
        )
    chosen = candidates[0]
    logger.debug("Environment keys %s select backend %s", chosen.keys_present(env), chosen.name)
    return chosen


def factory_from_env(
    ctx: OperationContext,
    registry: Optional[BackendRegistry] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> StoreFactory:
    """
    Select a backend and build its StoreFactory.

    Call once per process and reuse the factory for every request. Any failure
    is a ConfigurationError (BackendSelectionError for ambiguous or missing settings).
    """
    if registry is None:
        from .defaults import create_default_registry

        registry = create_default_registry()
    env = dict(os.environ if environ is None else environ)
    entry = select_backend(registry, env)
    try:
        factory = entry.factory_from_env(ctx, env)
    except ConfigurationError:
        raise
    except (RandomizerError, OSError, ValueError, ImportError) as e:
        raise ConfigurationError(f"could not set up the '{entry.name}' store backend: {e}") from e
    logger.info("Using store backend: %s", entry.name)
    return factory
