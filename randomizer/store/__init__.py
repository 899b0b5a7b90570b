"""
Store: the persistence interface, the backend registry and environment-based selection.
No business logic or user-facing text.
"""

from __future__ import annotations

from .backend import Store, StoreFactory
from .registry import BackendEntry, BackendRegistry
from .selector import factory_from_env, select_backend

__all__ = [
    "BackendEntry",
    "BackendRegistry",
    "Store",
    "StoreFactory",
    "factory_from_env",
    "select_backend",
]
