"""
Engine: request parsing, option expansion and the command executor.
Depends on core and the Store interface only; never on a concrete backend.
"""

from __future__ import annotations

from .app import App, is_forbidden_group_name
from .expand import expand_options
from .request import parse_request

__all__ = ["App", "expand_options", "is_forbidden_group_name", "parse_request"]
