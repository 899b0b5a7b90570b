"""
Load config from config.yaml with optional env overrides.
Single source of truth for the command name, CLI partition, store defaults and shuffle seed.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .core.errors import ConfigurationError

# Defaults if no YAML or env
_DEFAULTS = {
    "app": {
        "name": "randomizer",
        "partition": "default",
    },
    "store": {
        "sqlite": {"path": "randomizer.db"},
        "sql": {"dsn": None, "table": "randomizer_groups"},
    },
    "selection": {"seed": None},
}

# (env var, config path) pairs applied on top of config.yaml
_ENV_OVERRIDES = (
    ("RANDOMIZER_NAME", ("app", "name")),
    ("RANDOMIZER_PARTITION", ("app", "partition")),
    ("RANDOMIZER_DB_PATH", ("store", "sqlite", "path")),
    ("RANDOMIZER_DB_DSN", ("store", "sql", "dsn")),
    ("RANDOMIZER_DB_TABLE", ("store", "sql", "table")),
    ("RANDOMIZER_SEED", ("selection", "seed")),
)


def _config_yaml_path(environ: Mapping[str, str]) -> Path:
    """RANDOMIZER_CONFIG if set, else config.yaml at repo root (parent of package dir)."""
    explicit = environ.get("RANDOMIZER_CONFIG")
    if explicit:
        return Path(explicit)
    return Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml(environ: Mapping[str, str]) -> dict:
    config_path = _config_yaml_path(environ)
    if not config_path.exists():
        return {}
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _env_overrides(environ: Mapping[str, str]) -> dict:
    overrides: dict = {}
    for var, path in _ENV_OVERRIDES:
        value = environ.get(var)
        if not value:
            continue
        node = overrides
        for key in path[:-1]:
            node = node.setdefault(key, {})
        node[path[-1]] = value
    return overrides


def get_config(environ: Optional[Mapping[str, str]] = None) -> dict:
    """Return merged config: defaults <- config.yaml <- env."""
    env = os.environ if environ is None else environ
    merged = _deep_merge(_DEFAULTS, _load_yaml(env))
    merged = _deep_merge(merged, _env_overrides(env))
    return merged


# Convenience accessors
def app_name(environ: Optional[Mapping[str, str]] = None) -> str:
    return str(get_config(environ)["app"]["name"])


def default_partition(environ: Optional[Mapping[str, str]] = None) -> str:
    return str(get_config(environ)["app"]["partition"])


def sqlite_path(environ: Optional[Mapping[str, str]] = None) -> str:
    return str(get_config(environ)["store"]["sqlite"]["path"])


def sql_dsn(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    dsn: Any = get_config(environ)["store"]["sql"].get("dsn")
    return str(dsn) if dsn else None


def sql_table(environ: Optional[Mapping[str, str]] = None) -> str:
    return str(get_config(environ)["store"]["sql"]["table"])


def selection_seed(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Integer seed for the shuffle, or None for an unseeded one."""
    seed = get_config(environ)["selection"].get("seed")
    if seed is None or seed == "":
        return None
    try:
        return int(seed)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"selection.seed must be an integer, got {seed!r}") from e
