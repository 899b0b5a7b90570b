"""Layered config: defaults <- YAML <- environment."""

from __future__ import annotations

import pytest

from randomizer import config
from randomizer.core.errors import ConfigurationError


@pytest.fixture
def yaml_env(tmp_path):
    """Environ pointing at a temp config.yaml; tests write the file."""
    path = tmp_path / "config.yaml"
    return path, {"RANDOMIZER_CONFIG": str(path)}


def test_defaults_without_yaml(tmp_path):
    env = {"RANDOMIZER_CONFIG": str(tmp_path / "missing.yaml")}
    cfg = config.get_config(env)
    assert cfg["app"] == {"name": "randomizer", "partition": "default"}
    assert config.sqlite_path(env) == "randomizer.db"
    assert config.sql_dsn(env) is None
    assert config.sql_table(env) == "randomizer_groups"
    assert config.selection_seed(env) is None


def test_yaml_overrides_defaults(yaml_env):
    path, env = yaml_env
    path.write_text("app:\n  name: /pick\nstore:\n  sql:\n    table: picks\n", encoding="utf-8")
    assert config.app_name(env) == "/pick"
    assert config.sql_table(env) == "picks"
    # untouched siblings survive the merge
    assert config.default_partition(env) == "default"
    assert config.sqlite_path(env) == "randomizer.db"


def test_env_overrides_yaml(yaml_env):
    path, env = yaml_env
    path.write_text("app:\n  partition: from-yaml\n", encoding="utf-8")
    env.update({"RANDOMIZER_PARTITION": "from-env", "RANDOMIZER_DB_DSN": "postgresql://db/x"})
    assert config.default_partition(env) == "from-env"
    assert config.sql_dsn(env) == "postgresql://db/x"


def test_empty_env_value_ignored(yaml_env):
    _, env = yaml_env
    env["RANDOMIZER_NAME"] = ""
    assert config.app_name(env) == "randomizer"


def test_non_mapping_yaml_ignored(yaml_env):
    path, env = yaml_env
    path.write_text("- just\n- a list\n", encoding="utf-8")
    assert config.app_name(env) == "randomizer"


def test_seed_from_env(yaml_env):
    _, env = yaml_env
    env["RANDOMIZER_SEED"] = "42"
    assert config.selection_seed(env) == 42


def test_bad_seed(yaml_env):
    _, env = yaml_env
    env["RANDOMIZER_SEED"] = "forty-two"
    with pytest.raises(ConfigurationError, match="selection.seed"):
        config.selection_seed(env)


def test_repo_config_yaml_loads():
    cfg = config.get_config({})
    assert cfg["store"]["sqlite"]["path"] == "randomizer.db"
    assert cfg["selection"]["seed"] is None
