"""
SQLite backend: groups for every partition in one local database file.
Default backend; selected when no other backend's environment keys are set.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import List, Mapping, Sequence, Union

from randomizer.config import sqlite_path
from randomizer.core.context import OperationContext
from randomizer.core.errors import ConfigurationError

from .backend import Store, StoreFactory, require_partition
from .sqlite_session import sqlite_conn

logger = logging.getLogger(__name__)

ENVIRONMENT_KEYS = ("RANDOMIZER_DB_PATH",)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS groups (
    partition   TEXT NOT NULL,
    name        TEXT NOT NULL,
    options     TEXT NOT NULL,
    PRIMARY KEY (partition, name)
);
"""


def init_schema(db_path: Union[str, Path]) -> None:
    """Create the groups table if it does not exist."""
    with sqlite_conn(db_path) as conn:
        conn.executescript(SCHEMA_SQL)


class SQLiteStore(Store):
    """Store for one partition of a SQLite database file. The schema must already exist."""

    def __init__(self, db_path: Union[str, Path], partition: str) -> None:
        self.db_path = str(db_path)
        self.partition = require_partition(partition)

    def list(self, ctx: OperationContext) -> List[str]:
        ctx.check()
        with sqlite_conn(self.db_path, timeout_s=ctx.remaining()) as conn:
            rows = conn.execute(
                "SELECT name FROM groups WHERE partition = ? ORDER BY name",
                (self.partition,),
            ).fetchall()
        return [row[0] for row in rows]

    def get(self, ctx: OperationContext, name: str) -> List[str]:
        ctx.check()
        with sqlite_conn(self.db_path, timeout_s=ctx.remaining()) as conn:
            row = conn.execute(
                "SELECT options FROM groups WHERE partition = ? AND name = ?",
                (self.partition, name),
            ).fetchone()
        if row is None:
            return []
        options = json.loads(row[0])
        if not isinstance(options, list):
            raise ValueError(f"group {name!r} in partition {self.partition!r} is not a list")
        return [str(o) for o in options]

    def put(self, ctx: OperationContext, name: str, options: Sequence[str]) -> None:
        ctx.check()
        with sqlite_conn(self.db_path, timeout_s=ctx.remaining()) as conn:
            conn.execute(
                """
                INSERT INTO groups (partition, name, options)
                VALUES (?, ?, ?)
                ON CONFLICT(partition, name)
                DO UPDATE SET options = excluded.options
                """,
                (self.partition, name, json.dumps(list(options))),
            )

    def delete(self, ctx: OperationContext, name: str) -> bool:
        ctx.check()
        with sqlite_conn(self.db_path, timeout_s=ctx.remaining()) as conn:
            cur = conn.execute(
                "DELETE FROM groups WHERE partition = ? AND name = ?",
                (self.partition, name),
            )
            return cur.rowcount > 0

    def __repr__(self) -> str:
        return f"SQLiteStore({self.db_path!r}, partition={self.partition!r})"


def factory_from_env(ctx: OperationContext, environ: Mapping[str, str]) -> StoreFactory:
    """StoreFactory over the file named by RANDOMIZER_DB_PATH (or store.sqlite.path)."""
    ctx.check()
    path = Path(sqlite_path(environ))
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    try:
        init_schema(path)
    except sqlite3.Error as e:
        raise ConfigurationError(f"could not open SQLite store at {path}: {e}") from e
    logger.debug("SQLite store at %s", path.resolve())

    def factory(partition: str) -> Store:
        return SQLiteStore(path, partition)

    return factory
