"""
SQL server backend via SQLAlchemy Core (Postgres in production; SQLite and MySQL URLs also work).

One Engine per process, one SQLStore per partition. The table is created on
startup if missing. Selected by RANDOMIZER_DB_DSN / RANDOMIZER_DB_TABLE.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from randomizer.config import sql_dsn, sql_table
from randomizer.core.context import OperationContext
from randomizer.core.errors import ConfigurationError

from .backend import Store, StoreFactory, require_partition

logger = logging.getLogger(__name__)

ENVIRONMENT_KEYS = ("RANDOMIZER_DB_DSN", "RANDOMIZER_DB_TABLE")

# Lock wait when the context has no deadline; matches sqlite_session.
DEFAULT_SQLITE_BUSY_S = 5.0

# Dialects with a single-statement upsert.
SUPPORTED_DIALECTS = ("postgresql", "sqlite", "mysql", "mariadb")


def groups_table(name: str, metadata: sa.MetaData) -> sa.Table:
    return sa.Table(
        name,
        metadata,
        sa.Column("partition", sa.String(255), primary_key=True),
        sa.Column("name", sa.String(255), primary_key=True),
        sa.Column("options", sa.JSON, nullable=False),
    )


class SQLStore(Store):
    """Store for one partition of a SQLAlchemy-managed groups table."""

    def __init__(self, engine: Engine, table: sa.Table, partition: str) -> None:
        self._engine = engine
        self._table = table
        self.partition = require_partition(partition)

    def _key(self, name: str):
        t = self._table
        return sa.and_(t.c.partition == self.partition, t.c.name == name)

    @contextmanager
    def _begin(self, ctx: OperationContext) -> Iterator[Connection]:
        """Transaction bounded by the context's remaining time."""
        ctx.check()
        with self._engine.begin() as conn:
            apply_timeout(conn, ctx.remaining())
            yield conn

    def list(self, ctx: OperationContext) -> List[str]:
        t = self._table
        query = sa.select(t.c.name).where(t.c.partition == self.partition).order_by(t.c.name)
        with self._begin(ctx) as conn:
            return [row[0] for row in conn.execute(query)]

    def get(self, ctx: OperationContext, name: str) -> List[str]:
        query = sa.select(self._table.c.options).where(self._key(name))
        with self._begin(ctx) as conn:
            options = conn.execute(query).scalar_one_or_none()
        if options is None:
            return []
        return [str(o) for o in options]

    def put(self, ctx: OperationContext, name: str, options: Sequence[str]) -> None:
        values = {"partition": self.partition, "name": name, "options": list(options)}
        with self._begin(ctx) as conn:
            conn.execute(upsert_statement(conn.dialect.name, self._table, values))

    def delete(self, ctx: OperationContext, name: str) -> bool:
        with self._begin(ctx) as conn:
            result = conn.execute(sa.delete(self._table).where(self._key(name)))
            return result.rowcount > 0

    def __repr__(self) -> str:
        return f"SQLStore({self._table.name!r}, partition={self.partition!r})"


def upsert_statement(dialect: str, table: sa.Table, values: Dict[str, Any]):
    """
    Single-statement insert-or-replace keyed on (partition, name).

    Postgres and SQLite use ON CONFLICT, MySQL/MariaDB ON DUPLICATE KEY.
    Other dialects are not supported.
    """
    if dialect in ("postgresql", "sqlite"):
        dialect_insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
        stmt = dialect_insert(table).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[table.c.partition, table.c.name],
            set_={"options": stmt.excluded.options},
        )
    if dialect in ("mysql", "mariadb"):
        stmt = mysql.insert(table).values(**values)
        return stmt.on_duplicate_key_update(options=stmt.inserted.options)
    raise NotImplementedError(f"SQL store does not support the {dialect!r} dialect")


def apply_timeout(conn: Connection, remaining_s: Optional[float]) -> None:
    """
    Bound statements in the current transaction by remaining_s.

    Postgres gets a transaction-local statement_timeout. SQLite gets a lock
    wait (busy_timeout), reset to the default when there is no deadline
    because it outlives the transaction on a pooled connection.
    """
    dialect = conn.dialect.name
    if dialect == "postgresql" and remaining_s is not None:
        conn.exec_driver_sql(f"SET LOCAL statement_timeout = {_millis(remaining_s)}")
    elif dialect == "sqlite":
        busy_s = DEFAULT_SQLITE_BUSY_S if remaining_s is None else remaining_s
        conn.exec_driver_sql(f"PRAGMA busy_timeout = {_millis(busy_s)}")


def _millis(seconds: float) -> int:
    # 0 disables the Postgres timeout, so never round down to it.
    return max(1, int(seconds * 1000))


def create_store_factory(engine: Engine, table_name: str) -> StoreFactory:
    """Ensure the table exists and return a factory of per-partition stores."""
    metadata = sa.MetaData()
    table = groups_table(table_name, metadata)
    metadata.create_all(engine, checkfirst=True)

    def factory(partition: str) -> Store:
        return SQLStore(engine, table, partition)

    return factory


def factory_from_env(ctx: OperationContext, environ: Mapping[str, str]) -> StoreFactory:
    ctx.check()
    dsn = sql_dsn(environ)
    if not dsn:
        raise ConfigurationError("missing RANDOMIZER_DB_DSN in environment")
    table_name = sql_table(environ)
    try:
        engine = sa.create_engine(dsn, pool_pre_ping=True)
        if engine.dialect.name not in SUPPORTED_DIALECTS:
            raise ConfigurationError(
                f"SQL store does not support the {engine.dialect.name!r} dialect "
                f"(supported: {', '.join(SUPPORTED_DIALECTS)})"
            )
        factory = create_store_factory(engine, table_name)
    except SQLAlchemyError as e:
        raise ConfigurationError(f"could not open SQL store table {table_name!r}: {e}") from e
    logger.debug("SQL store on %s, table %s", engine.url.render_as_string(hide_password=True), table_name)
    return factory
