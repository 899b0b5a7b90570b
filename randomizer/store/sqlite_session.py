"""
SQLite connection lifecycle: context manager with guaranteed close.
Commits on clean exit, rolls back when the body raises.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional, Union


@contextmanager
def sqlite_conn(
    db_path: Union[str, Path],
    *,
    timeout_s: Optional[float] = None,
) -> Generator[sqlite3.Connection, None, None]:
    """
    Yield a SQLite connection that is always closed on exit.
    timeout_s bounds how long a write waits on another writer's lock.
    """
    path = str(Path(db_path).resolve())
    conn = sqlite3.connect(path, timeout=5.0 if timeout_s is None else timeout_s)
    try:
        yield conn
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()
