"""SQLite engine helpers for the audit-log store.

Purpose
-------
Open SQLite connections with consistent pragmas and ensure the ``events``
table exists.

External dependencies
---------------------
- Standard library only (``sqlite3``). No side effects at import time.

Reliability strategy
--------------------
- Applies ``busy_timeout`` from ``crux_plugins.config.defaults`` to mitigate
  lock contention between the writer (event sink) and readers (HTTP layer).
- Enables WAL journaling and NORMAL synchronous mode.
- Connections use the default (deferred) isolation level so the Unit of Work
  decides when to commit or roll back.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ...config.defaults import (
    SQLITE_BUSY_TIMEOUT_MS,
    SQLITE_JOURNAL_MODE,
    SQLITE_SYNCHRONOUS,
)

DEFAULT_DB_DIR = Path.home() / ".crux_plugins"
DEFAULT_DB_PATH = DEFAULT_DB_DIR / "events.db"


def get_db_path(db_path: Optional[str] = None) -> Path:
    """Return a concrete database file path (``~`` expanded)."""
    return Path(db_path).expanduser() if db_path else DEFAULT_DB_PATH


def create_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Open a SQLite connection with sane defaults and apply PRAGMA settings.

    The parent directory is created when missing. ``check_same_thread`` is
    disabled because the event sink may be driven from a server worker thread;
    writes are serialized by the runtime lock.
    """
    path = get_db_path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA journal_mode={SQLITE_JOURNAL_MODE};")
    conn.execute(f"PRAGMA synchronous={SQLITE_SYNCHRONOUS};")
    conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")  # ms
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the ``events`` table and its indexes if missing, then commit."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS events (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            tx_id INTEGER NOT NULL,
            log_index INTEGER NOT NULL,
            emitter TEXT NOT NULL,
            name TEXT NOT NULL,
            args_json TEXT NOT NULL,
            timestamp INTEGER NOT NULL
        );
        """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS idx_events_name ON events(name);")
    conn.commit()


@contextmanager
def db_session(db_path: Optional[str] = None) -> Iterator[sqlite3.Connection]:
    """Context manager yielding a connection with schema initialized.

    Commits on normal exit, rolls back if an exception escapes, and always
    closes the connection.
    """
    conn = create_connection(db_path)
    try:
        init_schema(conn)
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


__all__ = [
    "DEFAULT_DB_PATH",
    "get_db_path",
    "create_connection",
    "init_schema",
    "db_session",
]
