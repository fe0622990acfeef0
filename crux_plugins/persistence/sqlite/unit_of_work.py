"""SQLite-backed Unit of Work implementation aggregating repositories.

On context exit it commits when no exception occurred; otherwise it rolls
back. No implicit commits happen inside repositories.
"""

from __future__ import annotations

import sqlite3

from ..interfaces.repos import IUnitOfWork
from .event_repo import EventRepoSqlite


class UnitOfWorkSqlite(IUnitOfWork):
    """Unit of Work implementation for SQLite."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self.events = EventRepoSqlite(conn)
        self._active = False

    def __enter__(self) -> "UnitOfWorkSqlite":
        self._active = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()
