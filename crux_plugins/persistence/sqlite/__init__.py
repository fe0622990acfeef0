from __future__ import annotations

import sqlite3
from typing import Optional

from .engine import create_connection, init_schema
from .event_repo import EventRepoSqlite
from .sink import SqliteEventSink
from .unit_of_work import UnitOfWorkSqlite


def get_uow(db_path: Optional[str] = None) -> UnitOfWorkSqlite:
    conn: sqlite3.Connection = create_connection(db_path)
    init_schema(conn)
    return UnitOfWorkSqlite(conn)


__all__ = [
    "create_connection",
    "init_schema",
    "EventRepoSqlite",
    "SqliteEventSink",
    "UnitOfWorkSqlite",
    "get_uow",
]
