"""SQLite-backed implementation of ``IEventRepo``.

Event arguments are stored as JSON text: unsigned 256-bit words exceed
SQLite's INTEGER range, and JSON keeps them exact. Writes defer commit to the
Unit of Work.
"""

from __future__ import annotations

import json
import sqlite3
from typing import Iterable

from ..interfaces.repos import EventRecord, IEventRepo

_COLUMNS = "id, tx_id, log_index, emitter, name, args_json, timestamp"


def _record_from_row(row: sqlite3.Row) -> EventRecord:
    return EventRecord(
        id=int(row["id"]),
        tx_id=int(row["tx_id"]),
        log_index=int(row["log_index"]),
        emitter=row["emitter"],
        name=row["name"],
        args=json.loads(row["args_json"]),
        timestamp=int(row["timestamp"]),
    )


class EventRepoSqlite(IEventRepo):
    """SQLite-backed append-only event repository."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def add(self, record: EventRecord) -> int:
        cur = self.conn.execute(
            """
            INSERT INTO events(tx_id, log_index, emitter, name, args_json, timestamp)
            VALUES(?, ?, ?, ?, ?, ?)
            """,
            (
                record.tx_id,
                record.log_index,
                record.emitter,
                record.name,
                json.dumps(record.args, ensure_ascii=False, sort_keys=True),
                record.timestamp,
            ),
        )
        return int(cur.lastrowid)

    def list_recent(self, limit: int = 100) -> Iterable[EventRecord]:
        cur = self.conn.execute(f"SELECT {_COLUMNS} FROM events ORDER BY id DESC LIMIT ?", (limit,))
        for row in cur.fetchall():
            yield _record_from_row(row)

    def list_by_name(self, name: str, limit: int = 100) -> Iterable[EventRecord]:
        cur = self.conn.execute(
            f"SELECT {_COLUMNS} FROM events WHERE name = ? ORDER BY id DESC LIMIT ?",
            (name, limit),
        )
        for row in cur.fetchall():
            yield _record_from_row(row)

    def count(self) -> int:
        return int(self.conn.execute("SELECT COUNT(*) FROM events").fetchone()[0])


__all__ = ["EventRepoSqlite"]
