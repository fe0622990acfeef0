"""Event-log subscriber persisting committed events to SQLite.

Attach with ``runtime.events.subscribe(SqliteEventSink(path))``. The runtime
only notifies subscribers after a transaction commits, so reverted operations
never reach the store. Each event is written in its own Unit of Work; a write
failure propagates to the caller that triggered the commit.
"""

from __future__ import annotations

import sqlite3
from typing import Optional

from ...base.logging import LogContext, get_logger, log_event
from ...base.runtime import Event
from ..interfaces.repos import EventRecord
from .engine import create_connection, init_schema
from .unit_of_work import UnitOfWorkSqlite


class SqliteEventSink:
    """Callable subscriber writing each committed :class:`Event` to SQLite."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self._conn: Optional[sqlite3.Connection] = create_connection(db_path)
        init_schema(self._conn)
        self.logger = get_logger("plugins.persistence")

    def __call__(self, event: Event) -> None:
        if self._conn is None:
            raise RuntimeError("event sink is closed")
        with UnitOfWorkSqlite(self._conn) as uow:
            uow.events.add(
                EventRecord(
                    id=None,
                    tx_id=event.tx_id,
                    log_index=event.log_index,
                    emitter=event.emitter,
                    name=event.name,
                    args=dict(event.args),
                    timestamp=event.timestamp,
                )
            )
        log_event(
            self.logger,
            "events.persisted",
            LogContext(contract=event.emitter, tx_id=event.tx_id),
            name=event.name,
            log_index=event.log_index,
        )

    def unit_of_work(self) -> UnitOfWorkSqlite:
        """Return a Unit of Work on the sink's connection (for reads)."""
        if self._conn is None:
            raise RuntimeError("event sink is closed")
        return UnitOfWorkSqlite(self._conn)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None


__all__ = ["SqliteEventSink"]
