"""Repository & Unit of Work protocol definitions for the audit-log store.

Callers depend only on these abstractions; concrete implementations live
under `persistence/sqlite/` (or future backends).

Design Principles:
- No concrete behavior; pure structural typing via `Protocol`.
- Dataclasses represent DTOs crossing repository boundaries.
- Transaction control is delegated to the `IUnitOfWork` implementation;
  repositories never commit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Protocol

# ---------- Data Transfer Objects ----------


@dataclass
class EventRecord:
    """Persisted audit event row.

    Attributes
    ----------
    id: Primary key (None until persisted).
    tx_id: Runtime transaction id that emitted the event.
    log_index: Position of the event in the runtime's event log.
    emitter: Address of the emitting contract.
    name: Event name (e.g. ``PluginExecuted``).
    args: Event arguments (JSON serialized; large integers kept exact).
    timestamp: Transaction timestamp in epoch seconds.
    """

    id: Optional[int]
    tx_id: int
    log_index: int
    emitter: str
    name: str
    args: Dict[str, Any] = field(default_factory=dict)
    timestamp: int = 0


# ---------- Repository Protocols ----------


class IEventRepo(Protocol):
    """Append-only audit event storage abstraction."""

    def add(self, record: EventRecord) -> int:
        """Persist a new event row returning its primary key.

        Notes
        -----
        No implicit commit; caller controls transaction boundaries.
        """
        ...

    def list_recent(self, limit: int = 100) -> Iterable[EventRecord]:
        """Yield the most recent events, newest first."""
        ...

    def list_by_name(self, name: str, limit: int = 100) -> Iterable[EventRecord]:
        """Yield the most recent events called ``name``, newest first."""
        ...

    def count(self) -> int:
        """Return the number of stored events."""
        ...


class IUnitOfWork(Protocol):
    """Transactional boundary aggregating repository instances.

    All write operations MUST be explicitly committed by calling `commit()`
    (or by leaving the context cleanly); otherwise they are rolled back.
    """

    events: IEventRepo

    def __enter__(self) -> "IUnitOfWork":  # pragma: no cover
        ...

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover
        ...

    def commit(self) -> None:
        """Persist all pending changes atomically."""
        ...

    def rollback(self) -> None:
        """Undo all uncommitted changes (idempotent)."""
        ...


__all__ = ["EventRecord", "IEventRepo", "IUnitOfWork"]
