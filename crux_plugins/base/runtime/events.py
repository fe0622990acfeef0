"""Append-only audit event log.

Contracts emit events during a transaction; the runtime buffers them and
appends them here only when the transaction commits. Subscribers are notified
synchronously, in order, after each committed event is appended.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

EventSubscriber = Callable[["Event"], None]


@dataclass(frozen=True)
class Event:
    """A committed audit event.

    Attributes:
        name: Event name (e.g. ``PluginExecuted``).
        emitter: Address of the emitting contract.
        args: Event arguments keyed by name.
        tx_id: Id of the transaction that emitted the event.
        log_index: Position in the global log (0-based, dense).
        timestamp: Transaction timestamp in epoch seconds.
    """

    name: str
    emitter: str
    args: Mapping[str, Any] = field(default_factory=dict)
    tx_id: int = 0
    log_index: int = 0
    timestamp: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "emitter": self.emitter,
            "args": dict(self.args),
            "tx_id": self.tx_id,
            "log_index": self.log_index,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class PendingEvent:
    """An event emitted inside a transaction that has not committed yet."""

    name: str
    emitter: str
    args: Mapping[str, Any]


class EventLog:
    """Append-only, filterable event log with synchronous subscribers."""

    def __init__(self) -> None:
        self._events: List[Event] = []
        self._subscribers: List[EventSubscriber] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))

    def subscribe(self, subscriber: EventSubscriber) -> Callable[[], None]:
        """Register ``subscriber`` and return a callable that unsubscribes it."""
        with self._lock:
            self._subscribers.append(subscriber)

        def _unsubscribe() -> None:
            with self._lock:
                if subscriber in self._subscribers:
                    self._subscribers.remove(subscriber)

        return _unsubscribe

    def append_committed(self, pending: List[PendingEvent], *, tx_id: int, timestamp: int) -> List[Event]:
        """Append the events of a committed transaction and notify subscribers."""
        with self._lock:
            committed: List[Event] = []
            for item in pending:
                event = Event(
                    name=item.name,
                    emitter=item.emitter,
                    args=dict(item.args),
                    tx_id=tx_id,
                    log_index=len(self._events),
                    timestamp=timestamp,
                )
                self._events.append(event)
                committed.append(event)
            subscribers = list(self._subscribers)
        for event in committed:
            for subscriber in subscribers:
                subscriber(event)
        return committed

    def filter(
        self,
        name: Optional[str] = None,
        emitter: Optional[str] = None,
        tx_id: Optional[int] = None,
    ) -> List[Event]:
        """Return committed events matching every provided criterion."""
        return [
            e
            for e in list(self._events)
            if (name is None or e.name == name)
            and (emitter is None or e.emitter == emitter)
            and (tx_id is None or e.tx_id == tx_id)
        ]

    def last(self, n: int = 1) -> List[Event]:
        return list(self._events[-n:]) if n > 0 else []


__all__ = ["Event", "PendingEvent", "EventLog", "EventSubscriber"]
