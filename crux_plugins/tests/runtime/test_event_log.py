from __future__ import annotations

import pytest

from crux_plugins.base.errors import NotFoundError
from crux_plugins.base.runtime import Event, EventLog, PendingEvent


def _pending(name: str, emitter: str = "0xa", **args) -> PendingEvent:
    return PendingEvent(name=name, emitter=emitter, args=args)


def test_append_assigns_dense_log_indexes():
    log = EventLog()
    log.append_committed([_pending("A"), _pending("B")], tx_id=1, timestamp=50)
    log.append_committed([_pending("C")], tx_id=2, timestamp=51)
    assert [e.log_index for e in log] == [0, 1, 2]  # nosec B101
    assert [e.tx_id for e in log] == [1, 1, 2]  # nosec B101
    assert log.last(1)[0].name == "C"  # nosec B101
    assert log.last(0) == []  # nosec B101


def test_filter_by_name_emitter_and_tx():
    log = EventLog()
    log.append_committed([_pending("A", "0x1"), _pending("B", "0x2")], tx_id=1, timestamp=0)
    log.append_committed([_pending("A", "0x2")], tx_id=2, timestamp=0)
    assert len(log.filter(name="A")) == 2  # nosec B101
    assert len(log.filter(name="A", emitter="0x2")) == 1  # nosec B101
    assert [e.name for e in log.filter(tx_id=1)] == ["A", "B"]  # nosec B101


def test_subscribers_notified_after_append_and_can_unsubscribe():
    log = EventLog()
    seen = []

    def subscriber(event: Event) -> None:
        seen.append((event.name, len(log)))

    unsubscribe = log.subscribe(subscriber)
    log.append_committed([_pending("A"), _pending("B")], tx_id=1, timestamp=0)
    unsubscribe()
    log.append_committed([_pending("C")], tx_id=2, timestamp=0)
    assert seen == [("A", 2), ("B", 2)]  # nosec B101


def test_subscriber_errors_propagate_after_commit():
    log = EventLog()

    def broken(event: Event) -> None:
        raise RuntimeError("sink down")

    log.subscribe(broken)
    with pytest.raises(RuntimeError):
        log.append_committed([_pending("A")], tx_id=1, timestamp=0)
    assert len(log) == 1  # nosec B101


def test_runtime_publishes_only_committed_events(core, runtime):
    seen = []
    runtime.events.subscribe(seen.append)
    core.execute_plugin(0, 2)
    with pytest.raises(NotFoundError):
        core.execute_plugin(42, 2)
    assert [e.name for e in seen] == ["ActionPerformed", "PluginExecuted"]  # nosec B101


def test_event_to_dict():
    event = Event(name="X", emitter="0x1", args={"a": 1}, tx_id=3, log_index=4, timestamp=5)
    assert event.to_dict() == {  # nosec B101
        "name": "X",
        "emitter": "0x1",
        "args": {"a": 1},
        "tx_id": 3,
        "log_index": 4,
        "timestamp": 5,
    }
