"""In-process execution runtime for registry and plugin contracts.

Purpose
-------
Provide the primitives the registry and plugins rely on:

- caller attribution per call (``Contract.msg_sender``),
- all-or-nothing transactions covering the declared state of every contract
  a transaction writes to, the code table and emitted events,
- a code-presence query (``has_code``),
- a monotonic wall-clock timestamp per transaction,
- an append-only audit event log with subscribers.

Concurrency
-----------
Each runtime owns one re-entrant lock held for the whole of a top-level
transaction, so calls from different threads are serialized. Nested calls
(registry into plugin, plugin back into registry) run on the same thread
inside the same transaction and reuse it.

Failure semantics
-----------------
The code table and deployment nonces are copied when a top-level transaction
starts; contract state is journaled lazily, the first time the transaction
calls a non-view function on that contract. Any exception escaping the
transaction restores those copies and discards the events it emitted; the
exception then propagates unchanged. Event subscribers run after commit; an exception raised by a
subscriber reaches the caller but does not undo the committed transaction.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Type, TypeVar

from ..errors import CallFailedError, classify_exception
from ..logging import LogContext, get_logger, log_event
from .address import contract_address, to_address
from .clock import MonotonicClock
from .contract import Contract, is_view
from .events import EventLog, PendingEvent
from .handle import ContractHandle

C = TypeVar("C", bound=Contract)


@dataclass(frozen=True)
class CallFrame:
    """One level of the call stack: who called which contract."""

    sender: str
    target: str


@dataclass
class Transaction:
    """A top-level operation in flight.

    Attributes:
        tx_id: Runtime-unique transaction id (ids of reverted transactions are not reused).
        origin: Account that started the transaction.
        timestamp: Clock reading shared by every call in the transaction.
        pending: Events emitted so far, published only on commit.
        journal: State of each contract written to, captured before its first write.
    """

    tx_id: int
    origin: str
    timestamp: int
    pending: List[PendingEvent] = field(default_factory=list)
    journal: Dict[str, Dict[str, Any]] = field(default_factory=dict)


@dataclass
class _Journal:
    code: Dict[str, Contract]
    nonces: Dict[str, int]


class Runtime:
    """Execution substrate hosting deployed contracts."""

    def __init__(self, clock: Any = None, events: Optional[EventLog] = None) -> None:
        self.clock = clock or MonotonicClock()
        self.events = events if events is not None else EventLog()
        self.logger = get_logger("plugins.runtime")
        self._lock = threading.RLock()
        self._code: Dict[str, Contract] = {}
        self._nonces: Dict[str, int] = {}
        self._frames: List[CallFrame] = []
        self._tx: Optional[Transaction] = None
        self._tx_counter = 0

    # ---- code table ----
    def has_code(self, address: str) -> bool:
        """Return True when ``address`` currently hosts deployed code."""
        return address in self._code

    def code_at(self, address: str) -> Optional[Contract]:
        return self._code.get(address)

    def deployed_addresses(self) -> List[str]:
        return list(self._code)

    def at(self, address: str, sender: str) -> ContractHandle:
        """Return a handle for an already deployed contract."""
        return ContractHandle(self, to_address(address), to_address(sender))

    # ---- transactions ----
    @contextmanager
    def transaction(self, sender: str) -> Iterator[Transaction]:
        """Run the enclosed block atomically.

        Nested use joins the transaction already in flight on this runtime.
        """
        with self._lock:
            if self._tx is not None:
                yield self._tx
                return
            self._tx_counter += 1
            tx = Transaction(tx_id=self._tx_counter, origin=sender, timestamp=self.clock.now())
            journal = self._snapshot()
            self._tx = tx
            try:
                yield tx
            except BaseException as exc:
                self._restore(journal, tx)
                self._frames.clear()
                self._tx = None
                log_event(
                    self.logger,
                    "tx.reverted",
                    LogContext(caller=sender, tx_id=tx.tx_id),
                    level=logging.DEBUG,
                    error_code=classify_exception(exc).value,
                    reason=str(exc),
                )
                raise
            self._tx = None
            log_event(
                self.logger,
                "tx.committed",
                LogContext(caller=sender, tx_id=tx.tx_id),
                level=logging.DEBUG,
                events=len(tx.pending),
            )
            self.events.append_committed(tx.pending, tx_id=tx.tx_id, timestamp=tx.timestamp)

    def deploy(self, contract_cls: Type[C], *args: Any, sender: str, **kwargs: Any) -> ContractHandle:
        """Deploy ``contract_cls`` as ``sender`` and return a handle bound to it.

        The constructor runs with ``msg_sender == sender``. If it raises,
        nothing is deployed and the error propagates.
        """
        sender = to_address(sender)
        with self.transaction(sender):
            nonce = self._nonces.get(sender, 0)
            address = contract_address(sender, nonce)
            self._nonces[sender] = nonce + 1
            instance = contract_cls.__new__(contract_cls)
            instance._bind(self, address)
            self._frames.append(CallFrame(sender=sender, target=address))
            try:
                instance.__init__(*args, **kwargs)
            finally:
                self._frames.pop()
            self._code[address] = instance
            log_event(
                self.logger,
                "contract.deployed",
                LogContext(contract=address, caller=sender, tx_id=self._tx.tx_id if self._tx else None),
                contract_type=contract_cls.__name__,
            )
        return ContractHandle(self, address, sender)

    def call(self, address: str, method: str, *args: Any, sender: str) -> Any:
        """Call a public ``method`` on the contract at ``address`` as ``sender``."""
        sender = to_address(sender)
        target = to_address(address)
        with self.transaction(sender):
            return self._dispatch(sender, target, method, args)

    # ---- services used by Contract ----
    def current_sender(self) -> str:
        if not self._frames:
            raise RuntimeError("no call in progress")
        return self._frames[-1].sender

    def current_timestamp(self) -> int:
        if self._tx is None:
            raise RuntimeError("no transaction in progress")
        return self._tx.timestamp

    def current_transaction(self) -> Optional[Transaction]:
        return self._tx

    def emit(self, emitter: str, name: str, args: Dict[str, Any]) -> None:
        if self._tx is None:
            raise RuntimeError("events can only be emitted inside a transaction")
        self._tx.pending.append(PendingEvent(name=name, emitter=emitter, args=dict(args)))

    def internal_call(self, caller: str, target: str, method: str, args: Sequence[Any]) -> Any:
        """Nested call from one contract into another; the callee sees ``caller``."""
        return self._dispatch(caller, to_address(target), method, tuple(args))

    def remove_code(self, address: str) -> None:
        if self._tx is None:
            raise RuntimeError("code can only be removed inside a transaction")
        self._code.pop(address, None)

    # ---- internals ----
    def _dispatch(self, sender: str, target: str, method: str, args: Sequence[Any]) -> Any:
        contract = self._code.get(target)
        if contract is None:
            raise CallFailedError(f"no code at {target}", target)
        fn = self._resolve(contract, method)
        tx = self._tx
        if tx is not None and target not in tx.journal and not is_view(fn):
            tx.journal[target] = contract._export_state()
        self._frames.append(CallFrame(sender=sender, target=target))
        try:
            return fn(*args)
        finally:
            self._frames.pop()

    @staticmethod
    def _resolve(contract: Contract, method: str) -> Any:
        if not method or method.startswith("_"):
            raise CallFailedError(f"function {method!r} is not callable", contract.address)
        if not callable(getattr(type(contract), method, None)):
            raise CallFailedError(
                f"{type(contract).__name__} has no function {method!r}", contract.address
            )
        return getattr(contract, method)

    def _snapshot(self) -> _Journal:
        return _Journal(code=dict(self._code), nonces=dict(self._nonces))

    def _restore(self, journal: _Journal, tx: Transaction) -> None:
        self._code = journal.code
        self._nonces = journal.nonces
        for addr, state in tx.journal.items():
            # contracts deployed by the failed transaction are simply dropped
            contract = journal.code.get(addr)
            if contract is not None:
                contract._import_state(state)


__all__ = ["Runtime", "Transaction", "CallFrame"]
