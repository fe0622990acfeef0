"""Execution runtime: addresses, clocks, events, contracts and transactions.

The registry and plugins are written against this package only; it stands in
for the platform that attributes callers, rolls back failed operations,
answers code-presence queries, stamps time and publishes audit events.
"""

from .address import NULL_ADDRESS, account_address, contract_address, is_null, to_address
from .clock import ManualClock, MonotonicClock
from .contract import Contract, is_view, view
from .events import Event, EventLog, EventSubscriber, PendingEvent
from .handle import ContractHandle
from .runtime import CallFrame, Runtime, Transaction

__all__ = [
    "NULL_ADDRESS",
    "account_address",
    "contract_address",
    "is_null",
    "to_address",
    "ManualClock",
    "MonotonicClock",
    "Contract",
    "view",
    "is_view",
    "Event",
    "EventLog",
    "EventSubscriber",
    "PendingEvent",
    "ContractHandle",
    "CallFrame",
    "Runtime",
    "Transaction",
]
