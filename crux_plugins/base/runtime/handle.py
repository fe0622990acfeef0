"""Caller-bound proxies for deployed contracts.

A :class:`ContractHandle` pairs a contract address with a sender account.
Attribute access returns a function that performs a top-level runtime call
as that sender, so ``core.add_plugin(addr)`` reads like the contract method
while still running through transactions, attribution and rollback.
``core.connect(user)`` returns a handle for the same contract bound to a
different sender.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .contract import Contract
    from .runtime import Runtime


class ContractHandle:
    """Proxy calling a deployed contract as a fixed sender."""

    __slots__ = ("_runtime", "_address", "_sender")

    def __init__(self, runtime: "Runtime", address: str, sender: str) -> None:
        self._runtime = runtime
        self._address = address
        self._sender = sender

    @property
    def address(self) -> str:
        return self._address

    @property
    def sender(self) -> str:
        return self._sender

    @property
    def runtime(self) -> "Runtime":
        return self._runtime

    @property
    def contract(self) -> Optional["Contract"]:
        """The deployed object, or ``None`` once its code is gone."""
        return self._runtime.code_at(self._address)

    def connect(self, sender: str) -> "ContractHandle":
        return ContractHandle(self._runtime, self._address, sender)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)

        def _invoke(*args: Any) -> Any:
            return self._runtime.call(self._address, name, *args, sender=self._sender)

        _invoke.__name__ = name
        return _invoke

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContractHandle):
            return NotImplemented
        return self._runtime is other._runtime and self._address == other._address and self._sender == other._sender

    def __hash__(self) -> int:
        return hash((id(self._runtime), self._address, self._sender))

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"ContractHandle(address={self._address!r}, sender={self._sender!r})"


__all__ = ["ContractHandle"]
