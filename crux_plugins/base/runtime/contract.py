"""Base class for code deployed on a :class:`~crux_plugins.base.runtime.Runtime`.

A contract is an ordinary Python object whose persistent state is declared in
``__state__`` (attribute names, accumulated across the MRO). The runtime
journals those attributes the first time a transaction calls a non-view
function on the contract and restores them if the transaction fails, so
contracts never manage rollback themselves.

Functions marked with :func:`view` promise not to write state; calling them
never journals anything. Fields listed in ``__flat_state__`` hold containers
of immutable values (ints, strings, named tuples) and are journaled with a
shallow copy instead of a deep one.

Public methods (no leading underscore) form the callable surface; everything
prefixed with ``_`` is internal and cannot be reached through the runtime.
"""
from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple, TypeVar

from ..constants import WORD_MAX
from ..errors import ArithmeticOverflowError, InvalidInputError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .runtime import Runtime

F = TypeVar("F", bound=Callable[..., Any])


def view(fn: F) -> F:
    """Mark a contract function as read-only."""
    fn.__contract_view__ = True  # type: ignore[attr-defined]
    return fn


def is_view(fn: Any) -> bool:
    return bool(getattr(fn, "__contract_view__", False))


class Contract:
    """Deployed code with caller attribution, events and journaled state."""

    __state__: Tuple[str, ...] = ()
    __flat_state__: Tuple[str, ...] = ()

    _runtime: "Runtime"
    _address: str

    def _bind(self, runtime: "Runtime", address: str) -> None:
        """Attach the runtime and address before the constructor runs."""
        self._runtime = runtime
        self._address = address

    # ---- environment ----
    @property
    def address(self) -> str:
        return self._address

    @property
    def msg_sender(self) -> str:
        """Immediate caller of the currently executing function."""
        return self._runtime.current_sender()

    @property
    def now(self) -> int:
        """Timestamp of the enclosing transaction (epoch seconds)."""
        return self._runtime.current_timestamp()

    # ---- effects ----
    def _emit(self, name: str, **args: Any) -> None:
        self._runtime.emit(self._address, name, args)

    def _call(self, target: str, method: str, *args: Any) -> Any:
        """Call ``method`` on the contract at ``target`` as this contract."""
        return self._runtime.internal_call(self._address, target, method, args)

    def _has_code(self, address: str) -> bool:
        return self._runtime.has_code(address)

    def _code_at(self, address: str) -> Optional["Contract"]:
        return self._runtime.code_at(address)

    def _self_destruct(self) -> None:
        """Remove this contract's code from the runtime (rolled back on failure)."""
        self._runtime.remove_code(self._address)

    # ---- checked word arithmetic ----
    def _require_word(self, value: Any, name: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError(f"{name} must be an integer, got {type(value).__name__}", self._address)
        if value < 0 or value > WORD_MAX:
            raise InvalidInputError(f"{name} out of range for an unsigned 256-bit word", self._address)
        return value

    def _checked_mul(self, a: int, b: int) -> int:
        product = a * b
        if product > WORD_MAX:
            raise ArithmeticOverflowError(f"{a} * {b} overflows an unsigned 256-bit word", self._address)
        return product

    # ---- journal support ----
    @classmethod
    def _declared(cls, attr: str) -> Tuple[str, ...]:
        names: list[str] = []
        for klass in reversed(cls.__mro__):
            for name in klass.__dict__.get(attr, ()):
                if name not in names:
                    names.append(name)
        return tuple(names)

    @classmethod
    def _state_fields(cls) -> Tuple[str, ...]:
        return cls._declared("__state__")

    def _export_state(self) -> Dict[str, Any]:
        flat = self._declared("__flat_state__")
        state: Dict[str, Any] = {}
        for name in self._state_fields():
            if not hasattr(self, name):
                continue
            value = getattr(self, name)
            state[name] = copy.copy(value) if name in flat else copy.deepcopy(value)
        return state

    def _import_state(self, state: Dict[str, Any]) -> None:
        for name in self._state_fields():
            if name in state:
                setattr(self, name, state[name])
            elif hasattr(self, name):
                delattr(self, name)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        address = getattr(self, "_address", None)
        return f"<{type(self).__name__} at {address}>"


__all__ = ["Contract", "view", "is_view"]
