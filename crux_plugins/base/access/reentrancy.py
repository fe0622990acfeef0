"""Reentrancy detection for contract entry points.

Functions decorated with :func:`non_reentrant` share one flag per contract:
while any of them is executing, entering any of them again (directly or via a
callee calling back) raises :class:`ReentrantCallError`. The error unwinds the
whole transaction, so the outer call fails too and nothing is kept.
"""
from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from ..errors import ReentrantCallError
from ..runtime import Contract

F = TypeVar("F", bound=Callable[..., Any])


class ReentrancyGuard(Contract):
    """Contract mixin holding the in-progress flag (not journaled)."""

    def __init__(self) -> None:
        super().__init__()
        self._entered = False


def non_reentrant(fn: F) -> F:
    """Fail with ``ReentrantCallError`` when re-entered during execution."""

    @functools.wraps(fn)
    def wrapper(self: ReentrancyGuard, *args: Any, **kwargs: Any) -> Any:
        if self._entered:
            raise ReentrantCallError(f"reentrant call to {fn.__name__}", self.address)
        self._entered = True
        try:
            return fn(self, *args, **kwargs)
        finally:
            self._entered = False

    return wrapper  # type: ignore[return-value]


__all__ = ["ReentrancyGuard", "non_reentrant"]
