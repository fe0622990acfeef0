"""Single-owner gating for contract mutators.

The owner is the account that deployed the contract (``msg_sender`` during
construction). It is fixed for the life of the contract.
"""
from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from ..errors import UnauthorizedError
from ..runtime import Contract, view

F = TypeVar("F", bound=Callable[..., Any])


class Ownable(Contract):
    """Contract mixin recording its deployer as owner."""

    __state__ = ("_owner",)

    def __init__(self) -> None:
        super().__init__()
        self._owner = self.msg_sender

    @view
    def owner(self) -> str:
        return self._owner

    def _check_owner(self) -> None:
        if self.msg_sender != self._owner:
            raise UnauthorizedError(self.msg_sender, self.address)


def only_owner(fn: F) -> F:
    """Reject callers other than the owner before ``fn`` runs."""

    @functools.wraps(fn)
    def wrapper(self: Ownable, *args: Any, **kwargs: Any) -> Any:
        self._check_owner()
        return fn(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


__all__ = ["Ownable", "only_owner"]
