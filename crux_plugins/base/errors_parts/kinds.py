"""
Concrete error kinds, one subclass of :class:`ContractError` per code.

Subclasses fix the ``code`` so call sites raise ``NotFoundError(...)`` and
tests use ``pytest.raises(NotFoundError)``. The ``code`` attribute stays
available for code-based handling (HTTP mapping, logs).
"""
from __future__ import annotations

from typing import Optional

from .contract_error import ContractError
from .error_code import ErrorCode


class UnauthorizedError(ContractError):
    """Caller is not the owner of an owner-gated operation."""

    def __init__(self, account: str, contract: Optional[str] = None) -> None:
        super().__init__(ErrorCode.UNAUTHORIZED, f"unauthorized account {account}", contract)
        self.account = account


class InvalidAddressError(ContractError):
    """A null or malformed address was supplied."""

    def __init__(self, message: str = "invalid address", contract: Optional[str] = None) -> None:
        super().__init__(ErrorCode.INVALID_ADDRESS, message, contract)


class InvalidPluginError(ContractError):
    """The address does not host deployed plugin code."""

    def __init__(self, message: str = "invalid plugin", contract: Optional[str] = None) -> None:
        super().__init__(ErrorCode.INVALID_PLUGIN, message, contract)


class NotFoundError(ContractError):
    """Referenced plugin or vault id does not exist or was removed."""

    def __init__(self, message: str = "not found", contract: Optional[str] = None) -> None:
        super().__init__(ErrorCode.NOT_FOUND, message, contract)


class InvalidConfigError(ContractError):
    """A construction-time parameter violates a precondition."""

    def __init__(self, message: str = "invalid config", contract: Optional[str] = None) -> None:
        super().__init__(ErrorCode.INVALID_CONFIG, message, contract)


class InvalidInputError(ContractError):
    """A call argument is outside the unsigned word domain."""

    def __init__(self, message: str = "invalid input", contract: Optional[str] = None) -> None:
        super().__init__(ErrorCode.INVALID_INPUT, message, contract)


class ArithmeticOverflowError(ContractError):
    """Checked arithmetic left the unsigned word domain."""

    def __init__(self, message: str = "arithmetic overflow", contract: Optional[str] = None) -> None:
        super().__init__(ErrorCode.OVERFLOW, message, contract)


class ReentrantCallError(ContractError):
    """A guarded operation was re-entered while still running."""

    def __init__(self, message: str = "reentrant call", contract: Optional[str] = None) -> None:
        super().__init__(ErrorCode.REENTRANT_CALL, message, contract)


class CallFailedError(ContractError):
    """A call reached no code, an unknown function, or got a malformed result."""

    def __init__(self, message: str = "call failed", contract: Optional[str] = None) -> None:
        super().__init__(ErrorCode.CALL_FAILED, message, contract)


__all__ = [
    "UnauthorizedError",
    "InvalidAddressError",
    "InvalidPluginError",
    "NotFoundError",
    "InvalidConfigError",
    "InvalidInputError",
    "ArithmeticOverflowError",
    "ReentrantCallError",
    "CallFailedError",
]
