"""
Error classification helper mapping exceptions to normalized ErrorCode values.

The registry never translates plugin failures: whatever a plugin raises
reaches the caller unchanged. Observers (logging, the HTTP layer, the CLI)
still need a stable code for such failures, which this module provides.
"""
from __future__ import annotations

from .contract_error import ContractError
from .error_code import ErrorCode


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ContractError passthrough.
        2. Python arithmetic failures map to ``OVERFLOW``.
        3. Any other ``Exception`` is a foreign plugin failure.
        4. ``UNKNOWN`` for non-``Exception`` base exceptions.
    """
    if isinstance(exc, ContractError):
        return exc.code
    if isinstance(exc, ArithmeticError):
        return ErrorCode.OVERFLOW
    if isinstance(exc, Exception):
        return ErrorCode.PLUGIN_FAILURE
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception"]
