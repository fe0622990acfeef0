"""Unified contract error taxonomy public surface.

This module re-exports the implementations under
``crux_plugins.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.contract_error import ContractError
from .errors_parts.classification import classify_exception
from .errors_parts.kinds import (
    ArithmeticOverflowError,
    CallFailedError,
    InvalidAddressError,
    InvalidConfigError,
    InvalidInputError,
    InvalidPluginError,
    NotFoundError,
    ReentrantCallError,
    UnauthorizedError,
)

__all__ = [
    "ErrorCode",
    "ContractError",
    "classify_exception",
    "ArithmeticOverflowError",
    "CallFailedError",
    "InvalidAddressError",
    "InvalidConfigError",
    "InvalidInputError",
    "InvalidPluginError",
    "NotFoundError",
    "ReentrantCallError",
    "UnauthorizedError",
]
