"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `crux_plugins.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .contract_error import ContractError
from .classification import classify_exception
from .kinds import (
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
