"""
Normalized contract error codes (taxonomy).

Defines the `ErrorCode` enumeration used across the runtime, the registry and
the plugins. Values are lowercase snake_case and are considered a stable
public contract for logging, HTTP mapping and client assertions.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    UNAUTHORIZED = "unauthorized"
    INVALID_ADDRESS = "invalid_address"
    INVALID_PLUGIN = "invalid_plugin"
    NOT_FOUND = "not_found"
    INVALID_CONFIG = "invalid_config"
    INVALID_INPUT = "invalid_input"
    OVERFLOW = "overflow"
    REENTRANT_CALL = "reentrant_call"
    CALL_FAILED = "call_failed"
    PLUGIN_FAILURE = "plugin_failure"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
