"""
Plugins Base Package

Everything the registry and the bundled plugins are built on:

- Runtime: execution substrate (addresses, transactions, events, clock)
- Errors: normalized contract error taxonomy
- Access: owner gating and reentrancy detection
- Plugins: the plugin capability protocol and the registry/dispatcher
- Logging: structured JSON logging helpers
"""

from .errors import ContractError, ErrorCode, classify_exception
from .plugins import PluginCapability, PluginEntry, PluginRegistry
from .runtime import ContractHandle, Runtime

__all__ = [
    "ContractError",
    "ErrorCode",
    "classify_exception",
    "PluginCapability",
    "PluginEntry",
    "PluginRegistry",
    "ContractHandle",
    "Runtime",
]
