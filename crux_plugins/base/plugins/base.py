"""Base plugin abstractions for the registry.

Defines the single-operation plugin capability and the entry record the
registry hands out when listing its table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class PluginCapability(Protocol):
    """Capability every dispatchable plugin provides.

    Plugins are deployed contracts; the registry only ever calls this one
    function on them, passing an unsigned word and expecting one back.
    """

    def perform_action(self, value: int) -> int:
        """Run the plugin's action for ``value`` and return its result.

        Args:
            value: Unsigned 256-bit input word.

        Returns:
            int: Unsigned 256-bit result word.
        """
        ...


@dataclass(frozen=True)
class PluginEntry:
    """A live registry slot.

    Attributes:
        plugin_id: Dense id assigned at registration.
        address: Address of the plugin contract.
    """

    plugin_id: int
    address: str


__all__ = ["PluginCapability", "PluginEntry"]
