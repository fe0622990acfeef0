"""Base shared constants for the plugin registry layer.

Central location to avoid scattering magic numbers and sentinel strings across
the runtime, the registry and the plugins.
"""
from __future__ import annotations

# Unsigned machine word used for plugin inputs, results, factors and balances
WORD_BITS = 256
WORD_MAX = (1 << WORD_BITS) - 1

# Addresses are 20 bytes rendered as lowercase 0x-prefixed hex
ADDRESS_BYTES = 20
NULL_ADDRESS = "0x" + "00" * ADDRESS_BYTES

# Standard revert message for dispatch against an unknown plugin id
PLUGIN_DOES_NOT_EXIST = "plugin does not exist"

__all__ = [
    "WORD_BITS",
    "WORD_MAX",
    "ADDRESS_BYTES",
    "NULL_ADDRESS",
    "PLUGIN_DOES_NOT_EXIST",
]
