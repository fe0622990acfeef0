"""Plugin capability and the registry/dispatcher contract."""

from .base import PluginCapability, PluginEntry
from .registry import PluginRegistry

__all__ = ["PluginCapability", "PluginEntry", "PluginRegistry"]
