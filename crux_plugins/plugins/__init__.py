"""Bundled plugins implementing the registry's plugin capability."""

from .arithmetic import ArithmeticPlugin
from .vault import VaultInfo, VaultPlugin

__all__ = ["ArithmeticPlugin", "VaultInfo", "VaultPlugin"]
