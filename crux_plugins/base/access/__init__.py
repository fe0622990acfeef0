"""Access control helpers: owner gating and reentrancy detection."""

from .ownable import Ownable, only_owner
from .reentrancy import ReentrancyGuard, non_reentrant

__all__ = ["Ownable", "only_owner", "ReentrancyGuard", "non_reentrant"]
