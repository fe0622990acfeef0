"""
Structured contract error exception type.

Every failure raised by the runtime, the registry or a bundled plugin is a
`ContractError` carrying a normalized `ErrorCode`, so callers can assert on
the specific condition instead of a generic failure.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class ContractError(Exception):
    """Represents a structured contract error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable revert reason suitable for logging.
        contract: Address of the contract that raised, when known.
    """

    code: ErrorCode
    message: str
    contract: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining contract, code, and message."""
        return f"{self.contract or '-'} {self.code.value}: {self.message}"


__all__ = ["ContractError"]
