"""Address helpers for the execution runtime.

Addresses are 20-byte identifiers rendered as lowercase ``0x``-prefixed hex.
Accounts (callers without code) are derived from a human label; contract
addresses are derived from the deployer address and its deployment nonce, so
a fresh runtime always hands out the same addresses for the same sequence of
deployments.
"""
from __future__ import annotations

import hashlib
import re

from ..constants import ADDRESS_BYTES, NULL_ADDRESS
from ..errors import InvalidAddressError

_ADDRESS_RE = re.compile(r"^0x[0-9a-f]{%d}$" % (ADDRESS_BYTES * 2))


def _digest_address(seed: str) -> str:
    digest = hashlib.sha256(seed.encode("utf-8")).hexdigest()
    return "0x" + digest[-ADDRESS_BYTES * 2 :]


def to_address(value: object) -> str:
    """Normalize ``value`` to a canonical lowercase address.

    Raises
    ------
    InvalidAddressError
        When ``value`` is not a ``0x``-prefixed 40-hex-digit string.
    """
    if not isinstance(value, str):
        raise InvalidAddressError(f"address must be a string, got {type(value).__name__}")
    candidate = value.strip().lower()
    if not _ADDRESS_RE.match(candidate):
        raise InvalidAddressError(f"malformed address {value!r}")
    return candidate


def is_null(address: str) -> bool:
    """Return True for the null handle."""
    return address == NULL_ADDRESS


def account_address(label: str) -> str:
    """Derive a deterministic account address from a label (e.g. ``"owner"``)."""
    return _digest_address(f"account:{label}")


def contract_address(deployer: str, nonce: int) -> str:
    """Derive the address of the ``nonce``-th contract deployed by ``deployer``."""
    return _digest_address(f"contract:{deployer}:{nonce}")


__all__ = [
    "NULL_ADDRESS",
    "to_address",
    "is_null",
    "account_address",
    "contract_address",
]
