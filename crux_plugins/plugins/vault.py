"""Vault plugin: a creation-only ledger.

Each ``perform_action`` (or ``create_vault_direct``) call appends one vault
record owned by the immediate caller. When the call arrives through the
registry, the immediate caller is the registry itself; the plugin cannot see
who started the transaction. Records are never modified after creation.
"""
from __future__ import annotations

from typing import List, NamedTuple

from ..base.errors import NotFoundError
from ..base.runtime import Contract, view


class VaultInfo(NamedTuple):
    """Immutable snapshot of a vault record."""

    owner: str
    balance: int
    active: bool
    creation_time: int


class VaultPlugin(Contract):
    """Plugin creating vaults with dense, never-reused ids."""

    __state__ = ("_vaults",)
    __flat_state__ = ("_vaults",)

    def __init__(self) -> None:
        self._vaults: List[VaultInfo] = []

    def perform_action(self, value: int) -> int:
        vault_id = self._create_vault(value)
        self._emit("ActionPerformed", caller=self.msg_sender, input=value, result=vault_id)
        return vault_id

    def create_vault_direct(self, initial_balance: int) -> int:
        return self._create_vault(initial_balance)

    @view
    def get_vault_info(self, vault_id: int) -> VaultInfo:
        if isinstance(vault_id, bool) or not isinstance(vault_id, int) or vault_id < 0 or vault_id >= len(self._vaults):
            raise NotFoundError(f"vault {vault_id!r} does not exist", self.address)
        return self._vaults[vault_id]

    @view
    def get_vault_count(self) -> int:
        return len(self._vaults)

    def _create_vault(self, balance: int) -> int:
        balance = self._require_word(balance, "balance")
        vault_id = len(self._vaults)
        owner = self.msg_sender
        self._vaults.append(VaultInfo(owner=owner, balance=balance, active=True, creation_time=self.now))
        self._emit("VaultCreated", vault_id=vault_id, owner=owner, balance=balance)
        return vault_id


__all__ = ["VaultInfo", "VaultPlugin"]
