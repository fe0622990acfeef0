"""Deployment routine for the registry and the bundled plugins.

Deploys, in order, the registry, the arithmetic plugin and the vault plugin
as the owner account, then registers the arithmetic plugin (id 0) and the
vault plugin (id 1). Everything runs in one transaction: if any step fails,
nothing is deployed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..base.logging import LogContext, get_logger, log_event
from ..base.plugins import PluginRegistry
from ..base.runtime import ContractHandle, Runtime, to_address
from ..config.defaults import DEFAULT_ARITHMETIC_FACTOR
from ..plugins import ArithmeticPlugin, VaultPlugin

logger = get_logger("plugins.deploy")

ARITHMETIC_PLUGIN_ID = 0
VAULT_PLUGIN_ID = 1


@dataclass(frozen=True)
class DeploymentResult:
    """Handles for a deployed system, all bound to the owner account."""

    owner: str
    registry: ContractHandle
    arithmetic: ContractHandle
    vault: ContractHandle
    plugin_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self.owner,
            "registry": self.registry.address,
            "arithmetic": self.arithmetic.address,
            "vault": self.vault.address,
            "plugin_count": self.plugin_count,
        }


def deploy_system(
    runtime: Runtime,
    owner: str,
    *,
    factor: int = DEFAULT_ARITHMETIC_FACTOR,
    strict_plugins: bool = False,
) -> DeploymentResult:
    """Deploy and wire the registry with both bundled plugins.

    Raises:
        InvalidConfigError: when ``factor`` is not a positive word.
    """
    owner = to_address(owner)
    with runtime.transaction(owner):
        registry = runtime.deploy(PluginRegistry, strict_plugins, sender=owner)
        arithmetic = runtime.deploy(ArithmeticPlugin, factor, sender=owner)
        vault = runtime.deploy(VaultPlugin, sender=owner)
        registry.add_plugin(arithmetic.address)
        registry.add_plugin(vault.address)
        plugin_count = registry.get_plugin_count()
    result = DeploymentResult(
        owner=owner,
        registry=registry,
        arithmetic=arithmetic,
        vault=vault,
        plugin_count=plugin_count,
    )
    log_event(
        logger,
        "deploy.completed",
        LogContext(contract=registry.address, caller=owner),
        arithmetic=arithmetic.address,
        vault=vault.address,
        plugin_count=plugin_count,
    )
    return result


__all__ = ["ARITHMETIC_PLUGIN_ID", "VAULT_PLUGIN_ID", "DeploymentResult", "deploy_system"]
