"""crux_plugins package

Owner-managed plugin registry with open dispatch, plus two bundled plugins
(an arithmetic multiplier and a creation-only vault ledger), running on an
in-process execution runtime.

Public API (re-exported):
    - Version: ``__version__``
    - Runtime: :class:`Runtime`, :class:`ContractHandle`, :func:`account_address`
    - Contracts: :class:`PluginRegistry`, :class:`ArithmeticPlugin`, :class:`VaultPlugin`
    - Errors: :class:`ContractError`, :class:`ErrorCode`
    - Deployment: :func:`deploy_system`
"""

from .base.errors import ContractError, ErrorCode
from .base.plugins import PluginRegistry
from .base.runtime import ContractHandle, Runtime, account_address
from .plugins import ArithmeticPlugin, VaultPlugin
from .service.deploy import deploy_system

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ContractError",
    "ErrorCode",
    "PluginRegistry",
    "ContractHandle",
    "Runtime",
    "account_address",
    "ArithmeticPlugin",
    "VaultPlugin",
    "deploy_system",
]
