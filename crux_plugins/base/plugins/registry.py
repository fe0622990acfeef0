"""Plugin registry and dispatcher contract.

Owns the table mapping dense integer plugin ids to plugin contract addresses
and forwards ``execute_plugin`` calls to the selected plugin.

Lifecycle
---------
- ``add_plugin`` assigns ids 0, 1, 2, ... in call order. The counter is also
  the value of ``get_plugin_count`` and never goes down.
- ``update_plugin`` swaps the address of a live slot in place.
- ``remove_plugin`` clears a slot; its id is never handed out again.

Trust boundary
--------------
Registration only checks that the address hosts deployed code (plus, when
``require_capability`` is set, that the code exposes ``perform_action``).
Nothing is re-validated at dispatch: if the plugin's code disappears or does
not conform, the dispatch call itself fails. Plugin failures are never caught
here; they reach the caller unchanged and roll the transaction back.

Reentrancy
----------
The four entry points share one reentrancy flag. A plugin that calls back
into any of them while being dispatched fails with ``ReentrantCallError``.
Read-only functions stay callable.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..access import Ownable, ReentrancyGuard, non_reentrant, only_owner
from ..constants import NULL_ADDRESS, PLUGIN_DOES_NOT_EXIST, WORD_MAX
from ..errors import CallFailedError, InvalidAddressError, InvalidPluginError, NotFoundError
from ..logging import LogContext, get_logger, log_event
from ..runtime import is_null, to_address, view
from .base import PluginCapability, PluginEntry


def _is_plugin_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class PluginRegistry(ReentrancyGuard, Ownable):
    """Owner-managed table of plugins with open dispatch.

    Attributes:
        _plugins: Live slots, plugin id -> plugin address.
        _plugin_count: Ids assigned so far (next id to assign).
        _require_capability: Whether registration also checks for ``perform_action``.
    """

    __state__ = ("_plugins", "_plugin_count")
    __flat_state__ = ("_plugins",)

    def __init__(self, require_capability: bool = False) -> None:
        super().__init__()
        self._plugins: Dict[int, str] = {}
        self._plugin_count = 0
        self._require_capability = bool(require_capability)
        self.logger = get_logger("plugins.registry")

    # ---- owner-gated mutators ----
    @non_reentrant
    @only_owner
    def add_plugin(self, plugin_address: str) -> int:
        """Register ``plugin_address`` under the next id and return that id."""
        address = self._validate_plugin(plugin_address)
        plugin_id = self._plugin_count
        self._plugins[plugin_id] = address
        self._plugin_count += 1
        self._emit("PluginAdded", plugin_id=plugin_id, plugin_address=address)
        log_event(self.logger, "registry.plugin_added", self._ctx(plugin_id), plugin_address=address)
        return plugin_id

    @non_reentrant
    @only_owner
    def update_plugin(self, plugin_id: int, new_address: str) -> None:
        """Point the live slot ``plugin_id`` at ``new_address``."""
        old_address = self._live_slot(plugin_id)
        address = self._validate_plugin(new_address)
        self._plugins[plugin_id] = address
        self._emit("PluginUpdated", plugin_id=plugin_id, old_address=old_address, new_address=address)
        log_event(
            self.logger,
            "registry.plugin_updated",
            self._ctx(plugin_id),
            old_address=old_address,
            new_address=address,
        )

    @non_reentrant
    @only_owner
    def remove_plugin(self, plugin_id: int) -> None:
        """Clear the live slot ``plugin_id``; the id is retired for good."""
        address = self._live_slot(plugin_id)
        del self._plugins[plugin_id]
        self._emit("PluginRemoved", plugin_id=plugin_id, plugin_address=address)
        log_event(self.logger, "registry.plugin_removed", self._ctx(plugin_id), plugin_address=address)

    # ---- dispatch ----
    @non_reentrant
    def execute_plugin(self, plugin_id: int, value: int) -> int:
        """Forward ``value`` to the plugin at ``plugin_id`` and return its result.

        Open to any caller. The plugin sees this registry as its caller.
        """
        target = self._plugins.get(plugin_id) if _is_plugin_id(plugin_id) else None
        if target is None:
            raise NotFoundError(PLUGIN_DOES_NOT_EXIST, self.address)
        value = self._require_word(value, "input")
        result = self._call(target, "perform_action", value)
        if isinstance(result, bool) or not isinstance(result, int) or not 0 <= result <= WORD_MAX:
            raise CallFailedError(f"plugin {plugin_id} returned a malformed result {result!r}", self.address)
        self._emit("PluginExecuted", plugin_id=plugin_id, input=value, result=result)
        log_event(self.logger, "registry.plugin_executed", self._ctx(plugin_id), input=value, result=result)
        return result

    # ---- reads ----
    @view
    def get_plugin_address(self, plugin_id: int) -> str:
        """Return the plugin address, or the null address when the slot is empty."""
        if not _is_plugin_id(plugin_id):
            return NULL_ADDRESS
        return self._plugins.get(plugin_id, NULL_ADDRESS)

    @view
    def get_plugin_count(self) -> int:
        """Return how many ids have ever been assigned (not the live count)."""
        return self._plugin_count

    @view
    def list_plugins(self) -> List[PluginEntry]:
        """Return the live slots in ascending id order."""
        return [PluginEntry(plugin_id=i, address=a) for i, a in sorted(self._plugins.items())]

    # ---- helpers ----
    def _live_slot(self, plugin_id: Any) -> str:
        address = self._plugins.get(plugin_id) if _is_plugin_id(plugin_id) else None
        if address is None:
            raise NotFoundError(PLUGIN_DOES_NOT_EXIST, self.address)
        return address

    def _validate_plugin(self, candidate: Any) -> str:
        try:
            address = to_address(candidate)
        except InvalidAddressError as exc:
            raise InvalidAddressError(exc.message, self.address) from exc
        if is_null(address):
            raise InvalidAddressError("plugin address cannot be the zero address", self.address)
        if not self._has_code(address):
            raise InvalidPluginError(f"no deployed code at {address}", self.address)
        if self._require_capability and not isinstance(self._code_at(address), PluginCapability):
            raise InvalidPluginError(f"code at {address} does not implement perform_action", self.address)
        return address

    def _ctx(self, plugin_id: int) -> LogContext:
        tx = self._runtime.current_transaction()
        return LogContext(
            contract=self.address,
            caller=self.msg_sender,
            tx_id=tx.tx_id if tx else None,
            plugin_id=plugin_id,
        )


__all__ = ["PluginRegistry"]
