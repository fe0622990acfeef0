"""Minimal dependency injection container for the plugin registry.

Goals:
- Centralize construction of the runtime, the deployed contracts and the
  optional SQLite audit sink.
- Keep the service and CLI free of wiring code: both ask the container for
  handles instead of deploying anything themselves.

Nothing here is a module-level singleton; callers own the container.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional

from ..base.logging import get_logger
from ..base.runtime import ContractHandle, Runtime, account_address
from ..config.defaults import ANONYMOUS_CALLER_LABEL
from ..config.env import PluginSettings, load_settings
from ..persistence.sqlite import SqliteEventSink
from ..service.deploy import DeploymentResult, deploy_system


class PluginsContainer:
    """Dependency injection container for one deployed registry system.

    The runtime and the deployment are created lazily on first use and
    cached for the container's lifetime. Creation is guarded by a lock, so
    concurrent first requests share one runtime and one deployment.
    """

    def __init__(self, settings: PluginSettings | None = None, runtime: Runtime | None = None) -> None:
        """Initialize the container.

        Args:
            settings: Resolved settings; loaded from the environment when omitted.
            runtime: Pre-built runtime (e.g. one driven by a ``ManualClock``).
        """
        self.settings = settings or load_settings()
        self._runtime = runtime
        self._deployment: Optional[DeploymentResult] = None
        self._sink: Optional[SqliteEventSink] = None
        self._unsubscribe = None
        self._lock = threading.RLock()
        self.logger = get_logger("plugins.di")

    # ---- Shared singletons ----
    def runtime(self) -> Runtime:
        if self._runtime is None:
            with self._lock:
                if self._runtime is None:
                    self._runtime = Runtime()
        return self._runtime

    def owner(self) -> str:
        """Address of the owner account derived from ``settings.owner_label``."""
        return account_address(self.settings.owner_label)

    def anonymous(self) -> str:
        return account_address(ANONYMOUS_CALLER_LABEL)

    def event_sink(self) -> Optional[SqliteEventSink]:
        """Return the SQLite sink when ``events_db`` is configured, attaching it once."""
        if self._sink is None and self.settings.events_db:
            with self._lock:
                if self._sink is None:
                    sink = SqliteEventSink(self.settings.events_db)
                    self._unsubscribe = self.runtime().events.subscribe(sink)
                    self._sink = sink
        return self._sink

    def deployment(self) -> DeploymentResult:
        """Deploy the registry and both plugins on first call; reuse afterwards."""
        if self._deployment is None:
            with self._lock:
                if self._deployment is None:
                    self.event_sink()
                    self._deployment = deploy_system(
                        self.runtime(),
                        self.owner(),
                        factor=self.settings.factor,
                        strict_plugins=self.settings.strict_plugins,
                    )
        return self._deployment

    # ---- Handles ----
    def registry(self, sender: str | None = None) -> ContractHandle:
        return self._bind(self.deployment().registry, sender)

    def arithmetic(self, sender: str | None = None) -> ContractHandle:
        return self._bind(self.deployment().arithmetic, sender)

    def vault(self, sender: str | None = None) -> ContractHandle:
        return self._bind(self.deployment().vault, sender)

    def describe(self) -> Dict[str, Any]:
        return self.deployment().to_dict()

    @staticmethod
    def _bind(handle: ContractHandle, sender: str | None) -> ContractHandle:
        return handle if sender is None else handle.connect(sender)

    def close(self) -> None:
        """Detach and close the SQLite sink, if any."""
        with self._lock:
            if self._unsubscribe is not None:
                self._unsubscribe()
                self._unsubscribe = None
            if self._sink is not None:
                self._sink.close()
                self._sink = None


def build_container(settings: PluginSettings | None = None, runtime: Runtime | None = None) -> PluginsContainer:
    """Construct and return a new :class:`PluginsContainer`."""
    return PluginsContainer(settings=settings, runtime=runtime)


__all__ = ["PluginsContainer", "build_container"]
