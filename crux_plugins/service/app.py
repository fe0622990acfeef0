from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from crux_plugins.base.errors import ContractError
from crux_plugins.config.defaults import EVENTS_DEFAULT_LIMIT, EVENTS_MAX_LIMIT
from crux_plugins.config.env import PluginSettings, load_settings
from crux_plugins.di import PluginsContainer, build_container

from .app_parts.app_core import (
    AddressBody,
    ExecuteBody,
    VaultBody,
    call_contract,
    contract_error_response,
    get_caller_dep,
    get_container_dep,
    vault_info_payload,
)


def create_app(
    container: Optional[PluginsContainer] = None,
    settings: Optional[PluginSettings] = None,
) -> FastAPI:
    """Build the registry HTTP app.

    When ``container`` is omitted one is built here from ``settings`` (or the
    environment) and kept for the app's lifetime; it deploys lazily on the
    first request that needs a contract.
    """
    settings = settings or (container.settings if container is not None else load_settings())
    app = FastAPI(title="Plugin Registry Service", version="0.1.0")
    app.state.settings = settings
    app.state.container = container or build_container(settings=settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ContractError, contract_error_response)

    # -----------------------------------------------------------------------
    # Health and deployment
    # -----------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        return {"ok": True}

    @app.get("/api/deployment")
    def deployment(c: PluginsContainer = Depends(get_container_dep)) -> Dict[str, Any]:
        """Addresses of the deployed contracts and the owner account."""
        return {"ok": True, **c.describe()}

    # -----------------------------------------------------------------------
    # Registry
    # -----------------------------------------------------------------------

    @app.get("/api/plugins")
    def list_plugins(c: PluginsContainer = Depends(get_container_dep)) -> Dict[str, Any]:
        registry = c.registry()
        return {
            "ok": True,
            "count": registry.get_plugin_count(),
            "plugins": [{"plugin_id": e.plugin_id, "address": e.address} for e in registry.list_plugins()],
        }

    @app.post("/api/plugins")
    def add_plugin(
        body: AddressBody,
        c: PluginsContainer = Depends(get_container_dep),
        caller: str = Depends(get_caller_dep),
    ) -> Dict[str, Any]:
        plugin_id = call_contract(c.registry(caller).add_plugin, body.address)
        return {"ok": True, "plugin_id": plugin_id}

    @app.get("/api/plugins/{plugin_id}")
    def get_plugin(plugin_id: int, c: PluginsContainer = Depends(get_container_dep)) -> Dict[str, Any]:
        return {"ok": True, "plugin_id": plugin_id, "address": c.registry().get_plugin_address(plugin_id)}

    @app.put("/api/plugins/{plugin_id}")
    def update_plugin(
        plugin_id: int,
        body: AddressBody,
        c: PluginsContainer = Depends(get_container_dep),
        caller: str = Depends(get_caller_dep),
    ) -> Dict[str, Any]:
        call_contract(c.registry(caller).update_plugin, plugin_id, body.address)
        return {"ok": True, "plugin_id": plugin_id, "address": c.registry().get_plugin_address(plugin_id)}

    @app.delete("/api/plugins/{plugin_id}")
    def remove_plugin(
        plugin_id: int,
        c: PluginsContainer = Depends(get_container_dep),
        caller: str = Depends(get_caller_dep),
    ) -> Dict[str, Any]:
        call_contract(c.registry(caller).remove_plugin, plugin_id)
        return {"ok": True, "plugin_id": plugin_id}

    @app.post("/api/plugins/{plugin_id}/execute")
    def execute_plugin(
        plugin_id: int,
        body: ExecuteBody,
        c: PluginsContainer = Depends(get_container_dep),
        caller: str = Depends(get_caller_dep),
    ) -> Dict[str, Any]:
        """Dispatch ``body.input`` to the plugin; any caller may do this."""
        result = call_contract(c.registry(caller).execute_plugin, plugin_id, body.input)
        return {"ok": True, "plugin_id": plugin_id, "result": result}

    # -----------------------------------------------------------------------
    # Bundled plugins
    # -----------------------------------------------------------------------

    @app.get("/api/arithmetic/factor")
    def arithmetic_factor(c: PluginsContainer = Depends(get_container_dep)) -> Dict[str, Any]:
        return {"ok": True, "factor": c.arithmetic().get_factor()}

    @app.get("/api/arithmetic/calculate")
    def arithmetic_calculate(
        input: int = Query(...),
        c: PluginsContainer = Depends(get_container_dep),
    ) -> Dict[str, Any]:
        return {"ok": True, "input": input, "result": call_contract(c.arithmetic().calculate_result, input)}

    @app.get("/api/vaults/count")
    def vault_count(c: PluginsContainer = Depends(get_container_dep)) -> Dict[str, Any]:
        return {"ok": True, "count": c.vault().get_vault_count()}

    @app.get("/api/vaults/{vault_id}")
    def vault_info(vault_id: int, c: PluginsContainer = Depends(get_container_dep)) -> Dict[str, Any]:
        info = call_contract(c.vault().get_vault_info, vault_id)
        return {"ok": True, **vault_info_payload(vault_id, info)}

    @app.post("/api/vaults")
    def create_vault(
        body: VaultBody,
        c: PluginsContainer = Depends(get_container_dep),
        caller: str = Depends(get_caller_dep),
    ) -> Dict[str, Any]:
        """Create a vault owned by the caller, bypassing the registry."""
        vault_id = call_contract(c.vault(caller).create_vault_direct, body.initial_balance)
        return {"ok": True, "vault_id": vault_id}

    # -----------------------------------------------------------------------
    # Audit log
    # -----------------------------------------------------------------------

    @app.get("/api/events")
    def list_events(
        name: Optional[str] = None,
        limit: int = Query(EVENTS_DEFAULT_LIMIT, ge=1, le=EVENTS_MAX_LIMIT),
        c: PluginsContainer = Depends(get_container_dep),
    ) -> Dict[str, Any]:
        """Most recent committed events, oldest first."""
        events = c.runtime().events.filter(name=name)[-limit:]
        return {"ok": True, "events": [e.to_dict() for e in events]}

    return app


app = create_app()

__all__ = ["app", "create_app"]
