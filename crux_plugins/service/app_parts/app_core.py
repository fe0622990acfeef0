from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from fastapi import Header, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from crux_plugins.base.errors import ContractError, ErrorCode, classify_exception
from crux_plugins.base.logging import LogContext, get_logger, log_event
from crux_plugins.base.runtime import to_address
from crux_plugins.config.defaults import CALLER_HEADER
from crux_plugins.di import PluginsContainer

logger = get_logger("plugins.service")

# ErrorCode -> HTTP status
ERROR_STATUS: Dict[ErrorCode, int] = {
    ErrorCode.UNAUTHORIZED: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INVALID_ADDRESS: 400,
    ErrorCode.INVALID_PLUGIN: 400,
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.INVALID_CONFIG: 400,
    ErrorCode.OVERFLOW: 422,
    ErrorCode.REENTRANT_CALL: 409,
    ErrorCode.CALL_FAILED: 502,
    ErrorCode.PLUGIN_FAILURE: 500,
    ErrorCode.UNKNOWN: 500,
}


class AddressBody(BaseModel):
    """Request body naming a plugin contract address."""

    address: str


class ExecuteBody(BaseModel):
    """Request body for dispatching a value to a plugin."""

    input: int


class VaultBody(BaseModel):
    """Request body for direct vault creation."""

    initial_balance: int


def get_container_dep(request: Request) -> PluginsContainer:
    """FastAPI dependency returning the container built by ``create_app``."""
    return request.app.state.container


def get_caller_dep(
    request: Request,
    x_caller: Optional[str] = Header(default=None, alias=CALLER_HEADER),
) -> str:
    """Resolve the calling account: the header address, else the anonymous account."""
    if x_caller is None or not x_caller.strip():
        return get_container_dep(request).anonymous()
    return to_address(x_caller.strip())


def call_contract(fn: Callable[..., Any], *args: Any) -> Any:
    """Invoke a handle method, normalizing non-contract failures to ``ContractError``.

    Contract errors pass through unchanged; any other exception raised by a
    plugin is re-raised as a ``ContractError`` carrying its classified code.
    """
    try:
        return fn(*args)
    except ContractError:
        raise
    except Exception as exc:
        raise ContractError(code=classify_exception(exc), message=str(exc) or type(exc).__name__) from exc


def contract_error_response(request: Request, exc: ContractError) -> JSONResponse:
    """Render a ``ContractError`` as ``{ok: false, error_code, message}``."""
    status = ERROR_STATUS.get(exc.code, 500)
    log_event(
        logger,
        "service.request_failed",
        LogContext(contract=exc.contract),
        path=request.url.path,
        status=status,
        error_code=exc.code.value,
        reason=exc.message,
    )
    return JSONResponse(
        status_code=status,
        content={"ok": False, "error_code": exc.code.value, "message": exc.message},
    )


def vault_info_payload(vault_id: int, info: Any) -> Dict[str, Any]:
    return {
        "vault_id": vault_id,
        "owner": info.owner,
        "balance": info.balance,
        "active": info.active,
        "creation_time": info.creation_time,
    }


__all__ = [
    "ERROR_STATUS",
    "AddressBody",
    "ExecuteBody",
    "VaultBody",
    "get_container_dep",
    "get_caller_dep",
    "call_contract",
    "contract_error_response",
    "vault_info_payload",
]
