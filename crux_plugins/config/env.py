"""crux_plugins.config.env
======================

Environment-driven settings for the registry service, CLI and container.

Purpose
-------
- Map each setting to exactly one ``CRUX_PLUGINS_*`` environment variable.
- Validate the collected values into a typed :class:`PluginSettings` model
  (pydantic), falling back to ``crux_plugins.config.defaults``.

Failure Modes
-------------
- Unset or blank variables fall back to defaults.
- Values that cannot be coerced (e.g. ``CRUX_PLUGINS_FACTOR=abc``) raise
  ``pydantic.ValidationError`` from :func:`load_settings`; callers decide
  whether to abort.
"""

from __future__ import annotations

import os
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .defaults import (
    DEFAULT_ARITHMETIC_FACTOR,
    DEFAULT_OWNER_LABEL,
    DEFAULT_STRICT_PLUGINS,
    PLUGIN_SERVICE_CORS_DEFAULT_ORIGINS,
    PLUGIN_SERVICE_DEFAULT_HOST,
    PLUGIN_SERVICE_DEFAULT_PORT,
)

# Setting name -> environment variable
ENV_MAP: Dict[str, str] = {
    "owner_label": "CRUX_PLUGINS_OWNER",
    "factor": "CRUX_PLUGINS_FACTOR",
    "strict_plugins": "CRUX_PLUGINS_STRICT",
    "events_db": "CRUX_PLUGINS_EVENTS_DB",
    "log_level": "CRUX_PLUGINS_LOG_LEVEL",
    "service_host": "CRUX_PLUGINS_SERVICE_HOST",
    "service_port": "CRUX_PLUGINS_SERVICE_PORT",
    "service_reload": "CRUX_PLUGINS_SERVICE_RELOAD",
    "cors_origins": "CRUX_PLUGINS_CORS_ORIGINS",
}


class PluginSettings(BaseModel):
    """Resolved configuration for one registry deployment.

    Attributes:
        owner_label: Label the owner account address is derived from.
        factor: Factor for the bundled arithmetic plugin. Validated by the
            plugin itself at deployment, so a bad value surfaces as
            ``InvalidConfigError`` rather than here.
        strict_plugins: Require registered code to expose ``perform_action``.
        events_db: Optional SQLite path persisting committed events.
        log_level: Level name for the shared ``plugins`` logger.
        service_host / service_port / service_reload: dev server binding.
        cors_origins: Allowed CORS origins for the HTTP service.
    """

    owner_label: str = DEFAULT_OWNER_LABEL
    factor: int = DEFAULT_ARITHMETIC_FACTOR
    strict_plugins: bool = DEFAULT_STRICT_PLUGINS
    events_db: Optional[str] = None
    log_level: str = "INFO"
    service_host: str = PLUGIN_SERVICE_DEFAULT_HOST
    service_port: int = Field(default=PLUGIN_SERVICE_DEFAULT_PORT, ge=1, le=65535)
    service_reload: bool = False
    cors_origins: List[str] = Field(
        default_factory=lambda: _split_csv(PLUGIN_SERVICE_CORS_DEFAULT_ORIGINS)
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def coerce_origins(cls, value: object) -> object:
        return _split_csv(value) if isinstance(value, str) else value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def get_env_var_name(setting: str) -> Optional[str]:
    """Return the environment variable backing ``setting`` (or None if unknown)."""
    return ENV_MAP.get(setting)


def read_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect the non-blank ``CRUX_PLUGINS_*`` values keyed by setting name."""
    source = os.environ if environ is None else environ
    values: Dict[str, str] = {}
    for setting, var in ENV_MAP.items():
        raw = source.get(var)
        if raw is not None and raw.strip():
            values[setting] = raw.strip()
    return values


def load_settings(environ: Optional[Mapping[str, str]] = None, **overrides: object) -> PluginSettings:
    """Build :class:`PluginSettings` from the environment plus explicit overrides.

    Explicit keyword overrides win over environment values, which win over
    defaults. ``None`` overrides are ignored.
    """
    data: Dict[str, object] = dict(read_env(environ))
    data.update({k: v for k, v in overrides.items() if v is not None})
    return PluginSettings(**data)


__all__ = [
    "ENV_MAP",
    "PluginSettings",
    "get_env_var_name",
    "read_env",
    "load_settings",
]
