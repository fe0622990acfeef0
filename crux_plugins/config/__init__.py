"""Configuration: defaults and environment-driven settings."""

from .env import ENV_MAP, PluginSettings, get_env_var_name, load_settings, read_env

__all__ = ["ENV_MAP", "PluginSettings", "get_env_var_name", "load_settings", "read_env"]
