from .container import PluginsContainer, build_container

__all__ = ["PluginsContainer", "build_container"]
