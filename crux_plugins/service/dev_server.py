from __future__ import annotations

import uvicorn

from crux_plugins.config.env import PluginSettings, load_settings


def main(settings: PluginSettings | None = None) -> None:
    """Start the development server for the registry FastAPI app.

    Host, port and reload behavior come from ``CRUX_PLUGINS_SERVICE_HOST``,
    ``CRUX_PLUGINS_SERVICE_PORT`` and ``CRUX_PLUGINS_SERVICE_RELOAD``. Reload
    stays off unless requested: each worker process would otherwise deploy a
    separate registry.
    """
    settings = settings or load_settings()
    uvicorn.run(
        "crux_plugins.service.app:app",
        host=settings.service_host,
        port=settings.service_port,
        reload=settings.service_reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
