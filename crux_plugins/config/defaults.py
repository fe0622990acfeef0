"""crux_plugins.config.defaults
===========================

Central place for small, stable default values used across the crux_plugins
package and the lightweight service layer. These defaults can be overridden
via environment variables (see ``crux_plugins.config.env``), but provide
sensible fallbacks for local development and tests.

This module intentionally avoids importing from other crux_plugins packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Deployment ----

# Label the owner account address is derived from
DEFAULT_OWNER_LABEL = "owner"
# Label of the account used for HTTP callers that send no X-Caller header
ANONYMOUS_CALLER_LABEL = "anonymous"
# Factor the bundled arithmetic plugin is deployed with
DEFAULT_ARITHMETIC_FACTOR = 2
# Registration checks code presence only unless strict mode is enabled
DEFAULT_STRICT_PLUGINS = False

# ---- Service / HTTP layer ----

PLUGIN_SERVICE_DEFAULT_HOST = "127.0.0.1"
PLUGIN_SERVICE_DEFAULT_PORT = 8092
# Comma-separated list of allowed origins for the dev server.
PLUGIN_SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"
# Header carrying the caller address on HTTP requests
CALLER_HEADER = "X-Caller"
# Default and maximum page size for the events endpoint
EVENTS_DEFAULT_LIMIT = 100
EVENTS_MAX_LIMIT = 1000

# ---- SQLite audit store ----

SQLITE_JOURNAL_MODE = "WAL"
SQLITE_SYNCHRONOUS = "NORMAL"
SQLITE_BUSY_TIMEOUT_MS = 5000
