"""JSON logging formatter used by the plugin logging setup.

This module defines :class:`JsonFormatter`, which renders each record as a
single JSON line. Payloads produced by ``log_event`` arrive as a JSON string
message; their keys are hoisted to the top level so a line reads
``{"ts": ..., "event": "registry.plugin_added", "plugin_id": 0, ...}`` rather
than carrying a double-encoded ``msg``.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# LogRecord attributes that are logging internals, never user extras
_RESERVED = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }
)


def _hoist(message: str) -> Dict[str, Any] | None:
    """Return the decoded payload when ``message`` is a JSON object."""
    if not message.startswith("{"):
        return None
    try:
        parsed = json.loads(message)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


class JsonFormatter(logging.Formatter):
    """Lightweight JSON formatter for structured logs.

    Emits timestamp, level and logger name, then either the hoisted event
    payload or the plain ``msg``, then any non-internal ``extra`` attributes.
    Exception info is rendered under ``exc``.
    """

    def format(self, record: logging.LogRecord) -> str:
        out: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        text = record.getMessage()
        payload = _hoist(text)
        if payload is None:
            out["msg"] = text
        else:
            out.update(payload)
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RESERVED or key in out:
                continue
            out[key] = value
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        return json.dumps(out, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
