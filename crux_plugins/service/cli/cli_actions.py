"""CLI action handlers for crux-plugins.

Purpose
-------
Subcommand handlers kept apart from the entrypoint so they can be tested
directly with an ``argparse.Namespace``. No top-level side effects.

Error Semantics
---------------
- ``ContractError`` raised while deploying or dispatching is reported as one
  JSON line on stderr and turned into exit code 1.
- Any other exception propagates.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, TextIO

from ...base.errors import ContractError
from ...base.logging import configure_logger
from ...config.env import PluginSettings, load_settings
from ...di import build_container


def _settings_from_args(args: argparse.Namespace, **extra: Any) -> PluginSettings:
    settings = load_settings(factor=getattr(args, "factor", None), **extra)
    configure_logger(level=settings.log_level)
    return settings


def _report_error(exc: ContractError, err: TextIO) -> int:
    err.write(json.dumps({"ok": False, "error_code": exc.code.value, "message": exc.message}) + "\n")
    return 1


def _print_deployment(info: Dict[str, Any], as_json: bool, out: TextIO) -> None:
    if as_json:
        out.write(json.dumps({"ok": True, **info}) + "\n")
        return
    out.write(f"Registry deployed to: {info['registry']}\n")
    out.write(f"ArithmeticPlugin deployed to: {info['arithmetic']}\n")
    out.write(f"VaultPlugin deployed to: {info['vault']}\n")
    out.write(f"Owner: {info['owner']}\n")
    out.write(f"Total plugins: {info['plugin_count']}\n")


def handle_deploy(args: argparse.Namespace, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """Deploy the registry and both plugins into a fresh runtime and print addresses."""
    out = out or sys.stdout
    err = err or sys.stderr
    container = build_container(_settings_from_args(args))
    try:
        info = container.describe()
    except ContractError as exc:
        return _report_error(exc, err)
    finally:
        container.close()
    _print_deployment(info, args.json, out)
    return 0


def handle_run(args: argparse.Namespace, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """Deploy a fresh system, then dispatch each ``--call`` as the owner.

    Stops at the first failing call; results of earlier calls are still printed.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    container = build_container(_settings_from_args(args))
    results: List[Dict[str, Any]] = []
    try:
        registry = container.registry()
        events = container.runtime().events
        for plugin_id, value in args.calls:
            start = len(events)
            try:
                result = registry.execute_plugin(plugin_id, value)
            except ContractError as exc:
                _emit_results(results, args.json, out)
                return _report_error(exc, err)
            results.append(
                {
                    "plugin_id": plugin_id,
                    "input": value,
                    "result": result,
                    "events": [e.to_dict() for e in list(events)[start:]],
                }
            )
    except ContractError as exc:
        return _report_error(exc, err)
    finally:
        container.close()
    _emit_results(results, args.json, out)
    return 0


def _emit_results(results: List[Dict[str, Any]], as_json: bool, out: TextIO) -> None:
    if as_json:
        for item in results:
            out.write(json.dumps(item) + "\n")
        return
    for item in results:
        out.write(f"plugin {item['plugin_id']}: {item['input']} -> {item['result']}\n")
        for event in item["events"]:
            args = ", ".join(f"{k}={v}" for k, v in event["args"].items())
            out.write(f"  {event['name']}({args})\n")


def handle_serve(args: argparse.Namespace) -> int:
    """Run the HTTP service in the foreground."""
    from ..dev_server import main as serve_main

    serve_main(_settings_from_args(args, service_host=args.host, service_port=args.port))
    return 0


__all__ = ["handle_deploy", "handle_run", "handle_serve"]
