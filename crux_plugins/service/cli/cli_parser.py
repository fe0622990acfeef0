"""CLI parser construction for crux-plugins.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse
from typing import Tuple


def parse_call(value: str) -> Tuple[int, int]:
    """Parse an ``ID:INPUT`` pair for ``run --call``.

    Raises ``argparse.ArgumentTypeError`` for anything that is not two
    non-negative integers separated by a colon.
    """
    plugin_id, sep, raw_input = value.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected ID:INPUT, got {value!r}")
    try:
        pair = (int(plugin_id.strip()), int(raw_input.strip()))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected integers in ID:INPUT, got {value!r}") from exc
    if pair[0] < 0 or pair[1] < 0:
        raise argparse.ArgumentTypeError(f"ID and INPUT must be non-negative, got {value!r}")
    return pair


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser with ``deploy``, ``run`` and ``serve``."""
    p = argparse.ArgumentParser(
        prog="crux-plugins", description="Deploy and exercise the plugin registry in-process"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # deploy
    p_deploy = sub.add_parser("deploy", help="Deploy the registry and bundled plugins, print addresses")
    p_deploy.add_argument("--factor", type=int, default=None)
    p_deploy.add_argument("--json", action="store_true")

    # run
    p_run = sub.add_parser("run", help="Deploy a fresh system and dispatch calls through the registry")
    p_run.add_argument(
        "--call",
        dest="calls",
        action="append",
        type=parse_call,
        required=True,
        metavar="ID:INPUT",
    )
    p_run.add_argument("--factor", type=int, default=None)
    p_run.add_argument("--json", action="store_true")

    # serve
    p_serve = sub.add_parser("serve", help="Start the HTTP service (uvicorn)")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)

    return p


__all__ = ["build_parser", "parse_call"]
