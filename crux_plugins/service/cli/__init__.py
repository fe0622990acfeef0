"""crux-plugins CLI (package entrypoint).

This package wires argument parsing to action handlers kept in small, focused
modules. It performs no registry logic directly.
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import handle_deploy, handle_run, handle_serve
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.cmd == "deploy":
        return handle_deploy(args)
    if args.cmd == "run":
        return handle_run(args)
    return handle_serve(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
