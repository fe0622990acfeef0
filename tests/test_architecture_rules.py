"""Architecture enforcement tests for the layered package layout.

Lightweight, repository-local invariants keeping the inner layers decoupled
from outer ones. They are static-file scans (no imports, no side effects)
and fail with a list of offending files and the matched import.

Rules validated here:
1) ``crux_plugins/base`` (runtime, registry, errors, logging) imports nothing
   from the plugins, persistence, DI or service layers, nor any web stack.
2) ``crux_plugins/plugins`` depends on ``base`` only.
3) ``crux_plugins/persistence`` does not import the service or DI layers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent
PACKAGE_ROOT = REPO_ROOT / "crux_plugins"


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield Python source files under ``root``, skipping caches and tests."""
    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts or "tests" in path.relative_to(root).parts:
            continue
        yield path


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def _offenders(root: Path, forbidden: List[str]) -> List[str]:
    found: List[str] = []
    for py in _iter_python_files(root):
        src = _read_text(py)
        found.extend(f"{py}: contains '{snippet}'" for snippet in forbidden if snippet in src)
    return found


def _require_dir(path: Path) -> Path:
    if not path.is_dir():
        pytest.skip(f"{path} not found; skipping boundary check")
    return path


def test_base_does_not_import_outer_layers() -> None:
    base = _require_dir(PACKAGE_ROOT / "base")
    forbidden = [
        "crux_plugins.plugins",
        "crux_plugins.persistence",
        "crux_plugins.service",
        "crux_plugins.di",
        "from ...plugins",
        "from ..service",
        "from ...service",
        "from ..persistence",
        "from ...persistence",
        "from ..di",
        "import fastapi",
        "from fastapi",
        "import uvicorn",
    ]
    offenders = _offenders(base, forbidden)
    if offenders:
        pytest.fail("Base layer must not import outer layers.\n" + "\n".join(offenders))


def test_plugins_depend_on_base_only() -> None:
    plugins = _require_dir(PACKAGE_ROOT / "plugins")
    forbidden = [
        "from ..service",
        "from ..persistence",
        "from ..di",
        "from ..config",
        "crux_plugins.service",
        "crux_plugins.persistence",
        "from fastapi",
    ]
    offenders = _offenders(plugins, forbidden)
    if offenders:
        pytest.fail("Plugins may only depend on the base layer.\n" + "\n".join(offenders))


def test_persistence_does_not_import_service_or_di() -> None:
    persistence = _require_dir(PACKAGE_ROOT / "persistence")
    forbidden = ["from ..service", "from ...service", "from ..di", "from ...di", "from fastapi"]
    offenders = _offenders(persistence, forbidden)
    if offenders:
        pytest.fail("Persistence must not import service or DI layers.\n" + "\n".join(offenders))
