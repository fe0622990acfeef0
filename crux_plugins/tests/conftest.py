"""Pytest configuration for the plugin registry test suite.

Every test gets a fresh runtime driven by a ``ManualClock`` and a deployed
system: the registry (``core``), the arithmetic plugin (``example``, factor 2)
and the vault plugin (``vault``), registered as ids 0 and 1. Handles are bound
to the owner account; use ``.connect(user1)`` to call as someone else.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from crux_plugins.base.runtime import ContractHandle, ManualClock, Runtime, account_address
from crux_plugins.service.deploy import DeploymentResult, deploy_system


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock(start=1_700_000_000)


@pytest.fixture()
def runtime(clock: ManualClock) -> Runtime:
    return Runtime(clock=clock)


@pytest.fixture()
def owner() -> str:
    return account_address("owner")


@pytest.fixture()
def user1() -> str:
    return account_address("user1")


@pytest.fixture()
def user2() -> str:
    return account_address("user2")


@pytest.fixture()
def deployment(runtime: Runtime, owner: str) -> DeploymentResult:
    return deploy_system(runtime, owner, factor=2)


@pytest.fixture()
def core(deployment: DeploymentResult) -> ContractHandle:
    return deployment.registry


@pytest.fixture()
def example(deployment: DeploymentResult) -> ContractHandle:
    return deployment.arithmetic


@pytest.fixture()
def vault(deployment: DeploymentResult) -> ContractHandle:
    return deployment.vault


@pytest.fixture()
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear every ``CRUX_PLUGINS_*`` variable for the duration of a test."""
    import os

    for name in [n for n in os.environ if n.startswith("CRUX_PLUGINS_")]:
        monkeypatch.delenv(name, raising=False)
    yield
