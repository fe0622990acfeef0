"""Registry lifecycle: id assignment, update, removal and owner gating."""

from __future__ import annotations

import pytest

from crux_plugins.base.constants import NULL_ADDRESS
from crux_plugins.base.errors import (
    InvalidAddressError,
    InvalidPluginError,
    NotFoundError,
    UnauthorizedError,
)
from crux_plugins.base.plugins import PluginEntry, PluginRegistry
from crux_plugins.plugins import ArithmeticPlugin, VaultPlugin


def _fresh_registry(runtime, owner):
    return runtime.deploy(PluginRegistry, sender=owner)


def test_deployment_registers_bundled_plugins(core, example, vault, owner):
    assert core.get_plugin_count() == 2  # nosec B101
    assert core.get_plugin_address(0) == example.address  # nosec B101
    assert core.get_plugin_address(1) == vault.address  # nosec B101
    assert core.owner() == owner  # nosec B101


def test_add_plugin_assigns_dense_ids_despite_removals(runtime, owner):
    registry = _fresh_registry(runtime, owner)
    plugins = [runtime.deploy(ArithmeticPlugin, f + 1, sender=owner) for f in range(4)]

    assert registry.add_plugin(plugins[0].address) == 0  # nosec B101
    assert registry.add_plugin(plugins[1].address) == 1  # nosec B101
    registry.remove_plugin(1)
    registry.remove_plugin(0)
    assert registry.add_plugin(plugins[2].address) == 2  # nosec B101
    assert registry.add_plugin(plugins[3].address) == 3  # nosec B101
    assert registry.get_plugin_count() == 4  # nosec B101


def test_same_address_can_be_registered_twice(runtime, owner, example):
    registry = _fresh_registry(runtime, owner)
    assert registry.add_plugin(example.address) == 0  # nosec B101
    assert registry.add_plugin(example.address) == 1  # nosec B101
    assert registry.get_plugin_address(0) == registry.get_plugin_address(1)  # nosec B101


def test_add_plugin_normalizes_address_case(runtime, owner, example):
    registry = _fresh_registry(runtime, owner)
    plugin_id = registry.add_plugin(example.address.upper().replace("0X", "0x"))
    assert registry.get_plugin_address(plugin_id) == example.address  # nosec B101


def test_add_plugin_emits_event(core, runtime, owner):
    plugin = runtime.deploy(VaultPlugin, sender=owner)
    plugin_id = core.add_plugin(plugin.address)
    added = runtime.events.filter(name="PluginAdded", emitter=core.address)
    assert added[-1].args == {"plugin_id": plugin_id, "plugin_address": plugin.address}  # nosec B101


@pytest.mark.parametrize("bad", [NULL_ADDRESS, "0x1234", "not-an-address", 42, None])
def test_add_plugin_rejects_null_or_malformed_address(core, bad):
    with pytest.raises(InvalidAddressError):
        core.add_plugin(bad)
    assert core.get_plugin_count() == 2  # nosec B101


def test_add_plugin_rejects_address_without_code(core, user1):
    with pytest.raises(InvalidPluginError):
        core.add_plugin(user1)
    assert core.get_plugin_count() == 2  # nosec B101


def test_get_plugin_address_for_unknown_ids(core):
    assert core.get_plugin_address(999) == NULL_ADDRESS  # nosec B101
    assert core.get_plugin_address(-1) == NULL_ADDRESS  # nosec B101
    assert core.get_plugin_address("0") == NULL_ADDRESS  # nosec B101


def test_bool_ids_do_not_alias_integer_slots(core, vault):
    # True == 1 in Python, but a bool is not a plugin id
    assert core.get_plugin_address(True) == NULL_ADDRESS  # nosec B101
    assert core.get_plugin_address(False) == NULL_ADDRESS  # nosec B101
    with pytest.raises(NotFoundError):
        core.execute_plugin(True, 1)
    with pytest.raises(NotFoundError):
        core.update_plugin(True, vault.address)
    with pytest.raises(NotFoundError):
        core.remove_plugin(False)
    assert core.get_plugin_address(1) == vault.address  # nosec B101


def test_update_plugin_changes_only_target_slot(core, runtime, owner, vault):
    replacement = runtime.deploy(ArithmeticPlugin, 7, sender=owner)
    core.update_plugin(0, replacement.address)

    assert core.get_plugin_address(0) == replacement.address  # nosec B101
    assert core.get_plugin_address(1) == vault.address  # nosec B101
    assert core.get_plugin_count() == 2  # nosec B101
    assert core.execute_plugin(0, 3) == 21  # nosec B101

    updated = runtime.events.filter(name="PluginUpdated")
    assert len(updated) == 1  # nosec B101
    assert updated[0].args["new_address"] == replacement.address  # nosec B101


def test_update_plugin_fails_for_unassigned_or_removed_ids(core, example):
    with pytest.raises(NotFoundError):
        core.update_plugin(5, example.address)
    core.remove_plugin(1)
    with pytest.raises(NotFoundError):
        core.update_plugin(1, example.address)


def test_update_plugin_validates_new_address(core, user1):
    with pytest.raises(InvalidAddressError):
        core.update_plugin(0, NULL_ADDRESS)
    with pytest.raises(InvalidPluginError):
        core.update_plugin(0, user1)


def test_remove_plugin_retires_id(core, runtime):
    core.remove_plugin(0)

    assert core.get_plugin_address(0) == NULL_ADDRESS  # nosec B101
    assert core.get_plugin_count() == 2  # nosec B101
    with pytest.raises(NotFoundError):
        core.execute_plugin(0, 5)
    with pytest.raises(NotFoundError):
        core.remove_plugin(0)
    assert runtime.events.filter(name="PluginRemoved")[0].args["plugin_id"] == 0  # nosec B101


def test_list_plugins_returns_live_slots(core, example, vault):
    assert core.list_plugins() == [  # nosec B101
        PluginEntry(plugin_id=0, address=example.address),
        PluginEntry(plugin_id=1, address=vault.address),
    ]
    core.remove_plugin(0)
    assert [e.plugin_id for e in core.list_plugins()] == [1]  # nosec B101


@pytest.mark.parametrize(
    "method, args",
    [
        ("add_plugin", ("example",)),
        ("update_plugin", (0, "example")),
        ("remove_plugin", (0,)),
    ],
)
def test_mutators_are_owner_only(core, example, runtime, user1, method, args):
    args = tuple(example.address if a == "example" else a for a in args)
    before = len(runtime.events)
    with pytest.raises(UnauthorizedError) as info:
        getattr(core.connect(user1), method)(*args)
    assert info.value.account == user1  # nosec B101
    assert core.get_plugin_count() == 2  # nosec B101
    assert core.get_plugin_address(0) == example.address  # nosec B101
    assert len(runtime.events) == before  # nosec B101


def test_owner_check_precedes_validation(core, user1):
    with pytest.raises(UnauthorizedError):
        core.connect(user1).add_plugin(NULL_ADDRESS)


def test_owner_is_deployer(runtime, user2):
    registry = runtime.deploy(PluginRegistry, sender=user2)
    assert registry.owner() == user2  # nosec B101


def test_strict_registry_rejects_code_without_perform_action(runtime, owner, core):
    strict = runtime.deploy(PluginRegistry, True, sender=owner)
    with pytest.raises(InvalidPluginError):
        strict.add_plugin(core.address)
    assert strict.get_plugin_count() == 0  # nosec B101


def test_reads_are_idempotent(core, vault):
    core.execute_plugin(1, 50)
    first = (core.get_plugin_address(1), core.get_plugin_count(), vault.get_vault_info(0), vault.get_vault_count())
    for _ in range(3):
        again = (core.get_plugin_address(1), core.get_plugin_count(), vault.get_vault_info(0), vault.get_vault_count())
        assert again == first  # nosec B101
