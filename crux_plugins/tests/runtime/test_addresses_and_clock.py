from __future__ import annotations

import pytest

from crux_plugins.base.constants import NULL_ADDRESS
from crux_plugins.base.errors import InvalidAddressError
from crux_plugins.base.runtime import (
    ManualClock,
    MonotonicClock,
    account_address,
    contract_address,
    is_null,
    to_address,
)


def test_account_addresses_are_stable_and_distinct():
    assert account_address("owner") == account_address("owner")  # nosec B101
    assert account_address("owner") != account_address("user1")  # nosec B101
    assert to_address(account_address("owner")) == account_address("owner")  # nosec B101


def test_contract_address_depends_on_nonce(owner):
    assert contract_address(owner, 0) != contract_address(owner, 1)  # nosec B101


def test_to_address_normalizes_case():
    raw = "0x" + "AB" * 20
    assert to_address(raw) == "0x" + "ab" * 20  # nosec B101


@pytest.mark.parametrize("bad", ["", "0x", "0x" + "g" * 40, "ab" * 20, "0x" + "a" * 41, 7, None])
def test_to_address_rejects_malformed(bad):
    with pytest.raises(InvalidAddressError):
        to_address(bad)


def test_null_address():
    assert is_null(NULL_ADDRESS)  # nosec B101
    assert not is_null(account_address("owner"))  # nosec B101


def test_monotonic_clock_never_goes_backwards():
    readings = iter([100.9, 105.2, 99.0, 106.0])
    clock = MonotonicClock(source=lambda: next(readings))
    assert [clock.now() for _ in range(4)] == [100, 105, 105, 106]  # nosec B101


def test_manual_clock_advances():
    clock = ManualClock(start=10)
    assert clock.advance() == 11  # nosec B101
    assert clock.advance(9) == 20  # nosec B101
    with pytest.raises(ValueError):
        clock.advance(-1)
