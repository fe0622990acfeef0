from __future__ import annotations

import pytest

from crux_plugins.base.errors import (
    ArithmeticOverflowError,
    CallFailedError,
    ContractError,
    ErrorCode,
    InvalidAddressError,
    InvalidConfigError,
    InvalidInputError,
    InvalidPluginError,
    NotFoundError,
    ReentrantCallError,
    UnauthorizedError,
    classify_exception,
)


@pytest.mark.parametrize(
    "exc, code",
    [
        (UnauthorizedError("0xabc"), ErrorCode.UNAUTHORIZED),
        (InvalidAddressError(), ErrorCode.INVALID_ADDRESS),
        (InvalidPluginError(), ErrorCode.INVALID_PLUGIN),
        (NotFoundError(), ErrorCode.NOT_FOUND),
        (InvalidConfigError(), ErrorCode.INVALID_CONFIG),
        (InvalidInputError(), ErrorCode.INVALID_INPUT),
        (ArithmeticOverflowError(), ErrorCode.OVERFLOW),
        (ReentrantCallError(), ErrorCode.REENTRANT_CALL),
        (CallFailedError(), ErrorCode.CALL_FAILED),
    ],
)
def test_contract_errors_keep_their_code(exc, code):
    assert isinstance(exc, ContractError)  # nosec B101
    assert exc.code is code  # nosec B101
    assert classify_exception(exc) is code  # nosec B101


def test_foreign_exceptions_are_classified():
    assert classify_exception(ZeroDivisionError()) is ErrorCode.OVERFLOW  # nosec B101
    assert classify_exception(OverflowError()) is ErrorCode.OVERFLOW  # nosec B101
    assert classify_exception(ValueError("x")) is ErrorCode.PLUGIN_FAILURE  # nosec B101
    assert classify_exception(KeyboardInterrupt()) is ErrorCode.UNKNOWN  # nosec B101


def test_unauthorized_carries_account():
    err = UnauthorizedError("0xabc", "0xdef")
    assert err.account == "0xabc"  # nosec B101
    assert err.contract == "0xdef"  # nosec B101
    assert "0xabc" in err.message  # nosec B101


def test_error_code_values_are_strings():
    assert ErrorCode.NOT_FOUND.value == "not_found"  # nosec B101
    assert ErrorCode("reentrant_call") is ErrorCode.REENTRANT_CALL  # nosec B101
