"""Arithmetic plugin: multiplies its input by a fixed factor.

The factor is set once at deployment and must be a positive unsigned word.
``perform_action`` records an ``ActionPerformed`` event; ``calculate_result``
computes the same value without touching the event log, for inspection.
Products that leave the unsigned 256-bit range fail instead of wrapping.
"""
from __future__ import annotations

from ..base.errors import InvalidConfigError, InvalidInputError
from ..base.runtime import Contract, view


class ArithmeticPlugin(Contract):
    """Plugin returning ``value * factor``."""

    __state__ = ("_factor",)

    def __init__(self, factor: int) -> None:
        try:
            factor = self._require_word(factor, "factor")
        except InvalidInputError as exc:
            raise InvalidConfigError(exc.message, self.address) from exc
        if factor == 0:
            raise InvalidConfigError("factor must be greater than zero", self.address)
        self._factor = factor

    def perform_action(self, value: int) -> int:
        result = self.calculate_result(value)
        self._emit("ActionPerformed", caller=self.msg_sender, input=value, result=result)
        return result

    @view
    def calculate_result(self, value: int) -> int:
        value = self._require_word(value, "input")
        return self._checked_mul(value, self._factor)

    @view
    def get_factor(self) -> int:
        return self._factor


__all__ = ["ArithmeticPlugin"]
