"""Errors raised by the rate model."""


class RateModelError(Exception):
    """Base class for rate model errors."""


class ArithmeticUnderflow(RateModelError, ArithmeticError):
    """An unsigned subtraction would produce a negative result."""


class ArithmeticOverflow(RateModelError, OverflowError):
    """An intermediate value exceeds the working integer width."""


class DivisionByZero(RateModelError, ZeroDivisionError):
    """A checked division had a zero denominator."""
