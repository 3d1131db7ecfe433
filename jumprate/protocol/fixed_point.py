"""Checked uint256 arithmetic on 1e18 mantissas.

Python ints never wrap, so every operation here checks its result against
the unsigned 256-bit range and raises instead of producing a value the
on-chain arithmetic could not represent.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal

from jumprate.data.constants import SCALE, UINT256_MAX
from jumprate.protocol.errors import ArithmeticOverflow, ArithmeticUnderflow, DivisionByZero

__all__ = [
    "SCALE",
    "UINT256_MAX",
    "checked_add",
    "checked_sub",
    "checked_mul",
    "checked_div",
    "mul_div",
    "to_mantissa",
    "from_mantissa",
]


def checked_add(a: int, b: int) -> int:
    """Add with overflow checking."""
    result = a + b
    if result > UINT256_MAX:
        raise ArithmeticOverflow(f"Addition overflow: {a} + {b}")
    return result


def checked_sub(a: int, b: int) -> int:
    """Subtract with underflow checking."""
    if b > a:
        raise ArithmeticUnderflow(f"Subtraction underflow: {a} - {b}")
    return a - b


def checked_mul(a: int, b: int) -> int:
    """Multiply with overflow checking."""
    result = a * b
    if result > UINT256_MAX:
        raise ArithmeticOverflow(f"Multiplication overflow: {a} * {b}")
    return result


def checked_div(a: int, b: int) -> int:
    """Truncating division with a zero-denominator check."""
    if b == 0:
        raise DivisionByZero(f"Division by zero: {a} / 0")
    return a // b


def mul_div(a: int, b: int, denominator: int) -> int:
    """Compute ``a * b / denominator``, multiplying first."""
    return checked_div(checked_mul(a, b), denominator)


def to_mantissa(value: float | str | Decimal) -> int:
    """Convert a decimal fraction to a mantissa, truncating.

    Floats go through ``repr`` so that ``0.05`` maps to exactly
    ``5 * 10**16`` rather than its binary approximation.

    >>> to_mantissa("0.05")
    50000000000000000
    """
    if isinstance(value, float):
        value = repr(value)
    scaled = (Decimal(value) * SCALE).to_integral_value(rounding=ROUND_DOWN)
    if scaled < 0:
        raise ArithmeticUnderflow(f"Negative mantissa: {value}")
    return int(scaled)


def from_mantissa(mantissa: int) -> float:
    """Convert a mantissa to a float for display."""
    return mantissa / SCALE
