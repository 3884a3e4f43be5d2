"""18-decimal fixed-point (Bfp) arithmetic for issue pool pricing.

Mirrors the integer math of the issue pool settlement contracts. Each
multiply and divide names its rounding direction: amounts the pool pays
out are floored, amounts it charges are ceiled.

A Bfp holds an unsigned integer scaled by 10^18 and stays inside the
uint256 range.
"""

from __future__ import annotations

import decimal
from decimal import Decimal
from functools import total_ordering
from typing import ClassVar

__all__ = [
    "Bfp",
    "FixedPointError",
    "Uint256Overflow",
    "ONE_18",
    "UINT256_MAX",
]

ONE_18 = 10**18

UINT256_MAX = 2**256 - 1

# Wide enough for any uint256 value
_CONTEXT = decimal.Context(prec=78)


class FixedPointError(ArithmeticError):
    """Base error for fixed-point and scaling operations."""

    pass


class Uint256Overflow(FixedPointError):
    """Result does not fit in a uint256 word."""

    pass


def _word(value: int) -> int:
    if value > UINT256_MAX:
        raise Uint256Overflow(f"{value} exceeds uint256")
    return value


def _ceil_div(numerator: int, denominator: int) -> int:
    if numerator == 0:
        return 0
    return (numerator - 1) // denominator + 1


@total_ordering
class Bfp:
    """Unsigned 18-decimal fixed-point value.

    `Bfp(1_500_000_000_000_000_000)` is 1.5. Instances compare by value and
    are not hashable.
    """

    ONE: ClassVar[int] = ONE_18

    __slots__ = ("value",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: int) -> None:
        self.value = value

    @classmethod
    def from_wei(cls, wei: int) -> Bfp:
        """Wrap a value that is already scaled by 10^18."""
        return cls(wei)

    def to_decimal(self) -> Decimal:
        """Exact Decimal with 18 fraction digits."""
        with decimal.localcontext(_CONTEXT):
            return Decimal(self.value).scaleb(-18)

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    # Arithmetic

    def add(self, other: Bfp) -> Bfp:
        return Bfp(_word(self.value + other.value))

    def sub(self, other: Bfp) -> Bfp:
        """self - other, clamped at zero."""
        return Bfp(max(0, self.value - other.value))

    def mul_down(self, other: Bfp) -> Bfp:
        """floor(a * b / 10^18)"""
        return Bfp(_word(self.value * other.value) // self.ONE)

    def mul_up(self, other: Bfp) -> Bfp:
        """ceil(a * b / 10^18)"""
        return Bfp(_ceil_div(_word(self.value * other.value), self.ONE))

    def div_down(self, other: Bfp) -> Bfp:
        """floor(a * 10^18 / b)

        Raises:
            ZeroDivisionError: If other is zero
        """
        if other.is_zero:
            raise ZeroDivisionError("Bfp division by zero")
        return Bfp(_word(self.value * self.ONE) // other.value)

    def div_up(self, other: Bfp) -> Bfp:
        """ceil(a * 10^18 / b)

        Raises:
            ZeroDivisionError: If other is zero
        """
        if other.is_zero:
            raise ZeroDivisionError("Bfp division by zero")
        return Bfp(_ceil_div(_word(self.value * self.ONE), other.value))

    def mul_div_down(self, numerator: Bfp, denominator: Bfp) -> Bfp:
        """floor(a * n / d) with a single rounding step.

        Raises:
            ZeroDivisionError: If denominator is zero
        """
        if denominator.is_zero:
            raise ZeroDivisionError("Bfp division by zero")
        return Bfp(_word(self.value * numerator.value) // denominator.value)

    def mul_div_up(self, numerator: Bfp, denominator: Bfp) -> Bfp:
        """ceil(a * n / d) with a single rounding step.

        Raises:
            ZeroDivisionError: If denominator is zero
        """
        if denominator.is_zero:
            raise ZeroDivisionError("Bfp division by zero")
        return Bfp(_ceil_div(_word(self.value * numerator.value), denominator.value))

    # Comparison

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: Bfp) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value < other.value

    def __repr__(self) -> str:
        return f"Bfp({self.value})"

    def __str__(self) -> str:
        return str(self.to_decimal())
