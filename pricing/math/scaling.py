"""Decimal scaling helpers.

Functions for converting token amounts between human-readable decimals,
native integer units and the 18-decimal fixed-point domain.

Every cross-decimal conversion goes through a scaling factor of
10^(18 - token_decimals): multiply on the way in, divide on the way out.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_DOWN, Decimal
from enum import Enum

from pricing.constants import FIXED_POINT_DECIMALS
from pricing.math.fixed_point import Bfp, FixedPointError

# 78 digits of precision, enough for uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

MAX_DECIMALS = FIXED_POINT_DECIMALS


class Rounding(str, Enum):
    """Rounding direction applied when leaving the fixed-point domain."""

    DOWN = "down"
    UP = "up"


class InvalidScalingFactorError(FixedPointError):
    """Scaling factor must be positive."""

    pass


class FractionalPrecisionError(FixedPointError):
    """Value carries more fraction digits than the target decimals allow."""

    pass


def scaling_factor(decimals: int) -> int:
    """Return 10^(18 - decimals), the factor lifting native units to 18 decimals.

    Raises:
        InvalidScalingFactorError: If decimals is outside [0, 18]
    """
    if not 0 <= decimals <= MAX_DECIMALS:
        raise InvalidScalingFactorError(f"Token decimals must be in [0, 18], got {decimals}")
    return 10 ** (MAX_DECIMALS - decimals)


def parse_fixed(value: str | int | Decimal, decimals: int) -> int:
    """Parse a human-readable amount into an integer with `decimals` fraction digits.

    Args:
        value: Decimal string, int or Decimal (e.g. "1.5")
        decimals: Number of fraction digits of the result

    Returns:
        Integer amount, e.g. parse_fixed("1.5", 6) == 1_500_000

    Raises:
        FractionalPrecisionError: If value has more fraction digits than decimals
        decimal.InvalidOperation: If value is not a number
    """
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        d = value if isinstance(value, Decimal) else Decimal(str(value))
        if not d.is_finite():
            raise FractionalPrecisionError(f"Cannot parse non-finite value {value}")
        scaled = d.scaleb(decimals)
        integral = scaled.to_integral_value(rounding=ROUND_DOWN)
        if integral != scaled:
            raise FractionalPrecisionError(
                f"Value {value} has more than {decimals} fraction digits"
            )
        return int(integral)


def format_fixed(value: int, decimals: int) -> Decimal:
    """Format an integer with `decimals` fraction digits as an exact Decimal."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return Decimal(value).scaleb(-decimals)


def scale_up(amount: int, factor: int) -> Bfp:
    """Scale token amount to 18 decimals for internal math.

    Args:
        amount: Amount in token's native decimals
        factor: Factor to scale by (e.g., 10^12 for 6-decimal tokens)

    Returns:
        Amount as Bfp (18-decimal fixed-point)

    Raises:
        InvalidScalingFactorError: If factor <= 0
    """
    if factor <= 0:
        raise InvalidScalingFactorError(f"Scaling factor must be positive, got {factor}")
    return Bfp.from_wei(amount * factor)


def scale_down_down(bfp: Bfp, factor: int) -> int:
    """Scale 18-decimal result back to token decimals, rounding down.

    Raises:
        InvalidScalingFactorError: If factor <= 0
    """
    if factor <= 0:
        raise InvalidScalingFactorError(f"Scaling factor must be positive, got {factor}")
    return bfp.value // factor


def scale_down_up(bfp: Bfp, factor: int) -> int:
    """Scale 18-decimal result back to token decimals, rounding up.

    Raises:
        InvalidScalingFactorError: If factor <= 0
    """
    if factor <= 0:
        raise InvalidScalingFactorError(f"Scaling factor must be positive, got {factor}")
    if bfp.value == 0:
        return 0
    return (bfp.value - 1) // factor + 1


def scale_down(bfp: Bfp, factor: int, rounding: Rounding) -> int:
    """Scale 18-decimal result back to token decimals in the given direction."""
    if rounding is Rounding.UP:
        return scale_down_up(bfp, factor)
    return scale_down_down(bfp, factor)


def amount_to_bfp(amount: Decimal, decimals: int) -> Bfp:
    """Lift a human-readable token amount into the 18-decimal domain.

    The amount is first parsed at the token's own precision so that a value
    the token cannot represent is rejected rather than silently truncated.
    """
    return scale_up(parse_fixed(amount, decimals), scaling_factor(decimals))


def bfp_to_amount(bfp: Bfp, decimals: int, rounding: Rounding = Rounding.DOWN) -> Decimal:
    """Bring an 18-decimal value back to a human-readable token amount."""
    return format_fixed(scale_down(bfp, scaling_factor(decimals), rounding), decimals)


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "MAX_DECIMALS",
    "Rounding",
    "InvalidScalingFactorError",
    "FractionalPrecisionError",
    "scaling_factor",
    "parse_fixed",
    "format_fixed",
    "scale_up",
    "scale_down_down",
    "scale_down_up",
    "scale_down",
    "amount_to_bfp",
    "bfp_to_amount",
]
