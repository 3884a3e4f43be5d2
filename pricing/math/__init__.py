"""Mathematical utilities for the pricing engine.

This package provides mathematical primitives for pool calculations:
- Bfp: 18-decimal fixed-point arithmetic
- scaling: native decimals <-> 18-decimal conversions
"""

from pricing.math.fixed_point import ONE_18, Bfp
from pricing.math.scaling import (
    Rounding,
    amount_to_bfp,
    bfp_to_amount,
    format_fixed,
    parse_fixed,
    scaling_factor,
)

__all__ = [
    "Bfp",
    "ONE_18",
    "Rounding",
    "amount_to_bfp",
    "bfp_to_amount",
    "format_fixed",
    "parse_fixed",
    "scaling_factor",
]
