"""Data models for venue snapshots."""

from pricing.models.snapshot import (
    OrderSnapshot,
    OrderToken,
    SecondaryTradeSnapshot,
    TokenSnapshot,
    VenueSnapshot,
)
from pricing.models.types import (
    Address,
    DecimalString,
    is_same_address,
    is_valid_address,
    normalize_address,
)

__all__ = [
    "VenueSnapshot",
    "TokenSnapshot",
    "OrderSnapshot",
    "OrderToken",
    "SecondaryTradeSnapshot",
    "Address",
    "DecimalString",
    "normalize_address",
    "is_valid_address",
    "is_same_address",
]
