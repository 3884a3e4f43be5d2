"""Shared token constants for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import CURRENCY, SECURITY
    # or
    from tests.helpers.constants import CURRENCY, SECURITY
"""

# =============================================================================
# Pool tokens
# =============================================================================

CURRENCY = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"  # USD Coin (6 decimals)
SECURITY = "0x5ec0000000000000000000000000000000000001"  # Security token (18 decimals)
OTHER_TOKEN = "0x6b175474e89094c44da98b954eedeac495271d0f"  # Not held by test pools

CURRENCY_DECIMALS = 6
SECURITY_DECIMALS = 18

# =============================================================================
# Pools
# =============================================================================

PRIMARY_POOL_ADDRESS = "0x1000000000000000000000000000000000000001"
PRIMARY_POOL_ID = PRIMARY_POOL_ADDRESS + "000000000000000000000001"

SECONDARY_POOL_ADDRESS = "0x2000000000000000000000000000000000000002"
SECONDARY_POOL_ID = SECONDARY_POOL_ADDRESS + "000000000000000000000002"


__all__ = [
    "CURRENCY",
    "SECURITY",
    "OTHER_TOKEN",
    "CURRENCY_DECIMALS",
    "SECURITY_DECIMALS",
    "PRIMARY_POOL_ADDRESS",
    "PRIMARY_POOL_ID",
    "SECONDARY_POOL_ADDRESS",
    "SECONDARY_POOL_ID",
]
