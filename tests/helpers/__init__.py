"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token and pool addresses
- factories: Venue snapshot and order factory functions
"""

from tests.helpers.constants import (
    CURRENCY,
    CURRENCY_DECIMALS,
    OTHER_TOKEN,
    PRIMARY_POOL_ADDRESS,
    PRIMARY_POOL_ID,
    SECONDARY_POOL_ADDRESS,
    SECONDARY_POOL_ID,
    SECURITY,
    SECURITY_DECIMALS,
)
from tests.helpers.factories import (
    make_ask,
    make_bid,
    make_primary_snapshot,
    make_secondary_snapshot,
)

__all__ = [
    # Constants
    "CURRENCY",
    "SECURITY",
    "OTHER_TOKEN",
    "CURRENCY_DECIMALS",
    "SECURITY_DECIMALS",
    "PRIMARY_POOL_ADDRESS",
    "PRIMARY_POOL_ID",
    "SECONDARY_POOL_ADDRESS",
    "SECONDARY_POOL_ID",
    # Factories
    "make_primary_snapshot",
    "make_secondary_snapshot",
    "make_bid",
    "make_ask",
]
