"""Issue pool package.

Provides the primary issue (bonding curve) and secondary issue (order book)
pools, the Pool contract they share, and VenueCache for holding them.
"""

from .base import (
    PairType,
    Pool,
    PoolPairData,
    PoolToken,
    PoolType,
    QuoteStatus,
    SwapQuote,
    SwapType,
)
from .errors import (
    BelowMinimumOrderError,
    ComputationError,
    InfeasibleTradeError,
    InsufficientBalanceError,
    InsufficientDepthError,
    InvalidPairError,
    IssueClosedError,
    MissingFieldError,
    PoolError,
    TokenNotInPoolError,
    UnknownPoolTypeError,
    UnpriceableTradeError,
)
from .primary_issue import PrimaryIssuePool, PrimaryIssuePoolPairData
from .registry import VenueCache, build_cache_from_snapshots, parse_pool
from .secondary_issue import Order, SecondaryIssuePool, SecondaryIssuePoolPairData
from .types import AnyPool

__all__ = [
    # Contract
    "Pool",
    "PoolPairData",
    "PoolToken",
    "PoolType",
    "PairType",
    "SwapType",
    "SwapQuote",
    "QuoteStatus",
    # Pools
    "AnyPool",
    "PrimaryIssuePool",
    "PrimaryIssuePoolPairData",
    "SecondaryIssuePool",
    "SecondaryIssuePoolPairData",
    "Order",
    # Cache
    "VenueCache",
    "build_cache_from_snapshots",
    "parse_pool",
    # Errors
    "PoolError",
    "MissingFieldError",
    "TokenNotInPoolError",
    "InvalidPairError",
    "UnknownPoolTypeError",
    "ComputationError",
    "InfeasibleTradeError",
    "BelowMinimumOrderError",
    "InsufficientBalanceError",
    "InsufficientDepthError",
    "UnpriceableTradeError",
    "IssueClosedError",
]
