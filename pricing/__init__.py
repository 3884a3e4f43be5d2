"""Issue pool pricing engine."""

from pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig
from pricing.pools import PrimaryIssuePool, SecondaryIssuePool, VenueCache, parse_pool

__version__ = "0.1.0"
__all__ = [
    "PricingConfig",
    "DEFAULT_PRICING_CONFIG",
    "PrimaryIssuePool",
    "SecondaryIssuePool",
    "VenueCache",
    "parse_pool",
    "__version__",
]
