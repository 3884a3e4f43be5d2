"""Pricing configuration."""

from dataclasses import dataclass
from enum import Enum

from pricing.constants import MAX_SWAP_RATIO_WEI
from pricing.math.scaling import Rounding


class OrderPriority(str, Enum):
    """Order in which the secondary issue matcher walks resting orders.

    BEST_PRICE: highest bid first when selling security, lowest offer first
        when buying it. Orders at the same price keep snapshot order.
    SNAPSHOT: the order the snapshot provider supplied them in.

    The two can price the same book differently. Selling 12 security into
    bids of 10 at 2 and 5 at 3 (supplied in that order) pays 29 under
    BEST_PRICE, which fills the 3 bid first, and 26 under SNAPSHOT. Use
    SNAPSHOT to reproduce quotes from a matcher that walks supplied order.
    """

    BEST_PRICE = "best_price"
    SNAPSHOT = "snapshot"


@dataclass(frozen=True)
class PricingConfig:
    """Centralized configuration for pool pricing.

    Attributes:
        max_in_ratio: Share of balance_in tradable in one exact-in swap (18 decimals)
        max_out_ratio: Share of balance_out tradable in one exact-out swap (18 decimals)
        exact_in_rounding: Direction for the amount a pool pays out on an exact-in quote
        exact_out_rounding: Direction for the amount a trader pays in on an exact-out quote
        order_priority: Walk order for the secondary issue order book. The
            BEST_PRICE default can quote more than a supplied-order walk; see
            OrderPriority.
        now: Unix timestamp used to enforce primary issue cutoff times.
            None disables the check (snapshots are priced as of their fetch time).
    """

    max_in_ratio: int = MAX_SWAP_RATIO_WEI
    max_out_ratio: int = MAX_SWAP_RATIO_WEI

    exact_in_rounding: Rounding = Rounding.DOWN
    exact_out_rounding: Rounding = Rounding.UP

    order_priority: OrderPriority = OrderPriority.BEST_PRICE

    now: int | None = None


# Default configuration instance
DEFAULT_PRICING_CONFIG = PricingConfig()
