"""Secondary issue (order book) pool."""

from .matching import (
    BookWalk,
    Order,
    OrderFill,
    live_orders,
    select_orders,
    walk_currency_in,
    walk_currency_out,
    walk_security_in,
    walk_security_out,
)
from .pool import SecondaryIssuePool, SecondaryIssuePoolPairData

__all__ = [
    "BookWalk",
    "Order",
    "OrderFill",
    "SecondaryIssuePool",
    "SecondaryIssuePoolPairData",
    "live_orders",
    "select_orders",
    "walk_currency_in",
    "walk_currency_out",
    "walk_security_in",
    "walk_security_out",
]
