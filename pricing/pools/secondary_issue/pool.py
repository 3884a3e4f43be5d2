"""Secondary issue pool: order book pricing of a security against its currency."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, ClassVar

import structlog

from pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig
from pricing.math.scaling import amount_to_bfp, bfp_to_amount, parse_fixed
from pricing.models.snapshot import VenueSnapshot

from ..base import PairType, PoolPairData, PoolToken, PoolType, SwapQuote, SwapType
from ..common import (
    check_amount,
    coerce_snapshot,
    guard_quote,
    limit_amount_swap,
    pair_fields,
    quote_spot_price,
    require_field,
    tokens_from_snapshot,
    update_token_balance,
)
from .matching import (
    BookWalk,
    Order,
    live_orders,
    select_orders,
    walk_currency_in,
    walk_currency_out,
    walk_security_in,
    walk_security_out,
)

logger = structlog.get_logger()

POOL_TYPE = PoolType.SECONDARY_ISSUE.value


@dataclass(frozen=True)
class SecondaryIssuePoolPairData(PoolPairData):
    """Pair view carrying the live orders of the book, in snapshot order."""

    orders: tuple[Order, ...]


@dataclass(frozen=True)
class SecondaryIssuePool:
    """A secondary market venue backed by resting orders.

    `orders` is the full snapshot of the book and `settled_references` the
    references found in its settled trades; only the remaining orders are
    live. Instances are immutable. Balance updates return a new pool.
    """

    pool_type: ClassVar[PoolType] = PoolType.SECONDARY_ISSUE

    id: str
    address: str
    swap_fee: int
    total_shares: int
    tokens: tuple[PoolToken, ...]
    tokens_list: tuple[str, ...]
    security: str
    currency: str
    orders: tuple[Order, ...] = ()
    settled_references: tuple[str, ...] = ()
    config: PricingConfig = field(default=DEFAULT_PRICING_CONFIG, compare=False, repr=False)

    @classmethod
    def from_venue_snapshot(
        cls,
        snapshot: VenueSnapshot | Mapping[str, Any],
        config: PricingConfig = DEFAULT_PRICING_CONFIG,
    ) -> SecondaryIssuePool:
        """Build the pool from a venue snapshot.

        Raises:
            MissingFieldError: If security or currency is absent
            pydantic.ValidationError: If a raw record does not match the snapshot shape
        """
        snap = coerce_snapshot(snapshot)
        security = require_field(snap, POOL_TYPE, "security", "security")
        currency = require_field(snap, POOL_TYPE, "currency", "currency")

        orders = tuple(
            Order(
                order_reference=o.order_reference,
                token_in=o.token_in.address,
                token_out=o.token_out.address,
                amount_offered=parse_fixed(o.amount_offered, 18),
                price_offered=parse_fixed(o.price_offered, 18),
            )
            for o in snap.orders
        )

        return cls(
            id=snap.id,
            address=snap.address,
            swap_fee=parse_fixed(snap.swap_fee, 18),
            total_shares=parse_fixed(snap.total_shares, 18),
            tokens=tokens_from_snapshot(snap),
            tokens_list=tuple(snap.tokens_list),
            security=security,
            currency=currency,
            orders=orders,
            settled_references=tuple(t.order_reference for t in snap.secondary_trades),
            config=config,
        )

    from_pool = from_venue_snapshot

    def parse_pool_pair_data(self, token_in: str, token_out: str) -> SecondaryIssuePoolPairData:
        return SecondaryIssuePoolPairData(
            **pair_fields(self, token_in, token_out),
            orders=live_orders(self.orders, self.settled_references),
        )

    def get_normalized_liquidity(self, pair: SecondaryIssuePoolPairData) -> Decimal:
        # Depth is order-shaped; no curve liquidity to normalize
        return Decimal(0)

    def get_limit_amount_swap(self, pair: SecondaryIssuePoolPairData, swap_type: SwapType) -> Decimal:
        return limit_amount_swap(pair, swap_type, self.config)

    def update_token_balance_for_pool(self, token: str, new_balance: int) -> SecondaryIssuePool:
        return update_token_balance(self, token, new_balance)

    # -------------------------------------------------------------------------
    # Quotes
    # -------------------------------------------------------------------------

    def walk_exact_in(self, pair: SecondaryIssuePoolPairData, amount: Decimal) -> BookWalk:
        """Walk the book for an exact amount in.

        Raises:
            InsufficientDepthError: If amount exceeds the live depth on the matched side
        """
        check_amount(amount)
        orders = self._matching_orders(pair)
        amount_in = amount_to_bfp(amount, pair.decimals_in)
        if pair.pair_type is PairType.SECURITY_TO_CASH:
            return walk_security_in(orders, amount_in)
        return walk_currency_in(orders, amount_in)

    def walk_exact_out(self, pair: SecondaryIssuePoolPairData, amount: Decimal) -> BookWalk:
        """Walk the book for an exact amount out.

        Raises:
            InsufficientDepthError: If amount exceeds the live depth on the matched side
        """
        check_amount(amount)
        orders = self._matching_orders(pair)
        amount_out = amount_to_bfp(amount, pair.decimals_out)
        if pair.pair_type is PairType.CASH_TO_SECURITY:
            return walk_security_out(orders, amount_out)
        return walk_currency_out(orders, amount_out)

    def quote_exact_in(self, pair: SecondaryIssuePoolPairData, amount: Decimal) -> SwapQuote:
        """Quote the amount out for an exact amount in."""
        if amount == 0:
            return SwapQuote.zero()

        def compute() -> Decimal:
            walk = self.walk_exact_in(pair, amount)
            logger.debug(
                "issue_pool_book_walk",
                pool_id=self.id,
                swap_type=SwapType.EXACT_IN.value,
                orders_touched=walk.order_count,
            )
            return bfp_to_amount(walk.total, pair.decimals_out, self.config.exact_in_rounding)

        return guard_quote(self.id, "exact_token_in_for_token_out", compute)

    def quote_exact_out(self, pair: SecondaryIssuePoolPairData, amount: Decimal) -> SwapQuote:
        """Quote the amount in required for an exact amount out."""
        if amount == 0:
            return SwapQuote.zero()

        def compute() -> Decimal:
            walk = self.walk_exact_out(pair, amount)
            logger.debug(
                "issue_pool_book_walk",
                pool_id=self.id,
                swap_type=SwapType.EXACT_OUT.value,
                orders_touched=walk.order_count,
            )
            return bfp_to_amount(walk.total, pair.decimals_in, self.config.exact_out_rounding)

        return guard_quote(self.id, "token_in_for_exact_token_out", compute)

    def exact_token_in_for_token_out(self, pair: SecondaryIssuePoolPairData, amount: Decimal) -> Decimal:
        return self.quote_exact_in(pair, amount).value

    def token_in_for_exact_token_out(self, pair: SecondaryIssuePoolPairData, amount: Decimal) -> Decimal:
        return self.quote_exact_out(pair, amount).value

    def _matching_orders(self, pair: SecondaryIssuePoolPairData) -> list[Order]:
        return select_orders(
            pair.orders,
            pair.token_in,
            pair.token_out,
            pair.security,
            self.config.order_priority,
        )

    # -------------------------------------------------------------------------
    # Spot price and derivatives
    # -------------------------------------------------------------------------

    def spot_price_after_swap_exact_token_in_for_token_out(
        self, pair: SecondaryIssuePoolPairData, amount: Decimal
    ) -> Decimal:
        """Balance-ratio spot price; a coarse approximation for an order book."""
        return quote_spot_price(
            self.id,
            "spot_price_after_swap_exact_token_in_for_token_out",
            pair,
            amount,
            lambda: self.quote_exact_in(pair, amount),
            exact_in=True,
        )

    def spot_price_after_swap_token_in_for_exact_token_out(
        self, pair: SecondaryIssuePoolPairData, amount: Decimal
    ) -> Decimal:
        return quote_spot_price(
            self.id,
            "spot_price_after_swap_token_in_for_exact_token_out",
            pair,
            amount,
            lambda: self.quote_exact_out(pair, amount),
            exact_in=False,
        )

    def derivative_spot_price_after_swap_exact_token_in_for_token_out(
        self, pair: SecondaryIssuePoolPairData, amount: Decimal
    ) -> Decimal:
        # No closed form for order-shaped price impact
        return Decimal(0)

    def derivative_spot_price_after_swap_token_in_for_exact_token_out(
        self, pair: SecondaryIssuePoolPairData, amount: Decimal
    ) -> Decimal:
        return Decimal(0)
