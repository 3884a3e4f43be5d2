"""Primary issue pool: bonding-curve pricing of a security against its currency."""

from __future__ import annotations

import decimal
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, ClassVar

from pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig
from pricing.math.fixed_point import Bfp
from pricing.math.scaling import (
    DECIMAL_HIGH_PREC_CONTEXT,
    Rounding,
    amount_to_bfp,
    bfp_to_amount,
    format_fixed,
    parse_fixed,
    scale_down,
    scale_up,
)
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
from ..errors import ComputationError, IssueClosedError
from .curve import (
    calc_cash_in_given_security_out,
    calc_cash_out_given_security_in,
    calc_security_in_given_cash_out,
    calc_security_out_given_cash_in,
)

POOL_TYPE = PoolType.PRIMARY_ISSUE.value


@dataclass(frozen=True)
class PrimaryIssuePoolPairData(PoolPairData):
    """Pair view carrying the primary issue constraints.

    Attributes:
        currency_scaling_factor: 18 minus the currency token's decimals
        minimum_order_size: Smallest security amount tradable (18 decimals)
        minimum_price: Currency per security floor (18 decimals)
        security_offered: Identifier of the security being issued
        cutoff_time: End of the issuance window (unix seconds, as supplied)
    """

    currency_scaling_factor: int
    minimum_order_size: int
    minimum_price: int
    security_offered: str
    cutoff_time: str


@dataclass(frozen=True)
class PrimaryIssuePool:
    """A primary issuance venue.

    Instances are immutable. Balance updates return a new pool.
    """

    pool_type: ClassVar[PoolType] = PoolType.PRIMARY_ISSUE

    id: str
    address: str
    swap_fee: int
    total_shares: int
    tokens: tuple[PoolToken, ...]
    tokens_list: tuple[str, ...]
    security: str
    currency: str
    minimum_order_size: int
    minimum_price: int
    security_offered: str
    cutoff_time: str
    config: PricingConfig = field(default=DEFAULT_PRICING_CONFIG, compare=False, repr=False)

    @classmethod
    def from_venue_snapshot(
        cls,
        snapshot: VenueSnapshot | Mapping[str, Any],
        config: PricingConfig = DEFAULT_PRICING_CONFIG,
    ) -> PrimaryIssuePool:
        """Build the pool from a venue snapshot.

        Raises:
            MissingFieldError: If security, currency, minimumOrderSize,
                minimumPrice, securityOffered or cutoffTime is absent
            pydantic.ValidationError: If a raw record does not match the snapshot shape
        """
        snap = coerce_snapshot(snapshot)
        security = require_field(snap, POOL_TYPE, "security", "security")
        currency = require_field(snap, POOL_TYPE, "currency", "currency")
        minimum_order_size = require_field(snap, POOL_TYPE, "minimum_order_size", "minimumOrderSize")
        minimum_price = require_field(snap, POOL_TYPE, "minimum_price", "minimumPrice")
        security_offered = require_field(snap, POOL_TYPE, "security_offered", "securityOffered")
        cutoff_time = require_field(snap, POOL_TYPE, "cutoff_time", "cutoffTime")

        return cls(
            id=snap.id,
            address=snap.address,
            swap_fee=parse_fixed(snap.swap_fee, 18),
            total_shares=parse_fixed(snap.total_shares, 18),
            tokens=tokens_from_snapshot(snap),
            tokens_list=tuple(snap.tokens_list),
            security=security,
            currency=currency,
            minimum_order_size=parse_fixed(minimum_order_size, 18),
            minimum_price=parse_fixed(minimum_price, 18),
            security_offered=security_offered,
            cutoff_time=cutoff_time,
            config=config,
        )

    # Alias kept for callers that use the subgraph naming
    from_pool = from_venue_snapshot

    def parse_pool_pair_data(self, token_in: str, token_out: str) -> PrimaryIssuePoolPairData:
        fields = pair_fields(self, token_in, token_out)
        if fields["pair_type"] is PairType.CASH_TO_SECURITY:
            currency_decimals = fields["decimals_in"]
        else:
            currency_decimals = fields["decimals_out"]

        return PrimaryIssuePoolPairData(
            **fields,
            currency_scaling_factor=18 - currency_decimals,
            minimum_order_size=self.minimum_order_size,
            minimum_price=self.minimum_price,
            security_offered=self.security_offered,
            cutoff_time=self.cutoff_time,
        )

    def get_normalized_liquidity(self, pair: PrimaryIssuePoolPairData) -> Decimal:
        # Not meaningful for a price-anchored curve
        return Decimal(0)

    def get_limit_amount_swap(self, pair: PrimaryIssuePoolPairData, swap_type: SwapType) -> Decimal:
        return limit_amount_swap(pair, swap_type, self.config)

    def update_token_balance_for_pool(self, token: str, new_balance: int) -> PrimaryIssuePool:
        return update_token_balance(self, token, new_balance)

    # -------------------------------------------------------------------------
    # Quotes
    # -------------------------------------------------------------------------

    def quote_exact_in(self, pair: PrimaryIssuePoolPairData, amount: Decimal) -> SwapQuote:
        """Quote the amount out for an exact amount in."""
        if amount == 0:
            return SwapQuote.zero()
        return guard_quote(
            self.id, "exact_token_in_for_token_out", lambda: self._out_given_in(pair, amount)
        )

    def quote_exact_out(self, pair: PrimaryIssuePoolPairData, amount: Decimal) -> SwapQuote:
        """Quote the amount in required for an exact amount out."""
        if amount == 0:
            return SwapQuote.zero()
        return guard_quote(
            self.id, "token_in_for_exact_token_out", lambda: self._in_given_out(pair, amount)
        )

    def exact_token_in_for_token_out(self, pair: PrimaryIssuePoolPairData, amount: Decimal) -> Decimal:
        return self.quote_exact_in(pair, amount).value

    def token_in_for_exact_token_out(self, pair: PrimaryIssuePoolPairData, amount: Decimal) -> Decimal:
        return self.quote_exact_out(pair, amount).value

    def _out_given_in(self, pair: PrimaryIssuePoolPairData, amount: Decimal) -> Decimal:
        self._check_open(pair)
        check_amount(amount)
        cash_balance, security_balance = _curve_balances(pair)
        rounding = self.config.exact_in_rounding
        minimum_price = Bfp.from_wei(pair.minimum_price)
        minimum_order_size = Bfp.from_wei(pair.minimum_order_size)

        if pair.pair_type is PairType.CASH_TO_SECURITY:
            security_out = calc_security_out_given_cash_in(
                cash_balance,
                security_balance,
                _cash_to_bfp(amount, pair),
                minimum_price,
                minimum_order_size,
            )
            return bfp_to_amount(security_out, pair.decimals_out, rounding)

        cash_out = calc_cash_out_given_security_in(
            cash_balance,
            security_balance,
            amount_to_bfp(amount, pair.decimals_in),
            minimum_price,
            minimum_order_size,
        )
        return _bfp_to_cash(cash_out, pair, rounding)

    def _in_given_out(self, pair: PrimaryIssuePoolPairData, amount: Decimal) -> Decimal:
        self._check_open(pair)
        check_amount(amount)
        cash_balance, security_balance = _curve_balances(pair)
        rounding = self.config.exact_out_rounding
        minimum_price = Bfp.from_wei(pair.minimum_price)
        minimum_order_size = Bfp.from_wei(pair.minimum_order_size)

        if pair.pair_type is PairType.CASH_TO_SECURITY:
            cash_in = calc_cash_in_given_security_out(
                cash_balance,
                security_balance,
                amount_to_bfp(amount, pair.decimals_out),
                minimum_price,
                minimum_order_size,
            )
            return _bfp_to_cash(cash_in, pair, rounding)

        security_in = calc_security_in_given_cash_out(
            cash_balance,
            security_balance,
            _cash_to_bfp(amount, pair),
            minimum_price,
            minimum_order_size,
        )
        return bfp_to_amount(security_in, pair.decimals_in, rounding)

    def _check_open(self, pair: PrimaryIssuePoolPairData) -> None:
        """Reject trades once the issuance window has closed.

        Only enforced when the configuration supplies a current time.
        """
        if self.config.now is None:
            return
        try:
            cutoff = int(pair.cutoff_time)
        except ValueError as e:
            raise ComputationError("cutoff_time", e) from e
        if cutoff <= self.config.now:
            raise IssueClosedError(f"Issue closed at {cutoff}, now {self.config.now}")

    # -------------------------------------------------------------------------
    # Spot price and derivatives
    # -------------------------------------------------------------------------

    def spot_price_after_swap_exact_token_in_for_token_out(
        self, pair: PrimaryIssuePoolPairData, amount: Decimal
    ) -> Decimal:
        return quote_spot_price(
            self.id,
            "spot_price_after_swap_exact_token_in_for_token_out",
            pair,
            amount,
            lambda: self.quote_exact_in(pair, amount),
            exact_in=True,
        )

    def spot_price_after_swap_token_in_for_exact_token_out(
        self, pair: PrimaryIssuePoolPairData, amount: Decimal
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
        self, pair: PrimaryIssuePoolPairData, amount: Decimal
    ) -> Decimal:
        """Marginal price impact of an exact-in swap.

        d = 2 / (Bo * (Bi / (Ai + Bi - Ai * f)))

        Computed on human-unit balances; a marginal estimate, not a settlement value.
        """

        def compute() -> Decimal:
            balance_in, balance_out, fee = _human_balances(pair)
            with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
                return 2 / (balance_out * (balance_in / (amount + balance_in - amount * fee)))

        return guard_quote(
            self.id, "derivative_spot_price_after_swap_exact_token_in_for_token_out", compute
        ).value

    def derivative_spot_price_after_swap_token_in_for_exact_token_out(
        self, pair: PrimaryIssuePoolPairData, amount: Decimal
    ) -> Decimal:
        """Marginal price impact of an exact-out swap.

        d = -(Bi * (Bo / (Bo - Ao)) * 2) / ((Ao - Bo)^2 * (f - 1)^2)
        """

        def compute() -> Decimal:
            balance_in, balance_out, fee = _human_balances(pair)
            with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
                numerator = balance_in * (balance_out / (balance_out - amount)) * 2
                denominator = (amount - balance_out) ** 2 * (fee - 1) ** 2
                return -(numerator / denominator)

        return guard_quote(
            self.id, "derivative_spot_price_after_swap_token_in_for_exact_token_out", compute
        ).value


def _curve_balances(pair: PrimaryIssuePoolPairData) -> tuple[Bfp, Bfp]:
    """Currency and security balances in the 18-decimal domain."""
    if pair.pair_type is PairType.CASH_TO_SECURITY:
        cash_index, security_index = pair.token_index_in, pair.token_index_out
    else:
        cash_index, security_index = pair.token_index_out, pair.token_index_in
    return (
        Bfp.from_wei(pair.all_balances_scaled[cash_index]),
        Bfp.from_wei(pair.all_balances_scaled[security_index]),
    )


def _cash_to_bfp(amount: Decimal, pair: PrimaryIssuePoolPairData) -> Bfp:
    decimals = 18 - pair.currency_scaling_factor
    return scale_up(parse_fixed(amount, decimals), 10**pair.currency_scaling_factor)


def _bfp_to_cash(value: Bfp, pair: PrimaryIssuePoolPairData, rounding: Rounding) -> Decimal:
    decimals = 18 - pair.currency_scaling_factor
    return format_fixed(scale_down(value, 10**pair.currency_scaling_factor, rounding), decimals)


def _human_balances(pair: PoolPairData) -> tuple[Decimal, Decimal, Decimal]:
    return (
        format_fixed(pair.balance_in, pair.decimals_in),
        format_fixed(pair.balance_out, pair.decimals_out),
        format_fixed(pair.swap_fee, 18),
    )
