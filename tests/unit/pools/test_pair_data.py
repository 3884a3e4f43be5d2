"""Tests for pool pair data, swap limits and balance updates.

Shared behavior of both issue pool types: pair construction, the 30%
limit rule and the balance-update hook.
"""

from decimal import Decimal

import pytest

from pricing.pools import (
    InvalidPairError,
    PairType,
    Pool,
    PoolType,
    PrimaryIssuePool,
    SecondaryIssuePool,
    SwapType,
    TokenNotInPoolError,
)
from tests.helpers import (
    CURRENCY,
    OTHER_TOKEN,
    PRIMARY_POOL_ADDRESS,
    SECURITY,
    make_bid,
    make_primary_snapshot,
    make_secondary_snapshot,
)


class TestParsePoolPairData:
    """parse_pool_pair_data on the primary issue pool."""

    def test_cash_in_pair(self, primary_pool):
        pair = primary_pool.parse_pool_pair_data(CURRENCY, SECURITY)

        assert pair.id == primary_pool.id
        assert pair.pool_type is PoolType.PRIMARY_ISSUE
        assert pair.pair_type is PairType.CASH_TO_SECURITY
        assert pair.token_index_in == 0
        assert pair.token_index_out == 1
        assert pair.balance_in == 1_000_000 * 10**6
        assert pair.balance_out == 500 * 10**18
        assert pair.decimals_in == 6
        assert pair.decimals_out == 18
        assert pair.currency_scaling_factor == 12
        assert pair.all_balances == (Decimal("1000000"), Decimal("500"))
        assert pair.all_balances_scaled == (1_000_000 * 10**18, 500 * 10**18)
        assert pair.minimum_price == 20 * 10**18
        assert pair.minimum_order_size == 10**18

    def test_security_in_pair(self, primary_pool):
        pair = primary_pool.parse_pool_pair_data(SECURITY, CURRENCY)

        assert pair.pair_type is PairType.SECURITY_TO_CASH
        assert pair.token_index_in == 1
        assert pair.token_index_out == 0
        assert pair.currency_scaling_factor == 12

    def test_deterministic_and_idempotent(self, primary_pool, secondary_pool):
        """Two calls on the same snapshot build identical pair data."""
        assert primary_pool.parse_pool_pair_data(CURRENCY, SECURITY) == (
            primary_pool.parse_pool_pair_data(CURRENCY, SECURITY)
        )
        assert secondary_pool.parse_pool_pair_data(SECURITY, CURRENCY) == (
            secondary_pool.parse_pool_pair_data(SECURITY, CURRENCY)
        )

    def test_lookup_is_case_insensitive(self, primary_pool):
        upper = "0x" + CURRENCY[2:].upper()
        pair = primary_pool.parse_pool_pair_data(upper, SECURITY)
        assert pair.token_index_in == 0
        assert pair.pair_type is PairType.CASH_TO_SECURITY

    def test_token_not_in_pool(self, primary_pool):
        with pytest.raises(TokenNotInPoolError) as exc_info:
            primary_pool.parse_pool_pair_data(OTHER_TOKEN, SECURITY)
        assert exc_info.value.address == OTHER_TOKEN

    def test_token_out_not_in_pool(self, primary_pool):
        with pytest.raises(TokenNotInPoolError):
            primary_pool.parse_pool_pair_data(CURRENCY, OTHER_TOKEN)

    def test_token_not_in_pool_is_lookup_error(self, primary_pool):
        with pytest.raises(LookupError):
            primary_pool.parse_pool_pair_data(OTHER_TOKEN, SECURITY)

    def test_same_token_rejected(self, primary_pool):
        with pytest.raises(InvalidPairError):
            primary_pool.parse_pool_pair_data(CURRENCY, CURRENCY)

    def test_secondary_pair_carries_live_orders(self):
        pool = SecondaryIssuePool.from_venue_snapshot(
            make_secondary_snapshot(
                orders=[make_bid("bid-1", "10", "2"), make_bid("bid-2", "5", "3")],
                settled=["bid-1"],
            )
        )
        pair = pool.parse_pool_pair_data(SECURITY, CURRENCY)
        assert [o.order_reference for o in pair.orders] == ["bid-2"]


class TestPoolContract:
    """Both pool types satisfy the Pool protocol."""

    def test_primary_is_pool(self, primary_pool):
        assert isinstance(primary_pool, Pool)

    def test_secondary_is_pool(self, secondary_pool):
        assert isinstance(secondary_pool, Pool)

    def test_normalized_liquidity_is_zero(self, primary_pool, secondary_pool, cash_in_pair):
        assert primary_pool.get_normalized_liquidity(cash_in_pair) == 0
        pair = secondary_pool.parse_pool_pair_data(SECURITY, CURRENCY)
        assert secondary_pool.get_normalized_liquidity(pair) == 0


class TestGetLimitAmountSwap:
    """30% of the relevant balance, in that token's decimals."""

    def test_exact_in_uses_balance_in(self, primary_pool, cash_in_pair):
        limit = primary_pool.get_limit_amount_swap(cash_in_pair, SwapType.EXACT_IN)
        assert limit == Decimal("300000")
        assert limit.as_tuple().exponent == -6

    def test_exact_out_uses_balance_out(self, primary_pool, cash_in_pair):
        limit = primary_pool.get_limit_amount_swap(cash_in_pair, SwapType.EXACT_OUT)
        assert limit == Decimal("150")
        assert limit.as_tuple().exponent == -18

    def test_secondary_limits(self, secondary_pool):
        pair = secondary_pool.parse_pool_pair_data(SECURITY, CURRENCY)
        assert secondary_pool.get_limit_amount_swap(pair, SwapType.EXACT_IN) == Decimal("30")
        assert secondary_pool.get_limit_amount_swap(pair, SwapType.EXACT_OUT) == Decimal("300")

    def test_limit_truncates(self):
        """0.3 * 0.000001 truncates to zero in a 6-decimal token."""
        pool = PrimaryIssuePool.from_venue_snapshot(
            make_primary_snapshot(currency_balance="0.000001")
        )
        pair = pool.parse_pool_pair_data(CURRENCY, SECURITY)
        assert pool.get_limit_amount_swap(pair, SwapType.EXACT_IN) == 0


class TestUpdateTokenBalanceForPool:
    """Settled balance changes produce a new pool value."""

    def test_updates_token_balance(self, primary_pool):
        updated = primary_pool.update_token_balance_for_pool(CURRENCY, 2_000_000 * 10**6)

        assert updated.tokens[0].balance == "2000000.000000"
        assert updated.parse_pool_pair_data(CURRENCY, SECURITY).balance_in == 2_000_000 * 10**6

    def test_original_pool_unchanged(self, primary_pool):
        primary_pool.update_token_balance_for_pool(CURRENCY, 1)
        assert primary_pool.tokens[0].balance == "1000000"

    def test_lookup_is_case_insensitive(self, primary_pool):
        updated = primary_pool.update_token_balance_for_pool(SECURITY.upper().replace("0X", "0x"), 10**18)
        assert updated.tokens[1].balance == "1.000000000000000000"

    def test_pool_address_updates_total_shares(self, primary_pool):
        updated = primary_pool.update_token_balance_for_pool(PRIMARY_POOL_ADDRESS, 42 * 10**18)

        assert updated.total_shares == 42 * 10**18
        assert updated.tokens == primary_pool.tokens

    def test_unknown_token_raises(self, primary_pool):
        with pytest.raises(TokenNotInPoolError):
            primary_pool.update_token_balance_for_pool(OTHER_TOKEN, 1)

    def test_secondary_update(self, secondary_pool):
        updated = secondary_pool.update_token_balance_for_pool(CURRENCY, 5 * 10**6)
        assert isinstance(updated, SecondaryIssuePool)
        assert updated.tokens[0].balance == "5.000000"
        assert updated.orders == secondary_pool.orders
