"""Pytest configuration and fixtures."""

import pytest

from pricing.pools import (
    PrimaryIssuePool,
    PrimaryIssuePoolPairData,
    SecondaryIssuePool,
)
from tests.helpers import (
    CURRENCY,
    SECURITY,
    make_ask,
    make_bid,
    make_primary_snapshot,
    make_secondary_snapshot,
)


@pytest.fixture
def primary_pool() -> PrimaryIssuePool:
    """1,000,000 currency / 500 security, minimum price 20, minimum order 1."""
    return PrimaryIssuePool.from_venue_snapshot(make_primary_snapshot())


@pytest.fixture
def cash_in_pair(primary_pool: PrimaryIssuePool) -> PrimaryIssuePoolPairData:
    """Currency in, security out."""
    return primary_pool.parse_pool_pair_data(CURRENCY, SECURITY)


@pytest.fixture
def security_in_pair(primary_pool: PrimaryIssuePool) -> PrimaryIssuePoolPairData:
    """Security in, currency out."""
    return primary_pool.parse_pool_pair_data(SECURITY, CURRENCY)


@pytest.fixture
def secondary_pool() -> SecondaryIssuePool:
    """Two bids ({10 @ 2}, {5 @ 3}) and two asks ({4 @ 2.5}, {6 @ 2})."""
    return SecondaryIssuePool.from_venue_snapshot(
        make_secondary_snapshot(
            orders=[
                make_bid("bid-1", "10", "2"),
                make_bid("bid-2", "5", "3"),
                make_ask("ask-1", "4", "2.5"),
                make_ask("ask-2", "6", "2"),
            ]
        )
    )
