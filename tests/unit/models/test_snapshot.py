"""Tests for venue snapshot models and address helpers."""

import pytest
from pydantic import ValidationError

from pricing.models import (
    VenueSnapshot,
    is_same_address,
    is_valid_address,
    normalize_address,
)
from tests.helpers import (
    CURRENCY,
    SECURITY,
    make_bid,
    make_primary_snapshot,
    make_secondary_snapshot,
)


class TestVenueSnapshot:
    """Parsing camelCase subgraph records."""

    def test_parse_primary_record(self):
        snap = VenueSnapshot.model_validate(make_primary_snapshot())

        assert snap.pool_type == "PrimaryIssue"
        assert snap.minimum_price == "20"
        assert snap.minimum_order_size == "1"
        assert snap.cutoff_time == "1900000000"
        assert [t.decimals for t in snap.tokens] == [6, 18]
        assert snap.orders == []

    def test_parse_secondary_record(self):
        record = make_secondary_snapshot(orders=[make_bid("bid-1", "10", "2")], settled=["old"])
        snap = VenueSnapshot.model_validate(record)

        assert len(snap.orders) == 1
        order = snap.orders[0]
        assert order.order_reference == "bid-1"
        assert order.token_in.address == SECURITY
        assert order.token_out.address == CURRENCY
        assert order.amount_offered == "10"
        assert [t.order_reference for t in snap.secondary_trades] == ["old"]

    def test_missing_issue_fields_are_none(self):
        """Required-ness is enforced per pool type, not by the model."""
        snap = VenueSnapshot.model_validate(make_primary_snapshot(minimum_price=None))
        assert snap.minimum_price is None

    @pytest.mark.parametrize(
        "kwarg",
        ["minimum_price", "minimum_order_size", "security_offered", "cutoff_time", "security"],
    )
    def test_empty_issue_fields_are_none(self, kwarg):
        """The subgraph serves unset fields as empty strings."""
        snap = VenueSnapshot.model_validate(make_primary_snapshot(**{kwarg: ""}))
        assert getattr(snap, kwarg) is None

    def test_numeric_balance_is_accepted(self):
        record = make_primary_snapshot()
        record["tokens"][0]["balance"] = 1000000
        snap = VenueSnapshot.model_validate(record)
        assert snap.tokens[0].balance == "1000000"

    def test_negative_balance_rejected(self):
        record = make_primary_snapshot(currency_balance="-1")
        with pytest.raises(ValidationError):
            VenueSnapshot.model_validate(record)

    def test_non_numeric_swap_fee_rejected(self):
        with pytest.raises(ValidationError):
            VenueSnapshot.model_validate(make_primary_snapshot(swap_fee="abc"))

    def test_non_numeric_issue_fields_rejected(self):
        with pytest.raises(ValidationError):
            VenueSnapshot.model_validate(make_primary_snapshot(minimum_price="twenty"))
        with pytest.raises(ValidationError):
            VenueSnapshot.model_validate(make_primary_snapshot(cutoff_time="soon"))

    def test_numeric_cutoff_is_accepted(self):
        snap = VenueSnapshot.model_validate(make_primary_snapshot(cutoff_time=1900000000))
        assert snap.cutoff_time == "1900000000"

    def test_decimals_out_of_range_rejected(self):
        record = make_primary_snapshot()
        record["tokens"][1]["decimals"] = 19
        with pytest.raises(ValidationError):
            VenueSnapshot.model_validate(record)

    def test_invalid_address_rejected(self):
        with pytest.raises(ValidationError):
            VenueSnapshot.model_validate(make_primary_snapshot(address="0x1234"))

    def test_unknown_fields_allowed(self):
        snap = VenueSnapshot.model_validate(make_primary_snapshot(amp="100"))
        assert snap.id == make_primary_snapshot()["id"]


class TestAddressHelpers:
    """Case-insensitive address comparison."""

    def test_normalize_lowercases(self):
        assert normalize_address("0xABCDEF0000000000000000000000000000000000") == (
            "0xabcdef0000000000000000000000000000000000"
        )

    def test_normalize_adds_prefix(self):
        assert normalize_address("ab" * 20) == "0x" + "ab" * 20

    def test_normalize_validate_raises(self):
        with pytest.raises(ValueError, match="Invalid address"):
            normalize_address("0x1234", validate=True)

    def test_is_valid_address(self):
        assert is_valid_address(CURRENCY)
        assert not is_valid_address("0x1234")
        assert not is_valid_address("0x" + "zz" * 20)

    def test_is_same_address_ignores_case(self):
        assert is_same_address(CURRENCY, CURRENCY.upper().replace("0X", "0x"))
        assert not is_same_address(CURRENCY, SECURITY)
