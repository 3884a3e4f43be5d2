"""Pydantic models for venue snapshots.

A snapshot is the already-fetched state of one issue pool, in the same
camelCase shape the pool subgraph serves. Venue-specific fields are all
optional here; each pool type enforces its own required set when it is
built from the snapshot.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from pricing.models.types import Address, DecimalString


class TokenSnapshot(BaseModel):
    """One token held by a pool."""

    address: Address
    balance: DecimalString = Field(description="Pool balance in human token units.")
    decimals: int = Field(ge=0, le=18)


class OrderToken(BaseModel):
    """Token reference inside an order."""

    address: Address


class OrderSnapshot(BaseModel):
    """A resting order on a secondary issue pool.

    `amount_offered` is a quantity of the security token and
    `price_offered` is expressed in currency per security.
    """

    order_reference: str = Field(alias="orderReference")
    token_in: OrderToken = Field(alias="tokenIn")
    token_out: OrderToken = Field(alias="tokenOut")
    amount_offered: DecimalString = Field(alias="amountOffered")
    price_offered: DecimalString = Field(alias="priceOffered")

    model_config = {"populate_by_name": True}


class SecondaryTradeSnapshot(BaseModel):
    """A settled trade; its order reference is no longer live."""

    order_reference: str = Field(alias="orderReference")

    model_config = {"populate_by_name": True, "extra": "allow"}


class VenueSnapshot(BaseModel):
    """State of one issue pool as supplied by the snapshot provider."""

    id: str
    address: Address
    pool_type: str | None = Field(default=None, alias="poolType")
    swap_fee: DecimalString = Field(default="0", alias="swapFee")
    total_shares: DecimalString = Field(default="0", alias="totalShares")
    tokens: list[TokenSnapshot]
    tokens_list: list[str] = Field(default_factory=list, alias="tokensList")

    security: str | None = None
    currency: str | None = None

    # Primary issue fields
    minimum_order_size: DecimalString | None = Field(default=None, alias="minimumOrderSize")
    minimum_price: DecimalString | None = Field(default=None, alias="minimumPrice")
    security_offered: str | None = Field(default=None, alias="securityOffered")
    cutoff_time: DecimalString | None = Field(default=None, alias="cutoffTime")

    # Secondary issue fields
    orders: list[OrderSnapshot] = Field(default_factory=list)
    secondary_trades: list[SecondaryTradeSnapshot] = Field(
        default_factory=list, alias="secondaryTrades"
    )

    model_config = {"populate_by_name": True, "extra": "allow"}

    @field_validator(
        "security",
        "currency",
        "minimum_order_size",
        "minimum_price",
        "security_offered",
        "cutoff_time",
        mode="before",
    )
    @classmethod
    def empty_as_missing(cls, value: Any) -> Any:
        """The subgraph serves unset issue fields as empty strings."""
        if value == "":
            return None
        return value
