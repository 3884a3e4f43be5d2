"""Base types shared by the issue pool implementations.

Every pool type satisfies the `Pool` protocol so the route optimizer can
treat venues uniformly without knowing which pricing model backs them.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from typing_extensions import Self

from pricing.constants import PRIMARY_ISSUE_POOL_TYPE, SECONDARY_ISSUE_POOL_TYPE

if TYPE_CHECKING:
    from pricing.pools.errors import ComputationError


class PoolType(str, Enum):
    """Issue pool kinds."""

    PRIMARY_ISSUE = PRIMARY_ISSUE_POOL_TYPE
    SECONDARY_ISSUE = SECONDARY_ISSUE_POOL_TYPE


class SwapType(str, Enum):
    """Whether the input or the output amount of a swap is fixed."""

    EXACT_IN = "swapExactIn"
    EXACT_OUT = "swapExactOut"


class PairType(str, Enum):
    """Which side of a pair is the currency."""

    CASH_TO_SECURITY = "cashTokenToSecurityToken"
    SECURITY_TO_CASH = "securityTokenToCashToken"


@dataclass(frozen=True)
class PoolToken:
    """A token held by a pool.

    Attributes:
        address: Token address
        balance: Pool balance as a decimal string in human token units
        decimals: Token decimals (0-18)
    """

    address: str
    balance: str
    decimals: int


@dataclass(frozen=True)
class PoolPairData:
    """Read-only view of a pool for one (token_in, token_out) query.

    Balances `balance_in` / `balance_out` are in the tokens' native integer
    units; `all_balances_scaled` holds every pool balance in the 18-decimal
    fixed-point domain; `swap_fee` is 18-decimal fixed point.
    """

    id: str
    address: str
    pool_type: PoolType
    pair_type: PairType
    token_in: str
    token_out: str
    balance_in: int
    balance_out: int
    decimals_in: int
    decimals_out: int
    swap_fee: int
    all_balances: tuple[Decimal, ...]
    all_balances_scaled: tuple[int, ...]
    token_index_in: int
    token_index_out: int
    security: str
    currency: str


class QuoteStatus(str, Enum):
    """Outcome of a quote."""

    OK = "ok"
    INFEASIBLE = "infeasible"
    FAULT = "fault"


@dataclass(frozen=True)
class SwapQuote:
    """Result of a swap quote.

    Separates policy rejections (INFEASIBLE: below minimum order, not enough
    balance or depth) from arithmetic faults (FAULT) while keeping the
    router's contract that anything other than OK prices as zero.

    Examples:
        quote = SwapQuote.ok(Decimal("2.5"))
        assert quote.value == Decimal("2.5")

        quote = SwapQuote.infeasible("below minimum order size")
        assert quote.value == 0
    """

    amount: Decimal
    status: QuoteStatus = QuoteStatus.OK
    reason: str | None = None
    error: ComputationError | None = None

    @property
    def is_ok(self) -> bool:
        return self.status is QuoteStatus.OK

    @property
    def is_infeasible(self) -> bool:
        return self.status is QuoteStatus.INFEASIBLE

    @property
    def is_fault(self) -> bool:
        return self.status is QuoteStatus.FAULT

    @property
    def value(self) -> Decimal:
        """Amount the router should use: the quoted amount, or zero."""
        return self.amount if self.is_ok else Decimal(0)

    @classmethod
    def ok(cls, amount: Decimal) -> SwapQuote:
        return cls(amount=amount)

    @classmethod
    def zero(cls) -> SwapQuote:
        """Quote for a zero-amount request."""
        return cls(amount=Decimal(0))

    @classmethod
    def infeasible(cls, reason: str) -> SwapQuote:
        return cls(amount=Decimal(0), status=QuoteStatus.INFEASIBLE, reason=reason)

    @classmethod
    def fault(cls, error: ComputationError) -> SwapQuote:
        return cls(amount=Decimal(0), status=QuoteStatus.FAULT, reason=str(error), error=error)


@runtime_checkable
class Pool(Protocol):
    """Capability contract every issue pool implements.

    All amounts are Decimals in human token units. Results are expressed in
    the returned token's own decimals.
    """

    id: str
    address: str
    pool_type: PoolType

    @classmethod
    def from_venue_snapshot(cls, snapshot: Any) -> Self:
        """Build the pool from a venue snapshot.

        Raises:
            MissingFieldError: If a field required by the pool type is absent
        """
        ...

    def parse_pool_pair_data(self, token_in: str, token_out: str) -> PoolPairData:
        """Build the pair view for a swap.

        Raises:
            TokenNotInPoolError: If either token is not in the pool
            InvalidPairError: If token_in equals token_out
        """
        ...

    def get_normalized_liquidity(self, pair: Any) -> Decimal: ...

    def get_limit_amount_swap(self, pair: Any, swap_type: SwapType) -> Decimal: ...

    def quote_exact_in(self, pair: Any, amount: Decimal) -> SwapQuote: ...

    def quote_exact_out(self, pair: Any, amount: Decimal) -> SwapQuote: ...

    def exact_token_in_for_token_out(self, pair: Any, amount: Decimal) -> Decimal: ...

    def token_in_for_exact_token_out(self, pair: Any, amount: Decimal) -> Decimal: ...

    def spot_price_after_swap_exact_token_in_for_token_out(
        self, pair: Any, amount: Decimal
    ) -> Decimal: ...

    def spot_price_after_swap_token_in_for_exact_token_out(
        self, pair: Any, amount: Decimal
    ) -> Decimal: ...

    def derivative_spot_price_after_swap_exact_token_in_for_token_out(
        self, pair: Any, amount: Decimal
    ) -> Decimal: ...

    def derivative_spot_price_after_swap_token_in_for_exact_token_out(
        self, pair: Any, amount: Decimal
    ) -> Decimal: ...

    def update_token_balance_for_pool(self, token: str, new_balance: int) -> Self:
        """Return a copy of the pool with a settled balance applied.

        Raises:
            TokenNotInPoolError: If token is neither the pool address nor a pool token
        """
        ...
