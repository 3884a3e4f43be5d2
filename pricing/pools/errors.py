"""Issue pool error classes.

Construction and lookup errors are raised to the caller. Computation errors
are caught inside the quote primitives and reported on the SwapQuote.
"""


class PoolError(Exception):
    """Base error for issue pool operations."""

    pass


class MissingFieldError(PoolError):
    """Snapshot lacks a field required by the pool type."""

    def __init__(self, pool_type: str, field: str) -> None:
        super().__init__(f'{pool_type} missing "{field}"')
        self.pool_type = pool_type
        self.field = field


class TokenNotInPoolError(PoolError, LookupError):
    """Requested token is not held by the pool."""

    def __init__(self, pool_id: str, address: str) -> None:
        super().__init__(f"Pool {pool_id} does not contain token {address}")
        self.pool_id = pool_id
        self.address = address


class InvalidPairError(PoolError, ValueError):
    """Token in and token out must differ."""

    pass


class UnknownPoolTypeError(PoolError):
    """Snapshot pool type is not an issue pool."""

    pass


class ComputationError(PoolError):
    """Arithmetic fault while computing a quote.

    Wraps the underlying exception (division by a degenerate balance,
    uint256 overflow, out-of-range scaling) so it can be logged and carried
    on the quote instead of propagating.
    """

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation}: {cause}")
        self.operation = operation
        self.cause = cause


class InfeasibleTradeError(PoolError):
    """Policy rejection: the pool cannot fill this trade.

    Quote primitives turn these into a zero-amount INFEASIBLE quote.
    """

    pass


class BelowMinimumOrderError(InfeasibleTradeError):
    """Security leg is below the pool's minimum order size."""

    pass


class InsufficientBalanceError(InfeasibleTradeError):
    """Trade would pay out more than the pool holds."""

    pass


class UnpriceableTradeError(InfeasibleTradeError):
    """Curve denominator would be zero or negative at the minimum price."""

    pass


class InsufficientDepthError(InfeasibleTradeError):
    """Requested amount exceeds the live order book depth."""

    pass


class IssueClosedError(InfeasibleTradeError):
    """Primary issue cutoff time has passed."""

    pass
