"""Helpers shared by the primary and secondary issue pools.

Pair-data construction, swap limits, balance updates, spot prices and the
quote guard that turns rejections and faults into zero-amount quotes.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any, TypeVar

import structlog

from pricing.config import PricingConfig
from pricing.math.fixed_point import Bfp
from pricing.math.scaling import (
    amount_to_bfp,
    format_fixed,
    parse_fixed,
    scale_up,
    scaling_factor,
)
from pricing.models.snapshot import VenueSnapshot
from pricing.models.types import is_same_address, normalize_address

from .base import PairType, PoolToken, SwapQuote, SwapType
from .errors import (
    ComputationError,
    InfeasibleTradeError,
    InvalidPairError,
    MissingFieldError,
    TokenNotInPoolError,
)

logger = structlog.get_logger()

PoolT = TypeVar("PoolT")


# =============================================================================
# Snapshot helpers
# =============================================================================


def coerce_snapshot(snapshot: VenueSnapshot | Mapping[str, Any]) -> VenueSnapshot:
    """Accept either a validated snapshot model or a raw subgraph record."""
    if isinstance(snapshot, VenueSnapshot):
        return snapshot
    return VenueSnapshot.model_validate(snapshot)


def require_field(snapshot: VenueSnapshot, pool_type: str, field: str, alias: str) -> str:
    """Return a required snapshot field, raising MissingFieldError when absent or empty."""
    value = getattr(snapshot, field)
    if value is None or value == "":
        raise MissingFieldError(pool_type, alias)
    return value


def tokens_from_snapshot(snapshot: VenueSnapshot) -> tuple[PoolToken, ...]:
    return tuple(
        PoolToken(address=t.address, balance=t.balance, decimals=t.decimals)
        for t in snapshot.tokens
    )


# =============================================================================
# Pair data
# =============================================================================


def find_token_index(tokens: tuple[PoolToken, ...], address: str) -> int | None:
    """Index of a token by address (case-insensitive), or None."""
    target = normalize_address(address)
    for i, token in enumerate(tokens):
        if normalize_address(token.address) == target:
            return i
    return None


def pair_fields(pool: Any, token_in: str, token_out: str) -> dict[str, Any]:
    """Build the PoolPairData fields common to every issue pool.

    Args:
        pool: Pool exposing id, address, pool_type, tokens, swap_fee,
            security and currency
        token_in: Input token address (any case)
        token_out: Output token address (any case)

    Returns:
        Keyword arguments for a PoolPairData subclass

    Raises:
        InvalidPairError: If token_in and token_out are the same token
        TokenNotInPoolError: If either token is not in the pool
    """
    if is_same_address(token_in, token_out):
        raise InvalidPairError(f"Pool {pool.id}: token_in and token_out are both {token_in}")

    index_in = find_token_index(pool.tokens, token_in)
    if index_in is None:
        raise TokenNotInPoolError(pool.id, token_in)
    index_out = find_token_index(pool.tokens, token_out)
    if index_out is None:
        raise TokenNotInPoolError(pool.id, token_out)

    t_in = pool.tokens[index_in]
    t_out = pool.tokens[index_out]

    if is_same_address(token_in, pool.currency):
        pair_type = PairType.CASH_TO_SECURITY
    else:
        pair_type = PairType.SECURITY_TO_CASH

    return {
        "id": pool.id,
        "address": pool.address,
        "pool_type": pool.pool_type,
        "pair_type": pair_type,
        "token_in": token_in,
        "token_out": token_out,
        "balance_in": parse_fixed(t_in.balance, t_in.decimals),
        "balance_out": parse_fixed(t_out.balance, t_out.decimals),
        "decimals_in": t_in.decimals,
        "decimals_out": t_out.decimals,
        "swap_fee": pool.swap_fee,
        "all_balances": tuple(Decimal(t.balance) for t in pool.tokens),
        "all_balances_scaled": tuple(parse_fixed(t.balance, 18) for t in pool.tokens),
        "token_index_in": index_in,
        "token_index_out": index_out,
        "security": pool.security,
        "currency": pool.currency,
    }


def limit_amount_swap(pair: Any, swap_type: SwapType, config: PricingConfig) -> Decimal:
    """Maximum tradable amount: a fixed share of the relevant balance.

    Exact-in limits are expressed in the input token's decimals, exact-out
    limits in the output token's decimals.
    """
    if swap_type is SwapType.EXACT_IN:
        limit = (pair.balance_in * config.max_in_ratio) // Bfp.ONE
        return format_fixed(limit, pair.decimals_in)
    limit = (pair.balance_out * config.max_out_ratio) // Bfp.ONE
    return format_fixed(limit, pair.decimals_out)


# =============================================================================
# Balance updates
# =============================================================================


def update_token_balance(pool: PoolT, token: str, new_balance: int) -> PoolT:
    """Return a copy of `pool` with a settled balance applied.

    When `token` is the pool's own share token, `total_shares` is replaced.
    Otherwise `new_balance` is in the token's native units.

    Raises:
        TokenNotInPoolError: If token is not the pool address nor a pool token
    """
    if is_same_address(pool.address, token):  # type: ignore[attr-defined]
        return dataclasses.replace(pool, total_shares=new_balance)  # type: ignore[type-var]

    tokens: tuple[PoolToken, ...] = pool.tokens  # type: ignore[attr-defined]
    index = find_token_index(tokens, token)
    if index is None:
        raise TokenNotInPoolError(pool.id, token)  # type: ignore[attr-defined]

    old = tokens[index]
    updated = dataclasses.replace(old, balance=str(format_fixed(new_balance, old.decimals)))
    new_tokens = tokens[:index] + (updated,) + tokens[index + 1 :]
    logger.debug(
        "issue_pool_balance_updated",
        pool_id=pool.id,  # type: ignore[attr-defined]
        token=token,
        old_balance=old.balance,
        new_balance=updated.balance,
    )
    return dataclasses.replace(pool, tokens=new_tokens)  # type: ignore[type-var]


# =============================================================================
# Spot price
# =============================================================================


def spot_price_after_swap(pair: Any, amount_in: Decimal, amount_out: Decimal) -> Decimal:
    """Spot price after a swap, in currency per security.

    sp = (x + x') / (y - y'), with x the balance of the token coming in,
    y the balance of the other token, x' the amount in and y' the amount out.
    Inverted when the security is the token coming in.

    Raises:
        ZeroDivisionError: If the post-trade denominator is zero
    """
    x = scale_up(pair.balance_in, scaling_factor(pair.decimals_in))
    y = scale_up(pair.balance_out, scaling_factor(pair.decimals_out))
    x_after = x.add(amount_to_bfp(amount_in, pair.decimals_in))
    out = amount_to_bfp(amount_out, pair.decimals_out)
    if out >= y:
        raise InfeasibleTradeError(f"Amount out {amount_out} drains balance {pair.balance_out}")
    y_after = y.sub(out)

    if pair.pair_type is PairType.CASH_TO_SECURITY:
        return x_after.div_down(y_after).to_decimal()
    return y_after.div_down(x_after).to_decimal()


# =============================================================================
# Quote guard
# =============================================================================


def check_amount(amount: Decimal) -> None:
    """Reject negative request amounts.

    Raises:
        InfeasibleTradeError: If amount is negative
    """
    if amount < 0:
        raise InfeasibleTradeError(f"Negative amount {amount}")


def guard_quote(pool_id: str, operation: str, compute: Callable[[], Decimal]) -> SwapQuote:
    """Run a quote computation and classify its outcome.

    Policy rejections (InfeasibleTradeError) become INFEASIBLE quotes and are
    logged at debug level. Arithmetic faults become FAULT quotes, logged at
    warning level, and never propagate to the router.
    """
    try:
        return SwapQuote.ok(compute())
    except InfeasibleTradeError as e:
        logger.debug(
            "issue_pool_quote_infeasible",
            pool_id=pool_id,
            operation=operation,
            reason=str(e),
        )
        return SwapQuote.infeasible(str(e))
    except (ComputationError, ArithmeticError) as e:
        error = e if isinstance(e, ComputationError) else ComputationError(operation, e)
        logger.warning(
            "issue_pool_quote_fault",
            pool_id=pool_id,
            operation=operation,
            error=str(error),
            error_type=type(error.cause).__name__,
        )
        return SwapQuote.fault(error)


def quote_spot_price(
    pool_id: str,
    operation: str,
    pair: Any,
    amount: Decimal,
    quote: Callable[[], SwapQuote],
    *,
    exact_in: bool,
) -> Decimal:
    """Spot price after a quoted swap, or zero when the swap is not feasible."""
    if amount == 0:
        traded = Decimal(0)
    else:
        result = quote()
        if not result.is_ok:
            return Decimal(0)
        traded = result.amount

    amount_in, amount_out = (amount, traded) if exact_in else (traded, amount)
    return guard_quote(
        pool_id, operation, lambda: spot_price_after_swap(pair, amount_in, amount_out)
    ).value
