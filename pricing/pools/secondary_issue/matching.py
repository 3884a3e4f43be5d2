"""Order book matching for secondary issue pools.

Orders are read from the pool's perspective: an order takes `token_in` from
the requester and pays out `token_out`. `amount_offered` is always a
quantity of the security and `price_offered` is currency per security, both
18-decimal fixed point.

- Bids take security in and pay currency out; they fill sells of security.
- Asks take currency in and pay security out; they fill buys of security.

A walk consumes orders greedily in priority order and never writes back to
the book.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from pricing.config import OrderPriority
from pricing.math.fixed_point import Bfp
from pricing.models.types import is_same_address

from ..errors import InsufficientDepthError


@dataclass(frozen=True)
class Order:
    """A resting order on a secondary issue pool.

    Attributes:
        order_reference: Order identifier
        token_in: Token the order takes from the requester
        token_out: Token the order pays to the requester
        amount_offered: Security quantity (18 decimals)
        price_offered: Currency per security (18 decimals)
    """

    order_reference: str
    token_in: str
    token_out: str
    amount_offered: int
    price_offered: int

    @property
    def amount(self) -> Bfp:
        return Bfp.from_wei(self.amount_offered)

    @property
    def price(self) -> Bfp:
        return Bfp.from_wei(self.price_offered)


@dataclass(frozen=True)
class OrderFill:
    """One order touched by a walk.

    Attributes:
        order_reference: Order identifier
        consumed: Amount of the requested leg taken by this order (18 decimals)
        counter_amount: Amount of the other leg this order contributed (18 decimals)
        complete: True if the order was consumed entirely
    """

    order_reference: str
    consumed: Bfp
    counter_amount: Bfp
    complete: bool


@dataclass(frozen=True)
class BookWalk:
    """Result of walking the book for a requested amount.

    Attributes:
        requested: Requested amount (18 decimals)
        total: Accumulated counter amount across all fills (18 decimals)
        depth: Total capacity of the selected orders in the requested leg
        fills: Orders touched, in walk order
    """

    requested: Bfp
    total: Bfp
    depth: Bfp
    fills: tuple[OrderFill, ...]

    @property
    def order_count(self) -> int:
        return len(self.fills)


def live_orders(orders: Iterable[Order], settled_references: Iterable[str]) -> tuple[Order, ...]:
    """Orders whose reference has not been settled, in snapshot order."""
    settled = set(settled_references)
    return tuple(o for o in orders if o.order_reference not in settled)


def select_orders(
    orders: Iterable[Order],
    token_in: str,
    token_out: str,
    security: str,
    priority: OrderPriority = OrderPriority.BEST_PRICE,
) -> list[Order]:
    """Orders able to fill a token_in -> token_out request, in walk order.

    With BEST_PRICE priority, asks (paying out the security) are walked
    cheapest first and bids highest first. The sort is stable so orders at
    the same price keep their snapshot order.
    """
    selected = [
        o
        for o in orders
        if is_same_address(o.token_in, token_in) and is_same_address(o.token_out, token_out)
    ]
    if priority is OrderPriority.SNAPSHOT:
        return selected

    buying_security = is_same_address(token_out, security)
    return sorted(selected, key=lambda o: o.price_offered, reverse=not buying_security)


def _walk(
    orders: Sequence[Order],
    requested: Bfp,
    capacity: Callable[[Order], Bfp],
    full_value: Callable[[Order], Bfp],
    partial_value: Callable[[Order, Bfp], Bfp],
) -> BookWalk:
    """Greedy walk shared by every direction.

    Raises:
        InsufficientDepthError: If requested exceeds the summed capacity
    """
    capacities = [capacity(o) for o in orders]
    depth = Bfp(0)
    for c in capacities:
        depth = depth.add(c)
    if requested > depth:
        raise InsufficientDepthError(f"Requested {requested} exceeds order book depth {depth}")

    total = Bfp(0)
    remaining = requested
    fills: list[OrderFill] = []
    for order, cap in zip(orders, capacities):
        if remaining.is_zero:
            break
        if cap <= remaining:
            value = full_value(order)
            fills.append(OrderFill(order.order_reference, cap, value, complete=True))
            remaining = remaining.sub(cap)
        else:
            value = partial_value(order, remaining)
            fills.append(OrderFill(order.order_reference, remaining, value, complete=False))
            remaining = Bfp(0)
        total = total.add(value)

    return BookWalk(requested=requested, total=total, depth=depth, fills=tuple(fills))


def walk_security_in(orders: Sequence[Order], security_in: Bfp) -> BookWalk:
    """Currency paid out by bids for an exact amount of security in."""
    return _walk(
        orders,
        security_in,
        capacity=lambda o: o.amount,
        full_value=lambda o: o.amount.mul_down(o.price),
        partial_value=lambda o, r: r.mul_down(o.price),
    )


def walk_currency_in(orders: Sequence[Order], currency_in: Bfp) -> BookWalk:
    """Security paid out by asks for an exact amount of currency in."""
    return _walk(
        orders,
        currency_in,
        capacity=lambda o: o.amount.mul_up(o.price),
        full_value=lambda o: o.amount,
        partial_value=lambda o, r: r.div_down(o.price),
    )


def walk_security_out(orders: Sequence[Order], security_out: Bfp) -> BookWalk:
    """Currency charged by asks for an exact amount of security out."""
    return _walk(
        orders,
        security_out,
        capacity=lambda o: o.amount,
        full_value=lambda o: o.amount.mul_up(o.price),
        partial_value=lambda o, r: r.mul_up(o.price),
    )


def walk_currency_out(orders: Sequence[Order], currency_out: Bfp) -> BookWalk:
    """Security charged by bids for an exact amount of currency out."""
    return _walk(
        orders,
        currency_out,
        capacity=lambda o: o.amount.mul_down(o.price),
        full_value=lambda o: o.amount,
        partial_value=lambda o, r: r.div_up(o.price),
    )
