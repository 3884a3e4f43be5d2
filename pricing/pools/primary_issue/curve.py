"""Primary issue bonding curve math.

Prices are anchored to the pool's minimum price P and adjusted by the share
of the relevant balance a trade consumes:

    cash in:      security_out = (cash_in / P) / ((Bc + cash_in) / Bc)
    security in:  cash_out     = (security_in * P) / ((Bs + security_in) / Bs)

with Bc the currency balance and Bs the security balance. The curve
discount is applied as a single a * B / (B + a) step, never through a
rounded ratio. The exact-out functions are the closed-form inverses, so an
exact-out charge always buys at least the requested amount back through the
exact-in path. All values are 18-decimal Bfp.
"""

from pricing.math.fixed_point import Bfp

from ..errors import (
    BelowMinimumOrderError,
    InsufficientBalanceError,
    UnpriceableTradeError,
)


def _check_minimum_order(security_amount: Bfp, minimum_order_size: Bfp) -> None:
    if security_amount < minimum_order_size:
        raise BelowMinimumOrderError(
            f"Security amount {security_amount} below minimum order size {minimum_order_size}"
        )


def _check_balance(amount: Bfp, balance: Bfp) -> None:
    if amount > balance:
        raise InsufficientBalanceError(f"Amount {amount} exceeds pool balance {balance}")


def _discount_down(amount: Bfp, balance: Bfp) -> Bfp:
    """amount * balance / (balance + amount), rounded down.

    Raises:
        ZeroDivisionError: If balance is zero, which leaves the curve ratio undefined
    """
    if balance.is_zero:
        raise ZeroDivisionError("Curve balance is zero")
    return amount.mul_div_down(balance, balance.add(amount))


def _undiscount_up(target: Bfp, balance: Bfp) -> Bfp:
    """Smallest amount whose discount reaches target: target * balance / (balance - target).

    Raises:
        UnpriceableTradeError: If target reaches the balance
    """
    if target >= balance:
        raise UnpriceableTradeError(f"Discounted amount {target} reaches balance {balance}")
    return target.mul_div_up(balance, balance.sub(target))


def calc_security_out_given_cash_in(
    cash_balance: Bfp,
    security_balance: Bfp,
    cash_in: Bfp,
    minimum_price: Bfp,
    minimum_order_size: Bfp,
) -> Bfp:
    """Security paid out for an exact amount of currency in.

    Raises:
        BelowMinimumOrderError: If the security out is below the minimum order size
        InsufficientBalanceError: If the security out exceeds the security balance
        ZeroDivisionError: If the minimum price or the currency balance is zero
    """
    security_out = _discount_down(cash_in, cash_balance).div_down(minimum_price)

    _check_minimum_order(security_out, minimum_order_size)
    _check_balance(security_out, security_balance)
    return security_out


def calc_cash_in_given_security_out(
    cash_balance: Bfp,
    security_balance: Bfp,
    security_out: Bfp,
    minimum_price: Bfp,
    minimum_order_size: Bfp,
) -> Bfp:
    """Currency charged for an exact amount of security out.

    Inverse of calc_security_out_given_cash_in:
        cost = security_out * P
        cash_in = cost * Bc / (Bc - cost)

    Raises:
        BelowMinimumOrderError: If security_out is below the minimum order size
        InsufficientBalanceError: If security_out exceeds the security balance
        UnpriceableTradeError: If cost reaches the currency balance
    """
    _check_minimum_order(security_out, minimum_order_size)
    _check_balance(security_out, security_balance)

    cost = security_out.mul_up(minimum_price)
    return _undiscount_up(cost, cash_balance)


def calc_cash_out_given_security_in(
    cash_balance: Bfp,
    security_balance: Bfp,
    security_in: Bfp,
    minimum_price: Bfp,
    minimum_order_size: Bfp,
) -> Bfp:
    """Currency paid out for an exact amount of security in.

    Raises:
        BelowMinimumOrderError: If security_in is below the minimum order size
        InsufficientBalanceError: If the currency out exceeds the currency balance
        ZeroDivisionError: If the security balance is zero
    """
    _check_minimum_order(security_in, minimum_order_size)

    cash_out = _discount_down(security_in, security_balance).mul_down(minimum_price)

    _check_balance(cash_out, cash_balance)
    return cash_out


def calc_security_in_given_cash_out(
    cash_balance: Bfp,
    security_balance: Bfp,
    cash_out: Bfp,
    minimum_price: Bfp,
    minimum_order_size: Bfp,
) -> Bfp:
    """Security charged for an exact amount of currency out.

    Inverse of calc_cash_out_given_security_in:
        units = cash_out / P
        security_in = units * Bs / (Bs - units)

    Raises:
        InsufficientBalanceError: If cash_out exceeds the currency balance
        UnpriceableTradeError: If cash_out reaches the value of the whole security balance
        BelowMinimumOrderError: If the security in is below the minimum order size
        ZeroDivisionError: If the minimum price is zero
    """
    _check_balance(cash_out, cash_balance)

    units = cash_out.div_up(minimum_price)
    security_in = _undiscount_up(units, security_balance)

    _check_minimum_order(security_in, minimum_order_size)
    return security_in
