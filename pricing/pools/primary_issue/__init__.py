"""Primary issue (bonding curve) pool."""

from .curve import (
    calc_cash_in_given_security_out,
    calc_cash_out_given_security_in,
    calc_security_in_given_cash_out,
    calc_security_out_given_cash_in,
)
from .pool import PrimaryIssuePool, PrimaryIssuePoolPairData

__all__ = [
    "PrimaryIssuePool",
    "PrimaryIssuePoolPairData",
    "calc_cash_in_given_security_out",
    "calc_cash_out_given_security_in",
    "calc_security_in_given_cash_out",
    "calc_security_out_given_cash_in",
]
