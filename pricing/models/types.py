"""Shared type definitions for venue snapshot models."""

import re
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BeforeValidator, Field


def validate_decimal_string(value: Any) -> str:
    """Validate that a value is a non-negative decimal amount.

    Args:
        value: Value to validate (string, int or Decimal)

    Returns:
        The amount as a decimal string

    Raises:
        ValueError: If value is not a finite, non-negative decimal number
    """
    if isinstance(value, bool):
        raise ValueError("Decimal amount cannot be a boolean")
    if isinstance(value, (int, Decimal)):
        value = str(value)
    if not isinstance(value, str):
        raise ValueError(f"Decimal amount must be string or number, got {type(value).__name__}")

    try:
        parsed = Decimal(value)
    except InvalidOperation as err:
        raise ValueError(f"Decimal amount must be a decimal string: '{value}'") from err

    if not parsed.is_finite():
        raise ValueError(f"Decimal amount must be finite: {value}")
    if parsed < 0:
        raise ValueError(f"Decimal amount cannot be negative: {value}")

    return value


# Ethereum address (40 hex chars after 0x prefix)
ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
_ADDRESS_RE = re.compile(ADDRESS_PATTERN)

Address = Annotated[str, Field(pattern=ADDRESS_PATTERN)]

# Non-negative decimal amount in human units, kept as a string for exactness
DecimalString = Annotated[
    str,
    BeforeValidator(validate_decimal_string),
    Field(description="Non-negative decimal amount as string"),
]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an Ethereum address to lowercase.

    Args:
        address: An Ethereum address (with or without 0x prefix)
        validate: If True, raises ValueError for invalid addresses.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        ValueError: If validate=True and address is not a valid Ethereum address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Ethereum address."""
    return isinstance(address, str) and _ADDRESS_RE.fullmatch(address) is not None


def is_same_address(a: str, b: str) -> bool:
    """Compare two addresses ignoring checksum casing."""
    return normalize_address(a) == normalize_address(b)
