"""
Fixed-precision amount handling.

Ledger amounts are signed 64-bit integers of stroops (1 unit = 10^7 stroops)
and are rendered as decimal strings with seven places.
"""

from __future__ import annotations
from decimal import Decimal, InvalidOperation
from typing import Union

from .errors import InvalidAmountError

STROOPS_PER_UNIT = 10_000_000
AMOUNT_PRECISION = 7
MAX_INT64 = 2 ** 63 - 1


def parse_amount(value: Union[str, Decimal, int]) -> Decimal:
    """
    Parse a positive amount.

    Args:
        value: Decimal string such as "100" or "12.5"

    Returns:
        The amount as a Decimal

    Raises:
        InvalidAmountError: If the value is not a finite positive decimal with at
            most seven fractional digits that fits in an int64 of stroops
    """
    if isinstance(value, bool) or not isinstance(value, (str, Decimal, int)):
        raise InvalidAmountError(details={"amount": repr(value)})

    try:
        amount = Decimal(value.strip() if isinstance(value, str) else value)
    except InvalidOperation as e:
        raise InvalidAmountError(details={"amount": str(value)}, cause=e)

    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError(details={"amount": str(value)})

    if amount.as_tuple().exponent < -AMOUNT_PRECISION:
        raise InvalidAmountError(
            f"Invalid amount: at most {AMOUNT_PRECISION} decimal places are allowed",
            details={"amount": str(value)},
        )

    if amount * STROOPS_PER_UNIT > MAX_INT64:
        raise InvalidAmountError("Invalid amount: too large", details={"amount": str(value)})

    return amount


def to_stroops(value: Union[str, Decimal, int]) -> int:
    """Convert a positive amount to its integer stroop count."""
    return int(parse_amount(value) * STROOPS_PER_UNIT)


def from_stroops(stroops: int) -> str:
    """Render a stroop count as a seven-place decimal string."""
    sign = "-" if stroops < 0 else ""
    units, fraction = divmod(abs(stroops), STROOPS_PER_UNIT)
    return f"{sign}{units}.{fraction:07d}"
