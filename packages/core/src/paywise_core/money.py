"""Decimal helpers shared by the calculators.

Amounts are carried as unrounded ``Decimal`` values through every
intermediate step and rounded half-up only when a result model is built.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

from .exceptions import ValidationError

ZERO = Decimal("0")
ONE_HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")

CENTS = Decimal("0.01")
TENTHS = Decimal("0.1")
WHOLE = Decimal("1")


def to_decimal(
    value: Any,
    field: str = "amount",
    *,
    allow_negative: bool = True,
    default: Optional[Decimal] = None,
) -> Decimal:
    """Coerce a user-facing number into a finite ``Decimal``.

    Floats go through ``str`` so ``0.062`` stays ``0.062`` rather than its
    binary expansion.

    Args:
        value: int, float, str or Decimal.
        field: Name reported in the error when coercion fails.
        allow_negative: Reject values below zero when False.
        default: Returned for ``None``; ``None`` is an error when not given.

    Raises:
        ValidationError: value is missing, non-numeric, non-finite, or negative
            when negatives are not allowed.
    """
    if value is None:
        if default is not None:
            return default
        raise ValidationError(f"{field} is required", field=field)

    if isinstance(value, bool):
        raise ValidationError(
            f"{field} must be a number", field=field, value=value
        )

    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, float):
            amount = Decimal(str(value))
        else:
            amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(
            f"{field} must be a number",
            field=field,
            value=str(value),
            constraint="numeric",
        ) from e

    if not amount.is_finite():
        raise ValidationError(
            f"{field} must be a finite number",
            field=field,
            value=str(value),
            constraint="finite",
        )
    if not allow_negative and amount < 0:
        raise ValidationError(
            f"{field} cannot be negative",
            field=field,
            value=str(value),
            constraint=">= 0",
        )
    return amount


def round_cents(amount: Decimal) -> Decimal:
    """Round to whole cents, half-up."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def round_whole(amount: Decimal) -> Decimal:
    """Round to whole dollars, half-up."""
    return amount.quantize(WHOLE, rounding=ROUND_HALF_UP)


def round_tenths(amount: Decimal) -> Decimal:
    """Round to one decimal place, half-up."""
    return amount.quantize(TENTHS, rounding=ROUND_HALF_UP)


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part / whole * 100``, or zero when ``whole`` is not positive."""
    if whole <= 0:
        return ZERO
    return part / whole * ONE_HUNDRED
