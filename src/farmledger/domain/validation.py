"""Boundary validation for values entering the store."""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from farmledger.domain.errors import ValidationError

CURRENCY_CODE = re.compile(r"^[A-Z]{3}$")

# Decimal places the store keeps for money and for area/yield quantities
MONEY_PLACES = 2
QUANTITY_PLACES = 3


def to_decimal(value, field: str) -> Decimal:
    """Convert a number to a finite Decimal.

    Raises:
        ValidationError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number, got '{value}'")
    if not number.is_finite():
        raise ValidationError(f"{field} must be a finite number, got '{value}'")
    return number


def _check_places(number: Decimal, field: str, places: Optional[int]) -> Decimal:
    # Trailing zeros are fine: 1.500 is a valid two-place amount
    if places is not None and number.normalize().as_tuple().exponent < -places:
        raise ValidationError(
            f"{field} can have at most {places} decimal places, got {number}"
        )
    return number


def require_non_negative(value, field: str, places: Optional[int] = None) -> Decimal:
    """Validate a number that cannot be negative.

    Args:
        value: Number to validate
        field: Field name used in error messages
        places: Maximum number of decimal places, or None for no limit
    """
    number = to_decimal(value, field)
    if number < 0:
        raise ValidationError(f"{field} cannot be negative, got {number}")
    return _check_places(number, field, places)


def require_money(value, field: str) -> Decimal:
    """Validate a money amount: finite, not negative, whole cents."""
    return require_non_negative(value, field, places=MONEY_PLACES)


def require_positive(value, field: str, places: Optional[int] = None) -> Decimal:
    """Validate a strictly positive quantity such as a crop area."""
    number = to_decimal(value, field)
    if number <= 0:
        raise ValidationError(f"{field} must be greater than zero, got {number}")
    return _check_places(number, field, places)


def require_text(value: Optional[str], field: str) -> str:
    """Validate a required text field and strip surrounding whitespace."""
    if value is None or not value.strip():
        raise ValidationError(f"{field} cannot be empty")
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Strip optional text, mapping blank values to None."""
    if value is None or not value.strip():
        return None
    return value.strip()


def require_currency_code(value: str) -> str:
    """Validate an ISO 4217 style three-letter currency code."""
    code = (value or "").strip().upper()
    if not CURRENCY_CODE.match(code):
        raise ValidationError(f"Currency must be a three-letter code, got '{value}'")
    return code
