"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse a money or quantity string into a Decimal.

    Handles "1234.5", "$1,234.50", "€12", "KSh 300". Negative values are
    returned as-is; the domain services decide whether they are allowed.

    Raises:
        ValueError: If the string is empty, not a number, or not finite
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[$€£¥₹₦]|KSh|CA\$|A\$", "", amount_str.strip())
    cleaned = cleaned.replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number, got '{amount_str}'")
    return amount
