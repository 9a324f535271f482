"""Tests for boundary validation helpers."""

from decimal import Decimal

import pytest

from farmledger.domain.errors import ValidationError
from farmledger.domain.validation import (
    QUANTITY_PLACES,
    require_money,
    require_non_negative,
    require_positive,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("12", Decimal("12")),
        (Decimal("12.50"), Decimal("12.50")),
        (Decimal("1.500"), Decimal("1.500")),
        (Decimal("0"), Decimal("0")),
    ],
)
def test_require_money_accepts_whole_cents(value, expected):
    assert require_money(value, "Amount") == expected


@pytest.mark.parametrize("value", [Decimal("0.005"), "1.999", Decimal("-0.01")])
def test_require_money_rejects(value):
    with pytest.raises(ValidationError):
        require_money(value, "Amount")


def test_require_non_negative_without_place_limit():
    assert require_non_negative(Decimal("0.00001"), "Yield") == Decimal("0.00001")


def test_require_positive_place_limit():
    assert require_positive(Decimal("2.125"), "Area", QUANTITY_PLACES) == Decimal("2.125")
    with pytest.raises(ValidationError, match="at most 3 decimal places"):
        require_positive(Decimal("2.1255"), "Area", QUANTITY_PLACES)
