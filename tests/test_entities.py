"""Tests for domain entities."""

from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

import pytest

from farmledger.domain.entities import (
    ChangeIndicator,
    ChangeKind,
    CropProfitability,
    MonthBucket,
    PeriodTotals,
    Settings,
    Todo,
    TransactionKind,
)


class TestSettings:
    """Tests for Settings entity."""

    def test_categories_for(self):
        settings = Settings("My Farm", "USD", ("Crop Sale",), ("Seeds", "Fuel"))

        assert settings.categories_for(TransactionKind.INCOME) == ("Crop Sale",)
        assert settings.categories_for(TransactionKind.EXPENSE) == ("Seeds", "Fuel")

    def test_settings_immutability(self):
        settings = Settings("My Farm", "USD", (), ())
        with pytest.raises(FrozenInstanceError):
            settings.currency = "EUR"


class TestResults:
    """Tests for derived result values."""

    def test_period_totals_net(self):
        assert PeriodTotals(Decimal("1000"), Decimal("200")).net == Decimal("800")
        assert PeriodTotals().net == 0

    def test_month_bucket_key_and_label(self):
        bucket = MonthBucket(2024, 9, Decimal("5"), Decimal("7"))

        assert bucket.key == "2024-09"
        assert bucket.label == "Sep 24"
        assert bucket.net == Decimal("-2")

    def test_crop_profitability_profit(self):
        assert CropProfitability(1, "Wheat", Decimal("10"), Decimal("25")).profit == Decimal("-15")

    def test_change_indicator_defaults(self):
        indicator = ChangeIndicator(ChangeKind.NONE)

        assert indicator.percent is None
        assert indicator.is_favorable(for_income=True) is None

    def test_todo_defaults(self):
        todo = Todo(id=1, task="Feed hens")

        assert todo.completed is False
