"""Tests for transaction domain service."""

from datetime import date
from decimal import Decimal

import pytest

from farmledger.domain.entities import TransactionKind
from farmledger.domain.errors import NotFoundError, ValidationError


def test_create_transaction(transaction_service):
    """Test creating a transaction."""
    txn_id = transaction_service.create_transaction(
        kind=TransactionKind.EXPENSE,
        amount=Decimal("200"),
        date=date(2024, 1, 10),
        category="Seeds",
        description="  Wheat seed  ",
    )

    txn = transaction_service.get_transaction(txn_id)
    assert txn is not None
    assert txn.kind == TransactionKind.EXPENSE
    assert txn.amount == Decimal("200")
    assert txn.description == "Wheat seed"
    assert txn.category == "Seeds"
    assert txn.crop_id is None


def test_create_transaction_linked_to_crop(transaction_service, sample_crop):
    txn_id = transaction_service.create_transaction(
        kind=TransactionKind.INCOME,
        amount=Decimal("1000"),
        date=date(2024, 7, 20),
        category="Crop Sale",
        crop_id=sample_crop.id,
    )

    assert transaction_service.get_transaction(txn_id).crop_id == sample_crop.id


def test_create_transaction_rejects_missing_crop(transaction_service):
    with pytest.raises(NotFoundError, match="Crop 42 not found"):
        transaction_service.create_transaction(
            kind=TransactionKind.INCOME,
            amount=Decimal("10"),
            date=date(2024, 1, 1),
            category="Crop Sale",
            crop_id=42,
        )


@pytest.mark.parametrize("amount", [Decimal("-1"), "abc", float("nan"), Decimal("Infinity"), True])
def test_create_transaction_rejects_bad_amount(transaction_service, amount):
    with pytest.raises(ValidationError):
        transaction_service.create_transaction(
            kind=TransactionKind.EXPENSE,
            amount=amount,
            date=date(2024, 1, 1),
            category="Seeds",
        )


def test_create_transaction_rejects_category_of_other_kind(transaction_service):
    with pytest.raises(ValidationError, match="not a configured income category"):
        transaction_service.create_transaction(
            kind=TransactionKind.INCOME,
            amount=Decimal("10"),
            date=date(2024, 1, 1),
            category="Seeds",
        )


def test_zero_amount_is_allowed(transaction_service):
    txn_id = transaction_service.create_transaction(
        kind=TransactionKind.EXPENSE, amount=0, date=date(2024, 1, 1), category="Fuel"
    )

    assert transaction_service.get_transaction(txn_id).amount == 0


def test_update_transaction(transaction_service, sample_crop):
    txn_id = transaction_service.create_transaction(
        kind=TransactionKind.EXPENSE,
        amount=Decimal("200"),
        date=date(2024, 1, 10),
        category="Seeds",
        crop_id=sample_crop.id,
    )

    transaction_service.update_transaction(
        txn_id, amount=Decimal("250.75"), category="Fertilizer", clear_crop=True
    )

    txn = transaction_service.get_transaction(txn_id)
    assert txn.amount == Decimal("250.75")
    assert txn.category == "Fertilizer"
    assert txn.crop_id is None
    assert txn.date == date(2024, 1, 10)


def test_update_transaction_validates_category_against_kind(transaction_service):
    txn_id = transaction_service.create_transaction(
        kind=TransactionKind.EXPENSE, amount=Decimal("5"), date=date(2024, 1, 1), category="Fuel"
    )

    with pytest.raises(ValidationError):
        transaction_service.update_transaction(txn_id, category="Crop Sale")


def test_update_transaction_rejects_crop_and_clear(transaction_service, sample_crop):
    txn_id = transaction_service.create_transaction(
        kind=TransactionKind.EXPENSE, amount=Decimal("5"), date=date(2024, 1, 1), category="Fuel"
    )

    with pytest.raises(ValidationError):
        transaction_service.update_transaction(txn_id, crop_id=sample_crop.id, clear_crop=True)


def test_update_missing_transaction(transaction_service):
    with pytest.raises(NotFoundError, match="Transaction 99 not found"):
        transaction_service.update_transaction(99, amount=Decimal("1"))


def test_delete_transaction(transaction_service):
    txn_id = transaction_service.create_transaction(
        kind=TransactionKind.EXPENSE, amount=Decimal("5"), date=date(2024, 1, 1), category="Fuel"
    )

    transaction_service.delete_transaction(txn_id)

    assert transaction_service.get_transaction(txn_id) is None
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction(txn_id)


def test_list_transactions_filters(transaction_service, sample_farm):
    expenses = transaction_service.list_transactions(kind=TransactionKind.EXPENSE)
    assert [txn.id for txn in expenses] == [sample_farm["seeds"]]

    by_crop = transaction_service.list_transactions(crop_id=sample_farm["maize"])
    assert [txn.id for txn in by_crop] == [sample_farm["sale"]]

    in_range = transaction_service.list_transactions(
        start_date=date(2024, 1, 12), end_date=date(2024, 1, 31)
    )
    assert [txn.id for txn in in_range] == [sample_farm["sale"]]


def test_list_transactions_newest_first(transaction_service, sample_farm):
    txns = transaction_service.list_transactions()

    assert [txn.id for txn in txns] == [sample_farm["sale"], sample_farm["seeds"]]


def test_list_transactions_inverted_range_is_empty(transaction_service, sample_farm):
    assert transaction_service.list_transactions(
        start_date=date(2024, 2, 1), end_date=date(2024, 1, 1)
    ) == []


def test_create_transaction_rejects_fractional_cents(transaction_service):
    with pytest.raises(ValidationError, match="at most 2 decimal places"):
        transaction_service.create_transaction(
            kind=TransactionKind.INCOME,
            amount=Decimal("0.005"),
            date=date(2024, 1, 1),
            category="Crop Sale",
        )


def test_cent_amounts_sum_exactly_after_storage(transaction_service, summary_service):
    """Stored amounts come back unchanged, so totals are exact."""
    for amount in (Decimal("0.01"), Decimal("0.10"), Decimal("1.500")):
        transaction_service.create_transaction(
            kind=TransactionKind.INCOME,
            amount=amount,
            date=date(2024, 1, 5),
            category="Crop Sale",
        )

    totals = summary_service.period_totals(date(2024, 1, 1), date(2024, 1, 31))

    assert totals.income == Decimal("1.61")


def test_update_transaction_rejects_fractional_cents(transaction_service, sample_farm):
    with pytest.raises(ValidationError):
        transaction_service.update_transaction(sample_farm["sale"], amount=Decimal("10.001"))
