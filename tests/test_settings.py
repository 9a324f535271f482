"""Tests for farm settings."""

import pytest

from farmledger.constants import DEFAULT_EXPENSE_CATEGORIES, DEFAULT_INCOME_CATEGORIES
from farmledger.domain.entities import TransactionKind
from farmledger.domain.errors import ConflictError, NotFoundError, ValidationError


def test_default_settings(settings_service):
    settings = settings_service.get_settings()

    assert settings.farm_name == "My Farm"
    assert settings.currency == "USD"
    assert settings.income_categories == DEFAULT_INCOME_CATEGORIES
    assert settings.expense_categories == DEFAULT_EXPENSE_CATEGORIES


def test_initialize_schema_does_not_reseed(temp_db, settings_service):
    settings_service.update_farm_name("Green Acres")

    temp_db.initialize_schema()

    assert settings_service.get_settings().farm_name == "Green Acres"


def test_update_farm_name(settings_service):
    settings_service.update_farm_name("  Green Acres ")

    assert settings_service.get_settings().farm_name == "Green Acres"
    with pytest.raises(ValidationError):
        settings_service.update_farm_name("")


def test_update_currency(settings_service):
    settings_service.update_currency("kes")

    assert settings_service.get_settings().currency == "KES"
    for bad in ("US", "EURO", "12$"):
        with pytest.raises(ValidationError):
            settings_service.update_currency(bad)


def test_add_category_appends(settings_service):
    settings_service.add_category(TransactionKind.EXPENSE, "Veterinary")

    expense = settings_service.get_settings().expense_categories
    assert expense[-1] == "Veterinary"
    assert "Veterinary" not in settings_service.get_settings().income_categories


def test_add_duplicate_category(settings_service):
    with pytest.raises(ConflictError, match="already exists in income categories"):
        settings_service.add_category(TransactionKind.INCOME, "Crop Sale")


def test_same_name_in_both_kinds(settings_service):
    settings_service.add_category(TransactionKind.INCOME, "Seeds")

    settings = settings_service.get_settings()
    assert "Seeds" in settings.income_categories
    assert "Seeds" in settings.expense_categories


def test_remove_category(settings_service, transaction_service, sample_farm):
    settings_service.remove_category(TransactionKind.EXPENSE, "Seeds")

    assert "Seeds" not in settings_service.get_settings().expense_categories
    # Existing transactions keep the removed category
    assert transaction_service.get_transaction(sample_farm["seeds"]).category == "Seeds"


def test_remove_unknown_category(settings_service):
    with pytest.raises(NotFoundError, match="not found in expense categories"):
        settings_service.remove_category(TransactionKind.EXPENSE, "Crop Sale")
