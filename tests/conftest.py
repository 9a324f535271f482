"""Shared pytest fixtures for farmledger tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from farmledger.database.factories import create_sqlite_database
from farmledger.domain.crop import CropService
from farmledger.domain.entities import TransactionKind
from farmledger.domain.equipment import EquipmentService
from farmledger.domain.notification import NotificationService
from farmledger.domain.settings import SettingsService
from farmledger.domain.summary import SummaryService
from farmledger.domain.todo import TodoService
from farmledger.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary ledger file for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # CLI tests pass this path with --db-path
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    return TransactionService(temp_db)


@pytest.fixture
def crop_service(temp_db):
    return CropService(temp_db)


@pytest.fixture
def equipment_service(temp_db):
    return EquipmentService(temp_db)


@pytest.fixture
def todo_service(temp_db):
    return TodoService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    return SettingsService(temp_db)


@pytest.fixture
def notification_service(temp_db):
    return NotificationService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    return SummaryService(temp_db)


@pytest.fixture
def sample_crop(crop_service):
    """An unharvested wheat crop due mid-July 2024."""
    crop_id = crop_service.create_crop(
        name="Wheat - Field A",
        planting_date=date(2024, 3, 1),
        estimated_harvest_date=date(2024, 7, 15),
        area=Decimal("50"),
    )
    return crop_service.get_crop(crop_id)


@pytest.fixture
def sample_farm(temp_db, crop_service, transaction_service, equipment_service, todo_service):
    """A small farm: two crops, January transactions, a tractor and to-dos.

    Returns a dict of the created IDs.
    """
    wheat = crop_service.create_crop(
        name="Wheat",
        planting_date=date(2023, 10, 1),
        estimated_harvest_date=date(2024, 2, 10),
        area=Decimal("50"),
    )
    maize = crop_service.create_crop(
        name="Maize",
        planting_date=date(2023, 11, 1),
        estimated_harvest_date=date(2024, 1, 20),
        area=Decimal("4"),
        area_unit="hectares",
        actual_harvest_date=date(2024, 1, 18),
        yield_amount=Decimal("12"),
        yield_unit="tons",
    )

    sale = transaction_service.create_transaction(
        kind=TransactionKind.INCOME,
        amount=Decimal("1000"),
        date=date(2024, 1, 15),
        category="Crop Sale",
        description="Maize to co-op",
        crop_id=maize,
    )
    seeds = transaction_service.create_transaction(
        kind=TransactionKind.EXPENSE,
        amount=Decimal("200"),
        date=date(2024, 1, 10),
        category="Seeds",
        description="Wheat seed",
        crop_id=wheat,
    )

    tractor = equipment_service.create_equipment(
        name="Tractor", purchase_date=date(2020, 4, 1), model="JD 5075E"
    )
    equipment_service.add_maintenance_log(
        tractor, date=date(2024, 1, 5), description="Oil change", cost=Decimal("50")
    )
    equipment_service.add_maintenance_log(
        tractor, date=date(2024, 2, 1), description="Tyre repair", cost=Decimal("75")
    )

    fence = todo_service.add_todo("Fix the north fence")
    done = todo_service.add_todo("Order fertilizer")
    todo_service.toggle_todo(done)

    return {
        "wheat": wheat,
        "maize": maize,
        "sale": sale,
        "seeds": seeds,
        "tractor": tractor,
        "fence": fence,
        "done": done,
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
