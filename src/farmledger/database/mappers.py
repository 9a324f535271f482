"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay the
same if the schema changes.
"""

from decimal import Decimal
from typing import Optional

from farmledger.domain import entities as domain
from farmledger.database.models import (
    Crop as ORMCrop,
    Equipment as ORMEquipment,
    FarmSettings as ORMFarmSettings,
    MaintenanceLog as ORMMaintenanceLog,
    Notification as ORMNotification,
    Todo as ORMTodo,
    Transaction as ORMTransaction,
    TransactionCategory as ORMTransactionCategory,
)


def _decimal(value) -> Optional[Decimal]:
    """Normalize numeric column values to Decimal."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def settings_to_domain(
    orm_settings: ORMFarmSettings, categories: list[ORMTransactionCategory]
) -> domain.Settings:
    """Convert the settings row and category rows to a Settings entity."""
    ordered = sorted(categories, key=lambda cat: (cat.position, cat.id))
    return domain.Settings(
        farm_name=orm_settings.farm_name,
        currency=orm_settings.currency,
        income_categories=tuple(
            cat.name for cat in ordered if cat.kind == domain.TransactionKind.INCOME.value
        ),
        expense_categories=tuple(
            cat.name for cat in ordered if cat.kind == domain.TransactionKind.EXPENSE.value
        ),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        kind=domain.TransactionKind(orm_transaction.kind),
        amount=_decimal(orm_transaction.amount),
        date=orm_transaction.date,
        description=orm_transaction.description or "",
        category=orm_transaction.category,
        crop_id=orm_transaction.crop_id,
    )


def crop_to_domain(orm_crop: ORMCrop) -> domain.Crop:
    """Convert SQLAlchemy Crop model to domain Crop entity."""
    return domain.Crop(
        id=orm_crop.id,
        name=orm_crop.name,
        planting_date=orm_crop.planting_date,
        estimated_harvest_date=orm_crop.estimated_harvest_date,
        actual_harvest_date=orm_crop.actual_harvest_date,
        area=_decimal(orm_crop.area),
        area_unit=domain.AreaUnit(orm_crop.area_unit),
        yield_amount=_decimal(orm_crop.yield_amount),
        yield_unit=orm_crop.yield_unit,
        notes=orm_crop.notes,
    )


def maintenance_log_to_domain(orm_log: ORMMaintenanceLog) -> domain.MaintenanceLog:
    """Convert SQLAlchemy MaintenanceLog model to domain MaintenanceLog entity."""
    return domain.MaintenanceLog(
        id=orm_log.id,
        equipment_id=orm_log.equipment_id,
        date=orm_log.date,
        description=orm_log.description,
        cost=_decimal(orm_log.cost),
    )


def equipment_to_domain(orm_equipment: ORMEquipment) -> domain.Equipment:
    """Convert SQLAlchemy Equipment model (with its logs) to domain Equipment entity."""
    logs = sorted(orm_equipment.maintenance_logs, key=lambda log: (log.date, log.id))
    return domain.Equipment(
        id=orm_equipment.id,
        name=orm_equipment.name,
        purchase_date=orm_equipment.purchase_date,
        model=orm_equipment.model,
        notes=orm_equipment.notes,
        maintenance_logs=tuple(maintenance_log_to_domain(log) for log in logs),
    )


def todo_to_domain(orm_todo: ORMTodo) -> domain.Todo:
    """Convert SQLAlchemy Todo model to domain Todo entity."""
    return domain.Todo(
        id=orm_todo.id,
        task=orm_todo.task,
        completed=orm_todo.completed,
    )


def notification_to_domain(orm_notification: ORMNotification) -> domain.Notification:
    """Convert SQLAlchemy Notification model to domain Notification entity."""
    return domain.Notification(
        id=orm_notification.id,
        message=orm_notification.message,
        timestamp=orm_notification.timestamp,
        read=orm_notification.read,
        seen=orm_notification.seen,
        link=orm_notification.link,
    )
