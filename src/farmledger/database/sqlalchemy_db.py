"""Generic SQLAlchemy database implementation."""

import logging
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy import func
from sqlalchemy.orm import Session

from farmledger.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_EXPENSE_CATEGORIES,
    DEFAULT_FARM_NAME,
    DEFAULT_INCOME_CATEGORIES,
)
from farmledger.database.base import Database
from farmledger.database.models import (
    Crop,
    Equipment,
    FarmSettings,
    MaintenanceLog,
    Notification,
    Todo,
    Transaction,
    TransactionCategory,
    create_session_factory,
)
from farmledger.database.mappers import (
    crop_to_domain,
    equipment_to_domain,
    maintenance_log_to_domain,
    notification_to_domain,
    settings_to_domain,
    todo_to_domain,
    transaction_to_domain,
)
from farmledger.domain.entities import (
    Crop as DomainCrop,
    Equipment as DomainEquipment,
    MaintenanceLog as DomainMaintenanceLog,
    Notification as DomainNotification,
    Settings as DomainSettings,
    Todo as DomainTodo,
    Transaction as DomainTransaction,
    TransactionKind,
)
from farmledger.domain.errors import (
    NotFoundError,
    crop_not_found,
    equipment_not_found,
    notification_not_found,
    todo_not_found,
    transaction_not_found,
)

logger = logging.getLogger(__name__)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db',
                or 'sqlite://' for an in-memory store)
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Seed default settings on first use.

        Tables are created by create_session_factory.
        """
        self._ensure_settings()

    def _ensure_settings(self) -> FarmSettings:
        session = self._get_session()
        row = session.query(FarmSettings).first()
        if row is not None:
            return row

        logger.info("Seeding default farm settings in %s", self.database_url)
        row = FarmSettings(farm_name=DEFAULT_FARM_NAME, currency=DEFAULT_CURRENCY)
        session.add(row)
        for kind, names in (
            (TransactionKind.INCOME, DEFAULT_INCOME_CATEGORIES),
            (TransactionKind.EXPENSE, DEFAULT_EXPENSE_CATEGORIES),
        ):
            for position, name in enumerate(names):
                session.add(
                    TransactionCategory(kind=kind.value, name=name, position=position)
                )
        session.commit()
        return row

    # Settings operations
    def get_settings(self) -> DomainSettings:
        """Get farm settings."""
        row = self._ensure_settings()
        categories = self._get_session().query(TransactionCategory).all()
        return settings_to_domain(row, categories)

    def update_settings(
        self, farm_name: Optional[str] = None, currency: Optional[str] = None
    ) -> None:
        """Update farm name and/or currency."""
        row = self._ensure_settings()
        if farm_name is not None:
            row.farm_name = farm_name
        if currency is not None:
            row.currency = currency
        self._get_session().commit()

    def add_category(self, kind: TransactionKind, name: str) -> None:
        """Append a category to the list for a transaction kind."""
        self._ensure_settings()
        session = self._get_session()
        last_position = (
            session.query(func.max(TransactionCategory.position))
            .filter(TransactionCategory.kind == kind.value)
            .scalar()
        )
        position = 0 if last_position is None else last_position + 1
        session.add(TransactionCategory(kind=kind.value, name=name, position=position))
        session.commit()

    def remove_category(self, kind: TransactionKind, name: str) -> bool:
        """Remove a category. Returns False if it was not configured."""
        self._ensure_settings()
        session = self._get_session()
        row = (
            session.query(TransactionCategory)
            .filter(TransactionCategory.kind == kind.value, TransactionCategory.name == name)
            .first()
        )
        if row is None:
            return False
        session.delete(row)
        session.commit()
        return True

    # Transaction operations
    def create_transaction(
        self,
        kind: TransactionKind,
        amount: Decimal,
        date: date,
        description: str,
        category: str,
        crop_id: Optional[int] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        session = self._get_session()
        transaction = Transaction(
            kind=kind.value,
            amount=amount,
            date=date,
            description=description,
            category=category,
            crop_id=crop_id,
        )
        session.add(transaction)
        session.commit()
        return transaction.id

    def _get_orm_transaction(self, transaction_id: int) -> Transaction:
        transaction = (
            self._get_session()
            .query(Transaction)
            .filter(Transaction.id == transaction_id)
            .first()
        )
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def get_transaction(self, transaction_id: int) -> Optional[DomainTransaction]:
        """Get transaction by ID."""
        session = self._get_session()
        transaction = session.query(Transaction).filter(Transaction.id == transaction_id).first()
        if transaction is None:
            return None
        return transaction_to_domain(transaction)

    def update_transaction(self, transaction: DomainTransaction) -> None:
        """Overwrite a transaction's fields (kind is never changed)."""
        row = self._get_orm_transaction(transaction.id)
        row.amount = transaction.amount
        row.date = transaction.date
        row.description = transaction.description
        row.category = transaction.category
        row.crop_id = transaction.crop_id
        self._get_session().commit()

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        session = self._get_session()
        session.delete(self._get_orm_transaction(transaction_id))
        session.commit()

    def list_transactions(
        self,
        kind: Optional[TransactionKind] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        crop_id: Optional[int] = None,
    ) -> list[DomainTransaction]:
        """List transactions, newest first, with optional filters."""
        session = self._get_session()
        query = session.query(Transaction)

        if kind is not None:
            query = query.filter(Transaction.kind == kind.value)
        if start_date is not None:
            query = query.filter(Transaction.date >= start_date)
        if end_date is not None:
            query = query.filter(Transaction.date <= end_date)
        if crop_id is not None:
            query = query.filter(Transaction.crop_id == crop_id)

        transactions = query.order_by(Transaction.date.desc(), Transaction.id.desc()).all()
        return [transaction_to_domain(txn) for txn in transactions]

    # Crop operations
    def create_crop(
        self,
        name: str,
        planting_date: date,
        estimated_harvest_date: date,
        area: Decimal,
        area_unit: str,
        actual_harvest_date: Optional[date] = None,
        yield_amount: Optional[Decimal] = None,
        yield_unit: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a crop. Returns crop ID."""
        session = self._get_session()
        crop = Crop(
            name=name,
            planting_date=planting_date,
            estimated_harvest_date=estimated_harvest_date,
            actual_harvest_date=actual_harvest_date,
            area=area,
            area_unit=area_unit,
            yield_amount=yield_amount,
            yield_unit=yield_unit,
            notes=notes,
        )
        session.add(crop)
        session.commit()
        return crop.id

    def _get_orm_crop(self, crop_id: int) -> Crop:
        crop = self._get_session().query(Crop).filter(Crop.id == crop_id).first()
        if crop is None:
            raise NotFoundError(crop_not_found(crop_id))
        return crop

    def get_crop(self, crop_id: int) -> Optional[DomainCrop]:
        """Get crop by ID."""
        crop = self._get_session().query(Crop).filter(Crop.id == crop_id).first()
        if crop is None:
            return None
        return crop_to_domain(crop)

    def update_crop(self, crop: DomainCrop) -> None:
        """Overwrite a crop's fields."""
        row = self._get_orm_crop(crop.id)
        row.name = crop.name
        row.planting_date = crop.planting_date
        row.estimated_harvest_date = crop.estimated_harvest_date
        row.actual_harvest_date = crop.actual_harvest_date
        row.area = crop.area
        row.area_unit = crop.area_unit.value
        row.yield_amount = crop.yield_amount
        row.yield_unit = crop.yield_unit
        row.notes = crop.notes
        self._get_session().commit()

    def delete_crop(self, crop_id: int) -> None:
        """Delete a crop."""
        session = self._get_session()
        session.delete(self._get_orm_crop(crop_id))
        session.commit()

    def list_crops(self) -> list[DomainCrop]:
        """List crops in creation order."""
        crops = self._get_session().query(Crop).order_by(Crop.id).all()
        return [crop_to_domain(crop) for crop in crops]

    # Equipment operations
    def create_equipment(
        self,
        name: str,
        purchase_date: date,
        model: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create equipment. Returns equipment ID."""
        session = self._get_session()
        equipment = Equipment(name=name, purchase_date=purchase_date, model=model, notes=notes)
        session.add(equipment)
        session.commit()
        return equipment.id

    def _get_orm_equipment(self, equipment_id: int) -> Equipment:
        equipment = (
            self._get_session().query(Equipment).filter(Equipment.id == equipment_id).first()
        )
        if equipment is None:
            raise NotFoundError(equipment_not_found(equipment_id))
        return equipment

    def get_equipment(self, equipment_id: int) -> Optional[DomainEquipment]:
        """Get equipment (with maintenance logs) by ID."""
        equipment = (
            self._get_session().query(Equipment).filter(Equipment.id == equipment_id).first()
        )
        if equipment is None:
            return None
        return equipment_to_domain(equipment)

    def update_equipment(self, equipment: DomainEquipment) -> None:
        """Overwrite equipment fields. Maintenance logs are left untouched."""
        row = self._get_orm_equipment(equipment.id)
        row.name = equipment.name
        row.purchase_date = equipment.purchase_date
        row.model = equipment.model
        row.notes = equipment.notes
        self._get_session().commit()

    def delete_equipment(self, equipment_id: int) -> None:
        """Delete equipment and its maintenance logs."""
        session = self._get_session()
        session.delete(self._get_orm_equipment(equipment_id))
        session.commit()

    def list_equipment(self) -> list[DomainEquipment]:
        """List equipment in creation order."""
        items = self._get_session().query(Equipment).order_by(Equipment.id).all()
        return [equipment_to_domain(item) for item in items]

    def add_maintenance_log(
        self, equipment_id: int, date: date, description: str, cost: Decimal
    ) -> int:
        """Add a maintenance log to equipment. Returns log ID."""
        session = self._get_session()
        equipment = self._get_orm_equipment(equipment_id)
        log = MaintenanceLog(date=date, description=description, cost=cost)
        equipment.maintenance_logs.append(log)
        session.commit()
        return log.id

    def get_maintenance_log(self, log_id: int) -> Optional[DomainMaintenanceLog]:
        """Get maintenance log by ID."""
        log = self._get_session().query(MaintenanceLog).filter(MaintenanceLog.id == log_id).first()
        if log is None:
            return None
        return maintenance_log_to_domain(log)

    def delete_maintenance_log(self, log_id: int) -> None:
        """Delete a maintenance log."""
        session = self._get_session()
        log = session.query(MaintenanceLog).filter(MaintenanceLog.id == log_id).first()
        if log is None:
            raise NotFoundError(f"Maintenance log {log_id} not found")
        log.equipment.maintenance_logs.remove(log)
        session.commit()

    # To-do operations
    def create_todo(self, task: str) -> int:
        """Create a to-do. Returns to-do ID."""
        session = self._get_session()
        todo = Todo(task=task, completed=False)
        session.add(todo)
        session.commit()
        return todo.id

    def _get_orm_todo(self, todo_id: int) -> Todo:
        todo = self._get_session().query(Todo).filter(Todo.id == todo_id).first()
        if todo is None:
            raise NotFoundError(todo_not_found(todo_id))
        return todo

    def get_todo(self, todo_id: int) -> Optional[DomainTodo]:
        """Get to-do by ID."""
        todo = self._get_session().query(Todo).filter(Todo.id == todo_id).first()
        if todo is None:
            return None
        return todo_to_domain(todo)

    def set_todo_completed(self, todo_id: int, completed: bool) -> None:
        """Set a to-do's completed flag."""
        self._get_orm_todo(todo_id).completed = completed
        self._get_session().commit()

    def delete_todo(self, todo_id: int) -> None:
        """Delete a to-do."""
        session = self._get_session()
        session.delete(self._get_orm_todo(todo_id))
        session.commit()

    def list_todos(self) -> list[DomainTodo]:
        """List to-dos, newest first."""
        todos = self._get_session().query(Todo).order_by(Todo.id.desc()).all()
        return [todo_to_domain(todo) for todo in todos]

    # Notification operations
    def create_notification(
        self, message: str, timestamp: datetime, link: Optional[str] = None
    ) -> int:
        """Create a notification. Returns notification ID."""
        session = self._get_session()
        notification = Notification(message=message, timestamp=timestamp, link=link)
        session.add(notification)
        session.commit()
        return notification.id

    def _get_orm_notification(self, notification_id: int) -> Notification:
        notification = (
            self._get_session()
            .query(Notification)
            .filter(Notification.id == notification_id)
            .first()
        )
        if notification is None:
            raise NotFoundError(notification_not_found(notification_id))
        return notification

    def get_notification(self, notification_id: int) -> Optional[DomainNotification]:
        """Get notification by ID."""
        notification = (
            self._get_session()
            .query(Notification)
            .filter(Notification.id == notification_id)
            .first()
        )
        if notification is None:
            return None
        return notification_to_domain(notification)

    def update_notification_flags(
        self,
        notification_id: int,
        read: Optional[bool] = None,
        seen: Optional[bool] = None,
    ) -> None:
        """Set read and/or seen flags on a notification."""
        notification = self._get_orm_notification(notification_id)
        if read is not None:
            notification.read = read
        if seen is not None:
            notification.seen = seen
        self._get_session().commit()

    def delete_notification(self, notification_id: int) -> None:
        """Delete a notification."""
        session = self._get_session()
        session.delete(self._get_orm_notification(notification_id))
        session.commit()

    def list_notifications(self) -> list[DomainNotification]:
        """List notifications, newest first."""
        notifications = (
            self._get_session()
            .query(Notification)
            .order_by(Notification.timestamp.desc(), Notification.id.desc())
            .all()
        )
        return [notification_to_domain(item) for item in notifications]
