"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from farmledger.domain.entities import (
    Crop,
    Equipment,
    MaintenanceLog,
    Notification,
    Settings,
    Snapshot,
    Todo,
    Transaction,
    TransactionKind,
)


class Database(ABC):
    """Abstract store interface for farmledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema and seed default settings."""
        pass

    # Settings operations
    @abstractmethod
    def get_settings(self) -> Settings:
        """Get farm settings."""
        pass

    @abstractmethod
    def update_settings(
        self, farm_name: Optional[str] = None, currency: Optional[str] = None
    ) -> None:
        """Update farm name and/or currency."""
        pass

    @abstractmethod
    def add_category(self, kind: TransactionKind, name: str) -> None:
        """Append a category to the list for a transaction kind."""
        pass

    @abstractmethod
    def remove_category(self, kind: TransactionKind, name: str) -> bool:
        """Remove a category. Returns False if it was not configured."""
        pass

    # Transaction operations
    @abstractmethod
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
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(self, transaction: Transaction) -> None:
        """Overwrite a transaction's fields (kind is never changed)."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        kind: Optional[TransactionKind] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        crop_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions, newest first, with optional filters."""
        pass

    # Crop operations
    @abstractmethod
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
        pass

    @abstractmethod
    def get_crop(self, crop_id: int) -> Optional[Crop]:
        """Get crop by ID."""
        pass

    @abstractmethod
    def update_crop(self, crop: Crop) -> None:
        """Overwrite a crop's fields."""
        pass

    @abstractmethod
    def delete_crop(self, crop_id: int) -> None:
        """Delete a crop."""
        pass

    @abstractmethod
    def list_crops(self) -> list[Crop]:
        """List crops in creation order."""
        pass

    # Equipment operations
    @abstractmethod
    def create_equipment(
        self,
        name: str,
        purchase_date: date,
        model: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create equipment. Returns equipment ID."""
        pass

    @abstractmethod
    def get_equipment(self, equipment_id: int) -> Optional[Equipment]:
        """Get equipment (with maintenance logs) by ID."""
        pass

    @abstractmethod
    def update_equipment(self, equipment: Equipment) -> None:
        """Overwrite equipment fields. Maintenance logs are left untouched."""
        pass

    @abstractmethod
    def delete_equipment(self, equipment_id: int) -> None:
        """Delete equipment and its maintenance logs."""
        pass

    @abstractmethod
    def list_equipment(self) -> list[Equipment]:
        """List equipment in creation order."""
        pass

    @abstractmethod
    def add_maintenance_log(
        self, equipment_id: int, date: date, description: str, cost: Decimal
    ) -> int:
        """Add a maintenance log to equipment. Returns log ID."""
        pass

    @abstractmethod
    def get_maintenance_log(self, log_id: int) -> Optional[MaintenanceLog]:
        """Get maintenance log by ID."""
        pass

    @abstractmethod
    def delete_maintenance_log(self, log_id: int) -> None:
        """Delete a maintenance log."""
        pass

    # To-do operations
    @abstractmethod
    def create_todo(self, task: str) -> int:
        """Create a to-do. Returns to-do ID."""
        pass

    @abstractmethod
    def get_todo(self, todo_id: int) -> Optional[Todo]:
        """Get to-do by ID."""
        pass

    @abstractmethod
    def set_todo_completed(self, todo_id: int, completed: bool) -> None:
        """Set a to-do's completed flag."""
        pass

    @abstractmethod
    def delete_todo(self, todo_id: int) -> None:
        """Delete a to-do."""
        pass

    @abstractmethod
    def list_todos(self) -> list[Todo]:
        """List to-dos, newest first."""
        pass

    # Notification operations
    @abstractmethod
    def create_notification(
        self, message: str, timestamp: datetime, link: Optional[str] = None
    ) -> int:
        """Create a notification. Returns notification ID."""
        pass

    @abstractmethod
    def get_notification(self, notification_id: int) -> Optional[Notification]:
        """Get notification by ID."""
        pass

    @abstractmethod
    def update_notification_flags(
        self,
        notification_id: int,
        read: Optional[bool] = None,
        seen: Optional[bool] = None,
    ) -> None:
        """Set read and/or seen flags on a notification."""
        pass

    @abstractmethod
    def delete_notification(self, notification_id: int) -> None:
        """Delete a notification."""
        pass

    @abstractmethod
    def list_notifications(self) -> list[Notification]:
        """List notifications, newest first."""
        pass

    def snapshot(self) -> Snapshot:
        """Take a read-only snapshot of all collections and settings."""
        return Snapshot(
            settings=self.get_settings(),
            transactions=tuple(self.list_transactions()),
            crops=tuple(self.list_crops()),
            equipment=tuple(self.list_equipment()),
            todos=tuple(self.list_todos()),
        )
