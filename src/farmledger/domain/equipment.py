"""Equipment and maintenance domain service."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from farmledger.database.base import Database
from farmledger.domain import aggregation
from farmledger.domain.entities import Equipment as EquipmentEntity, MaintenanceSummary
from farmledger.domain.errors import (
    NotFoundError,
    equipment_not_found,
    maintenance_log_not_found,
)
from farmledger.domain.validation import optional_text, require_money, require_text

logger = logging.getLogger(__name__)


class EquipmentService:
    """Service for managing equipment and its maintenance logs."""

    def __init__(self, db: Database):
        """Initialize equipment service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_equipment(
        self,
        name: str,
        purchase_date: date,
        model: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create equipment.

        Returns:
            Equipment ID

        Raises:
            ValidationError: If the name is blank
        """
        equipment_id = self.db.create_equipment(
            name=require_text(name, "Equipment name"),
            purchase_date=purchase_date,
            model=optional_text(model),
            notes=optional_text(notes),
        )
        logger.debug("Created equipment %s (%s)", equipment_id, name)
        return equipment_id

    def get_equipment(self, equipment_id: int) -> Optional[EquipmentEntity]:
        """Get equipment with its maintenance logs."""
        return self.db.get_equipment(equipment_id)

    def _require_equipment(self, equipment_id: int) -> EquipmentEntity:
        equipment = self.db.get_equipment(equipment_id)
        if equipment is None:
            raise NotFoundError(equipment_not_found(equipment_id))
        return equipment

    def update_equipment(
        self,
        equipment_id: int,
        name: Optional[str] = None,
        purchase_date: Optional[date] = None,
        model: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update equipment fields. Blank model or notes clear them.

        Raises:
            NotFoundError: If the equipment doesn't exist
        """
        equipment = self._require_equipment(equipment_id)

        changes = {}
        if name is not None:
            changes["name"] = require_text(name, "Equipment name")
        if purchase_date is not None:
            changes["purchase_date"] = purchase_date
        if model is not None:
            changes["model"] = optional_text(model)
        if notes is not None:
            changes["notes"] = optional_text(notes)

        self.db.update_equipment(replace(equipment, **changes))
        logger.debug("Updated equipment %s: %s", equipment_id, sorted(changes))

    def delete_equipment(self, equipment_id: int) -> None:
        """Delete equipment together with its maintenance logs.

        Raises:
            NotFoundError: If the equipment doesn't exist
        """
        self._require_equipment(equipment_id)
        self.db.delete_equipment(equipment_id)
        logger.debug("Deleted equipment %s", equipment_id)

    def list_equipment(self) -> list[EquipmentEntity]:
        """List all equipment in creation order."""
        return self.db.list_equipment()

    def add_maintenance_log(
        self,
        equipment_id: int,
        date: date,
        description: str,
        cost: Decimal,
    ) -> int:
        """Record maintenance work on a piece of equipment.

        Returns:
            Maintenance log ID

        Raises:
            NotFoundError: If the equipment doesn't exist
            ValidationError: If the cost is negative or the description blank
        """
        self._require_equipment(equipment_id)
        log_id = self.db.add_maintenance_log(
            equipment_id=equipment_id,
            date=date,
            description=require_text(description, "Description"),
            cost=require_money(cost, "Cost"),
        )
        logger.debug("Added maintenance log %s to equipment %s", log_id, equipment_id)
        return log_id

    def delete_maintenance_log(self, equipment_id: int, log_id: int) -> None:
        """Delete a maintenance log belonging to a piece of equipment.

        Raises:
            NotFoundError: If the log does not exist on that equipment
        """
        log = self.db.get_maintenance_log(log_id)
        if log is None or log.equipment_id != equipment_id:
            raise NotFoundError(maintenance_log_not_found(log_id, equipment_id))
        self.db.delete_maintenance_log(log_id)
        logger.debug("Deleted maintenance log %s from equipment %s", log_id, equipment_id)

    def get_maintenance_summary(self, equipment_id: int) -> MaintenanceSummary:
        """Total cost and most recent log for a piece of equipment."""
        return aggregation.maintenance_summary(self._require_equipment(equipment_id))
