"""Crop domain service."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from farmledger.database.base import Database
from farmledger.domain import aggregation
from farmledger.domain.entities import AreaUnit, Crop as CropEntity, CropStatus
from farmledger.domain.errors import NotFoundError, ValidationError, crop_not_found
from farmledger.domain.validation import (
    QUANTITY_PLACES,
    optional_text,
    require_non_negative,
    require_positive,
    require_text,
)

logger = logging.getLogger(__name__)


def _check_dates(crop: CropEntity) -> None:
    if crop.estimated_harvest_date < crop.planting_date:
        raise ValidationError("Estimated harvest date cannot be before the planting date")
    if crop.actual_harvest_date is not None and crop.actual_harvest_date < crop.planting_date:
        raise ValidationError("Harvest date cannot be before the planting date")


def _area_unit(value) -> AreaUnit:
    try:
        return AreaUnit(value)
    except ValueError:
        raise ValidationError(f"Area unit must be acres or hectares, got '{value}'")


def _normalize_yield(crop: CropEntity) -> CropEntity:
    """A yield unit only means something next to a yield amount."""
    if crop.yield_amount is None and crop.yield_unit is not None:
        return replace(crop, yield_unit=None)
    return crop


class CropService:
    """Service for managing crops."""

    def __init__(self, db: Database):
        """Initialize crop service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_crop(
        self,
        name: str,
        planting_date: date,
        estimated_harvest_date: date,
        area: Decimal,
        area_unit: AreaUnit = AreaUnit.ACRES,
        actual_harvest_date: Optional[date] = None,
        yield_amount: Optional[Decimal] = None,
        yield_unit: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a crop.

        Args:
            name: Crop name, e.g. "Wheat - Field A"
            planting_date: Date planted
            estimated_harvest_date: Expected harvest date
            area: Planted area, greater than zero
            area_unit: Acres or hectares
            actual_harvest_date: Optional date actually harvested
            yield_amount: Optional harvested amount
            yield_unit: Unit for yield_amount; dropped when there is no amount
            notes: Optional notes

        Returns:
            Crop ID

        Raises:
            ValidationError: If any field is invalid
        """
        crop = _normalize_yield(
            CropEntity(
                id=0,
                name=require_text(name, "Crop name"),
                planting_date=planting_date,
                estimated_harvest_date=estimated_harvest_date,
                area=require_positive(area, "Area", QUANTITY_PLACES),
                area_unit=_area_unit(area_unit),
                actual_harvest_date=actual_harvest_date,
                yield_amount=(
                    require_non_negative(yield_amount, "Yield amount", QUANTITY_PLACES)
                    if yield_amount is not None
                    else None
                ),
                yield_unit=optional_text(yield_unit),
                notes=optional_text(notes),
            )
        )
        _check_dates(crop)

        crop_id = self.db.create_crop(
            name=crop.name,
            planting_date=crop.planting_date,
            estimated_harvest_date=crop.estimated_harvest_date,
            area=crop.area,
            area_unit=crop.area_unit.value,
            actual_harvest_date=crop.actual_harvest_date,
            yield_amount=crop.yield_amount,
            yield_unit=crop.yield_unit,
            notes=crop.notes,
        )
        logger.debug("Created crop %s (%s)", crop_id, crop.name)
        return crop_id

    def get_crop(self, crop_id: int) -> Optional[CropEntity]:
        """Get crop by ID."""
        return self.db.get_crop(crop_id)

    def _require_crop(self, crop_id: int) -> CropEntity:
        crop = self.db.get_crop(crop_id)
        if crop is None:
            raise NotFoundError(crop_not_found(crop_id))
        return crop

    def update_crop(
        self,
        crop_id: int,
        name: Optional[str] = None,
        planting_date: Optional[date] = None,
        estimated_harvest_date: Optional[date] = None,
        area: Optional[Decimal] = None,
        area_unit: Optional[AreaUnit] = None,
        actual_harvest_date: Optional[date] = None,
        yield_amount: Optional[Decimal] = None,
        yield_unit: Optional[str] = None,
        notes: Optional[str] = None,
        clear_harvest: bool = False,
        clear_yield: bool = False,
    ) -> None:
        """Update crop fields.

        Clearing the yield also clears its unit.

        Raises:
            NotFoundError: If the crop doesn't exist
            ValidationError: If a new value is invalid
        """
        crop = self._require_crop(crop_id)

        if clear_harvest and actual_harvest_date is not None:
            raise ValidationError("Cannot set both actual_harvest_date and clear_harvest")
        if clear_yield and yield_amount is not None:
            raise ValidationError("Cannot set both yield_amount and clear_yield")

        changes = {}
        if name is not None:
            changes["name"] = require_text(name, "Crop name")
        if planting_date is not None:
            changes["planting_date"] = planting_date
        if estimated_harvest_date is not None:
            changes["estimated_harvest_date"] = estimated_harvest_date
        if area is not None:
            changes["area"] = require_positive(area, "Area", QUANTITY_PLACES)
        if area_unit is not None:
            changes["area_unit"] = _area_unit(area_unit)
        if actual_harvest_date is not None:
            changes["actual_harvest_date"] = actual_harvest_date
        elif clear_harvest:
            changes["actual_harvest_date"] = None
        if yield_amount is not None:
            changes["yield_amount"] = require_non_negative(
                yield_amount, "Yield amount", QUANTITY_PLACES
            )
        elif clear_yield:
            changes["yield_amount"] = None
            changes["yield_unit"] = None
        if yield_unit is not None:
            changes["yield_unit"] = optional_text(yield_unit)
        if notes is not None:
            changes["notes"] = optional_text(notes)

        updated = _normalize_yield(replace(crop, **changes))
        _check_dates(updated)
        self.db.update_crop(updated)
        logger.debug("Updated crop %s: %s", crop_id, sorted(changes))

    def record_harvest(
        self,
        crop_id: int,
        harvest_date: date,
        yield_amount: Optional[Decimal] = None,
        yield_unit: Optional[str] = None,
    ) -> None:
        """Mark a crop as harvested, optionally with its yield."""
        self.update_crop(
            crop_id,
            actual_harvest_date=harvest_date,
            yield_amount=yield_amount,
            yield_unit=yield_unit,
        )

    def delete_crop(self, crop_id: int) -> None:
        """Delete a crop.

        Transactions linked to the crop keep their crop_id and are shown
        as unlinked from then on.

        Raises:
            NotFoundError: If the crop doesn't exist
        """
        self._require_crop(crop_id)
        self.db.delete_crop(crop_id)
        logger.debug("Deleted crop %s", crop_id)

    def list_crops(self) -> list[CropEntity]:
        """List all crops in creation order."""
        return self.db.list_crops()

    def get_status(self, crop_id: int, today: date) -> CropStatus:
        """Derived status for a crop as of ``today``."""
        return aggregation.crop_status(self._require_crop(crop_id), today)
