"""Transaction domain service."""

import logging
from dataclasses import replace
from typing import Optional
from datetime import date
from decimal import Decimal

from farmledger.database.base import Database
from farmledger.domain.entities import Transaction as TransactionEntity, TransactionKind
from farmledger.domain.errors import (
    NotFoundError,
    ValidationError,
    crop_not_found,
    transaction_not_found,
    unknown_category,
)
from farmledger.domain.validation import require_money

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for managing income and expense transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate_category(self, kind: TransactionKind, category: str) -> str:
        category = (category or "").strip()
        if category not in self.db.get_settings().categories_for(kind):
            raise ValidationError(unknown_category(category, kind.value))
        return category

    def _validate_crop(self, crop_id: int) -> None:
        if self.db.get_crop(crop_id) is None:
            raise NotFoundError(crop_not_found(crop_id))

    def create_transaction(
        self,
        kind: TransactionKind,
        amount: Decimal,
        date: date,
        category: str,
        description: str = "",
        crop_id: Optional[int] = None,
    ) -> int:
        """Create a transaction.

        Args:
            kind: Income or expense
            amount: Non-negative amount in the farm currency
            date: Transaction date
            category: Category name, must be configured for the kind
            description: Optional free text
            crop_id: Optional crop the transaction is linked to

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the amount or category is invalid
            NotFoundError: If crop_id does not match a crop
        """
        amount = require_money(amount, "Amount")
        category = self._validate_category(kind, category)
        if crop_id is not None:
            self._validate_crop(crop_id)

        transaction_id = self.db.create_transaction(
            kind=kind,
            amount=amount,
            date=date,
            description=(description or "").strip(),
            category=category,
            crop_id=crop_id,
        )
        logger.debug("Created %s transaction %s for %s", kind.value, transaction_id, amount)
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: int,
        amount: Optional[Decimal] = None,
        date: Optional[date] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        crop_id: Optional[int] = None,
        clear_crop: bool = False,
    ) -> None:
        """Update transaction fields. The kind cannot be changed.

        Args:
            transaction_id: Transaction ID to update
            amount: Optional new amount
            date: Optional new date
            description: Optional new description
            category: Optional new category (validated against the kind)
            crop_id: Optional new linked crop
            clear_crop: If True, unlink the crop (crop_id must be None)

        Raises:
            NotFoundError: If the transaction or crop doesn't exist
            ValidationError: If a new value is invalid
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        if clear_crop and crop_id is not None:
            raise ValidationError("Cannot set both crop_id and clear_crop")

        changes = {}
        if amount is not None:
            changes["amount"] = require_money(amount, "Amount")
        if date is not None:
            changes["date"] = date
        if description is not None:
            changes["description"] = description.strip()
        if category is not None:
            changes["category"] = self._validate_category(txn.kind, category)
        if crop_id is not None:
            self._validate_crop(crop_id)
            changes["crop_id"] = crop_id
        elif clear_crop:
            changes["crop_id"] = None

        self.db.update_transaction(replace(txn, **changes))
        logger.debug("Updated transaction %s: %s", transaction_id, sorted(changes))

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        self.db.delete_transaction(transaction_id)
        logger.debug("Deleted transaction %s", transaction_id)

    def list_transactions(
        self,
        kind: Optional[TransactionKind] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        crop_id: Optional[int] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters, newest first.

        An inverted date range returns an empty list.
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            return []
        return self.db.list_transactions(
            kind=kind, start_date=start_date, end_date=end_date, crop_id=crop_id
        )
