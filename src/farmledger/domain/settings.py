"""Farm settings domain service."""

import logging

from farmledger.database.base import Database
from farmledger.domain.entities import Settings, TransactionKind
from farmledger.domain.errors import (
    ConflictError,
    NotFoundError,
    duplicate_category,
)
from farmledger.domain.validation import require_currency_code, require_text

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for farm name, currency and category lists."""

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_settings(self) -> Settings:
        """Get current settings."""
        return self.db.get_settings()

    def update_farm_name(self, farm_name: str) -> None:
        """Rename the farm.

        Raises:
            ValidationError: If the name is blank
        """
        self.db.update_settings(farm_name=require_text(farm_name, "Farm name"))

    def update_currency(self, currency: str) -> None:
        """Change the display currency. Amounts are not converted.

        Raises:
            ValidationError: If the code is not three letters
        """
        code = require_currency_code(currency)
        self.db.update_settings(currency=code)
        logger.debug("Currency set to %s", code)

    def add_category(self, kind: TransactionKind, name: str) -> None:
        """Add a category to the income or expense list.

        Raises:
            ValidationError: If the name is blank
            ConflictError: If the category already exists for that kind
        """
        name = require_text(name, "Category name")
        if name in self.db.get_settings().categories_for(kind):
            raise ConflictError(duplicate_category(name, kind.value))
        self.db.add_category(kind, name)
        logger.debug("Added %s category '%s'", kind.value, name)

    def remove_category(self, kind: TransactionKind, name: str) -> None:
        """Remove a category from the income or expense list.

        Transactions already tagged with the category keep it.

        Raises:
            NotFoundError: If the category is not configured for that kind
        """
        if not self.db.remove_category(kind, name):
            raise NotFoundError(f"Category '{name}' not found in {kind.value} categories")
        logger.debug("Removed %s category '%s'", kind.value, name)
