"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def crop_not_found(crop_id: int) -> str:
    """Return message for missing crop."""
    return f"Crop {crop_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def equipment_not_found(equipment_id: int) -> str:
    """Return message for missing equipment."""
    return f"Equipment {equipment_id} not found"


def maintenance_log_not_found(log_id: int, equipment_id: int) -> str:
    """Return message for missing maintenance log."""
    return f"Maintenance log {log_id} not found for equipment {equipment_id}"


def todo_not_found(todo_id: int) -> str:
    """Return message for missing to-do."""
    return f"To-do {todo_id} not found"


def notification_not_found(notification_id: int) -> str:
    """Return message for missing notification."""
    return f"Notification {notification_id} not found"


def unknown_category(category: str, kind: str) -> str:
    """Return message for a category not configured for a transaction kind."""
    return f"Category '{category}' is not a configured {kind} category"


def duplicate_category(category: str, kind: str) -> str:
    """Return message for adding a category that already exists."""
    return f"Category '{category}' already exists in {kind} categories"
