"""Shared domain error messages and error types."""

from decimal import Decimal
from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    Carries the name of the offending field so callers can render the
    message next to the relevant input.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InsufficientBalanceError(ValidationError):
    """Withdrawal or expense exceeds the current balance."""

    def __init__(self, requested: Decimal, available: Decimal):
        super().__init__(insufficient_balance(requested, available), field="amount")
        self.requested = requested
        self.available = available


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class ConcurrencyConflict(DomainError):
    """A competing writer changed the account; retry the whole operation."""


class StorageError(DomainError):
    """The record store failed; nothing was written."""


def insufficient_balance(requested: Decimal, available: Decimal) -> str:
    """Return message for a debit larger than the balance."""
    return f"Insufficient balance: requested {requested:,.2f}, available {available:,.2f}"


def domain_not_found(key: str) -> str:
    """Return message for an unknown fund domain."""
    return f"Fund domain '{key}' not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def duplicate_category(name: str, domain: str) -> str:
    """Return message for a category name already used in a domain."""
    return f"Category '{name}' already exists in {domain}"


def category_inactive(name: str) -> str:
    """Return message for a deactivated category."""
    return f"Category '{name}' is inactive"


def category_delete_blocked(category_id: int, transaction_count: int) -> str:
    """Return message when a category is still referenced by transactions."""
    return (
        f"Cannot delete category {category_id}: it has {transaction_count} "
        f"transaction{'s' if transaction_count != 1 else ''}. Deactivate it instead."
    )


def account_changed(domain: str) -> str:
    """Return message for a lost compare-and-swap on an account."""
    return f"Account '{domain}' was modified by another writer, please retry"
