"""Domain layer for clinicledger application.

Services live in their own modules (``clinicledger.domain.ledger`` and
friends) and are imported from there; this package only re-exports the
entity and error types, which the database layer depends on.
"""

from clinicledger.domain.entities import (
    AccountTransaction,
    EntryType,
    ExpenseCategory,
    FundTransaction,
    LedgerRow,
)
from clinicledger.domain.errors import (
    ConcurrencyConflict,
    DomainError,
    InsufficientBalanceError,
    NotFoundError,
    StorageError,
    ValidationError,
)

__all__ = [
    "AccountTransaction",
    "EntryType",
    "ExpenseCategory",
    "FundTransaction",
    "LedgerRow",
    "ConcurrencyConflict",
    "DomainError",
    "InsufficientBalanceError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
