"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from clinicledger.domain.entities import (
    Entry,
    EntryType,
    ExpenseCategory,
    FundAccount,
)


class LedgerWriter(ABC):
    """Unit of work holding a domain's write claim.

    Everything done through a writer commits together when the
    ``Database.writer`` block exits normally and is rolled back otherwise.
    """

    domain: str
    version: int

    @abstractmethod
    def entries(self) -> list[Entry]:
        """All committed entries of the domain, read inside the claim."""
        pass

    @abstractmethod
    def append(
        self,
        entry_type: EntryType,
        amount: Decimal,
        transaction_date: date,
        prefix: str,
        description: Optional[str] = None,
        created_by: Optional[str] = None,
        purpose: Optional[str] = None,
        category: Optional[str] = None,
        category_id: Optional[int] = None,
        reference_type: Optional[str] = None,
        reference_id: Optional[int] = None,
    ) -> Entry:
        """Append an entry; assigns its id and transaction number."""
        pass

    # Category directory, written under the same claim
    @abstractmethod
    def get_category(self, category_id: int) -> Optional[ExpenseCategory]:
        pass

    @abstractmethod
    def get_category_by_name(self, name: str, case_sensitive: bool = True) -> Optional[ExpenseCategory]:
        pass

    @abstractmethod
    def create_category(self, name: str, is_active: bool = True) -> ExpenseCategory:
        pass

    @abstractmethod
    def update_category(
        self, category_id: int, name: Optional[str] = None, is_active: Optional[bool] = None
    ) -> ExpenseCategory:
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        pass

    @abstractmethod
    def get_category_transaction_count(self, category_id: int) -> int:
        pass


class Database(ABC):
    """Abstract database interface for clinicledger."""

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
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def get_account(self, domain: str) -> Optional[FundAccount]:
        """Get the account row of a domain, or None before its first write."""
        pass

    @abstractmethod
    def writer(self, domain: str, expected_version: Optional[int] = None) -> AbstractContextManager[LedgerWriter]:
        """Open a unit of work holding the domain's write claim.

        Args:
            domain: Fund domain key
            expected_version: If given, the claim fails unless the account is
                still at this version

        Raises:
            ConcurrencyConflict: If another writer got there first
        """
        pass

    # Entry operations
    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[Entry]:
        """Get an entry by ID."""
        pass

    @abstractmethod
    def latest_entry_id(self, domain: str) -> int:
        """Highest entry ID of a domain (0 when empty)."""
        pass

    @abstractmethod
    def list_entries(
        self,
        domain: str,
        entry_types: Optional[Iterable[EntryType]] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        snapshot_id: Optional[int] = None,
        newest_first: bool = True,
    ) -> Iterable[Entry]:
        """List entries of a domain with optional filters.

        The result is lazy and restartable: it is bound to the entries
        committed at call time (or up to ``snapshot_id``) and re-reads them
        on every iteration.

        Args:
            domain: Fund domain key
            entry_types: Only these entry types
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            category_id: Optional expense category filter
            snapshot_id: Ignore entries with a higher ID
            newest_first: Order by date descending (ascending if False),
                ties by ID in the same direction
        """
        pass

    # Category operations
    @abstractmethod
    def get_category(self, category_id: int) -> Optional[ExpenseCategory]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(
        self, domain: str, name: str, case_sensitive: bool = True
    ) -> Optional[ExpenseCategory]:
        """Get a domain's category by name."""
        pass

    @abstractmethod
    def list_categories(self, domain: str, active_only: bool = False) -> list[ExpenseCategory]:
        """List a domain's categories ordered by name."""
        pass

    @abstractmethod
    def get_category_transaction_counts(self, domain: str) -> dict[int, int]:
        """Map category ID to the number of entries referencing it."""
        pass
