"""Single-category ledgers derived from another domain's entries."""

import logging
from typing import Iterable, Optional

from clinicledger.database.base import Database
from clinicledger.domain.balance import accumulated_amount
from clinicledger.domain.domains import DERIVED_LEDGERS, DerivedLedgerConfig, get_domain
from clinicledger.domain.entities import Entry, EntryType, LedgerPage, LedgerTotals
from clinicledger.domain.errors import NotFoundError
from clinicledger.domain.ledger import build_ledger_page
from clinicledger.domain.query import LedgerFilter, paginate
from clinicledger.utils.amount_parser import ZERO

logger = logging.getLogger(__name__)


class DerivedLedgerService:
    """Ledger of one category within a source domain.

    Entries are read-only here; they are posted through the source
    domain's ``LedgerService``. Every amount adds to the running total, so
    an expense category shows how much has been spent on it to date.
    """

    def __init__(
        self,
        db: Database,
        source_domain: str,
        category_name: str,
        entry_type: EntryType = EntryType.EXPENSE,
    ):
        self.db = db
        self.source = get_domain(source_domain)
        self.category_name = category_name
        self.entry_type = entry_type

    @classmethod
    def from_config(cls, db: Database, config: "DerivedLedgerConfig | str") -> "DerivedLedgerService":
        """Build a service from a registered derived ledger (e.g. "house-security").

        Raises:
            NotFoundError: If the key is not registered
        """
        if isinstance(config, str):
            try:
                config = DERIVED_LEDGERS[config]
            except KeyError:
                raise NotFoundError(f"Derived ledger '{config}' not found") from None
        return cls(db, config.source_domain, config.category_name, config.entry_type)

    def _entries(self, snapshot_id: int, ledger_filter: LedgerFilter) -> Optional[Iterable[Entry]]:
        """Entries of the category, or None when the category does not exist."""
        category = self.db.get_category_by_name(
            self.source.key, self.category_name, self.source.case_sensitive_categories
        )
        if category is None and self.entry_type == EntryType.EXPENSE:
            return None

        entries = self.db.list_entries(
            self.source.key,
            entry_types=(self.entry_type,),
            start_date=ledger_filter.date_from,
            end_date=ledger_filter.date_to,
            category_id=category.id if self.entry_type == EntryType.EXPENSE else None,
            snapshot_id=snapshot_id,
            newest_first=False,
        )
        if self.entry_type == EntryType.EXPENSE:
            return entries
        # Income carries a free-text label rather than a category reference
        return [e for e in entries if e.category == self.category_name]

    def ledger(
        self,
        ledger_filter: Optional[LedgerFilter] = None,
        page: int = 1,
        page_size: int = 50,
        snapshot_id: Optional[int] = None,
    ) -> LedgerPage:
        """Accumulating ledger of the category.

        A category that was never created yields an empty ledger.

        Raises:
            ValidationError: If the filter or paging arguments are invalid
        """
        ledger_filter = ledger_filter or LedgerFilter()
        ledger_filter.validate()
        if snapshot_id is None:
            snapshot_id = self.db.latest_entry_id(self.source.key)

        entries = self._entries(snapshot_id, ledger_filter)
        if entries is None:
            logger.debug("Category '%s' not found in %s", self.category_name, self.source.key)
            return LedgerPage(
                rows=paginate((), page_size, page),
                totals=LedgerTotals(
                    total_in=ZERO, total_out=ZERO, net_movement=ZERO, final_balance=ZERO, row_count=0
                ),
                page=page,
                page_size=page_size,
                total_rows=0,
                snapshot_id=snapshot_id,
            )
        return build_ledger_page(
            entries, ledger_filter, page, page_size, snapshot_id, signer=accumulated_amount
        )

    def descriptions(self) -> list[str]:
        """Distinct descriptions used in the category, sorted."""
        entries = self._entries(self.db.latest_entry_id(self.source.key), LedgerFilter())
        if entries is None:
            return []
        return sorted({e.description for e in entries if e.description})


def house_security_ledger(db: Database) -> DerivedLedgerService:
    return DerivedLedgerService.from_config(db, "house-security")
