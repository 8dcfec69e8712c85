"""Ledger domain service.

One ``LedgerService`` per fund domain exposes the balance, the four write
operations (fund in/out, income, expense) and the running-balance views.
Every write runs inside ``Database.writer`` so the balance check and the
append commit or roll back together.
"""

import dataclasses
import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from clinicledger.database.base import Database
from clinicledger.domain.balance import (
    Signer,
    current_balance,
    running_balance,
    signed_amount,
    sort_for_ledger,
    validate_withdrawal,
)
from clinicledger.domain.category import resolve_category
from clinicledger.domain.domains import LedgerDomain, get_domain
from clinicledger.domain.entities import (
    ACCOUNT_TYPES,
    FUND_TYPES,
    AccountTransaction,
    Entry,
    EntryType,
    FundTransaction,
    LedgerPage,
)
from clinicledger.domain.errors import NotFoundError, ValidationError
from clinicledger.domain.query import LedgerFilter, compute_totals, filter_entries, paginate, validate_date
from clinicledger.utils.amount_parser import ZERO, to_money

logger = logging.getLogger(__name__)

MAX_LABEL_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 500


def validate_amount(amount: "Decimal | int | str") -> Decimal:
    """Coerce an amount to money and require it to be positive.

    Raises:
        ValidationError: If the amount is missing, unparseable or not > 0
    """
    if amount is None:
        raise ValidationError("Amount is required", field="amount")
    try:
        value = to_money(amount)
    except ValueError as e:
        raise ValidationError(f"Invalid amount: {e}", field="amount") from None
    if value <= 0:
        raise ValidationError("Amount must be greater than zero", field="amount")
    return value


def _required_text(value: Optional[str], field: str, max_length: int = MAX_LABEL_LENGTH) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field.capitalize()} is required", field=field)
    if len(text) > max_length:
        raise ValidationError(f"{field.capitalize()} must be at most {max_length} characters", field=field)
    return text


def _optional_text(value: Optional[str], field: str, max_length: int = MAX_DESCRIPTION_LENGTH) -> Optional[str]:
    text = (value or "").strip()
    if len(text) > max_length:
        raise ValidationError(f"{field.capitalize()} must be at most {max_length} characters", field=field)
    return text or None


def _actor(actor: "str | int | None") -> Optional[str]:
    return None if actor is None else str(actor)


def build_ledger_page(
    entries: Iterable[Entry],
    ledger_filter: LedgerFilter,
    page: int,
    page_size: int,
    snapshot_id: int,
    opening_balance: Decimal = ZERO,
    signer: Signer = signed_amount,
) -> LedgerPage:
    """Filter, fold and paginate entries into a ledger page.

    The running balance and totals cover every matching entry; only the
    returned rows are limited to the requested page.
    """
    selected = sort_for_ledger(filter_entries(entries, ledger_filter))
    rows = running_balance(selected, opening_balance, signer)
    return LedgerPage(
        rows=paginate(rows, page_size, page),
        totals=compute_totals(rows, opening_balance),
        page=page,
        page_size=page_size,
        total_rows=len(rows),
        snapshot_id=snapshot_id,
        opening_balance=opening_balance,
    )


class LedgerService:
    """Service for one fund domain's balance, postings and ledgers."""

    def __init__(self, db: Database, domain: "str | LedgerDomain"):
        """Initialize ledger service.

        Args:
            db: Database instance
            domain: Fund domain key or configuration
        """
        self.db = db
        self.domain = get_domain(domain)

    # Balance
    def get_balance(self) -> Decimal:
        """Current balance over every committed entry, regardless of date."""
        balance = current_balance(self.db.list_entries(self.domain.key))
        logger.debug("Balance of %s is %s", self.domain.key, balance)
        return balance

    def balance_as_of(self, on_date: "date | str", snapshot_id: Optional[int] = None) -> Decimal:
        """Balance of the entries dated on or before a day."""
        on_date = validate_date(on_date)
        entries = self.db.list_entries(self.domain.key, end_date=on_date, snapshot_id=snapshot_id)
        return current_balance(entries)

    # Postings
    def add_fund(
        self,
        amount: "Decimal | int | str",
        purpose: str,
        description: Optional[str],
        date: "date | str",
        actor: "str | int | None" = None,
    ) -> FundTransaction:
        """Record capital paid into the fund.

        Raises:
            ValidationError: If amount, purpose or date is invalid
        """
        return self._post_fund(EntryType.FUND_IN, amount, purpose, description, date, actor)

    def withdraw_fund(
        self,
        amount: "Decimal | int | str",
        purpose: str,
        description: Optional[str],
        date: "date | str",
        actor: "str | int | None" = None,
    ) -> FundTransaction:
        """Record capital taken out of the fund.

        Raises:
            ValidationError: If amount, purpose or date is invalid
            InsufficientBalanceError: If the amount exceeds the balance
            ConcurrencyConflict: If a competing writer won; retry
        """
        return self._post_fund(EntryType.FUND_OUT, amount, purpose, description, date, actor)

    def add_expense(
        self,
        amount: "Decimal | int | str",
        category: Optional[str],
        description: Optional[str],
        date: "date | str",
        actor: "str | int | None" = None,
        category_id: Optional[int] = None,
    ) -> AccountTransaction:
        """Record an operating expense.

        The category is resolved (and created when new) in the same
        transaction as the balance check and the posting.

        Raises:
            ValidationError: If an input is invalid or the category inactive
            NotFoundError: If category_id does not exist
            InsufficientBalanceError: If the amount exceeds the balance
            ConcurrencyConflict: If a competing writer won; retry
        """
        amount = validate_amount(amount)
        txn_date = validate_date(date)
        description = _optional_text(description, "description")

        with self.db.writer(self.domain.key) as writer:
            resolved = resolve_category(writer, self.domain, category, category_id)
            validate_withdrawal(current_balance(writer.entries()), amount)
            entry = writer.append(
                EntryType.EXPENSE,
                amount,
                txn_date,
                self.domain.prefix_for(EntryType.EXPENSE),
                description=description,
                created_by=_actor(actor),
                category=resolved.name,
                category_id=resolved.id,
            )
        logger.info("%s: expense %s %s (%s)", self.domain.key, entry.transaction_no, amount, resolved.name)
        return entry

    def add_income(
        self,
        amount: "Decimal | int | str",
        category: str,
        description: Optional[str],
        date: "date | str",
        actor: "str | int | None" = None,
        reference_type: Optional[str] = None,
        reference_id: Optional[int] = None,
    ) -> AccountTransaction:
        """Record operating income under a free-text category label.

        Raises:
            ValidationError: If amount, category or date is invalid
        """
        amount = validate_amount(amount)
        txn_date = validate_date(date)
        category = _required_text(category, "category")
        description = _optional_text(description, "description")

        with self.db.writer(self.domain.key) as writer:
            entry = writer.append(
                EntryType.INCOME,
                amount,
                txn_date,
                self.domain.prefix_for(EntryType.INCOME),
                description=description,
                created_by=_actor(actor),
                category=category,
                reference_type=reference_type,
                reference_id=reference_id,
            )
        logger.info("%s: income %s %s (%s)", self.domain.key, entry.transaction_no, amount, category)
        return entry

    def _post_fund(
        self,
        entry_type: EntryType,
        amount: "Decimal | int | str",
        purpose: str,
        description: Optional[str],
        txn_date: "date | str",
        actor: "str | int | None",
    ) -> FundTransaction:
        amount = validate_amount(amount)
        txn_date = validate_date(txn_date)
        purpose = _required_text(purpose, "purpose")
        description = _optional_text(description, "description")

        with self.db.writer(self.domain.key) as writer:
            if entry_type == EntryType.FUND_OUT:
                validate_withdrawal(current_balance(writer.entries()), amount)
            entry = writer.append(
                entry_type,
                amount,
                txn_date,
                self.domain.prefix_for(entry_type),
                description=description,
                created_by=_actor(actor),
                purpose=purpose,
            )
        logger.info("%s: %s %s %s", self.domain.key, entry_type.value, entry.transaction_no, amount)
        return entry

    # Lookups and listings
    def get_transaction(self, entry_id: int) -> Entry:
        """Get an entry of this domain by ID or raise NotFoundError."""
        entry = self.db.get_entry(entry_id)
        if entry is None or entry.domain != self.domain.key:
            raise NotFoundError(f"Transaction {entry_id} not found")
        return entry

    def list_transactions(self, ledger_filter: Optional[LedgerFilter] = None) -> list[Entry]:
        """Income/expense transactions matching a filter, newest first."""
        ledger_filter = ledger_filter or LedgerFilter()
        entry_types = ledger_filter.entry_types or ACCOUNT_TYPES
        ledger_filter = dataclasses.replace(ledger_filter, entry_types=entry_types)
        entries = self.db.list_entries(
            self.domain.key,
            entry_types=entry_types,
            start_date=ledger_filter.date_from,
            end_date=ledger_filter.date_to,
        )
        return filter_entries(entries, ledger_filter)

    def recent_transactions(self, limit: int = 10) -> list[Entry]:
        return self.list_transactions()[:limit]

    def fund_history(self, limit: Optional[int] = None) -> list[Entry]:
        """Fund movements, newest first."""
        entries = list(self.db.list_entries(self.domain.key, entry_types=FUND_TYPES))
        return entries[:limit] if limit is not None else entries

    def fund_purposes(self) -> list[str]:
        """Distinct fund purposes (investor names), sorted."""
        entries = self.db.list_entries(self.domain.key, entry_types=FUND_TYPES)
        return sorted({e.purpose for e in entries if e.purpose})

    # Ledgers
    def ledger(
        self,
        ledger_filter: Optional[LedgerFilter] = None,
        page: int = 1,
        page_size: int = 50,
        snapshot_id: Optional[int] = None,
        include_opening: bool = False,
    ) -> LedgerPage:
        """Running-balance ledger of the domain.

        Args:
            ledger_filter: Criteria; all entry types when not restricted
            page: 1-based page number
            page_size: Rows per page
            snapshot_id: Snapshot returned by an earlier page; pins the
                entry set so later pages never shift
            include_opening: Start from the balance before ``date_from``
                instead of zero

        Raises:
            ValidationError: If the filter or paging arguments are invalid
        """
        ledger_filter = ledger_filter or LedgerFilter()
        ledger_filter.validate()
        if snapshot_id is None:
            snapshot_id = self.db.latest_entry_id(self.domain.key)

        entries = self.db.list_entries(
            self.domain.key,
            entry_types=ledger_filter.entry_types,
            start_date=ledger_filter.date_from,
            end_date=ledger_filter.date_to,
            snapshot_id=snapshot_id,
            newest_first=False,
        )

        opening = ZERO
        if include_opening and ledger_filter.date_from is not None:
            opening = self._balance_before(ledger_filter.date_from, snapshot_id, ledger_filter.entry_types)

        return build_ledger_page(entries, ledger_filter, page, page_size, snapshot_id, opening)

    def fund_ledger(
        self,
        ledger_filter: Optional[LedgerFilter] = None,
        page: int = 1,
        page_size: int = 50,
        snapshot_id: Optional[int] = None,
    ) -> LedgerPage:
        """Running balance over fund-in/fund-out movements only."""
        ledger_filter = dataclasses.replace(ledger_filter or LedgerFilter(), entry_types=FUND_TYPES)
        return self.ledger(ledger_filter, page=page, page_size=page_size, snapshot_id=snapshot_id)

    def _balance_before(
        self, day: date, snapshot_id: int, entry_types: Optional[tuple[EntryType, ...]]
    ) -> Decimal:
        entries = self.db.list_entries(
            self.domain.key,
            entry_types=entry_types,
            end_date=day - timedelta(days=1),
            snapshot_id=snapshot_id,
        )
        return current_balance(entries)
