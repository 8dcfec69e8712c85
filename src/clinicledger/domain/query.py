"""Ledger query, filter and pagination helpers."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence, TypeVar

from clinicledger.domain.entities import Entry, EntryType, LedgerRow, LedgerTotals
from clinicledger.domain.errors import ValidationError
from clinicledger.utils.amount_parser import ZERO
from clinicledger.utils.date_parser import parse_date

T = TypeVar("T")


def validate_date(value: "date | str | None", field: str = "date") -> date:
    """Accept a date or a parseable date string.

    Raises:
        ValidationError: If the value is missing or not a calendar date
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Date is required", field=field)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parse_date(value)
        except ValueError as e:
            raise ValidationError(f"Invalid date: {e}", field=field) from None
    raise ValidationError(f"Invalid date: {value!r}", field=field)


@dataclass(frozen=True)
class LedgerFilter:
    """Filter criteria for ledger and transaction listings.

    All given criteria must match (conjunction).
    """

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    description: Optional[str] = None
    category: Optional[str] = None
    search: Optional[str] = None
    entry_types: Optional[tuple[EntryType, ...]] = None
    purpose: Optional[str] = None

    def __post_init__(self):
        # Date bounds may be given as strings; keep them as dates
        for name in ("date_from", "date_to"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, validate_date(value, field=name))

    def validate(self) -> None:
        """Raise ValidationError when the date range is inverted."""
        if self.date_from is not None and self.date_to is not None and self.date_to < self.date_from:
            raise ValidationError(
                f"End date {self.date_to} is before start date {self.date_from}",
                field="date_to",
            )


def _contains(haystack: Optional[str], needle: str) -> bool:
    return haystack is not None and needle in haystack.casefold()


def matches(entry: Entry, ledger_filter: LedgerFilter) -> bool:
    """Check one entry against every criterion of the filter."""
    f = ledger_filter
    if f.entry_types is not None and entry.entry_type not in f.entry_types:
        return False
    if f.date_from is not None and entry.transaction_date < f.date_from:
        return False
    if f.date_to is not None and entry.transaction_date > f.date_to:
        return False
    if f.description and f.description.strip():
        if not _contains(entry.description, f.description.strip().casefold()):
            return False
    if f.category is not None and entry.category != f.category:
        return False
    if f.purpose is not None and entry.purpose != f.purpose:
        return False
    if f.search:
        needle = f.search.strip().casefold()
        if not (
            _contains(entry.transaction_no, needle)
            or _contains(entry.description, needle)
            or _contains(entry.category, needle)
        ):
            return False
    return True


def filter_entries(entries: Iterable[Entry], ledger_filter: LedgerFilter) -> list[Entry]:
    """Return the entries matching the filter, preserving input order.

    Raises:
        ValidationError: If the filter's date range is inverted
    """
    ledger_filter.validate()
    return [entry for entry in entries if matches(entry, ledger_filter)]


def paginate(items: Sequence[T], page_size: int, page: int) -> tuple[T, ...]:
    """Slice one page (1-based) out of an already materialized sequence.

    Raises:
        ValidationError: If page or page_size is not positive
    """
    if page_size < 1:
        raise ValidationError("Page size must be at least 1", field="page_size")
    if page < 1:
        raise ValidationError("Page must be at least 1", field="page")
    start = (page - 1) * page_size
    return tuple(items[start : start + page_size])


def compute_totals(rows: Sequence[LedgerRow], opening_balance: Decimal = ZERO) -> LedgerTotals:
    """Summarize ledger rows.

    ``final_balance`` is taken from the last row, so it always agrees with
    the running balance.
    """
    total_in = sum((r.signed_amount for r in rows if r.signed_amount > 0), ZERO)
    total_out = sum((-r.signed_amount for r in rows if r.signed_amount < 0), ZERO)
    return LedgerTotals(
        total_in=total_in,
        total_out=total_out,
        net_movement=total_in - total_out,
        final_balance=rows[-1].balance if rows else opening_balance,
        row_count=len(rows),
    )
