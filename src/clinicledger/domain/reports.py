"""Period aggregation service.

Reports are pure folds over the entries of one domain. Every report that
depends on "now" takes an explicit ``as_of`` date.
"""

import logging
from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from clinicledger.database.base import Database
from clinicledger.domain.balance import current_balance
from clinicledger.domain.domains import LedgerDomain, get_domain
from clinicledger.domain.entities import (
    ACCOUNT_TYPES,
    AccountSummary,
    Analytics,
    BalanceSheet,
    CategoryTotal,
    DailyReport,
    Entry,
    EntryType,
    MonthlyReport,
    PurchaseSalesPoint,
    TrendPoint,
)
from clinicledger.domain.errors import ValidationError
from clinicledger.utils.amount_parser import CENTS, ZERO
from clinicledger.utils.date_parser import month_bounds, shift_month

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"
SORT_KEYS = ("name", "amount")
ANALYTICS_TREND_MONTHS = 12
ANALYTICS_PURCHASE_MONTHS = 6


def _sum(entries: Iterable[Entry], entry_type: EntryType) -> Decimal:
    return sum((e.amount for e in entries if e.entry_type == entry_type), ZERO)


def _sum_category(entries: Iterable[Entry], category: Optional[str]) -> Decimal:
    if category is None:
        return ZERO
    return sum((e.amount for e in entries if e.category == category), ZERO)


def _month_range(year: int, month: int) -> tuple[date, date]:
    try:
        return month_bounds(year, month)
    except ValueError as e:
        raise ValidationError(str(e), field="month") from None


def _coerce_entry_type(entry_type: "EntryType | str") -> EntryType:
    try:
        return EntryType(entry_type)
    except ValueError:
        raise ValidationError(f"Unknown entry type: {entry_type}", field="type") from None


def profit_margin(sales: Decimal, purchases: Decimal) -> Decimal:
    """Percentage margin of sales over purchases; 0 when there are no sales."""
    if sales == 0:
        return ZERO
    return ((sales - purchases) / sales * 100).quantize(CENTS, rounding=ROUND_HALF_UP)


def category_totals(entries: Iterable[Entry], sort_by: str = "name") -> list[CategoryTotal]:
    """Group entries by category label.

    Args:
        entries: Entries to group
        sort_by: "name" (ascending) or "amount" (descending, ties by name)

    Raises:
        ValidationError: If sort_by is not recognized
    """
    if sort_by not in SORT_KEYS:
        raise ValidationError(f"Sort must be one of: {', '.join(SORT_KEYS)}", field="sort_by")

    amounts: dict[str, Decimal] = defaultdict(lambda: ZERO)
    counts: dict[str, int] = defaultdict(int)
    for entry in entries:
        label = (entry.category or "").strip() or UNCATEGORIZED
        amounts[label] += entry.amount
        counts[label] += 1

    totals = [CategoryTotal(category=label, amount=amounts[label], count=counts[label]) for label in amounts]
    if sort_by == "amount":
        return sorted(totals, key=lambda t: (-t.amount, t.category))
    return sorted(totals, key=lambda t: t.category)


class ReportService:
    """Service for a domain's period reports and analytics."""

    def __init__(self, db: Database, domain: "str | LedgerDomain"):
        """Initialize report service.

        Args:
            db: Database instance
            domain: Fund domain key or configuration
        """
        self.db = db
        self.domain = get_domain(domain)

    def _entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        entry_types: Optional[Iterable[EntryType]] = None,
    ) -> list[Entry]:
        return list(
            self.db.list_entries(
                self.domain.key,
                entry_types=entry_types,
                start_date=start_date,
                end_date=end_date,
                newest_first=False,
            )
        )

    def monthly_report(self, year: int, month: int) -> MonthlyReport:
        """Income, expense, fund movements and balances for a calendar month.

        Opening is the balance of everything dated before the 1st and
        closing the balance of everything dated up to the last day, both
        read from the same entry set as the month's sums.

        Raises:
            ValidationError: If month is not 1-12
        """
        first, last = _month_range(year, month)
        entries = self._entries(end_date=last)
        before = [e for e in entries if e.transaction_date < first]
        in_month = [e for e in entries if e.transaction_date >= first]

        income = _sum(in_month, EntryType.INCOME)
        expense = _sum(in_month, EntryType.EXPENSE)
        report = MonthlyReport(
            year=year,
            month=month,
            income=income,
            expense=expense,
            net=income - expense,
            fund_in=_sum(in_month, EntryType.FUND_IN),
            fund_out=_sum(in_month, EntryType.FUND_OUT),
            opening=current_balance(before),
            closing=current_balance(entries),
            count=sum(1 for e in in_month if e.entry_type in ACCOUNT_TYPES),
        )
        logger.debug("Monthly report %s %04d-%02d: %s", self.domain.key, year, month, report)
        return report

    def category_breakdown(
        self,
        year: int,
        month: int,
        entry_type: "EntryType | str" = EntryType.EXPENSE,
        sort_by: str = "name",
    ) -> list[CategoryTotal]:
        """Per-category totals of one entry type within a month."""
        entry_type = _coerce_entry_type(entry_type)
        first, last = _month_range(year, month)
        return category_totals(self._entries(first, last, (entry_type,)), sort_by)

    def trend(self, window_months: int, as_of: date) -> list[TrendPoint]:
        """Income and expense for the last N calendar months, oldest first.

        Months without activity are included with zero amounts.

        Raises:
            ValidationError: If window_months is less than 1
        """
        if window_months < 1:
            raise ValidationError("Window must be at least 1 month", field="window_months")

        start_year, start_month = shift_month(as_of.year, as_of.month, -(window_months - 1))
        first, _ = month_bounds(start_year, start_month)
        _, last = month_bounds(as_of.year, as_of.month)

        buckets: dict[tuple[int, int], list[Entry]] = defaultdict(list)
        for entry in self._entries(first, last, ACCOUNT_TYPES):
            buckets[(entry.transaction_date.year, entry.transaction_date.month)].append(entry)

        points = []
        for offset in range(window_months):
            year, month = shift_month(start_year, start_month, offset)
            bucket = buckets.get((year, month), [])
            points.append(
                TrendPoint(
                    year=year,
                    month=month,
                    income=_sum(bucket, EntryType.INCOME),
                    expense=_sum(bucket, EntryType.EXPENSE),
                )
            )
        return points

    def purchase_vs_sales(self, window_months: int, as_of: date) -> list[PurchaseSalesPoint]:
        """Monthly purchase and sale totals for domains that trade stock.

        Raises:
            ValidationError: If window_months is less than 1
        """
        if window_months < 1:
            raise ValidationError("Window must be at least 1 month", field="window_months")
        start_year, start_month = shift_month(as_of.year, as_of.month, -(window_months - 1))
        first, _ = month_bounds(start_year, start_month)
        _, last = month_bounds(as_of.year, as_of.month)
        entries = self._entries(first, last, ACCOUNT_TYPES)

        points = []
        for offset in range(window_months):
            year, month = shift_month(start_year, start_month, offset)
            bucket = [
                e for e in entries if (e.transaction_date.year, e.transaction_date.month) == (year, month)
            ]
            points.append(
                PurchaseSalesPoint(
                    period_key=f"{year:04d}-{month:02d}",
                    purchases=_sum_category(bucket, self.domain.purchase_category),
                    sales=_sum_category(bucket, self.domain.sale_category),
                )
            )
        return points

    def daily_report(self, day: date) -> DailyReport:
        """Income and expense posted on a single day."""
        entries = self._entries(day, day, ACCOUNT_TYPES)
        income = _sum(entries, EntryType.INCOME)
        expense = _sum(entries, EntryType.EXPENSE)
        return DailyReport(day=day, income=income, expense=expense, net=income - expense, count=len(entries))

    def account_summary(self) -> AccountSummary:
        """All-time income and expense totals with the current balance."""
        entries = self._entries()
        income = _sum(entries, EntryType.INCOME)
        expense = _sum(entries, EntryType.EXPENSE)
        return AccountSummary(
            total_income=income,
            total_expense=expense,
            net_balance=income - expense,
            current_balance=current_balance(entries),
        )

    def balance_sheet(self, as_of: date) -> BalanceSheet:
        """Totals of everything dated on or before ``as_of``.

        Purchases and sales are the entries filed under the domain's
        purchase and sale categories; both are zero for domains without
        them.
        """
        entries = self._entries(end_date=as_of)
        first, _ = month_bounds(as_of.year, as_of.month)
        this_month = [e for e in entries if e.transaction_date >= first]

        purchases = _sum_category(entries, self.domain.purchase_category)
        sales = _sum_category(entries, self.domain.sale_category)
        return BalanceSheet(
            balance=current_balance(entries),
            total_income=_sum(entries, EntryType.INCOME),
            total_expense=_sum(entries, EntryType.EXPENSE),
            total_fund_in=_sum(entries, EntryType.FUND_IN),
            total_fund_out=_sum(entries, EntryType.FUND_OUT),
            total_purchases=purchases,
            total_sales=sales,
            trading_profit=sales - purchases,
            current_month_purchases=_sum_category(this_month, self.domain.purchase_category),
            current_month_sales=_sum_category(this_month, self.domain.sale_category),
        )

    def analytics(self, year: int, month: int, as_of: date) -> Analytics:
        """Dashboard figures: trends, purchase vs. sales, top expenses, margin."""
        sheet = self.balance_sheet(as_of)
        return Analytics(
            year=year,
            month=month,
            monthly_trend=tuple(self.trend(ANALYTICS_TREND_MONTHS, as_of)),
            purchase_vs_sales=tuple(self.purchase_vs_sales(ANALYTICS_PURCHASE_MONTHS, as_of)),
            top_expense_categories=tuple(self.category_breakdown(year, month, EntryType.EXPENSE, "amount")),
            profit_margin=profit_margin(sheet.total_sales, sheet.total_purchases),
        )
