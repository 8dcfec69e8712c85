"""Domain model entities for clinicledger.

These are pure data classes representing business concepts, independent of
database schema. Fund movements and operating income/expense share one
append-only entry log in storage but surface here as two entity types.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class EntryType(str, Enum):
    """Kind of movement recorded against a fund account."""

    FUND_IN = "fund_in"
    FUND_OUT = "fund_out"
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def is_credit(self) -> bool:
        """True when the entry increases the balance."""
        return self in (EntryType.FUND_IN, EntryType.INCOME)

    @property
    def is_fund_movement(self) -> bool:
        return self in (EntryType.FUND_IN, EntryType.FUND_OUT)


FUND_TYPES = (EntryType.FUND_IN, EntryType.FUND_OUT)
ACCOUNT_TYPES = (EntryType.INCOME, EntryType.EXPENSE)


@dataclass(frozen=True)
class FundAccount:
    """Per-domain account row; the balance itself is always derived."""

    domain: str
    version: int
    created_at: datetime


@dataclass(frozen=True)
class ExpenseCategory:
    """Expense category domain entity."""

    id: int
    domain: str
    name: str
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class FundTransaction:
    """Capital injected into or withdrawn from a domain's fund."""

    id: int
    domain: str
    transaction_no: str
    entry_type: EntryType
    amount: Decimal
    purpose: str
    description: Optional[str]
    transaction_date: date
    created_by: Optional[str]
    created_at: datetime

    @property
    def category(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class AccountTransaction:
    """Operating income or expense, optionally linked to a category."""

    id: int
    domain: str
    transaction_no: str
    entry_type: EntryType
    amount: Decimal
    category: Optional[str]
    category_id: Optional[int]
    description: Optional[str]
    transaction_date: date
    created_by: Optional[str]
    created_at: datetime
    reference_type: Optional[str] = None
    reference_id: Optional[int] = None

    @property
    def purpose(self) -> Optional[str]:
        return None


Entry = Union[FundTransaction, AccountTransaction]


@dataclass(frozen=True)
class LedgerRow:
    """One line of a running-balance ledger (derived, never persisted)."""

    entry_id: int
    transaction_no: str
    transaction_date: date
    entry_type: EntryType
    description: Optional[str]
    category: Optional[str]
    purpose: Optional[str]
    previous_balance: Decimal
    amount: Decimal
    signed_amount: Decimal
    balance: Decimal


@dataclass(frozen=True)
class LedgerTotals:
    """Aggregates over a ledger; final_balance is the last row's balance."""

    total_in: Decimal
    total_out: Decimal
    net_movement: Decimal
    final_balance: Decimal
    row_count: int


@dataclass(frozen=True)
class LedgerPage:
    """A page of ledger rows computed from a fixed snapshot of entries."""

    rows: tuple[LedgerRow, ...]
    totals: LedgerTotals
    page: int
    page_size: int
    total_rows: int
    snapshot_id: int
    opening_balance: Decimal = Decimal("0.00")

    @property
    def page_count(self) -> int:
        if self.total_rows == 0:
            return 1
        return (self.total_rows + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count


@dataclass(frozen=True)
class MonthlyReport:
    """Calendar-month rollup for one domain."""

    year: int
    month: int
    income: Decimal
    expense: Decimal
    net: Decimal
    fund_in: Decimal
    fund_out: Decimal
    opening: Decimal
    closing: Decimal
    count: int


@dataclass(frozen=True)
class CategoryTotal:
    """Amount and occurrence count for one category label."""

    category: str
    amount: Decimal
    count: int


@dataclass(frozen=True)
class TrendPoint:
    year: int
    month: int
    income: Decimal
    expense: Decimal

    @property
    def period_key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class DailyReport:
    day: date
    income: Decimal
    expense: Decimal
    net: Decimal
    count: int


@dataclass(frozen=True)
class AccountSummary:
    total_income: Decimal
    total_expense: Decimal
    net_balance: Decimal
    current_balance: Decimal


@dataclass(frozen=True)
class BalanceSheet:
    """All-time totals plus the domain's purchase/sale figures."""

    balance: Decimal
    total_income: Decimal
    total_expense: Decimal
    total_fund_in: Decimal
    total_fund_out: Decimal
    total_purchases: Decimal
    total_sales: Decimal
    trading_profit: Decimal
    current_month_purchases: Decimal
    current_month_sales: Decimal


@dataclass(frozen=True)
class PurchaseSalesPoint:
    period_key: str
    purchases: Decimal
    sales: Decimal


@dataclass(frozen=True)
class Analytics:
    year: int
    month: int
    monthly_trend: tuple[TrendPoint, ...]
    purchase_vs_sales: tuple[PurchaseSalesPoint, ...]
    top_expense_categories: tuple[CategoryTotal, ...]
    profit_margin: Decimal
