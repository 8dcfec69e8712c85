"""Tests for ledger filtering, pagination and totals."""

from datetime import date
from decimal import Decimal

import pytest

from clinicledger.domain.balance import running_balance
from clinicledger.domain.entities import EntryType
from clinicledger.domain.errors import ValidationError
from clinicledger.domain.query import LedgerFilter, compute_totals, filter_entries, paginate


@pytest.fixture
def entries(make_entry):
    return [
        make_entry(1, "fund_in", "1000", date(2025, 3, 1), purpose="Dr. Rahman", transaction_no="MFI-20250301-000001"),
        make_entry(2, "expense", "200", date(2025, 3, 5), category="Rent", description="March rent"),
        make_entry(3, "income", "450", date(2025, 3, 9), category="medicine_sale", description="Counter SALES"),
        make_entry(4, "expense", "75", date(2025, 4, 2), category="Utilities", description="Electricity bill"),
        make_entry(5, "fund_out", "100", date(2025, 4, 3), purpose="Dr. Karim"),
    ]


def test_filter_by_date_range(entries):
    result = filter_entries(entries, LedgerFilter(date_from=date(2025, 3, 5), date_to=date(2025, 3, 31)))

    assert [e.id for e in result] == [2, 3]


def test_filter_inverted_date_range_fails(entries):
    with pytest.raises(ValidationError) as excinfo:
        filter_entries(entries, LedgerFilter(date_from=date(2025, 4, 1), date_to=date(2025, 3, 1)))

    assert excinfo.value.field == "date_to"


def test_filter_accepts_date_strings(entries):
    ledger_filter = LedgerFilter(date_from="2025-03-05", date_to="2025-03-31")

    assert ledger_filter.date_from == date(2025, 3, 5)
    assert [e.id for e in filter_entries(entries, ledger_filter)] == [2, 3]


def test_filter_inverted_string_range_compares_dates(entries):
    # "2025-10-01" sorts before "2025-9-30" as text but not as a date
    ledger_filter = LedgerFilter(date_from="2025-9-30", date_to="2025-10-01")
    assert filter_entries(entries, ledger_filter) == []

    with pytest.raises(ValidationError) as excinfo:
        filter_entries(entries, LedgerFilter(date_from="2025-04-01", date_to="2025-03-01"))
    assert excinfo.value.field == "date_to"


@pytest.mark.parametrize("field", ["date_from", "date_to"])
def test_filter_rejects_unparseable_dates(field):
    with pytest.raises(ValidationError) as excinfo:
        LedgerFilter(**{field: "banana"})

    assert excinfo.value.field == field


def test_filter_description_ignores_surrounding_whitespace(entries):
    assert [e.id for e in filter_entries(entries, LedgerFilter(description="  rent "))] == [2]
    assert [e.id for e in filter_entries(entries, LedgerFilter(description="   "))] == [1, 2, 3, 4, 5]


def test_filter_description_is_case_insensitive_substring(entries):
    result = filter_entries(entries, LedgerFilter(description="sales"))

    assert [e.id for e in result] == [3]


def test_filter_category_is_exact(entries):
    assert [e.id for e in filter_entries(entries, LedgerFilter(category="Rent"))] == [2]
    assert filter_entries(entries, LedgerFilter(category="rent")) == []


def test_filter_search_covers_number_description_and_category(entries):
    assert [e.id for e in filter_entries(entries, LedgerFilter(search="mfi-2025"))] == [1]
    assert [e.id for e in filter_entries(entries, LedgerFilter(search="ELECTRICITY"))] == [4]
    assert [e.id for e in filter_entries(entries, LedgerFilter(search="medicine_"))] == [3]


def test_filter_entry_types_and_purpose(entries):
    funds = LedgerFilter(entry_types=(EntryType.FUND_IN, EntryType.FUND_OUT))
    assert [e.id for e in filter_entries(entries, funds)] == [1, 5]

    by_investor = LedgerFilter(entry_types=(EntryType.FUND_IN, EntryType.FUND_OUT), purpose="Dr. Karim")
    assert [e.id for e in filter_entries(entries, by_investor)] == [5]


def test_filters_combine_as_conjunction(entries):
    result = filter_entries(entries, LedgerFilter(date_from=date(2025, 4, 1), category="Rent"))

    assert result == []


def test_paginate_slices_pages():
    rows = list(range(7))

    assert paginate(rows, 3, 1) == (0, 1, 2)
    assert paginate(rows, 3, 3) == (6,)
    assert paginate(rows, 3, 4) == ()


@pytest.mark.parametrize("page_size,page,field", [(0, 1, "page_size"), (10, 0, "page")])
def test_paginate_rejects_invalid_arguments(page_size, page, field):
    with pytest.raises(ValidationError) as excinfo:
        paginate([1, 2, 3], page_size, page)

    assert excinfo.value.field == field


def test_compute_totals_agrees_with_running_balance(entries):
    rows = running_balance(entries)
    totals = compute_totals(rows)

    assert totals.total_in == Decimal("1450")
    assert totals.total_out == Decimal("375")
    assert totals.net_movement == Decimal("1075")
    assert totals.final_balance == rows[-1].balance
    assert totals.final_balance == totals.total_in - totals.total_out
    assert totals.row_count == 5


def test_compute_totals_empty_uses_opening_balance():
    totals = compute_totals([], opening_balance=Decimal("125.00"))

    assert totals.final_balance == Decimal("125.00")
    assert totals.total_in == Decimal("0")
    assert totals.row_count == 0
