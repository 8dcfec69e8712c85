"""Tests for date, amount and transaction number helpers."""

from datetime import date
from decimal import Decimal

import pytest

from clinicledger.utils.amount_parser import parse_amount, to_money
from clinicledger.utils.date_parser import get_date_range, month_bounds, parse_date, shift_month
from clinicledger.utils.voucher import format_transaction_no

TODAY = date(2025, 3, 12)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("2025-01-15", date(2025, 1, 15)),
        ("15 Jan 2025", date(2025, 1, 15)),
        ("today", TODAY),
        ("Yesterday", date(2025, 3, 11)),
        ("tomorrow", date(2025, 3, 13)),
        ("this month", date(2025, 3, 1)),
        ("last month", date(2025, 2, 1)),
        ("this year", date(2025, 1, 1)),
        ("last year", date(2024, 1, 1)),
        ("this week", date(2025, 3, 10)),
        ("last week", date(2025, 3, 3)),
    ],
)
def test_parse_date(text, expected):
    assert parse_date(text, today=TODAY) == expected


@pytest.mark.parametrize("text", ["", "   ", "not a date", "2025-02-30"])
def test_parse_date_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_date(text, today=TODAY)


def test_month_bounds():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2025, 12) == (date(2025, 12, 1), date(2025, 12, 31))
    with pytest.raises(ValueError):
        month_bounds(2025, 0)


def test_shift_month():
    assert shift_month(2025, 1, -1) == (2024, 12)
    assert shift_month(2025, 11, 3) == (2026, 2)
    assert shift_month(2025, 6, 0) == (2025, 6)


def test_get_date_range():
    assert get_date_range("this-month", today=TODAY) == (date(2025, 3, 1), TODAY)
    assert get_date_range("last-month", today=TODAY) == (date(2025, 2, 1), date(2025, 2, 28))
    assert get_date_range("last-year", today=TODAY) == (date(2024, 1, 1), date(2024, 12, 31))
    with pytest.raises(ValueError):
        get_date_range("next-decade", today=TODAY)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("1,234.56", Decimal("1234.56")),
        ("৳500", Decimal("500")),
        ("Tk 1,000", Decimal("1000")),
        ("BDT 75.5", Decimal("75.5")),
        ("(42.00)", Decimal("-42.00")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "12.3.4", "NaN", "Infinity"])
def test_parse_amount_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_to_money_quantizes_half_up():
    assert to_money("2.345") == Decimal("2.35")
    assert to_money(Decimal("2.344")) == Decimal("2.34")
    assert to_money(7) == Decimal("7.00")
    assert str(to_money(7)) == "7.00"


@pytest.mark.parametrize("value", [1.5, True, None, Decimal("NaN")])
def test_to_money_rejects_unsafe_values(value):
    with pytest.raises(ValueError):
        to_money(value)


def test_format_transaction_no():
    assert format_transaction_no("ME", date(2025, 6, 15), 42) == "ME-20250615-000042"
    assert format_transaction_no("HFI", date(2025, 1, 1), 1234567) == "HFI-20250101-1234567"
