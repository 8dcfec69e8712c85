"""Tests for CLI date filter helpers."""

from datetime import date

import click
import pytest

from clinicledger.cli.date_filters import parse_cli_date, period_flags, resolve_cli_date_range
from clinicledger.utils.date_parser import get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_date_range_rejects_multiple_periods(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags=period_flags(True, False, True, False),
        )

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_resolve_cli_date_range_rejects_period_with_dates(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="2025-01-01",
            end_date=None,
            period_flags=period_flags(False, True, False, False),
        )

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_resolve_cli_date_range_uses_period():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags=period_flags(False, False, True, False),
    )

    assert (start, end) == get_date_range("last-month")


def test_resolve_cli_date_range_parses_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2025-01-02",
        end_date="2025-01-05",
        period_flags={},
    )

    assert (start, end) == (date(2025, 1, 2), date(2025, 1, 5))


def test_resolve_cli_date_range_applies_default_range():
    default_range = (date(2020, 1, 1), date(2020, 1, 31))

    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={},
        default_range=default_range,
    )

    assert (start, end) == default_range


def test_resolve_cli_date_range_invalid_end_date(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(_ctx(), start_date=None, end_date="not-a-date", period_flags={})

    assert excinfo.value.exit_code == 1
    assert "Invalid end date" in capsys.readouterr().err


def test_parse_cli_date_passes_none_through():
    assert parse_cli_date(_ctx(), None) is None
    assert parse_cli_date(_ctx(), "2025-06-01") == date(2025, 6, 1)
