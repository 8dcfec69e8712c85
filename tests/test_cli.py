"""Tests for CLI commands."""

from datetime import date
from decimal import Decimal

import pytest

from clinicledger.cli.main import cli
from clinicledger.domain.ledger import LedgerService


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "hospital fund ledgers" in result.output


def test_balance_of_new_domain(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "balance", "--domain", "medicine")

    assert result.exit_code == 0
    assert "Medicine Account balance: 0.00" in result.output


def test_unknown_domain_is_rejected(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "balance", "--domain", "pharmacy")

    assert result.exit_code != 0


def test_fund_cycle(cli_runner, temp_db):
    result = _invoke(
        cli_runner,
        temp_db,
        "fund", "in", "--domain", "medicine", "--amount", "1,000", "--purpose", "opening", "--date", "2025-01-01",
    )
    assert result.exit_code == 0
    assert "Recorded fund in MFI-20250101-" in result.output
    assert "Balance: 1,000.00" in result.output

    result = _invoke(
        cli_runner,
        temp_db,
        "expense", "add", "--domain", "medicine", "--amount", "300", "--category", "rent",
        "--description", "monthly rent", "--date", "2025-01-02",
    )
    assert result.exit_code == 0
    assert "Recorded expense ME-20250102-" in result.output
    assert "Balance: 700.00" in result.output

    result = _invoke(
        cli_runner,
        temp_db,
        "fund", "out", "--domain", "medicine", "--amount", "701", "--purpose", "payout", "--date", "2025-01-03",
    )
    assert result.exit_code == 1
    assert "Error: Insufficient balance" in result.output

    result = _invoke(cli_runner, temp_db, "balance", "--domain", "medicine")
    assert "700.00" in result.output


def test_invalid_amount_reports_error(cli_runner, temp_db):
    result = _invoke(
        cli_runner, temp_db, "income", "add", "--domain", "operation", "--amount", "abc", "--category", "surgery",
    )

    assert result.exit_code == 1
    assert "Error: Invalid amount" in result.output


def test_income_add(cli_runner, temp_db):
    result = _invoke(
        cli_runner,
        temp_db,
        "income", "add", "--domain", "operation", "--amount", "2500", "--category", "surgery",
        "--date", "2025-04-01", "--reference-type", "operation", "--reference-id", "9",
    )

    assert result.exit_code == 0
    assert "Recorded income OI-20250401-" in result.output
    assert LedgerService(temp_db, "operation").get_balance() == Decimal("2500.00")


@pytest.fixture
def seeded(medicine):
    medicine.add_fund(1000, "Owner investment", "seed", date(2025, 1, 1))
    medicine.add_expense(300, "Rent", "January rent", date(2025, 1, 5))
    medicine.add_income(120, "medicine_sale", "Counter sale", date(2025, 1, 6))
    return medicine


def test_ledger_command(cli_runner, temp_db, seeded):
    result = _invoke(cli_runner, temp_db, "ledger", "--domain", "medicine")

    assert result.exit_code == 0
    assert "January rent" in result.output
    assert "820.00" in result.output
    assert "Count: 3" in result.output


def test_ledger_command_filters_and_pages(cli_runner, temp_db, seeded):
    result = _invoke(cli_runner, temp_db, "ledger", "--domain", "medicine", "--search", "rent")
    assert result.exit_code == 0
    assert "January rent" in result.output
    assert "Counter sale" not in result.output

    result = _invoke(cli_runner, temp_db, "ledger", "--domain", "medicine", "--page-size", "1")
    assert result.exit_code == 0
    assert "More rows: use --page 2" in result.output


def test_ledger_command_rejects_inverted_range(cli_runner, temp_db, seeded):
    result = _invoke(
        cli_runner, temp_db, "ledger", "--domain", "medicine", "--start-date", "2025-02-01", "--end-date", "2025-01-01",
    )

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_fund_ledger_and_history(cli_runner, temp_db, seeded):
    result = _invoke(cli_runner, temp_db, "fund", "ledger", "--domain", "medicine")
    assert result.exit_code == 0
    assert "fund ledger" in result.output
    assert "Count: 1" in result.output

    result = _invoke(cli_runner, temp_db, "fund", "ledger", "--domain", "medicine", "--list-purposes")
    assert result.output.strip() == "Owner investment"

    result = _invoke(cli_runner, temp_db, "fund", "history", "--domain", "medicine")
    assert result.exit_code == 0
    assert "fund_in" in result.output


def test_report_commands(cli_runner, temp_db, seeded):
    result = _invoke(cli_runner, temp_db, "report", "monthly", "--domain", "medicine", "--year", "2025", "--month", "1")
    assert result.exit_code == 0
    assert "Closing balance" in result.output
    assert "820.00" in result.output

    result = _invoke(
        cli_runner, temp_db, "report", "categories", "--domain", "medicine", "--year", "2025", "--month", "1",
    )
    assert result.exit_code == 0
    assert "Rent" in result.output

    result = _invoke(cli_runner, temp_db, "report", "trend", "--domain", "medicine", "--months", "2", "--as-of", "2025-02-15")
    assert result.exit_code == 0
    assert "2025-01" in result.output
    assert "2025-02" in result.output

    result = _invoke(cli_runner, temp_db, "report", "daily", "--domain", "medicine", "--day", "2025-01-05")
    assert result.exit_code == 0
    assert "Expense: 300.00" in result.output

    result = _invoke(cli_runner, temp_db, "report", "balance-sheet", "--domain", "medicine", "--as-of", "2025-01-31")
    assert result.exit_code == 0
    assert "Total sales" in result.output

    result = _invoke(
        cli_runner, temp_db, "report", "analytics", "--domain", "medicine", "--year", "2025", "--month", "1",
        "--as-of", "2025-01-31",
    )
    assert result.exit_code == 0
    assert "Profit margin" in result.output


def test_category_commands(cli_runner, temp_db, seeded):
    result = _invoke(cli_runner, temp_db, "category", "create", "--domain", "medicine", "Fuel")
    assert result.exit_code == 0
    assert "Created category 'Fuel'" in result.output

    result = _invoke(cli_runner, temp_db, "category", "create", "--domain", "medicine", "Fuel")
    assert result.exit_code == 1
    assert "already exists" in result.output

    result = _invoke(cli_runner, temp_db, "category", "list", "--domain", "medicine")
    assert result.exit_code == 0
    assert "Fuel" in result.output
    assert "Rent" in result.output


def test_category_delete_blocked_when_used(cli_runner, temp_db, seeded):
    rent = next(c for c in seeded.db.list_categories("medicine") if c.name == "Rent")

    result = _invoke(cli_runner, temp_db, "category", "delete", "--domain", "medicine", str(rent.id), "--yes")

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_category_deactivate_and_delete(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "category", "create", "--domain", "hospital", "Fuel")
    category_id = result.output.split("ID: ")[1].rstrip(")\n")

    result = _invoke(cli_runner, temp_db, "category", "deactivate", "--domain", "hospital", category_id)
    assert result.exit_code == 0
    assert "Deactivated category 'Fuel'" in result.output

    result = _invoke(cli_runner, temp_db, "category", "delete", "--domain", "hospital", category_id, input="y\n")
    assert result.exit_code == 0
    assert "Deleted category 'Fuel'" in result.output


def test_house_security_command(cli_runner, temp_db, hospital):
    result = _invoke(cli_runner, temp_db, "house-security")
    assert result.exit_code == 0
    assert "No transactions found." in result.output

    hospital.add_fund(5000, "capital", None, date(2025, 1, 1))
    hospital.add_expense(1200, "House Security", "Guard salary", date(2025, 1, 31))

    result = _invoke(cli_runner, temp_db, "house-security")
    assert result.exit_code == 0
    assert "Guard salary" in result.output
    assert "1,200.00" in result.output

    result = _invoke(cli_runner, temp_db, "house-security", "--list-descriptions")
    assert result.output.strip() == "Guard salary"
