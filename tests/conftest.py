"""Shared pytest fixtures for clinicledger tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from clinicledger.database.factories import create_sqlite_database
from clinicledger.domain.category import CategoryService
from clinicledger.domain.entities import AccountTransaction, EntryType, FundTransaction
from clinicledger.domain.ledger import LedgerService
from clinicledger.domain.reports import ReportService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def medicine(temp_db):
    """LedgerService for the Medicine Account."""
    return LedgerService(temp_db, "medicine")


@pytest.fixture
def operation(temp_db):
    """LedgerService for the Operation Account."""
    return LedgerService(temp_db, "operation")


@pytest.fixture
def optics(temp_db):
    """LedgerService for the Optics Account."""
    return LedgerService(temp_db, "optics")


@pytest.fixture
def hospital(temp_db):
    """LedgerService for the Hospital Account."""
    return LedgerService(temp_db, "hospital")


@pytest.fixture
def medicine_reports(temp_db):
    """ReportService for the Medicine Account."""
    return ReportService(temp_db, "medicine")


@pytest.fixture
def medicine_categories(temp_db):
    """CategoryService for the Medicine Account."""
    return CategoryService(temp_db, "medicine")


@pytest.fixture
def funded_medicine(medicine):
    """Medicine Account seeded with 1000.00 on 2025-01-01."""
    medicine.add_fund(Decimal("1000"), "Owner investment", "seed", date(2025, 1, 1), actor="admin")
    return medicine


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def _make_entry(entry_id, entry_type, amount, day, **fields):
    """Build an in-memory entry for pure-function tests."""
    entry_type = EntryType(entry_type)
    common = dict(
        id=entry_id,
        domain="medicine",
        transaction_no=fields.pop("transaction_no", f"T-{entry_id:06d}"),
        entry_type=entry_type,
        amount=Decimal(amount),
        description=fields.pop("description", None),
        transaction_date=day,
        created_by=None,
        created_at=None,
    )
    if entry_type.is_fund_movement:
        return FundTransaction(purpose=fields.pop("purpose", "capital"), **common, **fields)
    return AccountTransaction(
        category=fields.pop("category", None),
        category_id=fields.pop("category_id", None),
        **common,
        **fields,
    )


@pytest.fixture
def make_entry():
    """Factory for in-memory entries: make_entry(id, type, amount, day, **fields)."""
    return _make_entry
