"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the single entry table can
surface as separate fund and account transaction entities.
"""

from clinicledger.domain import entities as domain
from clinicledger.database.models import (
    FundAccount as ORMFundAccount,
    ExpenseCategory as ORMExpenseCategory,
    LedgerEntry as ORMLedgerEntry,
)
from clinicledger.utils.amount_parser import to_money


def account_to_domain(orm_account: ORMFundAccount) -> domain.FundAccount:
    """Convert SQLAlchemy FundAccount model to domain FundAccount entity."""
    return domain.FundAccount(
        domain=orm_account.domain,
        version=orm_account.version,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMExpenseCategory) -> domain.ExpenseCategory:
    """Convert SQLAlchemy ExpenseCategory model to domain ExpenseCategory entity."""
    return domain.ExpenseCategory(
        id=orm_category.id,
        domain=orm_category.domain,
        name=orm_category.name,
        is_active=orm_category.is_active,
        created_at=orm_category.created_at,
    )


def entry_to_domain(orm_entry: ORMLedgerEntry) -> domain.Entry:
    """Convert a SQLAlchemy LedgerEntry row to a fund or account transaction."""
    entry_type = domain.EntryType(orm_entry.entry_type)
    if entry_type.is_fund_movement:
        return domain.FundTransaction(
            id=orm_entry.id,
            domain=orm_entry.domain,
            transaction_no=orm_entry.transaction_no,
            entry_type=entry_type,
            amount=to_money(orm_entry.amount),
            purpose=orm_entry.purpose,
            description=orm_entry.description,
            transaction_date=orm_entry.transaction_date,
            created_by=orm_entry.created_by,
            created_at=orm_entry.created_at,
        )
    return domain.AccountTransaction(
        id=orm_entry.id,
        domain=orm_entry.domain,
        transaction_no=orm_entry.transaction_no,
        entry_type=entry_type,
        amount=to_money(orm_entry.amount),
        category=orm_entry.category,
        category_id=orm_entry.expense_category_id,
        description=orm_entry.description,
        transaction_date=orm_entry.transaction_date,
        created_by=orm_entry.created_by,
        created_at=orm_entry.created_at,
        reference_type=orm_entry.reference_type,
        reference_id=orm_entry.reference_id,
    )
