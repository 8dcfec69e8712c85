"""Balance accumulation over a fund's entry log.

Everything here is a pure function of the entries passed in; callers are
responsible for reading a consistent snapshot from the store.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Sequence

from clinicledger.domain.entities import Entry, LedgerRow
from clinicledger.domain.errors import InsufficientBalanceError
from clinicledger.utils.amount_parser import ZERO

logger = logging.getLogger(__name__)

Signer = Callable[[Entry], Decimal]


def signed_amount(entry: Entry) -> Decimal:
    """Fund-in and income count positive, fund-out and expense negative."""
    return entry.amount if entry.entry_type.is_credit else -entry.amount


def accumulated_amount(entry: Entry) -> Decimal:
    """Every entry adds its amount; used by single-category ledgers."""
    return entry.amount


def current_balance(entries: Iterable[Entry], signer: Signer = signed_amount) -> Decimal:
    """Fold entries into a balance, independent of their order."""
    balance = ZERO
    for entry in entries:
        balance += signer(entry)
    return balance


def balance_as_of(entries: Iterable[Entry], on_date: date) -> Decimal:
    """Balance of the entries dated on or before ``on_date``."""
    return current_balance(e for e in entries if e.transaction_date <= on_date)


def ledger_sort_key(entry: Entry) -> tuple[date, int]:
    return (entry.transaction_date, entry.id)


def sort_for_ledger(entries: Iterable[Entry]) -> list[Entry]:
    """Order entries ascending by transaction date, ties by id."""
    return sorted(entries, key=ledger_sort_key)


def running_balance(
    entries: Sequence[Entry],
    opening_balance: Decimal = ZERO,
    signer: Signer = signed_amount,
) -> list[LedgerRow]:
    """Build ledger rows with the balance before and after each entry.

    Args:
        entries: Entries already sorted by ``sort_for_ledger``
        opening_balance: Balance before the first entry
        signer: Maps an entry to its effect on the balance

    Returns:
        One LedgerRow per entry, in input order
    """
    rows: list[LedgerRow] = []
    balance = opening_balance
    for entry in entries:
        previous = balance
        movement = signer(entry)
        balance = previous + movement
        rows.append(
            LedgerRow(
                entry_id=entry.id,
                transaction_no=entry.transaction_no,
                transaction_date=entry.transaction_date,
                entry_type=entry.entry_type,
                description=entry.description,
                category=entry.category,
                purpose=entry.purpose,
                previous_balance=previous,
                amount=entry.amount,
                signed_amount=movement,
                balance=balance,
            )
        )
    return rows


def validate_withdrawal(balance: Decimal, amount: Decimal) -> None:
    """Reject a debit that would take the balance below zero.

    Raises:
        InsufficientBalanceError: If ``amount`` exceeds ``balance``
    """
    if amount > balance:
        logger.warning("Rejected debit of %s against balance %s", amount, balance)
        raise InsufficientBalanceError(requested=amount, available=balance)
