"""Transaction number formatting."""

from datetime import date


def format_transaction_no(prefix: str, transaction_date: date, entry_id: int) -> str:
    """Build a human-readable transaction number, e.g. ``ME-20250615-000042``.

    The entry id makes the number unique; prefix and date are for people.
    """
    return f"{prefix}-{transaction_date:%Y%m%d}-{entry_id:06d}"
