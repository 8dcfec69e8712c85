"""Utility functions for clinicledger."""

from clinicledger.utils.date_parser import parse_date, month_bounds
from clinicledger.utils.amount_parser import parse_amount, to_money
from clinicledger.utils.voucher import format_transaction_no

__all__ = ["parse_date", "month_bounds", "parse_amount", "to_money", "format_transaction_no"]
