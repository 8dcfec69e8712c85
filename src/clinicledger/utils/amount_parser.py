"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "৳123.45" or "Tk 123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and codes
    amount_str = re.sub(r"(?i)^(tk\.?|bdt)\s*", "", amount_str.strip())
    amount_str = re.sub(r"[৳$€£¥]", "", amount_str)

    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'") from None
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def to_money(value: "Decimal | int | str") -> Decimal:
    """Coerce a value to a two-place Decimal.

    Floats are rejected so binary rounding never reaches a balance.

    Raises:
        ValueError: If the value is not a usable amount
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(f"Amount must be a Decimal, int or string, got {type(value).__name__}")
    if isinstance(value, str):
        value = parse_amount(value)
    elif isinstance(value, int):
        value = Decimal(value)
    elif not isinstance(value, Decimal) or not value.is_finite():
        raise ValueError(f"Could not parse amount '{value}'")
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)
