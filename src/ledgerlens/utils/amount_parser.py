"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a non-negative Decimal.

    Ledger amounts carry no sign; the transaction kind gives the direction.
    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "25_000_000₫"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is negative
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥₫]", "", amount_str)

    # Remove thousands separators
    amount_str = amount_str.replace(",", "").replace("_", "")

    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    if amount < 0:
        raise ValueError(f"Amount must not be negative: '{amount_str}'")
    return amount
