"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from doublebook.domain.entities import is_storable_amount


def parse_amount(amount_str: str) -> Decimal:
    """Parse a posting amount into a positive Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45", "€123.45"
    - "1,234.56"

    Amounts are always positive and carry at most two decimal places; the
    side of a posting is chosen with --debit or --credit, never with a sign.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed, is not positive or
            has more than two decimal places
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[$€£¥\s]", "", amount_str).replace(",", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount <= 0:
        raise ValueError(f"Amount must be positive, got '{amount_str}'")
    if not is_storable_amount(amount):
        raise ValueError(f"Amount must have at most two decimal places and 13 integer digits, got '{amount_str}'")
    return amount


def parse_posting(posting: str) -> tuple[str, Decimal]:
    """Parse a CODE=AMOUNT posting into an account code and amount.

    Raises:
        ValueError: If the posting is malformed
    """
    code, separator, amount = posting.partition("=")
    code = code.strip()
    if not separator or not code:
        raise ValueError(f"Posting must look like CODE=AMOUNT, got '{posting}'")
    return code, parse_amount(amount)
