"""Amount parsing and coercion utilities."""

import math
import re
import sys
from decimal import Decimal, InvalidOperation
from typing import Any


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "BHD 123.45"
    - "-123.45"
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
    amount_str = re.sub(r"[$€£¥]|\b[A-Za-z]{3}\b", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    return -amount if is_negative else amount


def to_number(value: Any) -> float:
    """Coerce a stored value to a float, treating anything unusable as 0.

    None, empty strings, non-numeric strings, NaN and infinities all become
    0.0. This is the only place the report engine decides what a malformed
    amount means.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, InvalidOperation):
        return 0.0
    return number if math.isfinite(number) else 0.0


def round2(value: Any) -> float:
    """Round to two decimals, halves rounding up (towards +infinity).

    Matches the ``Math.round((x + EPSILON) * 100) / 100`` convention used
    when amounts were first entered, so 1.005 rounds to 1.01 and -2.345 to
    -2.34.
    """
    scaled = (to_number(value) + sys.float_info.epsilon) * 100
    return math.floor(scaled + 0.5) / 100
