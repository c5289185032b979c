"""Free-text amount parsing and its exact inverse formatting."""

import math
import re
from typing import Optional

CURRENCY_SYMBOLS = "$€£¥"
QUOTE_CHARACTERS = "\"'"

_CURRENCY_PATTERN = re.compile(f"[{re.escape(CURRENCY_SYMBOLS)}]")
_QUOTE_PATTERN = re.compile(f"[{re.escape(QUOTE_CHARACTERS)}]")


def parse_amount(token: object) -> float:
    """
    Convert a ledger amount token into a signed float.

    Handles thousands separators, currency symbols, parenthesized negatives and
    quoting. Anything that does not survive cleaning as a finite number is 0.

    Args:
        token: Raw cell value (string, number, None or NaN)

    Returns:
        Parsed amount, or 0.0 when the token is blank or unparseable
    """
    if token is None:
        return 0.0
    if isinstance(token, bool):
        return 0.0
    if isinstance(token, (int, float)):
        value = float(token)
        return value if math.isfinite(value) else 0.0

    cleaned = str(token).replace(",", "")
    cleaned = _CURRENCY_PATTERN.sub("", cleaned)
    cleaned = cleaned.replace("(", "-").replace(")", "")
    cleaned = _QUOTE_PATTERN.sub("", cleaned)
    cleaned = cleaned.strip()

    if cleaned in ("", "-"):
        return 0.0
    try:
        value = float(cleaned)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def format_amount(amount: Optional[float]) -> str:
    """
    Render an amount the way ledger exports print it.

    Negatives are wrapped in parentheses and the magnitude carries thousands
    separators. Output always parses back to the same value with parse_amount.
    """
    if amount is None:
        return ""
    value = float(amount)
    if not math.isfinite(value):
        return ""

    magnitude = abs(value)
    if magnitude.is_integer():
        text = f"{int(magnitude):,}"
    else:
        text = f"{magnitude:,}"
    return f"({text})" if value < 0 else text
