"""Currency formatting for narration and display."""

from __future__ import annotations

import math
from typing import Any

DEFAULT_CURRENCY_SYMBOL = "£"
MISSING_PRICE = "—"


def format_currency(value: Any, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """
    Render a number as a two-decimal price.

    Non-numbers (None, text, bools, NaN, infinities, ints too large for
    a float) render as a fixed placeholder.

    Example:
        >>> format_currency(5)
        '£5.00'
        >>> format_currency(None)
        '—'
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return MISSING_PRICE
    try:
        number = float(value)
    except OverflowError:
        return MISSING_PRICE
    if not math.isfinite(number):
        return MISSING_PRICE
    return f"{symbol}{number:.2f}"
