"""
Display formatting for currency, percentages and ratios.

Used by the HTTP layer and by anyone rendering projection tables. All
functions are tolerant of blank input: ``None``, ``""`` and NaN never raise.
"""

import math
from typing import Optional, Union

Number = Union[int, float, str, None]


def _to_number(value: Number) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(num):
        return None
    return num


def format_number(value: Number) -> str:
    """Thousands separators, up to three decimals: 1234567.5 -> '1,234,567.5'."""
    num = _to_number(value)
    if num is None:
        return ""
    text = f"{num:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def unformat_number(value: str) -> str:
    """Strip thousands separators: '1,234' -> '1234'."""
    if not value:
        return ""
    return value.replace(",", "")


def format_currency(amount: Number, show_decimals: bool = False) -> str:
    """
    Format an amount as US-style currency.

    >>> format_currency(1234.6)
    '$1,235'
    >>> format_currency(-1234.5, show_decimals=True)
    '-$1,234.50'
    """
    num = _to_number(amount)
    if num is None:
        return "$0"

    digits = 2 if show_decimals else 0
    body = f"{abs(num):,.{digits}f}"
    sign = "-" if num < 0 and float(body.replace(",", "")) != 0 else ""
    return f"{sign}${body}"


def format_compact_currency(amount: float) -> str:
    """$1.2M / $1.2K, falling back to ``format_currency`` below a thousand."""
    if abs(amount) >= 1_000_000:
        return f"${amount / 1_000_000:.1f}M"
    elif abs(amount) >= 1_000:
        return f"${amount / 1_000:.1f}K"
    return format_currency(amount)


def format_short_currency(amount: float) -> str:
    """Chart axis style: -$1.2M, $25K, $950."""
    sign = "-" if amount < 0 else ""
    abs_amount = abs(amount)
    if abs_amount >= 1_000_000:
        return f"{sign}${abs_amount / 1_000_000:.1f}M"
    elif abs_amount >= 1_000:
        return f"{sign}${abs_amount / 1_000:.0f}K"
    return f"{sign}${abs_amount:.0f}"


def format_percent(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def format_ratio(value: Optional[float]) -> str:
    """DSCR style: 0.59x, or N/A when there is no debt to cover."""
    if value is None:
        return "N/A"
    return f"{value:.2f}x"
