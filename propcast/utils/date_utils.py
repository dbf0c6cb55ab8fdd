"""
Date utilities for PropCast.

Loan records arrive with ISO (YYYY-MM-DD) start dates, older exports use
DD/MM/YYYY. Both are parsed into month-start pandas Timestamps. Projection
years are calendar years counted from ``current_year()`` unless the caller
pins a start year.
"""

from datetime import datetime, date
import pandas as pd
from typing import Union, Optional
from propcast.utils.error_utils import error_handler


@error_handler
def parse_date(
    date_input: Union[str, datetime, date, pd.Timestamp],
    normalize_to_month_start: bool = True,
) -> pd.Timestamp:
    """
    Parse a date in any supported form into a pandas Timestamp.

    Args:
        date_input: Date as str, datetime, date or pd.Timestamp
        normalize_to_month_start: If True, sets day to 1

    Returns:
        pd.Timestamp: Parsed (and optionally normalized) timestamp

    Raises:
        ValueError: If the input is None or the string cannot be parsed
        TypeError: If input type is not supported

    Examples:
        >>> parse_date("2024-01-15")
        Timestamp('2024-01-01 00:00:00')

        >>> parse_date("15/01/2024", normalize_to_month_start=False)
        Timestamp('2024-01-15 00:00:00')
    """
    if date_input is None:
        raise ValueError("Date input cannot be None")

    if isinstance(date_input, pd.Timestamp):
        result = date_input
    elif isinstance(date_input, (datetime, date)):
        result = pd.Timestamp(date_input)
    elif isinstance(date_input, str):
        result = _parse_date_string(date_input.strip())
    else:
        raise TypeError(f"Unsupported date input type: {type(date_input)}")

    if normalize_to_month_start:
        result = result.replace(day=1)

    return result


def _parse_date_string(date_str: str) -> pd.Timestamp:
    if not date_str:
        raise ValueError("Date string cannot be empty")

    # ISO first, then the day-first format of older exports
    for format_str in ("%Y-%m-%d", "%Y/%m/%d", "%d/%m/%Y", "%d-%m-%Y"):
        try:
            return pd.Timestamp(datetime.strptime(date_str, format_str))
        except ValueError:
            continue

    raise ValueError(
        f"Unable to parse date string '{date_str}'. Supported formats include: YYYY-MM-DD, DD/MM/YYYY"
    )


@error_handler
def format_date_for_storage(date_input: Union[str, datetime, date, pd.Timestamp]) -> str:
    """Format a date as an ISO string (YYYY-MM-DD) for JSON payloads."""
    parsed_date = parse_date(date_input, normalize_to_month_start=False)
    return parsed_date.strftime("%Y-%m-%d")


def current_year(today: Optional[date] = None) -> int:
    """Calendar year used as projection year 0 when none is given."""
    return (today or date.today()).year


# Module metadata
__version__ = "1.0.0"
__author__ = "PropCast Development Team"
__description__ = "Date utilities for PropCast"
