"""
Utility modules for PropCast.

This package contains reusable utility functions for date handling,
rate conversions, display formatting and error handling.
"""

from propcast.utils.date_utils import (
    parse_date,
    format_date_for_storage,
    current_year,
)

from propcast.utils.rate_utils import (
    Percentage,
    as_percentage,
    annual_pct_to_decimal,
    annual_pct_to_monthly_decimal,
    convert_duration_years_to_months,
    validate_rate_range,
    normalize_rate_input,
    MONTHS_PER_YEAR,
    PERCENTAGE_TO_DECIMAL,
)

from propcast.utils.formatters import (
    format_number,
    unformat_number,
    format_currency,
    format_compact_currency,
    format_short_currency,
    format_percent,
    format_ratio,
)

from propcast.utils.error_utils import (
    PropcastError,
    error_handler,
    logger,
)

__all__ = [
    # Date utilities
    "parse_date",
    "format_date_for_storage",
    "current_year",
    # Rate utilities
    "Percentage",
    "as_percentage",
    "annual_pct_to_decimal",
    "annual_pct_to_monthly_decimal",
    "convert_duration_years_to_months",
    "validate_rate_range",
    "normalize_rate_input",
    "MONTHS_PER_YEAR",
    "PERCENTAGE_TO_DECIMAL",
    # Formatting
    "format_number",
    "unformat_number",
    "format_currency",
    "format_compact_currency",
    "format_short_currency",
    "format_percent",
    "format_ratio",
    # Error handling
    "PropcastError",
    "error_handler",
    "logger",
]

__version__ = "1.0.0"
