"""
Rate conversion utilities for financial calculations.

This module provides standardized functions and a small value type for
converting between the rate formats used throughout the projection engine.

Conventions:
- All user inputs are annual rates as percentages (e.g., 6.5 = 6.5%)
- All calculations use decimal rates (e.g., 0.065 = 6.5%)
- Monthly rates are derived from annual rates: annual_decimal / 12
- Inside the engine rates travel as ``Percentage`` objects so a percentage
  can never be mistaken for a decimal (or the other way around)
"""

from dataclasses import dataclass
from typing import Union

from propcast.utils.error_utils import error_handler


# Convenience constants for common conversions
MONTHS_PER_YEAR = 12
PERCENTAGE_TO_DECIMAL = 100.0


@error_handler
def annual_pct_to_decimal(rate_pct: Union[float, str]) -> float:
    """
    Convert annual percentage rate to decimal format.

    Args:
        rate_pct: Annual rate as percentage (e.g., 5.0 for 5%)

    Returns:
        Annual rate as decimal (e.g., 0.05 for 5%)

    Examples:
        >>> annual_pct_to_decimal(5.0)
        0.05
        >>> annual_pct_to_decimal("7.5")
        0.075
    """
    return float(rate_pct) / PERCENTAGE_TO_DECIMAL


@error_handler
def annual_pct_to_monthly_decimal(rate_pct: Union[float, str]) -> float:
    """
    Convert annual percentage rate directly to monthly decimal rate.

    Args:
        rate_pct: Annual rate as percentage (e.g., 6.0 for 6%)

    Returns:
        Monthly rate as decimal (e.g., 0.005 for 6% annually)

    Examples:
        >>> round(annual_pct_to_monthly_decimal(6.0), 6)
        0.005
    """
    return annual_pct_to_decimal(rate_pct) / MONTHS_PER_YEAR


@error_handler
def convert_duration_years_to_months(years: Union[float, int]) -> int:
    """
    Convert duration from years to months.

    Examples:
        >>> convert_duration_years_to_months(2.5)
        30
        >>> convert_duration_years_to_months(30)
        360
    """
    return round(float(years) * MONTHS_PER_YEAR)


@error_handler
def validate_rate_range(rate_pct: float, min_pct: float = -50.0, max_pct: float = 100.0) -> bool:
    """
    Validate that a percentage rate is within reasonable bounds.

    Args:
        rate_pct: Rate as percentage to validate
        min_pct: Minimum allowed percentage (default -50%)
        max_pct: Maximum allowed percentage (default 100%)

    Returns:
        True if rate is valid, False otherwise

    Examples:
        >>> validate_rate_range(6.5)
        True
        >>> validate_rate_range(150.0)
        False
    """
    return min_pct <= rate_pct <= max_pct


def _to_float(rate_input: Union[str, float, int]) -> float:
    if isinstance(rate_input, str):
        cleaned = rate_input.strip().rstrip('%')
        try:
            return float(cleaned)
        except ValueError:
            raise ValueError(f"Cannot convert rate input '{rate_input}' to number")
    return float(rate_input)


@error_handler
def normalize_rate_input(rate_input: Union[str, float, int]) -> float:
    """
    Normalize rate input from various formats to a standard float percentage.

    Handles string inputs, removes percentage signs, and validates ranges.

    Raises:
        ValueError: If rate cannot be converted or is out of range

    Examples:
        >>> normalize_rate_input("6.5%")
        6.5
        >>> normalize_rate_input(7.25)
        7.25
    """
    rate_float = _to_float(rate_input)

    if not validate_rate_range(rate_float):
        raise ValueError(f"Rate {rate_float}% is outside valid range (-50% to 100%)")

    return rate_float


@dataclass(frozen=True)
class Percentage:
    """
    An annual rate expressed in percentage points.

    ``Percentage(6.5)`` is 6.5% a year. Use ``decimal`` for arithmetic and
    ``monthly_decimal`` for month-by-month compounding.
    """

    pct: float = 0.0

    @classmethod
    def from_pct(cls, rate_pct: Union[str, float, int]) -> "Percentage":
        return cls(_to_float(rate_pct))

    @property
    def decimal(self) -> float:
        return annual_pct_to_decimal(self.pct)

    @property
    def monthly_decimal(self) -> float:
        return annual_pct_to_monthly_decimal(self.pct)

    def __add__(self, other: "Percentage") -> "Percentage":
        if not isinstance(other, Percentage):
            return NotImplemented
        return Percentage(self.pct + other.pct)

    def __float__(self) -> float:
        return float(self.pct)

    def __str__(self) -> str:
        return f"{self.pct}%"


def as_percentage(value: Union["Percentage", str, float, int, None]) -> Percentage:
    """
    Coerce a user-facing rate into a ``Percentage``.

    Numbers and strings are read as percentage points ("2.5%", "2.5", 2.5);
    ``None`` means 0%. No range check is applied here.
    """
    if isinstance(value, Percentage):
        return value
    if value is None:
        return Percentage(0.0)
    return Percentage.from_pct(value)


# Module metadata
__version__ = "1.0.0"
__author__ = "PropCast Development Team"
__description__ = "Rate conversion utilities for PropCast"
