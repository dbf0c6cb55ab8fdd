"""
Core constants and enumerations for PropCast.

This module defines the projection horizon, loan shapes, default market
assumptions and milestone targets used throughout the projection engine.
"""

from enum import Enum

# Projection constants
CASH_FLOW = "cash_flow"
VALUE = "value"
PROJECTION_YEARS = 30
PROJECTION_IN_MONTH = PROJECTION_YEARS * 12  # 30 years


class ELoanType(str, Enum):
    """Loan repayment shapes"""
    INTEREST_ONLY = "interest_only"
    PRINCIPAL_INTEREST = "principal_interest"


# Percent values, as entered on the growth assumptions panel
DEFAULT_ASSUMPTIONS = {
    "rent_growth_pct": 3.5,
    "capital_growth_pct": 4.0,
    "inflation_rate_pct": 2.5,
    "tax_rate_pct": 30.0,
    "medicare_levy_pct": 2.0,
    "vacancy_rate_pct": 5.0,
    "pm_fee_rate_pct": 8.0,
    "depreciation_rate_pct": 2.5,
    "discount_rate_pct": 8.0,
}

# (percentage of base annual rent, label)
MILESTONE_TARGETS = [
    (0, "Break-even"),
    (25, "25% of rental income"),
    (50, "50% of rental income"),
    (75, "75% of rental income"),
    (100, "100% of rental income"),
]

WEEKS_PER_YEAR = 52

# Chart windows
DEFAULT_YEARS_TO_SHOW = 20


# Module metadata
__version__ = "1.0.0"
__author__ = "PropCast Development Team"
__description__ = "Core constants and enumerations for PropCast"
