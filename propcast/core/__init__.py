"""
Core modules for PropCast.

This package contains the input models, constants and the financial
projection engine.
"""

from propcast.core.constants import (
    ELoanType,
    DEFAULT_ASSUMPTIONS,
    MILESTONE_TARGETS,
    PROJECTION_YEARS,
    PROJECTION_IN_MONTH,
    CASH_FLOW,
    VALUE,
)

__all__ = [
    "ELoanType",
    "DEFAULT_ASSUMPTIONS",
    "MILESTONE_TARGETS",
    "PROJECTION_YEARS",
    "PROJECTION_IN_MONTH",
    "CASH_FLOW",
    "VALUE",
]

__version__ = "1.0.0"
