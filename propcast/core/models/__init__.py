"""
PropCast Core Models Package.

Input records for a projection run. They are treated as immutable snapshots
for the duration of one run.

Modules:
    loan: Loan (interest-only, principal-and-interest, IO -> P&I)
    property: PropertySnapshot and Assumptions
"""

from propcast.core.models.loan import Loan

from propcast.core.models.property import (
    PropertySnapshot,
    Assumptions,
)

__all__ = [
    "Loan",
    "PropertySnapshot",
    "Assumptions",
]

__version__ = "1.0.0"
