"""
Headline totals across a property's loans.

The yearly projection amortizes each loan on its own; these totals feed the
summary figures (borrowed amount, monthly repayment, LVR, DSCR).
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from propcast.core.models.loan import Loan
from propcast.utils.rate_utils import MONTHS_PER_YEAR
from propcast.utils.error_utils import error_handler


@dataclass(frozen=True)
class LoanSummary:
    total_principal: float
    total_monthly_payment: float
    total_annual_payment: float
    weighted_rate_pct: float
    loan_count: int
    has_loans: bool


@error_handler
def aggregate_loans(loans: Iterable[Loan]) -> LoanSummary:
    """
    Sum principal and repayments over the active loans.

    Interest-only loans contribute ``principal * rate / 12`` a month,
    amortizing loans their PMT over their own ``term_years``.
    """
    active = [loan for loan in loans if loan.is_active]

    total_principal = sum(loan.principal_amount for loan in active)
    total_monthly_payment = sum(loan.get_monthly_payment() for loan in active)
    weighted_rate_pct = (
        sum(loan.principal_amount * loan.interest_rate_annual_pct for loan in active) / total_principal
        if total_principal > 0
        else 0.0
    )

    return LoanSummary(
        total_principal=total_principal,
        total_monthly_payment=total_monthly_payment,
        total_annual_payment=total_monthly_payment * MONTHS_PER_YEAR,
        weighted_rate_pct=weighted_rate_pct,
        loan_count=len(active),
        has_loans=bool(active),
    )


@error_handler
def collapse_loans(loans: Iterable[Loan]) -> Optional[Loan]:
    """
    Fold all loans into one representative loan.

    Principal is summed; rate, term, type, IO period and start date come from
    the first loan. Only used when a caller asks for a single-loan projection.
    """
    active = [loan for loan in loans if loan.is_active]
    if not active:
        return None

    first = active[0]
    return Loan(
        id=first.id if len(active) == 1 else "combined",
        principal_amount=sum(loan.principal_amount for loan in active),
        interest_rate_annual_pct=first.interest_rate_annual_pct,
        term_years=first.term_years,
        loan_type=first.loan_type,
        io_years=first.io_years,
        start_date=first.start_date,
    )
