"""
Loan amortization over the projection horizon.

Splits each projection year's debt service into interest and principal for a
single loan. Regular principal-and-interest years are simulated month by
month so the yearly split follows a monthly-compounding loan product; IO
years and the final (payout) year are computed at year level.

Classes:
    LoanYear: One year of a loan's schedule
    LoanAmortizationCalculator: Per-loan schedule builder
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy_financial as npf
import pandas as pd

from propcast.core.constants import CASH_FLOW, VALUE, PROJECTION_YEARS
from propcast.core.models.loan import Loan
from propcast.utils.date_utils import current_year
from propcast.utils.rate_utils import MONTHS_PER_YEAR
from propcast.utils.error_utils import error_handler, logger


@dataclass(frozen=True)
class LoanYear:
    """Interest and principal paid on one loan during one projection year."""

    year_index: int
    opening_balance: float
    interest: float
    principal: float
    closing_balance: float


def amortizing_payment(principal: float, monthly_rate: float, n_months: int) -> float:
    """
    Level monthly payment that retires ``principal`` over ``n_months``.

    Standard PMT via ``npf.pmt``; straight line (P / n) when the rate is zero.
    """
    if principal <= 0 or n_months <= 0:
        return 0.0
    if monthly_rate == 0:
        return principal / n_months
    return float(npf.pmt(monthly_rate, n_months, -principal))


class LoanAmortizationCalculator:
    """
    Year-by-year amortization of one loan across the projection horizon.

    The monthly payment is fixed once per loan, on the original principal,
    over the P&I sub-term ``horizon_years - io_years``. The last projection
    year always pays out whatever balance remains.

    Attributes:
        loan: The loan being amortized
        horizon_years: Projection length in years
        io_years: Interest-only years applied (after clamping)
        pure_interest_only: True when there is no P&I phase at all
        monthly_pmt: Level monthly payment for the P&I phase
    """

    @error_handler
    def __init__(self, loan: Loan, horizon_years: int = PROJECTION_YEARS):
        if horizon_years <= 0:
            raise ValueError(f"Projection horizon must be positive, got {horizon_years}")

        self.loan = loan
        self.horizon_years = horizon_years
        self.final_year_index = horizon_years - 1
        self.annual_rate = loan.interest_rate.decimal
        self.monthly_rate = loan.interest_rate.monthly_decimal
        self.pure_interest_only = loan.is_pure_interest_only(horizon_years)
        self.io_years = loan.effective_io_years(horizon_years)

        if loan.io_years != self.io_years and not self.pure_interest_only:
            logger.warning(
                f"Loan {loan.id}: io_years={loan.io_years} out of range for term "
                f"{loan.term_years}y, clamped to {self.io_years}"
            )

        self.monthly_pmt = self._calculate_monthly_pmt()

    def _calculate_monthly_pmt(self) -> float:
        if not self.loan.is_active or self.pure_interest_only:
            return 0.0
        pi_months = (self.horizon_years - self.io_years) * MONTHS_PER_YEAR
        return amortizing_payment(self.loan.principal_amount, self.monthly_rate, pi_months)

    @error_handler
    def compute_year(self, year_index: int, opening_balance: float) -> LoanYear:
        """
        Interest and principal for one year, given the balance at its start.

        Args:
            year_index: Projection year, 0-based
            opening_balance: Loan balance at the start of the year

        Returns:
            LoanYear with the year's interest, principal and closing balance
        """
        if not 0 <= year_index < self.horizon_years:
            raise ValueError(f"year_index {year_index} outside projection horizon of {self.horizon_years} years")
        if opening_balance < 0:
            raise ValueError(f"opening_balance must be non-negative, got {opening_balance}")

        interest = 0.0
        principal = 0.0

        if self.loan.is_active and opening_balance > 0:
            if self.pure_interest_only:
                # Balloon: the whole balance is repaid in the final year
                interest = opening_balance * self.annual_rate
                principal = opening_balance if year_index == self.final_year_index else 0.0
            elif year_index < self.io_years:
                interest = opening_balance * self.annual_rate
            elif year_index == self.final_year_index:
                interest = opening_balance * self.annual_rate
                principal = opening_balance
            else:
                interest, principal = self._simulate_months(opening_balance)

        closing_balance = max(0.0, opening_balance - principal)
        return LoanYear(year_index, opening_balance, interest, principal, closing_balance)

    def _simulate_months(self, opening_balance: float):
        year_interest = 0.0
        year_principal = 0.0
        balance = opening_balance

        for _ in range(MONTHS_PER_YEAR):
            if balance <= 0:
                break
            monthly_interest = balance * self.monthly_rate
            principal_this_month = max(0.0, min(self.monthly_pmt - monthly_interest, balance))
            year_interest += monthly_interest
            year_principal += principal_this_month
            balance -= principal_this_month

        return year_interest, year_principal

    @error_handler
    def get_schedule(self) -> List[LoanYear]:
        """Full schedule, each year's closing balance opening the next."""
        schedule = []
        balance = self.loan.principal_amount if self.loan.is_active else 0.0
        for year_index in range(self.horizon_years):
            loan_year = self.compute_year(year_index, balance)
            schedule.append(loan_year)
            balance = loan_year.closing_balance
        return schedule

    @error_handler
    def get_projection(self, start_year: Optional[int] = None) -> pd.DataFrame:
        """
        Amortization schedule as a DataFrame.

        Returns:
            DataFrame with columns: id, year, opening_balance, interest_payment,
            principal_payment, cash_flow, value (closing balance as a negative
            liability)
        """
        start_year = current_year() if start_year is None else start_year
        schedule = self.get_schedule()

        df = pd.DataFrame.from_dict(
            {
                "id": self.loan.id,
                "year": [start_year + row.year_index for row in schedule],
                "opening_balance": [row.opening_balance for row in schedule],
                "interest_payment": [row.interest for row in schedule],
                "principal_payment": [row.principal for row in schedule],
            }
        )
        df[CASH_FLOW] = -(df["interest_payment"] + df["principal_payment"])
        df[VALUE] = -pd.Series([row.closing_balance for row in schedule], index=df.index)
        return df


def compute_year(
    loan: Loan,
    year_index: int,
    opening_balance: float,
    horizon_years: int = PROJECTION_YEARS,
) -> LoanYear:
    """Single-year amortization for ``loan``; see ``LoanAmortizationCalculator``."""
    return LoanAmortizationCalculator(loan, horizon_years).compute_year(year_index, opening_balance)
