"""
Loan model for PropCast.

A ``Loan`` is a single debt instrument secured against a property. It is an
immutable input to a projection run: the engine reads it, never changes it.

Two repayment shapes are supported:
    interest_only:      interest-only for ``io_years`` then principal and
                        interest; with no usable IO period the whole principal
                        balloons in the last projection year
    principal_interest: amortizing, optionally after an interest-only grace
                        period of ``io_years``
"""

from typing import Dict, Any, Optional, Union
from datetime import datetime, date

import numpy_financial as npf
import pandas as pd
from dateutil.relativedelta import relativedelta

from propcast.core.constants import ELoanType, PROJECTION_YEARS
from propcast.utils.date_utils import parse_date, format_date_for_storage
from propcast.utils.rate_utils import (
    MONTHS_PER_YEAR,
    Percentage,
    convert_duration_years_to_months,
    normalize_rate_input,
)
from propcast.utils.error_utils import error_handler


class Loan:
    """
    Debt instrument attached to a property.

    Attributes:
        id: Loan identifier
        principal_amount: Original principal (currency units, >= 0)
        interest_rate_annual_pct: Annual interest rate as percentage
        interest_rate: Same rate as a ``Percentage``
        term_years: Amortization horizon of the product in years
        loan_type: ``ELoanType`` value
        io_years: Interest-only years (0 if not applicable)
        start_date: Loan start date (normalized to month start)
    """

    @error_handler
    def __init__(
        self,
        id: str,
        principal_amount: float,
        interest_rate_annual_pct: Union[float, str],
        term_years: int,
        loan_type: Union[str, ELoanType] = ELoanType.PRINCIPAL_INTEREST,
        io_years: int = 0,
        start_date: Optional[Union[str, datetime, date, pd.Timestamp]] = None,
    ):
        self.id = id
        self.principal_amount = float(principal_amount or 0)

        # Standardize rate storage: normalize input and store as annual percentage
        self.interest_rate_annual_pct = normalize_rate_input(interest_rate_annual_pct or 0)
        self.interest_rate = Percentage(self.interest_rate_annual_pct)

        self.term_years = int(term_years or 0)
        self.loan_type = ELoanType(loan_type)
        self.io_years = int(io_years or 0)
        self.start_date = parse_date(start_date or date.today(), normalize_to_month_start=True)

    def __repr__(self) -> str:
        # Tolerates a partially constructed loan
        loan_type = getattr(self, "loan_type", None)
        return (
            f"Loan(id={getattr(self, 'id', None)!r}, "
            f"principal_amount={getattr(self, 'principal_amount', None)}, "
            f"rate={getattr(self, 'interest_rate_annual_pct', None)}%, "
            f"term_years={getattr(self, 'term_years', None)}, "
            f"type={getattr(loan_type, 'value', loan_type)}, "
            f"io_years={getattr(self, 'io_years', None)})"
        )

    @property
    def end_date(self) -> pd.Timestamp:
        """Month the loan matures: ``term_years`` after the start date."""
        return self.start_date + relativedelta(years=self.term_years)

    @property
    def is_interest_only(self) -> bool:
        return self.loan_type == ELoanType.INTEREST_ONLY

    @property
    def is_active(self) -> bool:
        """Negative or missing loan data counts as no loan at all."""
        return self.principal_amount > 0 and self.interest_rate_annual_pct >= 0 and self.term_years > 0

    def is_pure_interest_only(self, horizon_years: int = PROJECTION_YEARS) -> bool:
        """IO loan with no P&I phase inside the horizon: balloons in the final year."""
        if not self.is_interest_only:
            return False
        return self.io_years <= 0 or self.io_years >= self.term_years or self.io_years >= horizon_years

    def effective_io_years(self, horizon_years: int = PROJECTION_YEARS) -> int:
        """
        Interest-only years actually applied within the projection horizon.

        Out-of-range IO periods on an amortizing loan are clamped to
        ``term_years - 1`` (and to ``horizon_years - 1``) so a P&I phase
        always remains.
        """
        if self.io_years <= 0 or self.is_pure_interest_only(horizon_years):
            return 0
        io_years = self.io_years
        if io_years >= self.term_years:
            io_years = self.term_years - 1
        if io_years >= horizon_years:
            io_years = horizon_years - 1
        return max(io_years, 0)

    @error_handler
    def get_monthly_payment(self) -> float:
        """
        Headline monthly repayment over the loan's own term.

        Interest-only loans pay ``principal * rate / 12``; amortizing loans
        pay the standard PMT over ``term_years`` (straight line at 0%).
        """
        if not self.is_active:
            return 0.0
        if self.is_interest_only:
            return self.principal_amount * self.interest_rate.decimal / MONTHS_PER_YEAR

        total_payments = convert_duration_years_to_months(self.term_years)
        monthly_rate_decimal = self.interest_rate.monthly_decimal
        if monthly_rate_decimal == 0:
            return self.principal_amount / total_payments
        return float(npf.pmt(monthly_rate_decimal, total_payments, -self.principal_amount))

    @error_handler
    def get_amortizing_payment(self) -> float:
        """PMT over ``term_years`` regardless of loan type, as used for DSCR."""
        if not self.is_active or self.interest_rate_annual_pct <= 0:
            return 0.0
        total_payments = convert_duration_years_to_months(self.term_years)
        return float(npf.pmt(self.interest_rate.monthly_decimal, total_payments, -self.principal_amount))

    def get_annual_payment(self) -> float:
        return self.get_monthly_payment() * MONTHS_PER_YEAR

    @error_handler
    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize loan to dictionary.

        Returns:
            Dictionary representation of the loan
        """
        return {
            "id": self.id,
            "type": self.loan_type.value,
            "principal_amount": self.principal_amount,
            "interest_rate_annual_pct": self.interest_rate_annual_pct,
            "term_years": self.term_years,
            "io_years": self.io_years,
            "start_date": format_date_for_storage(self.start_date),
            "end_date": format_date_for_storage(self.end_date),
        }

    @classmethod
    @error_handler
    def from_dict(cls, data: Dict[str, Any]) -> 'Loan':
        """
        Deserialize loan from dictionary.

        Accepts both this module's keys and the snake_case record keys used by
        the portfolio store (``interest_rate``, ``type``).
        """
        return cls(
            id=data.get("id", "loan"),
            principal_amount=data.get("principal_amount", 0),
            interest_rate_annual_pct=data.get("interest_rate_annual_pct", data.get("interest_rate", 0)),
            term_years=data.get("term_years", PROJECTION_YEARS),
            loan_type=data.get("type", data.get("loan_type", ELoanType.PRINCIPAL_INTEREST)),
            io_years=data.get("io_years", 0),
            start_date=data.get("start_date"),
        )
