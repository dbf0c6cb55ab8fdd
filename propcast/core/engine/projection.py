"""
Yearly cashflow, tax and equity projection for one property.

For every year of the horizon the builder grows rent, outgoings and value
from their base-year figures, takes the year's interest and principal from
each loan's amortization schedule, and derives NOI, tax (or the negative
gearing refund), after-tax cashflow and the running performance totals.

The only state carried from one year to the next is each loan's balance and
the cumulative series. A run is a pure function of its inputs.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, List, Optional

import pandas as pd

from propcast.core.constants import PROJECTION_YEARS
from propcast.core.engine.aggregator import aggregate_loans, collapse_loans
from propcast.core.engine.amortization import LoanAmortizationCalculator
from propcast.core.engine.growth import grow
from propcast.core.models.property import Assumptions, PropertySnapshot
from propcast.utils.date_utils import current_year
from propcast.utils.rate_utils import MONTHS_PER_YEAR, PERCENTAGE_TO_DECIMAL
from propcast.utils.error_utils import error_handler, logger


def _safe_pct(numerator: float, denominator: float) -> float:
    return numerator / denominator * PERCENTAGE_TO_DECIMAL if denominator > 0 else 0.0


@dataclass(frozen=True)
class YearlyProjection:
    """One projection year. Amounts are in currency units, ``*_pct`` in percent."""

    year: int
    year_index: int

    # Property & financing
    property_value: float
    opening_loan_balance: float
    loan_balance: float
    equity: float
    principal_payment: float
    principal_payment_cumulative: float
    interest_payment_cumulative: float
    interest_rate_pct: float

    # Income & expenses
    gross_income: float
    vacancy: float
    effective_rent: float
    pm_fee: float
    gross_yield_pct: float
    operating_expenses: float
    noi: float

    # Tax
    interest_expense: float
    depreciation: float
    taxable_income: float
    tax: float
    tax_benefit: float

    # Cashflow
    pre_tax_cashflow: float
    pre_tax_cashflow_cumulative: float
    after_tax_cashflow: float
    after_tax_cashflow_cumulative: float
    net_yield_pct: float
    income_per_month: float

    # Performance
    capital_growth_annual: float
    capital_growth_cumulative: float
    total_performance: float
    total_performance_inc_principal: float
    cash_on_cash_return_pct: float
    return_on_invested_capital_pct: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class YearlyProjectionBuilder:
    """
    Builds the ordered ``YearlyProjection`` list for one property.

    Args:
        property: Valuation, base-year income/outgoings and loans
        assumptions: Growth, tax, vacancy, fee and depreciation rates
        horizon_years: Number of projection years (default 30)
        start_year: Calendar year of year index 0 (default: this year)
        combine_loans: Amortize one representative loan instead of each loan
            separately
    """

    @error_handler
    def __init__(
        self,
        property: PropertySnapshot,
        assumptions: Assumptions,
        horizon_years: int = PROJECTION_YEARS,
        start_year: Optional[int] = None,
        combine_loans: bool = False,
    ):
        if horizon_years <= 0:
            raise ValueError(f"Projection horizon must be positive, got {horizon_years}")

        self.property = property
        self.assumptions = assumptions
        self.horizon_years = int(horizon_years)
        self.start_year = current_year() if start_year is None else int(start_year)

        if combine_loans:
            representative = collapse_loans(property.loans)
            self.loans = [representative] if representative else []
        else:
            self.loans = property.active_loans

        self.interest_rate_pct = aggregate_loans(self.loans).weighted_rate_pct
        self.total_cash_invested = property.get_total_cash_invested()

    @error_handler
    def build(self) -> List[YearlyProjection]:
        a = self.assumptions
        base_value = self.property.current_value
        combined_tax_rate = a.combined_tax_rate.decimal

        calculators = [LoanAmortizationCalculator(loan, self.horizon_years) for loan in self.loans]
        balances = [loan.principal_amount for loan in self.loans]

        cumulative_principal = 0.0
        cumulative_interest = 0.0
        cumulative_pre_tax = 0.0
        cumulative_after_tax = 0.0
        cumulative_capital_growth = 0.0

        projections = []
        for year_index in range(self.horizon_years):
            property_value = grow(base_value, a.capital_growth, year_index)

            # Debt service, each loan carrying its own balance forward
            opening_loan_balance = sum(balances)
            interest_expense = 0.0
            principal_payment = 0.0
            for i, calculator in enumerate(calculators):
                loan_year = calculator.compute_year(year_index, balances[i])
                interest_expense += loan_year.interest
                principal_payment += loan_year.principal
                balances[i] = loan_year.closing_balance
            loan_balance = sum(balances)
            cumulative_principal += principal_payment
            cumulative_interest += interest_expense

            # Income
            gross_income = grow(self.property.total_annual_income, a.rent_growth, year_index)
            vacancy = gross_income * a.vacancy_rate.decimal
            effective_rent = gross_income - vacancy
            pm_fee = effective_rent * a.pm_fee_rate.decimal
            gross_yield_pct = _safe_pct(gross_income, property_value)

            operating_expenses = grow(self.property.total_annual_outgoings, a.inflation_rate, year_index)
            noi = effective_rent - pm_fee - operating_expenses

            # Tax: a loss is refunded at the combined rate (negative gearing)
            depreciation = property_value * a.depreciation_rate.decimal
            taxable_income = noi - interest_expense - depreciation
            tax = max(taxable_income, 0.0) * combined_tax_rate
            tax_benefit = abs(taxable_income) * combined_tax_rate if taxable_income < 0 else 0.0

            after_tax_cashflow = noi - interest_expense - principal_payment - tax + tax_benefit
            cumulative_after_tax += after_tax_cashflow

            pre_tax_cashflow = noi - interest_expense
            cumulative_pre_tax += pre_tax_cashflow

            capital_growth_annual = (
                0.0 if year_index == 0 else property_value - grow(base_value, a.capital_growth, year_index - 1)
            )
            cumulative_capital_growth += capital_growth_annual

            total_performance = cumulative_after_tax + cumulative_capital_growth
            total_performance_inc_principal = total_performance + cumulative_principal

            projections.append(
                YearlyProjection(
                    year=self.start_year + year_index,
                    year_index=year_index,
                    property_value=property_value,
                    opening_loan_balance=opening_loan_balance,
                    loan_balance=loan_balance,
                    equity=property_value - loan_balance,
                    principal_payment=principal_payment,
                    principal_payment_cumulative=cumulative_principal,
                    interest_payment_cumulative=cumulative_interest,
                    interest_rate_pct=self.interest_rate_pct,
                    gross_income=gross_income,
                    vacancy=vacancy,
                    effective_rent=effective_rent,
                    pm_fee=pm_fee,
                    gross_yield_pct=gross_yield_pct,
                    operating_expenses=operating_expenses,
                    noi=noi,
                    interest_expense=interest_expense,
                    depreciation=depreciation,
                    taxable_income=taxable_income,
                    tax=tax,
                    tax_benefit=tax_benefit,
                    pre_tax_cashflow=pre_tax_cashflow,
                    pre_tax_cashflow_cumulative=cumulative_pre_tax,
                    after_tax_cashflow=after_tax_cashflow,
                    after_tax_cashflow_cumulative=cumulative_after_tax,
                    net_yield_pct=_safe_pct(pre_tax_cashflow, property_value),
                    income_per_month=after_tax_cashflow / MONTHS_PER_YEAR,
                    capital_growth_annual=capital_growth_annual,
                    capital_growth_cumulative=cumulative_capital_growth,
                    total_performance=total_performance,
                    total_performance_inc_principal=total_performance_inc_principal,
                    cash_on_cash_return_pct=_safe_pct(cumulative_after_tax, self.total_cash_invested),
                    return_on_invested_capital_pct=_safe_pct(
                        total_performance_inc_principal, self.total_cash_invested
                    ),
                )
            )

        logger.debug(
            f"Projected property {self.property.id or self.property.name!r}: "
            f"{self.horizon_years} years, {len(self.loans)} loan(s)"
        )
        return projections


def project_property_cashflow(
    property: PropertySnapshot,
    assumptions: Assumptions,
    horizon_years: int = PROJECTION_YEARS,
    start_year: Optional[int] = None,
    combine_loans: bool = False,
) -> List[YearlyProjection]:
    """Year-by-year projection for ``property``; see ``YearlyProjectionBuilder``."""
    return YearlyProjectionBuilder(property, assumptions, horizon_years, start_year, combine_loans).build()


PROJECTION_COLUMNS = [f.name for f in fields(YearlyProjection)]


def projections_to_frame(projections: List[YearlyProjection]) -> pd.DataFrame:
    """One row per projection year, one column per ``YearlyProjection`` field."""
    return pd.DataFrame([p.to_dict() for p in projections], columns=PROJECTION_COLUMNS)
