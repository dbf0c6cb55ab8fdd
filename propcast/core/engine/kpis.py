"""
Headline KPIs derived from a property's projection.

Break-even year, NPV of after-tax cashflow, income milestones, DSCR and LVR,
plus the series behind the debt paydown and growth analysis charts.
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Iterable, List, Optional

from propcast.core.constants import (
    DEFAULT_YEARS_TO_SHOW,
    MILESTONE_TARGETS,
    PROJECTION_YEARS,
    WEEKS_PER_YEAR,
)
from propcast.core.engine.amortization import LoanAmortizationCalculator, amortizing_payment
from propcast.core.engine.projection import YearlyProjection
from propcast.core.models.loan import Loan
from propcast.core.models.property import Assumptions, PropertySnapshot
from propcast.utils.date_utils import current_year as this_year
from propcast.utils.formatters import format_currency
from propcast.utils.rate_utils import MONTHS_PER_YEAR, PERCENTAGE_TO_DECIMAL, Percentage, as_percentage
from propcast.utils.error_utils import error_handler


@dataclass(frozen=True)
class Milestone:
    year: int
    label: str
    achieved: bool
    target: float


@dataclass(frozen=True)
class MilestoneProgress:
    achieved_count: int
    total: int
    progress_pct: float
    next_milestone: Optional[Milestone]
    message: str


@dataclass(frozen=True)
class PropertyKPIs:
    break_even_year: Optional[int]
    npv: float
    milestones: List[Milestone] = field(default_factory=list)
    dscr: Optional[float] = None
    lvr: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class KeyMetrics:
    monthly_rent: float
    weekly_rent: float
    gross_yield_pct: float
    net_yield_pct: float


@dataclass(frozen=True)
class DebtPaydownPoint:
    year: int
    principal_balance: float
    interest_balance: float
    total_debt: float


@dataclass(frozen=True)
class GrowthAnalysisPoint:
    year: int
    property_value: float
    capital_growth: float
    capital_growth_pct: float
    total_return: float
    total_return_pct: float


def break_even_year(projections: List[YearlyProjection]) -> Optional[int]:
    """First year with non-negative after-tax cashflow, else the final year."""
    if not projections:
        return None
    for projection in projections:
        if projection.after_tax_cashflow >= 0:
            return projection.year
    return projections[-1].year


def net_present_value(projections: Iterable[YearlyProjection], discount_rate) -> float:
    """
    Discounted after-tax cashflow, year index ``y`` discounted by ``(1 + d)^(y + 1)``.

    ``discount_rate`` is a ``Percentage`` or percentage points.
    """
    rate = as_percentage(discount_rate)
    npv = 0.0
    for index, projection in enumerate(projections):
        discount_factor = (1 + rate.decimal) ** (index + 1)
        npv += projection.after_tax_cashflow / discount_factor
    return npv


def derive_milestones(
    projections: List[YearlyProjection],
    base_annual_rent: float,
    current_year: Optional[int] = None,
) -> List[Milestone]:
    """
    Income milestones as a share of base annual rent.

    For each target (break-even, then 25/50/75/100% of the rent) finds the first
    year whose after-tax cashflow reaches the target amount. A milestone is
    achieved once that year is no later than ``current_year``. When a target
    is never reached its year falls back to the final projection year.
    """
    if base_annual_rent <= 0 or not projections:
        return []

    current_year = this_year() if current_year is None else current_year
    final_year = projections[-1].year

    milestones = []
    for percentage, label in MILESTONE_TARGETS:
        target_amount = base_annual_rent * percentage / PERCENTAGE_TO_DECIMAL
        achieved_year = next(
            (p.year for p in projections if p.after_tax_cashflow >= target_amount),
            None,
        )
        milestones.append(
            Milestone(
                year=achieved_year if achieved_year is not None else final_year,
                label=label,
                achieved=achieved_year is not None and achieved_year <= current_year,
                target=target_amount,
            )
        )
    return milestones


def milestone_progress(milestones: List[Milestone]) -> MilestoneProgress:
    """Achieved count, progress percentage and the next milestone to reach."""
    total = len(milestones)
    achieved_count = sum(1 for m in milestones if m.achieved)
    progress_pct = achieved_count / total * PERCENTAGE_TO_DECIMAL if total else 0.0

    next_milestone = milestones[achieved_count] if achieved_count < total else None
    if total and achieved_count == total:
        message = "All milestones achieved!"
    elif next_milestone is not None:
        message = f"Next: {next_milestone.label} ({format_currency(next_milestone.target)})"
    else:
        message = "Milestones achieved"

    return MilestoneProgress(achieved_count, total, progress_pct, next_milestone, message)


@error_handler
def debt_service_coverage_ratio(
    annual_rent: float,
    annual_expenses: float,
    loans: Iterable[Loan],
) -> Optional[float]:
    """
    (rent - expenses) / annual debt service.

    Debt service is the level P&I payment of each loan over its own
    ``term_years`` at its own rate. Returns ``None`` (shown as N/A) when no
    loan has both a positive principal and a positive rate.
    """
    serviced = [loan for loan in loans if loan.principal_amount > 0 and loan.interest_rate_annual_pct > 0]
    if not serviced:
        return None

    annual_loan_payment = sum(loan.get_amortizing_payment() * MONTHS_PER_YEAR for loan in serviced)
    if annual_loan_payment <= 0:
        return None
    return (annual_rent - annual_expenses) / annual_loan_payment


def loan_to_value_ratio(loan_principal: float, current_value: float) -> float:
    """Loan principal as a percentage of property value (0 without a value)."""
    if current_value <= 0:
        return 0.0
    return loan_principal / current_value * PERCENTAGE_TO_DECIMAL


@error_handler
def derive_kpis(
    projections: List[YearlyProjection],
    property: PropertySnapshot,
    assumptions: Assumptions,
    current_year: Optional[int] = None,
) -> PropertyKPIs:
    """Break-even year, NPV, milestones, DSCR and LVR for one projection run."""
    return PropertyKPIs(
        break_even_year=break_even_year(projections),
        npv=net_present_value(projections, assumptions.discount_rate),
        milestones=derive_milestones(projections, property.total_annual_income, current_year),
        dscr=debt_service_coverage_ratio(
            property.total_annual_income,
            property.total_annual_outgoings,
            property.loans,
        ),
        lvr=loan_to_value_ratio(property.total_loan_principal, property.current_value),
    )


def key_metrics(property: PropertySnapshot) -> KeyMetrics:
    """Rent per month/week and base-year gross and net yields."""
    annual_rent = property.total_annual_income
    value = property.current_value or property.purchase_price or 0.0
    gross_yield = annual_rent / value * PERCENTAGE_TO_DECIMAL if value > 0 else 0.0
    net_yield = (annual_rent - property.total_annual_outgoings) / value * PERCENTAGE_TO_DECIMAL if value > 0 else 0.0
    return KeyMetrics(
        monthly_rent=annual_rent / MONTHS_PER_YEAR,
        weekly_rent=annual_rent / WEEKS_PER_YEAR,
        gross_yield_pct=gross_yield,
        net_yield_pct=net_yield,
    )


def _remaining_interest(loan: Loan, balance: float, years_elapsed: int, horizon_years: int) -> float:
    """Interest still to be paid on ``balance`` over the rest of the loan term."""
    rate: Percentage = loan.interest_rate
    if balance <= 0 or rate.pct <= 0:
        return 0.0

    remaining_years = loan.term_years - years_elapsed
    if loan.is_pure_interest_only(horizon_years):
        return balance * rate.decimal * max(remaining_years, 0)

    io_years = loan.effective_io_years(horizon_years)
    if years_elapsed < io_years:
        io_remaining_months = (io_years - years_elapsed) * MONTHS_PER_YEAR
        pi_remaining_months = max(0, (loan.term_years - io_years) * MONTHS_PER_YEAR)
        interest = balance * rate.decimal * (io_remaining_months / MONTHS_PER_YEAR)
        if pi_remaining_months > 0:
            monthly_pi = amortizing_payment(balance, rate.monthly_decimal, pi_remaining_months)
            interest += max(0.0, monthly_pi * pi_remaining_months - balance)
        return interest

    remaining_months = remaining_years * MONTHS_PER_YEAR
    if remaining_months <= 0:
        return 0.0
    monthly_payment = amortizing_payment(balance, rate.monthly_decimal, remaining_months)
    return max(0.0, monthly_payment * remaining_months - balance)


@error_handler
def debt_paydown_series(
    property: PropertySnapshot,
    years_to_show: int = DEFAULT_YEARS_TO_SHOW,
    horizon_years: int = PROJECTION_YEARS,
    start_year: Optional[int] = None,
) -> List[DebtPaydownPoint]:
    """
    Principal still owed and interest still to pay at the end of each year.

    Balances come from each loan's projection schedule; the remaining interest
    re-amortizes that balance over what is left of the loan's own term.
    """
    loans = property.active_loans
    if not loans:
        return []

    start_year = this_year() if start_year is None else start_year
    schedules = [LoanAmortizationCalculator(loan, horizon_years).get_schedule() for loan in loans]
    years = min(years_to_show, horizon_years)

    points = []
    for year_index in range(years):
        principal_balance = 0.0
        interest_balance = 0.0
        for loan, schedule in zip(loans, schedules):
            balance = schedule[year_index].closing_balance
            principal_balance += balance
            interest_balance += _remaining_interest(loan, balance, year_index, horizon_years)
        points.append(
            DebtPaydownPoint(
                year=start_year + year_index,
                principal_balance=principal_balance,
                interest_balance=interest_balance,
                total_debt=principal_balance + interest_balance,
            )
        )
    return points


def growth_analysis_series(
    projections: List[YearlyProjection],
    initial_investment: float,
    years_to_show: int = DEFAULT_YEARS_TO_SHOW,
) -> List[GrowthAnalysisPoint]:
    """
    Capital growth and total return relative to the cash put in.

    Total return is capital growth since year 0 plus cumulative after-tax
    cashflow. Empty when there is no initial investment to measure against.
    """
    if not projections or initial_investment <= 0:
        return []

    initial_value = projections[0].property_value
    points = []
    for projection in projections[:years_to_show]:
        capital_growth = projection.property_value - initial_value
        total_return = capital_growth + projection.after_tax_cashflow_cumulative
        points.append(
            GrowthAnalysisPoint(
                year=projection.year,
                property_value=projection.property_value,
                capital_growth=capital_growth,
                capital_growth_pct=(
                    capital_growth / initial_value * PERCENTAGE_TO_DECIMAL if initial_value > 0 else 0.0
                ),
                total_return=total_return,
                total_return_pct=total_return / initial_investment * PERCENTAGE_TO_DECIMAL,
            )
        )
    return points
