"""
Pydantic schemas for API request/response validation.

These schemas provide:
- Input validation for projection requests (the engine itself trusts its inputs)
- Response serialization
- OpenAPI documentation generation
"""

from datetime import date, datetime
from typing import Optional, List
from enum import Enum

from pydantic import BaseModel, Field, ConfigDict, model_validator

from propcast.core.constants import DEFAULT_ASSUMPTIONS, PROJECTION_YEARS


# ======================
# Enums
# ======================


class LoanType(str, Enum):
    """Loan type enumeration."""

    INTEREST_ONLY = "interest_only"
    PRINCIPAL_INTEREST = "principal_interest"


# ======================
# Base Schemas
# ======================


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        use_enum_values=True,
    )


# ======================
# Input Schemas
# ======================


class LoanInput(BaseSchema):
    """A loan secured against the property."""

    id: str = Field(default="loan", max_length=64)
    type: LoanType = LoanType.PRINCIPAL_INTEREST
    principal_amount: float = Field(..., ge=0, le=10_000_000)
    interest_rate_annual_pct: float = Field(..., ge=0, le=100, description="Annual rate in percent (6.5 = 6.5%)")
    term_years: int = Field(default=30, ge=1, le=50)
    io_years: int = Field(default=0, ge=0, le=30)
    start_date: Optional[date] = None

    @model_validator(mode="after")
    def check_io_period(self):
        if self.type == LoanType.PRINCIPAL_INTEREST.value and self.io_years >= self.term_years:
            raise ValueError("io_years must be shorter than term_years for a principal & interest loan")
        return self


class PropertyInput(BaseSchema):
    """Valuation and base-year figures of the property being modelled."""

    id: Optional[str] = None
    name: str = Field(default="", max_length=100)
    current_value: float = Field(..., ge=0, le=100_000_000)
    purchase_price: Optional[float] = Field(None, ge=0, le=100_000_000)
    total_annual_income: float = Field(default=0, ge=0, le=10_000_000)
    total_annual_outgoings: float = Field(default=0, ge=0, le=10_000_000)
    total_cash_invested: Optional[float] = Field(None, ge=0, le=100_000_000)
    loans: List[LoanInput] = Field(default_factory=list)


class AssumptionsInput(BaseSchema):
    """Macro assumptions, all annual percentages."""

    rent_growth_pct: float = Field(default=DEFAULT_ASSUMPTIONS["rent_growth_pct"], ge=0, le=100)
    capital_growth_pct: float = Field(default=DEFAULT_ASSUMPTIONS["capital_growth_pct"], ge=0, le=100)
    inflation_rate_pct: float = Field(default=DEFAULT_ASSUMPTIONS["inflation_rate_pct"], ge=0, le=100)
    tax_rate_pct: float = Field(default=DEFAULT_ASSUMPTIONS["tax_rate_pct"], ge=0, le=100)
    medicare_levy_pct: float = Field(default=DEFAULT_ASSUMPTIONS["medicare_levy_pct"], ge=0, le=100)
    vacancy_rate_pct: float = Field(default=DEFAULT_ASSUMPTIONS["vacancy_rate_pct"], ge=0, le=100)
    pm_fee_rate_pct: float = Field(default=DEFAULT_ASSUMPTIONS["pm_fee_rate_pct"], ge=0, le=100)
    depreciation_rate_pct: float = Field(default=DEFAULT_ASSUMPTIONS["depreciation_rate_pct"], ge=0, le=100)
    discount_rate_pct: float = Field(default=DEFAULT_ASSUMPTIONS["discount_rate_pct"], ge=0, le=100)


class ProjectionRequest(BaseSchema):
    """Schema for projection calculation requests."""

    property: PropertyInput
    assumptions: AssumptionsInput = Field(default_factory=AssumptionsInput)
    horizon_years: int = Field(default=PROJECTION_YEARS, ge=1, le=100)
    start_year: Optional[int] = Field(None, ge=1900, le=2200, description="Calendar year of year 0 (defaults to this year)")
    current_year: Optional[int] = Field(None, ge=1900, le=2200, description="Year milestones are judged against")
    combine_loans: bool = Field(default=False, description="Model all loans as one representative loan")
    years_to_show: int = Field(default=20, ge=1, le=100, description="Chart window for paydown/growth series")


# ======================
# Response Schemas
# ======================


class YearlyProjectionResponse(BaseSchema):
    """One projection year."""

    year: int
    year_index: int
    property_value: float
    opening_loan_balance: float
    loan_balance: float
    equity: float
    principal_payment: float
    principal_payment_cumulative: float
    interest_payment_cumulative: float
    interest_rate_pct: float
    gross_income: float
    vacancy: float
    effective_rent: float
    pm_fee: float
    gross_yield_pct: float
    operating_expenses: float
    noi: float
    interest_expense: float
    depreciation: float
    taxable_income: float
    tax: float
    tax_benefit: float
    pre_tax_cashflow: float
    pre_tax_cashflow_cumulative: float
    after_tax_cashflow: float
    after_tax_cashflow_cumulative: float
    net_yield_pct: float
    income_per_month: float
    capital_growth_annual: float
    capital_growth_cumulative: float
    total_performance: float
    total_performance_inc_principal: float
    cash_on_cash_return_pct: float
    return_on_invested_capital_pct: float


class MilestoneResponse(BaseSchema):
    year: int
    label: str
    achieved: bool
    target: float


class KPIResponse(BaseSchema):
    """Headline KPIs; ``dscr`` is null when there is no serviced debt."""

    break_even_year: Optional[int]
    npv: float
    milestones: List[MilestoneResponse]
    dscr: Optional[float]
    lvr: float
    dscr_display: str
    lvr_display: str
    milestone_message: str


class KeyMetricsResponse(BaseSchema):
    monthly_rent: float
    weekly_rent: float
    gross_yield_pct: float
    net_yield_pct: float


class LoanSummaryResponse(BaseSchema):
    total_principal: float
    total_monthly_payment: float
    total_annual_payment: float
    weighted_rate_pct: float
    loan_count: int
    has_loans: bool


class DebtPaydownPointResponse(BaseSchema):
    year: int
    principal_balance: float
    interest_balance: float
    total_debt: float


class GrowthAnalysisPointResponse(BaseSchema):
    year: int
    property_value: float
    capital_growth: float
    capital_growth_pct: float
    total_return: float
    total_return_pct: float


class ProjectionResponse(BaseSchema):
    """Schema for projection results."""

    projections: List[YearlyProjectionResponse]
    kpis: KPIResponse
    key_metrics: KeyMetricsResponse
    loan_summary: LoanSummaryResponse
    total_cash_invested: float
    computed_at: datetime


# ======================
# Error Response Schema
# ======================


class ErrorResponse(BaseSchema):
    """Standard error response schema."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
    type: Optional[str] = Field(None, description="Error type/class")
