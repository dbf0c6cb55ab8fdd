"""
Projection API endpoints.

Stateless: every request carries the full property snapshot and assumptions,
and the engine recomputes from scratch.
"""

import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from propcast.api.config import ApiConfig, get_config
from propcast.api.schemas import (
    AssumptionsInput,
    DebtPaydownPointResponse,
    GrowthAnalysisPointResponse,
    KPIResponse,
    KeyMetricsResponse,
    LoanSummaryResponse,
    MilestoneResponse,
    ProjectionRequest,
    ProjectionResponse,
    PropertyInput,
    YearlyProjectionResponse,
)
from propcast.core.engine import (
    aggregate_loans,
    debt_paydown_series,
    derive_kpis,
    growth_analysis_series,
    key_metrics,
    milestone_progress,
    project_property_cashflow,
)
from propcast.core.models import Assumptions, Loan, PropertySnapshot
from propcast.utils.formatters import format_percent, format_ratio

logger = logging.getLogger("propcast")

router = APIRouter()


# Helper functions for schema to business object conversion

def _to_snapshot(property_input: PropertyInput) -> PropertySnapshot:
    """Convert a validated ``PropertyInput`` into the engine's snapshot."""
    loans = [
        Loan(
            id=loan.id,
            principal_amount=loan.principal_amount,
            interest_rate_annual_pct=loan.interest_rate_annual_pct,
            term_years=loan.term_years,
            loan_type=loan.type,
            io_years=loan.io_years,
            start_date=loan.start_date,
        )
        for loan in property_input.loans
    ]
    return PropertySnapshot(
        id=property_input.id,
        name=property_input.name,
        current_value=property_input.current_value,
        purchase_price=property_input.purchase_price,
        total_annual_income=property_input.total_annual_income,
        total_annual_outgoings=property_input.total_annual_outgoings,
        total_cash_invested=property_input.total_cash_invested,
        loans=loans,
    )


def _to_assumptions(assumptions_input: AssumptionsInput) -> Assumptions:
    return Assumptions.from_dict(assumptions_input.model_dump())


def _check_horizon(request: ProjectionRequest, config: ApiConfig) -> None:
    if request.horizon_years > config.max_horizon_years:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"horizon_years must not exceed {config.max_horizon_years}",
        )


@router.post("/", response_model=ProjectionResponse)
def run_projection(request: ProjectionRequest, config: ApiConfig = Depends(get_config)):
    """
    Run the year-by-year projection for one property.

    Returns the projection rows together with the headline KPIs, the base-year
    key metrics and the loan totals.

    Raises:
        HTTPException: 400 if the horizon exceeds the configured maximum
    """
    _check_horizon(request, config)

    snapshot = _to_snapshot(request.property)
    assumptions = _to_assumptions(request.assumptions)

    projections = project_property_cashflow(
        snapshot,
        assumptions,
        horizon_years=request.horizon_years,
        start_year=request.start_year,
        combine_loans=request.combine_loans,
    )
    kpis = derive_kpis(projections, snapshot, assumptions, current_year=request.current_year)
    progress = milestone_progress(kpis.milestones)
    metrics = key_metrics(snapshot)
    loan_summary = aggregate_loans(snapshot.loans)

    logger.info(
        f"Projection computed for {snapshot.name or snapshot.id or 'property'}: "
        f"{len(projections)} years, break-even {kpis.break_even_year}"
    )

    return ProjectionResponse(
        projections=[YearlyProjectionResponse(**p.to_dict()) for p in projections],
        kpis=KPIResponse(
            break_even_year=kpis.break_even_year,
            npv=kpis.npv,
            milestones=[MilestoneResponse.model_validate(m) for m in kpis.milestones],
            dscr=kpis.dscr,
            lvr=kpis.lvr,
            dscr_display=format_ratio(kpis.dscr),
            lvr_display=format_percent(kpis.lvr),
            milestone_message=progress.message,
        ),
        key_metrics=KeyMetricsResponse.model_validate(metrics),
        loan_summary=LoanSummaryResponse.model_validate(loan_summary),
        total_cash_invested=snapshot.get_total_cash_invested(),
        computed_at=datetime.now(),
    )


@router.post("/debt-paydown", response_model=List[DebtPaydownPointResponse])
def get_debt_paydown(request: ProjectionRequest, config: ApiConfig = Depends(get_config)):
    """Principal owed and interest still to pay, year by year."""
    _check_horizon(request, config)
    snapshot = _to_snapshot(request.property)
    points = debt_paydown_series(
        snapshot,
        years_to_show=request.years_to_show,
        horizon_years=request.horizon_years,
        start_year=request.start_year,
    )
    return [DebtPaydownPointResponse.model_validate(p) for p in points]


@router.post("/growth-analysis", response_model=List[GrowthAnalysisPointResponse])
def get_growth_analysis(request: ProjectionRequest, config: ApiConfig = Depends(get_config)):
    """Capital growth and total return relative to the cash invested."""
    _check_horizon(request, config)
    snapshot = _to_snapshot(request.property)
    projections = project_property_cashflow(
        snapshot,
        _to_assumptions(request.assumptions),
        horizon_years=request.horizon_years,
        start_year=request.start_year,
        combine_loans=request.combine_loans,
    )
    points = growth_analysis_series(
        projections,
        snapshot.get_total_cash_invested(),
        years_to_show=request.years_to_show,
    )
    return [GrowthAnalysisPointResponse.model_validate(p) for p in points]


@router.post("/loan-summary", response_model=LoanSummaryResponse)
def get_loan_summary(property_input: PropertyInput):
    """Total borrowed, repayments and weighted rate across the property's loans."""
    snapshot = _to_snapshot(property_input)
    return LoanSummaryResponse.model_validate(aggregate_loans(snapshot.loans))


@router.get("/health")
def projection_health_check():
    """Health check for projection service."""
    return {
        "status": "ready",
        "service": "projections",
        "features": {
            "yearly_projection": True,
            "kpis": True,
            "debt_paydown": True,
            "growth_analysis": True,
        },
    }
