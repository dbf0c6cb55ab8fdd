"""
PropCast Core Engine Package.

Pure, synchronous projection engine. Inputs are treated as immutable
snapshots; every call recomputes from scratch.

Modules:
    amortization: Per-loan yearly interest/principal split
    aggregator: Totals across a property's loans
    growth: Compound growth of base-year figures
    projection: Year-by-year cashflow, tax and equity projection
    kpis: Break-even, NPV, milestones, DSCR, LVR and chart series
"""

from propcast.core.engine.amortization import (
    LoanYear,
    LoanAmortizationCalculator,
    amortizing_payment,
    compute_year,
)
from propcast.core.engine.aggregator import LoanSummary, aggregate_loans, collapse_loans
from propcast.core.engine.growth import grow, growth_series
from propcast.core.engine.projection import (
    YearlyProjection,
    YearlyProjectionBuilder,
    project_property_cashflow,
    projections_to_frame,
)
from propcast.core.engine.kpis import (
    Milestone,
    MilestoneProgress,
    PropertyKPIs,
    KeyMetrics,
    DebtPaydownPoint,
    GrowthAnalysisPoint,
    break_even_year,
    net_present_value,
    derive_milestones,
    milestone_progress,
    debt_service_coverage_ratio,
    loan_to_value_ratio,
    derive_kpis,
    key_metrics,
    debt_paydown_series,
    growth_analysis_series,
)

__all__ = [
    "LoanYear",
    "LoanAmortizationCalculator",
    "amortizing_payment",
    "compute_year",
    "LoanSummary",
    "aggregate_loans",
    "collapse_loans",
    "grow",
    "growth_series",
    "YearlyProjection",
    "YearlyProjectionBuilder",
    "project_property_cashflow",
    "projections_to_frame",
    "Milestone",
    "MilestoneProgress",
    "PropertyKPIs",
    "KeyMetrics",
    "DebtPaydownPoint",
    "GrowthAnalysisPoint",
    "break_even_year",
    "net_present_value",
    "derive_milestones",
    "milestone_progress",
    "debt_service_coverage_ratio",
    "loan_to_value_ratio",
    "derive_kpis",
    "key_metrics",
    "debt_paydown_series",
    "growth_analysis_series",
]

__version__ = "1.0.0"
