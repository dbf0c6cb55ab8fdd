"""
PropCast - Property Portfolio Cashflow Forecaster

Projection engine for investment properties:
- 30-year cashflow, tax and equity projections
- Interest-only, principal-and-interest and IO -> P&I loans
- Break-even, NPV, income milestones, DSCR and LVR
"""

__version__ = "1.0.0"
__author__ = "PropCast Contributors"
