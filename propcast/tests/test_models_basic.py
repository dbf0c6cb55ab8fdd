"""
Basic tests for PropCast models.

Tests instantiation, payments and serialization of loans, property snapshots
and assumptions.
"""

import pytest
import pandas as pd

from propcast.core.constants import ELoanType, DEFAULT_ASSUMPTIONS
from propcast.core.models import Loan, PropertySnapshot, Assumptions
from propcast.utils.error_utils import PropcastError
from propcast.utils.rate_utils import Percentage


class TestLoan:
    """Test basic loan creation, payments and serialization."""

    def test_loan_creation(self):
        loan = Loan(
            id="main",
            principal_amount=400000.0,
            interest_rate_annual_pct=6.0,
            term_years=30,
            start_date="2024-01-15",
        )

        assert loan.id == "main"
        assert loan.principal_amount == 400000.0
        assert loan.interest_rate_annual_pct == 6.0
        assert loan.interest_rate == Percentage(6.0)
        assert loan.loan_type == ELoanType.PRINCIPAL_INTEREST
        assert loan.start_date == pd.Timestamp("2024-01-01")
        assert loan.is_active
        assert loan.end_date == pd.Timestamp("2054-01-01")

    def test_rate_string_normalized(self):
        loan = Loan(id="l", principal_amount=1000, interest_rate_annual_pct="5.5%", term_years=10)
        assert loan.interest_rate_annual_pct == 5.5

    def test_invalid_rate_raises(self):
        with pytest.raises(PropcastError):
            Loan(id="l", principal_amount=1000, interest_rate_annual_pct=150, term_years=10)

    def test_invalid_loan_type_raises(self):
        with pytest.raises(PropcastError):
            Loan(id="l", principal_amount=1000, interest_rate_annual_pct=5, term_years=10, loan_type="balloon")

    def test_invalid_term_raises(self):
        with pytest.raises(PropcastError) as exc_info:
            Loan(id="l", principal_amount=1000, interest_rate_annual_pct=5, term_years="ten")
        assert exc_info.value.details["error_type"] == "ValueError"

    def test_repr_of_partial_loan(self):
        loan = Loan.__new__(Loan)
        loan.id = "half"
        assert repr(loan).startswith("Loan(id='half'")

    def test_inactive_loans(self):
        assert not Loan(id="l", principal_amount=0, interest_rate_annual_pct=5, term_years=30).is_active
        assert not Loan(id="l", principal_amount=-10, interest_rate_annual_pct=5, term_years=30).is_active
        assert not Loan(id="l", principal_amount=1000, interest_rate_annual_pct=5, term_years=0).is_active

    def test_principal_interest_monthly_payment(self):
        """400k at 6% over 30 years."""
        loan = Loan(id="l", principal_amount=400000, interest_rate_annual_pct=6.0, term_years=30)
        assert loan.get_monthly_payment() == pytest.approx(2398.20, abs=0.01)
        assert loan.get_annual_payment() == pytest.approx(28778.40, abs=0.1)

    def test_interest_only_monthly_payment(self):
        loan = Loan(
            id="l",
            principal_amount=400000,
            interest_rate_annual_pct=6.0,
            term_years=30,
            loan_type="interest_only",
        )
        assert loan.get_monthly_payment() == pytest.approx(2000.0)
        # DSCR always uses the amortizing payment
        assert loan.get_amortizing_payment() == pytest.approx(2398.20, abs=0.01)

    def test_zero_rate_straight_line(self):
        loan = Loan(id="l", principal_amount=360000, interest_rate_annual_pct=0, term_years=30)
        assert loan.get_monthly_payment() == pytest.approx(1000.0)
        assert loan.get_amortizing_payment() == 0.0

    def test_pure_interest_only_detection(self):
        io_zero = Loan(id="l", principal_amount=1000, interest_rate_annual_pct=5, term_years=30,
                       loan_type="interest_only", io_years=0)
        io_long = Loan(id="l", principal_amount=1000, interest_rate_annual_pct=5, term_years=30,
                       loan_type="interest_only", io_years=30)
        io_five = Loan(id="l", principal_amount=1000, interest_rate_annual_pct=5, term_years=30,
                       loan_type="interest_only", io_years=5)

        assert io_zero.is_pure_interest_only()
        assert io_long.is_pure_interest_only()
        assert not io_five.is_pure_interest_only()
        assert io_five.effective_io_years() == 5
        # Beyond a 5 year horizon there is no P&I phase left
        assert io_five.is_pure_interest_only(horizon_years=5)

    def test_effective_io_years_clamped(self):
        loan = Loan(id="l", principal_amount=1000, interest_rate_annual_pct=5, term_years=10, io_years=12)
        assert loan.effective_io_years(horizon_years=30) == 9
        assert loan.effective_io_years(horizon_years=5) == 4

    def test_loan_serialization(self):
        loan = Loan(
            id="main",
            principal_amount=400000.0,
            interest_rate_annual_pct=6.0,
            term_years=25,
            loan_type=ELoanType.INTEREST_ONLY,
            io_years=5,
            start_date="2024-01-01",
        )

        loan_dict = loan.to_dict()
        assert loan_dict["type"] == "interest_only"
        assert loan_dict["start_date"] == "2024-01-01"
        assert loan_dict["end_date"] == "2049-01-01"

        restored = Loan.from_dict(loan_dict)
        assert restored.principal_amount == 400000.0
        assert restored.term_years == 25
        assert restored.io_years == 5
        assert restored.loan_type == ELoanType.INTEREST_ONLY

    def test_from_dict_record_keys(self):
        """Records from the portfolio store use ``interest_rate`` and ``loan_type``."""
        loan = Loan.from_dict(
            {"id": "x", "principal_amount": 1000, "interest_rate": 4.5, "loan_type": "interest_only"}
        )
        assert loan.interest_rate_annual_pct == 4.5
        assert loan.is_interest_only
        assert loan.term_years == 30


class TestPropertySnapshot:

    def _loan(self, principal):
        return Loan(id="l", principal_amount=principal, interest_rate_annual_pct=6, term_years=30)

    def test_snapshot_creation(self):
        snapshot = PropertySnapshot(
            current_value=550000,
            total_annual_income=26000,
            total_annual_outgoings=9000,
            loans=[self._loan(400000)],
            name="Unit 4",
        )
        assert snapshot.total_loan_principal == 400000
        assert isinstance(snapshot.loans, tuple)
        assert len(snapshot.active_loans) == 1

    def test_from_items(self):
        snapshot = PropertySnapshot.from_items(
            500000,
            income_items=[{"name": "Rent", "amount": 24000}, {"name": "Parking", "amount": 1200}],
            outgoing_items=[{"name": "Rates", "amount": 2000}, {"name": "Insurance", "amount": None}],
        )
        assert snapshot.total_annual_income == 25200
        assert snapshot.total_annual_outgoings == 2000

    def test_total_cash_invested_explicit(self):
        snapshot = PropertySnapshot(current_value=500000, total_cash_invested=120000, loans=[self._loan(400000)])
        assert snapshot.get_total_cash_invested() == 120000

    def test_total_cash_invested_default(self):
        snapshot = PropertySnapshot(current_value=550000, purchase_price=500000, loans=[self._loan(400000)])
        assert snapshot.get_total_cash_invested() == 100000

        no_price = PropertySnapshot(current_value=550000, loans=[self._loan(400000)])
        assert no_price.get_total_cash_invested() == 150000

    def test_total_cash_invested_floored_at_zero(self):
        snapshot = PropertySnapshot(current_value=300000, loans=[self._loan(400000)])
        assert snapshot.get_total_cash_invested() == 0.0

    def test_inactive_loans_ignored(self):
        snapshot = PropertySnapshot(current_value=500000, loans=[self._loan(0), self._loan(100000)])
        assert snapshot.total_loan_principal == 100000
        assert len(snapshot.active_loans) == 1

    def test_serialization(self):
        snapshot = PropertySnapshot(
            id="p1",
            current_value=550000,
            total_annual_income=26000,
            loans=[self._loan(400000)],
        )
        restored = PropertySnapshot.from_dict(snapshot.to_dict())
        assert restored.id == "p1"
        assert restored.current_value == 550000
        assert restored.total_loan_principal == 400000


class TestAssumptions:

    def test_defaults(self):
        assumptions = Assumptions.defaults()
        assert assumptions.to_dict() == DEFAULT_ASSUMPTIONS
        assert assumptions.rent_growth == Percentage(3.5)

    def test_missing_rates_are_zero(self):
        assumptions = Assumptions(capital_growth_pct=4)
        assert assumptions.rent_growth == Percentage(0.0)
        assert assumptions.capital_growth.decimal == pytest.approx(0.04)

    def test_combined_tax_rate(self):
        assumptions = Assumptions(tax_rate_pct=30, medicare_levy_pct=2)
        assert assumptions.combined_tax_rate.decimal == pytest.approx(0.32)

    def test_replace(self):
        base = Assumptions.defaults()
        changed = base.replace(rent_growth_pct=5)
        assert changed.rent_growth == Percentage(5.0)
        assert base.rent_growth == Percentage(3.5)
        assert changed.capital_growth == base.capital_growth

    def test_from_dict_roundtrip(self):
        assumptions = Assumptions.from_dict({"tax_rate_pct": 37, "vacancy_rate_pct": "4%"})
        assert assumptions.tax_rate == Percentage(37.0)
        assert assumptions.vacancy_rate == Percentage(4.0)
        assert Assumptions.from_dict(assumptions.to_dict()) == assumptions

    def test_hashable(self):
        first = Assumptions.defaults()
        second = Assumptions.from_dict(DEFAULT_ASSUMPTIONS)
        assert hash(first) == hash(second)
        assert len({first, second, first.replace(tax_rate_pct=45)}) == 2
