"""
Property and assumption models for PropCast.

Classes:
    PropertySnapshot: Current valuation, base-year income/outgoings and loans
    Assumptions: Macro rates applied uniformly across the projection horizon
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from propcast.core.constants import DEFAULT_ASSUMPTIONS
from propcast.core.models.loan import Loan
from propcast.utils.rate_utils import Percentage, as_percentage
from propcast.utils.error_utils import error_handler

RateInput = Union[Percentage, float, int, str, None]


class PropertySnapshot:
    """
    A property's valuation and base-year operating figures.

    Attributes:
        id: Property identifier
        name: Display name
        current_value: Current valuation
        total_annual_income: Annual income summed across income items
        total_annual_outgoings: Annual expenses summed across expense items
        loans: Loans secured against the property
        purchase_price: Price paid, used for the default cash invested
        total_cash_invested: Explicit cash invested (overrides the default)
    """

    @error_handler
    def __init__(
        self,
        current_value: float,
        total_annual_income: float = 0.0,
        total_annual_outgoings: float = 0.0,
        loans: Optional[Iterable[Loan]] = None,
        purchase_price: Optional[float] = None,
        total_cash_invested: Optional[float] = None,
        id: Optional[str] = None,
        name: str = "",
    ):
        self.id = id
        self.name = name
        self.current_value = float(current_value or 0)
        self.total_annual_income = float(total_annual_income or 0)
        self.total_annual_outgoings = float(total_annual_outgoings or 0)
        # Tuple so a snapshot cannot be mutated while a run reads it
        self.loans = tuple(loans or ())
        self.purchase_price = float(purchase_price) if purchase_price is not None else None
        self.total_cash_invested = float(total_cash_invested) if total_cash_invested is not None else None

    @classmethod
    def from_items(
        cls,
        current_value: float,
        income_items: Iterable[Dict[str, Any]] = (),
        outgoing_items: Iterable[Dict[str, Any]] = (),
        **kwargs,
    ) -> "PropertySnapshot":
        """Build a snapshot from income/outgoing line items (``{"name", "amount"}``)."""
        total_income = sum(float(item.get("amount") or 0) for item in income_items)
        total_outgoings = sum(float(item.get("amount") or 0) for item in outgoing_items)
        return cls(
            current_value=current_value,
            total_annual_income=total_income,
            total_annual_outgoings=total_outgoings,
            **kwargs,
        )

    @property
    def active_loans(self) -> List[Loan]:
        return [loan for loan in self.loans if loan.is_active]

    @property
    def total_loan_principal(self) -> float:
        return sum(loan.principal_amount for loan in self.active_loans)

    def get_total_cash_invested(self) -> float:
        """
        Initial cash put into the property.

        Uses the explicit figure when supplied, otherwise the purchase price
        (or current value) less the borrowed principal, floored at zero.
        """
        if self.total_cash_invested is not None:
            return self.total_cash_invested
        price = self.purchase_price if self.purchase_price is not None else self.current_value
        return max(0.0, price - self.total_loan_principal)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "current_value": self.current_value,
            "total_annual_income": self.total_annual_income,
            "total_annual_outgoings": self.total_annual_outgoings,
            "purchase_price": self.purchase_price,
            "total_cash_invested": self.total_cash_invested,
            "loans": [loan.to_dict() for loan in self.loans],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PropertySnapshot":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            current_value=data.get("current_value", 0),
            total_annual_income=data.get("total_annual_income", 0),
            total_annual_outgoings=data.get("total_annual_outgoings", 0),
            purchase_price=data.get("purchase_price"),
            total_cash_invested=data.get("total_cash_invested"),
            loans=[Loan.from_dict(loan) for loan in data.get("loans", [])],
        )


class Assumptions:
    """
    Macro assumptions for a projection run.

    Every rate is an annual ``Percentage``; plain numbers are read as
    percentage points (``rent_growth_pct=3`` is 3% a year). Missing rates
    are 0%.
    """

    FIELDS = tuple(DEFAULT_ASSUMPTIONS.keys())

    def __init__(
        self,
        rent_growth_pct: RateInput = 0.0,
        capital_growth_pct: RateInput = 0.0,
        inflation_rate_pct: RateInput = 0.0,
        tax_rate_pct: RateInput = 0.0,
        medicare_levy_pct: RateInput = 0.0,
        vacancy_rate_pct: RateInput = 0.0,
        pm_fee_rate_pct: RateInput = 0.0,
        depreciation_rate_pct: RateInput = 0.0,
        discount_rate_pct: RateInput = 0.0,
    ):
        self.rent_growth = as_percentage(rent_growth_pct)
        self.capital_growth = as_percentage(capital_growth_pct)
        self.inflation_rate = as_percentage(inflation_rate_pct)
        self.tax_rate = as_percentage(tax_rate_pct)
        self.medicare_levy = as_percentage(medicare_levy_pct)
        self.vacancy_rate = as_percentage(vacancy_rate_pct)
        self.pm_fee_rate = as_percentage(pm_fee_rate_pct)
        self.depreciation_rate = as_percentage(depreciation_rate_pct)
        self.discount_rate = as_percentage(discount_rate_pct)

    @classmethod
    def defaults(cls) -> "Assumptions":
        return cls(**DEFAULT_ASSUMPTIONS)

    @property
    def combined_tax_rate(self) -> Percentage:
        """Marginal tax rate plus medicare levy."""
        return self.tax_rate + self.medicare_levy

    def replace(self, **changes: RateInput) -> "Assumptions":
        """Copy with some rates changed, e.g. ``replace(rent_growth_pct=5)``."""
        values = self.to_dict()
        values.update(changes)
        return Assumptions(**values)

    def to_dict(self) -> Dict[str, float]:
        return {field: getattr(self, field[: -len("_pct")]).pct for field in self.FIELDS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Assumptions":
        return cls(**{field: data.get(field, 0.0) for field in cls.FIELDS})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Assumptions):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(tuple(self.to_dict().items()))

    def __repr__(self) -> str:
        return f"Assumptions({self.to_dict()})"
