"""
Compound growth of base-year figures.

Rent grows with rent growth, outgoings with inflation and the property value
with capital growth, all as ``base * (1 + rate)^year_index``.
"""

from typing import Union

import numpy as np

from propcast.utils.rate_utils import Percentage, as_percentage

RateLike = Union[Percentage, float, int, str]


def grow(base: float, annual_rate: RateLike, year_index: int) -> float:
    """
    Value of ``base`` after ``year_index`` years of compound growth.

    Args:
        base: Year-0 amount
        annual_rate: Annual rate as ``Percentage`` or percentage points
        year_index: Years elapsed (0 returns ``base`` unchanged)

    Examples:
        >>> grow(100.0, 10, 2)
        121.00000000000001
        >>> grow(550000.0, Percentage(5.0), 0)
        550000.0
    """
    rate = as_percentage(annual_rate)
    return base * (1 + rate.decimal) ** year_index


def growth_series(base: float, annual_rate: RateLike, years: int) -> np.ndarray:
    """``grow`` for year indices ``0 .. years - 1``."""
    rate = as_percentage(annual_rate)
    return base * np.power(1 + rate.decimal, np.arange(years))
