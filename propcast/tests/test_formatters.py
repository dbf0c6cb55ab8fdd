"""
Tests for display formatters.
"""

import math

from propcast.utils.formatters import (
    format_number,
    unformat_number,
    format_currency,
    format_compact_currency,
    format_short_currency,
    format_percent,
    format_ratio,
)


def test_format_number():
    assert format_number(1234567.5) == "1,234,567.5"
    assert format_number(1000) == "1,000"
    assert format_number("2500") == "2,500"
    assert format_number(None) == ""
    assert format_number("") == ""
    assert format_number(math.nan) == ""


def test_unformat_number():
    assert unformat_number("1,234") == "1234"
    assert unformat_number("") == ""


def test_format_currency():
    assert format_currency(1234.6) == "$1,235"
    assert format_currency(-1234) == "-$1,234"
    assert format_currency(-1234.5, show_decimals=True) == "-$1,234.50"
    assert format_currency(0) == "$0"
    assert format_currency(None) == "$0"
    assert format_currency("") == "$0"


def test_format_currency_no_negative_zero():
    assert format_currency(-0.2) == "$0"


def test_format_compact_currency():
    assert format_compact_currency(1_250_000) == "$1.2M"
    assert format_compact_currency(2_500) == "$2.5K"
    assert format_compact_currency(950) == "$950"


def test_format_short_currency():
    assert format_short_currency(25_000) == "$25K"
    assert format_short_currency(-1_200_000) == "-$1.2M"
    assert format_short_currency(950) == "$950"


def test_format_percent():
    assert format_percent(72.7272) == "72.7%"
    assert format_percent(5, decimals=2) == "5.00%"


def test_format_ratio():
    assert format_ratio(0.5907) == "0.59x"
    assert format_ratio(None) == "N/A"
