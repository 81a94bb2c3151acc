"""Tests for USD/INR display formatting."""

from decimal import Decimal

import pytest
from jinja2 import Environment

from esop.reports.formatting import (
    format_dual,
    format_inr,
    format_percent,
    format_quantity,
    format_strike,
    format_usd,
    register_filters,
    to_inr,
)


class TestFormatUsd:
    def test_rounds_half_up(self):
        assert format_usd(Decimal("1234.565")) == "$1,234.57"

    def test_pads_cents(self):
        assert format_usd(Decimal("3093.1")) == "$3,093.10"

    def test_negative(self):
        assert format_usd(Decimal("-5")) == "$-5.00"


class TestFormatInr:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("999"), "₹999"),
            (Decimal("1000"), "₹1,000"),
            (Decimal("100000"), "₹1,00,000"),
            (Decimal("1234567.5"), "₹12,34,568"),
            (Decimal("123456789"), "₹12,34,56,789"),
            (Decimal("-2500"), "₹-2,500"),
        ],
    )
    def test_lakh_grouping(self, value, expected):
        assert format_inr(value) == expected


class TestOtherFormats:
    def test_quantity(self):
        assert format_quantity(10000) == "10,000"
        assert format_quantity(100000) == "1,00,000"

    def test_strike(self):
        assert format_strike(Decimal("0.133")) == "$0.133"
        assert format_strike(Decimal("1")) == "$1.000"

    def test_percent(self):
        assert format_percent(Decimal("0.4274")) == "42.74%"
        assert format_percent(Decimal("0.30")) == "30%"

    def test_dual(self):
        assert format_dual(Decimal("100"), Decimal("85")) == "$100.00 / ₹8,500"

    def test_to_inr_is_exact(self):
        assert to_inr(Decimal("3093.1"), Decimal("85")) == Decimal("262913.5")


class TestFilters:
    def test_registered_filters_render(self):
        env = register_filters(Environment())
        text = env.from_string("{{ v|usd }} {{ v|dual(rate) }} {{ q|qty }}").render(
            v=Decimal("2"), rate=Decimal("85"), q=1500,
        )
        assert text == "$2.00 $2.00 / ₹170 1,500"


class TestLargeValues:
    def test_usd_beyond_default_precision(self):
        text = format_usd(Decimal("1.5e40"))
        assert text.startswith("$15,000,000,000")
        assert text.endswith(".00")

    def test_inr_beyond_default_precision(self):
        assert format_inr(Decimal("1e30")) == "₹10," + "00," * 13 + "000"

    def test_strike_beyond_default_precision(self):
        assert format_strike(Decimal("1e300")) == "$1" + "0" * 300 + ".000"
