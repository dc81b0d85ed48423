"""Tests for Italian locale formatting."""

from __future__ import annotations

from decimal import Decimal

from forfettario.formatters import format_currency, format_percentage


class TestFormatCurrency:
    def test_integer(self):
        assert format_currency(1000) == "€1.000,00"

    def test_decimal(self):
        assert format_currency(Decimal("1750.5")) == "€1.750,50"

    def test_float(self):
        assert format_currency(1234.5) == "€1.234,50"

    def test_large(self):
        assert format_currency(Decimal("1234567.891")) == "€1.234.567,89"

    def test_rounds_half_up(self):
        assert format_currency(Decimal("0.125")) == "€0,13"

    def test_none(self):
        assert format_currency(None) == "€0,00"

    def test_nan(self):
        assert format_currency(float("nan")) == "€0,00"

    def test_infinity(self):
        assert format_currency(float("inf")) == "€0,00"

    def test_negative(self):
        assert format_currency(Decimal("-250")) == "€-250,00"


class TestFormatPercentage:
    def test_one_decimal(self):
        assert format_percentage(Decimal("24.31")) == "24,3%"

    def test_zero(self):
        assert format_percentage(0) == "0,0%"

    def test_places(self):
        assert format_percentage(Decimal("5"), places=0) == "5%"

    def test_none(self):
        assert format_percentage(None) == "-"
