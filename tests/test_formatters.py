"""Tests for pt-BR formatting."""

from datetime import date
from decimal import Decimal

from lucroml.utils.formatters import (
    format_currency,
    format_date,
    format_number,
    format_percent,
    get_month_name,
    get_weekday_name,
)


class TestFormatters:
    def test_currency(self) -> None:
        assert format_currency(Decimal("1234.56")) == "R$ 1.234,56"
        assert format_currency(Decimal("0")) == "R$ 0,00"
        assert format_currency(Decimal("-42.975")) == "-R$ 42,98"
        assert format_currency(1234567) == "R$ 1.234.567,00"

    def test_percent(self) -> None:
        assert format_percent(Decimal("12.34")) == "12,3%"
        assert format_percent(Decimal("-5")) == "-5,0%"
        assert format_percent(Decimal("1500.25"), places=2) == "1.500,25%"

    def test_number(self) -> None:
        assert format_number(12345) == "12.345"

    def test_date(self) -> None:
        assert format_date(date(2026, 3, 5)) == "05/03/2026"

    def test_month_names(self) -> None:
        assert get_month_name(1) == "Jan"
        assert get_month_name(2) == "Fev"
        assert get_month_name(12) == "Dez"
        assert get_month_name(13) == ""

    def test_weekday_names(self) -> None:
        assert get_weekday_name(0) == "Seg"
        assert get_weekday_name(6) == "Dom"
        assert get_weekday_name(7) == ""
