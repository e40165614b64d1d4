"""pt-BR display formatting for Lucro ML."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

MONTH_NAMES = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"]
# Monday first, matching date.weekday()
WEEKDAY_NAMES = ["Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom"]


def _brazilian(text: str) -> str:
    """Swap US separators (1,234.5) for Brazilian ones (1.234,5)."""
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def _round(value: Decimal | int | float, places: int) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def format_currency(value: Decimal | int | float) -> str:
    """Format an amount in reais, e.g. ``R$ 1.234,56``."""
    amount = _round(value, 2)
    sign = "-" if amount < 0 else ""
    return f"{sign}R$ {_brazilian(f'{abs(amount):,.2f}')}"


def format_percent(value: Decimal | int | float, places: int = 1) -> str:
    """Format a percentage value, e.g. ``12,3%``."""
    return f"{_brazilian(f'{_round(value, places):,.{places}f}')}%"


def format_number(value: Decimal | int | float) -> str:
    """Format an integer count with thousands separators."""
    return _brazilian(f"{int(value):,}")


def format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def get_month_name(month: int) -> str:
    """Abbreviated month name for a 1-based month number."""
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return ""


def get_weekday_name(weekday: int) -> str:
    """Abbreviated weekday name, 0 being Monday."""
    if 0 <= weekday <= 6:
        return WEEKDAY_NAMES[weekday]
    return ""
