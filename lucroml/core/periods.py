"""Reporting period helpers for Lucro ML."""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Iterable

from dateutil.relativedelta import relativedelta

from .models import Sale


class Period(str, Enum):
    """Reporting period filter."""

    TODAY = "today"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_3_MONTHS = "3m"
    LAST_6_MONTHS = "6m"
    LAST_12_MONTHS = "12m"
    CUSTOM = "custom"


_LOOKBACK: dict[Period, relativedelta] = {
    Period.TODAY: relativedelta(),
    Period.LAST_7_DAYS: relativedelta(days=7),
    Period.LAST_30_DAYS: relativedelta(days=30),
    Period.LAST_3_MONTHS: relativedelta(months=3),
    Period.LAST_6_MONTHS: relativedelta(months=6),
    Period.LAST_12_MONTHS: relativedelta(years=1),
}


def date_range(
    period: Period,
    today: date | None = None,
    custom: tuple[date, date] | None = None,
) -> tuple[date, date]:
    """Inclusive ``(start, end)`` dates for a period ending today."""
    if period == Period.CUSTOM:
        if custom is None:
            raise ValueError("A custom period needs explicit start and end dates")
        start, end = custom
        if end < start:
            raise ValueError(f"Custom period ends ({end}) before it starts ({start})")
        return start, end

    end = today or date.today()
    return end - _LOOKBACK[period], end


def previous_range(start: date, end: date) -> tuple[date, date]:
    """The window of equal length immediately before ``start``."""
    days = max(1, (end - start).days)
    return start - timedelta(days=days), start - timedelta(days=1)


def filter_sales(sales: Iterable[Sale], start: date, end: date) -> list[Sale]:
    """Sales dated within ``[start, end]``."""
    return [s for s in sales if start <= s.sale_date <= end]


def trailing_months(count: int, today: date | None = None) -> list[tuple[int, int]]:
    """``(year, month)`` pairs for the last ``count`` months, oldest first.

    The current month is included as the last element.
    """
    anchor = (today or date.today()).replace(day=1)
    months = []
    for offset in range(count - 1, -1, -1):
        d = anchor - relativedelta(months=offset)
        months.append((d.year, d.month))
    return months
