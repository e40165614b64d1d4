"""Revenue forecasting for Lucro ML."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Sequence

from .models import RevenueForecast, Sale
from .periods import trailing_months

# Months averaged for the forecast
WINDOW_MONTHS = 3
PESSIMISTIC_FACTOR = Decimal("0.85")
OPTIMISTIC_FACTOR = Decimal("1.15")


def forecast_revenue(monthly_revenues: Sequence[Decimal]) -> RevenueForecast:
    """Project next month's revenue as a +/-15% band around the recent average."""
    recent = list(monthly_revenues)[-WINDOW_MONTHS:]
    if not recent:
        return RevenueForecast()

    mean = sum(recent, Decimal("0")) / len(recent)
    return RevenueForecast(
        pessimistic=mean * PESSIMISTIC_FACTOR,
        realistic=mean,
        optimistic=mean * OPTIMISTIC_FACTOR,
    )


def monthly_revenue_totals(
    sales: Sequence[Sale],
    months: int = WINDOW_MONTHS,
    today: date | None = None,
) -> list[Decimal]:
    """Gross revenue per calendar month for the trailing ``months``, oldest first."""
    totals = {key: Decimal("0") for key in trailing_months(months, today)}
    for sale in sales:
        key = (sale.sale_date.year, sale.sale_date.month)
        if key in totals:
            totals[key] += sale.revenue
    return list(totals.values())
