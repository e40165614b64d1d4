"""Report aggregation for Lucro ML dashboards."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterator

from .forecast import forecast_revenue, monthly_revenue_totals
from .models import (
    Campaign,
    CampaignPerformance,
    CampaignTotals,
    CostShare,
    DashboardMetrics,
    IncomeStatement,
    MonthlySummary,
    PeriodMetrics,
    Product,
    ProfitBreakdown,
    ReturnsSummary,
    RevenueForecast,
    Sale,
    SalesInsights,
)
from .periods import Period, date_range, filter_sales, previous_range, trailing_months
from .portfolio import PortfolioAnalyzer
from .profit import HUNDRED, ProfitCalculator, margin_percent

logger = logging.getLogger(__name__)


def percent_change(current: Decimal, previous: Decimal) -> Decimal:
    """Relative change in percent (0 when there is no previous value)."""
    if previous > 0:
        return (current - previous) / previous * HUNDRED
    return Decimal("0")


def _ratio_percent(part: Decimal | int, whole: Decimal | int) -> Decimal:
    if whole > 0:
        return Decimal(part) / Decimal(whole) * HUNDRED
    return Decimal("0")


class ReportBuilder:
    """Aggregates per-sale breakdowns into dashboard and report figures."""

    def __init__(self, calculator: ProfitCalculator) -> None:
        self.calculator = calculator
        self.portfolio = PortfolioAnalyzer(calculator)

    def breakdowns(
        self,
        products: list[Product],
        sales: list[Sale],
        campaigns: list[Campaign],
    ) -> Iterator[tuple[Sale, ProfitBreakdown]]:
        """Breakdown for every sale whose product can be resolved."""
        by_id = {p.id: p for p in products}
        for sale in sales:
            product = by_id.get(sale.product_id)
            if product is None:
                logger.debug(f"Skipping sale {sale.id}: unknown product {sale.product_id}")
                continue
            yield sale, self.calculator.for_sale(sale, product, campaigns)

    def period_metrics(
        self,
        products: list[Product],
        sales: list[Sale],
        campaigns: list[Campaign],
    ) -> PeriodMetrics:
        """Revenue, costs, profit and ratios over a set of sales."""
        metrics = PeriodMetrics()
        for sale, breakdown in self.breakdowns(products, sales, campaigns):
            metrics.revenue += breakdown.gross_revenue
            metrics.costs += breakdown.total_cost
            metrics.sales_count += 1
            if sale.returned:
                metrics.returns_count += 1

        metrics.profit = metrics.revenue - metrics.costs
        metrics.margin_percent = margin_percent(metrics.profit, metrics.revenue)
        if metrics.sales_count > 0:
            metrics.average_ticket = metrics.revenue / metrics.sales_count
        metrics.roi_percent = _ratio_percent(metrics.profit, metrics.costs)
        metrics.return_rate_percent = _ratio_percent(metrics.returns_count, metrics.sales_count)
        return metrics

    def dashboard(
        self,
        products: list[Product],
        sales: list[Sale],
        campaigns: list[Campaign],
        period: Period = Period.LAST_30_DAYS,
        today: date | None = None,
        custom: tuple[date, date] | None = None,
    ) -> DashboardMetrics:
        """Headline metrics for a period compared with the preceding window."""
        start, end = date_range(period, today, custom)
        prev_start, prev_end = previous_range(start, end)

        current = self.period_metrics(products, filter_sales(sales, start, end), campaigns)
        previous = self.period_metrics(
            products, filter_sales(sales, prev_start, prev_end), campaigns
        )

        return DashboardMetrics(
            current=current,
            previous=previous,
            revenue_change=percent_change(current.revenue, previous.revenue),
            costs_change=percent_change(current.costs, previous.costs),
            profit_change=percent_change(current.profit, previous.profit),
            margin_change=current.margin_percent - previous.margin_percent,
            sales_change=percent_change(
                Decimal(current.sales_count), Decimal(previous.sales_count)
            ),
        )

    def monthly_comparison(
        self,
        products: list[Product],
        sales: list[Sale],
        campaigns: list[Campaign],
        months: int = 12,
        today: date | None = None,
    ) -> list[MonthlySummary]:
        """Per calendar month figures for the trailing ``months``, oldest first."""
        summaries = {
            key: MonthlySummary(year=key[0], month=key[1])
            for key in trailing_months(months, today)
        }
        for sale, breakdown in self.breakdowns(products, sales, campaigns):
            summary = summaries.get((sale.sale_date.year, sale.sale_date.month))
            if summary is None:
                continue
            summary.revenue += breakdown.gross_revenue
            summary.costs += breakdown.total_cost
            summary.sales_count += 1

        for summary in summaries.values():
            summary.profit = summary.revenue - summary.costs
            summary.margin_percent = margin_percent(summary.profit, summary.revenue)
        return list(summaries.values())

    def cost_composition(
        self,
        products: list[Product],
        sales: list[Sale],
        campaigns: list[Campaign],
    ) -> list[CostShare]:
        """Where the money goes, with each slice's share of total costs."""
        totals = {
            "Product cost": Decimal("0"),
            "Marketplace fees": Decimal("0"),
            "Shipping": Decimal("0"),
            "Taxes": Decimal("0"),
            "Packaging": Decimal("0"),
            "Ads": Decimal("0"),
            "Returns": Decimal("0"),
        }
        for _, b in self.breakdowns(products, sales, campaigns):
            totals["Product cost"] += b.product_cost
            totals["Marketplace fees"] += b.total_marketplace_fees
            totals["Shipping"] += b.shipping_cost
            totals["Taxes"] += b.tax
            totals["Packaging"] += b.fixed_costs
            totals["Ads"] += b.ad_cost
            totals["Returns"] += b.return_cost

        grand_total = sum(totals.values(), Decimal("0"))
        return [
            CostShare(name=name, amount=amount, percent=_ratio_percent(amount, grand_total))
            for name, amount in totals.items()
        ]

    def income_statement(
        self,
        products: list[Product],
        sales: list[Sale],
        campaigns: list[Campaign],
    ) -> IncomeStatement:
        """Simplified income statement (revenue down to net profit)."""
        stmt = IncomeStatement()
        for _, b in self.breakdowns(products, sales, campaigns):
            stmt.gross_revenue += b.gross_revenue
            stmt.returns += b.return_cost
            stmt.cost_of_goods += b.product_cost
            stmt.marketplace_fees += b.total_marketplace_fees
            stmt.shipping += b.shipping_cost
            stmt.taxes += b.tax
            stmt.advertising += b.ad_cost
            stmt.packaging += b.fixed_costs

        stmt.net_revenue = stmt.gross_revenue - stmt.returns
        stmt.gross_profit = stmt.net_revenue - stmt.cost_of_goods
        stmt.net_profit = (
            stmt.gross_profit
            - stmt.marketplace_fees
            - stmt.shipping
            - stmt.taxes
            - stmt.advertising
            - stmt.packaging
        )
        stmt.margin_percent = margin_percent(stmt.net_profit, stmt.gross_revenue)
        return stmt

    def returns_summary(self, sales: list[Sale]) -> ReturnsSummary:
        """Count, cost and rate of returned sales."""
        returned = [s for s in sales if s.returned]
        return ReturnsSummary(
            count=len(returned),
            cost=sum((s.return_cost for s in returned), Decimal("0")),
            rate_percent=_ratio_percent(len(returned), len(sales)),
        )

    def campaign_performance(
        self,
        campaigns: list[Campaign],
        sales: list[Sale],
    ) -> list[CampaignPerformance]:
        """Revenue, ROI and ROAS of each campaign, best ROI first."""
        results = []
        for campaign in campaigns:
            linked = [s for s in sales if s.campaign_id == campaign.id]
            revenue = sum((s.revenue for s in linked), Decimal("0"))
            spend = campaign.total_spend
            results.append(
                CampaignPerformance(
                    campaign=campaign,
                    sales_count=len(linked),
                    revenue=revenue,
                    roi_percent=(revenue - spend) / spend * HUNDRED if spend > 0 else Decimal("0"),
                    roas=revenue / spend if spend > 0 else Decimal("0"),
                )
            )
        results.sort(key=lambda r: r.roi_percent, reverse=True)
        return results

    def campaign_totals(self, campaigns: list[Campaign], sales: list[Sale]) -> CampaignTotals:
        """Total spend, linked revenue and the unweighted mean ROI of all campaigns."""
        results = self.campaign_performance(campaigns, sales)
        if not results:
            return CampaignTotals()
        return CampaignTotals(
            spend=sum((c.total_spend for c in campaigns), Decimal("0")),
            revenue=sum((r.revenue for r in results), Decimal("0")),
            average_roi_percent=sum((r.roi_percent for r in results), Decimal("0")) / len(results),
        )

    def sales_insights(
        self,
        products: list[Product],
        sales: list[Sale],
        campaigns: list[Campaign],
    ) -> SalesInsights:
        """Best seller, most profitable and most loss-making product.

        ``biggest_loss`` stays ``None`` unless some product lost money.
        """
        summaries = self.portfolio.product_summaries(products, sales, campaigns)
        if not summaries:
            return SalesInsights()
        worst = min(summaries, key=lambda s: s.profit)
        return SalesInsights(
            best_seller=max(summaries, key=lambda s: s.units),
            most_profitable=max(summaries, key=lambda s: s.profit),
            biggest_loss=worst if worst.profit < 0 else None,
        )

    def weekday_units(self, sales: list[Sale]) -> list[int]:
        """Units sold per weekday, Monday first."""
        units = [0] * 7
        for sale in sales:
            units[sale.sale_date.weekday()] += sale.quantity
        return units

    def revenue_forecast(self, sales: list[Sale], today: date | None = None) -> RevenueForecast:
        """Forecast next month's revenue from the trailing monthly totals."""
        return forecast_revenue(monthly_revenue_totals(sales, today=today))
