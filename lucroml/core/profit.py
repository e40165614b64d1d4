"""Profit calculation engine for Lucro ML."""

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal
from typing import TYPE_CHECKING

from .allocation import AdCostAllocation, build_allocation
from .fees import FeeSchedule
from .models import Campaign, Product, ProfitBreakdown, Sale

if TYPE_CHECKING:
    from .config import Settings

HUNDRED = Decimal("100")


def margin_percent(net_profit: Decimal, revenue: Decimal) -> Decimal:
    """Net margin in percent of revenue (0 when there is no revenue)."""
    return (net_profit / revenue) * HUNDRED if revenue > 0 else Decimal("0")


class ProfitCalculator:
    """Computes per-sale and per-unit profit breakdowns."""

    # Price multiple used when fees and taxes eat the whole price
    UNSOLVABLE_PRICE_MULTIPLE = Decimal("3")
    PRICE_STEP = Decimal("0.10")

    def __init__(
        self,
        settings: Settings,
        ad_allocation: AdCostAllocation | None = None,
    ) -> None:
        """Initialize the calculator.

        ``ad_allocation`` overrides the strategy selected in settings. The
        ``linked_sales`` strategy needs the sales history, so build it
        through ``for_history`` or pass it in; otherwise this raises
        ``ValueError``.
        """
        self.settings = settings
        self.fees = FeeSchedule(settings)
        self.ad_allocation = ad_allocation or build_allocation(settings)

    @classmethod
    def for_history(cls, settings: Settings, sales: list[Sale]) -> "ProfitCalculator":
        """Create a calculator whose ad allocation sees the full sales history."""
        return cls(settings, build_allocation(settings, sales))

    def _build(
        self,
        revenue: Decimal,
        percentage_fee: Decimal,
        fixed_fee: Decimal,
        fulfillment_fee: Decimal,
        tax: Decimal,
        product_cost: Decimal,
        fixed_costs: Decimal,
        shipping_cost: Decimal,
        return_cost: Decimal,
        ad_cost: Decimal,
    ) -> ProfitBreakdown:
        total_fees = percentage_fee + fixed_fee + fulfillment_fee
        total_cost = (
            total_fees
            + tax
            + shipping_cost
            + product_cost
            + fixed_costs
            + return_cost
            + ad_cost
        )
        net_profit = revenue - total_cost

        return ProfitBreakdown(
            gross_revenue=revenue,
            percentage_fee=percentage_fee,
            fixed_fee=fixed_fee,
            fulfillment_fee=fulfillment_fee,
            total_marketplace_fees=total_fees,
            tax=tax,
            product_cost=product_cost,
            fixed_costs=fixed_costs,
            shipping_cost=shipping_cost,
            return_cost=return_cost,
            ad_cost=ad_cost,
            total_cost=total_cost,
            net_profit=net_profit,
            margin_percent=margin_percent(net_profit, revenue),
        )

    def for_sale(
        self,
        sale: Sale,
        product: Product,
        campaigns: list[Campaign],
    ) -> ProfitBreakdown:
        """Calculate the realized breakdown of a recorded sale.

        Shipping and returns come from what the sale recorded, not from the
        catalog estimates.
        """
        qty = sale.quantity
        revenue = sale.unit_price * qty
        rate = self.fees.percentage_rate(product.listing_type)
        surcharge = self.settings.fees.fulfillment_surcharge

        return self._build(
            revenue=revenue,
            percentage_fee=revenue * (rate / HUNDRED),
            fixed_fee=self.fees.fixed_fee(sale.unit_price) * qty,
            fulfillment_fee=surcharge * qty if product.uses_fulfillment else Decimal("0"),
            tax=revenue * (product.tax_rate / HUNDRED),
            product_cost=product.unit_cost * qty,
            # Packaging is charged once per sale, extra fixed cost per unit
            fixed_costs=product.packaging_cost + product.extra_fixed_cost * qty,
            shipping_cost=sale.shipping_cost,
            return_cost=sale.return_cost if sale.returned else Decimal("0"),
            ad_cost=self.ad_allocation.cost_for(sale, campaigns),
        )

    def for_product(self, product: Product) -> ProfitBreakdown:
        """Calculate the estimated breakdown of one unit at catalog price."""
        revenue = product.sale_price
        rate = self.fees.percentage_rate(product.listing_type)

        return self._build(
            revenue=revenue,
            percentage_fee=revenue * (rate / HUNDRED),
            fixed_fee=self.fees.fixed_fee(product.sale_price),
            fulfillment_fee=(
                self.settings.fees.fulfillment_surcharge
                if product.uses_fulfillment
                else Decimal("0")
            ),
            tax=revenue * (product.tax_rate / HUNDRED),
            product_cost=product.unit_cost,
            fixed_costs=product.packaging_cost + product.extra_fixed_cost,
            shipping_cost=self.fees.estimated_shipping(product.sale_price, product.weight_kg),
            return_cost=revenue * (product.return_rate / HUNDRED),
            ad_cost=Decimal("0"),
        )

    def minimum_price(self, product: Product) -> Decimal:
        """Lowest price (in 0.10 steps) with non-negative unit margin.

        Fixed fee and shipping are taken at the product's current price; the
        result is not re-checked against the tier it lands in.
        """
        rate = self.fees.percentage_rate(product.listing_type)
        current = product.sale_price

        fixed_costs = (
            product.unit_cost
            + product.packaging_cost
            + product.extra_fixed_cost
            + self.fees.estimated_shipping(current, product.weight_kg)
            + self.fees.fixed_fee(current)
        )
        fulfillment = (
            self.settings.fees.fulfillment_surcharge if product.uses_fulfillment else Decimal("0")
        )
        divisor = 1 - (rate / HUNDRED) - (product.tax_rate / HUNDRED)
        if divisor <= 0:
            return fixed_costs * self.UNSOLVABLE_PRICE_MULTIPLE

        price = (fixed_costs + fulfillment) / divisor
        steps = (price / self.PRICE_STEP).to_integral_value(rounding=ROUND_CEILING)
        return steps * self.PRICE_STEP
