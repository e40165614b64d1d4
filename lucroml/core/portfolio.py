"""Portfolio analysis (ABC curve, product rankings) for Lucro ML."""

from __future__ import annotations

from decimal import Decimal

from .models import AbcEntry, Campaign, LossProduct, Product, ProductSummary, Sale
from .profit import HUNDRED, ProfitCalculator


class PortfolioAnalyzer:
    """Ranks products by the profit they generate."""

    # Cumulative profit share cutoffs (in %)
    CLASS_A_CUTOFF = Decimal("80")
    CLASS_B_CUTOFF = Decimal("95")

    def __init__(self, calculator: ProfitCalculator) -> None:
        self.calculator = calculator

    def abc_class(self, cumulative: Decimal) -> str:
        """Classify a cumulative share of profit."""
        if cumulative <= self.CLASS_A_CUTOFF:
            return "A"
        if cumulative <= self.CLASS_B_CUTOFF:
            return "B"
        return "C"

    def total_profit(
        self,
        product: Product,
        sales: list[Sale],
        campaigns: list[Campaign],
    ) -> Decimal:
        """Sum of realized net profit over a product's sales."""
        total = Decimal("0")
        for sale in sales:
            if sale.product_id == product.id:
                total += self.calculator.for_sale(sale, product, campaigns).net_profit
        return total

    def classify(
        self,
        products: list[Product],
        sales: list[Sale],
        campaigns: list[Campaign],
    ) -> list[AbcEntry]:
        """Build the ABC curve, most profitable product first.

        Products without positive total profit are left out of the ranking.
        """
        profits = [
            (product, self.total_profit(product, sales, campaigns)) for product in products
        ]
        ranked = sorted(
            ((p, total) for p, total in profits if total > 0),
            key=lambda item: item[1],
            reverse=True,
        )

        grand_total = sum((total for _, total in ranked), Decimal("0"))
        cumulative = Decimal("0")
        entries: list[AbcEntry] = []
        for product, total in ranked:
            percent = (total / grand_total) * HUNDRED if grand_total > 0 else Decimal("0")
            cumulative += percent
            entries.append(
                AbcEntry(
                    product=product,
                    total_profit=total,
                    percent=percent,
                    cumulative=cumulative,
                    abc_class=self.abc_class(cumulative),
                )
            )
        return entries

    def product_summaries(
        self,
        products: list[Product],
        sales: list[Sale],
        campaigns: list[Campaign],
    ) -> list[ProductSummary]:
        """Realized profit, units and returns for every product that sold.

        Sales referencing unknown products are ignored.
        """
        by_id = {p.id: p for p in products}
        summaries: dict[str, ProductSummary] = {}
        for sale in sales:
            product = by_id.get(sale.product_id)
            if product is None:
                continue
            summary = summaries.get(product.id)
            if summary is None:
                summary = summaries[product.id] = ProductSummary(product=product)
            summary.profit += self.calculator.for_sale(sale, product, campaigns).net_profit
            summary.units += sale.quantity
            if sale.returned:
                summary.returns += 1
        return list(summaries.values())

    def top_products(
        self,
        products: list[Product],
        sales: list[Sale],
        campaigns: list[Campaign],
        limit: int = 5,
    ) -> list[ProductSummary]:
        """Most profitable products by realized profit."""
        summaries = self.product_summaries(products, sales, campaigns)
        summaries.sort(key=lambda s: s.profit, reverse=True)
        return summaries[:limit]

    def loss_products(self, products: list[Product]) -> list[LossProduct]:
        """Catalog products whose unit preview has a negative margin, worst first."""
        losses: list[LossProduct] = []
        for product in products:
            breakdown = self.calculator.for_product(product)
            if breakdown.margin_percent < 0:
                losses.append(
                    LossProduct(
                        product=product,
                        breakdown=breakdown,
                        minimum_price=self.calculator.minimum_price(product),
                    )
                )
        losses.sort(key=lambda loss: loss.breakdown.net_profit)
        return losses
