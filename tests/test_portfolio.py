"""Tests for portfolio analysis."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from conftest import make_product, make_sale
from lucroml.core.models import ListingType, Product
from lucroml.core.portfolio import PortfolioAnalyzer
from lucroml.core.profit import ProfitCalculator

DAY = date(2026, 3, 10)


@pytest.fixture
def analyzer(plain_calculator: ProfitCalculator) -> PortfolioAnalyzer:
    return PortfolioAnalyzer(plain_calculator)


class TestAbcClass:
    def test_cutoffs(self, analyzer: PortfolioAnalyzer) -> None:
        assert analyzer.abc_class(Decimal("80")) == "A"
        assert analyzer.abc_class(Decimal("80.01")) == "B"
        assert analyzer.abc_class(Decimal("95")) == "B"
        assert analyzer.abc_class(Decimal("95.01")) == "C"


class TestClassify:
    """Tests for the ABC curve."""

    def test_ranking(self, analyzer: PortfolioAnalyzer) -> None:
        products = [make_product(pid, "1000") for pid in ("a", "b", "c", "d")]
        sales = [
            make_sale("c", "60", DAY),
            make_sale("a", "700", DAY),
            make_sale("d", "40", DAY),
            make_sale("b", "200", DAY),
        ]
        entries = analyzer.classify(products, sales, [])

        assert [e.product.id for e in entries] == ["a", "b", "c", "d"]
        assert [e.abc_class for e in entries] == ["A", "B", "C", "C"]
        assert entries[0].percent == Decimal("70")
        assert entries[1].cumulative == Decimal("90")
        assert entries[-1].cumulative == Decimal("100")

    def test_boundaries_are_inclusive(self, analyzer: PortfolioAnalyzer) -> None:
        products = [make_product(pid, "1000") for pid in ("a", "b", "c")]
        sales = [
            make_sale("a", "800", DAY),
            make_sale("b", "150", DAY),
            make_sale("c", "50", DAY),
        ]
        entries = analyzer.classify(products, sales, [])

        assert [e.abc_class for e in entries] == ["A", "B", "C"]

    def test_profit_summed_across_sales(self, analyzer: PortfolioAnalyzer) -> None:
        products = [make_product("a", "100", unit_cost="40")]
        sales = [make_sale("a", "100", DAY), make_sale("a", "90", date(2026, 3, 11))]
        entries = analyzer.classify(products, sales, [])

        assert entries[0].total_profit == Decimal("110")

    def test_losing_and_unsold_products_excluded(self, analyzer: PortfolioAnalyzer) -> None:
        products = [
            make_product("a", "100"),
            make_product("loss", "10", unit_cost="50"),
            make_product("idle", "10"),
        ]
        sales = [make_sale("a", "100", DAY), make_sale("loss", "10", DAY)]
        entries = analyzer.classify(products, sales, [])

        assert [e.product.id for e in entries] == ["a"]
        # A lone ranked product holds 100% of the cumulative profit
        assert entries[0].cumulative == Decimal("100")
        assert entries[0].abc_class == "C"

    def test_no_sales(self, analyzer: PortfolioAnalyzer) -> None:
        assert analyzer.classify([make_product("a", "100")], [], []) == []


class TestProductSummaries:
    def test_summaries(self, analyzer: PortfolioAnalyzer) -> None:
        products = [make_product("a", "100", unit_cost="40"), make_product("b", "50")]
        sales = [
            make_sale("a", "100", DAY, quantity=2),
            make_sale("a", "100", date(2026, 3, 12), returned=True, return_cost=Decimal("15")),
            make_sale("b", "50", DAY),
            make_sale("ghost", "10", DAY),
        ]
        summaries = {s.product.id: s for s in analyzer.product_summaries(products, sales, [])}

        assert set(summaries) == {"a", "b"}
        assert summaries["a"].units == 3
        assert summaries["a"].returns == 1
        # 200 - 80 + 100 - 40 - 15
        assert summaries["a"].profit == Decimal("165")

    def test_top_products(self, analyzer: PortfolioAnalyzer) -> None:
        products = [make_product(pid, "100") for pid in ("a", "b", "c")]
        sales = [
            make_sale("a", "10", DAY),
            make_sale("b", "30", DAY),
            make_sale("c", "20", DAY),
        ]
        top = analyzer.top_products(products, sales, [], limit=2)

        assert [s.product.id for s in top] == ["b", "c"]


class TestLossProducts:
    def test_loss_products_worst_first(self, calculator: ProfitCalculator, sample_product: Product) -> None:
        analyzer = PortfolioAnalyzer(calculator)
        small_loss = Product(
            id="small",
            sale_price=Decimal("20"),
            unit_cost=Decimal("13"),
            listing_type=ListingType.STANDARD,
        )
        big_loss = Product(
            id="big",
            sale_price=Decimal("20"),
            unit_cost=Decimal("30"),
            listing_type=ListingType.STANDARD,
        )
        losses = analyzer.loss_products([sample_product, small_loss, big_loss])

        assert [loss.product.id for loss in losses] == ["big", "small"]
        assert all(loss.breakdown.margin_percent < 0 for loss in losses)
        assert losses[0].minimum_price > big_loss.sale_price
