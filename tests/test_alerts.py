"""Tests for alert generation."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from conftest import make_sale
from lucroml.core.alerts import AlertManager
from lucroml.core.config import AlertConfig, Settings
from lucroml.core.models import AlertSeverity, ListingType, Product, ProductStatus
from lucroml.core.profit import ProfitCalculator

TODAY = date(2026, 3, 20)


@pytest.fixture
def manager(settings: Settings, calculator: ProfitCalculator) -> AlertManager:
    return AlertManager(calculator, settings)


@pytest.fixture
def loss_product() -> Product:
    return Product(
        id="loss",
        name="Película Galaxy S24",
        sale_price=Decimal("20"),
        unit_cost=Decimal("25"),
        listing_type=ListingType.STANDARD,
    )


@pytest.fixture
def thin_margin_product() -> Product:
    # 100 - 16 fee - 6 tax - 7.95 shipping - 60 cost = 10.05% margin
    return Product(
        id="thin",
        name="Teclado",
        sale_price=Decimal("100"),
        unit_cost=Decimal("60"),
        listing_type=ListingType.PREMIUM,
        tax_rate=Decimal("6"),
        weight_kg=Decimal("0.3"),
    )


class TestCheckForAlerts:
    def test_alert_kinds(
        self,
        manager: AlertManager,
        sample_product: Product,
        loss_product: Product,
        thin_margin_product: Product,
    ) -> None:
        sales = [make_sale("p1", "12500", date(2026, 3, 5))]
        alerts = manager.check_for_alerts(
            [sample_product, loss_product, thin_margin_product], sales, today=TODAY
        )

        by_severity = {a.severity: a for a in alerts}
        assert len(alerts) == 3
        assert by_severity[AlertSeverity.CRITICAL].product_id == "loss"
        assert "minimum price" in by_severity[AlertSeverity.CRITICAL].message
        assert by_severity[AlertSeverity.WARNING].product_id == "thin"
        assert "25.0%" in by_severity[AlertSeverity.INFO].message

    def test_inactive_products_ignored(self, manager: AlertManager, loss_product: Product) -> None:
        loss_product.status = ProductStatus.INACTIVE
        alerts = manager.check_for_alerts([loss_product], [], today=TODAY)
        assert [a.severity for a in alerts] == [AlertSeverity.INFO]

    def test_disabled(self, calculator: ProfitCalculator, loss_product: Product) -> None:
        settings = Settings(alerts=AlertConfig(enabled=False))
        manager = AlertManager(calculator, settings)
        assert manager.check_for_alerts([loss_product], [], today=TODAY) == []

    def test_no_goal_no_progress_alert(self, calculator: ProfitCalculator) -> None:
        settings = Settings(monthly_revenue_goal=Decimal("0"))
        manager = AlertManager(calculator, settings)
        assert manager.check_for_alerts([], [], today=TODAY) == []


class TestAlertBookkeeping:
    def test_unread_and_dismiss(self, manager: AlertManager, loss_product: Product) -> None:
        alerts = manager.check_for_alerts([loss_product], [], today=TODAY)
        assert manager.unread_count == 2

        manager.dismiss(alerts[0].id)
        assert manager.unread_count == 1

        manager.mark_read(alerts[1])
        assert manager.get_unread_alerts() == []

    def test_mark_all_read_and_clear(self, manager: AlertManager, loss_product: Product) -> None:
        manager.check_for_alerts([loss_product], [], today=TODAY)
        manager.mark_all_read()
        assert manager.unread_count == 0

        manager.clear_all()
        assert manager.alerts == []
