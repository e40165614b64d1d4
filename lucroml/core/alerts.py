"""Alert generation for Lucro ML."""

from __future__ import annotations

import logging
import uuid
from collections import deque
from datetime import date, datetime
from decimal import Decimal

from .config import Settings
from .forecast import monthly_revenue_totals
from .models import Alert, AlertSeverity, Product, ProductStatus, Sale
from .portfolio import PortfolioAnalyzer
from .profit import HUNDRED, ProfitCalculator

logger = logging.getLogger(__name__)


class AlertManager:
    """Builds and keeps track of profitability alerts."""

    def __init__(self, calculator: ProfitCalculator, settings: Settings) -> None:
        self.calculator = calculator
        self.settings = settings
        self.config = settings.alerts
        self.portfolio = PortfolioAnalyzer(calculator)
        self._alerts: deque[Alert] = deque(maxlen=100)  # Keep last 100 alerts

    @property
    def alerts(self) -> list[Alert]:
        """Get all alerts."""
        return list(self._alerts)

    @property
    def unread_count(self) -> int:
        """Get count of unread alerts."""
        return sum(1 for a in self._alerts if not a.is_read and not a.is_dismissed)

    def check_for_alerts(
        self,
        products: list[Product],
        sales: list[Sale],
        today: date | None = None,
    ) -> list[Alert]:
        """Check the catalog and this month's revenue for alert conditions.

        Args:
            products: Current catalog
            sales: Sales history
            today: Reference date for the revenue goal

        Returns:
            List of alerts triggered
        """
        if not self.config.enabled:
            return []

        alerts: list[Alert] = []
        active = [p for p in products if p.status == ProductStatus.ACTIVE]

        if self.config.loss_products:
            for loss in self.portfolio.loss_products(active):
                alerts.append(
                    Alert(
                        id=uuid.uuid4().hex[:8],
                        severity=AlertSeverity.CRITICAL,
                        title=f"{loss.product.name} sells at a loss",
                        message=(
                            f"Margin {loss.breakdown.margin_percent:.1f}% at {loss.product.sale_price:.2f}; "
                            f"minimum price is {loss.minimum_price:.2f}"
                        ),
                        product_id=loss.product.id,
                        created_at=datetime.now(),
                    )
                )

        if self.config.below_target_margin:
            target = self.settings.min_margin_target
            for product in active:
                margin = self.calculator.for_product(product).margin_percent
                if Decimal("0") <= margin < target:
                    alerts.append(
                        Alert(
                            id=uuid.uuid4().hex[:8],
                            severity=AlertSeverity.WARNING,
                            title=f"{product.name} below target margin",
                            message=f"Margin {margin:.1f}% is under the {target}% target",
                            product_id=product.id,
                            created_at=datetime.now(),
                        )
                    )

        goal = self.settings.monthly_revenue_goal
        if self.config.revenue_goal_progress and goal > 0:
            month_revenue = monthly_revenue_totals(sales, months=1, today=today)[0]
            progress = month_revenue / goal * HUNDRED
            alerts.append(
                Alert(
                    id=uuid.uuid4().hex[:8],
                    severity=AlertSeverity.INFO,
                    title="Monthly revenue goal",
                    message=f"{month_revenue:.2f} of {goal:.2f} ({progress:.1f}%) reached this month",
                    created_at=datetime.now(),
                )
            )

        for alert in alerts:
            self._alerts.append(alert)
            logger.info(f"Alert: {alert.title}")

        return alerts

    def mark_read(self, alert: Alert) -> None:
        """Mark an alert as read."""
        alert.is_read = True

    def mark_all_read(self) -> None:
        """Mark all alerts as read."""
        for alert in self._alerts:
            alert.is_read = True

    def dismiss(self, alert_id: str) -> None:
        """Dismiss an alert by id."""
        for alert in self._alerts:
            if alert.id == alert_id:
                alert.is_dismissed = True

    def clear_all(self) -> None:
        """Clear all alerts."""
        self._alerts.clear()

    def get_unread_alerts(self) -> list[Alert]:
        """Get all unread alerts."""
        return [a for a in self._alerts if not a.is_read and not a.is_dismissed]
