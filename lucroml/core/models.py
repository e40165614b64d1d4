"""Core data models for Lucro ML."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class ListingType(str, Enum):
    """Marketplace listing tier."""

    STANDARD = "standard"
    PREMIUM = "premium"

    @classmethod
    def from_string(cls, value: str) -> "ListingType":
        """Convert string to ListingType, accepting marketplace aliases."""
        value_lower = value.strip().lower()
        if value_lower in ("classico", "clássico", "classic"):
            return cls.STANDARD
        for listing_type in cls:
            if listing_type.value == value_lower:
                return listing_type
        raise ValueError(f"Unknown listing type: {value}")


class ProductStatus(str, Enum):
    """Catalog lifecycle status."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class CampaignStatus(str, Enum):
    """Ad campaign status."""

    ACTIVE = "active"
    PAUSED = "paused"
    ENDED = "ended"


@dataclass
class Product:
    """Catalog entry."""

    id: str = ""
    sku: str = ""
    name: str = ""
    category: str = ""
    sale_price: Decimal = Decimal("0")
    unit_cost: Decimal = Decimal("0")
    packaging_cost: Decimal = Decimal("0")
    weight_kg: Decimal = Decimal("0")
    listing_type: ListingType = ListingType.PREMIUM
    uses_fulfillment: bool = False
    tax_rate: Decimal = Decimal("0")  # %
    extra_fixed_cost: Decimal = Decimal("0")  # per unit
    return_rate: Decimal = Decimal("0")  # % of revenue provisioned for returns
    status: ProductStatus = ProductStatus.ACTIVE
    created_at: date = field(default_factory=date.today)
    external_id: str = ""  # Marketplace item id


@dataclass
class Sale:
    """A sale transaction."""

    id: str = ""
    sale_date: date = field(default_factory=date.today)
    product_id: str = ""
    quantity: int = 1
    unit_price: Decimal = Decimal("0")  # Effective price after discounts
    shipping_cost: Decimal = Decimal("0")  # Shipping actually paid
    returned: bool = False
    return_cost: Decimal = Decimal("0")
    return_reason: str = ""
    campaign_id: str | None = None
    notes: str = ""
    external_id: str = ""  # Marketplace order id

    @property
    def revenue(self) -> Decimal:
        """Gross revenue of the sale."""
        return self.unit_price * self.quantity


@dataclass
class Campaign:
    """An ad investment."""

    id: str = ""
    name: str = ""
    start_date: date | None = None
    end_date: date | None = None
    total_spend: Decimal = Decimal("0")
    product_ids: list[str] = field(default_factory=list)
    status: CampaignStatus = CampaignStatus.ACTIVE


@dataclass
class ProfitBreakdown:
    """Cost and profit breakdown for a sale or a catalog unit."""

    gross_revenue: Decimal = Decimal("0")
    percentage_fee: Decimal = Decimal("0")
    fixed_fee: Decimal = Decimal("0")
    fulfillment_fee: Decimal = Decimal("0")
    total_marketplace_fees: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    product_cost: Decimal = Decimal("0")
    fixed_costs: Decimal = Decimal("0")
    shipping_cost: Decimal = Decimal("0")
    return_cost: Decimal = Decimal("0")
    ad_cost: Decimal = Decimal("0")
    total_cost: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    margin_percent: Decimal = Decimal("0")

    @property
    def is_profitable(self) -> bool:
        return self.net_profit > 0


@dataclass
class AbcEntry:
    """A product's position in the ABC (Pareto) ranking."""

    product: Product
    total_profit: Decimal = Decimal("0")
    percent: Decimal = Decimal("0")
    cumulative: Decimal = Decimal("0")
    abc_class: str = "C"  # "A", "B" or "C"


@dataclass
class RevenueForecast:
    """Next-period revenue band."""

    pessimistic: Decimal = Decimal("0")
    realistic: Decimal = Decimal("0")
    optimistic: Decimal = Decimal("0")


@dataclass
class PeriodMetrics:
    """Aggregated results for a set of sales."""

    revenue: Decimal = Decimal("0")
    costs: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")
    margin_percent: Decimal = Decimal("0")
    sales_count: int = 0
    returns_count: int = 0
    average_ticket: Decimal = Decimal("0")
    roi_percent: Decimal = Decimal("0")
    return_rate_percent: Decimal = Decimal("0")


@dataclass
class DashboardMetrics:
    """Current period metrics compared against the previous window."""

    current: PeriodMetrics = field(default_factory=PeriodMetrics)
    previous: PeriodMetrics = field(default_factory=PeriodMetrics)
    revenue_change: Decimal = Decimal("0")  # %
    costs_change: Decimal = Decimal("0")  # %
    profit_change: Decimal = Decimal("0")  # %
    margin_change: Decimal = Decimal("0")  # percentage points
    sales_change: Decimal = Decimal("0")  # %


@dataclass
class MonthlySummary:
    """Revenue, cost and profit for one calendar month."""

    year: int = 0
    month: int = 0
    revenue: Decimal = Decimal("0")
    costs: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")
    margin_percent: Decimal = Decimal("0")
    sales_count: int = 0

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass
class CostShare:
    """One slice of the cost composition."""

    name: str = ""
    amount: Decimal = Decimal("0")
    percent: Decimal = Decimal("0")  # Share of total costs


@dataclass
class IncomeStatement:
    """Simplified income statement for a period."""

    gross_revenue: Decimal = Decimal("0")
    returns: Decimal = Decimal("0")
    net_revenue: Decimal = Decimal("0")
    cost_of_goods: Decimal = Decimal("0")
    gross_profit: Decimal = Decimal("0")
    marketplace_fees: Decimal = Decimal("0")
    shipping: Decimal = Decimal("0")
    taxes: Decimal = Decimal("0")
    advertising: Decimal = Decimal("0")
    packaging: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    margin_percent: Decimal = Decimal("0")


@dataclass
class ReturnsSummary:
    """Returns within a period."""

    count: int = 0
    cost: Decimal = Decimal("0")
    rate_percent: Decimal = Decimal("0")


@dataclass
class CampaignPerformance:
    """Return on an ad campaign."""

    campaign: Campaign
    sales_count: int = 0
    revenue: Decimal = Decimal("0")
    roi_percent: Decimal = Decimal("0")
    roas: Decimal = Decimal("0")


@dataclass
class CampaignTotals:
    """Spend and return across all campaigns."""

    spend: Decimal = Decimal("0")
    revenue: Decimal = Decimal("0")
    average_roi_percent: Decimal = Decimal("0")


@dataclass
class ProductSummary:
    """Realized results for one product."""

    product: Product
    profit: Decimal = Decimal("0")
    units: int = 0
    returns: int = 0


@dataclass
class SalesInsights:
    """Standout products for a period."""

    best_seller: ProductSummary | None = None
    most_profitable: ProductSummary | None = None
    biggest_loss: ProductSummary | None = None


@dataclass
class LossProduct:
    """Catalog product whose unit economics lose money."""

    product: Product
    breakdown: ProfitBreakdown
    minimum_price: Decimal = Decimal("0")


class AlertSeverity(str, Enum):
    """Alert severity."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Alert:
    """A dashboard alert."""

    id: str = ""
    severity: AlertSeverity = AlertSeverity.INFO
    title: str = ""
    message: str = ""
    product_id: str | None = None
    created_at: datetime = field(default_factory=datetime.now)
    is_read: bool = False
    is_dismissed: bool = False


@dataclass
class ImportResult:
    """Result of a CSV import operation."""

    success: bool = False
    batch_id: str = ""
    items_imported: int = 0
    items_skipped: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
