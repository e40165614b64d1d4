"""Core business logic for Lucro ML."""

from .config import Settings, FeeConfig, ShippingEstimateConfig, get_settings
from .models import (
    ListingType,
    ProductStatus,
    CampaignStatus,
    Product,
    Sale,
    Campaign,
    ProfitBreakdown,
    AbcEntry,
    RevenueForecast,
)
from .fees import FeeSchedule
from .allocation import AdCostAllocation, CampaignCountAllocation, LinkedSalesAllocation
from .profit import ProfitCalculator
from .portfolio import PortfolioAnalyzer
from .forecast import forecast_revenue
from .periods import Period
from .reports import ReportBuilder
from .alerts import AlertManager
from .csv_importer import CsvImporter, CsvValidationError

__all__ = [
    "Settings",
    "FeeConfig",
    "ShippingEstimateConfig",
    "get_settings",
    "ListingType",
    "ProductStatus",
    "CampaignStatus",
    "Product",
    "Sale",
    "Campaign",
    "ProfitBreakdown",
    "AbcEntry",
    "RevenueForecast",
    "FeeSchedule",
    "AdCostAllocation",
    "CampaignCountAllocation",
    "LinkedSalesAllocation",
    "ProfitCalculator",
    "PortfolioAnalyzer",
    "forecast_revenue",
    "Period",
    "ReportBuilder",
    "AlertManager",
    "CsvImporter",
    "CsvValidationError",
]
