"""Pytest configuration and fixtures."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from lucroml.core.config import FeeConfig, FixedFeeTier, Settings
from lucroml.core.models import Campaign, CampaignStatus, ListingType, Product, Sale
from lucroml.core.profit import ProfitCalculator


@pytest.fixture
def settings() -> Settings:
    """Create default settings for testing."""
    return Settings()


@pytest.fixture
def zero_fee_settings() -> Settings:
    """Settings with every marketplace fee switched off.

    With untaxed, unpackaged products and free shipping a sale's net profit is
    simply its revenue minus product cost, which keeps aggregate tests readable.
    """
    return Settings(
        fees=FeeConfig(
            standard_rate=Decimal("0"),
            premium_rate=Decimal("0"),
            fulfillment_surcharge=Decimal("0"),
            fixed_fee_tiers=[FixedFeeTier(min_price=Decimal("0"), amount=Decimal("0"))],
        ),
    )


@pytest.fixture
def calculator(settings: Settings) -> ProfitCalculator:
    return ProfitCalculator(settings)


@pytest.fixture
def plain_calculator(zero_fee_settings: Settings) -> ProfitCalculator:
    return ProfitCalculator(zero_fee_settings)


@pytest.fixture
def sample_product() -> Product:
    """Premium, fulfillment-served headphones priced above free shipping."""
    return Product(
        id="p1",
        sku="LML-001",
        name="Fone Bluetooth XZ Pro",
        category="Eletrônicos",
        sale_price=Decimal("129.90"),
        unit_cost=Decimal("38.00"),
        packaging_cost=Decimal("2.50"),
        weight_kg=Decimal("0.3"),
        listing_type=ListingType.PREMIUM,
        uses_fulfillment=True,
        tax_rate=Decimal("6"),
        return_rate=Decimal("3"),
    )


@pytest.fixture
def sample_sale(sample_product: Product) -> Sale:
    return Sale(
        id="s1",
        sale_date=date(2026, 3, 10),
        product_id=sample_product.id,
        quantity=1,
        unit_price=Decimal("129.90"),
        shipping_cost=Decimal("18.00"),
    )


@pytest.fixture
def campaigns() -> list[Campaign]:
    return [
        Campaign(
            id="c1",
            name="Always on",
            start_date=date(2026, 1, 1),
            total_spend=Decimal("1000"),
            product_ids=["p1"],
            status=CampaignStatus.ACTIVE,
        ),
        Campaign(
            id="c2",
            name="Black Friday",
            start_date=date(2025, 11, 20),
            end_date=date(2025, 11, 30),
            total_spend=Decimal("400"),
            product_ids=["p1"],
            status=CampaignStatus.ENDED,
        ),
    ]


def make_product(product_id: str, price: str, unit_cost: str = "0", **kwargs) -> Product:
    """Build an untaxed, unpackaged product for aggregate tests."""
    return Product(
        id=product_id,
        sku=product_id.upper(),
        name=f"Product {product_id}",
        sale_price=Decimal(price),
        unit_cost=Decimal(unit_cost),
        **kwargs,
    )


def make_sale(product_id: str, unit_price: str, sale_date: date, **kwargs) -> Sale:
    return Sale(
        id=f"{product_id}-{sale_date.isoformat()}-{unit_price}",
        sale_date=sale_date,
        product_id=product_id,
        unit_price=Decimal(unit_price),
        **kwargs,
    )


@pytest.fixture
def sample_csv_path(tmp_path: Path) -> Path:
    """Create a sample catalog CSV file."""
    csv_content = (
        "SKU,Name,Category,SalePrice,UnitCost,PackagingCost,WeightKg,ListingType,Fulfillment,TaxRate,ReturnRate\n"
        "LML-001,Fone Bluetooth XZ Pro,Eletrônicos,129.90,38.00,2.50,0.3,premium,sim,6,3\n"
        'LML-003,Carregador Turbo 65W,Eletrônicos,"79,90",18.00,1.50,0.2,classico,nao,6,2\n'
        "LML-012,Película Galaxy S24,Acessórios,14.90,7.50,,0.03,,,,15\n"
    )
    csv_path = tmp_path / "catalog.csv"
    csv_path.write_text(csv_content, encoding="utf-8")
    return csv_path


@pytest.fixture
def invalid_csv_path(tmp_path: Path) -> Path:
    """Create a CSV missing required columns."""
    csv_content = "SKU,Name\nLML-001,Fone\n"
    csv_path = tmp_path / "invalid.csv"
    csv_path.write_text(csv_content, encoding="utf-8")
    return csv_path
