"""Demo dataset for Lucro ML.

Generates a realistic catalog, twelve months of sales and a handful of ad
campaigns. Generation is seeded so the same ``seed`` and ``today`` always
produce the same data.
"""

from __future__ import annotations

import calendar
import random
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from lucroml.core.models import Campaign, CampaignStatus, ListingType, Product, ProductStatus, Sale

DEFAULT_SEED = 42

# sku, name, category, price, unit cost, packaging, weight kg, listing, fulfillment, return rate
DEMO_CATALOG = [
    ("LML-001", "Fone Bluetooth XZ Pro", "Eletrônicos", "129.90", "38.00", "2.50", "0.3", "premium", True, "3"),
    ("LML-002", "Smartwatch FitBand", "Eletrônicos", "189.90", "65.00", "3.00", "0.4", "premium", True, "4"),
    ("LML-003", "Carregador Turbo 65W", "Eletrônicos", "79.90", "18.00", "1.50", "0.2", "standard", False, "2"),
    ("LML-004", "Caixa de Som Portátil", "Eletrônicos", "159.90", "52.00", "4.00", "0.8", "premium", False, "3"),
    ("LML-005", "Mouse Gamer RGB", "Informática", "89.90", "28.00", "2.00", "0.25", "premium", True, "2"),
    ("LML-006", "Teclado Mecânico Compacto", "Informática", "199.90", "72.00", "4.00", "0.7", "premium", False, "2"),
    ("LML-007", "Hub USB-C 7 em 1", "Informática", "119.90", "35.00", "2.00", "0.15", "standard", False, "3"),
    ("LML-008", "Webcam Full HD", "Informática", "149.90", "48.00", "3.00", "0.3", "premium", False, "4"),
    ("LML-009", "Capa iPhone 15 Silicone", "Acessórios", "29.90", "12.00", "1.00", "0.05", "standard", False, "8"),
    ("LML-010", "Capa Samsung S24 Anti-impacto", "Acessórios", "34.90", "14.00", "1.00", "0.08", "standard", False, "6"),
    ("LML-011", "Película iPhone 15 Vidro", "Acessórios", "19.90", "8.00", "0.80", "0.03", "standard", False, "12"),
    ("LML-012", "Película Galaxy S24", "Acessórios", "14.90", "7.50", "0.80", "0.03", "standard", False, "15"),
    ("LML-013", "Suporte Veicular Magnético", "Acessórios", "23.90", "11.00", "1.50", "0.15", "standard", False, "5"),
    ("LML-014", "Carregador Wireless", "Acessórios", "59.90", "20.00", "2.00", "0.2", "premium", False, "4"),
    ("LML-015", "Cabo USB-C 2m Reforçado", "Acessórios", "39.90", "8.00", "1.00", "0.08", "standard", False, "3"),
    ("LML-016", "Luminária LED Mesa", "Casa e Decoração", "89.90", "32.00", "5.00", "1.2", "premium", False, "3"),
    ("LML-017", "Organizador Maquiagem Acrílico", "Casa e Decoração", "69.90", "22.00", "4.00", "0.8", "standard", False, "2"),
    ("LML-018", "Kit 3 Quadros Decorativos", "Casa e Decoração", "79.90", "25.00", "6.00", "2.0", "standard", False, "5"),
    ("LML-019", "Difusor de Aromas", "Casa e Decoração", "99.90", "30.00", "4.00", "0.6", "premium", False, "3"),
    ("LML-020", "Lixeira Sensor Automática", "Casa e Decoração", "149.90", "55.00", "8.00", "2.5", "premium", False, "4"),
    ("LML-021", "Garrafa Térmica 1L", "Esportes", "49.90", "15.00", "3.00", "0.5", "standard", False, "2"),
    ("LML-022", "Faixa Elástica Kit 5", "Esportes", "44.90", "8.00", "1.50", "0.3", "standard", False, "1"),
    ("LML-023", "Tapete Yoga Premium", "Esportes", "79.90", "22.00", "4.00", "1.5", "standard", False, "3"),
    ("LML-024", "Kit Chaves Precisão 25pcs", "Ferramentas", "39.90", "12.00", "2.00", "0.35", "standard", False, "1"),
    ("LML-025", "Multímetro Digital", "Ferramentas", "59.90", "18.00", "2.50", "0.4", "standard", False, "2"),
]

# Sales per month, oldest month first; the last two months carry the holiday peak
SALES_PER_MONTH = [35, 30, 38, 42, 40, 36, 33, 38, 44, 48, 72, 65]

RETURN_REASONS = ["Defeito", "Arrependimento", "Dano no Transporte"]
CENT = Decimal("0.01")


def _money(value: float) -> Decimal:
    return Decimal(str(round(value, 2))).quantize(CENT)


def demo_products(tax_rate: Decimal = Decimal("6")) -> list[Product]:
    """The demo catalog. Product ids are the lowercased SKUs."""
    products = []
    for sku, name, category, price, cost, packaging, weight, listing, full, returns in DEMO_CATALOG:
        products.append(
            Product(
                id=sku.lower(),
                sku=sku,
                name=name,
                category=category,
                sale_price=Decimal(price),
                unit_cost=Decimal(cost),
                packaging_cost=Decimal(packaging),
                weight_kg=Decimal(weight),
                listing_type=ListingType(listing),
                uses_fulfillment=full,
                tax_rate=tax_rate,
                return_rate=Decimal(returns),
                created_at=date(2024, 1, 15),
            )
        )
    return products


def _last_occurrence(today: date, month: int, day: int) -> date:
    """Most recent ``month``/``day`` on or before ``today``'s month."""
    year = today.year if today.month >= month else today.year - 1
    return date(year, month, min(day, calendar.monthrange(year, month)[1]))


def demo_campaigns(products: list[Product], today: date | None = None) -> list[Campaign]:
    """Five campaigns: two running, three finished seasonal pushes."""
    today = today or date.today()
    ids = [p.id for p in products]
    month_start = today.replace(day=1)

    black_friday = _last_occurrence(today, 11, 20)
    summer = _last_occurrence(today, 1, 1)
    december = _last_occurrence(today, 12, 1)

    return [
        Campaign(
            id="camp-001",
            name="Fones Bluetooth - Sempre",
            start_date=month_start - relativedelta(months=6),
            total_spend=Decimal("1200"),
            product_ids=ids[0:2],
            status=CampaignStatus.ACTIVE,
        ),
        Campaign(
            id="camp-002",
            name="Black Friday",
            start_date=black_friday,
            end_date=black_friday.replace(day=30),
            total_spend=Decimal("800"),
            product_ids=ids[0:8],
            status=CampaignStatus.ENDED,
        ),
        Campaign(
            id="camp-003",
            name="Smartwatch Verão",
            start_date=summer,
            end_date=summer.replace(month=3, day=31),
            total_spend=Decimal("600"),
            product_ids=ids[1:2],
            status=CampaignStatus.ENDED,
        ),
        Campaign(
            id="camp-004",
            name="Capas Dezembro",
            start_date=december,
            end_date=december.replace(day=31),
            total_spend=Decimal("450"),
            product_ids=ids[8:11],
            status=CampaignStatus.ENDED,
        ),
        Campaign(
            id="camp-005",
            name="Películas Promo",
            start_date=month_start - relativedelta(months=1),
            total_spend=Decimal("350"),
            product_ids=ids[10:13],
            status=CampaignStatus.ACTIVE,
        ),
    ]


def _campaign_for(
    product: Product,
    sale_date: date,
    campaigns: list[Campaign],
) -> Campaign | None:
    for campaign in campaigns:
        if product.id not in campaign.product_ids or campaign.start_date is None:
            continue
        if campaign.start_date <= sale_date and (
            campaign.end_date is None or sale_date <= campaign.end_date
        ):
            return campaign
    return None


def demo_sales(
    products: list[Product],
    campaigns: list[Campaign],
    today: date | None = None,
    seed: int = DEFAULT_SEED,
) -> list[Sale]:
    """Twelve months of sales ending in ``today``'s month, newest first.

    Roughly 15% of sales carry a discount, 10% sell more than one unit and
    accessories are occasionally returned. Sales of a product promoted by a
    running campaign are attributed to it about a third of the time.
    """
    rng = random.Random(seed)
    today = today or date.today()
    anchor = today.replace(day=1)
    accessory_ids = {p.id for p in products if p.category == "Acessórios"}
    active = [p for p in products if p.status == ProductStatus.ACTIVE]

    sales: list[Sale] = []
    for offset, count in enumerate(SALES_PER_MONTH):
        month_start = anchor - relativedelta(months=len(SALES_PER_MONTH) - 1 - offset)
        days_in_month = calendar.monthrange(month_start.year, month_start.month)[1]
        if month_start == anchor:
            # No sales in the future
            days_in_month = today.day

        for _ in range(count):
            product = rng.choice(active)
            sale_date = month_start.replace(day=rng.randint(1, days_in_month))
            discount = rng.uniform(0.85, 0.95) if rng.random() < 0.15 else 1.0
            quantity = rng.randint(2, 3) if rng.random() < 0.1 else 1
            returned = rng.random() < 0.05 and product.id in accessory_ids

            campaign = _campaign_for(product, sale_date, campaigns)
            campaign_id = campaign.id if campaign and rng.random() < 0.35 else None

            sales.append(
                Sale(
                    id=f"sale-{len(sales) + 1:04d}",
                    sale_date=sale_date,
                    product_id=product.id,
                    quantity=quantity,
                    unit_price=_money(float(product.sale_price) * discount),
                    shipping_cost=_money(rng.uniform(12, 35)),
                    returned=returned,
                    return_cost=_money(rng.uniform(15, 45)) if returned else Decimal("0"),
                    return_reason=rng.choice(RETURN_REASONS) if returned else "",
                    campaign_id=campaign_id,
                )
            )

    sales.sort(key=lambda s: s.sale_date, reverse=True)
    return sales


def generate_demo_data(
    today: date | None = None,
    seed: int = DEFAULT_SEED,
) -> tuple[list[Product], list[Sale], list[Campaign]]:
    """Catalog, sales and campaigns for demo mode."""
    products = demo_products()
    campaigns = demo_campaigns(products, today)
    sales = demo_sales(products, campaigns, today, seed)
    return products, sales, campaigns
