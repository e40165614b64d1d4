"""Mapping of marketplace API payloads to Lucro ML records.

Only the payload translation lives here; fetching items and orders (and the
OAuth handshake that precedes it) is left to the caller.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from lucroml.core.config import Settings
from lucroml.core.models import ListingType, Product, ProductStatus, Sale

logger = logging.getLogger(__name__)

PREMIUM_LISTING_TYPES = {"gold_special", "gold_pro"}
DEFAULT_WEIGHT_KG = Decimal("0.5")
DEFAULT_RETURN_RATE = Decimal("3")


def _decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    if value is None:
        return default
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return default


def parse_weight_kg(dimensions: str | None) -> Decimal:
    """Weight from a ``"HxWxL,grams"`` dimensions string."""
    if not dimensions or "," not in dimensions:
        return DEFAULT_WEIGHT_KG
    grams = _decimal(dimensions.rsplit(",", 1)[1].strip(), Decimal("0"))
    if not grams.is_finite() or grams <= 0:
        return DEFAULT_WEIGHT_KG
    return grams / 1000


def _parse_date(value: str | None) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        logger.warning(f"Unparseable order date '{value}', using today")
        return date.today()


def item_to_product(item: dict, settings: Settings | None = None) -> Product:
    """Convert a marketplace item to a catalog product.

    The marketplace does not know the seller's costs, so unit and packaging
    costs start at zero for the user to fill in.
    """
    settings = settings or Settings()
    shipping = item.get("shipping") or {}
    listing_type = (
        ListingType.PREMIUM
        if item.get("listing_type_id") in PREMIUM_LISTING_TYPES
        else ListingType.STANDARD
    )

    return Product(
        id=uuid.uuid4().hex,
        sku=item.get("id") or "",
        name=item.get("title") or "Untitled",
        category=item.get("category_id") or "Other",
        sale_price=_decimal(item.get("price")),
        unit_cost=Decimal("0"),
        packaging_cost=Decimal("0"),
        weight_kg=parse_weight_kg(shipping.get("dimensions")),
        listing_type=listing_type,
        uses_fulfillment=shipping.get("logistic_type") == "fulfillment",
        tax_rate=settings.default_tax_rate,
        extra_fixed_cost=Decimal("0"),
        return_rate=DEFAULT_RETURN_RATE,
        status=ProductStatus.ACTIVE if item.get("status") == "active" else ProductStatus.INACTIVE,
        created_at=date.today(),
        external_id=item.get("id") or "",
    )


def order_to_sale(
    order: dict,
    shipping_cost: Decimal,
    product_ids: dict[str, str],
) -> Sale | None:
    """Convert a marketplace order to a sale.

    ``product_ids`` maps marketplace item ids to catalog product ids. Orders
    without items, or for items that were never imported, return None.
    Cancelled orders become returned sales costing the full order value.
    """
    order_items = order.get("order_items") or []
    if not order_items:
        return None
    order_item = order_items[0]

    item_id = (order_item.get("item") or {}).get("id")
    product_id = product_ids.get(item_id) if item_id else None
    if not product_id:
        logger.debug(f"Order {order.get('id')} references unimported item {item_id}")
        return None

    quantity = int(order_item.get("quantity") or 1)
    unit_price = _decimal(order_item.get("unit_price"))
    cancelled = order.get("status") == "cancelled"

    return Sale(
        id=uuid.uuid4().hex,
        sale_date=_parse_date(order.get("date_created")),
        product_id=product_id,
        quantity=quantity,
        unit_price=unit_price,
        shipping_cost=shipping_cost,
        returned=cancelled,
        return_cost=unit_price * quantity if cancelled else Decimal("0"),
        return_reason="Marketplace cancellation" if cancelled else "",
        external_id=str(order["id"]) if order.get("id") is not None else "",
    )


def merge_products(existing: list[Product], incoming: list[Product]) -> list[Product]:
    """Append incoming products whose marketplace id is not already in the catalog."""
    known = {p.external_id for p in existing if p.external_id}
    added = [p for p in incoming if not p.external_id or p.external_id not in known]
    return existing + added


def merge_sales(existing: list[Sale], incoming: list[Sale]) -> list[Sale]:
    """Prepend incoming sales whose marketplace order id is not already recorded."""
    known = {s.external_id for s in existing if s.external_id}
    added = [s for s in incoming if not s.external_id or s.external_id not in known]
    return added + existing
