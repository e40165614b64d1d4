"""Marketplace payload mapping for Lucro ML."""

from .mapper import item_to_product, merge_products, merge_sales, order_to_sale

__all__ = [
    "item_to_product",
    "order_to_sale",
    "merge_products",
    "merge_sales",
]
