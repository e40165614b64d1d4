"""Marketplace fee schedule for Lucro ML."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from .models import ListingType

if TYPE_CHECKING:
    from .config import FixedFeeTier, Settings


class FeeSchedule:
    """Resolves fixed fees and estimated shipping from the configured tables."""

    def __init__(self, settings: Settings) -> None:
        """Initialize with settings."""
        self.settings = settings
        self.fee_config = settings.fees
        self.shipping_config = settings.shipping

    def get_tier(self, price: Decimal) -> FixedFeeTier | None:
        """Get the fixed fee tier for a price.

        Tiers are checked from the highest threshold down, so a price equal
        to a breakpoint belongs to the higher tier. Returns None below the
        lowest tier, where the fee is a share of the price instead.
        """
        for tier in reversed(self.fee_config.fixed_fee_tiers):
            if price >= tier.min_price:
                return tier
        return None

    def fixed_fee(self, price: Decimal) -> Decimal:
        """Fixed marketplace fee charged per unit sold at ``price``."""
        tier = self.get_tier(price)
        if tier is None:
            return price * self.fee_config.low_price_fee_rate
        return tier.amount

    def percentage_rate(self, listing_type: ListingType) -> Decimal:
        """Percentage fee (in %) for a listing type."""
        return self.fee_config.rate_for(listing_type)

    def gross_shipping(self, weight_kg: Decimal) -> Decimal:
        """Full shipping cost from the flat amount or the weight table."""
        if self.shipping_config.mode == "flat":
            return self.shipping_config.flat_amount

        for band in self.shipping_config.weight_bands:
            if band.min_kg <= weight_kg < band.max_kg:
                return band.cost
        return Decimal("0")

    def estimated_shipping(self, price: Decimal, weight_kg: Decimal) -> Decimal:
        """Seller's share of shipping for a catalog preview.

        Below the free-shipping threshold the buyer pays shipping. At or above
        it the platform subsidises part of the gross cost and the seller pays
        the rest.
        """
        if price < self.shipping_config.free_shipping_threshold:
            return Decimal("0")
        return self.gross_shipping(weight_kg) * self.shipping_config.seller_share
