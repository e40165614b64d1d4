"""Ad spend attribution strategies for Lucro ML."""

from __future__ import annotations

from collections import Counter
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable

from .models import Campaign, Sale

if TYPE_CHECKING:
    from .config import Settings

CAMPAIGN_COUNT = "campaign_count"
LINKED_SALES = "linked_sales"


class AdCostAllocation:
    """Base class for deciding how much campaign spend a sale carries."""

    def allocate(self, campaign: Campaign, campaigns: list[Campaign]) -> Decimal:
        """Share of ``campaign`` spend charged to one linked sale."""
        raise NotImplementedError

    def cost_for(self, sale: Sale, campaigns: list[Campaign]) -> Decimal:
        """Ad cost attributed to a sale (0 when it has no known campaign)."""
        if not sale.campaign_id:
            return Decimal("0")
        campaign = next((c for c in campaigns if c.id == sale.campaign_id), None)
        if campaign is None:
            return Decimal("0")
        return self.allocate(campaign, campaigns)


class CampaignCountAllocation(AdCostAllocation):
    """Spread spend by the number of registered campaigns.

    Every linked sale carries ``total_spend / len(campaigns)`` regardless of
    how many sales the campaign actually produced.
    """

    def allocate(self, campaign: Campaign, campaigns: list[Campaign]) -> Decimal:
        return campaign.total_spend / max(1, len(campaigns))


class LinkedSalesAllocation(AdCostAllocation):
    """Spread spend evenly over the sales linked to each campaign."""

    def __init__(self, sales: Iterable[Sale]) -> None:
        self.linked_counts = Counter(s.campaign_id for s in sales if s.campaign_id)

    def allocate(self, campaign: Campaign, campaigns: list[Campaign]) -> Decimal:
        return campaign.total_spend / max(1, self.linked_counts[campaign.id])


def build_allocation(settings: Settings, sales: Iterable[Sale] | None = None) -> AdCostAllocation:
    """Create the allocation strategy selected in settings.

    ``linked_sales`` needs the sales history to count linked sales, so it
    raises ``ValueError`` when ``sales`` is not given.
    """
    mode = settings.ad_cost_allocation
    if mode == CAMPAIGN_COUNT:
        return CampaignCountAllocation()
    if mode == LINKED_SALES:
        if sales is None:
            raise ValueError("linked_sales allocation requires the sales history")
        return LinkedSalesAllocation(sales)
    raise ValueError(f"Unknown ad cost allocation: {mode}")
