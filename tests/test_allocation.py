"""Tests for ad spend allocation."""

from decimal import Decimal

import pytest

from lucroml.core.allocation import (
    CampaignCountAllocation,
    LinkedSalesAllocation,
    build_allocation,
)
from lucroml.core.config import Settings
from lucroml.core.models import Campaign, Sale


class TestCampaignCountAllocation:
    def test_spend_split_by_campaign_count(self, campaigns: list[Campaign]) -> None:
        allocation = CampaignCountAllocation()
        assert allocation.cost_for(Sale(campaign_id="c2"), campaigns) == Decimal("200")

    def test_single_campaign(self) -> None:
        campaign = Campaign(id="c1", total_spend=Decimal("300"))
        assert CampaignCountAllocation().cost_for(Sale(campaign_id="c1"), [campaign]) == Decimal("300")

    def test_no_campaign(self, campaigns: list[Campaign]) -> None:
        assert CampaignCountAllocation().cost_for(Sale(), campaigns) == Decimal("0")

    def test_unknown_campaign(self, campaigns: list[Campaign]) -> None:
        sale = Sale(campaign_id="missing")
        assert CampaignCountAllocation().cost_for(sale, campaigns) == Decimal("0")

    def test_empty_campaign_list(self) -> None:
        assert CampaignCountAllocation().cost_for(Sale(campaign_id="c1"), []) == Decimal("0")


class TestLinkedSalesAllocation:
    def test_spend_split_by_linked_sales(self, campaigns: list[Campaign]) -> None:
        history = [Sale(campaign_id="c1") for _ in range(5)] + [Sale(campaign_id="c2")]
        allocation = LinkedSalesAllocation(history)

        assert allocation.cost_for(history[0], campaigns) == Decimal("200")
        assert allocation.cost_for(history[-1], campaigns) == Decimal("400")

    def test_sale_outside_history_carries_full_spend(self, campaigns: list[Campaign]) -> None:
        allocation = LinkedSalesAllocation([])
        assert allocation.cost_for(Sale(campaign_id="c1"), campaigns) == Decimal("1000")


class TestBuildAllocation:
    def test_default_is_campaign_count(self, settings: Settings) -> None:
        assert isinstance(build_allocation(settings), CampaignCountAllocation)

    def test_linked_sales(self) -> None:
        settings = Settings(ad_cost_allocation="linked_sales")
        assert isinstance(build_allocation(settings, []), LinkedSalesAllocation)

    def test_linked_sales_needs_history(self) -> None:
        settings = Settings(ad_cost_allocation="linked_sales")
        with pytest.raises(ValueError):
            build_allocation(settings)

    def test_unknown_mode(self) -> None:
        settings = Settings(ad_cost_allocation="per_click")
        with pytest.raises(ValueError):
            build_allocation(settings)
