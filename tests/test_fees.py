"""Tests for the marketplace fee schedule."""

from decimal import Decimal

import pytest

from lucroml.core.config import Settings, ShippingEstimateConfig
from lucroml.core.fees import FeeSchedule
from lucroml.core.models import ListingType


@pytest.fixture
def fees(settings: Settings) -> FeeSchedule:
    return FeeSchedule(settings)


class TestFixedFee:
    """Tests for the price-tiered fixed fee."""

    @pytest.mark.parametrize(
        "price, expected",
        [
            ("200.00", "0"),
            ("79.00", "0"),
            ("78.99", "6.75"),
            ("50.01", "6.75"),
            ("50.00", "6.50"),
            ("29.01", "6.50"),
            ("29.00", "6.25"),
            ("12.50", "6.25"),
        ],
    )
    def test_tiers(self, fees: FeeSchedule, price: str, expected: str) -> None:
        assert fees.fixed_fee(Decimal(price)) == Decimal(expected)

    def test_below_lowest_tier_is_half_the_price(self, fees: FeeSchedule) -> None:
        assert fees.fixed_fee(Decimal("12.49")) == Decimal("6.245")
        assert fees.fixed_fee(Decimal("10.00")) == Decimal("5.00")

    def test_zero_price(self, fees: FeeSchedule) -> None:
        assert fees.fixed_fee(Decimal("0")) == Decimal("0")

    def test_get_tier(self, fees: FeeSchedule) -> None:
        assert fees.get_tier(Decimal("5")) is None
        assert fees.get_tier(Decimal("12.50")).amount == Decimal("6.25")
        assert fees.get_tier(Decimal("79")).min_price == Decimal("79")


class TestPercentageRate:
    def test_rates(self, fees: FeeSchedule) -> None:
        assert fees.percentage_rate(ListingType.STANDARD) == Decimal("11")
        assert fees.percentage_rate(ListingType.PREMIUM) == Decimal("16")


class TestEstimatedShipping:
    """Tests for the seller's share of shipping on catalog previews."""

    def test_free_below_threshold(self, fees: FeeSchedule) -> None:
        assert fees.estimated_shipping(Decimal("78.99"), Decimal("0.3")) == Decimal("0")

    def test_half_of_band_at_threshold(self, fees: FeeSchedule) -> None:
        assert fees.estimated_shipping(Decimal("79"), Decimal("0.3")) == Decimal("7.95")

    def test_band_lower_bound_inclusive(self, fees: FeeSchedule) -> None:
        assert fees.gross_shipping(Decimal("0.5")) == Decimal("19.90")
        assert fees.estimated_shipping(Decimal("100"), Decimal("0.5")) == Decimal("9.95")

    def test_heaviest_band(self, fees: FeeSchedule) -> None:
        assert fees.gross_shipping(Decimal("9.99")) == Decimal("45.90")

    def test_no_matching_band(self, fees: FeeSchedule) -> None:
        assert fees.gross_shipping(Decimal("10")) == Decimal("0")
        assert fees.estimated_shipping(Decimal("500"), Decimal("25")) == Decimal("0")

    def test_flat_mode(self) -> None:
        settings = Settings(
            shipping=ShippingEstimateConfig(mode="flat", flat_amount=Decimal("20"))
        )
        fees = FeeSchedule(settings)
        assert fees.estimated_shipping(Decimal("100"), Decimal("7")) == Decimal("10")
        assert fees.estimated_shipping(Decimal("50"), Decimal("7")) == Decimal("0")
