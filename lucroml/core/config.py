"""Configuration management for Lucro ML."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import ListingType

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_dir = Path.home() / ".lucroml"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


class FixedFeeTier(BaseModel):
    """Fixed marketplace fee charged from ``min_price`` upward."""

    min_price: Decimal
    amount: Decimal


def _default_fixed_fee_tiers() -> list[FixedFeeTier]:
    return [
        FixedFeeTier(min_price=Decimal("12.50"), amount=Decimal("6.25")),
        FixedFeeTier(min_price=Decimal("29.01"), amount=Decimal("6.50")),
        FixedFeeTier(min_price=Decimal("50.01"), amount=Decimal("6.75")),
        FixedFeeTier(min_price=Decimal("79"), amount=Decimal("0")),
    ]


class FeeConfig(BaseModel):
    """Marketplace fee table."""

    standard_rate: Decimal = Decimal("11")  # % of revenue
    premium_rate: Decimal = Decimal("16")  # % of revenue
    fixed_fee_per_sale: Decimal = Decimal("5")
    fulfillment_surcharge: Decimal = Decimal("6")  # per unit
    # Below the first tier the fixed fee is a share of the price
    low_price_fee_rate: Decimal = Decimal("0.50")
    fixed_fee_tiers: list[FixedFeeTier] = Field(default_factory=_default_fixed_fee_tiers)

    @field_validator("fixed_fee_tiers")
    @classmethod
    def _tiers_ascending(cls, tiers: list[FixedFeeTier]) -> list[FixedFeeTier]:
        if not tiers:
            raise ValueError("fixed_fee_tiers must not be empty")
        for lower, upper in zip(tiers, tiers[1:]):
            if upper.min_price <= lower.min_price:
                raise ValueError(
                    f"fixed_fee_tiers must be strictly ascending: "
                    f"{upper.min_price} follows {lower.min_price}"
                )
        return tiers

    def rate_for(self, listing_type: ListingType) -> Decimal:
        """Percentage fee for a listing type."""
        if listing_type == ListingType.PREMIUM:
            return self.premium_rate
        return self.standard_rate


class WeightBand(BaseModel):
    """Gross shipping cost for weights in ``[min_kg, max_kg)``."""

    min_kg: Decimal
    max_kg: Decimal
    cost: Decimal

    @model_validator(mode="after")
    def _check_bounds(self) -> "WeightBand":
        if self.max_kg <= self.min_kg:
            raise ValueError(f"Weight band max_kg ({self.max_kg}) must exceed min_kg ({self.min_kg})")
        return self


def _default_weight_bands() -> list[WeightBand]:
    return [
        WeightBand(min_kg=Decimal("0"), max_kg=Decimal("0.5"), cost=Decimal("15.90")),
        WeightBand(min_kg=Decimal("0.5"), max_kg=Decimal("1"), cost=Decimal("19.90")),
        WeightBand(min_kg=Decimal("1"), max_kg=Decimal("3"), cost=Decimal("25.90")),
        WeightBand(min_kg=Decimal("3"), max_kg=Decimal("5"), cost=Decimal("32.90")),
        WeightBand(min_kg=Decimal("5"), max_kg=Decimal("10"), cost=Decimal("45.90")),
    ]


class ShippingEstimateConfig(BaseModel):
    """Shipping estimate used for catalog previews."""

    mode: str = "weight_table"  # "weight_table" or "flat"
    flat_amount: Decimal = Decimal("0")
    weight_bands: list[WeightBand] = Field(default_factory=_default_weight_bands)
    free_shipping_threshold: Decimal = Decimal("79")
    seller_share: Decimal = Decimal("0.5")  # platform subsidises the rest

    @field_validator("mode")
    @classmethod
    def _known_mode(cls, value: str) -> str:
        if value not in ("weight_table", "flat"):
            raise ValueError(f"Unknown shipping estimate mode: {value}")
        return value


class AlertConfig(BaseModel):
    """Alert configuration."""

    enabled: bool = True
    loss_products: bool = True
    below_target_margin: bool = True
    revenue_goal_progress: bool = True


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=str(get_config_dir() / ".env"),
        env_file_encoding="utf-8",
        env_prefix="LUCROML_",
        extra="ignore",
    )

    # Store
    store_name: str = "Minha Loja ML"
    company_type: str = "simples_nacional"  # MEI, simples_nacional, lucro_presumido, lucro_real

    # Catalog defaults
    default_tax_rate: Decimal = Decimal("6")
    default_listing_type: ListingType = ListingType.PREMIUM
    default_packaging_cost: Decimal = Decimal("2.50")

    # Goals
    min_margin_target: Decimal = Decimal("15")  # %
    monthly_revenue_goal: Decimal = Decimal("50000")

    # Fees and shipping
    fees: FeeConfig = Field(default_factory=FeeConfig)
    shipping: ShippingEstimateConfig = Field(default_factory=ShippingEstimateConfig)

    ad_cost_allocation: str = "campaign_count"  # "campaign_count" or "linked_sales"

    alerts: AlertConfig = Field(default_factory=AlertConfig)

    log_level: str = "INFO"

    def save(self) -> None:
        """Save settings to the config file."""
        config_path = get_config_dir() / "settings.json"
        data = self.model_dump(mode="json")
        # Convert Decimal to string for JSON serialization
        data = self._convert_decimals(data)
        with open(config_path, "w") as f:
            json.dump(data, f, indent=2)

    def _convert_decimals(self, obj: Any) -> Any:
        """Recursively convert Decimal to string for JSON serialization."""
        if isinstance(obj, Decimal):
            return str(obj)
        elif isinstance(obj, dict):
            return {k: self._convert_decimals(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._convert_decimals(item) for item in obj]
        return obj

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from the config file or create defaults."""
        config_path = get_config_dir() / "settings.json"
        env_path = get_config_dir() / ".env"

        # Start with defaults
        settings = cls()

        # Load from JSON if exists
        if config_path.exists():
            try:
                with open(config_path) as f:
                    data = json.load(f)
                settings = cls.model_validate(data)
            except (OSError, ValueError) as e:
                logger.warning(f"Ignoring unreadable settings file {config_path}: {e}")

        # Override store-level settings from .env if present
        if env_path.exists():
            from dotenv import dotenv_values

            env_vars = dotenv_values(env_path)
            if env_vars.get("LUCROML_STORE_NAME"):
                settings.store_name = env_vars["LUCROML_STORE_NAME"]
            if env_vars.get("LUCROML_LOG_LEVEL"):
                settings.log_level = env_vars["LUCROML_LOG_LEVEL"]
            if env_vars.get("LUCROML_AD_COST_ALLOCATION"):
                settings.ad_cost_allocation = env_vars["LUCROML_AD_COST_ALLOCATION"]

        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings
