"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Catalog
    fixtures_dir: str | None = None
    base_city: str = "abidjan"

    # Day clock (hours)
    day_start_hour: float = 8.0
    max_daily_hours: float = 10.0
    local_hop_hours: float = 0.5

    # Overnight policy thresholds (hours)
    safety_threshold_hours: float = 2.0
    long_transfer_hours: float = 3.0
    detour_threshold_hours: float = 4.0
    default_travel_hours: float = 2.0

    # Fixed fees (currency-neutral units)
    airport_transfer_fee: float = 30.0

    # Proximity preference radii (km)
    morning_radius_km: float = 15.0
    afternoon_radius_km: float = 5.0

    # Budget tiers (total trip budget upper bounds)
    budget_tier_budget_max: float = 800.0
    budget_tier_mid_max: float = 2000.0

    # Budget repair
    lodging_budget_share: float = 0.7
    reconcile_activity_floor: float = 50.0
    near_budget_ratio: float = 0.8

    # Requests
    max_trip_days: int = 30

    # Reproducibility
    rng_seed: int = 42


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
