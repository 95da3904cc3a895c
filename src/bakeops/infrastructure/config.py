"""Application settings, read from ``BAKEOPS_*`` environment variables or ``.env``."""

from __future__ import annotations

from datetime import tzinfo
from functools import lru_cache
from pathlib import Path

from dateutil import tz
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bakeops.domain.exceptions import ConfigurationError


class Settings(BaseSettings):

    data_dir: Path = Field(default=Path("data"))
    log_level: str = Field(default="INFO")

    # Notification ledger
    notification_capacity: int = Field(default=100, gt=0)
    notification_storage_key: str = Field(default="admin_notifications")

    # Deal classification; None disables the low-price rule
    low_price_deal_threshold: float | None = Field(default=1.0)
    deal_price_tolerance: float = Field(default=0.01, gt=0)

    # Timestamps without an offset are read in this zone
    naive_timestamp_timezone: str = Field(default="UTC")
    display_timezone: str = Field(default="UTC")

    # View timers
    refresh_interval_seconds: float = Field(default=30.0, gt=0)
    elapsed_tick_seconds: float = Field(default=1.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="BAKEOPS_", env_file=".env", extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    def zone(self, name: str) -> tzinfo:
        """Resolve a zone name such as 'UTC' or 'Asia/Kolkata'."""
        zone = tz.gettz(name)
        if zone is None:
            raise ConfigurationError(f"Unknown timezone {name!r}")
        return zone


@lru_cache
def get_settings() -> Settings:
    return Settings()
