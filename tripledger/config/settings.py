"""
Configuration Management for Trip Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The analytics package never reads it - units are always passed in
explicitly. Only the ledger service and the storage adapters consult it.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tripledger.models.records import Currency, DistanceUnit, VolumeUnit


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from TRIPLEDGER_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRIPLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Storage
    data_path: Path = Field(
        default=Path.home() / ".tripledger" / "ledger.json",
        description="JSON file holding trips, expenses and user settings"
    )

    # Defaults for a brand new ledger
    default_currency: Currency = Currency.EUR
    default_distance_unit: DistanceUnit = DistanceUnit.KILOMETERS
    default_volume_unit: VolumeUnit = VolumeUnit.LITERS

    # Validation thresholds
    future_date_tolerance_days: int = Field(
        default=1,
        ge=0,
        description="How many days in the future a record date can be"
    )
    max_record_amount: float = Field(
        default=10000.0,
        gt=0,
        description="Amounts above this are flagged as suspicious"
    )

    @field_validator("data_path")
    @classmethod
    def expand_data_path(cls, v: Path) -> Path:
        return v.expanduser()


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
