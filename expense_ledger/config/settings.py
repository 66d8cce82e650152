"""
Configuration Management for Expense Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every setting has a working default, so the ledger runs with no
environment at all; variables and a .env file only override.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from expense_ledger.models.expense import TimeRange


class StorageSettings(BaseSettings):
    """Local blob store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path(".expense_ledger"),
        description="Directory holding the blob store file"
    )
    file_name: str = Field(
        default="store.json",
        min_length=1,
        description="Name of the blob store file inside data_dir"
    )
    storage_key: str = Field(
        default="expense-dashboard-data-v1",
        min_length=1,
        description="Key the expense list is stored under"
    )

    @property
    def store_path(self) -> Path:
        return self.data_dir / self.file_name


class DashboardSettings(BaseSettings):
    """Defaults for the derived dashboard view."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_time_range: TimeRange = Field(
        default=TimeRange.LAST_30_DAYS,
        description="Time range selected when none is given"
    )
    recent_limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="How many expenses the recent list shows"
    )
    trend_months: int = Field(
        default=6,
        ge=1,
        le=24,
        description="How many trailing months the trend keeps"
    )
    currency_symbol: str = Field(
        default="$",
        description="Symbol used when formatting amounts"
    )

    @field_validator("currency_symbol")
    @classmethod
    def strip_symbol(cls, v: str) -> str:
        return v.strip()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug logging"
    )


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
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def dashboard(self) -> DashboardSettings:
        return DashboardSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries describing any failure.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "dashboard", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
