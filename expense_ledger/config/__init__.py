"""Configuration package."""

from expense_ledger.config.settings import (
    AppSettings,
    DashboardSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "DashboardSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
