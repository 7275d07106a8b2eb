"""Configuration subpackage."""

from battery_deal_tracker.config.config import (
    AppSettings,
    DealListSettings,
    LoggingSettings,
    Settings,
    StoreSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "DealListSettings",
    "LoggingSettings",
    "Settings",
    "StoreSettings",
    "get_settings",
]
