"""Configuration package."""

from tripledger.config.settings import (
    AppSettings,
    Settings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "Settings",
    "get_settings",
]
