"""Configuration module."""
from .settings import (
    APISettings,
    AuthSettings,
    DatabaseSettings,
    MailSettings,
    MonitoringSettings,
    Settings,
    settings,
)

__all__ = [
    "APISettings",
    "AuthSettings",
    "DatabaseSettings",
    "MailSettings",
    "MonitoringSettings",
    "Settings",
    "settings",
]
