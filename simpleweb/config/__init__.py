"""Configuration for SimpleWeb."""

from .core import DispatchSettings, LoggingSettings
from .settings import ConfigurationError, Settings, get_settings


__all__ = [
    "ConfigurationError",
    "DispatchSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]
