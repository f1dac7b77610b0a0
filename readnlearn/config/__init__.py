"""
Configuration package for the ReadNLearn anchor service.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    DatabaseSettings,
    ResolverSettings,
    SecuritySettings,
    settings,
    build_settings,
    get_settings,
    reload_settings,
)
from .loader import ConfigLoader, load_config_for_environment

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "DatabaseSettings",
    "ResolverSettings",
    "SecuritySettings",
    "settings",
    "build_settings",
    "get_settings",
    "reload_settings",
    "ConfigLoader",
    "load_config_for_environment",
]
