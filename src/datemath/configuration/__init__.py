"""Configuration loading utilities for datemath."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    DateMathSettings,
    Settings,
    bootstrap_settings,
    load_settings,
    save_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DateMathSettings",
    "Settings",
    "bootstrap_settings",
    "load_settings",
    "save_settings",
]
