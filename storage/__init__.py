"""Data persistence components."""

from .json_store import JsonStore
from .settings import AppSettings, SettingsManager, get_settings_manager

__all__ = [
    "AppSettings",
    "JsonStore",
    "SettingsManager",
    "get_settings_manager",
]
