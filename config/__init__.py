"""Configuration module for SpeedMeter.

Provides centralized configuration, logging and exceptions.
"""
from config.constants import (
    INTERVALS,
    LAUNCH_AGENT,
    STORAGE,
    UI,
    USAGE_KEYS,
    Intervals,
    LaunchAgentConfig,
    StorageConfig,
    UIConfig,
    UsageKeys,
)
from config.exceptions import (
    ConfigurationError,
    SampleError,
    SpeedMeterError,
    StorageError,
)
from config.logging_config import get_logger, setup_logging

__all__ = [
    # Constants
    "INTERVALS",
    "STORAGE",
    "USAGE_KEYS",
    "UI",
    "LAUNCH_AGENT",
    "Intervals",
    "StorageConfig",
    "UsageKeys",
    "UIConfig",
    "LaunchAgentConfig",
    # Exceptions
    "SpeedMeterError",
    "SampleError",
    "StorageError",
    "ConfigurationError",
    # Logging
    "setup_logging",
    "get_logger",
]
