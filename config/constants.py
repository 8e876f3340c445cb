"""Centralized constants and configuration for SpeedMeter.

This module contains all magic numbers, strings, and configuration values
used across the sampler, the usage accumulator and the menu bar UI.

Usage:
    from config.constants import INTERVALS, STORAGE, USAGE_KEYS

    # Access values
    sample_interval = INTERVALS.SAMPLE_SECONDS
    today_key = USAGE_KEYS.TODAY
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Intervals:
    """Time intervals for various operations (in seconds)."""
    # Sampler cadence
    SAMPLE_SECONDS: float = 1.0
    SAMPLE_MIN_SECONDS: float = 0.5
    SAMPLE_MAX_SECONDS: float = 5.0
    SAMPLE_STEP_SECONDS: float = 0.5

    # UI refresh cadence (reads only)
    TITLE_REFRESH_SECONDS: float = 1.0
    MENU_REFRESH_SECONDS: float = 2.0

    # Subprocess timeouts
    SUBPROCESS_TIMEOUT_SECONDS: float = 5.0


@dataclass(frozen=True)
class StorageConfig:
    """Storage and file-related configuration."""
    # Directory and file names
    DATA_DIR_NAME: str = ".speedmeter"
    USAGE_FILE: str = "usage.json"
    SETTINGS_FILE: str = "settings.json"
    LOG_FILE: str = "speedmeter.log"
    STDOUT_LOG: str = "stdout.log"
    STDERR_LOG: str = "stderr.log"

    # Log rotation
    LOG_MAX_BYTES: int = 5_000_000  # 5MB
    LOG_BACKUP_COUNT: int = 3

    # Dashboard renders
    DASHBOARD_TEMP_DIR: str = "speedmeter-dashboard"


@dataclass(frozen=True)
class UsageKeys:
    """Persistence keys owned by the usage accumulator."""
    TODAY: str = "usage.today"
    WEEK: str = "usage.week"
    MONTH: str = "usage.month"
    YEAR: str = "usage.year"
    ALL_TIME: str = "usage.alltime"
    LAST_UPDATE: str = "usage.lastUpdate"


@dataclass(frozen=True)
class UIConfig:
    """UI-related configuration."""
    APP_NAME: str = "SpeedMeter"
    PLACEHOLDER_TITLE: str = "↓ 0.0 B/s ↑ 0.0 B/s"

    # Dashboard chart
    HISTORY_SIZE: int = 60  # Last 60 samples
    CHART_SIZE: Tuple[float, float] = (10.0, 7.0)
    CHART_DPI: int = 100
    DOWNLOAD_COLOR: str = "#007AFF"  # Blue
    UPLOAD_COLOR: str = "#34C759"    # Green


@dataclass(frozen=True)
class LaunchAgentConfig:
    """Launch agent configuration."""
    AGENT_LABEL: str = "com.speedmeter.app"
    AGENT_FILENAME: str = "com.speedmeter.app.plist"


# Global instances - import these
INTERVALS = Intervals()
STORAGE = StorageConfig()
USAGE_KEYS = UsageKeys()
UI = UIConfig()
LAUNCH_AGENT = LaunchAgentConfig()
