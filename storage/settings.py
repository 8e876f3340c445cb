"""User settings for SpeedMeter."""
import json
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from config import INTERVALS, STORAGE, get_logger
from config.exceptions import ConfigurationError

logger = get_logger(__name__)


@dataclass
class AppSettings:
    """Application settings."""
    update_interval: float = INTERVALS.SAMPLE_SECONDS  # Seconds between samples
    show_in_menu_bar: bool = True     # Live rates in the menu bar title
    launch_at_login: bool = False

    def to_dict(self) -> dict:
        return {
            "update_interval": self.update_interval,
            "show_in_menu_bar": self.show_in_menu_bar,
            "launch_at_login": self.launch_at_login,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'AppSettings':
        return cls(
            update_interval=float(data.get("update_interval", INTERVALS.SAMPLE_SECONDS)),
            show_in_menu_bar=bool(data.get("show_in_menu_bar", True)),
            launch_at_login=bool(data.get("launch_at_login", False)),
        )


def validate_update_interval(seconds: float) -> float:
    """Check an interval against the allowed range and step.

    Raises:
        ConfigurationError: If the interval is out of range or off-step.
    """
    seconds = float(seconds)
    if not INTERVALS.SAMPLE_MIN_SECONDS <= seconds <= INTERVALS.SAMPLE_MAX_SECONDS:
        raise ConfigurationError(
            "Update interval out of range",
            {
                "value": seconds,
                "min": INTERVALS.SAMPLE_MIN_SECONDS,
                "max": INTERVALS.SAMPLE_MAX_SECONDS,
            },
        )
    steps = seconds / INTERVALS.SAMPLE_STEP_SECONDS
    if abs(steps - round(steps)) > 1e-9:
        raise ConfigurationError(
            "Update interval must be a multiple of the step",
            {"value": seconds, "step": INTERVALS.SAMPLE_STEP_SECONDS},
        )
    return seconds


def update_interval_options() -> List[float]:
    """All selectable update intervals, ascending."""
    count = int(round(
        (INTERVALS.SAMPLE_MAX_SECONDS - INTERVALS.SAMPLE_MIN_SECONDS)
        / INTERVALS.SAMPLE_STEP_SECONDS
    ))
    return [
        INTERVALS.SAMPLE_MIN_SECONDS + i * INTERVALS.SAMPLE_STEP_SECONDS
        for i in range(count + 1)
    ]


class SettingsManager:
    """Manages application settings."""

    DEFAULT_SETTINGS_FILE = STORAGE.SETTINGS_FILE

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir
        self.settings_file = data_dir / self.DEFAULT_SETTINGS_FILE
        self._lock = threading.Lock()
        self._settings: AppSettings = AppSettings()
        self._load()

    def _load(self) -> None:
        """Load settings from file."""
        if not self.settings_file.exists():
            self._settings = AppSettings()
            return

        try:
            with open(self.settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            settings = AppSettings.from_dict(data)
            validate_update_interval(settings.update_interval)
            self._settings = settings
        except (json.JSONDecodeError, OSError, AttributeError, TypeError, ValueError,
                ConfigurationError) as e:
            logger.warning(f"Could not load settings, using defaults: {e}")
            self._settings = AppSettings()

    def _save(self) -> None:
        """Save settings to file."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, 'w', encoding='utf-8') as f:
                json.dump(self._settings.to_dict(), f, indent=2)
        except OSError as e:
            logger.error(f"Error saving settings: {e}")

    def get_settings(self) -> AppSettings:
        return AppSettings.from_dict(self._settings.to_dict())

    # === Update interval ===

    def get_update_interval(self) -> float:
        return self._settings.update_interval

    def set_update_interval(self, seconds: float) -> None:
        """Set the sampling interval.

        Raises:
            ConfigurationError: If the interval is not an allowed option.
        """
        seconds = validate_update_interval(seconds)
        with self._lock:
            self._settings.update_interval = seconds
            self._save()

    # === Menu bar title ===

    def get_show_in_menu_bar(self) -> bool:
        return self._settings.show_in_menu_bar

    def set_show_in_menu_bar(self, enabled: bool) -> None:
        with self._lock:
            self._settings.show_in_menu_bar = bool(enabled)
            self._save()

    # === Launch at login ===

    def get_launch_at_login(self) -> bool:
        return self._settings.launch_at_login

    def set_launch_at_login(self, enabled: bool) -> None:
        with self._lock:
            self._settings.launch_at_login = bool(enabled)
            self._save()


def get_settings_manager(data_dir: Optional[Path] = None) -> SettingsManager:
    """Create a settings manager for the data directory."""
    if data_dir is None:
        data_dir = Path.home() / STORAGE.DATA_DIR_NAME
    return SettingsManager(data_dir)
