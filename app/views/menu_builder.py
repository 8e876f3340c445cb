"""Menu building utilities for SpeedMeter.

Provides helper classes for constructing the rumps dropdown menu
in a maintainable way.

Usage:
    from app.views.menu_builder import MenuBuilder

    builder = MenuBuilder()
    menu = builder.build_main_menu(app_callbacks)
"""
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional

import rumps

from config import get_logger
from monitor.stats import PeriodKind, UsageBucket
from monitor.utils import format_usage_title

logger = get_logger(__name__)

USAGE_PERIODS = (
    PeriodKind.DAY,
    PeriodKind.WEEK,
    PeriodKind.MONTH,
    PeriodKind.YEAR,
    PeriodKind.ALL_TIME,
)


@dataclass
class MenuCallbacks:
    """Container for menu item callbacks."""
    show_dashboard: Optional[Callable] = None
    reset_usage: Optional[Callable] = None
    set_update_interval: Optional[Callable] = None
    toggle_show_in_menu_bar: Optional[Callable] = None
    toggle_launch_login: Optional[Callable] = None
    quit_app: Optional[Callable] = None


class MenuBuilder:
    """Builds and manages the application menu structure."""

    def __init__(self):
        self._menu_items: Dict[str, rumps.MenuItem] = {}
        logger.debug("MenuBuilder initialized")

    def build_main_menu(self, callbacks: MenuCallbacks,
                        interval_options: Iterable[float] = ()) -> List:
        """Build the complete main menu structure.

        Args:
            callbacks: Container with callback functions for menu items.
            interval_options: Selectable update intervals in seconds.

        Returns:
            List of menu items for rumps.App.menu
        """
        self._menu_items['header'] = rumps.MenuItem("Network Statistics")
        self._menu_items['connection'] = rumps.MenuItem("Detecting...")

        for period in USAGE_PERIODS:
            self._menu_items[period.storage_key] = rumps.MenuItem("Loading...")

        menu = [
            self._menu_items['header'],
            self._menu_items['connection'],
            rumps.separator,
            *(self._menu_items[period.storage_key] for period in USAGE_PERIODS),
            rumps.separator,
            rumps.MenuItem("Show Dashboard", callback=callbacks.show_dashboard, key="d"),
            self._build_reset_menu(callbacks),
            self._build_settings_menu(callbacks, interval_options),
            rumps.separator,
            rumps.MenuItem("Quit SpeedMeter", callback=callbacks.quit_app, key="q"),
        ]
        return menu

    def _build_reset_menu(self, callbacks: MenuCallbacks) -> rumps.MenuItem:
        """Build the reset submenu with one item per period."""
        reset = rumps.MenuItem("Reset Usage")
        for period in USAGE_PERIODS:
            item = rumps.MenuItem(period.label, callback=callbacks.reset_usage)
            item.period = period
            reset.add(item)
        return reset

    def _build_settings_menu(self, callbacks: MenuCallbacks,
                             interval_options: Iterable[float]) -> rumps.MenuItem:
        """Build the settings submenu."""
        settings = rumps.MenuItem("Settings")

        self._menu_items['launch_login'] = rumps.MenuItem(
            "○ Launch at Login: Off",
            callback=callbacks.toggle_launch_login
        )
        self._menu_items['show_in_menu_bar'] = rumps.MenuItem(
            "Show Speed in Menu Bar",
            callback=callbacks.toggle_show_in_menu_bar
        )
        settings.add(self._menu_items['launch_login'])
        settings.add(self._menu_items['show_in_menu_bar'])
        settings.add(rumps.separator)

        intervals = rumps.MenuItem("Update Interval")
        for seconds in interval_options:
            item = rumps.MenuItem(f"{seconds:.1f} second(s)", callback=callbacks.set_update_interval)
            item.seconds = seconds
            intervals.add(item)
            self._menu_items[f"interval_{seconds:.1f}"] = item
        self._menu_items['update_interval'] = intervals
        settings.add(intervals)

        return settings

    def get_item(self, key: str) -> Optional[rumps.MenuItem]:
        """Get a menu item by key."""
        return self._menu_items.get(key)

    def update_connection(self, is_connected: bool, interface_label: str) -> None:
        item = self._menu_items.get('connection')
        if item is not None:
            item.title = f"Connected via {interface_label}" if is_connected else "Disconnected"

    def update_usage(self, usage: Mapping[PeriodKind, UsageBucket]) -> None:
        """Refresh the per-period usage lines."""
        for period in USAGE_PERIODS:
            item = self._menu_items.get(period.storage_key)
            bucket = usage.get(period)
            if item is not None and bucket is not None:
                item.title = format_usage_title(
                    period.label,
                    bucket.total_downloaded,
                    bucket.total_uploaded,
                    detailed=period is PeriodKind.DAY,
                )

    def update_settings(self, launch_status: str, show_in_menu_bar: bool,
                        update_interval: float) -> None:
        """Refresh the checkmarks in the settings submenu."""
        item = self._menu_items.get('launch_login')
        if item is not None:
            item.title = launch_status
        item = self._menu_items.get('show_in_menu_bar')
        if item is not None:
            item.state = 1 if show_in_menu_bar else 0
        for key, item in self._menu_items.items():
            if key.startswith("interval_"):
                item.state = 1 if abs(item.seconds - update_interval) < 1e-9 else 0
