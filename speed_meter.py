#!/usr/bin/env python3
"""
SpeedMeter - macOS Menu Bar Application
Shows live upload/download speed and tracks data usage per day, week,
month, year and all time.
"""
import atexit
import signal
import sys
from pathlib import Path

import rumps

from app.controller import AppController
from app.dependencies import create_dependencies
from app.views.graph_window import GraphWindow
from app.views.menu_builder import MenuBuilder, MenuCallbacks
from config import INTERVALS, STORAGE, UI, get_logger, setup_logging
from config.exceptions import ConfigurationError
from config.singleton import SingletonLock
from storage.settings import update_interval_options

logger = get_logger(__name__)


class SpeedMeterApp(rumps.App):
    """Main menu bar application."""

    def __init__(self, data_dir: Path):
        super().__init__(
            name=UI.APP_NAME,
            title=UI.PLACEHOLDER_TITLE,
            quit_button=None
        )

        self._deps = create_dependencies(data_dir=data_dir)
        self._controller = AppController(self._deps)
        self._graph_window = GraphWindow(
            self._controller.get_speed_history,
            self._controller.get_all_usage,
        )

        self._menu_builder = MenuBuilder()
        self.menu = self._menu_builder.build_main_menu(
            MenuCallbacks(
                show_dashboard=self._show_dashboard,
                reset_usage=self._reset_usage,
                set_update_interval=self._set_update_interval,
                toggle_show_in_menu_bar=self._toggle_show_in_menu_bar,
                toggle_launch_login=self._toggle_launch_at_login,
                quit_app=self._quit,
            ),
            interval_options=update_interval_options(),
        )

        self._controller.start()

        # UI timers only read snapshots; the controller's own ticker samples
        self._title_timer = rumps.Timer(self._refresh_title, INTERVALS.TITLE_REFRESH_SECONDS)
        self._menu_timer = rumps.Timer(self._refresh_menu, INTERVALS.MENU_REFRESH_SECONDS)
        self._title_timer.start()
        self._menu_timer.start()

        logger.info("SpeedMeterApp initialized")

    def _refresh_title(self, _):
        self.title = self._controller.get_menu_bar_title()

    def _refresh_menu(self, _):
        rate = self._controller.current_rate
        self._menu_builder.update_connection(rate.is_connected, rate.interface_label)
        self._menu_builder.update_usage(self._controller.get_all_usage())
        self._menu_builder.update_settings(
            self._controller.get_launch_status(),
            self._deps.settings.get_show_in_menu_bar(),
            self._deps.settings.get_update_interval(),
        )

    def _show_dashboard(self, _):
        self._graph_window.show()

    def _reset_usage(self, sender):
        """Reset the period attached to the clicked menu item."""
        period = sender.period
        response = rumps.alert(
            title=f"Reset {period.label}",
            message=f"Are you sure you want to reset usage for {period.label.lower()}?",
            ok="Reset",
            cancel="Cancel"
        )
        if response == 1:
            self._controller.reset_usage(period)
            self._refresh_menu(None)

    def _set_update_interval(self, sender):
        try:
            self._controller.set_update_interval(sender.seconds)
        except ConfigurationError as e:
            logger.warning(f"Rejected update interval: {e}")
        self._refresh_menu(None)

    def _toggle_show_in_menu_bar(self, sender):
        self._controller.set_show_in_menu_bar(not self._deps.settings.get_show_in_menu_bar())
        self._refresh_title(None)
        self._refresh_menu(None)

    def _toggle_launch_at_login(self, sender):
        success, message = self._controller.toggle_launch_at_login()
        sender.title = self._controller.get_launch_status()
        rumps.notification(
            title=UI.APP_NAME,
            subtitle="Startup Settings",
            message=message
        )

    def shutdown(self) -> None:
        """Stop timers and save usage."""
        self._title_timer.stop()
        self._menu_timer.stop()
        if self._controller.is_running:
            self._controller.stop()

    def _quit(self, _):
        """Quit the application."""
        logger.info("Application shutting down...")
        self.shutdown()
        logger.info("Shutdown complete")
        rumps.quit_application()


def main():
    """Entry point for the application."""
    data_dir = Path.home() / STORAGE.DATA_DIR_NAME
    setup_logging(data_dir=data_dir, debug=False, console_output=True)

    lock = SingletonLock()
    if not lock.acquire():
        logger.error(f"SpeedMeter is already running (PID {lock.get_running_pid()})")
        sys.exit(1)
    atexit.register(lock.release)

    logger.info("SpeedMeter starting...")
    app = None

    def signal_handler(signum, frame):
        """Handle SIGTERM/SIGINT to save usage before exit."""
        logger.info(f"Received signal {signum}, saving data...")
        if app:
            app.shutdown()
        rumps.quit_application()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        app = SpeedMeterApp(data_dir)
        app.run()
    except Exception as e:
        logger.critical(f"Application crashed: {e}", exc_info=True)
        raise
    finally:
        lock.release()


if __name__ == "__main__":
    main()
