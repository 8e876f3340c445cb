"""Tests for app/views/menu_builder.py"""
from datetime import datetime
from unittest.mock import MagicMock

import pytest

pytest.importorskip("rumps")

from app.views.menu_builder import USAGE_PERIODS, MenuBuilder, MenuCallbacks  # noqa: E402
from monitor.stats import PeriodKind, UsageBucket  # noqa: E402
from storage.settings import update_interval_options  # noqa: E402

pytestmark = pytest.mark.macos_only


class TestMenuCallbacks:
    """Tests for MenuCallbacks dataclass."""

    def test_default_callbacks_none(self):
        callbacks = MenuCallbacks()
        assert callbacks.reset_usage is None
        assert callbacks.quit_app is None


class TestMenuBuilder:
    """Tests for MenuBuilder class."""

    @pytest.fixture
    def builder(self):
        return MenuBuilder()

    @pytest.fixture
    def callbacks(self):
        return MenuCallbacks(
            show_dashboard=MagicMock(),
            reset_usage=MagicMock(),
            set_update_interval=MagicMock(),
            toggle_show_in_menu_bar=MagicMock(),
            toggle_launch_login=MagicMock(),
            quit_app=MagicMock(),
        )

    def test_build_main_menu(self, builder, callbacks):
        menu = builder.build_main_menu(callbacks, update_interval_options())

        assert isinstance(menu, list)
        for period in USAGE_PERIODS:
            assert builder.get_item(period.storage_key) is not None
        assert builder.get_item("interval_0.5") is not None
        assert builder.get_item("interval_5.0") is not None

    def test_interval_items_carry_seconds(self, builder, callbacks):
        builder.build_main_menu(callbacks, [0.5, 1.0])
        assert builder.get_item("interval_1.0").seconds == 1.0

    def test_update_usage(self, builder, callbacks):
        builder.build_main_menu(callbacks)
        start = datetime(2026, 10, 14)
        usage = {kind: UsageBucket(1024, 1024, start, start) for kind in PeriodKind}

        builder.update_usage(usage)

        assert builder.get_item(PeriodKind.DAY.storage_key).title == \
            "Today: 2.00 KB (↓1.00 KB ↑1.00 KB)"
        assert builder.get_item(PeriodKind.WEEK.storage_key).title == "This Week: 2.00 KB"

    def test_update_connection(self, builder, callbacks):
        builder.build_main_menu(callbacks)

        builder.update_connection(True, "en0")
        assert builder.get_item("connection").title == "Connected via en0"

        builder.update_connection(False, "Unknown")
        assert builder.get_item("connection").title == "Disconnected"

    def test_update_settings(self, builder, callbacks):
        builder.build_main_menu(callbacks, [0.5, 1.0, 1.5])

        builder.update_settings("✓ Launch at Login: On", False, 1.5)

        assert builder.get_item("launch_login").title == "✓ Launch at Login: On"
        assert builder.get_item("show_in_menu_bar").state == 0
        assert builder.get_item("interval_1.5").state == 1
        assert builder.get_item("interval_0.5").state == 0
