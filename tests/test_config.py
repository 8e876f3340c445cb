"""Tests for the config module."""
import logging
import os

import pytest

from config.constants import INTERVALS, STORAGE, UI, USAGE_KEYS
from config.exceptions import (
    ConfigurationError,
    SampleError,
    SpeedMeterError,
    StorageError,
)
from config.logging_config import (
    ROOT_LOGGER_NAME,
    LogContext,
    get_logger,
    log_exception,
    setup_logging,
)
from config.singleton import SingletonLock


class TestConstants:
    """Tests for constants module."""

    def test_sample_interval_bounds(self):
        """Default interval should be a selectable option."""
        assert INTERVALS.SAMPLE_MIN_SECONDS <= INTERVALS.SAMPLE_SECONDS <= INTERVALS.SAMPLE_MAX_SECONDS
        assert INTERVALS.SAMPLE_STEP_SECONDS > 0

    def test_usage_keys_are_distinct(self):
        keys = [
            USAGE_KEYS.TODAY,
            USAGE_KEYS.WEEK,
            USAGE_KEYS.MONTH,
            USAGE_KEYS.YEAR,
            USAGE_KEYS.ALL_TIME,
            USAGE_KEYS.LAST_UPDATE,
        ]
        assert len(set(keys)) == len(keys)

    def test_storage_config_has_required_fields(self):
        """Storage config should have all required fields."""
        assert STORAGE.DATA_DIR_NAME
        assert STORAGE.USAGE_FILE
        assert STORAGE.SETTINGS_FILE
        assert STORAGE.LOG_FILE

    def test_colors_hex_format(self):
        """Hex colors should start with # and be 7 chars."""
        for color in [UI.DOWNLOAD_COLOR, UI.UPLOAD_COLOR]:
            assert color.startswith('#')
            assert len(color) == 7


class TestExceptions:
    """Tests for custom exceptions."""

    def test_base_exception(self):
        """SpeedMeterError should work with message and details."""
        exc = SpeedMeterError("Test error", {"key": "value"})
        assert exc.message == "Test error"
        assert exc.details == {"key": "value"}
        assert "Test error" in str(exc)
        assert "key" in str(exc)

    def test_exception_without_details(self):
        """Exceptions should work without details."""
        exc = StorageError("Storage failed")
        assert exc.message == "Storage failed"
        assert exc.details == {}
        assert str(exc) == "Storage failed"

    def test_exception_inheritance(self):
        """All custom exceptions should inherit from SpeedMeterError."""
        assert issubclass(SampleError, SpeedMeterError)
        assert issubclass(StorageError, SpeedMeterError)
        assert issubclass(ConfigurationError, SpeedMeterError)


@pytest.fixture
def configured_logging(temp_data_dir):
    """Set up logging into a temp dir and detach the handlers afterwards."""
    root = setup_logging(data_dir=temp_data_dir, console_output=False)
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


class TestLogging:
    """Tests for logging configuration."""

    def test_setup_logging_creates_logger(self, configured_logging):
        """setup_logging should return a configured logger."""
        assert configured_logging.name == ROOT_LOGGER_NAME

    def test_setup_logging_writes_file(self, configured_logging, temp_data_dir):
        configured_logging.info("hello")
        for handler in configured_logging.handlers:
            handler.flush()
        assert "hello" in (temp_data_dir / STORAGE.LOG_FILE).read_text()

    def test_setup_logging_replaces_handlers(self, configured_logging, temp_data_dir):
        setup_logging(data_dir=temp_data_dir, console_output=True)
        assert len(configured_logging.handlers) == 2

    def test_get_logger_returns_child(self, configured_logging):
        """get_logger should return child of root logger."""
        logger = get_logger("monitor.sampler")
        assert logger.name == "speedmeter.monitor.sampler"

    def test_get_logger_shortens_names(self):
        logger = get_logger("a.b.monitor.accumulator")
        assert logger.name == "speedmeter.monitor.accumulator"
        assert get_logger("monitor.accumulator") is logger

    def test_log_exception(self, configured_logging, caplog):
        logger = get_logger("tests.config")
        with caplog.at_level(logging.ERROR, logger=ROOT_LOGGER_NAME):
            log_exception(logger, "Tick failed", ValueError("boom"))
        assert "Tick failed: ValueError: boom" in caplog.text

    def test_log_context_measures_duration(self, configured_logging):
        """LogContext should measure operation duration."""
        logger = get_logger(__name__)

        with LogContext(logger, "Test operation") as ctx:
            pass

        assert ctx.start_time is not None


class TestSingletonLock:
    """Tests for the single-instance lock."""

    def test_acquire_and_release(self, temp_data_dir):
        lock = SingletonLock("test-app", lock_dir=temp_data_dir)

        assert lock.acquire() is True
        assert lock.is_held
        assert lock.get_running_pid() == os.getpid()

        lock.release()
        assert not lock.is_held
        assert not lock.pid_file.exists()

    def test_second_instance_refused(self, temp_data_dir):
        first = SingletonLock("test-app", lock_dir=temp_data_dir)
        second = SingletonLock("test-app", lock_dir=temp_data_dir)
        try:
            assert first.acquire() is True
            assert second.acquire() is False
            assert not second.is_held
        finally:
            first.release()

        assert second.acquire() is True
        second.release()

    def test_release_without_acquire(self, temp_data_dir):
        SingletonLock("test-app", lock_dir=temp_data_dir).release()

    def test_no_running_pid(self, temp_data_dir):
        assert SingletonLock("test-app", lock_dir=temp_data_dir).get_running_pid() is None
