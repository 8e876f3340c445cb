"""Logging configuration for SpeedMeter.

Every module logs through a child of the 'speedmeter' logger. The app
writes a rotating log file in the data directory and echoes warnings
(everything when debugging) to stderr.

Usage:
    from config.logging_config import setup_logging, get_logger

    setup_logging(data_dir=Path.home() / ".speedmeter")

    logger = get_logger(__name__)
    logger.info("Sampler started")
"""
import copy
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

from config.constants import STORAGE

ROOT_LOGGER_NAME = 'speedmeter'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_loggers: Dict[str, logging.Logger] = {}
_initialized = False


class SpeedMeterFormatter(logging.Formatter):
    """Colors the level name when writing to a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',     # Cyan
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        if color:
            # Other handlers share the record, color a copy only
            record = copy.copy(record)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _file_handler(data_dir: Path) -> logging.Handler:
    handler = RotatingFileHandler(
        data_dir / STORAGE.LOG_FILE,
        maxBytes=STORAGE.LOG_MAX_BYTES,
        backupCount=STORAGE.LOG_BACKUP_COUNT,
        encoding='utf-8',
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _console_handler(debug: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    handler.setFormatter(SpeedMeterFormatter())
    return handler


def setup_logging(
    data_dir: Optional[Path] = None,
    debug: bool = False,
    console_output: bool = True,
    log_to_file: bool = True
) -> logging.Logger:
    """Configure the 'speedmeter' logger.

    Safe to call again: existing handlers are closed and replaced.

    Args:
        data_dir: Directory for the log file. Defaults to ~/.speedmeter/
        debug: Log DEBUG records (and echo them to stderr).
        console_output: Also log to stderr.
        log_to_file: Write a rotating log file in data_dir.

    Returns:
        The 'speedmeter' logger.
    """
    global _initialized

    data_dir = data_dir or Path.home() / STORAGE.DATA_DIR_NAME
    data_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if log_to_file:
        root_logger.addHandler(_file_handler(data_dir))
    if console_output:
        root_logger.addHandler(_console_handler(debug))

    _initialized = True
    root_logger.info(
        f"Logging initialized - level={'DEBUG' if debug else 'INFO'}, "
        f"file={log_to_file}, console={console_output}"
    )
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get the 'speedmeter' child logger for a module.

    Only the last two dotted parts of name are kept, so
    "monitor.sampler" logs as "speedmeter.monitor.sampler".
    """
    short_name = '.'.join(name.split('.')[-2:])
    logger = _loggers.get(short_name)
    if logger is None:
        if not _initialized:
            # Records still reach stderr before setup_logging runs
            logging.basicConfig(level=logging.INFO)
        logger = logging.getLogger(f'{ROOT_LOGGER_NAME}.{short_name}')
        _loggers[short_name] = logger
    return logger


def log_exception(logger: logging.Logger, message: str, exc: Exception) -> None:
    """Log an exception at ERROR with its traceback."""
    logger.error(
        f"{message}: {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra={'exception_type': type(exc).__name__}
    )


class LogContext:
    """Logs how long a block took, or how it failed.

    Example:
        >>> with LogContext(logger, "Loading usage buckets"):
        ...     load()
        # Logs: "Loading usage buckets completed in 3ms"
    """

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.DEBUG):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time: Optional[datetime] = None

    def _elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000

    def __enter__(self):
        self.start_time = datetime.now()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.logger.error(f"{self.operation} failed after {self._elapsed_ms():.0f}ms: {exc_val}")
        else:
            self.logger.log(self.level, f"{self.operation} completed in {self._elapsed_ms():.0f}ms")
        return False
