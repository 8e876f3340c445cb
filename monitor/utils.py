"""Shared formatting functions for the presentation layer.

Example:
    >>> from monitor.utils import format_speed, format_total
    >>> format_speed(1536)
    '1.5 KB/s'
    >>> format_total(1536)
    '1.50 KB'
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence, Union

# Type alias for numeric values
NumericValue = Union[int, float]

SPEED_UNITS = ("B/s", "KB/s", "MB/s", "GB/s")
TOTAL_UNITS = ("B", "KB", "MB", "GB", "TB")


def _scale(value: NumericValue, units: Sequence[str]) -> tuple:
    """Divide by 1024 until below 1024 or at the largest unit."""
    scaled = float(value)
    index = 0
    while scaled >= 1024 and index < len(units) - 1:
        scaled /= 1024
        index += 1
    return scaled, units[index]


def format_speed(bytes_per_second: NumericValue) -> str:
    """Format a transfer rate with one decimal place.

    Examples:
        >>> format_speed(0)
        '0.0 B/s'
        >>> format_speed(1024 * 1024)
        '1.0 MB/s'
    """
    value, unit = _scale(bytes_per_second, SPEED_UNITS)
    return f"{value:.1f} {unit}"


def format_total(total_bytes: NumericValue) -> str:
    """Format a cumulative byte count with two decimal places.

    Examples:
        >>> format_total(500)
        '500.00 B'
        >>> format_total(1024 ** 4)
        '1.00 TB'
    """
    value, unit = _scale(total_bytes, TOTAL_UNITS)
    return f"{value:.2f} {unit}"


def format_usage_title(label: str, downloaded: int, uploaded: int,
                       detailed: bool = False) -> str:
    """Menu line for one usage period.

    Examples:
        >>> format_usage_title("This Week", 1024, 1024)
        'This Week: 2.00 KB'
        >>> format_usage_title("Today", 1024, 0, detailed=True)
        'Today: 1.00 KB (↓1.00 KB ↑0.00 B)'
    """
    title = f"{label}: {format_total(downloaded + uploaded)}"
    if detailed:
        title += f" (↓{format_total(downloaded)} ↑{format_total(uploaded)})"
    return title


def format_date_range(start: datetime, end: datetime) -> str:
    """Short date range, collapsed to one date when both fall on the same day."""
    if start.date() == end.date():
        return start.strftime("%Y-%m-%d")
    return f"{start:%Y-%m-%d} - {end:%Y-%m-%d}"


__all__ = [
    "NumericValue",
    "format_date_range",
    "format_speed",
    "format_total",
    "format_usage_title",
]
