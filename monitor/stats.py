"""Shared data types for rate sampling and usage accumulation.

Example:
    >>> sample = RateSample(download_speed=1536, upload_speed=0)
    >>> sample.menu_bar_string()
    '↓ 1.5 KB/s ↑ 0.0 B/s'
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict

from config import USAGE_KEYS
from monitor.utils import format_speed


class PeriodKind(Enum):
    """Rolling calendar periods tracked by the usage accumulator.

    Each member carries its display label and its persistence key.
    """

    DAY = ("Today", USAGE_KEYS.TODAY)
    WEEK = ("This Week", USAGE_KEYS.WEEK)
    MONTH = ("This Month", USAGE_KEYS.MONTH)
    YEAR = ("This Year", USAGE_KEYS.YEAR)
    ALL_TIME = ("All Time", USAGE_KEYS.ALL_TIME)

    def __init__(self, label: str, storage_key: str) -> None:
        self.label = label
        self.storage_key = storage_key

    @property
    def rolls_over(self) -> bool:
        """False only for ALL_TIME, which never resets on its own."""
        return self is not PeriodKind.ALL_TIME


@dataclass(frozen=True)
class RateSample:
    """Current network throughput.

    Attributes:
        download_speed: Bytes per second received.
        upload_speed: Bytes per second sent.
        is_connected: Whether any non-loopback interface is up.
        interface_label: Name of the active interface.
    """

    download_speed: float = 0.0
    upload_speed: float = 0.0
    is_connected: bool = False
    interface_label: str = "Unknown"

    def menu_bar_string(self) -> str:
        """Format speeds for the menu bar title."""
        down = format_speed(self.download_speed)
        up = format_speed(self.upload_speed)
        return f"↓ {down} ↑ {up}"


@dataclass(frozen=True)
class SpeedPoint:
    """One point of the dashboard speed chart."""

    timestamp: datetime
    download_speed: float
    upload_speed: float


def _parse_total(data: Dict[str, Any], field: str) -> int:
    value = data[field]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{field} must be non-negative, got {value}")
    return value


def _parse_timestamp(data: Dict[str, Any], field: str) -> datetime:
    value = data[field]
    if not isinstance(value, str):
        raise TypeError(f"{field} must be an ISO timestamp, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value)
    # Calendar boundaries are naive local time
    if parsed.tzinfo is not None:
        raise ValueError(f"{field} must be a local timestamp without offset, got {value}")
    return parsed


@dataclass(frozen=True)
class UsageBucket:
    """Accumulated usage for one calendar period.

    Buckets are immutable: adding usage or rolling over produces a new
    bucket, so readers always hold a consistent snapshot.

    Attributes:
        total_downloaded: Bytes received during the period.
        total_uploaded: Bytes sent during the period.
        period_start: Start of the period the bucket belongs to.
        period_end: Time of the last update (informational).
    """

    total_downloaded: int
    total_uploaded: int
    period_start: datetime
    period_end: datetime

    @classmethod
    def fresh(cls, period_start: datetime, now: datetime) -> UsageBucket:
        """Create an empty bucket starting at period_start."""
        return cls(
            total_downloaded=0,
            total_uploaded=0,
            period_start=period_start,
            period_end=now,
        )

    @property
    def total_bytes(self) -> int:
        return self.total_downloaded + self.total_uploaded

    def with_usage(self, downloaded: int, uploaded: int, now: datetime) -> UsageBucket:
        """Return a copy with the deltas added and period_end set to now."""
        return replace(
            self,
            total_downloaded=self.total_downloaded + downloaded,
            total_uploaded=self.total_uploaded + uploaded,
            period_end=now,
        )

    def to_dict(self) -> dict:
        return {
            "downloaded": self.total_downloaded,
            "uploaded": self.total_uploaded,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> UsageBucket:
        """Build a bucket from a persisted record.

        Raises:
            KeyError: A field is missing.
            TypeError: A field has the wrong type.
            ValueError: A total is negative or a timestamp is unparseable.
        """
        if not isinstance(data, dict):
            raise TypeError(f"usage record must be a mapping, got {type(data).__name__}")
        return cls(
            total_downloaded=_parse_total(data, "downloaded"),
            total_uploaded=_parse_total(data, "uploaded"),
            period_start=_parse_timestamp(data, "period_start"),
            period_end=_parse_timestamp(data, "period_end"),
        )


__all__ = ["PeriodKind", "RateSample", "SpeedPoint", "UsageBucket"]
