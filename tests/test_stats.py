"""Tests for monitor/stats.py"""
from datetime import datetime

import pytest

from config import USAGE_KEYS
from monitor.stats import PeriodKind, RateSample, UsageBucket

T0 = datetime(2026, 10, 12, 0, 0, 0)
T1 = datetime(2026, 10, 14, 15, 30, 0)


class TestPeriodKind:
    """Tests for PeriodKind."""

    def test_labels(self):
        assert [kind.label for kind in PeriodKind] == [
            "Today", "This Week", "This Month", "This Year", "All Time",
        ]

    def test_storage_keys(self):
        assert PeriodKind.DAY.storage_key == USAGE_KEYS.TODAY
        assert PeriodKind.ALL_TIME.storage_key == USAGE_KEYS.ALL_TIME
        assert len({kind.storage_key for kind in PeriodKind}) == 5

    def test_only_all_time_never_rolls_over(self):
        assert not PeriodKind.ALL_TIME.rolls_over
        assert all(kind.rolls_over for kind in PeriodKind if kind is not PeriodKind.ALL_TIME)


class TestRateSample:
    """Tests for RateSample."""

    def test_defaults(self):
        sample = RateSample()
        assert sample.download_speed == 0.0
        assert sample.upload_speed == 0.0
        assert sample.is_connected is False
        assert sample.interface_label == "Unknown"

    def test_menu_bar_string(self):
        sample = RateSample(download_speed=1536, upload_speed=0)
        assert sample.menu_bar_string() == "↓ 1.5 KB/s ↑ 0.0 B/s"

    def test_is_immutable(self):
        sample = RateSample()
        with pytest.raises(AttributeError):
            sample.download_speed = 5.0


class TestUsageBucket:
    """Tests for UsageBucket."""

    def test_fresh_bucket_is_empty(self):
        bucket = UsageBucket.fresh(T0, T1)
        assert bucket.total_downloaded == 0
        assert bucket.total_uploaded == 0
        assert bucket.period_start == T0
        assert bucket.period_end == T1

    def test_with_usage_adds_and_keeps_start(self):
        bucket = UsageBucket.fresh(T0, T0).with_usage(100, 40, T1)
        assert bucket.total_downloaded == 100
        assert bucket.total_uploaded == 40
        assert bucket.total_bytes == 140
        assert bucket.period_start == T0
        assert bucket.period_end == T1

    def test_record_round_trip(self):
        bucket = UsageBucket(12345, 6789, T0, T1)
        record = bucket.to_dict()
        assert record == {
            "downloaded": 12345,
            "uploaded": 6789,
            "period_start": "2026-10-12T00:00:00",
            "period_end": "2026-10-14T15:30:00",
        }
        assert UsageBucket.from_dict(record) == bucket

    def test_missing_field(self):
        record = UsageBucket(1, 2, T0, T1).to_dict()
        del record["uploaded"]
        with pytest.raises(KeyError):
            UsageBucket.from_dict(record)

    @pytest.mark.parametrize("field,value,error", [
        ("downloaded", "12", TypeError),
        ("downloaded", 1.5, TypeError),
        ("uploaded", True, TypeError),
        ("uploaded", -1, ValueError),
        ("period_start", 1700000000, TypeError),
        ("period_end", "yesterday", ValueError),
    ])
    def test_malformed_field(self, field, value, error):
        record = UsageBucket(1, 2, T0, T1).to_dict()
        record[field] = value
        with pytest.raises(error):
            UsageBucket.from_dict(record)

    def test_record_must_be_mapping(self):
        with pytest.raises(TypeError):
            UsageBucket.from_dict(["downloaded", 1])

    def test_offset_timestamp_rejected(self):
        """Stored timestamps are local; an offset would break calendar comparisons."""
        record = UsageBucket(1, 2, T0, T1).to_dict()
        record["period_start"] = "2026-10-12T00:00:00+00:00"
        with pytest.raises(ValueError):
            UsageBucket.from_dict(record)
