"""Tests for monitor/sampler.py"""
from unittest.mock import MagicMock

import pytest

from config.exceptions import SampleError
from monitor.sampler import RateSampler
from tests.mocks import MockCounterSource, MockInterfaceProbe


class TestPriming:
    """Tests for the first tick."""

    def test_first_tick_returns_zero_rate(self):
        callback = MagicMock()
        sampler = RateSampler(MockCounterSource([(1000, 500)]), on_data_update=callback)

        sample = sampler.tick(now=0.0)

        assert sample.download_speed == 0.0
        assert sample.upload_speed == 0.0
        assert sampler.is_primed
        callback.assert_not_called()

    def test_failed_first_read_leaves_unprimed(self):
        sampler = RateSampler(MockCounterSource([SampleError("no counters"), (0, 0)]))

        with pytest.raises(SampleError):
            sampler.tick(now=0.0)

        assert not sampler.is_primed


class TestRates:
    """Tests for rate derivation."""

    def test_rate_from_two_reads(self):
        callback = MagicMock()
        source = MockCounterSource([(1000, 500), (3000, 500)])
        sampler = RateSampler(source, on_data_update=callback)

        sampler.tick(now=0.0)
        sample = sampler.tick(now=2.0)

        assert sample.download_speed == 1000.0
        assert sample.upload_speed == 0.0
        assert sampler.current_rate == sample
        callback.assert_called_once_with(2000, 0)

    def test_counter_decrease_counts_as_zero(self):
        callback = MagicMock()
        source = MockCounterSource([(5000, 5000), (100, 100), (300, 100)])
        sampler = RateSampler(source, on_data_update=callback)

        sampler.tick(now=0.0)
        sample = sampler.tick(now=1.0)

        assert sample.download_speed == 0.0
        assert sample.upload_speed == 0.0
        callback.assert_not_called()

        # The lower reading becomes the new baseline
        sample = sampler.tick(now=2.0)
        assert sample.download_speed == 200.0
        callback.assert_called_once_with(200, 0)

    def test_non_positive_elapsed_mutates_nothing(self):
        callback = MagicMock()
        source = MockCounterSource([(0, 0), (1000, 0), (2000, 0)])
        sampler = RateSampler(source, on_data_update=callback)

        sampler.tick(now=10.0)
        sample = sampler.tick(now=10.0)
        assert sample.download_speed == 0.0
        callback.assert_not_called()

        # Baseline is still the priming read at t=10
        sample = sampler.tick(now=11.0)
        assert sample.download_speed == 2000.0
        callback.assert_called_once_with(2000, 0)

    def test_last_sample_time_skips_ignored_ticks(self):
        sampler = RateSampler(MockCounterSource([(0, 0), (10, 0), (20, 0)]))
        assert sampler.last_sample_time is None

        sampler.tick(now=5.0)
        sampler.tick(now=5.0)
        assert sampler.last_sample_time == 5.0

        sampler.tick(now=6.0)
        assert sampler.last_sample_time == 6.0

    def test_clock_going_backwards(self):
        source = MockCounterSource([(0, 0), (1000, 0)])
        sampler = RateSampler(source)
        sampler.tick(now=10.0)

        sample = sampler.tick(now=5.0)

        assert sample.download_speed == 0.0

    def test_callback_sees_updated_rate(self):
        seen = []
        source = MockCounterSource([(0, 0), (4096, 1024)])
        sampler = RateSampler(source)
        sampler.on_data_update = lambda d, u: seen.append(sampler.current_rate)

        sampler.tick(now=0.0)
        sampler.tick(now=1.0)

        assert seen[0].download_speed == 4096.0
        assert seen[0].upload_speed == 1024.0

    def test_idle_interval_skips_callback(self):
        callback = MagicMock()
        sampler = RateSampler(MockCounterSource([(100, 100), (100, 100)]), on_data_update=callback)

        sampler.tick(now=0.0)
        sampler.tick(now=1.0)

        callback.assert_not_called()


class TestFailures:
    """Tests for counter read failures."""

    def test_failure_keeps_previous_rate_and_baseline(self):
        source = MockCounterSource([
            (0, 0),
            (1024, 0),
            SampleError("interface vanished"),
            (3072, 0),
        ])
        sampler = RateSampler(source)
        sampler.tick(now=0.0)
        sampler.tick(now=1.0)

        with pytest.raises(SampleError):
            sampler.tick(now=2.0)
        assert sampler.current_rate.download_speed == 1024.0

        # Next read is measured against the t=1 baseline
        sample = sampler.tick(now=3.0)
        assert sample.download_speed == 1024.0


class TestConnectivity:
    """Tests for the interface probe."""

    def test_sample_carries_interface(self):
        probe = MockInterfaceProbe(is_connected=True, label="en0")
        sampler = RateSampler(MockCounterSource([(0, 0)]), probe=probe)

        sample = sampler.tick(now=0.0)

        assert sample.is_connected is True
        assert sample.interface_label == "en0"

    def test_probe_failure_keeps_last_state(self):
        probe = MockInterfaceProbe(is_connected=True, label="en1")
        sampler = RateSampler(MockCounterSource([(0, 0), (10, 0)]), probe=probe)
        sampler.tick(now=0.0)

        probe.fail = True
        sample = sampler.tick(now=1.0)

        assert sample.is_connected is True
        assert sample.interface_label == "en1"
        assert sample.download_speed == 10.0

    def test_without_probe(self):
        sampler = RateSampler(MockCounterSource([(0, 0)]))
        assert sampler.tick(now=0.0).is_connected is False


class TestReset:
    """Tests for RateSampler.reset."""

    def test_reset_reprimes(self):
        callback = MagicMock()
        source = MockCounterSource([(0, 0), (1000, 0), (9000, 0)])
        sampler = RateSampler(source, on_data_update=callback)
        sampler.tick(now=0.0)
        sampler.tick(now=1.0)
        callback.reset_mock()

        sampler.reset()
        assert not sampler.is_primed
        assert sampler.current_rate.download_speed == 0.0

        sample = sampler.tick(now=2.0)
        assert sample.download_speed == 0.0
        callback.assert_not_called()
