"""Rate sampling from cumulative byte counters.

The sampler turns two consecutive counter reads into upload/download
rates and forwards the byte deltas to a usage callback.

Example:
    >>> sampler = RateSampler(PsutilCounterSource())
    >>> sampler.tick()          # primes the baseline, zero rate
    >>> sample = sampler.tick() # one interval later
    >>> print(sample.menu_bar_string())
"""

from __future__ import annotations

import threading
import time
from dataclasses import replace
from typing import Callable, Optional, Protocol, Tuple

from config import SampleError, get_logger
from monitor.stats import RateSample

logger = get_logger(__name__)

# Called with (downloaded_delta, uploaded_delta) in bytes
UsageCallback = Callable[[int, int], None]


class CounterSource(Protocol):
    def sample(self) -> Tuple[int, int]:
        ...


class ConnectivityProbe(Protocol):
    def status(self) -> Tuple[bool, str]:
        ...


class RateSampler:
    """Derives throughput from a counter source.

    The sampler exclusively owns the last counter pair and the time it was
    read. A counter that goes backwards (reboot, interface reset) counts as
    zero bytes for that interval.

    Attributes:
        on_data_update: Receives non-zero byte deltas after each tick.
    """

    def __init__(
        self,
        counter_source: CounterSource,
        on_data_update: Optional[UsageCallback] = None,
        probe: Optional[ConnectivityProbe] = None,
    ) -> None:
        self._source = counter_source
        self._probe = probe
        self.on_data_update = on_data_update
        self._lock = threading.Lock()
        self._last_received: int = 0
        self._last_sent: int = 0
        self._last_time: float = 0.0
        self._primed: bool = False
        self._current = RateSample()

    @property
    def current_rate(self) -> RateSample:
        """Latest rate sample (an immutable snapshot)."""
        return self._current

    @property
    def is_primed(self) -> bool:
        return self._primed

    @property
    def last_sample_time(self) -> Optional[float]:
        """Time of the last counted tick, or None before priming."""
        return self._last_time if self._primed else None

    def _refresh_connectivity(self) -> RateSample:
        if self._probe is None:
            return self._current
        try:
            connected, label = self._probe.status()
        except SampleError as e:
            logger.debug(f"Interface probe failed: {e}")
            return self._current
        return replace(self._current, is_connected=connected, interface_label=label)

    def tick(self, now: Optional[float] = None) -> RateSample:
        """Take one sample and update the current rate.

        Args:
            now: Sample time in seconds. Defaults to time.time().

        Returns:
            The new RateSample. Zero rates on the priming tick and when no
            time has elapsed since the previous sample.

        Raises:
            SampleError: If the counters could not be read. The previous
                rate and baseline are kept.
        """
        if now is None:
            now = time.time()

        downloaded = uploaded = 0
        with self._lock:
            received, sent = self._source.sample()
            connectivity = self._refresh_connectivity()
            zero = replace(connectivity, download_speed=0.0, upload_speed=0.0)

            if not self._primed:
                self._last_received = received
                self._last_sent = sent
                self._last_time = now
                self._primed = True
                self._current = zero
                logger.debug("RateSampler baseline primed")
                return zero

            elapsed = now - self._last_time
            if elapsed <= 0:
                logger.debug(f"Ignoring tick with non-positive elapsed time ({elapsed:.3f}s)")
                return zero

            downloaded = received - self._last_received if received > self._last_received else 0
            uploaded = sent - self._last_sent if sent > self._last_sent else 0

            self._current = replace(
                connectivity,
                download_speed=downloaded / elapsed,
                upload_speed=uploaded / elapsed,
            )
            self._last_received = received
            self._last_sent = sent
            self._last_time = now
            sample = self._current

        if (downloaded > 0 or uploaded > 0) and self.on_data_update is not None:
            self.on_data_update(downloaded, uploaded)

        return sample

    def reset(self) -> None:
        """Forget the baseline; the next tick primes again."""
        with self._lock:
            self._primed = False
            self._current = replace(self._current, download_speed=0.0, upload_speed=0.0)


__all__ = ["ConnectivityProbe", "CounterSource", "RateSampler", "UsageCallback"]
