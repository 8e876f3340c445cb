"""Background interval timer that drives the rate sampler.

Runs its callback on a single dedicated thread, so sampler ticks and the
usage updates they trigger never run concurrently with each other.

Usage:
    from app.timer import IntervalTimer

    def on_tick(timer):
        sampler.tick()

    timer = IntervalTimer(on_tick, interval=1.0)
    timer.start()
"""

import threading
from typing import Callable, Optional

from config import get_logger
from config.logging_config import log_exception

logger = get_logger(__name__)


class IntervalTimer:
    """Repeating timer on a background daemon thread.

    A changed interval applies from the next wait. Stopping only prevents
    future ticks; a tick already running finishes normally.

    Example:
        >>> timer = IntervalTimer(callback, interval=1.0)
        >>> timer.start()
        >>> # Later...
        >>> timer.stop()
    """

    def __init__(self, callback: Callable, interval: float, name: str = "IntervalTimer"):
        """Initialize the timer.

        Args:
            callback: Function to call on each tick. Receives the timer as argument.
            interval: Time between ticks in seconds.
            name: Thread name.
        """
        self._callback = callback
        self._interval = interval
        self._name = name
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._wake_event = threading.Event()
        self._lock = threading.Lock()

    @property
    def interval(self) -> float:
        """Get the current interval."""
        return self._interval

    @interval.setter
    def interval(self, value: float) -> None:
        """Update interval, restarting the current wait."""
        with self._lock:
            self._interval = value
        self._wake_event.set()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    def _timer_loop(self) -> None:
        while not self._stop_event.is_set():
            with self._lock:
                interval = self._interval
            woken = self._wake_event.wait(interval)
            if woken:
                # Interval changed or stop requested
                self._wake_event.clear()
                continue
            if self._stop_event.is_set():
                break
            try:
                self._callback(self)
            except Exception as e:
                log_exception(logger, f"{self._name} callback failed", e)

    def start(self) -> None:
        """Start the timer in a background thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._wake_event.clear()
        self._thread = threading.Thread(target=self._timer_loop, daemon=True, name=self._name)
        self._thread.start()
        logger.debug(f"{self._name} started with interval {self._interval}s")

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        """Stop the timer and wait briefly for the thread to exit."""
        thread = self._thread
        self._stop_event.set()
        self._wake_event.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
        self._thread = None
        logger.debug(f"{self._name} stopped")
