"""Application controller for SpeedMeter.

Drives the sampler on its own ticker and exposes plain snapshot accessors
for the menu bar, the dropdown menu and the dashboard.

Usage:
    from app.controller import AppController
    from app.dependencies import create_dependencies

    deps = create_dependencies()
    controller = AppController(deps)
    controller.start()
"""
import threading
from collections import deque
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from config import UI, get_logger
from config.exceptions import SampleError
from app.dependencies import AppDependencies
from app.timer import IntervalTimer
from monitor.stats import PeriodKind, RateSample, SpeedPoint, UsageBucket

logger = get_logger(__name__)


class AppController:
    """Central controller that orchestrates sampling and accumulation.

    The controller:
    - Owns the single ticker that drives the sampler
    - Keeps a short speed history for the dashboard chart
    - Applies settings changes to the running components
    - Provides read-only snapshots to the UI layer

    Attributes:
        deps: The dependency container with all components.
    """

    def __init__(self, deps: AppDependencies, history_size: int = UI.HISTORY_SIZE):
        self.deps = deps
        self._timer: Optional[IntervalTimer] = None
        self._running = False
        self._history_lock = threading.Lock()
        self._history: deque = deque(maxlen=history_size)
        self._sample_failures = 0

        logger.info("AppController initialized")

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Prime the sampler and start ticking."""
        if self._running:
            return
        logger.info("Starting AppController...")
        self._running = True

        # First tick only primes the baseline
        self.tick()

        self._timer = IntervalTimer(
            lambda _timer: self.tick(),
            interval=self.deps.settings.get_update_interval(),
            name="RateSampler",
        )
        self._timer.start()
        logger.info("AppController started")

    def stop(self) -> None:
        """Stop future ticks and flush any unsaved usage."""
        logger.info("Stopping AppController...")
        self._running = False
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

        if not self.deps.accumulator.flush():
            logger.warning("Usage could not be saved on shutdown")
        logger.info("AppController stopped")

    def tick(self, now: Optional[float] = None) -> Optional[RateSample]:
        """Run one sampler tick.

        Returns:
            The new RateSample, or None if the counters could not be read.
        """
        previous_time = self.deps.sampler.last_sample_time
        try:
            sample = self.deps.sampler.tick(now)
        except SampleError as e:
            self._sample_failures += 1
            if self._sample_failures == 1:
                logger.warning(f"Counter read failed, keeping last rate: {e}")
            else:
                logger.debug(f"Counter read failed ({self._sample_failures} in a row): {e}")
            return None

        if self._sample_failures:
            logger.info(f"Counter reads recovered after {self._sample_failures} failures")
            self._sample_failures = 0

        # Ticks with no elapsed time are not chart points
        if self.deps.sampler.last_sample_time == previous_time:
            return sample

        with self._history_lock:
            self._history.append(SpeedPoint(
                timestamp=datetime.now(),
                download_speed=sample.download_speed,
                upload_speed=sample.upload_speed,
            ))
        return sample

    # === Read accessors (called from UI timers) ===

    @property
    def current_rate(self) -> RateSample:
        return self.deps.sampler.current_rate

    def get_usage(self, period: PeriodKind) -> UsageBucket:
        return self.deps.accumulator.get_usage(period)

    def get_all_usage(self) -> Dict[PeriodKind, UsageBucket]:
        return self.deps.accumulator.get_all_usage()

    def get_speed_history(self) -> List[SpeedPoint]:
        """Recent samples, oldest first."""
        with self._history_lock:
            return list(self._history)

    def get_menu_bar_title(self) -> str:
        if not self.deps.settings.get_show_in_menu_bar():
            return UI.APP_NAME
        return self.current_rate.menu_bar_string()

    # === Action methods (called from UI) ===

    def reset_usage(self, period: PeriodKind) -> None:
        self.deps.accumulator.reset_usage(period)

    def set_update_interval(self, seconds: float) -> None:
        """Persist a new interval and apply it to the running ticker.

        Raises:
            ConfigurationError: If the interval is not an allowed option.
        """
        self.deps.settings.set_update_interval(seconds)
        if self._timer is not None:
            self._timer.interval = self.deps.settings.get_update_interval()
        logger.info(f"Update interval set to {seconds}s")

    def set_show_in_menu_bar(self, enabled: bool) -> None:
        self.deps.settings.set_show_in_menu_bar(enabled)

    def get_launch_status(self) -> str:
        return self.deps.launch_manager.get_status()

    def toggle_launch_at_login(self) -> Tuple[bool, str]:
        """Toggle launch at login and record the resulting state."""
        success, message = self.deps.launch_manager.toggle()
        self.deps.settings.set_launch_at_login(self.deps.launch_manager.is_enabled())
        return success, message
