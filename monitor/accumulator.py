"""Calendar-bucketed usage accumulation.

The accumulator keeps one running total per PeriodKind, resets each
bucket when wall-clock time leaves its period, and persists all buckets
together after every change.

Example:
    >>> accumulator = UsageAccumulator(JsonStore())
    >>> accumulator.add_usage(downloaded=4096, uploaded=512)
    >>> accumulator.get_usage(PeriodKind.DAY).total_downloaded
    4096
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Protocol

from config import USAGE_KEYS, get_logger
from config.exceptions import StorageError
from config.logging_config import LogContext
from monitor.periods import needs_rollover, period_start
from monitor.stats import PeriodKind, UsageBucket

logger = get_logger(__name__)

Clock = Callable[[], datetime]


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[Any]:
        ...

    def set_many(self, items: Mapping[str, Any]) -> None:
        ...


class UsageAccumulator:
    """Maintains usage totals for today, this week/month/year and all time.

    The accumulator is the only writer of its buckets and of the usage keys
    in the store. In-memory buckets are authoritative: a failed write is
    logged and retried on the next change or flush.

    Args:
        store: Persistence store with get/set_many.
        clock: Returns the current local time. Defaults to datetime.now.
    """

    def __init__(self, store: KeyValueStore, clock: Optional[Clock] = None) -> None:
        self._store = store
        self._clock = clock or datetime.now
        self._lock = threading.RLock()
        self._dirty = False
        self._buckets: Dict[PeriodKind, UsageBucket] = {}

        now = self._clock()
        with LogContext(logger, "Loading usage buckets"):
            for kind in PeriodKind:
                self._buckets[kind] = self._load_bucket(kind, now)
        self.check_rollovers(now)
        logger.info("UsageAccumulator initialized")

    def _load_bucket(self, kind: PeriodKind, now: datetime) -> UsageBucket:
        """Load one bucket, degrading to a fresh one on any defect."""
        try:
            record = self._store.get(kind.storage_key)
        except StorageError as e:
            logger.warning(f"Could not read {kind.storage_key}: {e}")
            record = None

        if record is None:
            logger.debug(f"No stored usage for {kind.label}, starting fresh")
            return UsageBucket.fresh(period_start(kind, now), now)

        try:
            return UsageBucket.from_dict(record)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Discarding malformed {kind.storage_key} record: {e}")
            return UsageBucket.fresh(period_start(kind, now), now)

    def check_rollovers(self, now: Optional[datetime] = None) -> bool:
        """Replace every bucket whose period has ended.

        All buckets are evaluated against the same now. A bucket that is
        several periods old collapses straight to the current period.

        Returns:
            True if any bucket was replaced.
        """
        if now is None:
            now = self._clock()

        rolled = False
        with self._lock:
            for kind, bucket in self._buckets.items():
                if not needs_rollover(kind, bucket.period_start, now):
                    continue
                start = period_start(kind, now)
                self._buckets[kind] = UsageBucket.fresh(start, now)
                logger.info(f"{kind.label} rolled over, new period starts {start.isoformat()}")
                rolled = True
        return rolled

    def add_usage(self, downloaded: int, uploaded: int,
                  now: Optional[datetime] = None) -> None:
        """Add transferred bytes to every bucket and persist.

        Raises:
            ValueError: If either delta is negative.
        """
        if downloaded < 0 or uploaded < 0:
            raise ValueError(f"usage deltas must be non-negative: ({downloaded}, {uploaded})")
        if now is None:
            now = self._clock()

        with self._lock:
            self.check_rollovers(now)
            for kind, bucket in self._buckets.items():
                self._buckets[kind] = bucket.with_usage(downloaded, uploaded, now)
            self._persist(now)

    def get_usage(self, period: PeriodKind) -> UsageBucket:
        """Current bucket for a period (an immutable snapshot)."""
        with self._lock:
            return self._buckets[period]

    def get_all_usage(self) -> Dict[PeriodKind, UsageBucket]:
        """Snapshot of all buckets taken under one lock."""
        with self._lock:
            return dict(self._buckets)

    def reset_usage(self, period: PeriodKind, now: Optional[datetime] = None) -> None:
        """Zero one bucket, restarting it at the canonical period start."""
        if now is None:
            now = self._clock()

        with self._lock:
            self._buckets[period] = UsageBucket.fresh(period_start(period, now), now)
            logger.info(f"{period.label} usage reset")
            self._persist(now)

    def flush(self) -> bool:
        """Retry persistence if an earlier write failed.

        Returns:
            True if nothing is left unsaved.
        """
        with self._lock:
            if self._dirty:
                self._persist(self._clock())
            return not self._dirty

    @property
    def has_unsaved_changes(self) -> bool:
        return self._dirty

    def _persist(self, now: datetime) -> None:
        """Write all five buckets and the update time in one store call."""
        items: Dict[str, Any] = {
            kind.storage_key: bucket.to_dict()
            for kind, bucket in self._buckets.items()
        }
        items[USAGE_KEYS.LAST_UPDATE] = now.isoformat()
        try:
            self._store.set_many(items)
        except StorageError as e:
            self._dirty = True
            logger.warning(f"Usage not saved, will retry on next update: {e}")
        else:
            self._dirty = False


__all__ = ["Clock", "KeyValueStore", "UsageAccumulator"]
