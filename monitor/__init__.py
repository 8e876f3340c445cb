"""Network monitoring components.

This package provides the rate sampler and the calendar-bucketed usage
accumulator, plus the data types and formatters they share.

Modules:
    stats: RateSample, UsageBucket, PeriodKind, SpeedPoint
    periods: Calendar period boundaries and rollover test
    counters: psutil counter source and interface probe
    sampler: Rate derivation from cumulative counters
    accumulator: Rolling usage totals with persistence
    utils: Formatting helpers

Example:
    >>> from monitor import RateSampler, PsutilCounterSource
    >>> sampler = RateSampler(PsutilCounterSource())
    >>> sampler.tick()
"""
from .accumulator import UsageAccumulator
from .counters import InterfaceProbe, PsutilCounterSource
from .periods import needs_rollover, period_start
from .sampler import RateSampler
from .stats import PeriodKind, RateSample, SpeedPoint, UsageBucket
from .utils import format_date_range, format_speed, format_total, format_usage_title

__all__ = [
    # Data types
    "PeriodKind",
    "RateSample",
    "SpeedPoint",
    "UsageBucket",
    # Sampling
    "PsutilCounterSource",
    "InterfaceProbe",
    "RateSampler",
    # Accumulation
    "UsageAccumulator",
    "needs_rollover",
    "period_start",
    # Utilities
    "format_speed",
    "format_total",
    "format_usage_title",
    "format_date_range",
]
