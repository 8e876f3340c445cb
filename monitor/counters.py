"""Platform byte counters using psutil.

The counter source returns cumulative (received, sent) byte counts summed
over all non-loopback interfaces. The interface probe reports whether any
such interface is up.

Example:
    >>> source = PsutilCounterSource()
    >>> received, sent = source.sample()
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import psutil

from config import SampleError, get_logger

logger = get_logger(__name__)

LOOPBACK_PREFIXES = ("lo",)


def is_loopback(name: str) -> bool:
    return name.startswith(LOOPBACK_PREFIXES)


class PsutilCounterSource:
    """Reads cumulative interface byte counters.

    Interfaces that are down are still counted, so one coming up never
    appears as a burst of traffic.
    """

    def __init__(self, include_loopback: bool = False) -> None:
        self._include_loopback = include_loopback

    def sample(self) -> Tuple[int, int]:
        """Get total bytes received and sent.

        Returns:
            Tuple of (bytes_received, bytes_sent).

        Raises:
            SampleError: If the counters could not be read.
        """
        try:
            counters = psutil.net_io_counters(pernic=True)
        except (OSError, RuntimeError) as e:
            raise SampleError(f"Could not read interface counters: {e}") from e

        if not counters:
            raise SampleError("No network interfaces reported")

        received = 0
        sent = 0
        for name, nic in counters.items():
            if not self._include_loopback and is_loopback(name):
                continue
            received += nic.bytes_recv
            sent += nic.bytes_sent
        return received, sent


class InterfaceProbe:
    """Reports connectivity and the active interface name."""

    def status(self) -> Tuple[bool, str]:
        """Get (is_connected, interface_label).

        Raises:
            SampleError: If interface state could not be read.
        """
        try:
            stats: Dict[str, object] = psutil.net_if_stats()
        except (OSError, RuntimeError) as e:
            raise SampleError(f"Could not read interface state: {e}") from e

        active: Optional[str] = None
        for name, nic in stats.items():
            if is_loopback(name):
                continue
            if getattr(nic, "isup", False):
                active = name
                break

        if active is None:
            return False, "Unknown"
        return True, active


__all__ = ["InterfaceProbe", "PsutilCounterSource", "is_loopback"]
