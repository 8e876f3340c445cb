"""Custom exception hierarchy for SpeedMeter.

Provides specific exceptions for the recoverable failure categories of the
sampler, the persistence layer and the settings.
"""

from typing import Optional


class SpeedMeterError(Exception):
    """Base exception for all SpeedMeter errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class SampleError(SpeedMeterError):
    """Counter source read failure.

    Raised when the platform byte counters cannot be read. Always
    recoverable: the sampler retries on its next tick.

    Examples:
        >>> raise SampleError("net_io_counters returned nothing")
    """

    pass


class StorageError(SpeedMeterError):
    """Data persistence errors.

    Raised when there are issues with:
    - Reading/writing the usage or settings files
    - File permissions
    - Data corruption

    Examples:
        >>> raise StorageError("Failed to save usage", {"path": "/path/to/file"})
    """

    pass


class ConfigurationError(SpeedMeterError):
    """Settings and configuration errors.

    Examples:
        >>> raise ConfigurationError("Invalid update interval", {"value": 12})
    """

    pass
