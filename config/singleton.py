"""Single-instance lock for SpeedMeter.

Two running copies would both write the usage file, so a second launch
must exit. Uses file locking (fcntl), which the OS releases when the
process exits, even on crash.

Usage:
    from config.singleton import SingletonLock

    lock = SingletonLock()
    if not lock.acquire():
        sys.exit(1)
"""
import fcntl
import os
import tempfile
from pathlib import Path
from typing import Optional

from config import get_logger

logger = get_logger(__name__)


class SingletonLock:
    """Ensures only one instance of the application can run at a time.

    Example:
        >>> lock = SingletonLock("my-app")
        >>> if lock.acquire():
        ...     print("Running as the only instance")
    """

    def __init__(self, lock_name: str = "speedmeter", lock_dir: Optional[Path] = None):
        """Initialize the singleton lock.

        Args:
            lock_name: Base name for the lock file.
            lock_dir: Directory for the lock file. Defaults to the temp dir.
        """
        self._lock_file = (lock_dir or Path(tempfile.gettempdir())) / f"{lock_name}.lock"
        self._lock_fd = None

    @property
    def pid_file(self) -> Path:
        return self._lock_file.with_suffix('.pid')

    def get_running_pid(self) -> Optional[int]:
        """Get the PID of the currently running instance, if any."""
        try:
            pid_str = self.pid_file.read_text().strip()
            if not pid_str:
                return None
            pid = int(pid_str)
            os.kill(pid, 0)  # Signal 0 = check if process exists
            return pid
        except (ValueError, OSError):
            return None

    def acquire(self) -> bool:
        """Try to acquire the singleton lock.

        Returns:
            True if lock acquired (we're the only instance),
            False if another instance is already running.
        """
        try:
            self._lock_fd = open(self._lock_file, 'w')
            fcntl.flock(self._lock_fd.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError:
            # Lock is held by another process
            if self._lock_fd:
                self._lock_fd.close()
                self._lock_fd = None
            return False

        try:
            self.pid_file.write_text(str(os.getpid()))
        except OSError as e:
            logger.debug(f"Could not write pid file: {e}")
        logger.debug(f"Singleton lock acquired: {self._lock_file}")
        return True

    @property
    def is_held(self) -> bool:
        return self._lock_fd is not None

    def release(self) -> None:
        """Release the singleton lock."""
        if not self._lock_fd:
            return
        try:
            self.pid_file.unlink(missing_ok=True)
        except OSError as e:
            logger.debug(f"Could not remove pid file: {e}")
        try:
            fcntl.flock(self._lock_fd.fileno(), fcntl.LOCK_UN)
        finally:
            self._lock_fd.close()
            self._lock_fd = None
        logger.debug("Singleton lock released")
