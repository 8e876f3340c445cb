"""JSON-file key-value persistence for usage data."""
import copy
import json
import threading
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from config import STORAGE, get_logger
from config.exceptions import StorageError

logger = get_logger(__name__)


class JsonStore:
    """Durable key-value store backed by a single JSON file.

    Values must be JSON-serializable. Every write replaces the whole file
    atomically, so a multi-key update is either fully on disk or not at all.
    """

    DEFAULT_DATA_DIR = Path.home() / STORAGE.DATA_DIR_NAME
    DEFAULT_DATA_FILE = STORAGE.USAGE_FILE

    def __init__(self, data_dir: Optional[Path] = None, filename: Optional[str] = None):
        self.data_dir = data_dir or self.DEFAULT_DATA_DIR
        self.data_file = self.data_dir / (filename or self.DEFAULT_DATA_FILE)
        self._lock = threading.Lock()
        self._data: Dict[str, Any] = {}
        self._ensure_data_dir()
        self._load()
        logger.info(f"JsonStore initialized at {self.data_file}")

    def _ensure_data_dir(self) -> None:
        """Create data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _load(self) -> None:
        """Load data from JSON file."""
        if not self.data_file.exists():
            self._data = {}
            logger.debug("No existing data file, starting fresh")
            return

        try:
            with open(self.data_file, encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load data file: {e}")
            data = {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring data file with unexpected top-level {type(data).__name__}")
            data = {}

        self._data = data
        logger.debug(f"Loaded {len(self._data)} keys")

    def _write(self) -> None:
        """Write all data to disk atomically.

        Raises:
            StorageError: If the file could not be written.
        """
        temp_file = self.data_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(self._data, f, indent=2)
            temp_file.replace(self.data_file)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving data: {e}")
            raise StorageError(f"Failed to save data: {e}", {"path": str(self.data_file)}) from e
        logger.debug("Data saved successfully")

    def get(self, key: str) -> Optional[Any]:
        """Get a copy of the value stored under key, or None."""
        with self._lock:
            if key not in self._data:
                return None
            return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        """Store a single value and persist immediately."""
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, Any]) -> None:
        """Store several values as one write.

        On failure the in-memory view is restored, so it never diverges
        from what is on disk.

        Raises:
            StorageError: If the file could not be written.
        """
        with self._lock:
            previous = self._data
            self._data = {**previous, **copy.deepcopy(dict(items))}
            try:
                self._write()
            except StorageError:
                self._data = previous
                raise

    def keys(self) -> list:
        with self._lock:
            return list(self._data.keys())

    def get_data_file_path(self) -> str:
        """Get the path to the data file."""
        return str(self.data_file)
