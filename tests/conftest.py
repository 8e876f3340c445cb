"""Pytest configuration and shared fixtures.

This module provides:
- Common test fixtures for data directories, clocks and fakes
- Pytest markers for test categorization (unit, integration, slow)
"""
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from tests.mocks import FakeClock, MockCounterSource, MockKeyValueStore


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: mark test as a unit test (fast, isolated)")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "macos_only: mark test as requiring macOS")


# =============================================================================
# Directory and Path Fixtures
# =============================================================================


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# =============================================================================
# Clock Fixtures
# =============================================================================


@pytest.fixture
def wednesday() -> datetime:
    """A mid-week, mid-month afternoon: Wednesday 2026-10-14 15:30."""
    return datetime(2026, 10, 14, 15, 30, 0)


@pytest.fixture
def clock(wednesday: datetime) -> FakeClock:
    return FakeClock(wednesday)


# =============================================================================
# Fake Collaborators
# =============================================================================


@pytest.fixture
def memory_store() -> MockKeyValueStore:
    return MockKeyValueStore()


@pytest.fixture
def counter_source() -> MockCounterSource:
    return MockCounterSource()


@pytest.fixture
def mock_psutil() -> Generator[MagicMock, None, None]:
    """Mock psutil per-interface counters."""
    with patch("psutil.net_io_counters") as mock_io:
        mock_io.return_value = {
            "en0": MagicMock(bytes_recv=5_000_000, bytes_sent=1_000_000),
            "en1": MagicMock(bytes_recv=2_000, bytes_sent=1_000),
            "lo0": MagicMock(bytes_recv=900_000, bytes_sent=900_000),
        }
        yield mock_io


@pytest.fixture
def mock_subprocess() -> Generator[MagicMock, None, None]:
    """Mock subprocess for command execution testing."""
    with patch("subprocess.run") as mock_run:
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        yield mock_run


# =============================================================================
# Integration Test Fixtures
# =============================================================================


@pytest.fixture
def integration_data_dir(tmp_path: Path) -> Path:
    """Create a complete data directory structure for integration tests."""
    data_dir = tmp_path / ".speedmeter"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir
