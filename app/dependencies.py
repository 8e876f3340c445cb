"""Dependency injection container for SpeedMeter.

Provides a centralized way to create and wire application dependencies,
making components easier to test and swap out.

Usage:
    from app.dependencies import create_dependencies

    deps = create_dependencies()
    deps.sampler.tick()
    deps.accumulator.get_usage(PeriodKind.DAY)
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from config import STORAGE, get_logger

logger = get_logger(__name__)


@dataclass
class AppDependencies:
    """Container for all application dependencies.

    The sampler's usage callback is wired to the accumulator by the
    factory functions below.
    """

    # Core monitoring components
    counter_source: "PsutilCounterSource"
    interface_probe: "InterfaceProbe"
    sampler: "RateSampler"
    accumulator: "UsageAccumulator"

    # Storage components
    store: "JsonStore"
    settings: "SettingsManager"

    # Service components
    launch_manager: "LaunchAgentManager"

    def __post_init__(self):
        logger.debug("AppDependencies container created")


def create_dependencies(
    data_dir: Optional[Path] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> AppDependencies:
    """Create all application dependencies.

    Args:
        data_dir: Override the default data directory.
        clock: Local-time clock for the accumulator (tests only).

    Returns:
        AppDependencies container with all components.
    """
    # Import here to avoid circular imports
    from monitor.accumulator import UsageAccumulator
    from monitor.counters import InterfaceProbe, PsutilCounterSource
    from monitor.sampler import RateSampler
    from service.launch_agent import get_launch_agent_manager
    from storage.json_store import JsonStore
    from storage.settings import get_settings_manager

    logger.info("Creating application dependencies...")

    if data_dir is None:
        data_dir = Path.home() / STORAGE.DATA_DIR_NAME

    # Storage first, the accumulator loads from it
    store = JsonStore(data_dir=data_dir)
    settings = get_settings_manager(data_dir)

    accumulator = UsageAccumulator(store, clock=clock)
    counter_source = PsutilCounterSource()
    interface_probe = InterfaceProbe()
    sampler = RateSampler(
        counter_source,
        on_data_update=accumulator.add_usage,
        probe=interface_probe,
    )

    deps = AppDependencies(
        counter_source=counter_source,
        interface_probe=interface_probe,
        sampler=sampler,
        accumulator=accumulator,
        store=store,
        settings=settings,
        launch_manager=get_launch_agent_manager(data_dir),
    )

    logger.info("All dependencies created successfully")
    return deps


def create_mock_dependencies(
    data_dir: Path,
    clock: Optional[Callable[[], datetime]] = None,
) -> AppDependencies:
    """Create dependencies backed by test doubles.

    Uses a scripted counter source, an in-memory store and a mock launch
    agent manager, so nothing touches the real system.

    Args:
        data_dir: Directory for the settings file.
        clock: Local-time clock for the accumulator.
    """
    from monitor.accumulator import UsageAccumulator
    from monitor.sampler import RateSampler
    from storage.settings import SettingsManager
    from tests.mocks import (
        MockCounterSource,
        MockInterfaceProbe,
        MockKeyValueStore,
        MockLaunchAgentManager,
    )

    logger.debug("Creating mock dependencies for testing")

    store = MockKeyValueStore()
    accumulator = UsageAccumulator(store, clock=clock)
    counter_source = MockCounterSource()
    interface_probe = MockInterfaceProbe()
    sampler = RateSampler(
        counter_source,
        on_data_update=accumulator.add_usage,
        probe=interface_probe,
    )

    return AppDependencies(
        counter_source=counter_source,
        interface_probe=interface_probe,
        sampler=sampler,
        accumulator=accumulator,
        store=store,
        settings=SettingsManager(data_dir),
        launch_manager=MockLaunchAgentManager(),
    )
