"""Application module for SpeedMeter.

Contains the main application components:
- AppController: Sampling and accumulation orchestration with DI
- IntervalTimer: Background ticker driving the sampler
- Views: UI components (menu, dashboard)
"""

from app.controller import AppController
from app.dependencies import AppDependencies, create_dependencies
from app.timer import IntervalTimer

__all__ = [
    "AppController",
    "AppDependencies",
    "IntervalTimer",
    "create_dependencies",
]
