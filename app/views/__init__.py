"""View components for SpeedMeter UI.

Contains:
- menu_builder: Dropdown menu construction (rumps)
- graph_window: Dashboard rendering (matplotlib)
"""
from app.views.graph_window import GraphWindow, render_dashboard

__all__ = [
    "GraphWindow",
    "render_dashboard",
]
