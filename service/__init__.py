"""OS integration services."""

from .launch_agent import LaunchAgentManager, get_launch_agent_manager

__all__ = ["LaunchAgentManager", "get_launch_agent_manager"]
