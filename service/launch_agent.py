"""Launch at login for SpeedMeter via a per-user LaunchAgent.

Enabling writes a plist that starts speed_meter.py at login. The agent is
not loaded right away since the app is already running.
"""
import plistlib
import subprocess
import sys
from pathlib import Path
from typing import Optional, Tuple

from config import INTERVALS, LAUNCH_AGENT, STORAGE, get_logger

logger = get_logger(__name__)

STATUS_ON = "✓ Launch at Login: On"
STATUS_OFF = "○ Launch at Login: Off"


class LaunchAgentManager:
    """Creates and removes the SpeedMeter LaunchAgent plist.

    Args:
        launch_agents_dir: Defaults to ~/Library/LaunchAgents.
        log_dir: Where the agent's stdout/stderr go. Defaults to ~/.speedmeter.
    """

    AGENT_LABEL = LAUNCH_AGENT.AGENT_LABEL
    AGENT_FILENAME = LAUNCH_AGENT.AGENT_FILENAME

    def __init__(self, launch_agents_dir: Optional[Path] = None,
                 log_dir: Optional[Path] = None):
        self.launch_agents_dir = launch_agents_dir or Path.home() / "Library" / "LaunchAgents"
        self.log_dir = log_dir or Path.home() / STORAGE.DATA_DIR_NAME
        self.agent_path = self.launch_agents_dir / self.AGENT_FILENAME
        self.app_dir = Path(__file__).parent.parent.resolve()
        self.script_path = self.app_dir / "speed_meter.py"
        self.python_path = self._get_python_path()
        logger.debug(f"LaunchAgentManager initialized: {self.agent_path}")

    def _get_python_path(self) -> str:
        """The project's venv interpreter if there is one, else the current one."""
        venv_python = self.app_dir / "venv" / "bin" / "python"
        if venv_python.exists():
            return str(venv_python)
        return sys.executable or "/usr/bin/python3"

    def _create_plist_content(self) -> dict:
        return {
            "Label": self.AGENT_LABEL,
            "ProgramArguments": [self.python_path, str(self.script_path)],
            "WorkingDirectory": str(self.app_dir),
            "RunAtLoad": True,
            "KeepAlive": False,
            "StandardOutPath": str(self.log_dir / STORAGE.STDOUT_LOG),
            "StandardErrorPath": str(self.log_dir / STORAGE.STDERR_LOG),
        }

    def _launchctl(self, *args: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            ["launchctl", *args],
            capture_output=True,
            text=True,
            timeout=INTERVALS.SUBPROCESS_TIMEOUT_SECONDS,
        )

    def is_enabled(self) -> bool:
        return self.agent_path.exists()

    def is_loaded(self) -> bool:
        """Whether launchd currently knows the agent."""
        try:
            return self._launchctl("list", self.AGENT_LABEL).returncode == 0
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"launchctl list failed: {e}")
            return False

    def enable(self) -> Tuple[bool, str]:
        """Write the agent plist.

        Returns:
            (success, message) for the user.
        """
        try:
            self.launch_agents_dir.mkdir(parents=True, exist_ok=True)
            self.log_dir.mkdir(parents=True, exist_ok=True)
            with open(self.agent_path, 'wb') as f:
                plistlib.dump(self._create_plist_content(), f)
        except PermissionError:
            logger.error(f"Permission denied writing {self.agent_path}")
            return False, "Permission denied - cannot write to LaunchAgents"
        except OSError as e:
            logger.error(f"Error enabling launch at login: {e}")
            return False, f"Error: {e}"

        logger.info("Launch at Login enabled")
        return True, "Launch at Login enabled"

    def disable(self) -> Tuple[bool, str]:
        """Unload the agent if launchd has it, then delete the plist.

        Returns:
            (success, message) for the user.
        """
        try:
            if self.is_loaded():
                self._launchctl("unload", str(self.agent_path))
            self.agent_path.unlink(missing_ok=True)
        except PermissionError:
            logger.error(f"Permission denied removing {self.agent_path}")
            return False, "Permission denied - cannot remove LaunchAgent"
        except (OSError, subprocess.SubprocessError) as e:
            logger.error(f"Error disabling launch at login: {e}")
            return False, f"Error: {e}"

        logger.info("Launch at Login disabled")
        return True, "Launch at Login disabled"

    def toggle(self) -> Tuple[bool, str]:
        if self.is_enabled():
            return self.disable()
        return self.enable()

    def get_status(self) -> str:
        """Menu title for the current state."""
        return STATUS_ON if self.is_enabled() else STATUS_OFF


def get_launch_agent_manager(data_dir: Optional[Path] = None) -> LaunchAgentManager:
    """Create a manager whose agent logs into data_dir."""
    return LaunchAgentManager(log_dir=data_dir)
