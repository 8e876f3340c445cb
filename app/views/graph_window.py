"""Dashboard window for SpeedMeter.

Renders the recent speed history and the per-period usage totals with
matplotlib, then opens the image in the default viewer.
"""

import subprocess
import sys
import tempfile
import threading
from pathlib import Path
from typing import Callable, List, Mapping, Optional

from config import STORAGE, UI, get_logger
from monitor.stats import PeriodKind, SpeedPoint, UsageBucket
from monitor.utils import format_date_range

logger = get_logger(__name__)

KIB = 1024


def render_dashboard(
    history: List[SpeedPoint],
    usage: Mapping[PeriodKind, UsageBucket],
    output_path: Path,
) -> Path:
    """Draw the dashboard and save it as a PNG.

    Args:
        history: Recent speed samples, oldest first.
        usage: Current bucket for each period.
        output_path: Where to write the image.

    Returns:
        The path written.
    """
    import matplotlib

    # Agg backend, the menu bar app has no GUI main loop for pyplot
    matplotlib.use("Agg")
    from matplotlib import pyplot as plt

    fig = plt.figure(figsize=UI.CHART_SIZE)
    try:
        fig.suptitle(f"{UI.APP_NAME} Dashboard", fontsize=14, fontweight="bold")
        speed_ax = fig.add_subplot(2, 1, 1)
        usage_ax = fig.add_subplot(2, 1, 2)

        # Speed history (KB/s)
        if history:
            times = [point.timestamp for point in history]
            downloads = [point.download_speed / KIB for point in history]
            uploads = [point.upload_speed / KIB for point in history]
            speed_ax.plot(times, downloads, label="Download", color=UI.DOWNLOAD_COLOR, linewidth=2)
            speed_ax.plot(times, uploads, label="Upload", color=UI.UPLOAD_COLOR, linewidth=2)
            speed_ax.fill_between(times, downloads, alpha=0.3, color=UI.DOWNLOAD_COLOR)
            speed_ax.fill_between(times, uploads, alpha=0.3, color=UI.UPLOAD_COLOR)
            speed_ax.legend()
        else:
            speed_ax.text(0.5, 0.5, "No samples yet", ha="center", va="center",
                          transform=speed_ax.transAxes)
        speed_ax.set_title(f"Speed History (Last {UI.HISTORY_SIZE} samples)")
        speed_ax.set_ylabel("KB/s")
        speed_ax.grid(True, alpha=0.3)

        # Usage per period (MB)
        periods = [period for period in PeriodKind if period in usage]
        labels = [
            f"{period.label}\n{format_date_range(usage[period].period_start, usage[period].period_end)}"
            for period in periods
        ]
        downloaded = [usage[period].total_downloaded / (KIB * KIB) for period in periods]
        uploaded = [usage[period].total_uploaded / (KIB * KIB) for period in periods]
        x = range(len(periods))
        width = 0.35
        usage_ax.bar([i - width / 2 for i in x], downloaded, width,
                     label="Downloaded", color=UI.DOWNLOAD_COLOR)
        usage_ax.bar([i + width / 2 for i in x], uploaded, width,
                     label="Uploaded", color=UI.UPLOAD_COLOR)
        usage_ax.set_title("Data Usage")
        usage_ax.set_ylabel("MB")
        usage_ax.set_xticks(list(x))
        usage_ax.set_xticklabels(labels, fontsize=8)
        usage_ax.legend()
        usage_ax.grid(True, alpha=0.3, axis="y")

        fig.tight_layout()
        fig.savefig(output_path, dpi=UI.CHART_DPI, bbox_inches="tight")
    finally:
        plt.close(fig)

    return output_path


class GraphWindow:
    """Shows the dashboard image without blocking the menu."""

    def __init__(
        self,
        history_provider: Callable[[], List[SpeedPoint]],
        usage_provider: Callable[[], Mapping[PeriodKind, UsageBucket]],
        output_dir: Optional[Path] = None,
    ):
        """Initialize the graph window.

        Args:
            history_provider: Returns the recent speed samples.
            usage_provider: Returns the current bucket for each period.
            output_dir: Where rendered images go. Defaults to a temp dir.
        """
        self._history_provider = history_provider
        self._usage_provider = usage_provider
        self._output_dir = output_dir or Path(tempfile.gettempdir()) / STORAGE.DASHBOARD_TEMP_DIR
        self._window_open = False
        logger.debug("GraphWindow initialized")

    def show(self) -> None:
        """Render and open the dashboard in a background thread."""
        if self._window_open:
            logger.debug("Dashboard already rendering")
            return

        self._window_open = True
        threading.Thread(target=self._show_window, daemon=True).start()

    def render(self) -> Path:
        """Render the dashboard from the current snapshots."""
        self._output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self._output_dir / "dashboard.png"
        return render_dashboard(self._history_provider(), self._usage_provider(), output_path)

    def _show_window(self) -> None:
        try:
            path = self.render()
            if sys.platform == "darwin":
                subprocess.run(["open", str(path)], check=True)
            logger.info(f"Dashboard saved and opened: {path}")
        except Exception as e:
            logger.error(f"Error showing dashboard: {e}", exc_info=True)
            import rumps

            rumps.notification(
                title="Dashboard Error",
                subtitle="Could not open the dashboard",
                message=f"Error: {str(e)[:100]}",
                sound=False,
            )
        finally:
            self._window_open = False
