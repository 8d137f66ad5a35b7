from __future__ import annotations

"""
Main Application Controller.

Bridges dashboard events with the core: starts background scans, installs
their results into the selection state, repaints the usage bar and turns
bar clicks into selections.
"""

import logging
import os
import threading
from typing import Any, Dict, Optional

from dirstat.core.services.selection import SelectionState
from dirstat.core.services.validator import workers_or_none
from dirstat.domain.scan_models import ScanResult
from dirstat.infra.fs import normalize_path
from dirstat.interface.gui import threads
from dirstat.utils.formatting import format_share, format_size

logger = logging.getLogger(__name__)


class AppController:
    """
    Orchestrator between the dashboard view and the selection state.

    Attributes:
        app: Root window (used to marshal callbacks onto the Tk loop).
        config: Session configuration dictionary, updated in place.
        state: Current tree and selection.
    """

    def __init__(self, app: Any, config: Dict[str, Any]):
        self.app = app
        self.config = config
        self.state = SelectionState(folder=config.get("input_path", ""))
        self.view: Any = None
        self._scan_thread: Optional[threading.Thread] = None

    def register_view(self, dashboard: Any) -> None:
        self.view = dashboard
        dashboard.bar.set_click_callback(self.on_bar_click)
        dashboard.bar.set_resize_callback(self.refresh_bar)

    # ==========================================================================
    # SCAN LIFECYCLE
    # ==========================================================================

    def start_scan(self) -> None:
        """Launch a background scan of the folder typed in the dashboard."""
        if self._scan_thread is not None and self._scan_thread.is_alive():
            logger.debug("Scan already in flight; ignoring request.")
            return

        raw = self.view.get_input_path()
        if not raw:
            self.view.set_status("Please enter a folder path.")
            return

        folder = normalize_path(raw, os.getcwd())
        logger.debug(f"Traverse requested for {folder}")
        self.state.folder = folder
        self.config["input_path"] = folder

        self.view.set_busy(True)
        self.view.set_status(f"Scanning: {folder}")

        self._scan_thread = threading.Thread(
            target=threads.run_scan_task,
            args=(folder, self._on_scan_done_threadsafe),
            kwargs={
                "max_workers": workers_or_none(self.config),
                "follow_symlinks": bool(self.config.get("follow_symlinks", True)),
            },
            daemon=True,
        )
        self._scan_thread.start()

    def _on_scan_done_threadsafe(self, outcome: Any) -> None:
        self.app.after(0, lambda: self.on_scan_complete(outcome))

    def on_scan_complete(self, outcome: Any) -> None:
        """Install a finished scan (runs on the UI thread)."""
        self.view.set_busy(False)

        if isinstance(outcome, Exception):
            self.state.set_tree(None)
            self.view.set_status(f"Scan failed: {outcome}")
        elif isinstance(outcome, ScanResult) and outcome.tree is not None:
            self.state.set_tree(outcome.tree)
            stats = outcome.stats
            self.view.set_status(
                f"{stats.files:,} files in {stats.directories:,} directories, "
                f"{format_size(self.state.total)} ({stats.elapsed:.2f}s)"
            )
        else:
            self.state.set_tree(None)
            self.view.set_status(f"Found no files at {self.state.folder}")

        self._update_selected_label()
        self.refresh_bar()

    # ==========================================================================
    # BAR INTERACTION
    # ==========================================================================

    def on_bar_click(self, position: float, extent: float) -> None:
        self.state.click(position, extent)
        self._update_selected_label()
        self.refresh_bar()

    def refresh_bar(self) -> None:
        if self.view is None:
            return
        bar = self.view.bar
        bar.draw(self.state.segments(bar.extent), self.state.selected)

    def _update_selected_label(self) -> None:
        selected = self.state.selected
        if selected is None:
            self.view.set_selected_text("")
            return
        self.view.set_selected_text(
            f"{selected.path}  ({format_size(selected.size)}, "
            f"{format_share(selected.size, self.state.total)})"
        )
