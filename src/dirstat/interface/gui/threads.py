from __future__ import annotations

"""
Background Worker Threads for GUI Operations.

Runs filesystem scans off the Tk main loop. Results are handed to a
callback that is responsible for marshalling them back onto the UI thread.
"""

import logging
from typing import Any, Callable, Optional

from dirstat.core.services.scanner import scan_with_stats

logger = logging.getLogger(__name__)


def run_scan_task(
        root_path: str,
        on_complete: Callable[[Any], None],
        max_workers: Optional[int] = None,
        follow_symlinks: bool = True,
) -> None:
    """
    Scan ``root_path`` and report the ScanResult (or the raised exception).

    Args:
        root_path: Folder requested by the user.
        on_complete: Receives a ScanResult on success, an Exception otherwise.
        max_workers: Scanner thread pool size.
        follow_symlinks: Whether the scanner descends into symlinked directories.
    """
    try:
        result = scan_with_stats(
            root_path, max_workers=max_workers, follow_symlinks=follow_symlinks
        )
        on_complete(result)
    except Exception as e:
        logger.critical(f"Scan Thread: Critical failure detected: {e}", exc_info=True)
        on_complete(e)
