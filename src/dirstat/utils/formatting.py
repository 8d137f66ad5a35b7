from __future__ import annotations

"""
Human-readable formatting helpers shared by the CLI report and the GUI.
"""

_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(size: float) -> str:
    """Format a byte count using binary (1024) multiples."""
    if size == 0:
        return "0 B"

    value = float(size)
    for unit in _UNITS:
        if abs(value) < 1024.0:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.2f} {unit}"
        value /= 1024.0
    return f"{value:.2f} PB"


def format_share(size: int, total: int) -> str:
    """Percentage of ``total`` taken by ``size``."""
    if total <= 0:
        return "0.00%"
    return f"{100.0 * size / total:.2f}%"
