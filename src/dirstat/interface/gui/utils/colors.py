from __future__ import annotations

"""
Bar Palette Helpers.

Pure color computations for the usage bar: a red-to-blue gradient along
the bar and a contrasting outline color for the selected segment.
"""

from typing import Tuple

RGB = Tuple[float, float, float]


def gradient_rgb(done: float) -> RGB:
    """Red at the left edge fading to blue at the right edge."""
    done = min(max(done, 0.0), 1.0)
    return 1.0 - done, 0.0, done


def contrasting_rgb(color: RGB) -> RGB:
    """
    Pick an outline color that stands out against ``color``.

    Grey shades map to black or white depending on luminance; other colors
    are inverted channel by channel.
    """
    red, green, blue = color
    if red == green == blue:
        luminance = 0.2126 * red + 0.7152 * green + 0.0722 * blue
        level = 0.0 if luminance > 0.5 else 1.0
        return level, level, level
    return 1.0 - red, 1.0 - green, 1.0 - blue


def to_hex(color: RGB) -> str:
    """Convert a 0..1 RGB triple into a Tk color string."""
    return "#" + "".join(f"{round(min(max(c, 0.0), 1.0) * 255):02x}" for c in color)
