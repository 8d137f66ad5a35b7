from __future__ import annotations

"""
Proportional Mapper.

Translates between file sizes and positions on a linear extent (the width
of the usage bar). The forward mapping assigns every file a segment whose
width is proportional to its size; the inverse mapping resolves a clicked
position back to the file painted there.

Both directions derive their boundaries from exact integer running sums
(``cum / total``) rather than from an accumulated float, so the two stay
consistent with each other and the last segment ends exactly at the extent.

Boundary policy: each file owns the half-open interval
``[cum_before, cum_after)``; the right edge of the extent belongs to the last
non-empty file. Zero-size files own empty intervals and never resolve.
This deliberately departs from a cumulative ``size_so_far >= target`` walk,
which would hand an interior boundary (and position 0 after a leading
zero-size file) to the earlier file; here it goes to the file painted from it.
"""

import bisect
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from dirstat.domain.tree_models import FileNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DATA TRANSFER OBJECTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Segment:
    """
    Painted interval of a single file.

    Attributes:
        file: The file the segment represents.
        start: Inclusive start position on the extent.
        end: Exclusive end position on the extent.
        fraction: Share of the total size before this file (``done``).
    """
    file: FileNode
    start: float
    end: float
    fraction: float = 0.0

    @property
    def width(self) -> float:
        return self.end - self.start

    @property
    def midpoint(self) -> float:
        return (self.start + self.end) / 2.0

# -----------------------------------------------------------------------------
# FORWARD MAPPING (PAINT)
# -----------------------------------------------------------------------------

def paint_segments(
        files: Sequence[FileNode],
        total: int,
        extent: float,
) -> List[Segment]:
    """
    Assign each file a contiguous sub-interval of ``[0, extent]``.

    Args:
        files: Flattened leaves in canonical order.
        total: Sum of the leaf sizes.
        extent: Available linear space (e.g. widget width in pixels).

    Returns:
        List[Segment]: One segment per file, in sequence order. Empty when
                       there is nothing to distribute.
    """
    if total <= 0 or extent <= 0:
        logger.debug(f"Nothing to paint (total={total}, extent={extent})")
        return []

    segments: List[Segment] = []
    cum = 0
    for f in files:
        done = cum / total
        cum += f.size
        segments.append(Segment(
            file=f,
            start=extent * done,
            end=extent * (cum / total),
            fraction=done,
        ))
    return segments

# -----------------------------------------------------------------------------
# INVERSE MAPPING (HIT-TEST)
# -----------------------------------------------------------------------------

def resolve(
        files: Sequence[FileNode],
        total: int,
        extent: float,
        position: float,
) -> Optional[FileNode]:
    """
    Resolve a position on the extent to the file painted there.

    Walks the sequence accumulating sizes and returns the file whose
    interval contains ``target = total * (position / extent)``.

    Args:
        files: Flattened leaves in canonical order.
        total: Sum of the leaf sizes (same basis as ``paint_segments``).
        extent: Available linear space.
        position: Clicked position, expected within ``[0, extent]``.

    Returns:
        Optional[FileNode]: The hit file, or None when the position lands
                            outside all known content.
    """
    if total <= 0 or extent <= 0:
        return None
    if position < 0 or position > extent:
        return None

    target = total * (position / extent)
    cum = 0
    last_hit: Optional[FileNode] = None
    for f in files:
        before = cum
        cum += f.size
        if f.size == 0:
            continue
        last_hit = f
        if before <= target < cum:
            return f

    # Closed right edge of the final non-empty segment
    if last_hit is not None and target == cum:
        return last_hit

    logger.debug(f"Position {position} (target {target:.2f} B) is past all content")
    return None


class ProportionalMap:
    """
    Precomputed mapping for repeated hit-tests on the same sequence.

    Stores the cumulative end offset of every file so that ``resolve`` is a
    binary search. Produces the same answers as the module-level functions.
    """

    def __init__(self, files: Sequence[FileNode], total: Optional[int] = None):
        self.files: List[FileNode] = list(files)
        self._ends: List[int] = []
        cum = 0
        for f in self.files:
            cum += f.size
            self._ends.append(cum)
        self.total: int = cum if total is None else total

    def segments(self, extent: float) -> List[Segment]:
        return paint_segments(self.files, self.total, extent)

    def resolve(self, extent: float, position: float) -> Optional[FileNode]:
        """Binary-search counterpart of :func:`resolve`."""
        if self.total <= 0 or extent <= 0:
            return None
        if position < 0 or position > extent or not self._ends:
            return None

        target = self.total * (position / extent)

        # First file whose end lies strictly beyond the target
        idx = bisect.bisect_right(self._ends, target)
        if idx < len(self._ends):
            return self.files[idx]

        last_end = self._ends[-1]
        if last_end > 0 and target == last_end:
            # Skip trailing zero-size files
            idx = bisect.bisect_left(self._ends, last_end)
            return self.files[idx]
        return None
