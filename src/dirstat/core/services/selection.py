from __future__ import annotations

"""
Selection State Service.

Holds the host-facing session state: the current scan result, its measured
leaf sequence, and the at-most-one selected file. Interfaces (GUI canvas,
CLI) drive it with click positions; the state delegates the geometry to the
proportional mapper.
"""

import logging
from typing import List, Optional

from dirstat.core.analysis.mapper import ProportionalMap, Segment
from dirstat.core.analysis.sequencer import Measurement, measure
from dirstat.domain.tree_models import FileNode, FileTreeNode

logger = logging.getLogger(__name__)


class SelectionState:
    """
    Current tree plus the file selected on the usage bar.

    Attributes:
        folder: Root path of the last requested scan.
        tree: Current scan result, or None if nothing is loaded.
        selected: Currently highlighted file.
    """

    def __init__(self, folder: str = ""):
        self.folder: str = folder
        self.tree: Optional[FileTreeNode] = None
        self.selected: Optional[FileNode] = None
        self._measurement: Optional[Measurement] = None
        self._map: Optional[ProportionalMap] = None

    # ==========================================================================
    # TREE LIFECYCLE
    # ==========================================================================

    def set_tree(self, tree: Optional[FileTreeNode]) -> None:
        """
        Replace the current tree as a whole and drop the previous selection.

        Args:
            tree: Freshly scanned tree, or None when the scan failed.
        """
        self.tree = tree
        self.selected = None
        if tree is None:
            self._measurement = None
            self._map = None
            logger.debug("Found no files")
            return

        self._measurement = measure(tree)
        self._map = ProportionalMap(self._measurement.files, self._measurement.total)
        logger.debug(
            f"Loaded tree '{tree.path}' with {len(self._measurement)} files "
            f"({self._measurement.total} bytes)"
        )

    @property
    def measurement(self) -> Optional[Measurement]:
        return self._measurement

    @property
    def total(self) -> int:
        return self._measurement.total if self._measurement else 0

    # ==========================================================================
    # PAINT AND HIT-TEST
    # ==========================================================================

    def segments(self, extent: float) -> List[Segment]:
        """Forward mapping of the current tree onto ``extent``."""
        if self._map is None:
            return []
        return self._map.segments(extent)

    def click(self, position: float, extent: float) -> Optional[FileNode]:
        """
        Resolve a click and update the selection accordingly.

        With no tree loaded the selection is left untouched. Otherwise it is
        replaced by the hit file, or cleared when the click lands past all
        content.

        Args:
            position: Clicked coordinate along the bar.
            extent: Current bar length.

        Returns:
            Optional[FileNode]: The selection after the click.
        """
        if self._map is None:
            logger.debug(f"clicked at x: {position}, but don't have any files")
            return self.selected

        hit = self._map.resolve(extent, position)
        if hit is None:
            logger.warning("clicked on empty space")
        else:
            logger.debug(f"clicked: {hit.path} ({hit.size} B)")
        self.selected = hit
        return hit
