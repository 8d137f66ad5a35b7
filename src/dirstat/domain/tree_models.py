from __future__ import annotations

"""
File Tree Data Models.

Provides the recursive, immutable node types produced by the scanner and
consumed by the sequencer and the proportional mapper. A tree is never
mutated after construction; a new scan replaces it as a whole.
"""

from dataclasses import dataclass, field
from typing import Tuple, Union

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileNode:
    """
    Represents a leaf entry (file) in the scanned tree.

    Attributes:
        path: Filesystem path to the file.
        size: Measured size in bytes.
    """
    path: str
    size: int = 0

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"File size cannot be negative: {self.path} ({self.size})")


@dataclass(frozen=True)
class DirectoryNode:
    """
    Represents a directory and its scanned children.

    The directory itself weighs nothing; its footprint is the sum of
    the files below it.

    Attributes:
        path: Filesystem path to the directory.
        children: Child nodes in scan order.
    """
    path: str
    children: Tuple["FileTreeNode", ...] = field(default_factory=tuple)

    @property
    def size(self) -> int:
        return 0


FileTreeNode = Union[DirectoryNode, FileNode]

# -----------------------------------------------------------------------------
# PURE QUERIES
# -----------------------------------------------------------------------------

def node_size(node: FileTreeNode) -> int:
    """Return 0 for directories and the stored byte count for files."""
    if isinstance(node, FileNode):
        return node.size
    return 0


def node_path(node: FileTreeNode) -> str:
    """Return the path of a node regardless of its variant."""
    return node.path
