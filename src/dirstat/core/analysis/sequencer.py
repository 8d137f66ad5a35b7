from __future__ import annotations

"""
Flattening Sequencer.

Reduces a file tree to the canonical, depth-first, left-to-right sequence
of its leaves. The same order drives painting, hit-testing and the total
size sum, so every traversal of a given tree must yield identical results.
"""

import heapq
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from dirstat.domain.tree_models import DirectoryNode, FileNode, FileTreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# TRAVERSAL
# -----------------------------------------------------------------------------

def iter_files(root: FileTreeNode) -> Iterator[FileNode]:
    """
    Lazily yield every file below (or equal to) the given node.

    Uses an explicit work stack instead of recursion so that pathologically
    deep trees cannot exhaust the interpreter's call stack. Children are
    pushed in reverse so they pop in their stored order.

    Args:
        root: Tree (or subtree) to traverse.

    Yields:
        FileNode: Leaves in canonical order. Directories are never yielded.
    """
    stack: List[FileTreeNode] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, DirectoryNode):
            stack.extend(reversed(node.children))
        else:
            yield node


class LeafSequence:
    """
    Restartable view over the leaves of a tree.

    Each call to ``iter()`` starts a fresh traversal, so the sequence can be
    consumed any number of times without being materialized.
    """

    def __init__(self, root: FileTreeNode):
        self._root = root

    @property
    def root(self) -> FileTreeNode:
        return self._root

    def __iter__(self) -> Iterator[FileNode]:
        return iter_files(self._root)

# -----------------------------------------------------------------------------
# MATERIALIZATION AND MEASUREMENT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Measurement:
    """
    Flattened leaves of a tree together with their total size.

    Attributes:
        files: Leaves in canonical order.
        total: Sum of the leaf sizes in bytes.
    """
    files: Tuple[FileNode, ...]
    total: int

    def __len__(self) -> int:
        return len(self.files)


def flatten(root: FileTreeNode) -> Tuple[FileNode, ...]:
    """Materialize the canonical leaf order of a tree."""
    return tuple(iter_files(root))


def total_size(files: Iterable[FileNode]) -> int:
    """Sum the sizes of a leaf sequence."""
    return sum(f.size for f in files)


def measure(root: FileTreeNode) -> Measurement:
    """
    Flatten a tree and compute its total size in a single pass.

    Args:
        root: Tree to measure.

    Returns:
        Measurement: Leaves and total, ready for the proportional mapper.
    """
    files = flatten(root)
    total = total_size(files)
    logger.debug(f"Measured {len(files)} files totalling {total} bytes under '{root.path}'")
    return Measurement(files=files, total=total)

# -----------------------------------------------------------------------------
# SUMMARY HELPERS
# -----------------------------------------------------------------------------

def count_nodes(root: FileTreeNode) -> Tuple[int, int]:
    """
    Count directories and files in a tree without recursion.

    Returns:
        Tuple[int, int]: (directories, files).
    """
    directories = 0
    files = 0
    stack: List[FileTreeNode] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, DirectoryNode):
            directories += 1
            stack.extend(node.children)
        else:
            files += 1
    return directories, files


def largest_files(files: Iterable[FileNode], n: int) -> List[FileNode]:
    """Return the ``n`` biggest files, largest first. Ties keep sequence order."""
    if n <= 0:
        return []
    indexed = list(enumerate(files))
    top = heapq.nsmallest(n, indexed, key=lambda item: (-item[1].size, item[0]))
    return [f for _, f in top]
