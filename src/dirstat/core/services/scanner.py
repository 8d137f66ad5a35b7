from __future__ import annotations

"""
Concurrent Filesystem Scanner.

Walks a directory tree and builds the immutable file tree model. Sibling
directories are listed in parallel on a shared thread pool, one tree level
at a time (a join-all barrier per level), and the nodes are then assembled
bottom-up without recursion.

All filesystem failures are soft: an unreadable root yields None, an
unlistable directory drops its subtree, and entries that cannot be
classified are skipped.
"""

import logging
import os
import stat
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from dirstat.domain.scan_models import ScanResult, ScanStats
from dirstat.domain.tree_models import DirectoryNode, FileNode, FileTreeNode

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

# -----------------------------------------------------------------------------
# INTERNAL LISTING MODELS
# -----------------------------------------------------------------------------

@dataclass
class _Entry:
    """Classified child of a listed directory."""
    path: str
    is_dir: bool
    size: int = 0
    dir_id: int = -1


@dataclass
class _Listing:
    """Outcome of listing a single directory."""
    entries: List[_Entry] = field(default_factory=list)
    skipped: int = 0

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def scan(
        root_path: PathLike,
        *,
        max_workers: Optional[int] = None,
        follow_symlinks: bool = True,
) -> Optional[FileTreeNode]:
    """
    Build the file tree rooted at ``root_path``.

    Args:
        root_path: File or directory to scan.
        max_workers: Thread pool size (None for the executor default).
        follow_symlinks: Whether symlinked directories below the root are
                         descended into.

    Returns:
        Optional[FileTreeNode]: The tree, or None if the root is unreadable.
    """
    return scan_with_stats(
        root_path, max_workers=max_workers, follow_symlinks=follow_symlinks
    ).tree


def scan_with_stats(
        root_path: PathLike,
        *,
        max_workers: Optional[int] = None,
        follow_symlinks: bool = True,
) -> ScanResult:
    """
    Scan a path and report the resulting tree along with scan counters.

    The root itself is always resolved through symlinks since the caller
    named it explicitly. Symlinks to files always count with the size of
    their target; ``follow_symlinks`` only decides whether symlinked
    directories are descended into (there is no cycle detection).

    Args:
        root_path: File or directory to scan.
        max_workers: Thread pool size (None for the executor default).
        follow_symlinks: Whether symlinked directories are descended into.

    Returns:
        ScanResult: Tree (possibly None) and statistics.
    """
    path = os.fspath(root_path)
    started = time.perf_counter()
    logger.info(f"Starting scan of: {path}")

    try:
        st = os.stat(path)
    except (OSError, ValueError) as e:
        logger.debug(f"Cannot stat root '{path}': {e}")
        return ScanResult(path, None, ScanStats(elapsed=time.perf_counter() - started))

    if stat.S_ISREG(st.st_mode):
        logger.debug(f"Found file `{path}`")
        return ScanResult(
            path,
            FileNode(path=path, size=st.st_size),
            ScanStats(files=1, elapsed=time.perf_counter() - started),
        )

    if not stat.S_ISDIR(st.st_mode):
        logger.warning(f"Unsupported filesystem object at root: {path}")
        return ScanResult(path, None, ScanStats(skipped=1, elapsed=time.perf_counter() - started))

    dir_paths, listings = _list_tree(path, max_workers, follow_symlinks)
    tree, counters = _assemble(dir_paths, listings)

    stats = ScanStats(
        directories=counters["directories"],
        files=counters["files"],
        skipped=counters["skipped"],
        unlistable=counters["unlistable"],
        elapsed=time.perf_counter() - started,
    )
    logger.info(
        f"Scan finished: {stats.directories} directories, {stats.files} files, "
        f"{stats.skipped} skipped in {stats.elapsed:.2f}s"
    )
    return ScanResult(path, tree, stats)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (PARALLEL LISTING)
# -----------------------------------------------------------------------------

def _list_tree(
        root: str,
        max_workers: Optional[int],
        follow_symlinks: bool,
) -> Tuple[List[str], List[Optional[_Listing]]]:
    """
    List every reachable directory, fanning out one tree level at a time.

    Directory ids are assigned in discovery order, so a child always has a
    larger id than its parent.
    """
    dir_paths: List[str] = [root]
    listings: List[Optional[_Listing]] = [None]
    frontier: List[int] = [0]

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ScanWorker") as executor:
        while frontier:
            futures: List[Tuple[int, Future]] = [
                (dir_id, executor.submit(_list_directory, dir_paths[dir_id], follow_symlinks))
                for dir_id in frontier
            ]

            next_frontier: List[int] = []
            for dir_id, future in futures:
                listing = future.result()
                listings[dir_id] = listing
                if listing is None:
                    continue
                for entry in listing.entries:
                    if entry.is_dir:
                        entry.dir_id = len(dir_paths)
                        dir_paths.append(entry.path)
                        listings.append(None)
                        next_frontier.append(entry.dir_id)
            frontier = next_frontier

    return dir_paths, listings


def _list_directory(path: str, follow_symlinks: bool) -> Optional[_Listing]:
    """
    Read and classify the immediate entries of a directory.

    Executed on a worker thread. Returns None when the directory cannot be
    listed at all.
    """
    try:
        with os.scandir(path) as it:
            raw = list(it)
    except (OSError, ValueError) as e:
        logger.debug(f"Failed traverse with path `{path}`: {e}")
        return None

    listing = _Listing()
    for entry in sorted(raw, key=lambda e: e.name):
        try:
            if entry.is_dir(follow_symlinks=follow_symlinks):
                listing.entries.append(_Entry(path=entry.path, is_dir=True))
            elif entry.is_file():
                listing.entries.append(_Entry(path=entry.path, is_dir=False, size=_entry_size(entry)))
            elif entry.is_symlink() and entry.is_dir():
                logger.debug(f"Not following symlinked directory: {entry.path}")
                listing.skipped += 1
            else:
                logger.warning(f"Skipping unsupported filesystem object: {entry.path}")
                listing.skipped += 1
        except OSError as e:
            logger.debug(f"Cannot stat entry '{entry.path}': {e}")
            listing.skipped += 1

    logger.debug(f"Found directory `{path}` with `{len(listing.entries)}` children")
    return listing


def _entry_size(entry: os.DirEntry) -> int:
    """Read the (link target) file size, defaulting to 0 if it vanished or is unreadable."""
    try:
        return entry.stat().st_size
    except OSError:
        return 0

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (BOTTOM-UP ASSEMBLY)
# -----------------------------------------------------------------------------

def _assemble(
        dir_paths: List[str],
        listings: List[Optional[_Listing]],
) -> Tuple[Optional[FileTreeNode], Dict[str, int]]:
    """
    Build DirectoryNodes from the deepest ids upward.

    Since children carry larger ids than their parents, walking the ids in
    reverse guarantees every child node exists before its parent is built.
    """
    counters = {"directories": 0, "files": 0, "skipped": 0, "unlistable": 0}
    built: Dict[int, Optional[DirectoryNode]] = {}

    for dir_id in range(len(dir_paths) - 1, -1, -1):
        listing = listings[dir_id]
        if listing is None:
            counters["unlistable"] += 1
            built[dir_id] = None
            continue

        counters["directories"] += 1
        counters["skipped"] += listing.skipped

        children: List[FileTreeNode] = []
        for entry in listing.entries:
            if entry.is_dir:
                child = built.pop(entry.dir_id, None)
                if child is not None:
                    children.append(child)
            else:
                counters["files"] += 1
                children.append(FileNode(path=entry.path, size=entry.size))

        built[dir_id] = DirectoryNode(path=dir_paths[dir_id], children=tuple(children))

    return built.get(0), counters
