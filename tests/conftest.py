from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Path manipulation to ensure the 'src' directory is importable.
2. Shared in-memory trees and on-disk sample folders.
"""

import os
import sys
from pathlib import Path

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from dirstat.domain.tree_models import DirectoryNode, FileNode  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_tree() -> DirectoryNode:
    """
    Reference tree used across the mapper and sequencer tests.

    Structure:
    /
      a      (1 B)
      b/
        c    (3 B)
    """
    return DirectoryNode("/", (
        FileNode("/a", 1),
        DirectoryNode("/b", (FileNode("/b/c", 3),)),
    ))


@pytest.fixture
def nested_tree() -> DirectoryNode:
    """Wider tree with empty directories and zero-size files."""
    return DirectoryNode("/r", (
        DirectoryNode("/r/empty", ()),
        FileNode("/r/z0", 0),
        DirectoryNode("/r/d1", (
            FileNode("/r/d1/x", 10),
            DirectoryNode("/r/d1/d2", (
                FileNode("/r/d1/d2/y", 5),
                FileNode("/r/d1/d2/zero", 0),
            )),
            FileNode("/r/d1/w", 7),
        )),
        FileNode("/r/last", 78),
    ))


@pytest.fixture
def sample_folder(tmp_path: Path) -> Path:
    """
    Real folder on disk.

    Structure:
    /root
      a.bin        (1 B)
      b/
        c.bin      (3 B)
        d/
          e.bin    (6 B)
      empty/
    """
    root = tmp_path / "root"
    root.mkdir()
    (root / "a.bin").write_bytes(b"x")
    (root / "b").mkdir()
    (root / "b" / "c.bin").write_bytes(b"xyz")
    (root / "b" / "d").mkdir()
    (root / "b" / "d" / "e.bin").write_bytes(b"abcdef")
    (root / "empty").mkdir()
    return root
