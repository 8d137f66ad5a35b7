from __future__ import annotations

"""
Scan Result Data Models.

Lightweight DTOs describing the outcome of a filesystem scan, kept apart
from the tree itself so that the tree stays a pure structural value.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from dirstat.domain.tree_models import FileTreeNode


@dataclass(frozen=True)
class ScanStats:
    """
    Counters collected while scanning.

    Attributes:
        directories: Directories listed successfully.
        files: Files measured.
        skipped: Entries dropped (stat failures, unsupported object types).
        unlistable: Directories whose listing failed (subtree omitted).
        elapsed: Wall-clock duration in seconds.
    """
    directories: int = 0
    files: int = 0
    skipped: int = 0
    unlistable: int = 0
    elapsed: float = 0.0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "directories": self.directories,
            "files": self.files,
            "skipped": self.skipped,
            "unlistable": self.unlistable,
            "elapsed": round(self.elapsed, 4),
        }


@dataclass(frozen=True)
class ScanResult:
    """Tree produced by a scan together with its counters."""
    root_path: str
    tree: Optional[FileTreeNode]
    stats: ScanStats

    @property
    def ok(self) -> bool:
        return self.tree is not None
