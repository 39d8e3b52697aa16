"""Data models for diff parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    RENAMED = "renamed"


@dataclass(frozen=True, slots=True)
class DiffHunk:
    """One change region; 1-based line numbers on each side."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int

    @property
    def new_end(self) -> int:
        """Last added line, or ``new_start`` for a pure deletion."""
        return self.new_start + max(self.new_count, 1) - 1


@dataclass
class FileDiff:
    """Hunks for one file, keyed by its normalized path in the new tree."""

    path: str
    hunks: List[DiffHunk] = field(default_factory=list)
    old_path: Optional[str] = None  # set on renames
    status: FileStatus = FileStatus.MODIFIED


@dataclass(frozen=True, slots=True)
class FileDiffStats:
    """Aggregate added/deleted counts for one file (from ``--numstat``)."""

    added: int
    deleted: int


@dataclass
class DiffData:
    """Both diff passes for one comparison; read-only once built."""

    files: Dict[str, FileDiff] = field(default_factory=dict)
    stats: Dict[str, FileDiffStats] = field(default_factory=dict)

    def file_diff(self, path: str) -> Optional[FileDiff]:
        return self.files.get(normalize_path(path))

    def file_stats(self, path: str) -> Optional[FileDiffStats]:
        return self.stats.get(normalize_path(path))


def normalize_path(path: str) -> str:
    """Forward slashes, no leading ``./``."""
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized
