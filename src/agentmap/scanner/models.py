"""Scan results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from agentmap.extract.models import Definition
from agentmap.git.models import FileDiff, FileDiffStats, FileStatus


@dataclass
class FileResult:
    """Everything known about one mapped file."""

    path: str  # normalized, relative to the scan root
    definitions: List[Definition] = field(default_factory=list)
    description: Optional[str] = None
    stats: Optional[FileDiffStats] = None
    status: Optional[FileStatus] = None  # from the hunk pass; None when untouched
    renamed_from: Optional[str] = None

    def apply_file_diff(self, file_diff: Optional[FileDiff]) -> None:
        if file_diff is not None:
            self.status = file_diff.status
            self.renamed_from = file_diff.old_path

    @property
    def changed_definitions(self) -> List[Definition]:
        return [d for d in self.definitions if d.diff is not None]


@dataclass
class ScanResult:
    """Aggregate result of scanning one directory."""

    files: List[FileResult] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    candidate_files: int = 0
    diff_enabled: bool = False
    diff_available: bool = False
    cancelled: bool = False
    scan_duration_ms: float = 0.0

    @property
    def scanned_files(self) -> int:
        return len(self.files)

    @property
    def total_definitions(self) -> int:
        return sum(len(f.definitions) for f in self.files)

    @property
    def changed_definitions(self) -> int:
        return sum(len(f.changed_definitions) for f in self.files)
