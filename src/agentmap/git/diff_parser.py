"""Unified diff and numstat parsing.

``DiffParser`` yields one ``FileDiff`` per file that has usable hunks.
Binary files, mode-only changes and deleted files yield nothing: their lines
do not exist in the new tree. ``parse_numstat`` produces the aggregate
counts separately, so a path may have stats but no FileDiff.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Generator, Optional

from agentmap.git.adapter import GitError, get_hunk_diff, get_numstat
from agentmap.git.models import (
    DiffData,
    DiffHunk,
    FileDiff,
    FileDiffStats,
    FileStatus,
    normalize_path,
)
from agentmap.logging_config import get_logger

logger = get_logger("git")

# --- Regex patterns for diff parsing ---

_DIFF_HEADER_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")
_HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@"
)
_BINARY_RE = re.compile(r"^Binary files .* and .* differ$")
_RENAME_FROM_RE = re.compile(r"^rename from (.+)$")
_RENAME_TO_RE = re.compile(r"^rename to (.+)$")
_NEW_PATH_RE = re.compile(r"^\+\+\+ (?:b/(.*)|/dev/null)$")
_OLD_PATH_RE = re.compile(r"^--- (?:a/(.*)|/dev/null)$")
_DELETED_FILE_RE = re.compile(r"^deleted file mode \d+$")
_NEW_FILE_RE = re.compile(r"^new file mode \d+$")
_SUBHEADER_RE = re.compile(
    r"^(?:index [0-9a-f]+\.\.[0-9a-f]+|similarity index \d+%|dissimilarity index \d+%"
    r"|old mode \d+|new mode \d+|copy from .+|copy to .+)"
)

# numstat rename forms: "old => new" and "dir/{old => new}/file"
_BRACE_RENAME_RE = re.compile(r"\{([^{}]*) => ([^{}]*)\}")


class DiffParser:
    """Parse zero-context unified diff text into FileDiff objects.

    Usage::

        for file_diff in DiffParser(diff_text).parse():
            ...
    """

    def __init__(self, diff_text: str) -> None:
        self._lines = diff_text.splitlines()

    def parse(self) -> Generator[FileDiff, None, None]:
        idx = 0
        total = len(self._lines)
        current: Optional[FileDiff] = None
        skip = False

        while idx < total:
            raw_line = self._lines[idx].rstrip("\r")

            # --- diff --git header → new file context ---
            m = _DIFF_HEADER_RE.match(raw_line)
            if m:
                if current is not None and current.hunks:
                    yield current
                current = FileDiff(path=normalize_path(m.group(2)))
                skip = False
                idx += 1

                while idx < total:
                    sub = self._lines[idx].rstrip("\r")
                    if _SUBHEADER_RE.match(sub):
                        idx += 1
                        continue
                    if _NEW_FILE_RE.match(sub):
                        current.status = FileStatus.ADDED
                        idx += 1
                        continue
                    if _DELETED_FILE_RE.match(sub):
                        skip = True
                        idx += 1
                        continue
                    if (rm := _RENAME_FROM_RE.match(sub)):
                        current.old_path = normalize_path(rm.group(1))
                        current.status = FileStatus.RENAMED
                        idx += 1
                        continue
                    if (rt := _RENAME_TO_RE.match(sub)):
                        current.path = normalize_path(rt.group(1))
                        idx += 1
                        continue
                    if _BINARY_RE.match(sub):
                        skip = True
                        idx += 1
                        continue
                    break
                continue

            if current is None or skip:
                idx += 1
                continue

            # --- File headers (before the first hunk) carry the new path ---
            if not current.hunks and _OLD_PATH_RE.match(raw_line):
                idx += 1
                continue
            if not current.hunks and (nm := _NEW_PATH_RE.match(raw_line)):
                if nm.group(1) is None:
                    skip = True  # +++ /dev/null: deleted
                else:
                    current.path = normalize_path(nm.group(1))
                idx += 1
                continue

            hm = _HUNK_HEADER_RE.match(raw_line)
            if hm:
                current.hunks.append(
                    DiffHunk(
                        old_start=int(hm.group(1)),
                        old_count=int(hm.group(2)) if hm.group(2) is not None else 1,
                        new_start=int(hm.group(3)),
                        new_count=int(hm.group(4)) if hm.group(4) is not None else 1,
                    )
                )

            # Content lines (+/-/space, "\ No newline") carry no information
            # beyond the hunk header in zero-context mode.
            idx += 1

        if current is not None and current.hunks and not skip:
            yield current


def parse_hunks(diff_text: str) -> Dict[str, FileDiff]:
    """Map normalized path → FileDiff, hunks sorted by new-side position."""
    files: Dict[str, FileDiff] = {}
    for file_diff in DiffParser(diff_text).parse():
        file_diff.hunks.sort(key=lambda h: (h.new_start, h.old_start))
        files[file_diff.path] = file_diff
    return files


def _numstat_path(raw: str) -> str:
    """Resolve numstat's rename notation to the new path."""
    if " => " not in raw:
        return raw
    if _BRACE_RENAME_RE.search(raw):
        path = _BRACE_RENAME_RE.sub(lambda m: m.group(2), raw)
        return path.replace("//", "/")
    return raw.split(" => ", 1)[1]


def parse_numstat(numstat_text: str) -> Dict[str, FileDiffStats]:
    """Map normalized path → FileDiffStats. Binary rows (``-\\t-\\t``) are skipped."""
    stats: Dict[str, FileDiffStats] = {}
    for line in numstat_text.splitlines():
        parts = line.rstrip("\r").split("\t", 2)
        if len(parts) != 3:
            continue
        added, deleted, raw_path = parts
        if added == "-" or deleted == "-":
            continue
        try:
            counts = FileDiffStats(added=int(added), deleted=int(deleted))
        except ValueError:
            continue
        stats[normalize_path(_numstat_path(raw_path))] = counts
    return stats


def load_diff_data(root: Path, base: str = "HEAD", staged: bool = False) -> Optional[DiffData]:
    """Run both diff passes for *root*; None when git cannot produce a diff."""
    try:
        numstat_text = get_numstat(root, base, staged)
        hunk_text = get_hunk_diff(root, base, staged)
    except GitError as exc:
        logger.warning("Diff unavailable, continuing without annotations: %s", exc)
        return None

    data = DiffData(files=parse_hunks(hunk_text), stats=parse_numstat(numstat_text))
    logger.info(
        "Loaded diff against %s%s: %d files with hunks, %d with stats",
        base,
        " (staged)" if staged else "",
        len(data.files),
        len(data.stats),
    )
    return data

