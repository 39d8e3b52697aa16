"""Git interface layer — adapter, diff parsing, attribution, models."""

from agentmap.git.adapter import (
    GitError,
    get_hunk_diff,
    get_numstat,
    get_repo_root,
    is_git_repo,
    list_files,
)
from agentmap.git.attribution import any_changes, attribute
from agentmap.git.diff_parser import DiffParser, load_diff_data, parse_hunks, parse_numstat
from agentmap.git.models import (
    DiffData,
    DiffHunk,
    FileDiff,
    FileDiffStats,
    FileStatus,
    normalize_path,
)

__all__ = [
    "DiffData",
    "DiffHunk",
    "DiffParser",
    "FileDiff",
    "FileDiffStats",
    "FileStatus",
    "GitError",
    "any_changes",
    "attribute",
    "get_hunk_diff",
    "get_numstat",
    "get_repo_root",
    "is_git_repo",
    "list_files",
    "load_diff_data",
    "normalize_path",
    "parse_hunks",
    "parse_numstat",
]
