"""Git subprocess wrapper — file listing, numstat and hunk diffs."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from agentmap.logging_config import get_logger

logger = get_logger("git")

# Keep non-ASCII paths unquoted in diff headers and numstat rows.
_GIT_OPTIONS = ["-c", "core.quotepath=false"]


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    logger.debug("git %s (cwd=%s)", " ".join(args), cwd)
    try:
        result = subprocess.run(
            ["git", *_GIT_OPTIONS, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip()
        if not stderr or "fatal" not in stderr.lower():
            return result.stdout
        raise GitError(f"git error: {stderr}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the git repository containing *cwd*."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def is_git_repo(path: Path) -> bool:
    try:
        out = _run_git(["rev-parse", "--is-inside-work-tree"], cwd=path)
    except (GitError, OSError):
        return False
    return out.strip() == "true"


def _split_z(output: str) -> list[str]:
    return [item for item in output.split("\0") if item]


def list_files(root: Path) -> list[str]:
    """Tracked and untracked-but-not-ignored files under *root*, minus deleted ones.

    Paths are relative to *root*.
    """
    listed = _split_z(
        _run_git(["ls-files", "-z", "--cached", "--others", "--exclude-standard"], cwd=root)
    )
    deleted = set(_split_z(_run_git(["ls-files", "-z", "--deleted"], cwd=root)))
    seen: set[str] = set()
    files: list[str] = []
    for path in listed:
        if path in deleted or path in seen:
            continue
        seen.add(path)
        files.append(path)
    return files


def _comparison(base: str, staged: bool) -> list[str]:
    args = ["-M", "--cached"] if staged else ["-M"]
    return [*args, base, "--"]


def get_numstat(root: Path, base: str = "HEAD", staged: bool = False) -> str:
    """Per-file ``added<TAB>deleted<TAB>path`` rows, paths relative to *root*."""
    return _run_git(
        ["diff", "--numstat", "--no-color", "--no-ext-diff", "--relative", *_comparison(base, staged)],
        cwd=root,
    )


def get_hunk_diff(root: Path, base: str = "HEAD", staged: bool = False) -> str:
    """Zero-context unified diff, paths relative to *root*."""
    return _run_git(
        [
            "diff",
            "--unified=0",
            "--no-color",
            "--no-ext-diff",
            "--relative",
            *_comparison(base, staged),
        ],
        cwd=root,
    )
