"""Core scan engine — discovers files and maps them on a bounded worker pool.

Git is asked for the file list and (optionally) the diff exactly once, before
any file is parsed. Per-file work only reads those results, so the pool
needs no locking. A file that cannot be read or parsed is logged and left out
of the map; it never stops the scan.
"""

from __future__ import annotations

import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from fnmatch import fnmatch
from pathlib import Path, PurePosixPath
from typing import List, Optional, Tuple

from agentmap.config.schema import AgentMapConfig
from agentmap.extract.definitions import extract_definitions
from agentmap.extract.markdown import describe_markdown_file
from agentmap.extract.marker import header_from_tree
from agentmap.git.adapter import GitError, is_git_repo, list_files
from agentmap.git.attribution import attribute
from agentmap.git.diff_parser import load_diff_data
from agentmap.git.models import DiffData, normalize_path
from agentmap.languages.registry import LanguageRegistry, default_registry
from agentmap.logging_config import get_logger
from agentmap.parser.errors import ParseFailure
from agentmap.parser.grammar import SourceParser
from agentmap.scanner.models import FileResult, ScanResult

logger = get_logger("scanner")

_PRUNED_DIRS = frozenset({"node_modules", "dist", "build", ".git"})


class ScanError(Exception):
    """Raised on an unexpected internal error while scanning."""


class TooManyFiles(ScanError):
    """More candidate files than ``scan.max_files``."""


# ── discovery ─────────────────────────────────────────────────────────────────


def is_readme(path: str) -> bool:
    name = PurePosixPath(path).name.lower()
    return name in ("readme.md", "readme")


def is_ignored(path: str, patterns: List[str]) -> bool:
    """Match *path* and its basename against fnmatch *patterns*.

    ``dir/`` or ``dir`` patterns also exclude everything below that directory.
    """
    basename = PurePosixPath(path).name
    for pattern in patterns:
        pat = pattern.strip()
        if not pat:
            continue
        if fnmatch(path, pat) or fnmatch(basename, pat):
            return True
        prefix = pat.rstrip("/")
        if fnmatch(path, f"{prefix}/*") or path.startswith(f"{prefix}/"):
            return True
    return False


def _walk_files(root: Path) -> List[str]:
    found: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in _PRUNED_DIRS)
        rel_dir = Path(dirpath).relative_to(root)
        for filename in sorted(filenames):
            found.append(normalize_path(str(rel_dir / filename)))
    return found


def discover_files(root: Path) -> List[str]:
    """Files under *root* as normalized relative paths."""
    try:
        return [normalize_path(p) for p in list_files(root)]
    except GitError as exc:
        logger.info("git ls-files failed (%s), walking the directory instead", exc)
        return _walk_files(root)


def select_files(
    paths: List[str],
    registry: LanguageRegistry,
    ignore: List[str],
) -> List[str]:
    """Keep README files and files in a supported language, minus ignored ones."""
    selected = []
    for path in paths:
        if not (is_readme(path) or registry.detect(path) is not None):
            continue
        if is_ignored(path, ignore):
            continue
        selected.append(path)
    return selected


def _enforce_ceiling(files: List[str], max_files: int) -> None:
    if len(files) > max_files:
        raise TooManyFiles(f"{len(files)} files exceed the limit of {max_files}")


# ── per-file work ─────────────────────────────────────────────────────────────


def process_file(
    root: Path,
    path: str,
    *,
    registry: LanguageRegistry,
    parser: SourceParser,
    diff_data: Optional[DiffData] = None,
    require_description: bool = True,
) -> Optional[FileResult]:
    """Map one file. Returns None when the file has nothing to contribute.

    Raises ParseFailure or OSError when the file cannot be read or parsed.
    """
    full_path = root / path
    stats = diff_data.file_stats(path) if diff_data is not None else None
    file_diff = diff_data.file_diff(path) if diff_data is not None else None

    if is_readme(path):
        description = describe_markdown_file(full_path)
        if description is None:
            return None
        readme = FileResult(path=path, description=description, stats=stats)
        readme.apply_file_diff(file_diff)
        return readme

    language = registry.detect(path)
    if language is None:
        return None

    source = full_path.read_bytes()
    tree = parser.parse(source, language)
    description = header_from_tree(tree.root_node, language)
    if description is None and require_description:
        return None

    definitions = extract_definitions(tree.root_node, language, registry)
    if diff_data is not None:
        definitions = attribute(definitions, file_diff)

    file_result = FileResult(
        path=path,
        definitions=definitions,
        description=description,
        stats=stats,
    )
    file_result.apply_file_diff(file_diff)
    return file_result


# ── scan ──────────────────────────────────────────────────────────────────────


def _is_home(root: Path) -> bool:
    try:
        return root.resolve() == Path.home().resolve()
    except (OSError, RuntimeError):
        return False


def scan_directory(
    root: Path,
    config: AgentMapConfig,
    *,
    cancel: Optional[threading.Event] = None,
    parser: Optional[SourceParser] = None,
    registry: Optional[LanguageRegistry] = None,
) -> ScanResult:
    """Map every eligible file under *root*. Returns a ScanResult.

    Setting *cancel* stops new files from being started; files already being
    parsed finish and are kept.
    """
    start = time.perf_counter()
    root = root.resolve()
    registry = registry or default_registry()
    parser = parser or SourceParser()
    result = ScanResult(diff_enabled=config.diff.enabled)

    if _is_home(root) or not is_git_repo(root):
        logger.info("%s is not a git repository (or is the home directory); nothing to map", root)
        return result

    files = select_files(discover_files(root), registry, config.scan.ignore)
    result.candidate_files = len(files)
    try:
        _enforce_ceiling(files, config.scan.max_files)
    except TooManyFiles as exc:
        logger.warning("Skipping scan: %s", exc)
        return result

    diff_data: Optional[DiffData] = None
    if config.diff.enabled:
        diff_data = load_diff_data(root, config.diff.base, config.diff.staged)
        result.diff_available = diff_data is not None

    futures: List[Tuple[str, Future]] = []
    try:
        with ThreadPoolExecutor(
            max_workers=config.scan.workers, thread_name_prefix="agentmap-scan"
        ) as pool:
            for path in files:
                if cancel is not None and cancel.is_set():
                    result.cancelled = True
                    break
                future = pool.submit(
                    process_file,
                    root,
                    path,
                    registry=registry,
                    parser=parser,
                    diff_data=diff_data,
                    require_description=config.scan.require_description,
                )
                futures.append((path, future))

            for path, future in futures:
                if cancel is not None and cancel.is_set() and future.cancel():
                    result.cancelled = True
                    continue
                try:
                    file_result = future.result()
                except (ParseFailure, OSError, UnicodeDecodeError) as exc:
                    logger.warning("Skipping %s: %s", path, exc)
                    result.skipped_files.append(f"{path} (unreadable)")
                    continue
                except Exception:
                    logger.exception("Unexpected failure while mapping %s", path)
                    result.skipped_files.append(f"{path} (error)")
                    continue
                if file_result is None:
                    result.skipped_files.append(f"{path} (no description)")
                    continue
                result.files.append(file_result)
    except ScanError:
        raise
    except Exception as exc:
        raise ScanError(f"Internal scanner error: {exc}") from exc

    elapsed = (time.perf_counter() - start) * 1000
    result.scan_duration_ms = round(elapsed, 2)
    logger.info(
        "Mapped %d of %d files in %.0fms",
        result.scanned_files,
        result.candidate_files,
        result.scan_duration_ms,
    )
    return result
