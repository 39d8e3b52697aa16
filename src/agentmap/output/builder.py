"""Build the nested, path-keyed map from per-file results."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Union

from agentmap.extract.models import Definition
from agentmap.git.models import FileDiffStats
from agentmap.scanner.models import FileResult


class FileEntry(dict):
    """Leaf of the map: ``description``, ``diff``, ``defs`` (or ``exports``)."""


MapNode = Dict[str, Union["MapNode", FileEntry]]


def format_counts(added: int, deleted: int) -> str:
    """``+15-3``, ``+15`` or ``-3``; empty when both are zero."""
    parts = []
    if added > 0:
        parts.append(f"+{added}")
    if deleted > 0:
        parts.append(f"-{deleted}")
    return "".join(parts)


def format_file_diff(stats: FileDiffStats) -> str:
    return format_counts(stats.added, stats.deleted)


def format_definition(definition: Definition) -> str:
    """e.g. ``line 13-40, function, exported, updated (+5-2)``."""
    if definition.end_line > definition.start_line:
        lines = f"line {definition.start_line}-{definition.end_line}"
    else:
        lines = f"line {definition.start_line}"
    parts = [lines, definition.kind.value]
    if definition.exported:
        parts.append("exported")
    if definition.extern:
        parts.append("extern")
    if definition.diff is not None:
        counts = format_counts(definition.diff.added, definition.diff.deleted)
        status = definition.diff.status.value
        parts.append(f"{status} ({counts})" if counts else status)
    return ", ".join(parts)


def file_entry(result: FileResult) -> FileEntry:
    entry = FileEntry()
    if result.description:
        entry["description"] = result.description
    if result.stats is not None:
        if diff := format_file_diff(result.stats):
            entry["diff"] = diff
    if result.definitions:
        entry["defs"] = {d.name: format_definition(d) for d in result.definitions}
    return entry


def build_map(results: List[FileResult], root_name: str) -> Dict[str, Any]:
    """``{root_name: {dir: {file: FileEntry}}}``."""
    root: MapNode = {}
    for result in results:
        *dirs, filename = result.path.split("/")
        node = root
        for directory in dirs:
            child = node.get(directory)
            if not isinstance(child, dict) or isinstance(child, FileEntry):
                child = {}
                node[directory] = child
            node = child
        node[filename] = file_entry(result)
    return {root_name: root}


def root_name_for(directory: Path) -> str:
    """Basename of *directory*, or ``root`` for a filesystem root."""
    return directory.resolve().name or "root"
