"""JSON reporter — flat per-file records for tools."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from agentmap.extract.models import Definition
from agentmap.scanner.models import FileResult, ScanResult


def _definition_dict(definition: Definition) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "name": definition.name,
        "kind": definition.kind.value,
        "start_line": definition.start_line,
        "end_line": definition.end_line,
        "exported": definition.exported,
        "extern": definition.extern,
    }
    if definition.diff is not None:
        entry["diff"] = {
            "status": definition.diff.status.value,
            "added": definition.diff.added,
            "deleted": definition.diff.deleted,
        }
    return entry


def _file_dict(file_result: FileResult, max_defs: int) -> Dict[str, Any]:
    definitions = file_result.definitions
    entry: Dict[str, Any] = {
        "path": file_result.path,
        "description": file_result.description,
        "definitions": [_definition_dict(d) for d in definitions[:max_defs]],
        **({"truncated": len(definitions) - max_defs} if len(definitions) > max_defs else {}),
    }
    if file_result.stats is not None:
        entry["diff"] = {
            "added": file_result.stats.added,
            "deleted": file_result.stats.deleted,
        }
        if file_result.status is not None:
            entry["diff"]["status"] = file_result.status.value
        if file_result.renamed_from:
            entry["diff"]["old_path"] = file_result.renamed_from
    return entry


def to_dict(result: ScanResult, root_name: str, *, max_defs: int) -> Dict[str, Any]:
    """Convert ScanResult to a JSON-serialisable dict."""
    files: List[Dict[str, Any]] = [
        _file_dict(f, max_defs) for f in sorted(result.files, key=lambda f: f.path)
    ]
    return {
        "version": "1.0",
        "root": root_name,
        "diff": result.diff_available,
        "scanned_files": result.scanned_files,
        "total_definitions": result.total_definitions,
        "files": files,
        "skipped_files": result.skipped_files,
        "scan_duration_ms": result.scan_duration_ms,
    }


def render(result: ScanResult, root_name: str, *, max_defs: int) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, root_name, max_defs=max_defs), indent=2)
