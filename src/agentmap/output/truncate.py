"""Per-file definition limits for the rendered map."""

from __future__ import annotations

from typing import Any, Dict

from agentmap.config.schema import DEFAULT_MAX_DEFS
from agentmap.output.builder import FileEntry

_MORE_KEY = "__more_{}__"


def _is_public(value: str) -> bool:
    return ", exported" in value or ", extern" in value


def truncate_defs(entry: FileEntry, max_defs: int = DEFAULT_MAX_DEFS) -> FileEntry:
    """Cap ``defs`` at *max_defs*.

    When some definitions are exported or extern, only those are kept, under
    ``exports``. A ``__more_N__`` marker records what was dropped.
    """
    defs: Dict[str, str] = entry.get("defs") or {}
    if len(defs) <= max_defs:
        return entry

    result = FileEntry((k, v) for k, v in entry.items() if k != "defs")
    public = [name for name, value in defs.items() if _is_public(value)]

    if public:
        exports = {name: defs[name] for name in public[:max_defs]}
        if len(public) > max_defs:
            remaining = len(public) - max_defs
            exports[_MORE_KEY.format(remaining)] = f"{remaining} more exports"
        result["exports"] = exports
        return result

    kept = {name: defs[name] for name in list(defs)[:max_defs]}
    remaining = len(defs) - max_defs
    kept[_MORE_KEY.format(remaining)] = f"{remaining} more definitions"
    result["defs"] = kept
    return result


def truncate_map(node: Dict[str, Any], max_defs: int = DEFAULT_MAX_DEFS) -> Dict[str, Any]:
    """Apply ``truncate_defs`` to every file entry under *node*."""
    result: Dict[str, Any] = {}
    for key, value in node.items():
        if isinstance(value, FileEntry):
            result[key] = truncate_defs(value, max_defs)
        elif isinstance(value, dict):
            result[key] = truncate_map(value, max_defs)
        else:
            result[key] = value
    return result
