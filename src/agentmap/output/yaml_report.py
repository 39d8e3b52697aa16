"""YAML reporter — the default map format."""

from __future__ import annotations

import re
from typing import Any, Dict

import yaml

from agentmap.output.builder import FileEntry
from agentmap.scanner.engine import is_readme

_ENTRY_KEYS = ("description", "diff", "defs", "exports")
_MORE_LINE_RE = re.compile(r"^(\s*)__more_\d+__: (.*)$", re.MULTILINE)


class _MapDumper(yaml.SafeDumper):
    pass


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.Node:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_str(data)


_MapDumper.add_representer(str, _represent_str)
_MapDumper.add_representer(FileEntry, yaml.SafeDumper.represent_dict)


def _order_entry(entry: FileEntry) -> FileEntry:
    ordered = FileEntry((key, entry[key]) for key in _ENTRY_KEYS if key in entry)
    for key, value in entry.items():
        ordered.setdefault(key, value)
    return ordered


def order_tree(node: Dict[str, Any]) -> Dict[str, Any]:
    """README entries first, then everything else alphabetically."""
    keys = sorted(node, key=lambda k: (not is_readme(k), k))
    ordered: Dict[str, Any] = {}
    for key in keys:
        value = node[key]
        if isinstance(value, FileEntry):
            ordered[key] = _order_entry(value)
        elif isinstance(value, dict):
            ordered[key] = order_tree(value)
        else:
            ordered[key] = value
    return ordered


def render(tree: Dict[str, Any]) -> str:
    """Dump *tree* (as built by ``build_map``) to YAML text."""
    text = yaml.dump(
        order_tree(tree),
        Dumper=_MapDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        indent=2,
        width=float("inf"),
    )
    # Truncation markers become YAML comments.
    return _MORE_LINE_RE.sub(lambda m: f"{m.group(1)}# ... {_unquote(m.group(2))}", text)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1]
    return value
