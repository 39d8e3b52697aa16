"""Rendering the map: tree building, truncation and the report formats."""

from agentmap.output.builder import FileEntry, build_map, format_definition, root_name_for
from agentmap.output.truncate import truncate_defs, truncate_map

__all__ = [
    "FileEntry",
    "build_map",
    "format_definition",
    "root_name_for",
    "truncate_defs",
    "truncate_map",
]
